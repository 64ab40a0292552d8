# tenant_rbac/services/exceptions.py

# --- General Exceptions ---
class UserNotFoundError(Exception):
    """사용자를 찾을 수 없을 때"""
    pass

class TenantNotFoundError(Exception):
    """테넌트를 찾을 수 없을 때"""
    pass

class RoleNotFoundError(Exception):
    """역할을 찾을 수 없을 때"""
    pass

# --- Scope Exceptions ---
class ScopeMismatchError(Exception):
    """할당하려는 테넌트 스코프가 역할 자체의 스코프와 다를 때"""
    pass

class InvalidTenantError(Exception):
    """테넌트 ID가 유효한 스코프 값이 아닐 때"""
    pass

# --- Creation/Validation Exceptions ---
class UserCreationError(Exception):
    """사용자 생성 실패 시"""
    pass

class ApprovalError(Exception):
    """사용자 승인 조건을 만족하지 못할 때"""
    pass

class SelfApprovalError(ApprovalError):
    """부트스트랩 관리자가 아닌 사용자가 자기 자신을 승인하려고 할 때"""
    pass

# --- Persistence Exceptions ---
class PersistenceFailure(Exception):
    """저장소 계층에서 발생한 오류 (원인 예외는 __cause__로 연결됩니다)"""
    pass
