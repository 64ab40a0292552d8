from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from tenant_rbac.database import models

class IRoleRepository(ABC):
    @abstractmethod
    def first_or_create(self, name: str, guard_name: str, tenant_id: int) -> models.Role:
        """(name, guard_name, tenant_id)로 역할을 조회하고, 없으면 생성합니다."""
        pass

    @abstractmethod
    def find(self, name: str, guard_name: str, tenant_id: int) -> Optional[models.Role]:
        """(name, guard_name, tenant_id)로 특정 역할을 조회합니다."""
        pass

    @abstractmethod
    def find_by_id(self, role_id: int) -> Optional[models.Role]:
        """고유 ID로 특정 역할을 조회합니다."""
        pass

    @abstractmethod
    def list_for_tenant(self, tenant_id: int) -> List[models.Role]:
        """특정 스코프(테넌트 ID, 전역은 0)에 속한 역할 목록을 조회합니다."""
        pass

    @abstractmethod
    def list_permissions(self, role: models.Role) -> List[models.Permission]:
        """역할이 보유한 권한 목록을 조회합니다."""
        pass

    @abstractmethod
    def permission_names(self, role: models.Role) -> List[str]:
        """역할이 보유한 권한 이름 목록을 조회합니다."""
        pass

    @abstractmethod
    def has_permission(self, role: models.Role, permission: models.Permission) -> bool:
        """역할이 특정 권한을 이미 보유하고 있는지 확인합니다."""
        pass

    @abstractmethod
    def give_permissions(self, role: models.Role, permissions: Iterable[models.Permission]):
        """역할에 권한을 추가합니다. (기존 권한과의 합집합)"""
        pass

    @abstractmethod
    def revoke_permissions(self, role: models.Role, permissions: Iterable[models.Permission]):
        """역할에서 권한을 회수합니다."""
        pass
