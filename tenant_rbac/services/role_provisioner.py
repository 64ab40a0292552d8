import logging
from enum import Enum
from typing import Callable, Iterable, List, Optional, Set, Tuple

from tenant_rbac import GLOBAL_TENANT_ID
from tenant_rbac.database import models
from tenant_rbac.repositories.interfaces import IPermissionRepository, IRoleRepository
from tenant_rbac.services.exceptions import InvalidTenantError, RoleNotFoundError
from tenant_rbac.services.permission_cache import PermissionCache
from tenant_rbac.services.permission_catalog import PermissionAction, PermissionCatalog
from tenant_rbac.services.tenant_context import TenantContextResolver

logger = logging.getLogger(__name__)

PermissionFilter = Callable[[models.Permission], bool]


class RoleType(str, Enum):
    """시스템이 관리하는 고정 역할 이름."""
    ADMIN = "Admin"
    OWNER = "Owner"
    USER = "User"


def grant_all(permission: models.Permission) -> bool:
    return True


def actions_only(*actions: PermissionAction) -> PermissionFilter:
    """지정한 동작('{resource}.{action}'의 action 부분)의 권한만 허용하는 정책을 만듭니다."""
    allowed = {PermissionAction(action).value for action in actions}

    def policy(permission: models.Permission) -> bool:
        return permission.name.rsplit(".", 1)[-1] in allowed

    return policy


# 현재 정책: User 역할은 조회 권한만 가집니다.
DEFAULT_USER_POLICY = actions_only(PermissionAction.VIEW)


class RoleProvisioner:
    """전역 역할과 테넌트별 Owner/User 역할이 존재하고 올바른 권한을 갖도록 보장합니다."""

    def __init__(
        self,
        permission_repo: IPermissionRepository,
        role_repo: IRoleRepository,
        catalog: PermissionCatalog,
        context: TenantContextResolver,
        cache: PermissionCache,
        user_permission_policy: PermissionFilter = DEFAULT_USER_POLICY,
    ):
        """
        RoleProvisioner를 초기화합니다.

        Args:
            permission_repo: 권한 데이터에 접근하기 위한 리포지토리.
            role_repo: 역할 데이터에 접근하기 위한 리포지토리.
            catalog: 리소스별 권한 이름을 제공하는 카탈로그.
            context: 쓰기 작업의 테넌트 스코프를 관리하는 리졸버.
            cache: 변경 후 무효화할 권한 캐시.
            user_permission_policy: User 역할에 부여할 권한을 고르는 정책 함수.
        """
        self.permission_repo = permission_repo
        self.role_repo = role_repo
        self.catalog = catalog
        self.context = context
        self.cache = cache
        self.user_permission_policy = user_permission_policy

    def ensure_permissions(self, guard: str) -> List[models.Permission]:
        """카탈로그의 모든 권한이 주어진 가드로 존재하도록 보장합니다."""
        return [self.permission_repo.first_or_create(name, guard) for name in self.catalog.all_names()]

    def ensure_role_with_permissions(
        self,
        role_name: str,
        tenant_id: int,
        guard: str,
        resources: Optional[Iterable[str]] = None,
        permission_filter: PermissionFilter = grant_all,
        prune: bool = False,
    ) -> models.Role:
        """
        역할이 존재하고 정책에 맞는 권한을 보유하도록 보장합니다.

        기본 동작은 추가 전용(additive)이며, 이미 부여된 권한은 회수하지 않습니다.
        중간에 실패하면 역할은 일부 권한만 가진 상태로 남을 수 있지만, 같은 호출을
        다시 실행하면 나머지가 채워집니다. 어떤 경우에도 스코프는 초기화됩니다.

        Args:
            role_name: 역할 이름.
            tenant_id: 스코프 테넌트 ID (전역은 GLOBAL_TENANT_ID).
            guard: 인증 가드 이름.
            resources: 권한을 만들 리소스 목록. 생략하면 카탈로그의 리소스를 사용합니다.
            permission_filter: 역할에 부여할 권한인지 판단하는 정책 함수.
            prune: True이면 정책 밖의 기존 권한을 회수합니다.

        Raises:
            InvalidTenantError: tenant_id가 음수일 때.
            PersistenceFailure: 저장소 계층에서 오류가 발생했을 때.
        """
        if tenant_id is None or tenant_id < GLOBAL_TENANT_ID:
            raise InvalidTenantError(f"Invalid tenant id '{tenant_id}'.")

        try:
            with self.context.scoped(tenant_id) as scope_id:
                role = self.role_repo.first_or_create(role_name, guard, scope_id)
                intended = []
                to_grant = []
                for name in self.catalog.all_names(resources):
                    permission = self.permission_repo.first_or_create(name, guard)
                    if not permission_filter(permission):
                        continue
                    intended.append(permission)
                    if not self.role_repo.has_permission(role, permission):
                        to_grant.append(permission)
                if to_grant:
                    self.role_repo.give_permissions(role, to_grant)
                    logger.info("Granted %d permission(s) to role '%s' (tenant=%s).", len(to_grant), role_name, scope_id)
                if prune:
                    self._prune(role, intended, scope_id)
                return role
        finally:
            self.cache.invalidate()

    def _prune(self, role: models.Role, intended: List[models.Permission], scope_id: int):
        keep = {p.id for p in intended}
        stale = [p for p in self.role_repo.list_permissions(role) if p.id not in keep]
        if stale:
            self.role_repo.revoke_permissions(role, stale)
            logger.info("Revoked %d stale permission(s) from role '%s' (tenant=%s).", len(stale), role.name, scope_id)

    def ensure_owner_role(self, tenant_id: int, guard: str) -> models.Role:
        """테넌트의 Owner 역할을 모든 권한과 함께 보장합니다."""
        self._require_tenant(tenant_id)
        return self.ensure_role_with_permissions(RoleType.OWNER.value, tenant_id, guard)

    def ensure_user_role(self, tenant_id: int, guard: str) -> models.Role:
        """테넌트의 User 역할을 user_permission_policy에 맞는 권한과 함께 보장합니다."""
        self._require_tenant(tenant_id)
        return self.ensure_role_with_permissions(
            RoleType.USER.value, tenant_id, guard, permission_filter=self.user_permission_policy
        )

    def ensure_tenant_roles(self, tenant_id: int, guard: str) -> Tuple[models.Role, models.Role]:
        return self.ensure_owner_role(tenant_id, guard), self.ensure_user_role(tenant_id, guard)

    def ensure_global_roles(self, guard: str) -> Set[models.Role]:
        """
        테넌트에 속하지 않는 고정 전역 역할(Admin)을 보장합니다.

        Admin의 권한은 카탈로그와 동기화됩니다. 카탈로그에 없는 권한은 회수됩니다.
        """
        admin = self.ensure_role_with_permissions(RoleType.ADMIN.value, GLOBAL_TENANT_ID, guard, prune=True)
        return {admin}

    def get_role(self, role_name: str, tenant_id: int, guard: str) -> models.Role:
        """
        이미 프로비저닝된 역할을 조회합니다.

        Raises:
            RoleNotFoundError: 해당 스코프에 역할이 없을 때.
        """
        role = self.role_repo.find(role_name, guard, tenant_id)
        if not role:
            raise RoleNotFoundError(f"Role '{role_name}' ({guard}) not found in tenant {tenant_id}.")
        return role

    @staticmethod
    def _require_tenant(tenant_id: int):
        if tenant_id is None or tenant_id <= GLOBAL_TENANT_ID:
            raise InvalidTenantError(f"Tenant roles require a positive tenant id, got '{tenant_id}'.")
