from typing import FrozenSet, Optional

from tenant_rbac import GLOBAL_TENANT_ID
from tenant_rbac.database import models
from tenant_rbac.repositories.interfaces import IRoleAssignmentRepository, IRoleRepository
from tenant_rbac.services.permission_cache import PermissionCache


class AuthorizationService:
    """
    사용자가 특정 스코프에서 어떤 역할과 권한을 가지는지 판정합니다.
    판정은 할당 레코드에 저장된 tenant_id만을 기준으로 하며, 결과는 PermissionCache에 보관됩니다.
    """

    def __init__(self, assignment_repo: IRoleAssignmentRepository, role_repo: IRoleRepository, cache: PermissionCache):
        self.assignment_repo = assignment_repo
        self.role_repo = role_repo
        self.cache = cache

    def roles_for(self, user: models.User, tenant_id: Optional[int] = None) -> FrozenSet[str]:
        """사용자가 tenant_id 스코프(None이면 전역)에서 보유한 역할 이름 집합."""
        scope_id = GLOBAL_TENANT_ID if tenant_id is None else tenant_id
        return self.cache.get_or_load(
            ("roles", user.id, scope_id),
            lambda: frozenset(role.name for role in self.assignment_repo.list_roles(user.id, scope_id)),
        )

    def permissions_for(self, user: models.User, tenant_id: Optional[int] = None) -> FrozenSet[str]:
        """사용자가 tenant_id 스코프에서 역할을 통해 보유한 권한 이름 집합."""
        scope_id = GLOBAL_TENANT_ID if tenant_id is None else tenant_id

        def load():
            names = set()
            for role in self.assignment_repo.list_roles(user.id, scope_id):
                names.update(self.role_repo.permission_names(role))
            return frozenset(names)

        return self.cache.get_or_load(("permissions", user.id, scope_id), load)

    def has_role(self, user: models.User, role_name: str, tenant: Optional[models.Tenant] = None) -> bool:
        return role_name in self.roles_for(user, tenant.id if tenant else None)

    def has_permission(self, user: models.User, permission_name: str, tenant: Optional[models.Tenant] = None) -> bool:
        return permission_name in self.permissions_for(user, tenant.id if tenant else None)
