import logging
from dataclasses import dataclass
from typing import Iterable, List

from tenant_rbac import GLOBAL_TENANT_ID
from tenant_rbac.database import models
from tenant_rbac.repositories.interfaces import IRoleAssignmentRepository
from tenant_rbac.services.exceptions import ScopeMismatchError
from tenant_rbac.services.permission_cache import PermissionCache
from tenant_rbac.services.tenant_context import TenantContextResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScopedRole:
    """
    역할과 그 역할이 할당될 스코프를 함께 담는 값 객체입니다.
    생성 시점에 role.tenant_id == tenant_id 를 검증하므로, 스코프가 어긋난
    할당은 만들어질 수 없습니다.
    """
    role: models.Role
    tenant_id: int

    def __post_init__(self):
        if self.role.tenant_id != self.tenant_id:
            raise ScopeMismatchError(
                f"Role '{self.role.name}' is scoped to tenant {self.role.tenant_id}, "
                f"cannot be assigned in tenant {self.tenant_id}."
            )


class RoleAssignmentService:
    """사용자에게 전역 또는 테넌트 스코프의 역할을 할당/회수합니다."""

    def __init__(self, assignment_repo: IRoleAssignmentRepository, context: TenantContextResolver, cache: PermissionCache):
        self.assignment_repo = assignment_repo
        self.context = context
        self.cache = cache

    def assign_global(self, user: models.User, role: models.Role):
        """
        전역 역할을 사용자에게 할당합니다.

        Raises:
            ScopeMismatchError: 역할이 전역 역할이 아닐 때.
        """
        self._assign(user, [ScopedRole(role, GLOBAL_TENANT_ID)], GLOBAL_TENANT_ID)

    def assign_in_tenant(self, user: models.User, role: models.Role, tenant: models.Tenant):
        """
        테넌트 역할을 해당 테넌트 스코프로 사용자에게 할당합니다.
        같은 스코프의 기존 역할은 그대로 유지됩니다.

        Raises:
            ScopeMismatchError: 역할이 다른 테넌트(또는 전역)에 속할 때.
        """
        self._assign(user, [ScopedRole(role, tenant.id)], tenant.id)

    def revoke_global(self, user: models.User, role: models.Role) -> bool:
        return self._revoke(user, ScopedRole(role, GLOBAL_TENANT_ID))

    def revoke_in_tenant(self, user: models.User, role: models.Role, tenant: models.Tenant) -> bool:
        return self._revoke(user, ScopedRole(role, tenant.id))

    def sync_global(self, user: models.User, roles: Iterable[models.Role]):
        """사용자의 전역 역할을 정확히 roles로 맞춥니다. 테넌트 스코프 할당은 건드리지 않습니다."""
        self._sync(user, [ScopedRole(role, GLOBAL_TENANT_ID) for role in roles], GLOBAL_TENANT_ID)

    def sync_in_tenant(self, user: models.User, roles: Iterable[models.Role], tenant: models.Tenant):
        """사용자의 tenant 스코프 역할을 정확히 roles로 맞춥니다. 다른 스코프 할당은 건드리지 않습니다."""
        self._sync(user, [ScopedRole(role, tenant.id) for role in roles], tenant.id)

    def _assign(self, user: models.User, scoped_roles: List[ScopedRole], tenant_id: int):
        try:
            with self.context.scoped(tenant_id):
                for scoped in scoped_roles:
                    self.assignment_repo.assign(user, scoped.role, scoped.tenant_id)
                    logger.info("Assigned role '%s' to user %s (tenant=%s).", scoped.role.name, user.id, scoped.tenant_id)
        finally:
            self.cache.invalidate()

    def _revoke(self, user: models.User, scoped: ScopedRole) -> bool:
        try:
            with self.context.scoped(scoped.tenant_id):
                revoked = self.assignment_repo.revoke(user, scoped.role, scoped.tenant_id)
                if revoked:
                    logger.info("Revoked role '%s' from user %s (tenant=%s).", scoped.role.name, user.id, scoped.tenant_id)
                return revoked
        finally:
            self.cache.invalidate()

    def _sync(self, user: models.User, scoped_roles: List[ScopedRole], tenant_id: int):
        try:
            with self.context.scoped(tenant_id):
                current = {role.id: role for role in self.assignment_repo.list_roles(user.id, tenant_id)}
                wanted = {scoped.role.id: scoped.role for scoped in scoped_roles}
                for role_id in current.keys() - wanted.keys():
                    self.assignment_repo.revoke(user, current[role_id], tenant_id)
                    logger.info("Sync removed role '%s' from user %s (tenant=%s).", current[role_id].name, user.id, tenant_id)
                for role_id in wanted.keys() - current.keys():
                    self.assignment_repo.assign(user, wanted[role_id], tenant_id)
                    logger.info("Sync assigned role '%s' to user %s (tenant=%s).", wanted[role_id].name, user.id, tenant_id)
        finally:
            self.cache.invalidate()
