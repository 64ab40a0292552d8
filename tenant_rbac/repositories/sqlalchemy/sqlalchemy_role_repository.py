from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from tenant_rbac.database import models
from tenant_rbac.repositories.interfaces import IRoleRepository
from .base import commit, first_or_create, guarded

class SqlalchemyRoleRepository(IRoleRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def first_or_create(self, name: str, guard_name: str, tenant_id: int) -> models.Role:
        return first_or_create(
            self.db,
            lambda: self.find(name, guard_name, tenant_id),
            lambda: models.Role(name=name, guard_name=guard_name, tenant_id=tenant_id),
            f"create role '{name}' ({guard_name}, tenant={tenant_id})",
        )

    def find(self, name: str, guard_name: str, tenant_id: int) -> Optional[models.Role]:
        with guarded(self.db, f"look up role '{name}' ({guard_name}, tenant={tenant_id})"):
            return self.db.query(models.Role).filter(
                models.Role.name == name,
                models.Role.guard_name == guard_name,
                models.Role.tenant_id == tenant_id
            ).first()

    def find_by_id(self, role_id: int) -> Optional[models.Role]:
        with guarded(self.db, f"look up role {role_id}"):
            return self.db.query(models.Role).filter(models.Role.id == role_id).first()

    def list_for_tenant(self, tenant_id: int) -> List[models.Role]:
        with guarded(self.db, f"list roles (tenant={tenant_id})"):
            return self.db.query(models.Role).filter(
                models.Role.tenant_id == tenant_id
            ).order_by(models.Role.name.asc()).all()

    def list_permissions(self, role: models.Role) -> List[models.Permission]:
        # role.permissions는 지연 로딩되므로 접근 자체가 쿼리입니다.
        with guarded(self.db, f"load permissions of role '{role.name}'"):
            return list(role.permissions)

    def permission_names(self, role: models.Role) -> List[str]:
        return [permission.name for permission in self.list_permissions(role)]

    def has_permission(self, role: models.Role, permission: models.Permission) -> bool:
        return any(p.id == permission.id for p in self.list_permissions(role))

    def give_permissions(self, role: models.Role, permissions: Iterable[models.Permission]):
        description = f"grant permissions to role '{role.name}'"
        with guarded(self.db, description):
            held = {p.id for p in role.permissions}
            for permission in permissions:
                if permission.id not in held:
                    role.permissions.append(permission)
                    held.add(permission.id)
            commit(self.db, description)

    def revoke_permissions(self, role: models.Role, permissions: Iterable[models.Permission]):
        description = f"revoke permissions from role '{role.name}'"
        with guarded(self.db, description):
            revoked = {p.id for p in permissions}
            role.permissions = [p for p in role.permissions if p.id not in revoked]
            commit(self.db, description)
