from typing import List
from sqlalchemy.orm import Session
from tenant_rbac.database import models
from tenant_rbac.repositories.interfaces import IRoleAssignmentRepository
from .base import commit, guarded

class SqlalchemyRoleAssignmentRepository(IRoleAssignmentRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def assign(self, user: models.User, role: models.Role, tenant_id: int):
        description = f"assign role '{role.name}' to user {user.id} (tenant={tenant_id})"
        with guarded(self.db, description):
            assignment = models.UserRole(user_id=user.id, role_id=role.id, tenant_id=tenant_id)
            self.db.merge(assignment) # INSERT OR IGNORE와 유사한 동작
            commit(self.db, description)

    def revoke(self, user: models.User, role: models.Role, tenant_id: int) -> bool:
        description = f"revoke role '{role.name}' from user {user.id} (tenant={tenant_id})"
        with guarded(self.db, description):
            assignment = self.db.query(models.UserRole).filter(
                models.UserRole.user_id == user.id,
                models.UserRole.role_id == role.id,
                models.UserRole.tenant_id == tenant_id
            ).first()
            if not assignment:
                return False
            self.db.delete(assignment)
            commit(self.db, description)
            return True

    def list_roles(self, user_id: int, tenant_id: int) -> List[models.Role]:
        # 역할의 tenant_id가 아닌, 할당 레코드에 저장된 tenant_id로 필터링합니다.
        with guarded(self.db, f"list roles of user {user_id} (tenant={tenant_id})"):
            return self.db.query(models.Role).join(
                models.UserRole, models.UserRole.role_id == models.Role.id
            ).filter(
                models.UserRole.user_id == user_id,
                models.UserRole.tenant_id == tenant_id
            ).order_by(models.Role.name.asc()).all()

    def list_assignments(self, user_id: int) -> List[models.UserRole]:
        with guarded(self.db, f"list assignments of user {user_id}"):
            return self.db.query(models.UserRole).filter(
                models.UserRole.user_id == user_id
            ).order_by(models.UserRole.tenant_id.asc(), models.UserRole.role_id.asc()).all()
