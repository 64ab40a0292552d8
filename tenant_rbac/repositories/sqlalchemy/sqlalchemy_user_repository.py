from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from tenant_rbac.database import models
from tenant_rbac.repositories.interfaces import IUserRepository
from .base import commit, guarded

class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, user_model: models.User) -> models.User:
        description = f"create user '{user_model.email}'"
        self.db.add(user_model)
        commit(self.db, description)
        with guarded(self.db, description):
            self.db.refresh(user_model)
        return user_model

    def save(self, user_model: models.User) -> models.User:
        description = f"update user {user_model.id}"
        commit(self.db, description)
        with guarded(self.db, description):
            self.db.refresh(user_model)
        return user_model

    def find_by_id(self, user_id: int) -> Optional[models.User]:
        with guarded(self.db, f"look up user {user_id}"):
            return self.db.query(models.User).filter(models.User.id == user_id).first()

    def find_by_email(self, email: str) -> Optional[models.User]:
        with guarded(self.db, f"look up user '{email}'"):
            return self.db.query(models.User).filter(models.User.email == email).first()

    def list_all(self) -> List[models.User]:
        with guarded(self.db, "list users"):
            return self.db.query(models.User).order_by(models.User.email.asc()).all()

    def attach_tenants(self, user: models.User, tenants: Iterable[models.Tenant]):
        description = f"attach tenants to user {user.id}"
        with guarded(self.db, description):
            current = {t.id for t in user.tenants}
            for tenant in tenants:
                if tenant.id not in current:
                    user.tenants.append(tenant)
                    current.add(tenant.id)
            commit(self.db, description)
