from typing import List, Optional
from sqlalchemy.orm import Session
from tenant_rbac.database import models
from tenant_rbac.repositories.interfaces import IPermissionRepository
from .base import first_or_create, guarded

class SqlalchemyPermissionRepository(IPermissionRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def first_or_create(self, name: str, guard_name: str) -> models.Permission:
        return first_or_create(
            self.db,
            lambda: self.find_by_name(name, guard_name),
            lambda: models.Permission(name=name, guard_name=guard_name),
            f"create permission '{name}' ({guard_name})",
        )

    def find_by_name(self, name: str, guard_name: str) -> Optional[models.Permission]:
        with guarded(self.db, f"look up permission '{name}' ({guard_name})"):
            return self.db.query(models.Permission).filter(
                models.Permission.name == name,
                models.Permission.guard_name == guard_name
            ).first()

    def list_all(self, guard_name: Optional[str] = None) -> List[models.Permission]:
        with guarded(self.db, "list permissions"):
            query = self.db.query(models.Permission)
            if guard_name is not None:
                query = query.filter(models.Permission.guard_name == guard_name)
            return query.order_by(models.Permission.id.asc()).all()
