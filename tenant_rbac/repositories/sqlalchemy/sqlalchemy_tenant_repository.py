from typing import List, Optional
from sqlalchemy.orm import Session
from tenant_rbac.database import models
from tenant_rbac.repositories.interfaces import ITenantRepository
from .base import commit, first_or_create, guarded

class SqlalchemyTenantRepository(ITenantRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, tenant_model: models.Tenant) -> models.Tenant:
        return first_or_create(
            self.db,
            lambda: self.find_by_name(tenant_model.name),
            lambda: tenant_model,
            f"create tenant '{tenant_model.name}'",
        )

    def save(self, tenant_model: models.Tenant) -> models.Tenant:
        description = f"update tenant {tenant_model.id}"
        commit(self.db, description)
        with guarded(self.db, description):
            self.db.refresh(tenant_model)
        return tenant_model

    def find_by_id(self, tenant_id: int) -> Optional[models.Tenant]:
        with guarded(self.db, f"look up tenant {tenant_id}"):
            return self.db.query(models.Tenant).filter(models.Tenant.id == tenant_id).first()

    def find_by_name(self, name: str) -> Optional[models.Tenant]:
        with guarded(self.db, f"look up tenant '{name}'"):
            return self.db.query(models.Tenant).filter(models.Tenant.name == name).first()

    def find_by_uuid(self, uuid: str) -> Optional[models.Tenant]:
        with guarded(self.db, f"look up tenant '{uuid}'"):
            return self.db.query(models.Tenant).filter(models.Tenant.uuid == uuid).first()

    def list_all(self) -> List[models.Tenant]:
        with guarded(self.db, "list tenants"):
            return self.db.query(models.Tenant).order_by(models.Tenant.name.asc()).all()
