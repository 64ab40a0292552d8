from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from ..database import Base
from .association import role_has_permissions


class Role(Base):
    """
    (name, guard_name, tenant_id)로 식별되는 권한의 집합입니다.
    tenant_id = 0 이면 전역 역할(예: 'Admin'), 양의 정수이면 해당 테넌트에만
    속한 역할입니다. 이름이 같아도 tenant_id가 다르면 서로 다른 역할입니다.
    (예: Tenant A의 'Owner' != Tenant B의 'Owner')
    """
    __tablename__ = "roles"
    __table_args__ = (
        UniqueConstraint("name", "guard_name", "tenant_id", name="uq_roles_name_guard_tenant"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    guard_name = Column(String, nullable=False)
    tenant_id = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime, server_default=func.now())

    permissions = relationship("Permission", secondary=role_has_permissions, back_populates="roles")
    user_assignments = relationship("UserRole", back_populates="role", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Role {self.name} ({self.guard_name}, tenant={self.tenant_id})>"
