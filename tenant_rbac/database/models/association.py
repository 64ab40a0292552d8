from sqlalchemy import Column, Integer, ForeignKey, Table
from sqlalchemy.orm import relationship
from ..database import Base

# 역할(Role)과 권한(Permission) 사이의 다대다 연관 테이블
role_has_permissions = Table(
    "role_has_permissions",
    Base.metadata,
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", Integer, ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)

# 테넌트(Tenant)와 사용자(User) 사이의 멤버십 연관 테이블
tenant_user = Table(
    "tenant_user",
    Base.metadata,
    Column("tenant_id", Integer, ForeignKey("tenants.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class UserRole(Base):
    """
    사용자(User), 역할(Role), 스코프 테넌트 ID 사이의 3항 관계를 표현하는 모델입니다.
    tenant_id는 역할의 tenant_id와 항상 같아야 하며, 조회 시점에 역할을 다시
    참조하지 않도록 할당 레코드에 명시적으로 저장합니다.
    전역 할당은 tenant_id = 0 (GLOBAL_TENANT_ID)으로 기록됩니다.
    """
    __tablename__ = "user_has_roles"
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True)
    tenant_id = Column(Integer, primary_key=True, index=True)

    user = relationship("User", back_populates="role_assignments")
    role = relationship("Role", back_populates="user_assignments")
