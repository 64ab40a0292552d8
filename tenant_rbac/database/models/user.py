from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from ..database import Base
from .association import tenant_user


class User(Base):
    """
    시스템에 로그인하는 사용자입니다.
    승인 상태(approved_at, approved_by)를 가지며, 자기 자신의 승인은
    부트스트랩 관리자에게만 허용됩니다. (approved_by = NULL)
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    email_verified_at = Column(DateTime, nullable=True)
    approved_at = Column(DateTime, nullable=True)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    tenants = relationship("Tenant", secondary=tenant_user, back_populates="users")
    role_assignments = relationship("UserRole", back_populates="user", cascade="all, delete-orphan")

    @property
    def is_approved(self) -> bool:
        return self.approved_at is not None
