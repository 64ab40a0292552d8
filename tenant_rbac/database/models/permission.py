from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from ..database import Base
from .association import role_has_permissions


class Permission(Base):
    """
    '{resource}.{action}' 형식의 이름과 가드(guard)로 식별되는 권한입니다.
    (예: 'users.edit' / 'web').
    최초 참조 시 생성되며, 이후 수정되거나 삭제되지 않습니다.
    """
    __tablename__ = "permissions"
    __table_args__ = (UniqueConstraint("name", "guard_name", name="uq_permissions_name_guard"),)

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    guard_name = Column(String, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    roles = relationship("Role", secondary=role_has_permissions, back_populates="permissions")

    def __repr__(self):
        return f"<Permission {self.name} ({self.guard_name})>"
