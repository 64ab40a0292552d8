from sqlalchemy import Boolean, Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from ..database import Base
from .association import tenant_user


class Tenant(Base):
    """
    역할과 권한이 독립적으로 정의되는 격리된 조직 단위입니다.
    내부 id 외에 외부에 노출해도 안전한 UUID를 가집니다.
    """
    __tablename__ = "tenants"
    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(String(36), unique=True, nullable=False)
    name = Column(String, unique=True, nullable=False, index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, server_default=func.now())

    users = relationship("User", secondary=tenant_user, back_populates="tenants")
