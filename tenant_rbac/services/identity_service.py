import hashlib
import logging
import uuid
from datetime import datetime
from typing import Callable, Iterable, Optional

from tenant_rbac.database import models
from tenant_rbac.repositories.interfaces import ITenantRepository, IUserRepository
from tenant_rbac.services.exceptions import (
    ApprovalError, SelfApprovalError, TenantNotFoundError,
    UserCreationError, UserNotFoundError
)

logger = logging.getLogger(__name__)


def sha256_hasher(secret: str) -> str:
    return hashlib.sha256(secret.encode('utf-8')).hexdigest()


class IdentityService:
    """사용자, 테넌트, 테넌트 멤버십 및 사용자 승인을 관리합니다."""

    def __init__(self, user_repo: IUserRepository, tenant_repo: ITenantRepository, hasher: Callable[[str], str] = sha256_hasher):
        """
        IdentityService를 초기화합니다.

        Args:
            user_repo: 사용자 데이터에 접근하기 위한 리포지토리.
            tenant_repo: 테넌트 데이터에 접근하기 위한 리포지토리.
            hasher: 비밀번호를 단방향 해시하는 함수. 결과값은 이 서비스에서 해석하지 않습니다.
        """
        self.user_repo = user_repo
        self.tenant_repo = tenant_repo
        self.hasher = hasher

    def create_user(self, name: str, email: str, password: str, approved_by: Optional[models.User] = None, verified: bool = True) -> models.User:
        """
        새로운 사용자를 생성합니다. 비밀번호는 해시하여 저장합니다.
        approved_by가 주어지면 해당 사용자가 승인한 상태로 생성됩니다.

        Raises:
            UserCreationError: 동일한 이메일의 사용자가 이미 존재할 때.
            ApprovalError: 승인자가 아직 승인되지 않은 사용자일 때.
        """
        if self.user_repo.find_by_email(email):
            raise UserCreationError(f"User with email '{email}' already exists.")
        if approved_by is not None and not approved_by.is_approved:
            raise ApprovalError(f"Approver '{approved_by.email}' is not approved.")

        now = datetime.now()
        new_user = models.User(
            name=name,
            email=email,
            password_hash=self.hasher(password),
            email_verified_at=now if verified else None,
            approved_at=now if approved_by is not None else None,
            approved_by=approved_by.id if approved_by is not None else None,
        )
        created_user = self.user_repo.create(new_user)
        logger.info("Created user '%s' (id=%s).", email, created_user.id)
        return created_user

    def ensure_user(self, name: str, email: str, password: str, approved_by: Optional[models.User] = None) -> models.User:
        """이메일로 사용자를 조회하고, 없으면 생성합니다."""
        existing = self.user_repo.find_by_email(email)
        if existing:
            return existing
        return self.create_user(name, email, password, approved_by=approved_by)

    def create_bootstrap_admin(self, name: str, email: str, password: str) -> models.User:
        """
        부트스트랩 관리자를 보장합니다. 자기 승인(approved_by = None)이 허용되는 유일한 사용자입니다.
        """
        admin = self.user_repo.find_by_email(email)
        if admin is None:
            admin = self.create_user(name, email, password)
        if not admin.is_approved:
            admin.approved_at = datetime.now()
            admin.approved_by = None
            admin = self.user_repo.save(admin)
            logger.info("Bootstrap admin '%s' self-approved.", email)
        return admin

    def approve_user(self, user_id: int, approver_id: int) -> models.User:
        """
        승인된 다른 사용자가 사용자를 승인합니다.

        Raises:
            UserNotFoundError: 사용자 또는 승인자를 찾을 수 없을 때.
            SelfApprovalError: 사용자가 자기 자신을 승인하려고 할 때.
            ApprovalError: 승인자가 아직 승인되지 않았을 때.
        """
        if user_id == approver_id:
            raise SelfApprovalError(f"User '{user_id}' cannot approve themselves.")
        user = self.get_user(user_id)
        approver = self.get_user(approver_id)
        if not approver.is_approved:
            raise ApprovalError(f"Approver '{approver_id}' is not approved.")

        user.approved_at = datetime.now()
        user.approved_by = approver.id
        return self.user_repo.save(user)

    def get_user(self, user_id: int) -> models.User:
        """
        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        user = self.user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User with id '{user_id}' not found.")
        return user

    def ensure_tenant(self, name: str) -> models.Tenant:
        """이름으로 테넌트를 조회하고, 없으면 새 UUID와 활성 상태로 생성합니다."""
        existing = self.tenant_repo.find_by_name(name)
        if existing:
            return existing
        tenant = self.tenant_repo.create(models.Tenant(name=name, uuid=str(uuid.uuid4()), is_active=True))
        logger.info("Created tenant '%s' (id=%s).", name, tenant.id)
        return tenant

    def get_tenant(self, tenant_id: int) -> models.Tenant:
        """
        Raises:
            TenantNotFoundError: 해당 ID의 테넌트를 찾을 수 없을 때.
        """
        tenant = self.tenant_repo.find_by_id(tenant_id)
        if not tenant:
            raise TenantNotFoundError(f"Tenant with id '{tenant_id}' not found.")
        return tenant

    def deactivate_tenant(self, tenant_id: int) -> models.Tenant:
        tenant = self.get_tenant(tenant_id)
        tenant.is_active = False
        return self.tenant_repo.save(tenant)

    def attach_tenants(self, user: models.User, tenants: Iterable[models.Tenant]):
        """기존 멤버십을 유지한 채 사용자를 테넌트에 소속시킵니다."""
        self.user_repo.attach_tenants(user, list(tenants))
