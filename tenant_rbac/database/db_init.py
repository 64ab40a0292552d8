import logging
from typing import Dict

from sqlalchemy.orm import Session

from tenant_rbac.config import Settings, configure_logging, get_settings
from tenant_rbac.repositories.sqlalchemy import (
    SqlalchemyPermissionRepository, SqlalchemyRoleAssignmentRepository, SqlalchemyRoleRepository,
    SqlalchemyTenantRepository, SqlalchemyUserRepository
)
from tenant_rbac.services.authorization_service import AuthorizationService
from tenant_rbac.services.identity_service import IdentityService
from tenant_rbac.services.permission_cache import PermissionCache
from tenant_rbac.services.permission_catalog import PermissionCatalog
from tenant_rbac.services.role_assignment_service import RoleAssignmentService
from tenant_rbac.services.role_provisioner import RoleProvisioner, RoleType
from tenant_rbac.services.tenant_context import TenantContextResolver
from .database import engine, SessionLocal, Base
from . import models  # noqa: F401  (테이블 등록)

logger = logging.getLogger(__name__)

DEMO_USERS = (
    ("Sicrano", "sicrano@example.com"),
    ("Beltrano", "beltrano@example.com"),
)


def build_services(db: Session, settings: Settings) -> Dict[str, object]:
    """리포지토리 -> 서비스 순서로 의존성을 생성합니다."""
    permission_repo = SqlalchemyPermissionRepository(db)
    role_repo = SqlalchemyRoleRepository(db)
    assignment_repo = SqlalchemyRoleAssignmentRepository(db)
    user_repo = SqlalchemyUserRepository(db)
    tenant_repo = SqlalchemyTenantRepository(db)

    context = TenantContextResolver()
    cache = PermissionCache()
    catalog = PermissionCatalog(settings.resources)

    return {
        'context': context,
        'cache': cache,
        'catalog': catalog,
        'identity': IdentityService(user_repo, tenant_repo),
        'provisioner': RoleProvisioner(permission_repo, role_repo, catalog, context, cache),
        'assignments': RoleAssignmentService(assignment_repo, context, cache),
        'authorization': AuthorizationService(assignment_repo, role_repo, cache),
    }


def seed(db: Session, settings: Settings) -> Dict[str, object]:
    """
    기본 권한, 전역 역할, 부트스트랩 관리자, 데모 테넌트와 테넌트별 역할을 생성합니다.
    모든 단계는 멱등적이므로 여러 번 실행해도 결과가 같습니다.
    """
    services = build_services(db, settings)
    identity = services['identity']
    provisioner = services['provisioner']
    assignments = services['assignments']
    guard = settings.default_guard

    provisioner.ensure_permissions(guard)
    global_roles = provisioner.ensure_global_roles(guard)

    # 전역(테넌트 없음) 할당: 관리자는 Admin 역할만 가집니다.
    admin = identity.create_bootstrap_admin(settings.admin_name, settings.admin_email, settings.admin_password)
    assignments.sync_global(admin, [r for r in global_roles if r.name == RoleType.ADMIN.value])

    # 데모 사용자에게는 전역 역할을 부여하지 않고, 테넌트별로만 역할을 부여합니다.
    users = [identity.ensure_user(name, email, settings.demo_password, approved_by=admin) for name, email in DEMO_USERS]
    tenants = [identity.ensure_tenant(name) for name in settings.demo_tenants]
    for user in users:
        identity.attach_tenants(user, tenants)

    # 테넌트마다 Owner를 한 명씩 돌아가며 지정하고, 나머지는 User로 지정합니다.
    for index, tenant in enumerate(tenants):
        owner_role, user_role = provisioner.ensure_tenant_roles(tenant.id, guard)
        for position, user in enumerate(users):
            role = owner_role if position == index % len(users) else user_role
            assignments.assign_in_tenant(user, role, tenant)

    services['cache'].invalidate()
    logger.info("Seeded %d tenant(s) and %d user(s).", len(tenants), len(users) + 1)
    return services


def initialize_db():
    """
    DB와 테이블을 생성하고, 기본 데이터를 삽입합니다.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Initializing database...")

    # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created.")

    db = SessionLocal()
    try:
        seed(db, settings)
        logger.info("Database initialization complete.")
    finally:
        db.close()


if __name__ == '__main__':
    initialize_db()
