# tests/conftest.py
import pytest

from tenant_rbac.database import models  # noqa: F401  (테이블 등록)
from tenant_rbac.database.database import Base, build_engine
from sqlalchemy.orm import sessionmaker

from tenant_rbac.repositories.sqlalchemy import (
    SqlalchemyPermissionRepository, SqlalchemyRoleAssignmentRepository, SqlalchemyRoleRepository,
    SqlalchemyTenantRepository, SqlalchemyUserRepository
)
from tenant_rbac.services.authorization_service import AuthorizationService
from tenant_rbac.services.identity_service import IdentityService
from tenant_rbac.services.permission_cache import PermissionCache
from tenant_rbac.services.permission_catalog import PermissionCatalog
from tenant_rbac.services.role_assignment_service import RoleAssignmentService
from tenant_rbac.services.role_provisioner import RoleProvisioner
from tenant_rbac.services.tenant_context import TenantContextResolver

# ===================================================================
#  실제 SQLAlchemy 리포지토리를 사용하는 통합 테스트용 Fixture
# ===================================================================

@pytest.fixture
def db_session():
    """인메모리 SQLite 세션을 생성하고, 테스트가 끝나면 닫습니다."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()

@pytest.fixture
def context() -> TenantContextResolver:
    return TenantContextResolver()

@pytest.fixture
def cache() -> PermissionCache:
    return PermissionCache()

@pytest.fixture
def catalog() -> PermissionCatalog:
    return PermissionCatalog(["users", "media"])

@pytest.fixture
def permission_repo(db_session) -> SqlalchemyPermissionRepository:
    return SqlalchemyPermissionRepository(db_session)

@pytest.fixture
def role_repo(db_session) -> SqlalchemyRoleRepository:
    return SqlalchemyRoleRepository(db_session)

@pytest.fixture
def assignment_repo(db_session) -> SqlalchemyRoleAssignmentRepository:
    return SqlalchemyRoleAssignmentRepository(db_session)

@pytest.fixture
def identity(db_session) -> IdentityService:
    return IdentityService(SqlalchemyUserRepository(db_session), SqlalchemyTenantRepository(db_session))

@pytest.fixture
def provisioner(permission_repo, role_repo, catalog, context, cache) -> RoleProvisioner:
    return RoleProvisioner(permission_repo, role_repo, catalog, context, cache)

@pytest.fixture
def assignments(assignment_repo, context, cache) -> RoleAssignmentService:
    return RoleAssignmentService(assignment_repo, context, cache)

@pytest.fixture
def authorization(assignment_repo, role_repo, cache) -> AuthorizationService:
    return AuthorizationService(assignment_repo, role_repo, cache)
