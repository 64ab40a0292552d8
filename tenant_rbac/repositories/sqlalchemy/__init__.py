from .sqlalchemy_permission_repository import SqlalchemyPermissionRepository
from .sqlalchemy_role_assignment_repository import SqlalchemyRoleAssignmentRepository
from .sqlalchemy_role_repository import SqlalchemyRoleRepository
from .sqlalchemy_tenant_repository import SqlalchemyTenantRepository
from .sqlalchemy_user_repository import SqlalchemyUserRepository

__all__ = [
    "SqlalchemyPermissionRepository",
    "SqlalchemyRoleAssignmentRepository",
    "SqlalchemyRoleRepository",
    "SqlalchemyTenantRepository",
    "SqlalchemyUserRepository",
]
