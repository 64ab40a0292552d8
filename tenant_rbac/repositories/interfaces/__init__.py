from .permission import IPermissionRepository
from .role import IRoleRepository
from .role_assignment import IRoleAssignmentRepository
from .tenant import ITenantRepository
from .user import IUserRepository

__all__ = [
    "IPermissionRepository",
    "IRoleRepository",
    "IRoleAssignmentRepository",
    "ITenantRepository",
    "IUserRepository",
]
