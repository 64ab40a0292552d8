from .association import UserRole, role_has_permissions, tenant_user
from .permission import Permission
from .role import Role
from .tenant import Tenant
from .user import User

__all__ = ["Permission", "Role", "Tenant", "User", "UserRole", "role_has_permissions", "tenant_user"]
