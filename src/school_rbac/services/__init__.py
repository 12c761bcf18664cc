"""Services package."""

from school_rbac.services.role_seed_service import RoleSeedService
from school_rbac.services.role_service import BulkDeleteResult, RoleService
from school_rbac.services.user_role_service import UserRoleService

__all__ = [
    "BulkDeleteResult",
    "RoleSeedService",
    "RoleService",
    "UserRoleService",
]
