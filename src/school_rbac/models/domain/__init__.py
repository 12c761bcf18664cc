"""Domain models package."""

from school_rbac.models.domain.permission import Permission, PermissionCategory
from school_rbac.models.domain.role import Role, RoleDraft, RolePatch, UserRoleAssignment

__all__ = [
    "Permission",
    "PermissionCategory",
    "Role",
    "RoleDraft",
    "RolePatch",
    "UserRoleAssignment",
]
