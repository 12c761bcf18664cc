"""Data Transfer Objects package."""

from school_rbac.models.dto.permission import (
    PermissionListResponse,
    PermissionResponse,
    PermissionsByCategory,
    SelectionRequest,
)
from school_rbac.models.dto.role import (
    RoleCreateRequest,
    RoleListResponse,
    RoleResponse,
    RoleUpdateRequest,
)

__all__ = [
    "PermissionResponse",
    "PermissionListResponse",
    "PermissionsByCategory",
    "SelectionRequest",
    "RoleCreateRequest",
    "RoleUpdateRequest",
    "RoleResponse",
    "RoleListResponse",
]
