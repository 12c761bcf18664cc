"""API routers package."""

from school_rbac.routers import permissions, roles

__all__ = [
    "permissions",
    "roles",
]
