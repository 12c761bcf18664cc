"""SQLAlchemy ORM models package."""

from school_rbac.models.orm.base import Base
from school_rbac.models.orm.role import RoleORM
from school_rbac.models.orm.role_permission import RolePermissionORM

__all__ = [
    "Base",
    "RoleORM",
    "RolePermissionORM",
]
