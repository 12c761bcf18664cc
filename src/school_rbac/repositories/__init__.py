"""Repositories package."""

from school_rbac.repositories.role_repository import RoleRepository
from school_rbac.repositories.role_store import RoleStore

__all__ = [
    "RoleRepository",
    "RoleStore",
]
