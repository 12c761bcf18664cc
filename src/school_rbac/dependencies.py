"""Centralized dependency injection factories for FastAPI.

Routers get their services from here so tests can swap the role store
through ``app.dependency_overrides``.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from school_rbac.database import get_db
from school_rbac.repositories.role_repository import RoleRepository
from school_rbac.repositories.role_store import RoleStore
from school_rbac.services.role_service import RoleService


def get_role_store(db: AsyncSession = Depends(get_db)) -> RoleStore:
    """Get the database-backed RoleStore."""
    return RoleRepository(db)


def get_role_service(store: RoleStore = Depends(get_role_store)) -> RoleService:
    """Get RoleService instance."""
    return RoleService(store)
