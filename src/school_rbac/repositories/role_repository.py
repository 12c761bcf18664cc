"""Role repository."""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from school_rbac.exceptions import (
    CannotModifySystemRoleError,
    RoleNotFoundError,
    RoleStoreError,
    UnsupportedOperationError,
)
from school_rbac.models.domain.role import Role, RoleDraft, RolePatch
from school_rbac.models.orm.role import RoleORM
from school_rbac.models.orm.role_permission import RolePermissionORM
from school_rbac.repositories.role_store import RoleStore


@contextmanager
def _storage_errors() -> Iterator[None]:
    """Surface database failures as a single storage error."""
    try:
        yield
    except SQLAlchemyError as e:
        raise RoleStoreError("Role storage failed", {"error_type": type(e).__name__}) from e


def _parse_id(role_id: str) -> UUID:
    try:
        return UUID(str(role_id))
    except ValueError:
        raise RoleNotFoundError(role_id) from None


def to_domain(role: RoleORM) -> Role:
    """Convert a loaded RoleORM into a domain Role."""
    return Role(
        id=str(role.id),
        name=role.name,
        description=role.description,
        permissions=frozenset(role.permission_keys),
        is_system=role.is_system,
        created_at=role.created_at,
        updated_at=role.updated_at,
    )


class RoleRepository(RoleStore):
    """Repository for role operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def _load(self, role_id: UUID) -> RoleORM | None:
        """Get role with permissions loaded, refreshing any cached copy."""
        result = await self.session.execute(
            select(RoleORM)
            .options(selectinload(RoleORM.permission_links))
            .where(RoleORM.id == role_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _load_or_raise(self, role_id: str) -> RoleORM:
        role = await self._load(_parse_id(role_id))
        if role is None:
            raise RoleNotFoundError(role_id)
        return role

    async def get_by_name(self, name: str) -> Role | None:
        """Get the first role with this name.

        Args:
            name: Role name

        Returns:
            Role or None if not found
        """
        with _storage_errors():
            result = await self.session.execute(
                select(RoleORM)
                .options(selectinload(RoleORM.permission_links))
                .where(RoleORM.name == name)
                .order_by(RoleORM.created_at)
                .limit(1)
            )
            role = result.scalar_one_or_none()
        return to_domain(role) if role is not None else None

    async def list_roles(self) -> list[Role]:
        """Get all roles with permissions, system roles first."""
        with _storage_errors():
            result = await self.session.execute(
                select(RoleORM)
                .options(selectinload(RoleORM.permission_links))
                .order_by(RoleORM.is_system.desc(), RoleORM.name)
            )
            roles = list(result.scalars().all())
        return [to_domain(role) for role in roles]

    async def get_role(self, role_id: str) -> Role:
        """Get role by ID.

        Raises:
            RoleNotFoundError: If role not found
        """
        with _storage_errors():
            role = await self._load_or_raise(role_id)
        return to_domain(role)

    async def create_role(self, draft: RoleDraft, is_system: bool = False) -> Role:
        """Create a new role with its permissions.

        Args:
            draft: Role name, description and permissions
            is_system: Whether this is a system role

        Returns:
            Created role
        """
        with _storage_errors():
            role = RoleORM(
                name=draft.name,
                description=draft.description,
                is_system=is_system,
                permission_links=[
                    RolePermissionORM(permission_key=key)
                    for key in dict.fromkeys(draft.permissions)
                ],
            )
            self.session.add(role)
            await self.session.flush()
            role = await self._load(role.id)
        return to_domain(role)

    async def create_system_role(self, draft: RoleDraft) -> Role:
        """Create a system role (cannot be deleted or renamed)."""
        return await self.create_role(draft, is_system=True)

    async def set_permissions(self, role: RoleORM, permission_keys: Iterable[str]) -> None:
        """Set permissions for a role (replaces existing).

        Args:
            role: Role with permissions loaded
            permission_keys: Permission keys to grant
        """
        wanted = list(dict.fromkeys(permission_keys))
        wanted_set = set(wanted)

        # Orphaned links are deleted on flush
        role.permission_links = [
            link for link in role.permission_links if link.permission_key in wanted_set
        ]
        existing = {link.permission_key for link in role.permission_links}
        role.permission_links.extend(
            RolePermissionORM(permission_key=key) for key in wanted if key not in existing
        )
        await self.session.flush()

    async def update_role(self, role_id: str, patch: RolePatch) -> Role:
        """Update a role.

        Only fields explicitly set on the patch are changed.

        Raises:
            RoleNotFoundError: If role not found
            CannotModifySystemRoleError: If renaming a system role
        """
        changes = patch.model_fields_set
        with _storage_errors():
            role = await self._load_or_raise(role_id)

            if "name" in changes and patch.name is not None and patch.name != role.name:
                if role.is_system:
                    raise CannotModifySystemRoleError(role.name, action="rename")
                role.name = patch.name

            if "description" in changes:
                role.description = patch.description

            if "permissions" in changes and patch.permissions is not None:
                await self.set_permissions(role, patch.permissions)

            role.updated_at = datetime.now(timezone.utc)
            await self.session.flush()
            role = await self._load(role.id)
        return to_domain(role)

    async def delete_role(self, role_id: str) -> None:
        """Delete a non-system role.

        Raises:
            RoleNotFoundError: If role not found
            CannotModifySystemRoleError: If role is a system role
        """
        with _storage_errors():
            role = await self._load_or_raise(role_id)
            if role.is_system:
                raise CannotModifySystemRoleError(role.name, action="delete")

            await self.session.delete(role)
            await self.session.flush()

    async def assign_role_to_user(self, user_id: str, role_id: str) -> None:
        """User-role assignments are not stored by this backend."""
        raise UnsupportedOperationError()
