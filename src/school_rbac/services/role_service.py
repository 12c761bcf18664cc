"""Role service for creating, editing and deleting role records."""

import logging
from collections.abc import Iterable

from pydantic import BaseModel, Field

from school_rbac.exceptions import RoleStoreError, RoleValidationError, SchoolRbacError
from school_rbac.models.domain.role import Role, RoleDraft, RolePatch
from school_rbac.repositories.role_store import RoleStore
from school_rbac.utils.secure_logging import log_error, log_warning

logger = logging.getLogger(__name__)

ROLE_NAME_REQUIRED = "Role name is required"
PERMISSIONS_REQUIRED = "At least one permission is required"


class BulkDeleteResult(BaseModel):
    """Outcome of deleting several roles one by one."""

    deleted: list[str] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)

    @property
    def has_failures(self) -> bool:
        """Whether any deletion failed."""
        return bool(self.failed)


def build_draft(
    name: str | None,
    description: str | None,
    permissions: Iterable[str] | None,
) -> RoleDraft:
    """Validate role input and build the payload sent to storage.

    The name is stripped and permissions are de-duplicated keeping
    first-seen order. An empty description is stored as None.

    Args:
        name: Role name
        description: Optional description
        permissions: Selected permission keys

    Returns:
        Validated RoleDraft

    Raises:
        RoleValidationError: If the name is blank or no permission is selected
    """
    clean_name = (name or "").strip()
    keys = list(dict.fromkeys(permissions or ()))

    failed = []
    if not clean_name:
        failed.append("name")
    if not keys:
        failed.append("permissions")
    if failed:
        message = ROLE_NAME_REQUIRED if failed[0] == "name" else PERMISSIONS_REQUIRED
        raise RoleValidationError(message, failed)

    return RoleDraft(name=clean_name, description=description or None, permissions=keys)


class RoleService:
    """Service for role record operations.

    Storage failures are never retried or swallowed; they reach the caller
    as ``RoleStoreError`` after being logged.
    """

    def __init__(self, store: RoleStore) -> None:
        """Initialize service with a role store."""
        self.store = store

    async def list_roles(self) -> list[Role]:
        """List all persisted roles."""
        try:
            return await self.store.list_roles()
        except RoleStoreError as e:
            log_error(logger, "Failed to list roles", e)
            raise

    async def get_role(self, role_id: str) -> Role:
        """Get a role by ID.

        Raises:
            RoleNotFoundError: If role not found
        """
        return await self.store.get_role(role_id)

    async def create_role(
        self,
        name: str | None,
        description: str | None,
        permissions: Iterable[str] | None,
    ) -> Role:
        """Create a new role.

        Args:
            name: Role name
            description: Optional description
            permissions: Permission keys granted by the role

        Returns:
            Created role as stored

        Raises:
            RoleValidationError: If validation fails (nothing is stored)
            RoleStoreError: If storage fails
        """
        draft = build_draft(name, description, permissions)
        try:
            role = await self.store.create_role(draft)
        except RoleStoreError as e:
            log_error(logger, "Failed to create role", e)
            raise

        logger.info(f"Created role {role.id} with {len(role.permissions)} permissions")
        return role

    async def update_role(
        self,
        role_id: str,
        name: str | None,
        description: str | None,
        permissions: Iterable[str] | None,
    ) -> Role:
        """Replace a role's name, description and permissions.

        Args:
            role_id: Role ID to update
            name: New role name
            description: New description
            permissions: New full permission set

        Returns:
            Updated role as stored

        Raises:
            RoleValidationError: If validation fails (nothing is stored)
            RoleStoreError: If storage fails
        """
        draft = build_draft(name, description, permissions)
        try:
            role = await self.store.update_role(role_id, RolePatch.replace(draft))
        except RoleStoreError as e:
            log_error(logger, f"Failed to update role {role_id}", e)
            raise

        logger.info(f"Updated role {role.id}")
        return role

    async def delete_role(self, role_id: str) -> None:
        """Delete a role.

        Raises:
            RoleStoreError: If the role is missing or cannot be deleted
        """
        try:
            await self.store.delete_role(role_id)
        except RoleStoreError as e:
            log_error(logger, f"Failed to delete role {role_id}", e)
            raise

        logger.info(f"Deleted role {role_id}")

    async def delete_roles(self, role_ids: Iterable[str]) -> BulkDeleteResult:
        """Delete several roles, attempting every one.

        Args:
            role_ids: Role IDs to delete

        Returns:
            Which ids were deleted and why the others failed
        """
        result = BulkDeleteResult()
        for role_id in role_ids:
            try:
                await self.store.delete_role(role_id)
            except SchoolRbacError as e:
                log_warning(logger, f"Bulk delete skipped role {role_id}", e)
                result.failed[role_id] = e.message
            else:
                result.deleted.append(role_id)

        logger.info(
            f"Bulk role delete: {len(result.deleted)} deleted, {len(result.failed)} failed"
        )
        return result
