"""User-role assignment service."""

import logging
from collections.abc import Mapping
from typing import Any

from school_rbac.models.domain.role import UserRoleAssignment
from school_rbac.repositories.role_store import RoleStore

logger = logging.getLogger(__name__)


class UserRoleService:
    """Binds users to roles through the role store.

    Neither the user nor the role is checked for existence here; the store
    decides. Both shipped stores reject assignment outright.
    """

    def __init__(self, store: RoleStore) -> None:
        """Initialize service with a role store."""
        self.store = store

    async def assign(self, user_id: str, role_id: str) -> UserRoleAssignment:
        """Assign a role to a user.

        Args:
            user_id: User identifier
            role_id: Role identifier

        Returns:
            The stored assignment

        Raises:
            UnsupportedOperationError: If the store does not support assignment
        """
        assignment = UserRoleAssignment(user_id=user_id, role_id=role_id)
        await self.store.assign_role_to_user(assignment.user_id, assignment.role_id)
        logger.info(f"Assigned role {role_id} to user {user_id}")
        return assignment

    @staticmethod
    def current_role(user_record: Mapping[str, Any] | None) -> str | None:
        """Read the role an upstream user record reports as current."""
        if not user_record:
            return None
        role = user_record.get("currentRole", user_record.get("current_role"))
        return str(role) if role is not None else None
