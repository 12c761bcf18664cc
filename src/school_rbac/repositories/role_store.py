"""Role persistence contract."""

from abc import ABC, abstractmethod

from school_rbac.models.domain.role import Role, RoleDraft, RolePatch


class RoleStore(ABC):
    """Abstract persistence collaborator for roles.

    Implementations raise ``RoleStoreError`` (or a subclass) for every
    storage or transport failure and ``UnsupportedOperationError`` for
    operations they do not offer.
    """

    @abstractmethod
    async def list_roles(self) -> list[Role]:
        """Get all persisted roles."""
        pass

    @abstractmethod
    async def get_role(self, role_id: str) -> Role:
        """Get a single role.

        Raises:
            RoleNotFoundError: If no role has this id
        """
        pass

    @abstractmethod
    async def create_role(self, draft: RoleDraft) -> Role:
        """Persist a new role and return it with its assigned id."""
        pass

    @abstractmethod
    async def update_role(self, role_id: str, patch: RolePatch) -> Role:
        """Apply an update to a role and return the stored result."""
        pass

    @abstractmethod
    async def delete_role(self, role_id: str) -> None:
        """Delete a role."""
        pass

    @abstractmethod
    async def assign_role_to_user(self, user_id: str, role_id: str) -> None:
        """Associate a user with a role."""
        pass
