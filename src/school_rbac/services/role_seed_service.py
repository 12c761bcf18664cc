"""Role seed service for creating missing built-in roles on startup.

Each built-in role without a persisted record is created as a system role
with its default description and permissions. Records that already exist
are left exactly as they are, even if their permissions drifted from the
defaults.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from school_rbac.constants.roles import (
    get_default_permissions,
    get_role_hierarchy,
)
from school_rbac.models.domain.role import RoleDraft
from school_rbac.repositories.role_repository import RoleRepository

logger = logging.getLogger(__name__)


class RoleSeedService:
    """Creates built-in roles that are missing from storage."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: Database session
        """
        self.session = session
        self.role_repo = RoleRepository(session)

    async def seed_default_roles(self) -> list[str]:
        """Create every missing built-in role.

        Returns:
            Names of the roles that were created
        """
        created: list[str] = []

        for info in get_role_hierarchy():
            name = info.role.value
            if await self.role_repo.get_by_name(name) is not None:
                continue

            await self.role_repo.create_system_role(
                RoleDraft(
                    name=name,
                    description=info.description,
                    permissions=sorted(get_default_permissions(info.role)),
                )
            )
            created.append(name)

        await self.session.commit()

        if created:
            logger.info(f"Seeded built-in roles: {', '.join(created)}")
        else:
            logger.debug("Role seeding: no changes needed")

        return created


async def seed_default_roles() -> list[str]:
    """Convenience function to seed built-in roles.

    Called from application startup.

    Returns:
        Names of the roles that were created
    """
    from school_rbac.database import async_session_maker

    async with async_session_maker() as session:
        service = RoleSeedService(session)
        return await service.seed_default_roles()
