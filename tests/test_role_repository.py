"""Tests for the SQLAlchemy role repository."""

from uuid import uuid4

import pytest

from school_rbac.exceptions import (
    CannotModifySystemRoleError,
    RoleNotFoundError,
    RoleStoreError,
    UnsupportedOperationError,
)
from school_rbac.models.domain.role import RoleDraft, RolePatch
from school_rbac.repositories.role_repository import RoleRepository


def draft(name: str = "Librarian", permissions: list[str] | None = None) -> RoleDraft:
    return RoleDraft(
        name=name,
        description="Manages library",
        permissions=permissions or ["view_students"],
    )


class TestCreateAndRead:
    """Tests for creating and reading roles."""

    @pytest.mark.asyncio
    async def test_create_role(self, db_session):
        repo = RoleRepository(db_session)

        role = await repo.create_role(draft())

        assert role.id
        assert role.name == "Librarian"
        assert role.permissions == {"view_students"}
        assert role.is_system is False
        assert role.created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_permissions_stored_once(self, db_session):
        repo = RoleRepository(db_session)

        role = await repo.create_role(draft(permissions=["view_fees", "view_fees", "manage_fees"]))

        assert role.permissions == {"view_fees", "manage_fees"}

    @pytest.mark.asyncio
    async def test_get_role(self, db_session):
        repo = RoleRepository(db_session)
        created = await repo.create_role(draft())

        fetched = await repo.get_role(created.id)

        assert fetched == created

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role_id", ["not-a-uuid", "", "12345"])
    async def test_get_role_with_bad_id(self, db_session, role_id):
        repo = RoleRepository(db_session)

        with pytest.raises(RoleNotFoundError):
            await repo.get_role(role_id)

    @pytest.mark.asyncio
    async def test_not_found_is_store_error(self, db_session):
        """Callers can treat a missing role like any other storage failure."""
        repo = RoleRepository(db_session)

        with pytest.raises(RoleStoreError, match="Role not found"):
            await repo.get_role(str(uuid4()))

    @pytest.mark.asyncio
    async def test_list_roles_system_first(self, db_session):
        repo = RoleRepository(db_session)
        await repo.create_role(draft("Archivist"))
        await repo.create_system_role(draft("teacher"))
        await repo.create_role(draft("Archivist"))

        roles = await repo.list_roles()

        assert [r.name for r in roles] == ["teacher", "Archivist", "Archivist"]
        assert roles[0].is_system

    @pytest.mark.asyncio
    async def test_get_by_name(self, db_session):
        repo = RoleRepository(db_session)
        created = await repo.create_role(draft("Bursar"))

        assert (await repo.get_by_name("Bursar")).id == created.id
        assert await repo.get_by_name("Nobody") is None


class TestUpdate:
    """Tests for updating roles."""

    @pytest.mark.asyncio
    async def test_replace_permissions(self, db_session):
        repo = RoleRepository(db_session)
        created = await repo.create_role(draft(permissions=["view_fees", "manage_fees"]))

        updated = await repo.update_role(
            created.id, RolePatch(permissions=["manage_fees", "view_payments"])
        )

        assert updated.permissions == {"manage_fees", "view_payments"}
        assert updated.name == created.name
        assert updated.description == created.description

    @pytest.mark.asyncio
    async def test_clear_description(self, db_session):
        repo = RoleRepository(db_session)
        created = await repo.create_role(draft())

        updated = await repo.update_role(created.id, RolePatch(description=None))

        assert updated.description is None
        assert updated.permissions == created.permissions

    @pytest.mark.asyncio
    async def test_rename_custom_role(self, db_session):
        repo = RoleRepository(db_session)
        created = await repo.create_role(draft())

        updated = await repo.update_role(created.id, RolePatch(name="Head Librarian"))

        assert updated.name == "Head Librarian"

    @pytest.mark.asyncio
    async def test_rename_system_role_rejected(self, db_session):
        repo = RoleRepository(db_session)
        system = await repo.create_system_role(draft("admin"))

        with pytest.raises(CannotModifySystemRoleError, match="Cannot rename system roles"):
            await repo.update_role(system.id, RolePatch(name="root"))

    @pytest.mark.asyncio
    async def test_system_role_permissions_editable(self, db_session):
        """System roles keep their name but their permissions can change."""
        repo = RoleRepository(db_session)
        system = await repo.create_system_role(draft("teacher"))

        updated = await repo.update_role(
            system.id, RolePatch.replace(draft("teacher", ["view_exams"]))
        )

        assert updated.permissions == {"view_exams"}

    @pytest.mark.asyncio
    async def test_update_missing_role(self, db_session):
        repo = RoleRepository(db_session)

        with pytest.raises(RoleNotFoundError):
            await repo.update_role(str(uuid4()), RolePatch(name="Ghost"))


class TestDelete:
    """Tests for deleting roles."""

    @pytest.mark.asyncio
    async def test_delete_role(self, db_session):
        repo = RoleRepository(db_session)
        created = await repo.create_role(draft())

        await repo.delete_role(created.id)

        with pytest.raises(RoleNotFoundError):
            await repo.get_role(created.id)
        assert await repo.list_roles() == []

    @pytest.mark.asyncio
    async def test_delete_system_role_rejected(self, db_session):
        repo = RoleRepository(db_session)
        system = await repo.create_system_role(draft("admin"))

        with pytest.raises(CannotModifySystemRoleError, match="Cannot delete system roles"):
            await repo.delete_role(system.id)

    @pytest.mark.asyncio
    async def test_delete_missing_role(self, db_session):
        repo = RoleRepository(db_session)

        with pytest.raises(RoleNotFoundError):
            await repo.delete_role(str(uuid4()))


class TestAssignment:
    """Tests for user-role assignment."""

    @pytest.mark.asyncio
    async def test_assign_is_unsupported(self, db_session):
        repo = RoleRepository(db_session)

        with pytest.raises(UnsupportedOperationError):
            await repo.assign_role_to_user("u1", "r1")
