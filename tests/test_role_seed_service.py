"""Tests for seeding built-in roles."""

import pytest

from school_rbac.constants.roles import built_in_role_names, get_default_permissions
from school_rbac.models.domain.role import RoleDraft, RolePatch
from school_rbac.repositories.role_repository import RoleRepository
from school_rbac.services.role_seed_service import RoleSeedService


class TestRoleSeedService:
    """Tests for RoleSeedService."""

    @pytest.mark.asyncio
    async def test_seeds_every_built_in_role(self, db_session):
        created = await RoleSeedService(db_session).seed_default_roles()

        assert sorted(created) == sorted(built_in_role_names())
        roles = await RoleRepository(db_session).list_roles()
        assert all(role.is_system for role in roles)
        by_name = {role.name: role for role in roles}
        assert by_name["student"].permissions == get_default_permissions("student")
        assert by_name["admin"].description == "System administrator with full access"

    @pytest.mark.asyncio
    async def test_second_run_creates_nothing(self, db_session):
        service = RoleSeedService(db_session)
        await service.seed_default_roles()

        assert await service.seed_default_roles() == []
        assert len(await RoleRepository(db_session).list_roles()) == len(built_in_role_names())

    @pytest.mark.asyncio
    async def test_existing_records_are_not_overwritten(self, db_session):
        """An edited built-in role keeps its edits."""
        repo = RoleRepository(db_session)
        teacher = await repo.create_role(RoleDraft(name="teacher", permissions=["view_exams"]))

        created = await RoleSeedService(db_session).seed_default_roles()

        assert "teacher" not in created
        assert (await repo.get_role(teacher.id)).permissions == {"view_exams"}

    @pytest.mark.asyncio
    async def test_renamed_role_is_recreated(self, db_session):
        """Seeding matches by name only."""
        repo = RoleRepository(db_session)
        student = await repo.create_role(RoleDraft(name="student", permissions=["view_results"]))
        await repo.update_role(student.id, RolePatch(name="pupil"))

        created = await RoleSeedService(db_session).seed_default_roles()

        assert "student" in created
