"""User, role and binding repositories against SQLite."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.domain.auth.model.role import AccessScope, Role
from pulse.domain.auth.model.user import User
from pulse.domain.auth.model.user_role import Grant, UserRole
from pulse.domain.auth.model.value import ALL_PROJECTS
from pulse.domain.shared.error import ConflictError
from pulse.infrastructure.persistence.repository.auth import (
    SQLRoleRepository,
    SQLUserRepository,
    SQLUserRoleRepository,
)


class TestAuthRepositories:
    @pytest.mark.asyncio
    async def test_user_round_trip(self, session: AsyncSession):
        repo = SQLUserRepository(session)
        user_id = await repo.save(User.create("someone@example.com"))

        by_id = await repo.get(user_id)
        by_email = await repo.get_by_email("someone@example.com")

        assert by_id is not None and by_id.email == "someone@example.com"
        assert by_email is not None and by_email.id == user_id

    @pytest.mark.asyncio
    async def test_grants_join_role_scopes(self, session: AsyncSession):
        user_id = await SQLUserRepository(session).save(User.create("writer@example.com"))
        roles = SQLRoleRepository(session)
        writer = await roles.save(Role(name="writer", scope=AccessScope.WRITE))
        reader = await roles.save(Role(name="reader", scope=AccessScope.READ))
        bindings = SQLUserRoleRepository(session)

        await bindings.save(UserRole.create(user_id, writer, project_id=3))
        await bindings.save(UserRole.create(user_id, reader))

        grants = set(await bindings.get_grants(user_id))

        assert grants == {
            Grant(project_id=3, scope=AccessScope.WRITE),
            Grant(project_id=ALL_PROJECTS, scope=AccessScope.READ),
        }

    @pytest.mark.asyncio
    async def test_duplicate_binding_conflicts(self, session: AsyncSession):
        user_id = await SQLUserRepository(session).save(User.create("dup@example.com"))
        role_id = await SQLRoleRepository(session).save(Role(name="admin", scope=AccessScope.ADMIN))
        bindings = SQLUserRoleRepository(session)
        await bindings.save(UserRole.create(user_id, role_id, project_id=1))

        with pytest.raises(ConflictError):
            await bindings.save(UserRole.create(user_id, role_id, project_id=1))

    @pytest.mark.asyncio
    async def test_deleting_user_removes_bindings(self, session: AsyncSession):
        users = SQLUserRepository(session)
        user_id = await users.save(User.create("gone@example.com"))
        role_id = await SQLRoleRepository(session).save(Role(name="reader", scope=AccessScope.READ))
        bindings = SQLUserRoleRepository(session)
        await bindings.save(UserRole.create(user_id, role_id))

        assert await users.delete(user_id)

        assert await bindings.get_by_user_id(user_id) == []
