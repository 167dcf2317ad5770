"""SQL repository implementations for the auth domain."""

from datetime import datetime
from typing import Any

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.domain.auth.model.role import AccessScope, Role
from pulse.domain.auth.model.user import User
from pulse.domain.auth.model.user_role import Grant, UserRole
from pulse.domain.auth.model.value import RoleId, UserId, UserRoleId
from pulse.domain.auth.port.repository import (
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)
from pulse.domain.shared.error import ConflictError
from pulse.infrastructure.persistence.tables import roles_table, user_roles_table, users_table


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


def _row_to_user(row: dict) -> User:
    """Convert a database row to a User model."""
    return User(id=UserId(row["id"]), email=row["email"], created_at=_as_datetime(row["created_at"]))


def _row_to_role(row: dict) -> Role:
    return Role(id=RoleId(row["id"]), name=row["name"], scope=AccessScope(row["scope"]))


def _row_to_user_role(row: dict) -> UserRole:
    return UserRole(
        id=UserRoleId(row["id"]),
        user_id=UserId(row["user_id"]),
        role_id=RoleId(row["role_id"]),
        project_id=row["project_id"],
        assigned_at=_as_datetime(row["assigned_at"]),
    )


class SQLUserRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: UserId) -> User | None:
        stmt = select(users_table).where(users_table.c.id == int(user_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user(dict(row)) if row else None

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(users_table).where(users_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user(dict(row)) if row else None

    async def list(self) -> list[User]:
        stmt = select(users_table).order_by(users_table.c.id)
        result = await self.session.execute(stmt)
        return [_row_to_user(dict(row)) for row in result.mappings().all()]

    async def save(self, user: User) -> UserId:
        if user.id is not None:
            # Users have no mutable fields
            return user.id

        try:
            result = await self.session.execute(
                insert(users_table).values(email=user.email, created_at=user.created_at)
            )
        except IntegrityError as e:
            raise ConflictError(f"User already exists: {user.email}", code="user_exists") from e
        await self.session.flush()
        return UserId(result.inserted_primary_key[0])

    async def delete(self, user_id: UserId) -> bool:
        stmt = delete(users_table).where(users_table.c.id == int(user_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0


class SQLRoleRepository(RoleRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, role_id: RoleId) -> Role | None:
        stmt = select(roles_table).where(roles_table.c.id == int(role_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_role(dict(row)) if row else None

    async def get_by_name(self, name: str) -> Role | None:
        stmt = select(roles_table).where(roles_table.c.name == name)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_role(dict(row)) if row else None

    async def list(self) -> list[Role]:
        stmt = select(roles_table).order_by(roles_table.c.id)
        result = await self.session.execute(stmt)
        return [_row_to_role(dict(row)) for row in result.mappings().all()]

    async def save(self, role: Role) -> RoleId:
        if role.id is not None:
            return role.id

        try:
            result = await self.session.execute(
                insert(roles_table).values(name=role.name, scope=int(role.scope))
            )
        except IntegrityError as e:
            raise ConflictError(f"Role already exists: {role.name}", code="role_exists") from e
        await self.session.flush()
        return RoleId(result.inserted_primary_key[0])

    async def delete(self, role_id: RoleId) -> bool:
        stmt = delete(roles_table).where(roles_table.c.id == int(role_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0


class SQLUserRoleRepository(UserRoleRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, binding_id: UserRoleId) -> UserRole | None:
        stmt = select(user_roles_table).where(user_roles_table.c.id == int(binding_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user_role(dict(row)) if row else None

    async def find(self, user_id: UserId, role_id: RoleId, project_id: int) -> UserRole | None:
        stmt = select(user_roles_table).where(
            user_roles_table.c.user_id == int(user_id),
            user_roles_table.c.role_id == int(role_id),
            user_roles_table.c.project_id == project_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user_role(dict(row)) if row else None

    async def get_by_user_id(self, user_id: UserId) -> list[UserRole]:
        stmt = (
            select(user_roles_table)
            .where(user_roles_table.c.user_id == int(user_id))
            .order_by(user_roles_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [_row_to_user_role(dict(row)) for row in result.mappings().all()]

    async def get_grants(self, user_id: UserId) -> list[Grant]:
        stmt = (
            select(user_roles_table.c.project_id, roles_table.c.scope)
            .join(roles_table, roles_table.c.id == user_roles_table.c.role_id)
            .where(user_roles_table.c.user_id == int(user_id))
        )
        result = await self.session.execute(stmt)
        return [
            Grant(project_id=row["project_id"], scope=AccessScope(row["scope"]))
            for row in result.mappings().all()
        ]

    async def save(self, binding: UserRole) -> UserRoleId:
        if binding.id is not None:
            return binding.id

        try:
            result = await self.session.execute(
                insert(user_roles_table).values(
                    user_id=int(binding.user_id),
                    role_id=int(binding.role_id),
                    project_id=binding.project_id,
                    assigned_at=binding.assigned_at,
                )
            )
        except IntegrityError as e:
            raise ConflictError(
                f"Role {binding.role_id} already bound to user {binding.user_id}",
                code="role_already_assigned",
            ) from e
        await self.session.flush()
        return UserRoleId(result.inserted_primary_key[0])

    async def delete(self, binding_id: UserRoleId) -> bool:
        stmt = delete(user_roles_table).where(user_roles_table.c.id == int(binding_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
