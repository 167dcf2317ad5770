"""Repository ports for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from pulse.domain.auth.model.role import Role
from pulse.domain.auth.model.user import User
from pulse.domain.auth.model.user_role import Grant, UserRole
from pulse.domain.auth.model.value import RoleId, UserId, UserRoleId
from pulse.domain.shared.port import Port


class UserRepository(Port, Protocol):
    """Repository for User aggregate persistence."""

    @abstractmethod
    async def get(self, user_id: UserId) -> User | None:
        """Get a user by ID."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email."""
        ...

    @abstractmethod
    async def list(self) -> list[User]:
        """List all users in id order."""
        ...

    @abstractmethod
    async def save(self, user: User) -> UserId:
        """Insert a new user. Returns the assigned ID."""
        ...

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user. Returns True if deleted, False if not found."""
        ...


class RoleRepository(Port, Protocol):
    """Repository for Role persistence."""

    @abstractmethod
    async def get(self, role_id: RoleId) -> Role | None: ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Role | None: ...

    @abstractmethod
    async def list(self) -> list[Role]: ...

    @abstractmethod
    async def save(self, role: Role) -> RoleId: ...

    @abstractmethod
    async def delete(self, role_id: RoleId) -> bool: ...


class UserRoleRepository(Port, Protocol):
    """Repository for user-role bindings."""

    @abstractmethod
    async def get(self, binding_id: UserRoleId) -> UserRole | None: ...

    @abstractmethod
    async def find(self, user_id: UserId, role_id: RoleId, project_id: int) -> UserRole | None:
        """Get the binding for an exact (user, role, project) triple."""
        ...

    @abstractmethod
    async def get_by_user_id(self, user_id: UserId) -> list[UserRole]: ...

    @abstractmethod
    async def get_grants(self, user_id: UserId) -> list[Grant]:
        """Resolve a user's bindings into (project, scope) grants."""
        ...

    @abstractmethod
    async def save(self, binding: UserRole) -> UserRoleId: ...

    @abstractmethod
    async def delete(self, binding_id: UserRoleId) -> bool: ...
