"""Authorization service: roles and user-role bindings."""

import logging

import pydantic

from pulse.domain.auth.model.role import AccessScope, Role
from pulse.domain.auth.model.user_role import Grant, UserRole
from pulse.domain.auth.model.value import ALL_PROJECTS, RoleId, UserId, UserRoleId
from pulse.domain.auth.port.repository import RoleRepository, UserRepository, UserRoleRepository
from pulse.domain.shared.error import ConflictError, NotFoundError, ValidationError
from pulse.domain.shared.service import Service

logger = logging.getLogger(__name__)


class AuthorizationService(Service):
    """Manages roles and the bindings that attach them to users per project."""

    _role_repo: RoleRepository
    _user_role_repo: UserRoleRepository
    _user_repo: UserRepository

    async def create_role(self, name: str, scope: AccessScope) -> Role:
        """Create a role. Raises ConflictError if the name is taken."""
        try:
            role = Role(name=name, scope=scope)
        except pydantic.ValidationError as e:
            raise ValidationError(str(e), field="name") from e
        if await self._role_repo.get_by_name(role.name) is not None:
            raise ConflictError(f"Role already exists: {role.name}", code="role_exists")
        role.id = await self._role_repo.save(role)
        return role

    async def get_or_create_role(self, name: str, scope: AccessScope) -> Role:
        existing = await self._role_repo.get_by_name(name)
        if existing is not None:
            return existing
        return await self.create_role(name, scope)

    async def list_roles(self) -> list[Role]:
        return await self._role_repo.list()

    async def remove_role(self, role_id: RoleId) -> None:
        if not await self._role_repo.delete(role_id):
            raise NotFoundError(f"Role not found: {role_id}", code="role_not_found")

    async def bind(
        self,
        user_id: UserId,
        role_id: RoleId,
        project_id: int = ALL_PROJECTS,
    ) -> UserRole:
        """Bind a role to a user on a project (0 = all projects)."""
        if await self._user_repo.get(user_id) is None:
            raise NotFoundError(f"User not found: {user_id}")
        if await self._role_repo.get(role_id) is None:
            raise NotFoundError(f"Role not found: {role_id}", code="role_not_found")
        if await self._user_role_repo.find(user_id, role_id, project_id) is not None:
            raise ConflictError(
                f"Role {role_id} already bound to user {user_id} on project {project_id}",
                code="role_already_assigned",
            )

        binding = UserRole.create(user_id=user_id, role_id=role_id, project_id=project_id)
        binding.id = await self._user_role_repo.save(binding)
        logger.info(
            "Role bound: user_id=%s role_id=%s project_id=%s", user_id, role_id, project_id
        )
        return binding

    async def unbind(self, binding_id: UserRoleId) -> None:
        if not await self._user_role_repo.delete(binding_id):
            raise NotFoundError(f"Role binding not found: {binding_id}", code="role_not_found")

    async def list_bindings(self, user_id: UserId) -> list[UserRole]:
        return await self._user_role_repo.get_by_user_id(user_id)

    async def grants_for(self, user_id: UserId) -> frozenset[Grant]:
        return frozenset(await self._user_role_repo.get_grants(user_id))
