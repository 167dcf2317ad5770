"""Role and role-binding commands."""

from datetime import datetime

from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope, Role
from pulse.domain.auth.model.user_role import UserRole
from pulse.domain.auth.model.value import ALL_PROJECTS, RoleId, UserId, UserRoleId
from pulse.domain.auth.service.authorization import AuthorizationService
from pulse.domain.project.service.project import ProjectService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.command import Command, CommandHandler, Result


class RoleDetail(Result):
    id: int
    name: str
    scope: AccessScope

    @classmethod
    def from_role(cls, role: Role) -> "RoleDetail":
        assert role.id is not None
        return cls(id=int(role.id), name=role.name, scope=role.scope)


class BindingDetail(Result):
    id: int
    user_id: int
    role_id: int
    project_id: int
    assigned_at: datetime

    @classmethod
    def from_binding(cls, binding: UserRole) -> "BindingDetail":
        assert binding.id is not None
        return cls(
            id=int(binding.id),
            user_id=int(binding.user_id),
            role_id=int(binding.role_id),
            project_id=binding.project_id,
            assigned_at=binding.assigned_at,
        )


class CreateRole(Command):
    name: str
    scope: AccessScope


class CreateRoleHandler(CommandHandler[CreateRole, RoleDetail]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    authorization_service: AuthorizationService

    async def run(self, cmd: CreateRole) -> RoleDetail:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        role = await self.authorization_service.create_role(cmd.name, cmd.scope)
        return RoleDetail.from_role(role)


class DeleteRole(Command):
    role_id: int


class RoleDeleted(Result):
    id: int


class DeleteRoleHandler(CommandHandler[DeleteRole, RoleDeleted]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    authorization_service: AuthorizationService

    async def run(self, cmd: DeleteRole) -> RoleDeleted:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        await self.authorization_service.remove_role(RoleId(cmd.role_id))
        return RoleDeleted(id=cmd.role_id)


class BindRole(Command):
    """Bind a role to a user; without ``project_uuid`` the binding covers every project."""

    user_id: int
    role_id: int
    project_uuid: str | None = None


class BindRoleHandler(CommandHandler[BindRole, BindingDetail]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    authorization_service: AuthorizationService
    project_service: ProjectService

    async def run(self, cmd: BindRole) -> BindingDetail:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)

        project_id = ALL_PROJECTS
        if cmd.project_uuid is not None:
            project = await self.project_service.get_by_uuid(cmd.project_uuid)
            assert project.id is not None
            project_id = int(project.id)

        binding = await self.authorization_service.bind(
            user_id=UserId(cmd.user_id),
            role_id=RoleId(cmd.role_id),
            project_id=project_id,
        )
        return BindingDetail.from_binding(binding)


class UnbindRole(Command):
    binding_id: int


class BindingRemoved(Result):
    id: int


class UnbindRoleHandler(CommandHandler[UnbindRole, BindingRemoved]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    authorization_service: AuthorizationService

    async def run(self, cmd: UnbindRole) -> BindingRemoved:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        await self.authorization_service.unbind(UserRoleId(cmd.binding_id))
        return BindingRemoved(id=cmd.binding_id)
