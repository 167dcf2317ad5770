"""User administration commands."""

from datetime import datetime

from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.auth.model.user import User
from pulse.domain.auth.model.value import ALL_PROJECTS, UserId
from pulse.domain.auth.service.user import UserService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.command import Command, CommandHandler, Result


class UserDetail(Result):
    id: int
    email: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserDetail":
        assert user.id is not None
        return cls(id=int(user.id), email=user.email, created_at=user.created_at)


class CreateUser(Command):
    email: str


class CreateUserHandler(CommandHandler[CreateUser, UserDetail]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    user_service: UserService

    async def run(self, cmd: CreateUser) -> UserDetail:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        user = await self.user_service.create(cmd.email)
        return UserDetail.from_user(user)


class DeleteUser(Command):
    user_id: int


class UserDeleted(Result):
    id: int


class DeleteUserHandler(CommandHandler[DeleteUser, UserDeleted]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    user_service: UserService

    async def run(self, cmd: DeleteUser) -> UserDeleted:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        await self.user_service.remove(UserId(cmd.user_id))
        return UserDeleted(id=cmd.user_id)
