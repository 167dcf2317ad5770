from pulse.domain.auth.command.role import BindingDetail
from pulse.domain.auth.command.user import UserDetail
from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.auth.model.value import ALL_PROJECTS, UserId
from pulse.domain.auth.service.authorization import AuthorizationService
from pulse.domain.auth.service.user import UserService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.query import Query, QueryHandler, Result


class ListUsers(Query):
    pass


class UserList(Result):
    items: list[UserDetail]


class ListUsersHandler(QueryHandler[ListUsers, UserList]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    user_service: UserService

    async def run(self, cmd: ListUsers) -> UserList:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        users = await self.user_service.list()
        return UserList(items=[UserDetail.from_user(u) for u in users])


class GetUserBindings(Query):
    user_id: int


class BindingList(Result):
    items: list[BindingDetail]


class GetUserBindingsHandler(QueryHandler[GetUserBindings, BindingList]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    user_service: UserService
    authorization_service: AuthorizationService

    async def run(self, cmd: GetUserBindings) -> BindingList:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        user = await self.user_service.get(UserId(cmd.user_id))
        assert user.id is not None
        bindings = await self.authorization_service.list_bindings(user.id)
        return BindingList(items=[BindingDetail.from_binding(b) for b in bindings])


class WhoAmI(Query):
    pass


class PrincipalDetail(Result):
    user_id: int
    email: str
    grants: list[dict[str, int]]


class WhoAmIHandler(QueryHandler[WhoAmI, PrincipalDetail]):
    __auth__ = at_least(AccessScope.READ)
    principal: Principal

    async def run(self, cmd: WhoAmI) -> PrincipalDetail:
        return PrincipalDetail(
            user_id=int(self.principal.user_id),
            email=self.principal.email,
            grants=[
                {"project_id": g.project_id, "scope": int(g.scope)}
                for g in sorted(self.principal.grants, key=lambda g: (g.project_id, g.scope))
            ],
        )
