from pulse.domain.auth.command.role import RoleDetail
from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.auth.model.value import ALL_PROJECTS
from pulse.domain.auth.service.authorization import AuthorizationService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.query import Query, QueryHandler, Result


class ListRoles(Query):
    pass


class RoleList(Result):
    items: list[RoleDetail]


class ListRolesHandler(QueryHandler[ListRoles, RoleList]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    authorization_service: AuthorizationService

    async def run(self, cmd: ListRoles) -> RoleList:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        roles = await self.authorization_service.list_roles()
        return RoleList(items=[RoleDetail.from_role(r) for r in roles])
