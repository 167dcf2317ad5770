"""IssueToken command - mint an access token on behalf of a user."""

from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.auth.model.value import ALL_PROJECTS, UserId
from pulse.domain.auth.service.token import TokenService
from pulse.domain.auth.service.user import UserService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.command import Command, CommandHandler, Result


class IssueToken(Command):
    user_id: int


class TokenIssued(Result):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class IssueTokenHandler(CommandHandler[IssueToken, TokenIssued]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    user_service: UserService
    token_service: TokenService

    async def run(self, cmd: IssueToken) -> TokenIssued:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        user = await self.user_service.get(UserId(cmd.user_id))
        return TokenIssued(
            access_token=self.token_service.create_access_token(user),
            expires_in=self.token_service.access_token_expire_seconds,
        )
