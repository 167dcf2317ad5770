"""DI provider for auth domain."""

import logging

import jwt
from dishka import from_context, provide
from starlette.requests import Request

from pulse.config import Config
from pulse.domain.auth.command.role import (
    BindRoleHandler,
    CreateRoleHandler,
    DeleteRoleHandler,
    UnbindRoleHandler,
)
from pulse.domain.auth.command.token import IssueTokenHandler
from pulse.domain.auth.command.user import CreateUserHandler, DeleteUserHandler
from pulse.domain.auth.model.identity import Anonymous, Identity
from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.value import UserId
from pulse.domain.auth.port.repository import (
    UserRepository,
    UserRoleRepository,
)
from pulse.domain.auth.query.role import ListRolesHandler
from pulse.domain.auth.query.user import GetUserBindingsHandler, ListUsersHandler, WhoAmIHandler
from pulse.domain.auth.service.authorization import AuthorizationService
from pulse.domain.auth.service.token import TokenService
from pulse.domain.auth.service.user import UserService
from pulse.domain.shared.error import AuthorizationError
from pulse.util.di.base import Provider
from pulse.util.di.scope import Scope

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_token(request: Request, allow_query_token: bool) -> str | None:
    """Read the access token from the Authorization header, then ``?token=``."""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith(BEARER_PREFIX):
        return auth_header[len(BEARER_PREFIX) :]
    if allow_query_token:
        return request.query_params.get("token") or None
    return None


class AuthProvider(Provider):
    """DI provider for auth domain services and handlers."""

    request = from_context(provides=Request, scope=Scope.UOW)

    # Command Handlers
    create_user_handler = provide(CreateUserHandler, scope=Scope.UOW)
    delete_user_handler = provide(DeleteUserHandler, scope=Scope.UOW)
    create_role_handler = provide(CreateRoleHandler, scope=Scope.UOW)
    delete_role_handler = provide(DeleteRoleHandler, scope=Scope.UOW)
    bind_role_handler = provide(BindRoleHandler, scope=Scope.UOW)
    unbind_role_handler = provide(UnbindRoleHandler, scope=Scope.UOW)
    issue_token_handler = provide(IssueTokenHandler, scope=Scope.UOW)

    # Query Handlers
    list_users_handler = provide(ListUsersHandler, scope=Scope.UOW)
    list_roles_handler = provide(ListRolesHandler, scope=Scope.UOW)
    get_user_bindings_handler = provide(GetUserBindingsHandler, scope=Scope.UOW)
    who_am_i_handler = provide(WhoAmIHandler, scope=Scope.UOW)

    # Services
    user_service = provide(UserService, scope=Scope.UOW)
    authorization_service = provide(AuthorizationService, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_token_service(self, config: Config) -> TokenService:
        return TokenService(_config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    async def get_identity(
        self,
        request: Request,
        config: Config,
        token_service: TokenService,
        user_repo: UserRepository,
        user_role_repo: UserRoleRepository,
    ) -> Identity:
        """Resolve Identity from the access token and the user's role bindings.

        Returns Anonymous for unauthenticated requests, Principal for authenticated.
        """
        token = extract_token(request, config.auth.allow_query_token)
        if token is None:
            return Anonymous()

        try:
            payload = token_service.validate_access_token(token)
            user_id = UserId(int(payload["sub"]))
        except (jwt.InvalidTokenError, KeyError, ValueError) as e:
            logger.debug("Rejected access token: %s", e)
            return Anonymous()

        user = await user_repo.get(user_id)
        if user is None:
            logger.debug("Access token for unknown user: user_id=%s", user_id)
            return Anonymous()

        grants = frozenset(await user_role_repo.get_grants(user_id))
        logger.debug("Identity resolved: user_id=%s, grants=%d", user_id, len(grants))
        return Principal(user_id=user_id, email=user.email, grants=grants)

    @provide(scope=Scope.UOW)
    def get_principal(self, identity: Identity) -> Principal:
        """Extract Principal from Identity. Raises if not authenticated."""
        if isinstance(identity, Principal):
            return identity
        raise AuthorizationError("Authentication required", code="missing_token")
