"""Administrative commands that act directly on the configured database."""

import asyncio

import cyclopts
from dishka import AsyncContainer
from sqlalchemy.ext.asyncio import AsyncEngine

from pulse.application.di import create_container
from pulse.cli.console import get_console
from pulse.config import Config, configure_logging
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.auth.model.value import ALL_PROJECTS
from pulse.domain.auth.service.authorization import AuthorizationService
from pulse.domain.auth.service.token import TokenService
from pulse.domain.auth.service.user import UserService
from pulse.domain.shared.error import PulseError
from pulse.infrastructure.persistence.database import create_tables
from pulse.util.di.scope import Scope

app = cyclopts.App(name="admin", help="Administrative commands")

ADMIN_ROLE = "admin"


async def bootstrap_admin(container: AsyncContainer, email: str) -> str:
    """Ensure an admin user with a global ADMIN binding exists and return a token for it.

    Safe to run repeatedly: existing user, role and binding are reused.
    """
    config = await container.get(Config)
    if config.database.auto_create:
        await create_tables(await container.get(AsyncEngine))

    async with container(scope=Scope.UOW) as uow:
        user_service = await uow.get(UserService)
        authorization_service = await uow.get(AuthorizationService)
        token_service = await uow.get(TokenService)

        user = await user_service.get_or_create(email)
        role = await authorization_service.get_or_create_role(ADMIN_ROLE, AccessScope.ADMIN)
        assert user.id is not None and role.id is not None

        bindings = await authorization_service.list_bindings(user.id)
        if not any(b.role_id == role.id and b.project_id == ALL_PROJECTS for b in bindings):
            await authorization_service.bind(user.id, role.id, ALL_PROJECTS)

        return token_service.create_access_token(user)


async def issue_user_token(container: AsyncContainer, email: str) -> str:
    async with container(scope=Scope.UOW) as uow:
        user_service = await uow.get(UserService)
        token_service = await uow.get(TokenService)
        user = await user_service.get_or_create(email)
        return token_service.create_access_token(user)


def _run(operation, email: str) -> str:
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)

    async def _main() -> str:
        container = create_container(config)
        try:
            return await operation(container, email)
        finally:
            await container.close()

    return asyncio.run(_main())


@app.command
def bootstrap(email: str) -> None:
    """Create the first admin user and print an access token.

    Args:
        email: Email address of the admin user.
    """
    console = get_console()
    try:
        token = _run(bootstrap_admin, email)
    except PulseError as e:
        console.error(e.message)
        raise SystemExit(1) from e

    console.success(f"Admin ready: {email}")
    console.print(token, soft_wrap=True)


@app.command
def token(email: str) -> None:
    """Print a fresh access token for a user, creating the user if needed.

    The user gets no role bindings; grant them with the admin API.

    Args:
        email: Email address of the user.
    """
    console = get_console()
    try:
        access_token = _run(issue_user_token, email)
    except PulseError as e:
        console.error(e.message)
        raise SystemExit(1) from e

    console.print(access_token, soft_wrap=True)
