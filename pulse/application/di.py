from dishka import AsyncContainer, from_context, make_async_container

from pulse.cli.util.paths import PulsePaths
from pulse.config import Config
from pulse.domain.auth.util.di.provider import AuthProvider
from pulse.domain.project.util.di.provider import ProjectProvider
from pulse.domain.record.util.di.provider import RecordProvider
from pulse.infrastructure.persistence.di import PersistenceProvider
from pulse.util.di.base import Provider
from pulse.util.di.scope import Scope


class ContextProvider(Provider):
    """Values handed to the container at construction time."""

    config = from_context(provides=Config, scope=Scope.APP)
    paths = from_context(provides=PulsePaths, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # PulsePaths reads PULSE_DATA_DIR from environment automatically
    paths = PulsePaths()

    return make_async_container(
        ContextProvider(),
        PersistenceProvider(),
        AuthProvider(),
        ProjectProvider(),
        RecordProvider(),
        context={Config: config, PulsePaths: paths},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
