from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from pulse.config import Config
from pulse.domain.auth.port.repository import (
    RoleRepository,
    UserRepository,
    UserRoleRepository,
)
from pulse.domain.project.port.repository import DataSourceRepository, ProjectRepository
from pulse.domain.record.port.repository import RecordRepository
from pulse.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from pulse.infrastructure.persistence.repository.auth import (
    SQLRoleRepository,
    SQLUserRepository,
    SQLUserRoleRepository,
)
from pulse.infrastructure.persistence.repository.project import (
    SQLDataSourceRepository,
    SQLProjectRepository,
)
from pulse.infrastructure.persistence.repository.record import SQLRecordRepository
from pulse.util.di.base import Provider
from pulse.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    # UOW-scoped repositories
    record_repo = provide(SQLRecordRepository, scope=Scope.UOW, provides=RecordRepository)
    project_repo = provide(SQLProjectRepository, scope=Scope.UOW, provides=ProjectRepository)
    data_source_repo = provide(
        SQLDataSourceRepository, scope=Scope.UOW, provides=DataSourceRepository
    )

    # Auth repositories
    user_repo = provide(SQLUserRepository, scope=Scope.UOW, provides=UserRepository)
    role_repo = provide(SQLRoleRepository, scope=Scope.UOW, provides=RoleRepository)
    user_role_repo = provide(SQLUserRoleRepository, scope=Scope.UOW, provides=UserRoleRepository)
