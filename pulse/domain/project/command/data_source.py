"""Data source registration commands. All require ADMIN on the owning project."""

from datetime import datetime
from typing import Any

from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.project.model.data_source import DataSource
from pulse.domain.project.model.value import DataSourceId
from pulse.domain.project.service.data_source import DataSourceService
from pulse.domain.project.service.project import ProjectService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.command import Command, CommandHandler, Result


class DataSourceDetail(Result):
    id: int
    project_id: int
    key: str
    name: str
    config: dict[str, Any]
    created_at: datetime

    @classmethod
    def from_data_source(cls, data_source: DataSource) -> "DataSourceDetail":
        assert data_source.id is not None
        return cls(
            id=int(data_source.id),
            project_id=int(data_source.project_id),
            key=data_source.key,
            name=data_source.name,
            config=data_source.config.model_dump(mode="json"),
            created_at=data_source.created_at,
        )


class CreateDataSource(Command):
    project_uuid: str
    key: str
    name: str
    dimensions: list[dict[str, Any]] = []


class CreateDataSourceHandler(CommandHandler[CreateDataSource, DataSourceDetail]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    project_service: ProjectService
    data_source_service: DataSourceService

    async def run(self, cmd: CreateDataSource) -> DataSourceDetail:
        project = await self.project_service.get_by_uuid(cmd.project_uuid)
        assert project.id is not None
        self.principal.require(AccessScope.ADMIN, int(project.id))

        data_source = await self.data_source_service.create(
            project_id=project.id,
            key=cmd.key,
            name=cmd.name,
            dimensions=cmd.dimensions,
        )
        return DataSourceDetail.from_data_source(data_source)


class UpdateDataSource(Command):
    project_uuid: str
    key: str
    name: str


class UpdateDataSourceHandler(CommandHandler[UpdateDataSource, DataSourceDetail]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    data_source_service: DataSourceService

    async def run(self, cmd: UpdateDataSource) -> DataSourceDetail:
        data_source = await self.data_source_service.resolve(cmd.project_uuid, cmd.key)
        assert data_source.id is not None
        self.principal.require(AccessScope.ADMIN, int(data_source.project_id))

        data_source = await self.data_source_service.rename(data_source.id, cmd.name)
        return DataSourceDetail.from_data_source(data_source)


class DeleteDataSource(Command):
    data_source_id: int


class DataSourceDeleted(Result):
    id: int


class DeleteDataSourceHandler(CommandHandler[DeleteDataSource, DataSourceDeleted]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    data_source_service: DataSourceService

    async def run(self, cmd: DeleteDataSource) -> DataSourceDeleted:
        data_source = await self.data_source_service.get(DataSourceId(cmd.data_source_id))
        assert data_source.id is not None
        self.principal.require(AccessScope.ADMIN, int(data_source.project_id))

        await self.data_source_service.remove(data_source.id)
        return DataSourceDeleted(id=int(data_source.id))
