from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.project.command.data_source import DataSourceDetail
from pulse.domain.project.service.data_source import DataSourceService
from pulse.domain.project.service.project import ProjectService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.query import Query, QueryHandler, Result


class GetDataSource(Query):
    project_uuid: str
    key: str


class GetDataSourceHandler(QueryHandler[GetDataSource, DataSourceDetail]):
    __auth__ = at_least(AccessScope.READ)
    principal: Principal
    data_source_service: DataSourceService

    async def run(self, cmd: GetDataSource) -> DataSourceDetail:
        data_source = await self.data_source_service.resolve(cmd.project_uuid, cmd.key)
        self.principal.require(AccessScope.READ, int(data_source.project_id))
        return DataSourceDetail.from_data_source(data_source)


class ListDataSources(Query):
    project_uuid: str


class DataSourceList(Result):
    items: list[DataSourceDetail]


class ListDataSourcesHandler(QueryHandler[ListDataSources, DataSourceList]):
    __auth__ = at_least(AccessScope.READ)
    principal: Principal
    project_service: ProjectService
    data_source_service: DataSourceService

    async def run(self, cmd: ListDataSources) -> DataSourceList:
        project = await self.project_service.get_by_uuid(cmd.project_uuid)
        assert project.id is not None
        self.principal.require(AccessScope.READ, int(project.id))

        data_sources = await self.data_source_service.list(project.id)
        return DataSourceList(items=[DataSourceDetail.from_data_source(d) for d in data_sources])
