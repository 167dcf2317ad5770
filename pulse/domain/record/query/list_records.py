from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.project.model.value import DataSourceId
from pulse.domain.project.service.data_source import DataSourceService
from pulse.domain.record.model.value import DimensionFilter, RecordFilter
from pulse.domain.record.query.get_record import RecordDetail
from pulse.domain.record.service.record import RecordService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.query import Query, QueryHandler, Result


class ListRecords(Query):
    data_source_id: int
    count: int | None = None
    dimensions: list[DimensionFilter] = []


class RecordList(Result):
    items: list[RecordDetail]


class ListRecordsHandler(QueryHandler[ListRecords, RecordList]):
    __auth__ = at_least(AccessScope.READ)
    principal: Principal
    record_service: RecordService
    data_source_service: DataSourceService

    async def run(self, cmd: ListRecords) -> RecordList:
        data_source_id = DataSourceId(cmd.data_source_id)
        data_source = await self.data_source_service.get(data_source_id)
        self.principal.require(AccessScope.READ, int(data_source.project_id))

        records = await self.record_service.list(
            data_source_id, count=cmd.count, dimensions=cmd.dimensions
        )
        return RecordList(items=[RecordDetail.from_record(r) for r in records])


class CountRecords(Query):
    data_source_id: int
    year: int | None = None
    month: int | None = None
    day: int | None = None
    dimensions: list[DimensionFilter] = []


class RecordCount(Result):
    count: int


class CountRecordsHandler(QueryHandler[CountRecords, RecordCount]):
    __auth__ = at_least(AccessScope.READ)
    principal: Principal
    record_service: RecordService
    data_source_service: DataSourceService

    async def run(self, cmd: CountRecords) -> RecordCount:
        data_source_id = DataSourceId(cmd.data_source_id)
        data_source = await self.data_source_service.get(data_source_id)
        self.principal.require(AccessScope.READ, int(data_source.project_id))

        count = await self.record_service.count(
            data_source_id,
            RecordFilter(
                year=cmd.year,
                month=cmd.month,
                day=cmd.day,
                dimensions=tuple(cmd.dimensions),
            ),
        )
        return RecordCount(count=count)
