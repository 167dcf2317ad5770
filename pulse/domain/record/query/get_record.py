"""GetRecord query handler."""

from typing import Any

from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.project.service.data_source import DataSourceService
from pulse.domain.record.model.aggregate import Record
from pulse.domain.record.model.value import RecordId
from pulse.domain.record.service.record import RecordService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.error import NotFoundError
from pulse.domain.shared.query import Query, QueryHandler, Result


class GetRecord(Query):
    record_id: int


class RecordDetail(Result):
    id: int
    data_source_id: int
    value: float
    year: int
    month: int
    day: int
    dimensions: dict[str, Any]

    @classmethod
    def from_record(cls, record: Record) -> "RecordDetail":
        assert record.id is not None
        return cls(
            id=int(record.id),
            data_source_id=int(record.data_source_id),
            value=record.value,
            year=record.year,
            month=record.month,
            day=record.day,
            dimensions=dict(record.dimensions),
        )

    def flatten(self) -> dict[str, Any]:
        """Dimension fields merged into the fixed fields, as clients expect."""
        fixed = self.model_dump(exclude={"dimensions"})
        return {**self.dimensions, **fixed}


class GetRecordHandler(QueryHandler[GetRecord, RecordDetail]):
    __auth__ = at_least(AccessScope.READ)
    principal: Principal
    record_service: RecordService
    data_source_service: DataSourceService

    async def run(self, cmd: GetRecord) -> RecordDetail:
        record = await self.record_service.get(RecordId(cmd.record_id))
        if record is None:
            raise NotFoundError(f"Record not found: {cmd.record_id}")

        data_source = await self.data_source_service.get(record.data_source_id)
        self.principal.require(AccessScope.READ, int(data_source.project_id))
        return RecordDetail.from_record(record)
