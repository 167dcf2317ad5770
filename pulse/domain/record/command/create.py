"""CreateRecord command and handler."""

from pydantic import Field

from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.project.service.data_source import DataSourceService
from pulse.domain.record.model.aggregate import Record
from pulse.domain.record.model.value import DimensionKey, DimensionValue
from pulse.domain.record.service.record import RecordService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.command import Command, CommandHandler, Result


class CreateRecord(Command):
    project_uuid: str
    key: str
    value: float
    year: int | None = Field(default=None, ge=1)
    month: int | None = Field(default=None, ge=1, le=12)
    day: int | None = Field(default=None, ge=1, le=31)
    dimensions: dict[DimensionKey, DimensionValue] = {}


class RecordCreated(Result):
    id: int


class CreateRecordHandler(CommandHandler[CreateRecord, RecordCreated]):
    __auth__ = at_least(AccessScope.WRITE)
    principal: Principal
    record_service: RecordService
    data_source_service: DataSourceService

    async def run(self, cmd: CreateRecord) -> RecordCreated:
        data_source = await self.data_source_service.resolve(cmd.project_uuid, cmd.key)
        self.principal.require(AccessScope.WRITE, int(data_source.project_id))

        assert data_source.id is not None
        record = Record.create(
            data_source_id=data_source.id,
            value=cmd.value,
            dimensions=cmd.dimensions,
            year=cmd.year,
            month=cmd.month,
            day=cmd.day,
        )
        record_id = await self.record_service.save(record)
        return RecordCreated(id=int(record_id))
