"""Record deletion commands: by id, by filter, and purge of a whole data source."""

from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.project.service.data_source import DataSourceService
from pulse.domain.record.model.value import DimensionFilter, RecordFilter, RecordId
from pulse.domain.record.service.record import RecordService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.command import Command, CommandHandler, Result
from pulse.domain.shared.error import NotFoundError


class RecordsDeleted(Result):
    deleted: int


class DeleteRecord(Command):
    record_id: int


class DeleteRecordHandler(CommandHandler[DeleteRecord, RecordsDeleted]):
    __auth__ = at_least(AccessScope.WRITE)
    principal: Principal
    record_service: RecordService
    data_source_service: DataSourceService

    async def run(self, cmd: DeleteRecord) -> RecordsDeleted:
        record_id = RecordId(cmd.record_id)
        record = await self.record_service.get(record_id)
        if record is None:
            raise NotFoundError(f"Record not found: {cmd.record_id}")

        data_source = await self.data_source_service.get(record.data_source_id)
        self.principal.require(AccessScope.WRITE, int(data_source.project_id))

        await self.record_service.remove(record_id)
        return RecordsDeleted(deleted=1)


class DeleteRecords(Command):
    project_uuid: str
    key: str
    year: int | None = None
    month: int | None = None
    day: int | None = None
    dimensions: list[DimensionFilter] = []


class DeleteRecordsHandler(CommandHandler[DeleteRecords, RecordsDeleted]):
    __auth__ = at_least(AccessScope.WRITE)
    principal: Principal
    record_service: RecordService
    data_source_service: DataSourceService

    async def run(self, cmd: DeleteRecords) -> RecordsDeleted:
        data_source = await self.data_source_service.resolve(cmd.project_uuid, cmd.key)
        self.principal.require(AccessScope.WRITE, int(data_source.project_id))

        assert data_source.id is not None
        deleted = await self.record_service.remove_by_filter(
            data_source.id,
            RecordFilter(
                year=cmd.year,
                month=cmd.month,
                day=cmd.day,
                dimensions=tuple(cmd.dimensions),
            ),
        )
        return RecordsDeleted(deleted=deleted)


class PurgeRecords(Command):
    project_uuid: str
    key: str


class PurgeRecordsHandler(CommandHandler[PurgeRecords, RecordsDeleted]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    record_service: RecordService
    data_source_service: DataSourceService

    async def run(self, cmd: PurgeRecords) -> RecordsDeleted:
        data_source = await self.data_source_service.resolve(cmd.project_uuid, cmd.key)
        self.principal.require(AccessScope.ADMIN, int(data_source.project_id))

        assert data_source.id is not None
        deleted = await self.record_service.remove_all(data_source.id)
        return RecordsDeleted(deleted=deleted)
