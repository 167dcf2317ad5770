from dishka import provide

from pulse.domain.record.command.create import CreateRecordHandler
from pulse.domain.record.command.delete import (
    DeleteRecordHandler,
    DeleteRecordsHandler,
    PurgeRecordsHandler,
)
from pulse.domain.record.query.get_record import GetRecordHandler
from pulse.domain.record.query.list_records import CountRecordsHandler, ListRecordsHandler
from pulse.domain.record.service.record import RecordService
from pulse.util.di.base import Provider
from pulse.util.di.scope import Scope


class RecordProvider(Provider):
    service = provide(RecordService, scope=Scope.UOW)

    # Command Handlers
    create_handler = provide(CreateRecordHandler, scope=Scope.UOW)
    delete_handler = provide(DeleteRecordHandler, scope=Scope.UOW)
    delete_by_filter_handler = provide(DeleteRecordsHandler, scope=Scope.UOW)
    purge_handler = provide(PurgeRecordsHandler, scope=Scope.UOW)

    # Query Handlers
    get_handler = provide(GetRecordHandler, scope=Scope.UOW)
    list_handler = provide(ListRecordsHandler, scope=Scope.UOW)
    count_handler = provide(CountRecordsHandler, scope=Scope.UOW)
