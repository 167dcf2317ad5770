import logging
from collections.abc import Sequence

from pulse.domain.project.model.data_source import DataSource
from pulse.domain.project.model.value import DataSourceId
from pulse.domain.project.port.repository import DataSourceRepository
from pulse.domain.record.model.aggregate import Record
from pulse.domain.record.model.criteria import RecordCriteria, build_criteria
from pulse.domain.record.model.value import DimensionFilter, RecordFilter, RecordId
from pulse.domain.record.port.repository import RecordRepository
from pulse.domain.shared.error import InvalidFilterError, NotFoundError, UnknownReferenceError
from pulse.domain.shared.service import Service

logger = logging.getLogger(__name__)


class RecordService(Service):
    """Stores, queries and deletes metric records.

    Every filter is validated against the owning data source's declared
    dimensions before it reaches the repository.
    """

    record_repo: RecordRepository
    data_source_repo: DataSourceRepository

    async def save(self, record: Record) -> RecordId:
        """Persist a record with all of its supplied dimensions.

        Raises:
            UnknownReferenceError: If ``record.data_source_id`` references no data source.
        """
        if await self.data_source_repo.get(record.data_source_id) is None:
            raise UnknownReferenceError(f"Data source does not exist: {record.data_source_id}")

        record_id = await self.record_repo.save(record)
        logger.debug(
            "Record saved: id=%s data_source_id=%s dimensions=%s",
            record_id,
            record.data_source_id,
            sorted(record.dimensions),
        )
        return record_id

    async def get(self, record_id: RecordId) -> Record | None:
        return await self.record_repo.get(record_id)

    async def list(
        self,
        data_source_id: DataSourceId,
        count: int | None = None,
        dimensions: Sequence[DimensionFilter] = (),
    ) -> list[Record]:
        """List records of a data source matching every dimension filter.

        Args:
            data_source_id: Owning data source; must exist.
            count: Maximum number of records, in insertion order. ``None`` means all.
            dimensions: ``{key, value}`` equality constraints, AND-combined.

        Raises:
            NotFoundError: If the data source does not exist.
            InvalidFilterError: If a filter key is not declared or ``count`` is negative.
        """
        if count is not None and count < 0:
            raise InvalidFilterError(f"count must be >= 0, got {count}", field="count")

        criteria = await self._criteria(
            data_source_id, RecordFilter(dimensions=tuple(dimensions))
        )
        return await self.record_repo.find(data_source_id, criteria, limit=count)

    async def count(
        self, data_source_id: DataSourceId, record_filter: RecordFilter | None = None
    ) -> int:
        criteria = await self._criteria(data_source_id, record_filter or RecordFilter())
        return await self.record_repo.count(data_source_id, criteria)

    async def remove(self, record_id: RecordId) -> None:
        """Delete one record. A missing id is not an error."""
        if await self.record_repo.delete(record_id):
            logger.debug("Record removed: id=%s", record_id)

    async def remove_by_filter(
        self, data_source_id: DataSourceId, record_filter: RecordFilter
    ) -> int:
        """Delete records matching the filter and return how many were deleted.

        An empty filter deletes nothing; use :meth:`remove_all` to clear a data source.
        """
        if record_filter.is_empty():
            logger.info("Ignoring delete with empty filter: data_source_id=%s", data_source_id)
            return 0

        criteria = await self._criteria(data_source_id, record_filter)
        deleted = await self.record_repo.delete_matching(data_source_id, criteria)
        logger.info(
            "Records removed by filter: data_source_id=%s deleted=%d", data_source_id, deleted
        )
        return deleted

    async def remove_all(self, data_source_id: DataSourceId) -> int:
        deleted = await self.record_repo.delete_all(data_source_id)
        logger.warning("All records removed: data_source_id=%s deleted=%d", data_source_id, deleted)
        return deleted

    async def _criteria(
        self, data_source_id: DataSourceId, record_filter: RecordFilter
    ) -> RecordCriteria:
        data_source = await self._data_source(data_source_id)
        return build_criteria(data_source, record_filter)

    async def _data_source(self, data_source_id: DataSourceId) -> DataSource:
        data_source = await self.data_source_repo.get(data_source_id)
        if data_source is None:
            raise NotFoundError(f"Data source not found: {data_source_id}")
        return data_source
