"""RecordRepository port - persistence interface for records."""

from abc import abstractmethod
from typing import Protocol

from pulse.domain.project.model.value import DataSourceId
from pulse.domain.record.model.aggregate import Record
from pulse.domain.record.model.criteria import RecordCriteria
from pulse.domain.record.model.value import RecordId
from pulse.domain.shared.port import Port


class RecordRepository(Port, Protocol):
    @abstractmethod
    async def save(self, record: Record) -> RecordId:
        """Insert a record and its dimensions. Records are immutable, so this is insert-only.

        Raises:
            UnknownReferenceError: If the data source does not exist.
        """
        ...

    @abstractmethod
    async def get(self, record_id: RecordId) -> Record | None: ...

    @abstractmethod
    async def find(
        self,
        data_source_id: DataSourceId,
        criteria: RecordCriteria,
        limit: int | None = None,
    ) -> list[Record]:
        """Matching records in insertion order, at most ``limit`` of them."""
        ...

    @abstractmethod
    async def count(self, data_source_id: DataSourceId, criteria: RecordCriteria) -> int: ...

    @abstractmethod
    async def delete(self, record_id: RecordId) -> bool:
        """Delete one record. Returns False if it did not exist."""
        ...

    @abstractmethod
    async def delete_matching(self, data_source_id: DataSourceId, criteria: RecordCriteria) -> int:
        """Delete matching records. Empty criteria delete nothing. Returns the row count."""
        ...

    @abstractmethod
    async def delete_all(self, data_source_id: DataSourceId) -> int:
        """Delete every record of a data source. Returns the row count."""
        ...
