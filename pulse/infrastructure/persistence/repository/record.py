"""SQL implementation of RecordRepository.

Dimension filters compile to one correlated ``EXISTS`` per dimension against
``record_dimensions``; dimension keys are bound parameters, never identifiers.
"""

from collections import defaultdict
from typing import Any

from sqlalchemy import ColumnElement, delete, func, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.domain.project.model.value import DataSourceId
from pulse.domain.record.model.aggregate import Record
from pulse.domain.record.model.criteria import RecordCriteria
from pulse.domain.record.model.value import RecordId
from pulse.domain.record.port.repository import RecordRepository
from pulse.domain.shared.error import UnknownReferenceError
from pulse.infrastructure.persistence.mappers.record import (
    dimensions_to_rows,
    encode_dimension_value,
    record_to_dict,
    row_to_record,
)
from pulse.infrastructure.persistence.tables import record_dimensions_table, records_table


def _where(data_source_id: DataSourceId, criteria: RecordCriteria) -> list[ColumnElement[bool]]:
    """Build the AND-ed predicate list for a data source and validated criteria."""
    clauses: list[ColumnElement[bool]] = [records_table.c.data_source_id == int(data_source_id)]

    for column, value in criteria.columns:
        clauses.append(records_table.c[column] == value)

    for key, value in criteria.dimensions:
        clauses.append(
            select(record_dimensions_table.c.record_id)
            .where(
                record_dimensions_table.c.record_id == records_table.c.id,
                record_dimensions_table.c.key == key,
                record_dimensions_table.c.value == encode_dimension_value(value),
            )
            .correlate(records_table)
            .exists()
        )

    return clauses


class SQLRecordRepository(RecordRepository):
    """SQLAlchemy Core implementation of RecordRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, record: Record) -> RecordId:
        try:
            result = await self.session.execute(
                insert(records_table).values(**record_to_dict(record))
            )
        except IntegrityError as e:
            raise UnknownReferenceError(
                f"Data source does not exist: {record.data_source_id}"
            ) from e

        record_id = result.inserted_primary_key[0]
        if record.dimensions:
            await self.session.execute(
                insert(record_dimensions_table),
                dimensions_to_rows(record_id, record.dimensions),
            )
        await self.session.flush()
        return RecordId(record_id)

    async def get(self, record_id: RecordId) -> Record | None:
        stmt = select(records_table).where(records_table.c.id == int(record_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            return None
        dimensions = await self._dimensions_for([row["id"]])
        return row_to_record(dict(row), dimensions[row["id"]])

    async def find(
        self,
        data_source_id: DataSourceId,
        criteria: RecordCriteria,
        limit: int | None = None,
    ) -> list[Record]:
        stmt = (
            select(records_table)
            .where(*_where(data_source_id, criteria))
            .order_by(records_table.c.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        if not rows:
            return []

        dimensions = await self._dimensions_for([r["id"] for r in rows])
        return [row_to_record(dict(r), dimensions[r["id"]]) for r in rows]

    async def count(self, data_source_id: DataSourceId, criteria: RecordCriteria) -> int:
        stmt = (
            select(func.count())
            .select_from(records_table)
            .where(*_where(data_source_id, criteria))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def delete(self, record_id: RecordId) -> bool:
        stmt = delete(records_table).where(records_table.c.id == int(record_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def delete_matching(self, data_source_id: DataSourceId, criteria: RecordCriteria) -> int:
        if criteria.is_empty():
            return 0

        stmt = delete(records_table).where(*_where(data_source_id, criteria))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_all(self, data_source_id: DataSourceId) -> int:
        stmt = delete(records_table).where(records_table.c.data_source_id == int(data_source_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def _dimensions_for(self, record_ids: list[int]) -> dict[int, list[dict[str, Any]]]:
        stmt = select(record_dimensions_table).where(
            record_dimensions_table.c.record_id.in_(record_ids)
        )
        result = await self.session.execute(stmt)
        grouped: dict[int, list[dict[str, Any]]] = defaultdict(list)
        for row in result.mappings().all():
            grouped[row["record_id"]].append(dict(row))
        return grouped
