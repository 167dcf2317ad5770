"""Record aggregate - one immutable metric observation."""

from datetime import UTC, date, datetime
from typing import Any

from pydantic import Field

from pulse.domain.project.model.value import DataSourceId
from pulse.domain.record.model.value import DimensionKey, DimensionValue, RecordId
from pulse.domain.shared.model.aggregate import Aggregate

FIXED_FIELDS = ("id", "data_source_id", "value", "year", "month", "day")


class Record(Aggregate):
    """A numeric observation for a data source on a given day.

    ``dimensions`` carries whatever dimension fields were supplied at ingestion;
    they are not checked against the data source schema on write.
    """

    id: RecordId | None = None
    data_source_id: DataSourceId
    value: float
    year: int = Field(ge=1)
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)
    dimensions: dict[DimensionKey, DimensionValue] = {}

    @classmethod
    def create(
        cls,
        data_source_id: DataSourceId,
        value: float,
        dimensions: dict[str, Any] | None = None,
        year: int | None = None,
        month: int | None = None,
        day: int | None = None,
    ) -> "Record":
        """Build a new record; missing date components default to today (UTC)."""
        today: date = datetime.now(UTC).date()
        return cls(
            data_source_id=data_source_id,
            value=value,
            year=year if year is not None else today.year,
            month=month if month is not None else today.month,
            day=day if day is not None else today.day,
            dimensions=dimensions or {},
        )

    def flatten(self) -> dict[str, Any]:
        """Fixed fields and dimension fields as one flat mapping."""
        return {
            **self.dimensions,
            "id": int(self.id) if self.id is not None else None,
            "data_source_id": int(self.data_source_id),
            "value": self.value,
            "year": self.year,
            "month": self.month,
            "day": self.day,
        }
