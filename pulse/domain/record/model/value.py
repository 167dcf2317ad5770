"""Value objects for the record domain."""

from typing import Annotated

from pydantic import Field, StrictBool, StrictFloat, StrictInt, StrictStr, StringConstraints

from pulse.domain.shared.model.value import IntId, ValueObject

MAX_DIMENSION_KEY_LENGTH = 64

DimensionKey = Annotated[str, StringConstraints(min_length=1, max_length=MAX_DIMENSION_KEY_LENGTH)]
"""Any non-empty key up to the stored column width; undeclared keys are allowed on write."""

DimensionValue = StrictStr | StrictBool | StrictInt | StrictFloat | None
"""A dimension holds a JSON scalar; containers are not filterable."""


class RecordId(IntId):
    """Unique identifier for a Record."""


class DimensionFilter(ValueObject):
    """Equality constraint on one dimension (or fixed column) of a record."""

    key: str = Field(min_length=1)
    value: DimensionValue


class RecordFilter(ValueObject):
    """Equality constraints used to narrow a listing, count or deletion.

    Date components and dimension entries are AND-combined; omitted fields
    impose no constraint.
    """

    year: int | None = None
    month: int | None = None
    day: int | None = None
    dimensions: tuple[DimensionFilter, ...] = ()

    def is_empty(self) -> bool:
        return (
            self.year is None
            and self.month is None
            and self.day is None
            and not self.dimensions
        )
