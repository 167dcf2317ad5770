"""Translation of caller-supplied filters into validated storage criteria.

Only keys that are either a fixed filterable column or a dimension declared
by the owning data source ever reach the repository.
"""

import math
from collections.abc import Callable
from typing import Any

from pulse.domain.project.model.data_source import DataSource
from pulse.domain.record.model.value import DimensionValue, RecordFilter
from pulse.domain.shared.error import InvalidFilterError
from pulse.domain.shared.model.value import ValueObject


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("boolean is not an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value} is not a whole number")
        return int(value)
    return int(value)


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    result = float(value)
    if not math.isfinite(result):
        raise ValueError(f"{value} is not finite")
    return result


FILTERABLE_COLUMNS: dict[str, Callable[[Any], Any]] = {
    "value": _as_float,
    "year": _as_int,
    "month": _as_int,
    "day": _as_int,
}


class RecordCriteria(ValueObject):
    """Validated constraints: fixed-column equalities plus declared-dimension equalities."""

    columns: tuple[tuple[str, Any], ...] = ()
    dimensions: tuple[tuple[str, DimensionValue], ...] = ()

    def is_empty(self) -> bool:
        return not self.columns and not self.dimensions


def _coerce_column(key: str, value: Any) -> Any:
    if value is None:
        raise InvalidFilterError(f"Filter on {key!r} requires a value", field=key)
    try:
        return FILTERABLE_COLUMNS[key](value)
    except (TypeError, ValueError) as e:
        raise InvalidFilterError(f"Invalid value for {key!r}: {e}", field=key) from e


def build_criteria(data_source: DataSource, record_filter: RecordFilter) -> RecordCriteria:
    """Validate a filter against a data source schema.

    Raises:
        InvalidFilterError: If a key is neither a fixed filterable column nor a
            dimension declared by the data source, or a fixed column value
            cannot be coerced.
    """
    columns: list[tuple[str, Any]] = []
    dimensions: list[tuple[str, DimensionValue]] = []

    for name in ("year", "month", "day"):
        value = getattr(record_filter, name)
        if value is not None:
            columns.append((name, _coerce_column(name, value)))

    for entry in record_filter.dimensions:
        if entry.key in FILTERABLE_COLUMNS:
            columns.append((entry.key, _coerce_column(entry.key, entry.value)))
        elif data_source.declares(entry.key):
            dimensions.append((entry.key, entry.value))
        else:
            raise InvalidFilterError(
                f"Unknown filter key {entry.key!r} for data source {data_source.key!r}",
                field=entry.key,
            )

    return RecordCriteria(columns=tuple(columns), dimensions=tuple(dimensions))
