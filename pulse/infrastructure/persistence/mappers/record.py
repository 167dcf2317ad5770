"""Record mapper - converts between domain and persistence."""

import json
from collections.abc import Iterable, Mapping
from typing import Any

from pulse.domain.project.model.value import DataSourceId
from pulse.domain.record.model.aggregate import Record
from pulse.domain.record.model.value import DimensionValue, RecordId


def encode_dimension_value(value: DimensionValue) -> str:
    """JSON-encode a dimension value for storage and comparison.

    Whole floats are stored as integers so that ``1`` and ``1.0`` compare equal.
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return json.dumps(value)


def decode_dimension_value(raw: str) -> DimensionValue:
    return json.loads(raw)


def record_to_dict(record: Record) -> dict[str, Any]:
    """Convert Record aggregate to a ``records`` row (fixed fields only)."""
    return {
        "data_source_id": int(record.data_source_id),
        "value": record.value,
        "year": record.year,
        "month": record.month,
        "day": record.day,
    }


def dimensions_to_rows(record_id: int, dimensions: Mapping[str, DimensionValue]) -> list[dict[str, Any]]:
    """Convert a record's dimensions to ``record_dimensions`` rows."""
    return [
        {"record_id": record_id, "key": key, "value": encode_dimension_value(value)}
        for key, value in dimensions.items()
    ]


def row_to_record(row: Mapping[str, Any], dimension_rows: Iterable[Mapping[str, Any]]) -> Record:
    """Convert a ``records`` row and its dimension rows to a Record aggregate."""
    return Record(
        id=RecordId(row["id"]),
        data_source_id=DataSourceId(row["data_source_id"]),
        value=row["value"],
        year=row["year"],
        month=row["month"],
        day=row["day"],
        dimensions={d["key"]: decode_dimension_value(d["value"]) for d in dimension_rows},
    )
