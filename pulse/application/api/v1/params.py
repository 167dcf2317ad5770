"""Request parsing helpers shared by the v1 routes."""

import json
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, TypeAdapter

from pulse.domain.record.model.value import DimensionFilter
from pulse.domain.shared.error import InvalidFilterError, ValidationError

M = TypeVar("M", bound=BaseModel)

_dimension_filters = TypeAdapter(list[DimensionFilter])


def _first_error(error: pydantic.ValidationError) -> tuple[str, str | None]:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or None
    return first["msg"], location


def build(model: type[M], **data: Any) -> M:
    """Construct a command or query, reporting bad input as a ValidationError."""
    try:
        return model(**data)
    except pydantic.ValidationError as e:
        message, location = _first_error(e)
        raise ValidationError(f"Invalid {location or 'input'}: {message}", field=location) from e


def parse_dimensions(raw: str | None) -> list[DimensionFilter]:
    """Parse the ``dimensions`` query parameter: a JSON array of ``{key, value}`` objects."""
    if not raw:
        return []

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidFilterError(f"dimensions is not valid JSON: {e}", field="dimensions") from e

    try:
        return _dimension_filters.validate_python(data)
    except pydantic.ValidationError as e:
        message, location = _first_error(e)
        raise InvalidFilterError(
            f"dimensions must be an array of {{key, value}} objects ({location}: {message})",
            field="dimensions",
        ) from e
