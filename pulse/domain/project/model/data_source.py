"""DataSource aggregate and its dimension schema."""

from datetime import UTC, datetime

from pydantic import field_validator

from pulse.domain.project.model.value import (
    KEY_PATTERN,
    RESERVED_FIELDS,
    DataSourceId,
    ProjectId,
)
from pulse.domain.shared.model.aggregate import Aggregate
from pulse.domain.shared.model.value import ValueObject


class Dimension(ValueObject):
    """A declared, filterable categorical attribute of a data source."""

    key: str
    name: str = ""

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not KEY_PATTERN.match(v):
            raise ValueError(
                f"Invalid dimension key: {v!r}. "
                "Must start with a letter and contain only letters, digits or underscores."
            )
        if v in RESERVED_FIELDS:
            raise ValueError(f"Dimension key {v!r} is reserved for a fixed record field")
        return v


class DataSourceConfig(ValueObject):
    """Per data source configuration; ``dimensions`` keeps declaration order."""

    dimensions: tuple[Dimension, ...] = ()

    @field_validator("dimensions")
    @classmethod
    def validate_unique_keys(cls, v: tuple[Dimension, ...]) -> tuple[Dimension, ...]:
        seen: set[str] = set()
        for dim in v:
            if dim.key in seen:
                raise ValueError(f"Duplicate dimension key: {dim.key!r}")
            seen.add(dim.key)
        return v

    @property
    def dimension_keys(self) -> frozenset[str]:
        return frozenset(d.key for d in self.dimensions)


class DataSource(Aggregate):
    """A project-scoped metric stream.

    Invariants:
    - ``key`` is unique within the owning project
    - ``config`` is fixed at creation; only ``name`` can change
    """

    id: DataSourceId | None = None
    project_id: ProjectId
    key: str
    name: str
    config: DataSourceConfig = DataSourceConfig()
    created_at: datetime

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not KEY_PATTERN.match(v):
            raise ValueError(f"Invalid data source key: {v!r}")
        return v

    @classmethod
    def create(
        cls,
        project_id: ProjectId,
        key: str,
        name: str,
        dimensions: list[Dimension] | None = None,
    ) -> "DataSource":
        return cls(
            project_id=project_id,
            key=key,
            name=name,
            config=DataSourceConfig(dimensions=tuple(dimensions or ())),
            created_at=datetime.now(UTC),
        )

    def declares(self, key: str) -> bool:
        """Whether ``key`` is one of this data source's declared dimensions."""
        return key in self.config.dimension_keys
