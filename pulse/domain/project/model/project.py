"""Project aggregate: the tenant boundary."""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import field_validator

from pulse.domain.project.model.value import ProjectId
from pulse.domain.shared.model.aggregate import Aggregate


class Project(Aggregate):
    """A tenant owning data sources. Addressed externally by ``uuid``."""

    id: ProjectId | None = None
    uuid: str
    name: str
    created_at: datetime

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name must not be empty")
        return v

    @classmethod
    def create(cls, name: str) -> "Project":
        return cls(uuid=str(uuid4()), name=name, created_at=datetime.now(UTC))
