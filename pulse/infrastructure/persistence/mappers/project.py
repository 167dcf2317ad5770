"""Project and data source mappers."""

from datetime import datetime
from typing import Any

from pulse.domain.project.model.data_source import DataSource, DataSourceConfig
from pulse.domain.project.model.project import Project
from pulse.domain.project.model.value import DataSourceId, ProjectId


def _as_datetime(value: Any) -> datetime:
    # SQLite hands back ISO strings for some drivers
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


def row_to_project(row: dict[str, Any]) -> Project:
    return Project(
        id=ProjectId(row["id"]),
        uuid=row["uuid"],
        name=row["name"],
        created_at=_as_datetime(row["created_at"]),
    )


def project_to_dict(project: Project) -> dict[str, Any]:
    return {
        "uuid": project.uuid,
        "name": project.name,
        "created_at": project.created_at,
    }


def row_to_data_source(row: dict[str, Any]) -> DataSource:
    return DataSource(
        id=DataSourceId(row["id"]),
        project_id=ProjectId(row["project_id"]),
        key=row["key"],
        name=row["name"],
        config=DataSourceConfig.model_validate(row.get("config") or {}),
        created_at=_as_datetime(row["created_at"]),
    )


def data_source_to_dict(data_source: DataSource) -> dict[str, Any]:
    return {
        "project_id": int(data_source.project_id),
        "key": data_source.key,
        "name": data_source.name,
        "config": data_source.config.model_dump(mode="json"),
        "created_at": data_source.created_at,
    }
