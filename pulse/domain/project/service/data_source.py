"""DataSource service: registry of metric streams and their dimension schemas."""

import logging
from typing import Any

import pydantic

from pulse.domain.project.model.data_source import DataSource, Dimension
from pulse.domain.project.model.value import DataSourceId, ProjectId
from pulse.domain.project.port.repository import DataSourceRepository, ProjectRepository
from pulse.domain.shared.error import NotFoundError, ValidationError
from pulse.domain.shared.service import Service

logger = logging.getLogger(__name__)


class DataSourceService(Service):
    data_source_repo: DataSourceRepository
    project_repo: ProjectRepository

    async def create(
        self,
        project_id: ProjectId,
        key: str,
        name: str,
        dimensions: list[dict[str, Any]] | list[Dimension] | None = None,
    ) -> DataSource:
        """Register a data source. Raises ConflictError if the key is taken in the project."""
        if await self.project_repo.get(project_id) is None:
            raise NotFoundError(f"Project not found: {project_id}")

        try:
            data_source = DataSource.create(
                project_id=project_id,
                key=key,
                name=name,
                dimensions=[
                    d if isinstance(d, Dimension) else Dimension.model_validate(d)
                    for d in dimensions or []
                ],
            )
        except pydantic.ValidationError as e:
            raise ValidationError(str(e), field="config") from e

        data_source.id = await self.data_source_repo.save(data_source)
        logger.info(
            "Data source created: id=%s project_id=%s key=%s dimensions=%s",
            data_source.id,
            project_id,
            key,
            sorted(data_source.config.dimension_keys),
        )
        return data_source

    async def get(self, data_source_id: DataSourceId) -> DataSource:
        data_source = await self.data_source_repo.get(data_source_id)
        if data_source is None:
            raise NotFoundError(f"Data source not found: {data_source_id}")
        return data_source

    async def resolve(self, project_uuid: str, key: str) -> DataSource:
        """Resolve a data source from a project UUID and data source key."""
        data_source = await self.data_source_repo.get_by_key(project_uuid, key)
        if data_source is None:
            raise NotFoundError(f"Data source not found: {project_uuid}/{key}")
        return data_source

    async def list(self, project_id: ProjectId) -> list[DataSource]:
        return await self.data_source_repo.list(project_id)

    async def rename(self, data_source_id: DataSourceId, name: str) -> DataSource:
        """Change the display name. The dimension schema is fixed at creation."""
        data_source = await self.get(data_source_id)
        data_source.name = name
        await self.data_source_repo.save(data_source)
        return data_source

    async def remove(self, data_source_id: DataSourceId) -> None:
        """Delete a data source and, by cascade, its records."""
        if not await self.data_source_repo.delete(data_source_id):
            raise NotFoundError(f"Data source not found: {data_source_id}")
        logger.info("Data source removed: id=%s", data_source_id)
