"""SQL repository implementations for projects and data sources."""

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.domain.project.model.data_source import DataSource
from pulse.domain.project.model.project import Project
from pulse.domain.project.model.value import DataSourceId, ProjectId
from pulse.domain.project.port.repository import DataSourceRepository, ProjectRepository
from pulse.domain.shared.error import ConflictError
from pulse.infrastructure.persistence.mappers.project import (
    data_source_to_dict,
    project_to_dict,
    row_to_data_source,
    row_to_project,
)
from pulse.infrastructure.persistence.tables import data_sources_table, projects_table


class SQLProjectRepository(ProjectRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, project_id: ProjectId) -> Project | None:
        stmt = select(projects_table).where(projects_table.c.id == int(project_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_project(dict(row)) if row else None

    async def get_by_uuid(self, uuid: str) -> Project | None:
        stmt = select(projects_table).where(projects_table.c.uuid == uuid)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_project(dict(row)) if row else None

    async def list(self) -> list[Project]:
        stmt = select(projects_table).order_by(projects_table.c.id)
        result = await self.session.execute(stmt)
        return [row_to_project(dict(row)) for row in result.mappings().all()]

    async def save(self, project: Project) -> ProjectId:
        values = project_to_dict(project)
        if project.id is None:
            result = await self.session.execute(insert(projects_table).values(**values))
            project_id = ProjectId(result.inserted_primary_key[0])
        else:
            await self.session.execute(
                update(projects_table)
                .where(projects_table.c.id == int(project.id))
                .values(name=project.name)
            )
            project_id = project.id

        await self.session.flush()
        return project_id

    async def delete(self, project_id: ProjectId) -> bool:
        stmt = delete(projects_table).where(projects_table.c.id == int(project_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0


class SQLDataSourceRepository(DataSourceRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, data_source_id: DataSourceId) -> DataSource | None:
        stmt = select(data_sources_table).where(data_sources_table.c.id == int(data_source_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_data_source(dict(row)) if row else None

    async def get_by_key(self, project_uuid: str, key: str) -> DataSource | None:
        stmt = (
            select(data_sources_table)
            .join(projects_table, projects_table.c.id == data_sources_table.c.project_id)
            .where(projects_table.c.uuid == project_uuid, data_sources_table.c.key == key)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_data_source(dict(row)) if row else None

    async def list(self, project_id: ProjectId | None = None) -> list[DataSource]:
        stmt = select(data_sources_table).order_by(data_sources_table.c.id)
        if project_id is not None:
            stmt = stmt.where(data_sources_table.c.project_id == int(project_id))
        result = await self.session.execute(stmt)
        return [row_to_data_source(dict(row)) for row in result.mappings().all()]

    async def save(self, data_source: DataSource) -> DataSourceId:
        if data_source.id is not None:
            # Only the display name is mutable
            await self.session.execute(
                update(data_sources_table)
                .where(data_sources_table.c.id == int(data_source.id))
                .values(name=data_source.name)
            )
            await self.session.flush()
            return data_source.id

        taken = await self.session.execute(
            select(data_sources_table.c.id).where(
                data_sources_table.c.project_id == int(data_source.project_id),
                data_sources_table.c.key == data_source.key,
            )
        )
        if taken.first() is not None:
            raise self._conflict(data_source)

        try:
            result = await self.session.execute(
                insert(data_sources_table).values(**data_source_to_dict(data_source))
            )
        except IntegrityError as e:
            raise self._conflict(data_source) from e

        await self.session.flush()
        return DataSourceId(result.inserted_primary_key[0])

    async def delete(self, data_source_id: DataSourceId) -> bool:
        stmt = delete(data_sources_table).where(data_sources_table.c.id == int(data_source_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    @staticmethod
    def _conflict(data_source: DataSource) -> ConflictError:
        return ConflictError(
            f"Data source {data_source.key!r} already exists in project {data_source.project_id}",
            code="data_source_exists",
        )
