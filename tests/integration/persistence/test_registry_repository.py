"""Project and data source repositories against SQLite."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from pulse.domain.project.model.data_source import DataSource, Dimension
from pulse.domain.project.model.project import Project
from pulse.domain.project.model.value import ProjectId
from pulse.domain.shared.error import ConflictError
from pulse.infrastructure.persistence.repository.project import (
    SQLDataSourceRepository,
    SQLProjectRepository,
)


async def _project(session: AsyncSession, name: str = "Demo") -> Project:
    project = Project.create(name)
    project.id = await SQLProjectRepository(session).save(project)
    return project


class TestProjectRepository:
    @pytest.mark.asyncio
    async def test_save_and_lookup(self, session: AsyncSession):
        repo = SQLProjectRepository(session)
        project = await _project(session)
        assert project.id is not None

        by_id = await repo.get(project.id)
        by_uuid = await repo.get_by_uuid(project.uuid)

        assert by_id is not None and by_id.name == "Demo"
        assert by_uuid is not None and by_uuid.id == project.id

    @pytest.mark.asyncio
    async def test_rename(self, session: AsyncSession):
        repo = SQLProjectRepository(session)
        project = await _project(session)
        assert project.id is not None

        project.name = "Renamed"
        await repo.save(project)

        stored = await repo.get(project.id)
        assert stored is not None and stored.name == "Renamed"

    @pytest.mark.asyncio
    async def test_missing(self, session: AsyncSession):
        repo = SQLProjectRepository(session)

        assert await repo.get(ProjectId(404)) is None
        assert await repo.get_by_uuid("nope") is None
        assert await repo.delete(ProjectId(404)) is False

    @pytest.mark.asyncio
    async def test_delete_cascades_to_data_sources(self, session: AsyncSession):
        project = await _project(session)
        assert project.id is not None
        data_source_repo = SQLDataSourceRepository(session)
        data_source_id = await data_source_repo.save(
            DataSource.create(project_id=project.id, key="sessions", name="Sessions")
        )

        assert await SQLProjectRepository(session).delete(project.id)

        assert await data_source_repo.get(data_source_id) is None


class TestDataSourceRepository:
    @pytest.mark.asyncio
    async def test_config_round_trip_and_key_lookup(self, session: AsyncSession):
        project = await _project(session)
        assert project.id is not None
        repo = SQLDataSourceRepository(session)
        data_source = DataSource.create(
            project_id=project.id,
            key="sessions",
            name="Sessions",
            dimensions=[Dimension(key="client", name="Client"), Dimension(key="os", name="OS")],
        )

        data_source.id = await repo.save(data_source)
        stored = await repo.get_by_key(project.uuid, "sessions")

        assert stored is not None
        assert stored.id == data_source.id
        assert [d.key for d in stored.config.dimensions] == ["client", "os"]

    @pytest.mark.asyncio
    async def test_duplicate_key_in_project_conflicts(self, session: AsyncSession):
        project = await _project(session)
        assert project.id is not None
        repo = SQLDataSourceRepository(session)
        await repo.save(DataSource.create(project_id=project.id, key="sessions", name="A"))

        with pytest.raises(ConflictError):
            await repo.save(DataSource.create(project_id=project.id, key="sessions", name="B"))

    @pytest.mark.asyncio
    async def test_same_key_in_other_project_is_allowed(self, session: AsyncSession):
        first = await _project(session, "One")
        second = await _project(session, "Two")
        assert first.id is not None and second.id is not None
        repo = SQLDataSourceRepository(session)

        await repo.save(DataSource.create(project_id=first.id, key="sessions", name="A"))
        await repo.save(DataSource.create(project_id=second.id, key="sessions", name="B"))

        assert len(await repo.list(first.id)) == 1
        assert len(await repo.list()) == 2

    @pytest.mark.asyncio
    async def test_update_changes_name_only(self, session: AsyncSession):
        project = await _project(session)
        assert project.id is not None
        repo = SQLDataSourceRepository(session)
        data_source = DataSource.create(
            project_id=project.id,
            key="sessions",
            name="Sessions",
            dimensions=[Dimension(key="client")],
        )
        data_source.id = await repo.save(data_source)

        data_source.name = "Daily sessions"
        await repo.save(data_source)

        stored = await repo.get(data_source.id)
        assert stored is not None
        assert stored.name == "Daily sessions"
        assert stored.declares("client")
