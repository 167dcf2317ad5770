"""Unit tests for ProjectService and DataSourceService."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from pulse.domain.project.model.data_source import DataSource, DataSourceConfig, Dimension
from pulse.domain.project.model.project import Project
from pulse.domain.project.model.value import DataSourceId, ProjectId
from pulse.domain.project.service.data_source import DataSourceService
from pulse.domain.project.service.project import ProjectService
from pulse.domain.shared.error import NotFoundError, ValidationError


def _project() -> Project:
    return Project(id=ProjectId(1), uuid="abc", name="Demo", created_at=datetime.now(UTC))


class TestProjectService:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_uuid(self):
        repo = AsyncMock()
        repo.save.return_value = ProjectId(4)
        service = ProjectService(project_repo=repo)

        project = await service.create("Demo")

        assert project.id == ProjectId(4)
        assert len(project.uuid) == 36

    @pytest.mark.asyncio
    async def test_create_with_blank_name_raises_validation_error(self):
        service = ProjectService(project_repo=AsyncMock())

        with pytest.raises(ValidationError) as exc_info:
            await service.create("   ")

        assert exc_info.value.field == "name"

    @pytest.mark.asyncio
    async def test_get_by_uuid_missing_raises_not_found(self):
        repo = AsyncMock()
        repo.get_by_uuid.return_value = None
        service = ProjectService(project_repo=repo)

        with pytest.raises(NotFoundError):
            await service.get_by_uuid("missing")

    @pytest.mark.asyncio
    async def test_remove_missing_raises_not_found(self):
        repo = AsyncMock()
        repo.delete.return_value = False
        service = ProjectService(project_repo=repo)

        with pytest.raises(NotFoundError):
            await service.remove(ProjectId(9))


class TestDataSourceService:
    def _service(self, project: Project | None) -> tuple[DataSourceService, AsyncMock]:
        data_source_repo = AsyncMock()
        project_repo = AsyncMock()
        project_repo.get.return_value = project
        return (
            DataSourceService(data_source_repo=data_source_repo, project_repo=project_repo),
            data_source_repo,
        )

    @pytest.mark.asyncio
    async def test_create_accepts_dimension_dicts(self):
        service, repo = self._service(_project())
        repo.save.return_value = DataSourceId(2)

        data_source = await service.create(
            ProjectId(1), "sessions", "Sessions", [{"key": "client", "name": "Client"}]
        )

        assert data_source.id == DataSourceId(2)
        assert data_source.declares("client")

    @pytest.mark.asyncio
    async def test_create_for_unknown_project_raises_not_found(self):
        service, repo = self._service(None)

        with pytest.raises(NotFoundError):
            await service.create(ProjectId(9), "sessions", "Sessions")

        repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_with_reserved_dimension_raises_validation_error(self):
        service, repo = self._service(_project())

        with pytest.raises(ValidationError) as exc_info:
            await service.create(ProjectId(1), "sessions", "Sessions", [{"key": "year"}])

        assert exc_info.value.field == "config"
        repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rename_keeps_dimension_schema(self):
        service, repo = self._service(_project())
        config = DataSourceConfig(dimensions=(Dimension(key="client", name="Client"),))
        repo.get.return_value = DataSource(
            id=DataSourceId(2),
            project_id=ProjectId(1),
            key="sessions",
            name="Sessions",
            config=config,
            created_at=datetime.now(UTC),
        )

        renamed = await service.rename(DataSourceId(2), "Daily sessions")

        assert renamed.name == "Daily sessions"
        assert renamed.config == config
        repo.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_resolve_missing_raises_not_found(self):
        service, repo = self._service(_project())
        repo.get_by_key.return_value = None

        with pytest.raises(NotFoundError):
            await service.resolve("abc", "missing")
