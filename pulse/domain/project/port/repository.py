"""Repository ports for projects and data sources."""

from abc import abstractmethod
from typing import Protocol

from pulse.domain.project.model.data_source import DataSource
from pulse.domain.project.model.project import Project
from pulse.domain.project.model.value import DataSourceId, ProjectId
from pulse.domain.shared.port import Port


class ProjectRepository(Port, Protocol):
    @abstractmethod
    async def get(self, project_id: ProjectId) -> Project | None: ...

    @abstractmethod
    async def get_by_uuid(self, uuid: str) -> Project | None: ...

    @abstractmethod
    async def list(self) -> list[Project]: ...

    @abstractmethod
    async def save(self, project: Project) -> ProjectId:
        """Insert or update. Returns the project's ID."""
        ...

    @abstractmethod
    async def delete(self, project_id: ProjectId) -> bool: ...


class DataSourceRepository(Port, Protocol):
    @abstractmethod
    async def get(self, data_source_id: DataSourceId) -> DataSource | None: ...

    @abstractmethod
    async def get_by_key(self, project_uuid: str, key: str) -> DataSource | None:
        """Resolve a data source from its project's UUID and its key."""
        ...

    @abstractmethod
    async def list(self, project_id: ProjectId | None = None) -> list[DataSource]: ...

    @abstractmethod
    async def save(self, data_source: DataSource) -> DataSourceId:
        """Insert or update. Raises ConflictError on a duplicate key in a project."""
        ...

    @abstractmethod
    async def delete(self, data_source_id: DataSourceId) -> bool: ...
