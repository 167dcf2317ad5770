"""Project service: tenant lifecycle."""

import logging

import pydantic

from pulse.domain.project.model.project import Project
from pulse.domain.project.model.value import ProjectId
from pulse.domain.project.port.repository import ProjectRepository
from pulse.domain.shared.error import NotFoundError, ValidationError
from pulse.domain.shared.service import Service

logger = logging.getLogger(__name__)


class ProjectService(Service):
    project_repo: ProjectRepository

    async def create(self, name: str) -> Project:
        try:
            project = Project.create(name=name)
        except pydantic.ValidationError as e:
            raise ValidationError(str(e), field="name") from e

        project.id = await self.project_repo.save(project)
        logger.info("Project created: id=%s uuid=%s", project.id, project.uuid)
        return project

    async def get(self, project_id: ProjectId) -> Project:
        project = await self.project_repo.get(project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")
        return project

    async def get_by_uuid(self, uuid: str) -> Project:
        project = await self.project_repo.get_by_uuid(uuid)
        if project is None:
            raise NotFoundError(f"Project not found: {uuid}")
        return project

    async def list(self) -> list[Project]:
        return await self.project_repo.list()

    async def rename(self, project_id: ProjectId, name: str) -> Project:
        project = await self.get(project_id)
        try:
            project.name = name
        except pydantic.ValidationError as e:
            raise ValidationError(str(e), field="name") from e
        await self.project_repo.save(project)
        return project

    async def remove(self, project_id: ProjectId) -> None:
        """Delete a project together with its data sources and their records."""
        if not await self.project_repo.delete(project_id):
            raise NotFoundError(f"Project not found: {project_id}")
        logger.info("Project removed: id=%s", project_id)
