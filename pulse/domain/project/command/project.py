"""Project lifecycle commands."""

from datetime import datetime

from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.auth.model.value import ALL_PROJECTS
from pulse.domain.project.model.project import Project
from pulse.domain.project.service.project import ProjectService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.command import Command, CommandHandler, Result


class ProjectDetail(Result):
    id: int
    uuid: str
    name: str
    created_at: datetime

    @classmethod
    def from_project(cls, project: Project) -> "ProjectDetail":
        assert project.id is not None
        return cls(
            id=int(project.id),
            uuid=project.uuid,
            name=project.name,
            created_at=project.created_at,
        )


class CreateProject(Command):
    name: str


class CreateProjectHandler(CommandHandler[CreateProject, ProjectDetail]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    project_service: ProjectService

    async def run(self, cmd: CreateProject) -> ProjectDetail:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        project = await self.project_service.create(cmd.name)
        return ProjectDetail.from_project(project)


class UpdateProject(Command):
    project_uuid: str
    name: str


class UpdateProjectHandler(CommandHandler[UpdateProject, ProjectDetail]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    project_service: ProjectService

    async def run(self, cmd: UpdateProject) -> ProjectDetail:
        project = await self.project_service.get_by_uuid(cmd.project_uuid)
        assert project.id is not None
        self.principal.require(AccessScope.ADMIN, int(project.id))

        project = await self.project_service.rename(project.id, cmd.name)
        return ProjectDetail.from_project(project)


class DeleteProject(Command):
    project_uuid: str


class ProjectDeleted(Result):
    uuid: str


class DeleteProjectHandler(CommandHandler[DeleteProject, ProjectDeleted]):
    __auth__ = at_least(AccessScope.ADMIN)
    principal: Principal
    project_service: ProjectService

    async def run(self, cmd: DeleteProject) -> ProjectDeleted:
        self.principal.require(AccessScope.ADMIN, ALL_PROJECTS)
        project = await self.project_service.get_by_uuid(cmd.project_uuid)
        assert project.id is not None
        await self.project_service.remove(project.id)
        return ProjectDeleted(uuid=project.uuid)
