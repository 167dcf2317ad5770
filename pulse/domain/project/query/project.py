from pulse.domain.auth.model.principal import Principal
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.project.command.project import ProjectDetail
from pulse.domain.project.service.project import ProjectService
from pulse.domain.shared.authorization.gate import at_least
from pulse.domain.shared.query import Query, QueryHandler, Result


class GetProject(Query):
    project_uuid: str


class GetProjectHandler(QueryHandler[GetProject, ProjectDetail]):
    __auth__ = at_least(AccessScope.READ)
    principal: Principal
    project_service: ProjectService

    async def run(self, cmd: GetProject) -> ProjectDetail:
        project = await self.project_service.get_by_uuid(cmd.project_uuid)
        assert project.id is not None
        self.principal.require(AccessScope.READ, int(project.id))
        return ProjectDetail.from_project(project)


class ListProjects(Query):
    pass


class ProjectList(Result):
    items: list[ProjectDetail]


class ListProjectsHandler(QueryHandler[ListProjects, ProjectList]):
    __auth__ = at_least(AccessScope.READ)
    principal: Principal
    project_service: ProjectService

    async def run(self, cmd: ListProjects) -> ProjectList:
        # Only projects the caller holds a READ grant on, directly or globally
        projects = [
            p
            for p in await self.project_service.list()
            if p.id is not None and self.principal.can(AccessScope.READ, int(p.id))
        ]
        return ProjectList(items=[ProjectDetail.from_project(p) for p in projects])
