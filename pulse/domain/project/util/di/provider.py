from dishka import provide

from pulse.domain.project.command.data_source import (
    CreateDataSourceHandler,
    DeleteDataSourceHandler,
    UpdateDataSourceHandler,
)
from pulse.domain.project.command.project import (
    CreateProjectHandler,
    DeleteProjectHandler,
    UpdateProjectHandler,
)
from pulse.domain.project.query.data_source import GetDataSourceHandler, ListDataSourcesHandler
from pulse.domain.project.query.project import GetProjectHandler, ListProjectsHandler
from pulse.domain.project.service.data_source import DataSourceService
from pulse.domain.project.service.project import ProjectService
from pulse.util.di.base import Provider
from pulse.util.di.scope import Scope


class ProjectProvider(Provider):
    project_service = provide(ProjectService, scope=Scope.UOW)
    data_source_service = provide(DataSourceService, scope=Scope.UOW)

    # Command Handlers
    create_project_handler = provide(CreateProjectHandler, scope=Scope.UOW)
    update_project_handler = provide(UpdateProjectHandler, scope=Scope.UOW)
    delete_project_handler = provide(DeleteProjectHandler, scope=Scope.UOW)
    create_data_source_handler = provide(CreateDataSourceHandler, scope=Scope.UOW)
    update_data_source_handler = provide(UpdateDataSourceHandler, scope=Scope.UOW)
    delete_data_source_handler = provide(DeleteDataSourceHandler, scope=Scope.UOW)

    # Query Handlers
    get_project_handler = provide(GetProjectHandler, scope=Scope.UOW)
    list_projects_handler = provide(ListProjectsHandler, scope=Scope.UOW)
    get_data_source_handler = provide(GetDataSourceHandler, scope=Scope.UOW)
    list_data_sources_handler = provide(ListDataSourcesHandler, scope=Scope.UOW)
