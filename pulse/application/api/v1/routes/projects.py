"""Project and data source registry routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from pulse.application.api.v1.params import build
from pulse.domain.project.command.data_source import (
    CreateDataSource,
    CreateDataSourceHandler,
    DataSourceDeleted,
    DataSourceDetail,
    DeleteDataSource,
    DeleteDataSourceHandler,
    UpdateDataSource,
    UpdateDataSourceHandler,
)
from pulse.domain.project.command.project import (
    CreateProject,
    CreateProjectHandler,
    DeleteProject,
    DeleteProjectHandler,
    ProjectDeleted,
    ProjectDetail,
    UpdateProject,
    UpdateProjectHandler,
)
from pulse.domain.project.query.data_source import (
    DataSourceList,
    GetDataSource,
    GetDataSourceHandler,
    ListDataSources,
    ListDataSourcesHandler,
)
from pulse.domain.project.query.project import (
    GetProject,
    GetProjectHandler,
    ListProjects,
    ListProjectsHandler,
    ProjectList,
)

router = APIRouter(tags=["projects"], route_class=DishkaRoute)


class ProjectRequest(BaseModel):
    name: str


class DimensionRequest(BaseModel):
    key: str
    name: str = ""


class CreateDataSourceRequest(BaseModel):
    key: str
    name: str
    dimensions: list[DimensionRequest] = []


class RenameRequest(BaseModel):
    name: str


# -- Projects ---------------------------------------------------------------


@router.post("/projects", response_model=ProjectDetail, status_code=201)
async def create_project(
    body: ProjectRequest,
    handler: FromDishka[CreateProjectHandler],
) -> ProjectDetail:
    """Create a project. Requires global ADMIN."""
    return await handler.run(CreateProject(name=body.name))


@router.get("/projects", response_model=ProjectList)
async def list_projects(handler: FromDishka[ListProjectsHandler]) -> ProjectList:
    """List the projects the caller can read."""
    return await handler.run(ListProjects())


@router.get("/projects/{project_uuid}", response_model=ProjectDetail)
async def get_project(
    project_uuid: str,
    handler: FromDishka[GetProjectHandler],
) -> ProjectDetail:
    return await handler.run(GetProject(project_uuid=project_uuid))


@router.patch("/projects/{project_uuid}", response_model=ProjectDetail)
async def update_project(
    project_uuid: str,
    body: ProjectRequest,
    handler: FromDishka[UpdateProjectHandler],
) -> ProjectDetail:
    return await handler.run(UpdateProject(project_uuid=project_uuid, name=body.name))


@router.delete("/projects/{project_uuid}", response_model=ProjectDeleted)
async def delete_project(
    project_uuid: str,
    handler: FromDishka[DeleteProjectHandler],
) -> ProjectDeleted:
    """Delete a project, its data sources and their records. Requires global ADMIN."""
    return await handler.run(DeleteProject(project_uuid=project_uuid))


# -- Data sources -----------------------------------------------------------


@router.post(
    "/projects/{project_uuid}/data_sources",
    response_model=DataSourceDetail,
    status_code=201,
)
async def create_data_source(
    project_uuid: str,
    body: CreateDataSourceRequest,
    handler: FromDishka[CreateDataSourceHandler],
) -> DataSourceDetail:
    """Register a data source and its dimension schema. Requires project ADMIN."""
    cmd = build(
        CreateDataSource,
        project_uuid=project_uuid,
        key=body.key,
        name=body.name,
        dimensions=[d.model_dump() for d in body.dimensions],
    )
    return await handler.run(cmd)


@router.get("/projects/{project_uuid}/data_sources", response_model=DataSourceList)
async def list_data_sources(
    project_uuid: str,
    handler: FromDishka[ListDataSourcesHandler],
) -> DataSourceList:
    return await handler.run(ListDataSources(project_uuid=project_uuid))


@router.get("/projects/{project_uuid}/data_sources/{key}", response_model=DataSourceDetail)
async def get_data_source(
    project_uuid: str,
    key: str,
    handler: FromDishka[GetDataSourceHandler],
) -> DataSourceDetail:
    return await handler.run(GetDataSource(project_uuid=project_uuid, key=key))


@router.patch("/projects/{project_uuid}/data_sources/{key}", response_model=DataSourceDetail)
async def update_data_source(
    project_uuid: str,
    key: str,
    body: RenameRequest,
    handler: FromDishka[UpdateDataSourceHandler],
) -> DataSourceDetail:
    """Rename a data source. Its dimension schema cannot change."""
    return await handler.run(UpdateDataSource(project_uuid=project_uuid, key=key, name=body.name))


@router.delete("/data_sources/{data_source_id}", response_model=DataSourceDeleted)
async def delete_data_source(
    data_source_id: int,
    handler: FromDishka[DeleteDataSourceHandler],
) -> DataSourceDeleted:
    """Delete a data source and all of its records."""
    return await handler.run(DeleteDataSource(data_source_id=data_source_id))
