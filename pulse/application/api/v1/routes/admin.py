"""Admin routes for users, roles and role bindings."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from pulse.domain.auth.command.role import (
    BindingDetail,
    BindingRemoved,
    BindRole,
    BindRoleHandler,
    CreateRole,
    CreateRoleHandler,
    DeleteRole,
    DeleteRoleHandler,
    RoleDeleted,
    RoleDetail,
    UnbindRole,
    UnbindRoleHandler,
)
from pulse.domain.auth.command.token import IssueToken, IssueTokenHandler, TokenIssued
from pulse.domain.auth.command.user import (
    CreateUser,
    CreateUserHandler,
    DeleteUser,
    DeleteUserHandler,
    UserDeleted,
    UserDetail,
)
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.auth.query.role import ListRoles, ListRolesHandler, RoleList
from pulse.domain.auth.query.user import (
    BindingList,
    GetUserBindings,
    GetUserBindingsHandler,
    ListUsers,
    ListUsersHandler,
    UserList,
)

router = APIRouter(prefix="/admin", tags=["Admin"], route_class=DishkaRoute)


class CreateUserRequest(BaseModel):
    email: str


class CreateRoleRequest(BaseModel):
    name: str
    scope: AccessScope


class BindRoleRequest(BaseModel):
    """Request body for binding a role. Omit ``project_uuid`` for a global binding."""

    role_id: int
    project_uuid: str | None = None


# -- Users ------------------------------------------------------------------


@router.post("/users", response_model=UserDetail, status_code=201)
async def create_user(
    body: CreateUserRequest,
    handler: FromDishka[CreateUserHandler],
) -> UserDetail:
    return await handler.run(CreateUser(email=body.email))


@router.get("/users", response_model=UserList)
async def list_users(handler: FromDishka[ListUsersHandler]) -> UserList:
    return await handler.run(ListUsers())


@router.delete("/users/{user_id}", response_model=UserDeleted)
async def delete_user(
    user_id: int,
    handler: FromDishka[DeleteUserHandler],
) -> UserDeleted:
    return await handler.run(DeleteUser(user_id=user_id))


@router.post("/users/{user_id}/token", response_model=TokenIssued, status_code=201)
async def issue_token(
    user_id: int,
    handler: FromDishka[IssueTokenHandler],
) -> TokenIssued:
    """Mint an access token for a user, e.g. for an ingestion client."""
    return await handler.run(IssueToken(user_id=user_id))


# -- Role bindings ----------------------------------------------------------


@router.get("/users/{user_id}/roles", response_model=BindingList)
async def list_user_roles(
    user_id: int,
    handler: FromDishka[GetUserBindingsHandler],
) -> BindingList:
    return await handler.run(GetUserBindings(user_id=user_id))


@router.post("/users/{user_id}/roles", response_model=BindingDetail, status_code=201)
async def bind_role(
    user_id: int,
    body: BindRoleRequest,
    handler: FromDishka[BindRoleHandler],
) -> BindingDetail:
    return await handler.run(
        BindRole(user_id=user_id, role_id=body.role_id, project_uuid=body.project_uuid)
    )


@router.delete("/bindings/{binding_id}", response_model=BindingRemoved)
async def unbind_role(
    binding_id: int,
    handler: FromDishka[UnbindRoleHandler],
) -> BindingRemoved:
    return await handler.run(UnbindRole(binding_id=binding_id))


# -- Roles ------------------------------------------------------------------


@router.post("/roles", response_model=RoleDetail, status_code=201)
async def create_role(
    body: CreateRoleRequest,
    handler: FromDishka[CreateRoleHandler],
) -> RoleDetail:
    return await handler.run(CreateRole(name=body.name, scope=body.scope))


@router.get("/roles", response_model=RoleList)
async def list_roles(handler: FromDishka[ListRolesHandler]) -> RoleList:
    return await handler.run(ListRoles())


@router.delete("/roles/{role_id}", response_model=RoleDeleted)
async def delete_role(
    role_id: int,
    handler: FromDishka[DeleteRoleHandler],
) -> RoleDeleted:
    return await handler.run(DeleteRole(role_id=role_id))
