"""UserRole entity: binds a user to a role on a project."""

from datetime import UTC, datetime

from pulse.domain.auth.model.role import AccessScope
from pulse.domain.auth.model.value import ALL_PROJECTS, RoleId, UserId, UserRoleId
from pulse.domain.shared.model.entity import Entity
from pulse.domain.shared.model.value import ValueObject


class UserRole(Entity):
    """Association between a user and a role, scoped to one project or to all."""

    id: UserRoleId | None = None
    user_id: UserId
    role_id: RoleId
    project_id: int = ALL_PROJECTS
    assigned_at: datetime

    @classmethod
    def create(cls, user_id: UserId, role_id: RoleId, project_id: int = ALL_PROJECTS) -> "UserRole":
        return cls(
            user_id=user_id,
            role_id=role_id,
            project_id=project_id,
            assigned_at=datetime.now(UTC),
        )


class Grant(ValueObject):
    """Resolved permission: the scope a user holds on a project."""

    project_id: int
    scope: AccessScope

    def covers(self, project_id: int) -> bool:
        return self.project_id in (ALL_PROJECTS, project_id)
