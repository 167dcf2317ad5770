"""Roles and their access scopes."""

from enum import IntEnum

from pydantic import field_validator

from pulse.domain.auth.model.value import RoleId
from pulse.domain.shared.model.entity import Entity


class AccessScope(IntEnum):
    """Hierarchical scopes with numeric ordering.

    Higher values inherit all permissions of lower values.
    """

    READ = 0
    WRITE = 1
    ADMIN = 2


class Role(Entity):
    """A named role granting one access scope."""

    id: RoleId | None = None
    name: str
    scope: AccessScope

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Role name must not be empty")
        return v
