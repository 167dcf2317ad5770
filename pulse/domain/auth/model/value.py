"""Value objects for the auth domain."""

from pulse.domain.shared.model.value import IntId


class UserId(IntId):
    """Unique identifier for a User."""


class RoleId(IntId):
    """Unique identifier for a Role."""


class UserRoleId(IntId):
    """Unique identifier for a user-role binding."""


ALL_PROJECTS = 0
"""Project id used by a binding that applies to every project."""
