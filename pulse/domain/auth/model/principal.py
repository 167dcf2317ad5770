"""Principal: authenticated identity with grants, resolved per-request."""

from dataclasses import dataclass

from pulse.domain.auth.model.identity import Identity
from pulse.domain.auth.model.role import AccessScope
from pulse.domain.auth.model.user_role import Grant
from pulse.domain.auth.model.value import UserId
from pulse.domain.shared.error import AuthorizationError


@dataclass(frozen=True)
class Principal(Identity):
    """The authenticated identity of the current requester.

    Resolved per-request from the access token + role bindings. Immutable after creation.
    """

    user_id: UserId
    email: str
    grants: frozenset[Grant]

    def has_scope(self, scope: AccessScope) -> bool:
        """Check if any grant, on any project, is >= the given scope."""
        return any(g.scope >= scope for g in self.grants)

    def can(self, scope: AccessScope, project_id: int) -> bool:
        """Check if a grant covering the project is >= the given scope."""
        return any(g.scope >= scope and g.covers(int(project_id)) for g in self.grants)

    def require(self, scope: AccessScope, project_id: int) -> None:
        """Raise AuthorizationError unless the principal can act on the project."""
        if not self.can(scope, project_id):
            raise AuthorizationError(
                f"Access denied: {scope.name.lower()} scope required on project {project_id}",
                code="access_denied",
            )
