"""Handler-level authorization gates: public() and at_least(AccessScope)."""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from functools import wraps
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pulse.domain.auth.model.role import AccessScope

_auth_logger = logging.getLogger("pulse.authz")

# Unbound async handler method: (self, cmd) -> Coroutine -> Result
HandlerMethod = Callable[..., Coroutine[Any, Any, Any]]


class Gate:
    """Base for handler-level authorization gates.

    Every CommandHandler/QueryHandler must declare ``__auth__: ClassVar[Gate]``.
    Subclasses define specific gate behaviors (public access, scope checks).
    """


@dataclass(frozen=True)
class Public(Gate):
    """No authentication required."""


@dataclass(frozen=True)
class AtLeast(Gate):
    """Gate that requires the principal to hold at least the given scope on some project."""

    scope: "AccessScope"


_PUBLIC = Public()


def public() -> Public:
    """Mark a handler as publicly accessible (no auth required)."""
    return _PUBLIC


def at_least(scope: "AccessScope") -> AtLeast:
    """Mark a handler as requiring at least the given scope."""
    return AtLeast(scope=scope)


def wrap_run_with_gate(original_run: HandlerMethod) -> HandlerMethod:
    """Wrap a handler's run() method with __auth__ gate evaluation."""

    @wraps(original_run)
    async def gated_run(self: Any, cmd: Any) -> Any:
        from pulse.domain.shared.error import AuthorizationError, ConfigurationError

        gate = getattr(type(self), "__auth__", None)

        if not isinstance(gate, Gate):
            raise ConfigurationError(f"Handler {type(self).__name__} has no __auth__ declaration")

        if isinstance(gate, Public):
            return await original_run(self, cmd)

        if isinstance(gate, AtLeast):
            from pulse.domain.auth.model.principal import Principal

            principal = getattr(self, "principal", None)
            if not isinstance(principal, Principal):
                raise AuthorizationError("Authentication required", code="missing_token")

            _auth_logger.debug(
                "Auth check: handler=%s, required=%s, user_id=%s, grants=%s",
                type(self).__name__,
                gate.scope,
                principal.user_id,
                principal.grants,
            )

            if not principal.has_scope(gate.scope):
                raise AuthorizationError(
                    f"Access denied: insufficient scope for {type(self).__name__}",
                    code="access_denied",
                )

            return await original_run(self, cmd)

        raise ConfigurationError(  # pragma: no cover
            f"Handler {type(self).__name__} has unhandled __auth__ type: {type(gate).__name__}"
        )

    return gated_run
