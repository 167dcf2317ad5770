"""Custom Dishka scopes for Pulse."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Pulse dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, config, token service)
    - UOW: Unit of Work (one HTTP request or one CLI operation, one transaction)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
