"""Marker base for repository and adapter ports."""

from typing import Protocol


class Port(Protocol):
    """Base for all ports. Implementations live in pulse.infrastructure."""
