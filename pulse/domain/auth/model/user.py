"""User aggregate for the auth domain."""

from datetime import UTC, datetime

from pydantic import field_validator

from pulse.domain.auth.model.value import UserId
from pulse.domain.shared.model.aggregate import Aggregate


class User(Aggregate):
    """A user of the ingestion API, identified by email.

    `id` is assigned by storage on first save and is immutable afterwards.
    """

    id: UserId | None = None
    email: str
    created_at: datetime

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError(f"Invalid email: {v}")
        return v

    @classmethod
    def create(cls, email: str) -> "User":
        """Create a new, not yet persisted user."""
        return cls(email=email, created_at=datetime.now(UTC))
