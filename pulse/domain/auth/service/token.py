"""Token service for JWT creation and validation."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from pulse.config import JwtConfig
from pulse.domain.auth.model.user import User
from pulse.domain.shared.error import ConfigurationError
from pulse.domain.shared.service import Service

logger = logging.getLogger(__name__)

AUDIENCE = "authenticated"


class TokenService(Service):
    """Service for JWT access token operations.

    Access tokens are JWTs carrying the user id (``sub``) and email.
    Scopes are not embedded: they are looked up per request so a revoked
    binding takes effect immediately.
    """

    _config: JwtConfig

    def create_access_token(
        self,
        user: User,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        """Create a JWT access token for a persisted user.

        Args:
            user: The user the token is issued for (must have an id)
            additional_claims: Optional extra claims to include

        Returns:
            Encoded JWT string
        """
        if user.id is None:
            raise ValueError("Cannot issue a token for an unsaved user")
        if not self._config.secret:
            raise ConfigurationError("auth.jwt.secret is not configured")

        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._config.access_token_expire_minutes)

        payload = {
            "sub": str(user.id),
            "email": user.email,
            "aud": AUDIENCE,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(16),
        }

        if additional_claims:
            payload.update(additional_claims)

        logger.debug("Issued access token for user_id=%s", user.id)
        return jwt.encode(
            payload,
            self._config.secret,
            algorithm=self._config.algorithm,
        )

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Validate and decode a JWT access token.

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
        """
        return jwt.decode(
            token,
            self._config.secret,
            algorithms=[self._config.algorithm],
            audience=AUDIENCE,
        )

    @property
    def access_token_expire_seconds(self) -> int:
        """Get access token expiry in seconds."""
        return self._config.access_token_expire_minutes * 60
