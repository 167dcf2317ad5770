"""Tests for JWT issue and validation."""

from datetime import UTC, datetime

import jwt
import pytest

from pulse.config import JwtConfig
from pulse.domain.auth.model.user import User
from pulse.domain.auth.model.value import UserId
from pulse.domain.auth.service.token import TokenService
from pulse.domain.shared.error import ConfigurationError


def _user(user_id: int | None = 7) -> User:
    return User(
        id=UserId(user_id) if user_id is not None else None,
        email="writer@example.com",
        created_at=datetime.now(UTC),
    )


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(_config=JwtConfig(secret="unit-test-secret", access_token_expire_minutes=5))


class TestTokenService:
    def test_issued_token_validates(self, token_service: TokenService):
        token = token_service.create_access_token(_user())

        claims = token_service.validate_access_token(token)

        assert claims["sub"] == "7"
        assert claims["email"] == "writer@example.com"
        assert claims["aud"] == "authenticated"
        assert claims["exp"] - claims["iat"] == 300

    def test_tokens_are_unique(self, token_service: TokenService):
        first = token_service.create_access_token(_user())
        second = token_service.create_access_token(_user())

        assert first != second

    def test_token_signed_with_other_secret_is_rejected(self, token_service: TokenService):
        other = TokenService(_config=JwtConfig(secret="another-secret"))
        token = other.create_access_token(_user())

        with pytest.raises(jwt.InvalidTokenError):
            token_service.validate_access_token(token)

    def test_expired_token_is_rejected(self):
        service = TokenService(
            _config=JwtConfig(secret="unit-test-secret", access_token_expire_minutes=-1)
        )
        token = service.create_access_token(_user())

        with pytest.raises(jwt.ExpiredSignatureError):
            service.validate_access_token(token)

    def test_unsaved_user_is_rejected(self, token_service: TokenService):
        with pytest.raises(ValueError):
            token_service.create_access_token(_user(None))

    def test_missing_secret_is_a_configuration_error(self):
        service = TokenService(_config=JwtConfig(secret=""))

        with pytest.raises(ConfigurationError):
            service.create_access_token(_user())

    def test_expire_seconds(self, token_service: TokenService):
        assert token_service.access_token_expire_seconds == 300
