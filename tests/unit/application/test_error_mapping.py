"""Tests for Pulse error to HTTP status mapping."""

import pytest

from pulse.application.api.v1.errors import map_pulse_error
from pulse.domain.shared.error import (
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    InvalidFilterError,
    NotFoundError,
    PulseError,
    StorageUnavailableError,
    UnknownReferenceError,
    ValidationError,
)


class TestMapPulseError:
    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (NotFoundError("missing"), 404),
            (ValidationError("bad", field="value"), 422),
            (InvalidFilterError("bad key", field="colour"), 422),
            (UnknownReferenceError("no data source"), 422),
            (ConflictError("exists"), 409),
            (AuthorizationError("denied", code="access_denied"), 403),
            (StorageUnavailableError("down"), 503),
            (ConfigurationError("misconfigured"), 503),
            (PulseError("odd"), 500),
        ],
    )
    def test_status_codes(self, error: PulseError, status: int):
        assert map_pulse_error(error).status_code == status

    def test_missing_token_is_401_with_challenge(self):
        exc = map_pulse_error(AuthorizationError("Authentication required", code="missing_token"))

        assert exc.status_code == 401
        assert exc.headers == {"WWW-Authenticate": "Bearer"}

    def test_invalid_filter_detail(self):
        exc = map_pulse_error(InvalidFilterError("Unknown key", field="colour"))

        assert exc.detail == {"code": "invalid_filter", "message": "Unknown key", "field": "colour"}

    def test_unknown_reference_code(self):
        exc = map_pulse_error(UnknownReferenceError("Data source not found: 9"))

        assert exc.detail["code"] == "unknown_reference"
