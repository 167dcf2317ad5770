"""Global test fixtures."""

import os

# Set JWT secret and database before any test modules import Config
# This must happen at module load time, not in a fixture
os.environ.setdefault("PULSE_AUTH__JWT__SECRET", "test-secret-for-unit-tests-min-32")
os.environ.setdefault("PULSE_DATABASE__URL", "sqlite+aiosqlite:///:memory:")
