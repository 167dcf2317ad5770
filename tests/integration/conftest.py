"""Fixtures for tests that run against a real (in-memory SQLite) database."""

from collections.abc import AsyncIterator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from pulse.config import Config, DatabaseConfig
from pulse.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    create_tables,
)

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_db_engine(Config(database=DatabaseConfig(url=MEMORY_URL)))
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    factory = create_session_factory(engine)
    async with factory() as session:
        yield session
