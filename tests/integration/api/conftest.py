"""Fixtures that drive the full FastAPI app over an in-memory database."""

from collections.abc import AsyncIterator

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from pulse.application.api.rest.app import create_app
from pulse.cli.commands.admin import bootstrap_admin
from pulse.config import AuthConfig, Config, DatabaseConfig, JwtConfig

ADMIN_EMAIL = "admin@example.com"


@pytest_asyncio.fixture
async def app() -> AsyncIterator[FastAPI]:
    config = Config(
        database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"),
        auth=AuthConfig(jwt=JwtConfig(secret="api-test-secret")),
    )
    app = create_app(config)
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def admin_headers(app: FastAPI) -> dict[str, str]:
    token = await bootstrap_admin(app.state.dishka_container, ADMIN_EMAIL)
    return {"Authorization": f"Bearer {token}"}
