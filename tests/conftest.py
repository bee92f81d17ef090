"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

# la app crea su engine al importarse: que no apunte a Postgres
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret"

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles

from app.core.config import Settings, get_settings
from app.db.base import Base
from app.db.session import get_session
from app.main import app
from app.profile.github import GithubClient, get_github_client


# JSONB -> JSON en SQLite
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        SECRET_KEY="test-secret",
        GITHUB_TOKEN="gh-test-token",
        GITHUB_API_URL="https://github.test",
    )


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """SQLite en archivo: cada sesión usa su propia conexión."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    # FKs activas como en Postgres (ON DELETE CASCADE incluido)
    @event.listens_for(engine.sync_engine, "connect")
    def _foreign_keys_on(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    test_settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP contra la app real con DB de test y settings de test."""

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_settings] = lambda: test_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def github_responder(test_settings: Settings) -> Callable[[Callable], None]:
    """Reemplaza el cliente de GitHub por uno con httpx.MockTransport."""

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> None:
        transport = httpx.MockTransport(handler)
        app.dependency_overrides[get_github_client] = lambda: GithubClient(
            test_settings, transport=transport
        )

    return install


@pytest.fixture
def register(client: AsyncClient) -> Callable[..., Awaitable[str]]:
    """Registra un usuario y devuelve su token."""

    async def _register(
        name: str = "Jane Doe",
        email: str = "jane@example.com",
        password: str = "secret123",
    ) -> str:
        response = await client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _register


@pytest.fixture
async def token(register) -> str:
    return await register()


@pytest.fixture
async def other_token(register) -> str:
    return await register(name="John Roe", email="john@example.com")
