"""Pytest configuration and fixtures."""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from imagehost.config import Settings
from imagehost.database import build_engine, build_sessionmaker
from imagehost.main import create_app
from imagehost.models import Base
from imagehost.services.file_storage import FileStorageService

STATIC_BASE_URL = "http://test/static"


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file and storage directory."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        FILE_STORAGE_PATH=str(tmp_path / "static"),
        STATIC_BASE_URL=STATIC_BASE_URL,
    )


@pytest.fixture
async def test_engine(settings):
    """Create test database engine."""
    engine = build_engine(settings.database_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with build_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def storage(settings) -> FileStorageService:
    return FileStorageService(settings.FILE_STORAGE_PATH)


@asynccontextmanager
async def _serve(app):
    async with app.router.lifespan_context(app):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac


@pytest.fixture
def client_factory():
    """Build a client for custom settings: ``async with client_factory(settings) as c``."""
    return lambda settings: _serve(create_app(settings))


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Client for an app running its lifespan against the test settings."""
    async with _serve(app) as ac:
        yield ac
