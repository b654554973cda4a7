"""
Pytest configuration and fixtures.

WHY: Fixtures provide reusable test setup/teardown logic, reducing
duplication and ensuring consistent test environments.
"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator, List
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from httpx import AsyncClient, ASGITransport

from petowners.core.config import Settings
from petowners.core.owner_config import OwnerConfiguration
from petowners.db.session import build_session_factory
from petowners.main import create_app
from petowners.models.base import Base
from petowners.services.owner_service import OwnerService


# Test database URL
# WHY: In-memory SQLite eliminates external database dependencies and
# makes tests faster. aiosqlite keeps one shared connection for :memory:.
TEST_ASYNC_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """
    Create a test database engine.

    WHY: Function scope ensures each test gets a fresh database state,
    preventing test pollution and ensuring test isolation.
    """
    engine = create_async_engine(TEST_ASYNC_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine, as the app would build it."""
    return build_session_factory(db_engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a test database session.

    WHY: Factories commit through this session so the data is visible to
    the separate sessions the service opens.

    Yields:
        AsyncSession: Database session for the test
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def owner_configurations() -> List[OwnerConfiguration]:
    """
    Configured owners for tests.

    WHY: Mirrors the shape of the owners.yml entries: Fred with two pets,
    Barney with none (tests add Barney's pets themselves).
    """
    return [
        OwnerConfiguration(name="Fred", age=35, pets=["Dino", "Baby Puss"]),
        OwnerConfiguration(name="Barney", age=30),
    ]


@pytest.fixture
def owner_service(owner_configurations, session_factory) -> OwnerService:
    """OwnerService over the test database."""
    return OwnerService(owner_configurations, session_factory)


@pytest.fixture
def test_settings() -> Settings:
    """Settings that never read owners from the working directory."""
    return Settings(
        DATABASE_URL=TEST_ASYNC_DATABASE_URL,
        OWNERS_FILE="does-not-exist.yml",
        OWNERS={},
        SEED_PETS=False,
    )


@pytest.fixture
def app(test_settings, owner_configurations, db_engine):
    """Application wired to the test engine and owners."""
    return create_app(
        app_settings=test_settings,
        owner_configurations=owner_configurations,
        db_engine=db_engine,
    )


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test HTTP client.

    WHY: AsyncClient allows testing FastAPI endpoints without running
    a real server. ASGITransport does not send lifespan events, so tables
    come from db_engine and seeding is triggered by the tests that need it.

    Yields:
        AsyncClient: HTTP client for making test requests
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
