"""Shared test fixtures and configuration."""
import pytest
import os
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# Set test environment variables before importing app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RESTAURANTS_FILE", str(FIXTURES_DIR / "test_restaurants.yaml"))

from fastapi.testclient import TestClient

from dinedesk.main import app
from dinedesk.db.database import Base, get_db
from dinedesk.core.dependencies import get_restaurant_repository
from dinedesk.services.restaurant.repository import RestaurantRepository
from dinedesk.services.restaurant.in_memory_restaurant import InMemoryRestaurantProvider


# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_db_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_db(test_db_engine):
    """Create test database session."""
    async_session = async_sessionmaker(
        test_db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture
def test_restaurants_path():
    """Return path to test restaurants YAML file."""
    return FIXTURES_DIR / "test_restaurants.yaml"


@pytest.fixture
def test_restaurant_repository(test_restaurants_path):
    """Create restaurant repository with test data."""
    provider = InMemoryRestaurantProvider(restaurants_file=str(test_restaurants_path))
    return RestaurantRepository(provider)


@pytest.fixture
def api_database_url(tmp_path):
    """File-backed SQLite database with the schema created, for API tests."""
    db_path = tmp_path / "api.db"
    sync_engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()
    return f"sqlite+aiosqlite:///{db_path}"


@pytest.fixture
def override_get_db(api_database_url):
    """Override get_db with sessions opened inside the app's event loop."""
    engine = create_async_engine(api_database_url, poolclass=NullPool)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _override_get_db():
        async with session_factory() as session:
            yield session
    return _override_get_db


@pytest.fixture
def override_get_restaurant_repository(test_restaurant_repository):
    """Override get_restaurant_repository dependency with test restaurants."""
    def _override_get_restaurant_repository():
        return test_restaurant_repository
    return _override_get_restaurant_repository


@pytest.fixture
def test_client(override_get_db, override_get_restaurant_repository):
    """Create FastAPI test client with overrides."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_restaurant_repository] = override_get_restaurant_repository

    client = TestClient(app)

    yield client

    # Clear overrides
    app.dependency_overrides.clear()
