"""Pytest configuration and shared fixtures.

Fixture groups:
1. Cross-cutting mocks (logger)
2. In-memory directory and repositories (unit tests)
3. Permission cache and authorization gate wired over the fakes
4. Real adapters for integration tests (sqlite database, fakeredis)
"""

from unittest.mock import Mock

import pytest
import pytest_asyncio

from rolegate.application.services import (
    AuthorizationGate,
    PermissionCache,
    PermissionResolver,
)
from rolegate.infrastructure.cache import InMemoryCacheAdapter
from rolegate.infrastructure.security import JWTService
from tests.utils.fakes import (
    Directory,
    InMemoryPermissionRepository,
    InMemoryRoleRepository,
    InMemoryUserRepository,
)

ACCESS_SECRET = "test-access-secret-0123456789abcdef0123"
REFRESH_SECRET = "test-refresh-secret-0123456789abcdef012"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests against sqlite and fakeredis"
    )
    config.addinivalue_line("markers", "api: FastAPI dependency tests")


# =============================================================================
# Cross-cutting mocks
# =============================================================================


@pytest.fixture
def mock_logger():
    """Provide a mock logger for testing.

    Usage:
        def test_something(mock_logger):
            service = MyService(logger=mock_logger)
            service.do_something()
            mock_logger.info.assert_called_once()
    """
    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    return logger


# =============================================================================
# In-memory directory
# =============================================================================


@pytest.fixture
def directory():
    return Directory()


@pytest.fixture
def user_repo(directory):
    return InMemoryUserRepository(directory)


@pytest.fixture
def role_repo(directory):
    return InMemoryRoleRepository(directory)


@pytest.fixture
def permission_repo(directory):
    return InMemoryPermissionRepository(directory)


# =============================================================================
# Authorization services
# =============================================================================


@pytest.fixture
def memory_store():
    return InMemoryCacheAdapter()


@pytest.fixture
def permission_cache(memory_store, mock_logger):
    return PermissionCache(store=memory_store, logger=mock_logger, ttl_seconds=900)


@pytest.fixture
def gate(user_repo, permission_cache, mock_logger):
    return AuthorizationGate(
        resolver=PermissionResolver(user_repo=user_repo),
        permission_cache=permission_cache,
        logger=mock_logger,
    )


@pytest.fixture
def token_service():
    return JWTService(access_secret=ACCESS_SECRET, refresh_secret=REFRESH_SECRET)


# =============================================================================
# Integration adapters
# =============================================================================


@pytest_asyncio.fixture
async def test_database(tmp_path):
    """Provide a fresh sqlite database with all tables created.

    A file database (not :memory:) so separate sessions share state.

    Usage:
        async def test_something(test_database):
            async with test_database.get_session() as session1:
                ...
            async with test_database.get_session() as session2:
                ...
    """
    from rolegate.infrastructure.persistence.database import Database

    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'rolegate.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(test_database):
    async with test_database.get_session() as session:
        yield session


@pytest_asyncio.fixture
async def redis_test_client():
    """Provide a fresh fakeredis client for each test."""
    from fakeredis import FakeAsyncRedis

    client = FakeAsyncRedis()
    yield client
    await client.flushall()
    await client.aclose()


@pytest_asyncio.fixture
async def cache_adapter(redis_test_client):
    """Provide a RedisAdapter over the fakeredis client."""
    from rolegate.infrastructure.cache import RedisAdapter

    return RedisAdapter(redis_client=redis_test_client)
