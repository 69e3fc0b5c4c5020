"""Pytest configuration.

This configuration ensures:
1. Settings load from test defaults (no .env file required)
2. Async tests run under pytest-asyncio
3. Container singletons are reset between tests
4. Database fixtures use a throwaway SQLite file per test
"""

import os

# Must run before anything imports src.core.config (settings load on import)
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("API_BASE_URL", "https://api.cloudvault.test")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-chars")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_cloudvault")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_cloudvault")
os.environ.setdefault("BCRYPT_COST_FACTOR", "4")

import inspect  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: API tests through the TestClient")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if inspect.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)


@pytest.fixture(autouse=True)
def reset_container_singletons():
    """Give each test fresh rate limit and dedup state."""
    from src.core.container import (
        get_processed_event_store,
        get_rate_limit,
        get_rate_limit_store,
    )

    get_rate_limit_store.cache_clear()
    get_rate_limit.cache_clear()
    get_processed_event_store.cache_clear()
    yield
    get_rate_limit_store.cache_clear()
    get_rate_limit.cache_clear()
    get_processed_event_store.cache_clear()


@pytest_asyncio.fixture
async def test_database(tmp_path):
    """Provide a Database on a fresh SQLite file with all tables created.

    A file (not :memory:) is used because every pooled connection to an
    in-memory SQLite database sees its own empty database.

    Usage:
        async def test_something(test_database):
            async with test_database.get_session() as session:
                ...
    """
    from src.infrastructure.persistence.database import Database

    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'billing.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest_asyncio.fixture
async def db_session(test_database):
    """Provide one session on the per-test database."""
    async with test_database.get_session() as session:
        yield session


@pytest.fixture
def mock_logger():
    """Provide a mock logger for testing.

    `bind()` returns the same mock so bound log calls can be asserted.

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
    logger.bind = Mock(return_value=logger)
    return logger
