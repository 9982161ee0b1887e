"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Required settings are present so the trigger reaches the pass
    - Every test gets a fresh SQLite database file under tmp_path
    - SQLite enforces foreign keys (ON DELETE CASCADE is exercised)

Design Decisions:
    - File database over :memory:: repositories open one session per
      operation and the reconciliation pass writes concurrently, so every
      session needs its own connection to the same database
"""

import os

# Ensure tests never talk to real providers
os.environ.setdefault("CRON_SECRET", "test-cron-secret")
os.environ.setdefault("DOMAINSDUCK_API_KEY", "test-domainsduck-key")
os.environ.setdefault("RESEND_API_KEY", "re_test_key")
os.environ.setdefault("RESEND_FROM_EMAIL", "alerts@example.com")
os.environ.setdefault("NOTIFICATION_EMAIL", "owner@example.com")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from domainwatch.db.base import Base  # noqa: E402
import domainwatch.models  # noqa: E402,F401
from domainwatch.infrastructure.database import DatabaseSessionManager  # noqa: E402


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'domainwatch.db'}", echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def test_db_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the test engine (no pool config)."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager
