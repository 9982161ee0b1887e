"""API test fixtures — FastAPI app over httpx ASGITransport.

Invariants:
    - db_manager patched to the per-test SQLite engine
    - The reconciliation pass is built from fakes through get_pass_factory
    - Settings overridable per test through dependency_overrides[get_settings]

Design Decisions:
    - db_manager patched as a module global: routes resolve it through
      get_db_manager at call time
"""

from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient

import domainwatch.infrastructure.database as db_module
from domainwatch.api.routes.check_domains import get_pass_factory
from domainwatch.main import app
from domainwatch.services.domain_repository import (
    SqlDomainRepository,
    SqlNotificationRepository,
)
from domainwatch.services.notifier import Notifier
from domainwatch.services.reconciliation_pass import ReconciliationPass
from tests.services.fakes import FakeChecker, FakeSender


@pytest.fixture
def oracle_answers() -> dict:
    """Scripted oracle answers keyed by domain name; tests fill it in."""
    return {}


@pytest.fixture
def fake_checker(oracle_answers):
    return FakeChecker(oracle_answers)


@pytest.fixture
def fake_sender():
    return FakeSender()


@pytest.fixture
async def client(test_db_manager, fake_checker, fake_sender):
    """FastAPI test client with DB and provider dependencies replaced."""
    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    def override_pass_factory():
        @asynccontextmanager
        async def factory(settings):
            notifier = Notifier(
                fake_sender,
                SqlNotificationRepository(test_db_manager.session),
                recipient=settings.notification_email,
            )
            yield ReconciliationPass(
                SqlDomainRepository(test_db_manager.session),
                fake_checker,
                notifier,
                soft_deadline_seconds=settings.pass_soft_deadline_seconds,
            )
        return factory

    app.dependency_overrides[get_pass_factory] = override_pass_factory

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def domain_repo(test_db_manager):
    return SqlDomainRepository(test_db_manager.session)
