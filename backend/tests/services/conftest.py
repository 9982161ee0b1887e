"""Service test fixtures — in-memory fakes and SQL-backed repositories.

Invariants:
    - Fakes implement the boundary Protocols; no httpx, no network
    - SQL repositories run against the per-test SQLite database
"""

import pytest

from domainwatch.services.domain_repository import (
    SqlDomainRepository,
    SqlNotificationRepository,
)
from tests.services.fakes import FakeNotificationRepository, FakeSender


@pytest.fixture
def domain_repo(test_db_manager):
    return SqlDomainRepository(test_db_manager.session)


@pytest.fixture
def notification_repo(test_db_manager):
    return SqlNotificationRepository(test_db_manager.session)


@pytest.fixture
def fake_sender():
    return FakeSender()


@pytest.fixture
def fake_notifications():
    return FakeNotificationRepository()
