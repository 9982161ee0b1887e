"""Domain Repositories — SQLAlchemy implementations of the persistence protocols.

Invariants:
    - Every operation opens its own short-lived session from the injected
      factory: concurrent per-domain tasks never share an AsyncSession
    - update_status writes status and last_checked_at in one UPDATE statement
    - list_active_by_staleness orders by last_checked_at ascending, never-checked first
    - insert never sets a status other than unknown
    - Duplicate names surface as DuplicateDomainError, not IntegrityError

Design Decisions:
    - Session factory over a request-scoped session: the reconciliation pass
      fans out writes concurrently, and a single AsyncSession is not task-safe
    - Rows returned detached (expire_on_commit=False): callers read attributes
      after the session is closed without triggering lazy IO
"""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from domainwatch.core.domain_types import DomainId, DomainStatus, NotificationOutcome
from domainwatch.core.errors import DuplicateDomainError
from domainwatch.models.notification_record import NotificationRecord
from domainwatch.models.tracked_domain import TrackedDomain

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


class SqlDomainRepository:
    """Tracked-domain persistence backed by SQLAlchemy."""

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    async def list_active_by_staleness(self) -> list[TrackedDomain]:
        """Active domains, least recently checked first (never-checked before all)."""
        async with self._session_factory() as db:
            result = await db.execute(
                select(TrackedDomain)
                .where(TrackedDomain.active.is_(True))
                .order_by(
                    TrackedDomain.last_checked_at.asc().nulls_first(),
                    TrackedDomain.created_at.asc(),
                )
            )
            return list(result.scalars().all())

    async def list_all(
        self, status: DomainStatus | None = None, active: bool | None = None,
    ) -> list[TrackedDomain]:
        query = select(TrackedDomain).order_by(TrackedDomain.created_at.desc())
        if status is not None:
            query = query.where(TrackedDomain.status == DomainStatus(status).value)
        if active is not None:
            query = query.where(TrackedDomain.active.is_(active))
        async with self._session_factory() as db:
            result = await db.execute(query)
            return list(result.scalars().all())

    async def get(self, domain_id: DomainId) -> TrackedDomain | None:
        async with self._session_factory() as db:
            return await db.get(TrackedDomain, domain_id)

    async def get_by_name(self, name: str) -> TrackedDomain | None:
        async with self._session_factory() as db:
            result = await db.execute(
                select(TrackedDomain).where(TrackedDomain.name == name),
            )
            return result.scalar_one_or_none()

    async def insert(self, name: str) -> TrackedDomain:
        """Start tracking `name` (already normalized) with status unknown."""
        async with self._session_factory() as db:
            domain = TrackedDomain(
                name=name, status=DomainStatus.UNKNOWN.value, active=True,
            )
            db.add(domain)
            try:
                await db.commit()
            except IntegrityError:
                await db.rollback()
                raise DuplicateDomainError(name)
            return domain

    async def update_status(
        self, domain_id: DomainId, status: DomainStatus, checked_at: datetime,
    ) -> None:
        """Persist one check result; the only writer of `status`."""
        async with self._session_factory() as db:
            await db.execute(
                update(TrackedDomain)
                .where(TrackedDomain.id == domain_id)
                .values(
                    status=DomainStatus(status).value,
                    last_checked_at=checked_at,
                )
            )
            await db.commit()

    async def set_active(self, domain_id: DomainId, active: bool) -> TrackedDomain | None:
        async with self._session_factory() as db:
            domain = await db.get(TrackedDomain, domain_id)
            if domain is None:
                return None
            domain.active = active
            await db.commit()
            return domain

    async def delete(self, domain_id: DomainId) -> bool:
        """Delete the domain; notification records go with it (FK cascade)."""
        async with self._session_factory() as db:
            domain = await db.get(TrackedDomain, domain_id)
            if domain is None:
                return False
            await db.delete(domain)
            await db.commit()
            logger.info(f"Domain {domain.name} deleted", extra={"domain": domain.name})
            return True


class SqlNotificationRepository:
    """Append-only notification log backed by SQLAlchemy."""

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    async def append(
        self,
        domain_id: DomainId,
        outcome: NotificationOutcome,
        sent_at: datetime,
        provider_message_id: str | None = None,
        error_detail: str | None = None,
    ) -> None:
        outcome = NotificationOutcome(outcome)
        async with self._session_factory() as db:
            db.add(NotificationRecord(
                domain_id=domain_id,
                outcome=outcome.value,
                sent_at=sent_at,
                provider_message_id=provider_message_id,
                error_detail=(
                    error_detail if outcome == NotificationOutcome.FAILED else None
                ),
            ))
            await db.commit()

    async def list_for_domain(self, domain_id: DomainId) -> list[NotificationRecord]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(NotificationRecord)
                .where(NotificationRecord.domain_id == domain_id)
                .order_by(NotificationRecord.sent_at.desc())
            )
            return list(result.scalars().all())
