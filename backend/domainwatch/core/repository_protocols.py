"""Boundary Protocols — contracts between core/services and the IO shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO
    - AvailabilityResult / SendResult are frozen dataclasses: values crossing
      the boundary, never ORM rows or httpx responses
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from domainwatch.core.domain_types import DomainId, DomainStatus, NotificationOutcome


class DomainLike(Protocol):
    """Structural contract for tracked-domain rows passed to services.

    Avoids coupling the pass and the notifier to the ORM model.
    """
    id: DomainId
    name: str
    status: str
    active: bool
    last_checked_at: datetime | None
    created_at: datetime


@dataclass(frozen=True)
class AvailabilityResult:
    """One successful oracle answer."""
    domain: str
    available: bool
    code: str
    checked_at: datetime


@dataclass(frozen=True)
class SendResult:
    """Outcome of one email submission."""
    outcome: NotificationOutcome
    message_id: str | None = None
    error: str | None = None


class DomainRepository(Protocol):
    """Contract for tracked-domain persistence — implemented by shell."""
    async def list_active_by_staleness(self) -> list[DomainLike]: ...
    async def list_all(
        self, status: DomainStatus | None = None, active: bool | None = None,
    ) -> list[DomainLike]: ...
    async def get(self, domain_id: DomainId) -> DomainLike | None: ...
    async def get_by_name(self, name: str) -> DomainLike | None: ...
    async def insert(self, name: str) -> DomainLike: ...
    async def update_status(
        self, domain_id: DomainId, status: DomainStatus, checked_at: datetime,
    ) -> None: ...
    async def set_active(self, domain_id: DomainId, active: bool) -> DomainLike | None: ...
    async def delete(self, domain_id: DomainId) -> bool: ...


class NotificationRepository(Protocol):
    """Contract for the append-only notification log — implemented by shell."""
    async def append(
        self,
        domain_id: DomainId,
        outcome: NotificationOutcome,
        sent_at: datetime,
        provider_message_id: str | None = None,
        error_detail: str | None = None,
    ) -> None: ...
    async def list_for_domain(self, domain_id: DomainId) -> list: ...


class AvailabilityChecker(Protocol):
    """Contract for the availability oracle client."""
    async def check_availability(self, domain_name: str) -> AvailabilityResult: ...


class EmailSender(Protocol):
    """Contract for the outbound email provider."""
    async def send(self, to: str, subject: str, html: str) -> SendResult: ...
