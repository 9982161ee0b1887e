"""Reconciliation Pass — check every active domain once, persist transitions, notify.

Invariants:
    - Domains dispatched in last_checked_at order (never-checked first)
    - Soft deadline checked before each dispatch; once exceeded, the remaining
      domains are skipped entirely (absent from the summary, state untouched)
    - Dispatched checks run concurrently; the pass waits for all of them
    - Oracle failure: no write, result carries the previous status + error
    - Success: one UPDATE (status + last_checked_at), then notify iff the
      domain just moved into AVAILABLE (persist happens-before notify)
    - Write or notify failures stay local to their domain; run() only raises
      DatabaseError when the initial load fails
    - No status caching: every pass re-derives status from a live oracle call

Design Decisions:
    - One asyncio task per domain + gather barrier: fire-and-forget fan-out
      with no cancellation of in-flight checks (each is bounded by the
      oracle client's own timeout)
    - Results appended as tasks settle: no ordering promise between domains
    - Collaborators injected as Protocols: tests drive the full algorithm
      with in-memory fakes and a scripted clock
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import httpx

from domainwatch.config import Settings
from domainwatch.core.domain_types import DomainStatus
from domainwatch.core.errors import DatabaseError, DomainWatchError
from domainwatch.core.pass_summary import (
    DomainCheckResult,
    PassSummary,
    failed_result,
    summarize,
)
from domainwatch.core.rate_limiter import SlidingWindowRateLimiter
from domainwatch.core.repository_protocols import (
    AvailabilityChecker,
    DomainLike,
    DomainRepository,
)
from domainwatch.core.soft_deadline import SoftDeadline
from domainwatch.core.transition import compute_transition
from domainwatch.infrastructure.domainsduck_client import DomainsduckClient
from domainwatch.infrastructure.resend_client import ResendEmailSender
from domainwatch.services.domain_repository import (
    SessionFactory,
    SqlDomainRepository,
    SqlNotificationRepository,
)
from domainwatch.services.notifier import Notifier

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReconciliationPass:
    """One scheduled unit of work over all active tracked domains."""

    def __init__(
        self,
        domains: DomainRepository,
        checker: AvailabilityChecker,
        notifier: Notifier,
        soft_deadline_seconds: float = 9.0,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.domains = domains
        self.checker = checker
        self.notifier = notifier
        self.soft_deadline_seconds = soft_deadline_seconds
        self._clock = clock
        self._now = now

    async def run(self) -> PassSummary:
        """Execute the pass and return its summary."""
        deadline = SoftDeadline(self.soft_deadline_seconds, self._clock)
        tracked = await self._load_active_domains()
        logger.info(f"Found {len(tracked)} active domains to check")

        results: list[DomainCheckResult] = []
        tasks: list[asyncio.Task] = []
        for index, domain in enumerate(tracked):
            if deadline.exceeded():
                skipped = len(tracked) - index
                logger.warning(
                    f"Soft deadline reached, skipping {skipped} remaining domains",
                    extra={"skipped": skipped, "duration_ms": deadline.elapsed_ms()},
                )
                break
            tasks.append(asyncio.create_task(self._reconcile_one(domain, results)))

        if tasks:
            await asyncio.gather(*tasks)

        summary = summarize(results, deadline.elapsed_ms(), self._now())
        logger.info(
            f"Check completed: {summary.checked_count} domains in {summary.duration_ms}ms",
            extra={
                "checked": summary.checked_count,
                "available": summary.available_count,
                "duration_ms": summary.duration_ms,
            },
        )
        return summary

    async def _load_active_domains(self) -> list[DomainLike]:
        try:
            return list(await self.domains.list_active_by_staleness())
        except DomainWatchError:
            raise
        except Exception as e:
            logger.error(f"Error fetching domains: {e}", exc_info=True)
            raise DatabaseError(str(e) or type(e).__name__, "load")

    async def _reconcile_one(
        self, domain: DomainLike, results: list[DomainCheckResult],
    ) -> None:
        """Check, persist and maybe notify for one domain. Never raises."""
        try:
            results.append(await self._check_and_apply(domain))
        except Exception as e:
            logger.error(
                f"Unexpected error reconciling {domain.name}: {e}",
                exc_info=True, extra={"domain": domain.name},
            )
            results.append(failed_result(
                domain.name, _safe_status(domain.status), str(e) or type(e).__name__,
            ))

    async def _check_and_apply(self, domain: DomainLike) -> DomainCheckResult:
        previous = DomainStatus(domain.status)
        try:
            availability = await self.checker.check_availability(domain.name)
        except Exception as e:
            message = e.message if isinstance(e, DomainWatchError) else (str(e) or type(e).__name__)
            logger.warning(
                f"Error checking domain {domain.name}: {message}",
                extra={
                    "domain": domain.name,
                    "error_code": getattr(e, "code", type(e).__name__),
                },
            )
            return failed_result(domain.name, previous, message)

        transition = compute_transition(previous, availability.available)
        try:
            await self.domains.update_status(
                domain.id, transition.new_status, self._now(),
            )
        except Exception as e:
            # Known best-effort gap: the summary still reports the computed status.
            logger.error(
                f"Error updating domain {domain.name}: {e}",
                extra={"domain": domain.name, "error_code": "STATUS_WRITE_FAILED"},
            )

        if transition.should_notify:
            logger.info(
                f"Domain became available: {domain.name}",
                extra={"domain": domain.name, "previous_status": previous.value},
            )
            await self.notifier.notify(domain)

        logger.info(
            f"Checked {domain.name}: {transition.new_status.value}"
            f"{' (changed)' if transition.changed else ''}",
            extra={
                "domain": domain.name,
                "status": transition.new_status.value,
                "changed": transition.changed,
            },
        )
        return DomainCheckResult(
            domain=domain.name,
            status=transition.new_status,
            changed=transition.changed,
            previous_status=previous if transition.changed else None,
        )


def _safe_status(raw: str) -> DomainStatus:
    try:
        return DomainStatus(raw)
    except ValueError:
        return DomainStatus.UNKNOWN


@asynccontextmanager
async def reconciliation_pass_from_settings(
    settings: Settings,
    session_factory: SessionFactory,
    http_client: httpx.AsyncClient | None = None,
) -> AsyncIterator[ReconciliationPass]:
    """Wire a pass to the real oracle, email provider and database.

    The rate limiter is created here, per pass: the pass is the unit of work.
    A caller-supplied `http_client` is shared by both adapters and left open;
    otherwise each adapter owns its client and closes it when the pass ends.
    """
    limiter = SlidingWindowRateLimiter(
        settings.oracle_rate_limit_max_requests,
        settings.oracle_rate_limit_window_seconds,
    )
    oracle = DomainsduckClient(
        settings.domainsduck_api_url,
        settings.domainsduck_api_key,
        timeout_seconds=settings.oracle_timeout_seconds,
        rate_limiter=limiter,
        http_client=http_client,
    )
    sender = ResendEmailSender(
        settings.resend_api_key,
        settings.resend_from_email,
        api_url=settings.resend_api_url,
        timeout_seconds=settings.email_timeout_seconds,
        http_client=http_client,
    )
    async with oracle, sender:
        notifier = Notifier(
            sender,
            SqlNotificationRepository(session_factory),
            recipient=settings.notification_email,
        )
        yield ReconciliationPass(
            SqlDomainRepository(session_factory),
            oracle,
            notifier,
            soft_deadline_seconds=settings.pass_soft_deadline_seconds,
        )
