"""Notifier — emails one "domain became available" message and logs the attempt.

Invariants:
    - Exactly one sender call and one NotificationRecord per notify() call
    - The record is appended regardless of outcome (sent or failed)
    - notify() never raises: sender exceptions become FAILED, a failed append
      is logged and the delivery outcome is still returned
    - No retry: the record is the durable side effect

Design Decisions:
    - Notifier depends on Protocols (EmailSender, NotificationRepository):
      the pass and the tests inject fakes without touching httpx or the DB
"""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from domainwatch.core.domain_types import NotificationOutcome
from domainwatch.core.render_notification import render_html, render_subject
from domainwatch.core.repository_protocols import (
    DomainLike,
    EmailSender,
    NotificationRepository,
    SendResult,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Notifier:
    """Composes and submits the availability email for one domain."""

    def __init__(
        self,
        sender: EmailSender,
        notifications: NotificationRepository,
        recipient: str,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.sender = sender
        self.notifications = notifications
        self.recipient = recipient
        self._clock = clock

    async def notify(self, domain: DomainLike) -> SendResult:
        """Send the notification for `domain` and append its log record."""
        transition_at = self._clock()
        result = await self._send(domain, transition_at)

        try:
            await self.notifications.append(
                domain.id,
                result.outcome,
                sent_at=transition_at,
                provider_message_id=result.message_id,
                error_detail=result.error,
            )
        except Exception as e:
            logger.error(
                f"Failed to record notification for {domain.name}: {e}",
                extra={"domain": domain.name, "error_code": "NOTIFICATION_LOG_FAILED"},
            )

        if result.outcome == NotificationOutcome.SENT:
            logger.info(
                f"Email sent for {domain.name}: {result.message_id}",
                extra={"domain": domain.name, "outcome": result.outcome.value},
            )
        else:
            logger.error(
                f"Email send failed for {domain.name}: {result.error}",
                extra={"domain": domain.name, "outcome": result.outcome.value},
            )
        return result

    async def _send(self, domain: DomainLike, transition_at: datetime) -> SendResult:
        try:
            return await self.sender.send(
                self.recipient,
                render_subject(domain.name),
                render_html(domain.name, transition_at, domain.created_at),
            )
        except Exception as e:
            return SendResult(
                NotificationOutcome.FAILED, error=str(e) or type(e).__name__,
            )
