"""NotificationRecord ORM — append-only log of availability notification attempts.

Invariants:
    - Exactly one row per notification attempt (sent or failed)
    - error_detail present only when outcome == failed
    - Never updated; deleted only by cascade from the owning domain

Design Decisions:
    - Logging table, not enforcement: nothing in the pass reads it back
    - ON DELETE CASCADE at the FK: deleting a domain removes its log even
      when the delete bypasses the ORM relationship
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from domainwatch.db.base import Base


class NotificationRecord(Base):
    """Notification log entry for one registered -> available edge."""
    __tablename__ = "notification_records"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    domain_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("domains.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    outcome: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    provider_message_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )
    error_detail: Mapped[str | None] = mapped_column(Text, nullable=True)

    domain: Mapped["TrackedDomain"] = relationship(
        "TrackedDomain", back_populates="notifications",
    )
