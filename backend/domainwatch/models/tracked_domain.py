"""TrackedDomain ORM — a monitored hostname and its last known registration status.

Invariants:
    - id is UUID primary key (client default)
    - name is unique and stored normalized (lowercase, no scheme/www/trailing slash)
    - status in {unknown, registered, available}; unknown only until the first check
    - status and last_checked_at are written together, only by the reconciliation pass
    - updated_at advances on every UPDATE issued through the ORM

Design Decisions:
    - status as String(20) holding DomainStatus values: portable across
      PostgreSQL and the SQLite test database
    - cascade delete for notification records, both ORM-side and FK-side
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from domainwatch.core.domain_types import DomainStatus
from domainwatch.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TrackedDomain(Base):
    """Tracked domain — owns its notification log."""
    __tablename__ = "domains"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DomainStatus.UNKNOWN.value,
        index=True,
    )
    active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, index=True,
    )
    last_checked_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )

    # Relationships
    notifications: Mapped[list["NotificationRecord"]] = relationship(
        "NotificationRecord", back_populates="domain",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="NotificationRecord.sent_at.desc()",
    )
