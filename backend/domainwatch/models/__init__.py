"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - TrackedDomain is the aggregate root; notification records are scoped by domain_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from domainwatch.models.tracked_domain import TrackedDomain  # noqa: F401
from domainwatch.models.notification_record import NotificationRecord  # noqa: F401
