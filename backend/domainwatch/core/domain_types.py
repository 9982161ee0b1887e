"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - DomainId wraps UUID — never use bare UUID in domain logic
    - All valid states encoded as Enums — no raw string matching
    - DomainStatus.UNKNOWN only until the first successful check

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders and compare equal
      to the raw strings stored in the DB `status` / `outcome` columns
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

DomainId = NewType("DomainId", UUID)
NotificationId = NewType("NotificationId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class DomainStatus(str, Enum):
    """Tracked domain states — maps to DB `status` column."""
    UNKNOWN = "unknown"
    REGISTERED = "registered"
    AVAILABLE = "available"


class NotificationOutcome(str, Enum):
    """Delivery outcome of one notification attempt — maps to DB `outcome` column."""
    SENT = "sent"
    FAILED = "failed"


class AvailabilityCode(str, Enum):
    """Free-text availability codes returned by the oracle."""
    TRUE = "true"
    FALSE = "false"
    PREMIUM = "premium domain"
    RESERVED = "reserved"
    BAD_TLD = "bad tld"
