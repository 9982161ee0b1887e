"""Pass Summary — per-domain results and the aggregate returned to the scheduler.

Invariants:
    - checked_count == len(results): skipped domains are absent, not errored
    - available_count counts successful checks that found the domain available
    - previousStatus appears in the JSON only when changed; error only on failure
    - A failed check reports the persisted (unchanged) status and changed=False

Design Decisions:
    - camelCase keys in to_dict/to_response: the scheduler contract predates
      this service and is kept byte-compatible
"""

from dataclasses import dataclass, field
from datetime import datetime

from domainwatch.core.domain_types import DomainStatus


@dataclass(frozen=True)
class DomainCheckResult:
    """Result entry for one domain dispatched in a pass."""
    domain: str
    status: DomainStatus
    changed: bool
    previous_status: DomainStatus | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        item: dict = {
            "domain": self.domain,
            "status": self.status.value,
            "changed": self.changed,
        }
        if self.changed and self.previous_status is not None:
            item["previousStatus"] = self.previous_status.value
        if self.error is not None:
            item["error"] = self.error
        return item


def failed_result(domain: str, status: DomainStatus | str, error: str) -> DomainCheckResult:
    """Result for a domain whose check failed; persisted state untouched."""
    return DomainCheckResult(
        domain=domain, status=DomainStatus(status), changed=False, error=error,
    )


@dataclass(frozen=True)
class PassSummary:
    """Aggregate outcome of one reconciliation pass."""
    checked_count: int
    available_count: int
    duration_ms: int
    timestamp: datetime
    results: list[DomainCheckResult] = field(default_factory=list)

    def to_response(self) -> dict:
        return {
            "success": True,
            "checked": self.checked_count,
            "available": self.available_count,
            "domains": [r.to_dict() for r in self.results],
            "duration": self.duration_ms,
            "timestamp": self.timestamp.isoformat(),
        }


def summarize(
    results: list[DomainCheckResult], duration_ms: int, timestamp: datetime,
) -> PassSummary:
    """Aggregate per-domain results into a PassSummary."""
    available = sum(
        1 for r in results
        if r.succeeded and r.status == DomainStatus.AVAILABLE
    )
    return PassSummary(
        checked_count=len(results),
        available_count=available,
        duration_ms=duration_ms,
        timestamp=timestamp,
        results=list(results),
    )
