"""Status Transitions — diff between persisted status and a fresh oracle answer.

Invariants:
    - new_status is never UNKNOWN (a successful check always decides)
    - should_notify only on the edge into AVAILABLE (from UNKNOWN or REGISTERED)
    - AVAILABLE -> AVAILABLE never notifies; AVAILABLE -> REGISTERED is silent

Design Decisions:
    - Pure function over the two inputs: the pass does IO, this decides
"""

from dataclasses import dataclass

from domainwatch.core.domain_types import DomainStatus


@dataclass(frozen=True)
class Transition:
    """Outcome of comparing a persisted status with a fresh check."""
    previous_status: DomainStatus
    new_status: DomainStatus
    changed: bool
    should_notify: bool


def status_from_availability(available: bool) -> DomainStatus:
    return DomainStatus.AVAILABLE if available else DomainStatus.REGISTERED


def compute_transition(previous: DomainStatus | str, available: bool) -> Transition:
    """Compare the previously persisted status with the oracle's answer."""
    previous_status = DomainStatus(previous)
    new_status = status_from_availability(available)
    changed = previous_status != new_status
    return Transition(
        previous_status=previous_status,
        new_status=new_status,
        changed=changed,
        should_notify=changed and new_status == DomainStatus.AVAILABLE,
    )
