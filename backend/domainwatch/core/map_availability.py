"""Availability Code Mapping — oracle free-text code -> availability boolean.

Invariants:
    - "true" and "premium domain" map to True
    - "false", "reserved" and "bad tld" map to False
    - Any other code (including empty/missing) raises OracleProtocolError

Design Decisions:
    - Premium domains count as available: still purchasable, at non-standard
      pricing.
    - Comparison is case-insensitive and whitespace-trimmed: the oracle is
      inconsistent about casing
"""

from domainwatch.core.domain_types import AvailabilityCode
from domainwatch.core.errors import OracleProtocolError

_AVAILABLE_CODES = frozenset({AvailabilityCode.TRUE, AvailabilityCode.PREMIUM})
_UNAVAILABLE_CODES = frozenset({
    AvailabilityCode.FALSE, AvailabilityCode.RESERVED, AvailabilityCode.BAD_TLD,
})


def map_availability_code(code: str | None) -> bool:
    """Map the oracle's availability code to available=True/False."""
    if code is None:
        raise OracleProtocolError("Oracle response has no availability code")
    normalized = str(code).strip().lower()
    try:
        parsed = AvailabilityCode(normalized)
    except ValueError:
        raise OracleProtocolError(f"Unrecognized availability code: {code!r}")
    if parsed in _AVAILABLE_CODES:
        return True
    if parsed in _UNAVAILABLE_CODES:
        return False
    raise OracleProtocolError(f"Unmapped availability code: {code!r}")
