"""Domain Name Normalization — canonical hostname form used as the unique key.

Invariants:
    - normalize_domain is idempotent: normalize(normalize(x)) == normalize(x)
    - Output is lowercase, has no scheme, no leading "www.", no trailing "/"
    - is_valid_domain_name never raises

Design Decisions:
    - Strip prefixes/suffixes until a fixed point: a single pass is not idempotent
      for inputs like "www.www.example.com" or "example.com//"
"""

import re

_SCHEME = re.compile(r"^https?://")
_WWW = re.compile(r"^www\.")
_TRAILING_SLASH = re.compile(r"/$")

_DOMAIN_NAME = re.compile(
    r"^(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z0-9][a-z0-9-]{0,61}[a-z0-9]$",
    re.IGNORECASE,
)
MAX_DOMAIN_LENGTH = 253


def _strip_once(value: str) -> str:
    value = value.strip().lower()
    value = _SCHEME.sub("", value)
    value = _WWW.sub("", value)
    return _TRAILING_SLASH.sub("", value)


def normalize_domain(raw: str) -> str:
    """Return the canonical form of a user-supplied domain or URL."""
    current = raw
    while True:
        stripped = _strip_once(current)
        if stripped == current:
            return stripped
        current = stripped


def is_valid_domain_name(name: str) -> bool:
    """True when `name` is a syntactically valid multi-label hostname."""
    if not name or len(name) > MAX_DOMAIN_LENGTH:
        return False
    return _DOMAIN_NAME.match(name) is not None
