"""Trigger Authentication — configuration guard and bearer-token check.

Invariants:
    - Configuration is checked before credentials: a misconfigured deployment
      answers 500 with the missing variable names, never 401
    - Token comparison is constant-time (hmac.compare_digest)
    - Neither the expected nor the presented token is ever logged

Design Decisions:
    - Plain functions + thin FastAPI dependencies: the checks are testable
      without an app, the routes declare them with Depends
"""

import hmac
import logging

from fastapi import Depends, Header

from domainwatch.config import Settings, get_settings
from domainwatch.core.errors import ConfigurationError, UnauthorizedError

logger = logging.getLogger(__name__)


def verify_configured(settings: Settings) -> None:
    """Raise ConfigurationError when any required setting is empty."""
    missing = settings.missing_required_vars()
    if missing:
        raise ConfigurationError(missing)


def verify_bearer(authorization: str | None, secret: str) -> None:
    """Raise UnauthorizedError unless the header is exactly `Bearer <secret>`."""
    if not secret or not authorization:
        raise UnauthorizedError()
    expected = f"Bearer {secret}"
    if not hmac.compare_digest(authorization.encode(), expected.encode()):
        raise UnauthorizedError()


async def require_trigger_auth(
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> Settings:
    """Guard for the reconciliation trigger: full configuration, then token."""
    verify_configured(settings)
    verify_bearer(authorization, settings.cron_secret)
    return settings


async def require_admin_auth(
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> Settings:
    """Guard for the management API: only the shared secret must be set."""
    if not settings.cron_secret.strip():
        raise ConfigurationError(["CRON_SECRET"])
    verify_bearer(authorization, settings.cron_secret)
    return settings
