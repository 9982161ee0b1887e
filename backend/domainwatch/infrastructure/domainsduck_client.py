"""Availability Client — one Domainsduck lookup per call, bounded by a hard timeout.

Invariants:
    - Exactly one outbound GET per check_availability() call (no retries)
    - Total call time bounded by timeout_seconds (8s default, under the ~10s
      platform ceiling)
    - Timeout -> OracleTimeoutError; non-2xx/transport -> OracleRequestError;
      unreadable payload or unknown code -> OracleProtocolError
    - When a rate limiter is attached and exhausted, no request is issued
    - The API key never appears in logs or error messages

Design Decisions:
    - httpx.AsyncClient: many lookups stay in flight concurrently on one loop
    - asyncio.wait_for around the request: httpx timeouts are per phase, the
      contract is a total budget
    - Retry policy belongs to the orchestrator (it has none: the next
      scheduled pass is the retry)
"""

import asyncio
import logging
from datetime import datetime, timezone

import httpx

from domainwatch.core.errors import (
    OracleProtocolError,
    OracleRequestError,
    OracleTimeoutError,
    RateLimitExceededError,
)
from domainwatch.core.map_availability import map_availability_code
from domainwatch.core.rate_limiter import SlidingWindowRateLimiter
from domainwatch.core.repository_protocols import AvailabilityResult

logger = logging.getLogger(__name__)

LOOKUP_PATH = "/api/get/"
_ERROR_BODY_CHARS = 200


class DomainsduckClient:
    """Availability oracle client with timeout and error mapping."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout_seconds: float = 8.0,
        rate_limiter: SlidingWindowRateLimiter | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self._api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.rate_limiter = rate_limiter
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
        )

    async def __aenter__(self) -> "DomainsduckClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def check_availability(self, domain_name: str) -> AvailabilityResult:
        """Ask the oracle whether `domain_name` can be registered."""
        if not domain_name:
            raise ValueError("domain_name must be non-empty")

        if self.rate_limiter is not None and not self.rate_limiter.try_acquire():
            retry_after_ms = self.rate_limiter.retry_after_ms()
            logger.warning(
                f"Oracle rate limit exhausted, skipping {domain_name}",
                extra={"domain": domain_name, "error_code": "ORACLE_RATE_LIMITED"},
            )
            raise RateLimitExceededError(retry_after_ms=retry_after_ms)

        try:
            response = await asyncio.wait_for(
                self._http.get(
                    f"{self.api_url}{LOOKUP_PATH}",
                    params={"domain": domain_name, "apikey": self._api_key},
                    headers={"Accept": "application/json"},
                ),
                timeout=self.timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(
                f"Oracle timeout for {domain_name}",
                extra={"domain": domain_name, "error_code": "ORACLE_TIMEOUT"},
            )
            raise OracleTimeoutError(domain_name, self.timeout_seconds)
        except httpx.HTTPError as e:
            raise OracleRequestError(
                f"Oracle request failed for {domain_name}: {type(e).__name__}",
            )

        if response.status_code >= 400:
            body = response.text[:_ERROR_BODY_CHARS]
            raise OracleRequestError(
                f"API request failed ({response.status_code}): {body}",
                status_code=response.status_code,
            )

        code = self._extract_code(response, domain_name)
        available = map_availability_code(code)
        logger.info(
            f"Oracle answered {code!r} for {domain_name}",
            extra={"domain": domain_name, "status": "available" if available else "registered"},
        )
        return AvailabilityResult(
            domain=domain_name,
            available=available,
            code=code,
            checked_at=datetime.now(timezone.utc),
        )

    def _extract_code(self, response: httpx.Response, domain_name: str) -> str:
        """Pull the free-text `availability` field out of the JSON payload."""
        try:
            data = response.json()
        except ValueError:
            raise OracleProtocolError(
                f"Oracle returned a non-JSON payload for {domain_name}",
            )
        if not isinstance(data, dict) or data.get("availability") is None:
            raise OracleProtocolError(
                f"Oracle payload for {domain_name} has no availability field",
            )
        return str(data["availability"])
