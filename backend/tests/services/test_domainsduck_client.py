"""Availability Client — one GET per call, mapped results and typed failures.

Invariants:
    - Request carries domain and apikey query params to /api/get/
    - availability code mapped via map_availability_code
    - Timeout / HTTP error / unreadable payload → typed OracleError subclasses
    - Exhausted rate limiter → no request issued
"""

import asyncio

import httpx
import pytest

from domainwatch.core.errors import (
    OracleProtocolError,
    OracleRequestError,
    OracleTimeoutError,
    RateLimitExceededError,
)
from domainwatch.core.rate_limiter import SlidingWindowRateLimiter
from domainwatch.infrastructure.domainsduck_client import DomainsduckClient

API_URL = "https://eu.domainsduck.com"


def _client(handler, **kwargs) -> DomainsduckClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DomainsduckClient(API_URL, "secret-key", http_client=http, **kwargs)


async def test_sends_domain_and_key_as_query_params():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"availability": "true"})

    client = _client(handler)
    result = await client.check_availability("example.com")

    assert len(seen) == 1
    assert seen[0].url.path == "/api/get/"
    assert seen[0].url.params["domain"] == "example.com"
    assert seen[0].url.params["apikey"] == "secret-key"
    assert result.available is True
    assert result.code == "true"
    assert result.domain == "example.com"


@pytest.mark.parametrize("code, available", [
    ("true", True), ("premium domain", True),
    ("false", False), ("reserved", False), ("bad tld", False),
])
async def test_maps_availability_codes(code, available):
    client = _client(lambda r: httpx.Response(200, json={"availability": code}))
    result = await client.check_availability("example.com")
    assert result.available is available


async def test_http_error_status_is_request_error():
    client = _client(lambda r: httpx.Response(503, text="upstream down"))
    with pytest.raises(OracleRequestError) as exc_info:
        await client.check_availability("example.com")
    assert exc_info.value.status_code == 503
    assert "503" in exc_info.value.message


async def test_transport_error_is_request_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    client = _client(handler)
    with pytest.raises(OracleRequestError):
        await client.check_availability("example.com")


async def test_httpx_timeout_is_timeout_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    client = _client(handler)
    with pytest.raises(OracleTimeoutError) as exc_info:
        await client.check_availability("example.com")
    assert "example.com" in exc_info.value.message


async def test_total_budget_enforced_with_wait_for():
    async def handler(request):
        await asyncio.sleep(1.0)
        return httpx.Response(200, json={"availability": "true"})

    client = _client(handler, timeout_seconds=0.05)
    with pytest.raises(OracleTimeoutError):
        await client.check_availability("example.com")


async def test_non_json_payload_is_protocol_error():
    client = _client(lambda r: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(OracleProtocolError):
        await client.check_availability("example.com")


async def test_missing_availability_field_is_protocol_error():
    client = _client(lambda r: httpx.Response(200, json={"domain": "example.com"}))
    with pytest.raises(OracleProtocolError):
        await client.check_availability("example.com")


async def test_unknown_code_is_protocol_error():
    client = _client(lambda r: httpx.Response(200, json={"availability": "pending"}))
    with pytest.raises(OracleProtocolError):
        await client.check_availability("example.com")


async def test_exhausted_rate_limiter_skips_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"availability": "false"})

    limiter = SlidingWindowRateLimiter(1, 3600.0)
    client = _client(handler, rate_limiter=limiter)
    await client.check_availability("a.com")
    with pytest.raises(RateLimitExceededError):
        await client.check_availability("b.com")
    assert len(calls) == 1


async def test_empty_name_rejected():
    client = _client(lambda r: httpx.Response(200, json={"availability": "true"}))
    with pytest.raises(ValueError):
        await client.check_availability("")


async def test_api_key_not_in_error_message():
    client = _client(lambda r: httpx.Response(500, text="internal"))
    with pytest.raises(OracleRequestError) as exc_info:
        await client.check_availability("example.com")
    assert "secret-key" not in exc_info.value.message
