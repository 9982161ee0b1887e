"""Email Sender — submits one message to the Resend HTTP API.

Invariants:
    - Delivery failures are returned as SendResult(outcome=FAILED), never raised
    - Exactly one POST per send() call (fire-once, no retry)
    - The API key is sent only in the Authorization header, never logged

Design Decisions:
    - Plain httpx over the vendor SDK: one endpoint, and the async client is
      shared with the rest of the service
    - Error detail keeps the HTTP status and a short body excerpt: enough to
      debug from the notification log without storing full provider payloads
"""

import logging

import httpx

from domainwatch.core.domain_types import NotificationOutcome
from domainwatch.core.repository_protocols import SendResult

logger = logging.getLogger(__name__)

SEND_PATH = "/emails"
_ERROR_BODY_CHARS = 300


class ResendEmailSender:
    """Email provider adapter implementing the EmailSender protocol."""

    def __init__(
        self,
        api_key: str,
        from_email: str,
        api_url: str = "https://api.resend.com",
        timeout_seconds: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self.from_email = from_email
        self.api_url = api_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
        )

    async def __aenter__(self) -> "ResendEmailSender":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def send(self, to: str, subject: str, html: str) -> SendResult:
        """Submit one email; report the provider id or the failure detail."""
        payload = {
            "from": self.from_email,
            "to": [to],
            "subject": subject,
            "html": html,
        }
        try:
            response = await self._http.post(
                f"{self.api_url}{SEND_PATH}",
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.TimeoutException:
            return SendResult(NotificationOutcome.FAILED, error="Email provider timeout")
        except httpx.HTTPError as e:
            return SendResult(
                NotificationOutcome.FAILED,
                error=f"Email provider unreachable: {type(e).__name__}",
            )

        if response.status_code >= 400:
            detail = f"HTTP {response.status_code}: {response.text[:_ERROR_BODY_CHARS]}"
            logger.warning(f"Email provider rejected message: {detail}")
            return SendResult(NotificationOutcome.FAILED, error=detail)

        message_id = None
        try:
            data = response.json()
            if isinstance(data, dict) and data.get("id") is not None:
                message_id = str(data["id"])
        except ValueError:
            logger.warning("Email provider accepted message without a JSON body")
        return SendResult(NotificationOutcome.SENT, message_id=message_id)
