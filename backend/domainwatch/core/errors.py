"""Error Hierarchy — typed, categorized exceptions for all DomainWatch failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Pass-level errors (config, auth, database) surface as HTTP responses
    - Oracle errors are per-domain: caught by the reconciliation pass, never
      propagated past it
    - to_response() produces the {success: false, error, message} envelope
    - No secrets or internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DomainWatchError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - `title` is the short human label the scheduler sees in the `error` field
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    domain: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class DomainWatchError(Exception):
    """Base exception for all DomainWatch errors."""

    title = "Internal server error"

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "success": False,
            "error": self.title,
            "message": self.message,
            **self._extra_response_fields(),
        }

    def _extra_response_fields(self) -> dict:
        return {}


# ─── Pass-level Errors ───────────────────────────────────────────

class ConfigurationError(DomainWatchError):
    """Required secret or credential is not configured."""

    title = "Configuration error"

    def __init__(self, missing_vars: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Missing required environment variables: {', '.join(missing_vars)}",
            "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.missing_vars = missing_vars

    def _extra_response_fields(self) -> dict:
        return {"missingVars": list(self.missing_vars)}


class UnauthorizedError(DomainWatchError):
    """Bearer token missing or not matching the configured secret."""

    title = "Unauthorized"

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid or missing authorization token",
            "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class DatabaseError(DomainWatchError):
    """Database operation failed."""

    title = "Database error"

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


# ─── Management Errors (400-level) ───────────────────────────────

class InvalidDomainError(DomainWatchError):
    """Domain name is not a syntactically valid hostname after normalization."""

    title = "Invalid domain"

    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{name}' is not a valid domain name",
            "INVALID_DOMAIN", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.name = name


class DuplicateDomainError(DomainWatchError):
    """Domain is already tracked (names are unique after normalization)."""

    title = "Duplicate domain"

    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Domain '{name}' is already being monitored",
            "DUPLICATE_DOMAIN", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.name = name


class ResourceNotFoundError(DomainWatchError):
    """Requested resource does not exist."""

    title = "Not found"

    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Oracle Errors (per-domain, soft) ────────────────────────────

class OracleError(DomainWatchError):
    """Availability oracle call failed for a single domain."""

    title = "Availability check failed"

    def __init__(
        self,
        message: str,
        code: str = "ORACLE_ERROR",
        category: ErrorCategory = ErrorCategory.EXTERNAL_API,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.WARNING, context, 502,
        )


class OracleTimeoutError(OracleError):
    """Oracle did not answer within the client timeout."""

    def __init__(self, domain: str, timeout_seconds: float, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.domain = domain
        super().__init__(
            f"Domain check timeout for {domain} after {timeout_seconds:g}s",
            "ORACLE_TIMEOUT", ErrorCategory.TIMEOUT, ctx,
        )


class OracleProtocolError(OracleError):
    """Oracle answered with a payload or availability code we do not understand."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "ORACLE_PROTOCOL_ERROR", context=context)


class OracleRequestError(OracleError):
    """Oracle request failed at the transport or HTTP status level."""

    def __init__(
        self, message: str, status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message, "ORACLE_REQUEST_ERROR", context=context)
        self.status_code = status_code


class RateLimitExceededError(OracleError):
    """Local oracle rate limit exhausted, so the call was not issued."""

    def __init__(self, retry_after_ms: int | None = None, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            "Oracle rate limit exceeded", "ORACLE_RATE_LIMITED", context=ctx,
        )
