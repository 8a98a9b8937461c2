"""Error Hierarchy — typed, categorized exceptions for all SeePaw failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"error": {...}}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SeePawError base: FastAPI global handler catches all (ADR: uniform error shape)
    - RequestRejectedError bridges Result failures: handlers return Results, routes raise
      (ADR: business-rule failures are values inside services, exceptions at the HTTP edge)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class SeePawError(Exception):
    """Base exception for all SeePaw errors."""

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
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "resource": self.context.resource,
                    "resource_id": self.context.resource_id,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

# Result.code -> (error code, category). Anything unlisted is an internal error.
_STATUS_CODES: dict[int, tuple[str, ErrorCategory]] = {
    400: ("BUSINESS_RULE_VIOLATION", ErrorCategory.BUSINESS_RULE),
    401: ("UNAUTHENTICATED", ErrorCategory.AUTHENTICATION),
    403: ("FORBIDDEN", ErrorCategory.AUTHORIZATION),
    404: ("RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND),
    409: ("CONFLICT", ErrorCategory.CONFLICT),
    422: ("UNPROCESSABLE", ErrorCategory.BUSINESS_RULE),
}


class RequestRejectedError(SeePawError):
    """A command or query was rejected by a business rule (failed Result)."""
    def __init__(self, message: str, status_code: int, context: ErrorContext | None = None):
        code, category = _STATUS_CODES.get(
            status_code, ("INTERNAL_ERROR", ErrorCategory.INTERNAL),
        )
        severity = (
            ErrorSeverity.CRITICAL if status_code >= 500 else ErrorSeverity.WARNING
        )
        super().__init__(
            message, code, category, severity, context, status_code,
        )


class UnauthenticatedError(SeePawError):
    """Caller identity missing or unknown."""
    def __init__(self, message: str = "Authentication required", context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ConflictError(SeePawError):
    """A write collided with a uniqueness rule enforced by the database."""
    def __init__(self, message: str, constraint: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.constraint = constraint


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SeePawError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ExternalServiceError(SeePawError):
    """Upstream HTTP service (breed catalogue) failed."""
    def __init__(
        self,
        message: str,
        service: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            f"{service} error: {message}",
            "EXTERNAL_SERVICE_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 502,
        )
        self.service = service
