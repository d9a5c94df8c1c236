"""Error Hierarchy — typed, categorized exceptions for every card-service failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are user-correctable; infrastructure errors (500-level) are retry-worthy
    - to_response() produces the REST envelope
    - PersistenceError IS a StoreError: callers catching store failures also see rejected inserts

Design Decisions:
    - Single hierarchy with CardShareError base: FastAPI global handler catches all,
      form boundaries catch all and render .message
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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    card_id: str | None = None
    profile_id: str | None = None
    debug_info: dict[str, Any] | None = None


class CardShareError(Exception):
    """Base exception for all card-service errors."""

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
                    "card_id": self.context.card_id,
                    "profile_id": self.context.profile_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(CardShareError):
    """A required field is missing or blank."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class NoSessionError(CardShareError):
    """Nobody is signed in and no explicit owner was given."""
    def __init__(
        self, message: str = "no active session", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "NO_SESSION", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(CardShareError):
    """Requested resource does not exist."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        context: ErrorContext | None = None,
        message: str | None = None,
    ):
        super().__init__(
            message or f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class SessionError(CardShareError):
    """Identity provider could not answer who is signed in."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"could not fetch the authenticated user: {message}",
            "SESSION_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.provider_message = message


class StoreError(CardShareError):
    """Store operation failed (transport, configuration or query)."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        code: str = "DATABASE_ERROR",
        http_status: int = 503,
    ):
        super().__init__(
            message, code, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, http_status,
        )
        self.operation = operation


class PersistenceError(StoreError):
    """Store rejected a card insert (constraint violation, bad reference)."""
    def __init__(self, store_message: str, context: ErrorContext | None = None):
        super().__init__(
            f"could not create card: {store_message}", "insert", context,
            code="PERSISTENCE_ERROR", http_status=409,
        )
        self.category = ErrorCategory.CONFLICT
        self.severity = ErrorSeverity.ERROR
        self.store_message = store_message
