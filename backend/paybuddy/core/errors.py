"""Error Hierarchy — typed, categorized exceptions for all PayBuddy failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable by the caller; infrastructure errors are critical
    - to_response() produces the REST envelope
    - Messages name the entity or field that failed, never internal details

Design Decisions:
    - Single hierarchy with PayBuddyError base: FastAPI global handler catches all (ADR: uniform error shape)
    - resource_type kept on NotFoundError/AlreadyExistsError so callers can tell
      "sender" from "receiver" and "user" from "connection" without parsing text
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    field: str | None = None
    debug_info: dict[str, Any] | None = None


class PayBuddyError(Exception):
    """Base exception for all PayBuddy errors."""

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
                    "field": self.context.field,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class NotFoundError(PayBuddyError):
    """Referenced entity is absent: sender, receiver, user or connection."""
    def __init__(
        self, resource_type: str, identifier: object, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type.capitalize()} '{identifier}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.identifier = identifier


class AlreadyExistsError(PayBuddyError):
    """Uniqueness violation: duplicate email or duplicate connection."""
    def __init__(
        self, resource_type: str, identifier: object, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type.capitalize()} '{identifier}' already exists",
            "ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.resource_type = resource_type
        self.identifier = identifier


class ValidationError(PayBuddyError):
    """Caller-supplied data violates a business rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PayBuddyError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
