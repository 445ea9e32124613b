"""Error Hierarchy — typed, categorized exceptions for all social graph failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST error envelope
    - No store internals leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SocialGraphError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - Business-rule checks in core/ RETURN these objects; the service layer raises them.
      Keeps the checks pure and the routes free of status-code branching
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
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    public_id: str | None = None
    target_id: str | None = None
    debug_info: dict[str, Any] | None = None


class SocialGraphError(Exception):
    """Base exception for all social graph errors."""

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
                    "target_id": self.context.target_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class UnauthenticatedError(SocialGraphError):
    """Caller has no valid credential, or the credential maps to no registered user."""
    def __init__(self, reason: str = "Unauthorized", context: ErrorContext | None = None):
        super().__init__(
            reason, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(SocialGraphError):
    """Requested user or friend request does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.target_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type


class SelfReferenceError(SocialGraphError):
    """Operation would relate a user to themselves."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot {action} yourself",
            "SELF_REFERENCE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidRequestError(SocialGraphError):
    """Operation targets the caller where only another user is meaningful."""
    def __init__(self, message: str = "Invalid request", context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class AlreadyFriendsError(SocialGraphError):
    """Friend request targets an existing friend."""
    def __init__(self, target_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.target_id = target_id
        super().__init__(
            "Already friends", "ALREADY_FRIENDS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


class DuplicateRequestError(SocialGraphError):
    """A request for this exact ordered pair is already pending."""
    def __init__(self, target_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.target_id = target_id
        super().__init__(
            "Request already exists", "DUPLICATE_REQUEST", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )


class ExcludedError(SocialGraphError):
    """One party has blocked the other (mutual-block variant only)."""
    def __init__(self, target_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.target_id = target_id
        super().__init__(
            "Blocked", "EXCLUDED", ErrorCategory.FORBIDDEN,
            ErrorSeverity.ERROR, ctx, 403,
        )


class RequestConflictError(SocialGraphError):
    """Store-level uniqueness violation on (from_id, to_id).

    Raised by the store, translated to DuplicateRequestError by the engine.
    """
    def __init__(self, from_id: str, to_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.public_id = from_id
        ctx.target_id = to_id
        super().__init__(
            "Friend request pair already exists",
            "REQUEST_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )


class UserExistsError(SocialGraphError):
    """Provisioning collided with an existing identity or public id."""
    def __init__(self, identity_ref: str, context: ErrorContext | None = None):
        super().__init__(
            f"User '{identity_ref}' already exists",
            "USER_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SocialGraphError):
    """Database operation failed. Message stays generic; details go to logs only."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed",
            "INTERNAL_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
