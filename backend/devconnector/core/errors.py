"""Error Hierarchy — typed, categorized exceptions for all DevConnector failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST body: {"msg": ...} or {"errors": [...]}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with DevConnectorError base: FastAPI global handler catches all
    - Envelope chosen per error: `msg` for state errors, `errors[]` for form errors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class Envelope(str, Enum):
    """Response body shape."""
    MSG = "msg"          # {"msg": "..."}
    ERRORS = "errors"    # {"errors": [{"msg": "..."}]}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class DevConnectorError(Exception):
    """Base exception for all DevConnector errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        envelope: Envelope = Envelope.MSG,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.envelope = envelope

    def to_response(self) -> dict:
        """Convert to the REST error body."""
        if self.envelope is Envelope.ERRORS:
            return {"errors": [{"msg": self.message}]}
        return {"msg": self.message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class UnauthenticatedError(DevConnectorError):
    """Missing or invalid credentials on a protected route."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No token, authorization denied",
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PayloadValidationError(DevConnectorError):
    """One or more request body rules failed."""
    def __init__(
        self, violations: list[dict], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{len(violations)} validation rule(s) failed",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400, Envelope.ERRORS,
        )
        self.violations = violations

    def to_response(self) -> dict:
        return {"errors": self.violations}


class ResourceNotFoundError(DevConnectorError):
    """Requested resource does not exist (or its id is malformed)."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.resource_type = resource_type


class ProfileMissingError(DevConnectorError):
    """The user has not created a profile yet."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "There is no profile for this user",
            "PROFILE_MISSING", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class NotAuthorizedError(DevConnectorError):
    """Identity does not own the resource it tried to change."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "User not authorized",
            "NOT_AUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ConflictError(DevConnectorError):
    """Request conflicts with stored state (duplicate user, duplicate like)."""
    def __init__(
        self,
        message: str,
        envelope: Envelope = Envelope.MSG,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400, envelope,
        )


class InvalidCredentialsError(DevConnectorError):
    """Login failed. Same message for unknown e-mail and wrong password."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Please check user and password",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 400, Envelope.ERRORS,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(DevConnectorError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation

    def to_response(self) -> dict:
        return {"msg": "Server Error"}
