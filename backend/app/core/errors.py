"""Error Hierarchy — typed, categorized exceptions for all RigStore failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller mistakes; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - InvalidCredentialsError never says whether the email or the password was wrong

Design Decisions:
    - Single hierarchy with RigStoreError base: FastAPI global handler catches all (ADR: uniform error shape)
    - InsufficientStockError / InvalidStatusTransitionError subclass InvalidInputError:
      callers that only care about "bad input" catch one type
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
    AUTHORIZATION = "authorization"
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    product_id: str | None = None
    order_id: str | None = None
    debug_info: dict[str, Any] | None = None


class RigStoreError(Exception):
    """Base exception for all RigStore errors."""

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
            }
        }


# ─── Authentication / Authorization ─────────────────────────────

class UnauthenticatedError(RigStoreError):
    """No credential token presented."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Access denied: authentication token required",
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidTokenError(RigStoreError):
    """Token signature, format or claims failed verification."""
    def __init__(self, reason: str = "Invalid token", context: ErrorContext | None = None):
        super().__init__(
            reason, "INVALID_TOKEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class InvalidCredentialsError(RigStoreError):
    """Login mismatch — unknown email and wrong password look identical."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(RigStoreError):
    """Valid identity, insufficient role."""
    def __init__(self, required_role: str, context: ErrorContext | None = None):
        super().__init__(
            f"Access denied: '{required_role}' role required",
            "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.required_role = required_role


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(RigStoreError):
    """Request data violates a domain rule."""
    def __init__(
        self,
        message: str,
        field: str | None = None,
        code: str = "INVALID_INPUT",
        category: ErrorCategory = ErrorCategory.VALIDATION,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, category, ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class InsufficientStockError(InvalidInputError):
    """Order asks for more units than the product has in stock."""
    def __init__(
        self, product_id: str, requested: int, available: int | None,
        context: ErrorContext | None = None,
    ):
        if available is None:
            message = f"Insufficient stock for product '{product_id}'"
        else:
            message = (
                f"Insufficient stock for product '{product_id}': "
                f"requested {requested}, available {available}"
            )
        super().__init__(
            message, field="items", code="INSUFFICIENT_STOCK",
            category=ErrorCategory.BUSINESS_RULE, context=context,
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class InvalidStatusTransitionError(InvalidInputError):
    """Order status change not allowed by the lifecycle."""
    def __init__(self, current: str, target: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cannot move order from '{current}' to '{target}'",
            field="status", code="INVALID_STATUS_TRANSITION",
            category=ErrorCategory.BUSINESS_RULE, context=context,
        )
        self.current = current
        self.target = target


class ResourceNotFoundError(RigStoreError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class ConflictError(RigStoreError):
    """Duplicate unique key (e.g. email already registered)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class UnavailableError(RigStoreError):
    """Store or credential backend unreachable, or an I/O step timed out."""
    def __init__(
        self,
        message: str,
        operation: str,
        category: ErrorCategory = ErrorCategory.DATABASE,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Service unavailable during {operation}: {message}",
            "UNAVAILABLE", category,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
