"""Error Hierarchy — typed, categorized exceptions for all Fundboard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler;
      field-level failures add error.details entries (field, message, type)
    - No secrets or tokens in user-facing messages

Design Decisions:
    - Single hierarchy with FundboardError base: one FastAPI handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields travel with the error, not the logger
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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    client_id: str | None = None
    shop: str | None = None
    item_id: int | None = None
    debug_info: dict[str, Any] | None = None


class FundboardError(Exception):
    """Base exception for all Fundboard errors."""

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

    def details(self) -> list[dict[str, str]]:
        """Field-level details for the envelope; none by default."""
        return []

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        error = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
            "context": {
                "client_id": self.context.client_id,
                "shop": self.context.shop,
                "item_id": self.context.item_id,
            },
        }
        details = self.details()
        if details:
            error["details"] = details
        return {"error": error}


def error_detail(field: str, message: str, error_type: str) -> dict[str, str]:
    """One entry of error.details, shared with request validation failures."""
    return {"field": field, "message": message, "type": error_type}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ItemValidationError(FundboardError):
    """Item submission failed a field rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field

    def details(self) -> list[dict[str, str]]:
        return [error_detail(self.field, self.message, "item_rule")]


class InvalidShopError(FundboardError):
    """Shop parameter missing or not a platform shop domain."""
    def __init__(self, shop: str | None, context: ErrorContext | None = None):
        super().__init__(
            "Shop parameter is required" if not shop
            else f"Invalid shop domain: {shop}",
            "INVALID_SHOP", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.shop = shop


class OAuthCallbackError(FundboardError):
    """OAuth callback parameters missing or failed verification."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "OAUTH_CALLBACK_INVALID", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context, 400,
        )


class CommerceSessionMissingError(FundboardError):
    """No stored OAuth session for the requested shop."""
    def __init__(self, shop: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.shop = shop
        super().__init__(
            "No valid session found",
            "NO_SESSION", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, ctx, 401,
        )


class ResourceNotFoundError(FundboardError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(FundboardError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class CommerceAPIError(FundboardError):
    """Commerce platform call failed (transport, status, or GraphQL errors)."""
    def __init__(
        self,
        message: str,
        api_error_type: str,
        upstream_status: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "COMMERCE_API_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context,
            503 if api_error_type in ("connection_error", "timeout") else 502,
        )
        self.api_error_type = api_error_type
        self.upstream_status = upstream_status
