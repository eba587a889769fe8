"""Error Hierarchy — typed, categorized exceptions for every cats-api failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors are 400/404 and always recoverable by the caller
    - to_response() produces the REST error envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CatsApiError base: one FastAPI handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging
    - CatNotFoundError and CatInvalidError are the only domain failures; callers
      distinguish them by type (404 vs 400)
"""

from dataclasses import dataclass, field
from enum import Enum
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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    cat_id: int | None = None
    operation: str | None = None


class CatsApiError(Exception):
    """Base exception for all cats-api errors."""

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
                    "cat_id": self.context.cat_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class CatInvalidError(CatsApiError):
    """Cat field values violate a construction invariant."""
    def __init__(self, violations: list[str], context: ErrorContext | None = None):
        super().__init__(
            "; ".join(violations), "CAT_INVALID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.violations = list(violations)

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [
            {"message": violation} for violation in self.violations
        ]
        return response


class ResourceNotFoundError(CatsApiError):
    """Requested resource does not exist."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        code: str = "RESOURCE_NOT_FOUND",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class CatNotFoundError(ResourceNotFoundError):
    """No stored cat matches the given id."""
    def __init__(self, cat_id: int, operation: str | None = None):
        super().__init__(
            "Cat", str(cat_id), "CAT_NOT_FOUND",
            ErrorContext(cat_id=cat_id, operation=operation),
        )
        self.cat_id = cat_id
