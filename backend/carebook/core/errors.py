"""Error Hierarchy — typed, categorized exceptions for all CareBook failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caused by caller arguments and never retried
    - Store operations raise exactly one of these before mutating anything
    - to_response() produces the REST envelope; message is surfaced verbatim

Design Decisions:
    - Single hierarchy with CareBookError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    command: str | None = None
    senior_id: int | None = None
    caregiver_id: int | None = None
    debug_info: dict[str, Any] | None = None


class CareBookError(Exception):
    """Base exception for all CareBook errors."""

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
                    "command": self.context.command,
                    "senior_id": self.context.senior_id,
                    "caregiver_id": self.context.caregiver_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class DuplicateEntityError(CareBookError):
    """Sameness-relation or phone-uniqueness violation on add/edit."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DUPLICATE_ENTITY", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class EntityNotFoundError(CareBookError):
    """Replace/remove target is not present in its collection."""
    def __init__(self, entity_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"The {entity_type} to modify is not in the address book.",
            "ENTITY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.entity_type = entity_type


class NoSuchSeniorError(CareBookError):
    """Senior identifier does not resolve."""
    def __init__(self, senior_id: int | None, context: ErrorContext | None = None):
        message = (
            "No senior or caregiver specified."
            if senior_id is None
            else f"No senior exists with ID {senior_id}."
        )
        ctx = context or ErrorContext()
        ctx.senior_id = senior_id
        super().__init__(
            message, "NO_SUCH_SENIOR", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.senior_id = senior_id


class NoSuchCaregiverError(CareBookError):
    """Caregiver identifier does not resolve."""
    def __init__(self, caregiver_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.caregiver_id = caregiver_id
        super().__init__(
            f"No caregiver exists with ID {caregiver_id}.",
            "NO_SUCH_CAREGIVER", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.caregiver_id = caregiver_id


class AlreadyAssignedError(CareBookError):
    """Caregiver is already assigned to this senior."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "This caregiver is already assigned to this senior.",
            "ALREADY_ASSIGNED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class NotAssignedError(CareBookError):
    """Caregiver is not the one currently assigned to this senior."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "This caregiver is not currently assigned to this senior.",
            "NOT_ASSIGNED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )


class NothingPinnedError(CareBookError):
    """Unpin requested but nothing in scope is pinned."""
    def __init__(self, scope: str, context: ErrorContext | None = None):
        super().__init__(
            f"No one is pinned ({scope}).",
            "NOTHING_PINNED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.scope = scope


class NoPersonsSpecifiedError(CareBookError):
    """Delete request names neither a senior nor a caregiver."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Specify a senior ID, a caregiver ID, or both.",
            "NO_PERSONS_SPECIFIED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class NothingToEditError(CareBookError):
    """Edit request carries no field to change."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "At least one field to edit must be provided.",
            "NOTHING_TO_EDIT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class CommandParseError(CareBookError):
    """Command text is syntactically invalid."""
    def __init__(self, message: str, usage: str | None = None, context: ErrorContext | None = None):
        full = f"{message}\n{usage}" if usage else message
        super().__init__(
            full, "INVALID_COMMAND", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.usage = usage


# ─── Infrastructure Errors (500-level) ──────────────────────────

class CorruptStateError(CareBookError):
    """Persisted data is malformed; fatal to that load attempt only."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Stored data is corrupt: {message}",
            "CORRUPT_STATE", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = message


class StorageError(CareBookError):
    """Reading or writing the data file failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Data file {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
