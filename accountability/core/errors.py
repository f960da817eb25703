"""Error Hierarchy — typed, categorized exceptions for all accountability failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain rule violations (400-level) are expected outcomes; store failures (500-level) are critical
    - Every error carries a distinct human-readable reason (message)
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with AccountabilityError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    goal_id: str | None = None


class AccountabilityError(Exception):
    """Base exception for all accountability errors."""

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
                    "goal_id": self.context.goal_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class NotRegisteredError(AccountabilityError):
    """Login lookup missed and no profile reference was given to register."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            "User not found. Enter correct name or provide GitHub to register.",
            "NOT_REGISTERED", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.name = name


class IdentityValidationFailedError(AccountabilityError):
    """External profile check rejected the reference or could not complete."""
    def __init__(
        self, profile_ref: str, reason: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"GitHub profile '{profile_ref}' could not be verified: {reason}",
            "IDENTITY_VALIDATION_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, context, 400,
        )
        self.profile_ref = profile_ref
        self.reason = reason


class ResourceNotFoundError(AccountabilityError):
    """Requested goal or user does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DeletionWindowExpiredError(AccountabilityError):
    """Goal deletion attempted after the 30-minute grace period."""
    def __init__(self, age_minutes: float, context: ErrorContext | None = None):
        super().__init__(
            "Delete window expired (30 minutes only)",
            "DELETE_WINDOW_EXPIRED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 403,
        )
        self.age_minutes = age_minutes


class GoalOwnershipError(AccountabilityError):
    """Requester tried to delete a goal owned by someone else."""
    def __init__(self, goal_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Goal '{goal_id}' belongs to another user",
            "NOT_GOAL_OWNER", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 403,
        )


class NameTakenError(AccountabilityError):
    """Registration lost a race: another request stored the same name first."""
    def __init__(self, name: str, context: ErrorContext | None = None):
        super().__init__(
            f"Name '{name}' is already registered",
            "NAME_TAKEN", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.name = name


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(AccountabilityError):
    """Persistence collaborator failed; the operation left no partial state."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
