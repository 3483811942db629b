"""Error Hierarchy — typed, categorized exceptions for all bomviz failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Load failures (TransportError, ParseError) share one user-facing message
      but keep distinct codes for logs and API state
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BomVizError base: FastAPI global handler catches all
    - GraphLoadError groups everything a load attempt can end with, so callers
      route one type to the details panel
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    view_id: str | None = None
    path: str | None = None
    sequence: int | None = None
    status_code: int | None = None
    debug_info: dict[str, Any] | None = None


class BomVizError(Exception):
    """Base exception for all bomviz errors."""

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
                    "view_id": self.context.view_id,
                    "path": self.context.path,
                    "sequence": self.context.sequence,
                },
            }
        }


# ─── Load Errors ────────────────────────────────────────────────

class GraphLoadError(BomVizError):
    """A graph load attempt failed. Terminal for that attempt, never for the process."""


class TransportError(GraphLoadError):
    """Non-200 response or network failure while fetching graph JSON."""
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.status_code = status_code
        super().__init__(
            f"Graph fetch failed: {message}",
            "TRANSPORT_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, ctx, 502,
        )
        self.status_code = status_code


class ParseError(GraphLoadError):
    """Graph document is not valid JSON or holds a malformed node/edge record."""
    def __init__(
        self,
        message: str,
        element: str | None = None,
        index: int | None = None,
        context: ErrorContext | None = None,
    ):
        where = f" ({element}[{index}])" if element is not None and index is not None else ""
        super().__init__(
            f"Graph parse failed{where}: {message}",
            "PARSE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )
        self.reason = message
        self.element = element
        self.index = index


class NoSnapshotError(GraphLoadError):
    """Reparse requested before any graph was loaded successfully."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "No graph snapshot has been loaded yet",
            "NO_SNAPSHOT", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Resource Errors ────────────────────────────────────────────

class ResourceNotFoundError(BomVizError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class ViewNotFoundError(ResourceNotFoundError):
    """View session id unknown (expired, deleted, or never created)."""
    def __init__(self, view_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.view_id = view_id
        super().__init__("View", view_id, ctx)
