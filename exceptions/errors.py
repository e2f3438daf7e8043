"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and a details dict so
routes can return them as-is.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PERFUME_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with current state (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class DuplicateError(ConflictError):
    """Duplicate resource (409)."""

    def __init__(
        self,
        resource: str,
        field: str,
        value: str
    ):
        super().__init__(
            code=f"{resource.upper()}_{field.upper()}_EXISTS",
            message=f"{resource} with this {field} already exists",
            details={field: value}
        )


# ===================
# CATALOG ERRORS
# ===================

class PerfumeNotFoundError(NotFoundError):
    """No perfume at the given catalog position."""

    def __init__(self, index: int):
        super().__init__(
            resource="Perfume",
            identifier=str(index),
            code="PERFUME_NOT_FOUND"
        )


class InvalidFieldError(ValidationError):
    """Field name is not part of the perfume record."""

    def __init__(self, field: str, valid: list[str]):
        super().__init__(
            code="PERFUME_INVALID_FIELD",
            message=f"Unknown perfume field: {field}",
            details={"provided": field, "valid": valid}
        )


class CatalogParseError(ValidationError):
    """Catalog or note CSV could not be read."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="CSV_PARSE_ERROR",
            message=message,
            details=details
        )


# ===================
# EDIT SESSION ERRORS
# ===================

class NoSelectionError(ConflictError):
    """An edit was attempted with no perfume selected."""

    def __init__(self, operation: str):
        super().__init__(
            code="NO_SELECTION",
            message="No perfume is selected",
            details={"operation": operation}
        )


class ConfirmationPendingError(ConflictError):
    """An edit was attempted while a discard confirmation is open."""

    def __init__(self, operation: str, pending: Optional[str] = None):
        super().__init__(
            code="CONFIRMATION_PENDING",
            message="Confirm or cancel discarding unsaved changes first",
            details={"operation": operation, "pending": pending}
        )


# ===================
# NOTE ERRORS
# ===================

class NoteExistsError(DuplicateError):
    """A note with the same slug is already in the catalog."""

    def __init__(self, slug: str):
        super().__init__(
            resource="Note",
            field="slug",
            value=slug
        )
