"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    DuplicateError,

    # Catalog
    PerfumeNotFoundError,
    InvalidFieldError,
    CatalogParseError,

    # Edit session
    NoSelectionError,
    ConfirmationPendingError,

    # Notes
    NoteExistsError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "DuplicateError",

    # Catalog
    "PerfumeNotFoundError",
    "InvalidFieldError",
    "CatalogParseError",

    # Edit session
    "NoSelectionError",
    "ConfirmationPendingError",

    # Notes
    "NoteExistsError",
]
