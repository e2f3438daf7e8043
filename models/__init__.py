"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema, RecordSchema
from models.quality import (
    DefectTag,
    TagInfo,
    TAG_INFO,
    QualitySummary,
    QualityReport,
    DuplicateAnchorResponse,
    ExactDuplicateCount,
    CollapseResult,
)
from models.perfume import (
    PERFUME_FIELDS,
    PRICE_FIELDS,
    NOTE_FIELDS,
    NoteLayer,
    Perfume,
    PerfumeFieldUpdate,
    NoteTagRequest,
    ViewRow,
    CatalogViewResponse,
    DeleteResponse,
)
from models.session import SessionState, SessionSnapshot
from models.note import (
    NOTE_COLUMNS,
    Note,
    NoteCreate,
    NoteListResponse,
    NoteImageResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "RecordSchema",

    # Quality
    "DefectTag",
    "TagInfo",
    "TAG_INFO",
    "QualitySummary",
    "QualityReport",
    "DuplicateAnchorResponse",
    "ExactDuplicateCount",
    "CollapseResult",

    # Perfume
    "PERFUME_FIELDS",
    "PRICE_FIELDS",
    "NOTE_FIELDS",
    "NoteLayer",
    "Perfume",
    "PerfumeFieldUpdate",
    "NoteTagRequest",
    "ViewRow",
    "CatalogViewResponse",
    "DeleteResponse",

    # Session
    "SessionState",
    "SessionSnapshot",

    # Notes
    "NOTE_COLUMNS",
    "Note",
    "NoteCreate",
    "NoteListResponse",
    "NoteImageResponse",
]
