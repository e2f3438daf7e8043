"""
Business logic services.

Each service handles one domain area.
"""

from services.catalog_service import CatalogService, get_catalog_service
from services.note_service import NoteService, get_note_service
from services.edit_session import EditSession, NavigateTo, Close
from services.view_service import ViewCriteria, build_view
from services.quality_service import analyze_quality, build_quality_summary
from services.duplicate_service import ClusterColors, assign_cluster_colors, duplicate_anchor
from services.dedup_service import count_exact_duplicates, remove_exact_duplicates

__all__ = [
    "CatalogService",
    "get_catalog_service",
    "NoteService",
    "get_note_service",
    "EditSession",
    "NavigateTo",
    "Close",
    "ViewCriteria",
    "build_view",
    "analyze_quality",
    "build_quality_summary",
    "ClusterColors",
    "assign_cluster_colors",
    "duplicate_anchor",
    "count_exact_duplicates",
    "remove_exact_duplicates",
]
