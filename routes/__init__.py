"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.catalog import router as catalog_router
from routes.quality import router as quality_router
from routes.session import router as session_router
from routes.notes import router as notes_router

__all__ = [
    "catalog_router",
    "quality_router",
    "session_router",
    "notes_router",
]
