"""
Edit session API routes.

Select and close are guarded: with unsaved changes they are queued and the
returned snapshot is in state "confirming_discard". The client then calls
/discard (runs the queued action) or /cancel (keeps the draft).
"""

from fastapi import APIRouter
import structlog

from models.perfume import NoteLayer, NoteTagRequest, PerfumeFieldUpdate
from models.session import SessionSnapshot
from routes.errors import handle_error
from services.catalog_service import get_catalog_service

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=SessionSnapshot)
async def get_session():
    """Current selection, draft, dirty flag and queued action."""
    try:
        return get_catalog_service().session_snapshot()

    except Exception as e:
        return handle_error(e)


# ===================
# NAVIGATION
# ===================

@router.post("/select/{index}", response_model=SessionSnapshot)
async def select_perfume(index: int):
    """
    Open a record.

    Raises:
        404: No record at this index
        409: A discard confirmation is already open
    """
    try:
        return get_catalog_service().select(index)

    except Exception as e:
        return handle_error(e)


@router.post("/close", response_model=SessionSnapshot)
async def close_detail():
    """
    Close the detail view.

    Raises:
        409: A discard confirmation is already open
    """
    try:
        return get_catalog_service().close_detail()

    except Exception as e:
        return handle_error(e)


# ===================
# DRAFT
# ===================

@router.patch("/draft", response_model=SessionSnapshot)
async def update_draft(data: PerfumeFieldUpdate):
    """
    Set one field on the draft.

    Raises:
        409: Nothing selected, or a confirmation is open
        422: Unknown field
    """
    try:
        return get_catalog_service().update_field(data.field, data.value)

    except Exception as e:
        return handle_error(e)


@router.post("/draft/notes/{layer}", response_model=SessionSnapshot)
async def add_note_tag(layer: NoteLayer, data: NoteTagRequest):
    """Add a note name to the top, heart or base notes of the draft."""
    try:
        return get_catalog_service().add_note(layer, data.name)

    except Exception as e:
        return handle_error(e)


@router.delete("/draft/notes/{layer}/{name}", response_model=SessionSnapshot)
async def remove_note_tag(layer: NoteLayer, name: str):
    """Remove a note name from the top, heart or base notes of the draft."""
    try:
        return get_catalog_service().remove_note(layer, name)

    except Exception as e:
        return handle_error(e)


# ===================
# RESOLUTION
# ===================

@router.post("/save", response_model=SessionSnapshot)
async def save_draft():
    """
    Write the draft into the catalog.

    Replaces the record with the slug the selection had before editing.
    A queued navigation is dropped.
    """
    try:
        return get_catalog_service().save()

    except Exception as e:
        return handle_error(e)


@router.post("/discard", response_model=SessionSnapshot)
async def discard_draft():
    """Drop the draft, then run the queued navigation if any."""
    try:
        return get_catalog_service().discard()

    except Exception as e:
        return handle_error(e)


@router.post("/cancel", response_model=SessionSnapshot)
async def cancel_confirmation():
    """Dismiss the discard confirmation; the draft stays."""
    try:
        return get_catalog_service().cancel()

    except Exception as e:
        return handle_error(e)
