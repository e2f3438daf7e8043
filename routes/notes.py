"""
Note catalog API routes.
"""

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import JSONResponse, Response
import structlog

from models.note import Note, NoteCreate, NoteImageResponse, NoteListResponse
from parsers.csv_parser import decode_upload
from routes.errors import handle_error
from services.note_service import get_note_service

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=NoteListResponse)
async def list_notes(
    search: str = Query("", description="Matches note title or slug"),
    titles_only: bool = Query(False, description="Match titles only (note picker)")
):
    """Search the note catalog."""
    try:
        notes = get_note_service().search(search, titles_only=titles_only)
        return NoteListResponse(data=notes, total=len(notes))

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=Note, status_code=201)
async def create_note(data: NoteCreate):
    """
    Add a note. The slug is the lowercased title with spaces as dashes.

    Raises:
        409: Slug already exists
    """
    try:
        return get_note_service().add(data)

    except Exception as e:
        return handle_error(e)


@router.get("/image", response_model=NoteImageResponse)
async def get_note_image(title: str = Query(..., min_length=1)):
    """Image for a note name, matched case-insensitively."""
    try:
        return NoteImageResponse(title=title, image=get_note_service().get_image(title))

    except Exception as e:
        return handle_error(e)


@router.post("/import")
async def import_notes(file: UploadFile = File(...)):
    """Replace the note catalog with an uploaded CSV."""
    try:
        if not (file.filename or "").lower().endswith(".csv"):
            return JSONResponse(
                status_code=400,
                content={
                    "error": {
                        "code": "INVALID_FILE_TYPE",
                        "message": "File must be a CSV file (.csv)"
                    }
                }
            )

        content = await file.read()
        count = get_note_service().load_csv(decode_upload(content))
        return {"imported": count}

    except Exception as e:
        return handle_error(e)


@router.get("/export")
async def export_notes():
    """Download the note catalog as CSV."""
    try:
        return Response(
            content=get_note_service().export_csv(),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": 'attachment; filename="Notes.csv"'},
        )

    except Exception as e:
        return handle_error(e)
