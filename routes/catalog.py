"""
Catalog API routes.

Records are addressed by their position in the catalog (`index`), since
slugs and titles are not unique.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.responses import JSONResponse, Response
import structlog

from models.perfume import CatalogViewResponse, DeleteResponse, ViewRow
from models.quality import CollapseResult, ExactDuplicateCount
from parsers.csv_parser import decode_upload
from routes.errors import handle_error
from services.catalog_service import get_catalog_service
from services.view_service import ViewCriteria

logger = structlog.get_logger(__name__)

router = APIRouter()


def _csv_response(text: str) -> Response:
    filename = f"export_{date.today().isoformat()}.csv"
    return Response(
        content=text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ===================
# VIEW
# ===================

@router.get("", response_model=CatalogViewResponse)
async def list_perfumes(
    search: str = Query("", description="Matches title, brand or slug"),
    issues_only: bool = Query(False, description="Only records with defects"),
    anchor: Optional[str] = Query(None, description="Duplicate anchor (with issues_only)")
):
    """
    Catalog view: search, issues filter and duplicate grouping sort.

    Rebuilt from the current catalog on every request.
    """
    try:
        service = get_catalog_service()
        criteria = ViewCriteria(
            search=search,
            issues_only=issues_only,
            duplicate_anchor=anchor or None,
        )
        return service.view(criteria)

    except Exception as e:
        return handle_error(e)


# ===================
# IMPORT / EXPORT
# ===================

@router.post("/import")
async def import_catalog(file: UploadFile = File(...)):
    """
    Replace the catalog with an uploaded CSV.

    The edit session is reset.

    Raises:
        400: Not a .csv file
        422: CSV could not be parsed
    """
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
        service = get_catalog_service()
        count = service.load_csv(decode_upload(content), source=file.filename)

        return {"imported": count, "columns": service.columns, "revision": service.revision}

    except Exception as e:
        return handle_error(e)


@router.get("/export")
async def export_catalog():
    """Download the catalog as CSV, in the column order it was loaded with."""
    try:
        return _csv_response(get_catalog_service().export_csv())

    except Exception as e:
        return handle_error(e)


# ===================
# EXACT DUPLICATES
# ===================

@router.get("/exact-duplicates", response_model=ExactDuplicateCount)
async def count_exact_duplicates():
    """How many rows are byte-for-byte copies of an earlier row."""
    try:
        return get_catalog_service().count_exact_duplicates()

    except Exception as e:
        return handle_error(e)


@router.post("/exact-duplicates/collapse", response_model=CollapseResult)
async def collapse_exact_duplicates():
    """
    Remove exact duplicates, keeping first occurrences.

    Returns "nothing to remove" with removed=0 when there are none.
    """
    try:
        return get_catalog_service().collapse_exact_duplicates()

    except Exception as e:
        return handle_error(e)


# ===================
# SINGLE RECORD
# ===================

@router.get("/{index}", response_model=ViewRow)
async def get_perfume(index: int):
    """
    One record with its defect tags and cluster color.

    Raises:
        404: No record at this index
    """
    try:
        return get_catalog_service().row(index)

    except Exception as e:
        return handle_error(e)


@router.delete("/{index}", response_model=DeleteResponse)
async def delete_perfume(index: int):
    """
    Delete a record immediately.

    Unsaved changes do not block deletion.

    Raises:
        404: No record at this index
    """
    try:
        return get_catalog_service().delete(index)

    except Exception as e:
        return handle_error(e)
