"""
Data-quality API routes.
"""

from fastapi import APIRouter
import structlog

from models.quality import TAG_INFO, DuplicateAnchorResponse, QualityReport, TagInfo
from routes.errors import handle_error
from services.catalog_service import get_catalog_service

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.get("", response_model=QualityReport)
async def get_quality_report():
    """
    Defect tags per record identity, summary counts and cluster colors.

    Records without defects are not listed.
    """
    try:
        return get_catalog_service().quality_report()

    except Exception as e:
        return handle_error(e)


@router.get("/tags", response_model=list[TagInfo])
async def list_tags():
    """Label, short code and color of every defect tag, in check order."""
    return list(TAG_INFO.values())


@router.get("/anchor/{index}", response_model=DuplicateAnchorResponse)
async def get_duplicate_anchor(index: int):
    """
    Value to filter on when this record's duplicate tag is clicked.

    Pass it as `anchor` with `issues_only=true` to GET /api/catalog.

    Raises:
        404: No record at this index
    """
    try:
        service = get_catalog_service()
        return DuplicateAnchorResponse(index=index, anchor=service.duplicate_anchor_for(index))

    except Exception as e:
        return handle_error(e)
