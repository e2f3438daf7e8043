"""
Data-quality schemas: defect tags, reports and collapse results.
"""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from models.base import BaseSchema


class DefectTag(str, Enum):
    """
    Data-quality defects, in the order they are checked.

    A record's tag list always follows this declaration order.
    """
    DUPLICATE = "duplicate"
    MISSING_PRICE_15 = "missing-price-15"
    MISSING_PRICE_30 = "missing-price-30"
    MISSING_PRICE_50 = "missing-price-50"
    NO_PRICE_AT_ALL = "no-price-at-all"
    MISSING_IMAGE = "missing-image"
    MISSING_ALL_NOTES = "missing-all-notes"
    MISSING_BRAND = "missing-brand"
    MISSING_SLUG = "missing-slug"
    MISSING_TITLE = "missing-title"


class TagInfo(BaseSchema):
    """Display metadata for a defect tag."""

    tag: DefectTag
    label: str
    short: str
    color: str


TAG_INFO: dict[DefectTag, TagInfo] = {
    info.tag: info
    for info in (
        TagInfo(tag=DefectTag.DUPLICATE, label="Duplicate", short="DUP", color="#ef4444"),
        TagInfo(tag=DefectTag.MISSING_PRICE_15, label="Missing 15ml Price", short="15ML", color="#eab308"),
        TagInfo(tag=DefectTag.MISSING_PRICE_30, label="Missing 30ml Price", short="30ML", color="#eab308"),
        TagInfo(tag=DefectTag.MISSING_PRICE_50, label="Missing 50ml Price", short="50ML", color="#eab308"),
        TagInfo(tag=DefectTag.NO_PRICE_AT_ALL, label="No Price At All", short="NO-PRICE", color="#f97316"),
        TagInfo(tag=DefectTag.MISSING_IMAGE, label="Missing Image", short="IMG", color="#ec4899"),
        TagInfo(tag=DefectTag.MISSING_ALL_NOTES, label="Missing All Notes", short="NOTES", color="#a78bfa"),
        TagInfo(tag=DefectTag.MISSING_BRAND, label="Missing Brand", short="BRAND", color="#06b6d4"),
        TagInfo(tag=DefectTag.MISSING_SLUG, label="Missing Slug", short="SLUG", color="#ef4444"),
        TagInfo(tag=DefectTag.MISSING_TITLE, label="Missing Title", short="TITLE", color="#3b82f6"),
    )
}


class QualitySummary(BaseSchema):
    """Header banner numbers."""

    flagged: int = Field(..., description="Identities with at least one defect")
    by_tag: dict[DefectTag, int] = Field(
        default_factory=dict,
        description="Records carrying each tag"
    )


class QualityReport(BaseSchema):
    """Defect mapping keyed by record identity."""

    # identities are keys exactly as stored; trimming would merge them
    model_config = ConfigDict(str_strip_whitespace=False)

    issues: dict[str, list[DefectTag]]
    summary: QualitySummary
    cluster_colors: dict[str, str] = Field(
        default_factory=dict,
        description="Cluster key to color, slug clusters prefixed 'slug:', titles 'title:'"
    )
    revision: int


class DuplicateAnchorResponse(BaseSchema):
    """Value the view filters on when a duplicate tag is clicked."""

    index: int
    anchor: str


class ExactDuplicateCount(BaseSchema):
    """Detection result: how many rows a collapse would remove."""

    count: int = Field(..., ge=0)
    total: int = Field(..., ge=0)


class CollapseResult(BaseSchema):
    """
    Outcome of removing exact duplicates.

    `removed == 0` means nothing was touched and nothing was exported.
    """

    # csv is returned verbatim, trailing newline included
    model_config = ConfigDict(str_strip_whitespace=False)

    removed: int = Field(..., ge=0)
    remaining: int = Field(..., ge=0)
    message: str
    revision: int
    csv: Optional[str] = Field(
        None,
        description="Re-exported catalog, only when rows were removed"
    )
