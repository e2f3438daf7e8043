"""
View service: the filtered, sorted catalog shown to the user.

Order of application:
    1. Search on title, brand and slug
    2. Issues-only filter (duplicate anchor, or any defect)
    3. Grouping sort with duplicate counts taken over the filtered rows

Nothing is cached; callers rebuild the view whenever the search, the
filter, the anchor or the catalog changes.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from models.perfume import Perfume, ViewRow
from models.quality import DefectTag
from services.duplicate_service import ClusterColors, matches_anchor
from services.quality_service import count_keys
from utils.text_utils import contains_text

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ViewCriteria:
    """User-entered view state."""
    search: str = ""
    issues_only: bool = False
    duplicate_anchor: Optional[str] = None


def matches_search(perfume: Perfume, search: str) -> bool:
    """Case-insensitive substring match on title, brand or slug."""
    return (
        contains_text(perfume.title, search)
        or contains_text(perfume.brand, search)
        or contains_text(perfume.slug, search)
    )


def _grouping_key(perfume: Perfume, slug_counts, title_counts) -> tuple:
    if slug_counts[perfume.slug_key] > 1:
        return (0, perfume.slug_key, perfume.title_key)
    if title_counts[perfume.title_key] > 1:
        return (1, perfume.title_key, "")
    return (2, "", "")


def build_view(
    perfumes: list[Perfume],
    criteria: ViewCriteria,
    issues: dict[str, list[DefectTag]],
    colors: Optional[ClusterColors] = None,
) -> list[ViewRow]:
    """
    Rows to display, in display order.

    Args:
        perfumes: Full catalog in order
        criteria: Search text, issues-only flag and duplicate anchor
        issues: Output of analyze_quality() for the same catalog
        colors: Output of assign_cluster_colors() for the same catalog

    Returns:
        ViewRow list carrying each record's catalog index, tags and color
    """
    rows = [
        (index, perfume)
        for index, perfume in enumerate(perfumes)
        if matches_search(perfume, criteria.search)
    ]

    if criteria.issues_only:
        if criteria.duplicate_anchor:
            # Anchor narrows to one cluster regardless of other defects
            rows = [
                (index, perfume)
                for index, perfume in rows
                if matches_anchor(perfume, criteria.duplicate_anchor)
            ]
        else:
            rows = [
                (index, perfume)
                for index, perfume in rows
                if perfume.identity in issues
            ]

    slug_counts, title_counts = count_keys(perfume for _, perfume in rows)
    rows.sort(key=lambda row: _grouping_key(row[1], slug_counts, title_counts))

    logger.debug(
        "view_built",
        total=len(perfumes),
        shown=len(rows),
        search=criteria.search or None,
        issues_only=criteria.issues_only,
        anchor=criteria.duplicate_anchor,
    )

    return [
        ViewRow(
            index=index,
            perfume=perfume,
            issues=issues.get(perfume.identity, []),
            duplicate_color=colors.color_for(perfume) if colors else None,
        )
        for index, perfume in rows
    ]
