"""
Duplicate grouping: cluster colors and the duplicate click-filter anchor.

A cluster is every record sharing a lowercased slug, or every record
sharing a lowercased title, with more than one member. Colors come from a
fixed palette in first-seen order and are returned as a value; nothing is
kept between calls.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

import structlog

from config import DEFAULT_DUPLICATE_PALETTE
from models.perfume import Perfume
from services.quality_service import count_keys

logger = structlog.get_logger(__name__)


@dataclass
class ClusterColors:
    """Color per duplicated slug key and per duplicated title key."""
    slug_colors: dict[str, str] = field(default_factory=dict)
    title_colors: dict[str, str] = field(default_factory=dict)

    def color_for(self, perfume: Perfume) -> Optional[str]:
        """Slug-cluster color if the record has one, else its title-cluster color."""
        color = self.slug_colors.get(perfume.slug_key)
        if color is not None:
            return color
        return self.title_colors.get(perfume.title_key)

    @property
    def cluster_count(self) -> int:
        return len(self.slug_colors) + len(self.title_colors)

    def to_dict(self) -> dict[str, str]:
        """Flat mapping with "slug:" / "title:" prefixed keys, for API responses."""
        flat = {f"slug:{key}": color for key, color in self.slug_colors.items()}
        flat.update({f"title:{key}": color for key, color in self.title_colors.items()})
        return flat


def assign_cluster_colors(
    perfumes: list[Perfume],
    palette: Sequence[str] = DEFAULT_DUPLICATE_PALETTE,
    counts: Optional[tuple[Counter, Counter]] = None,
) -> ClusterColors:
    """
    Color every duplicate cluster in first-seen order.

    One palette cursor is shared by slug and title clusters; it wraps when
    the palette runs out. Cluster size does not matter, only the position of
    the first member.

    Args:
        perfumes: Records in catalog order
        palette: Color tokens, at least one
        counts: Precomputed (slug_counts, title_counts), computed if omitted

    Returns:
        ClusterColors for this exact input order
    """
    if not palette:
        raise ValueError("palette must contain at least one color")

    slug_counts, title_counts = counts if counts is not None else count_keys(perfumes)
    colors = ClusterColors()
    cursor = 0

    for perfume in perfumes:
        slug_key = perfume.slug_key
        if slug_counts[slug_key] > 1 and slug_key not in colors.slug_colors:
            colors.slug_colors[slug_key] = palette[cursor % len(palette)]
            cursor += 1

        title_key = perfume.title_key
        if title_counts[title_key] > 1 and title_key not in colors.title_colors:
            colors.title_colors[title_key] = palette[cursor % len(palette)]
            cursor += 1

    logger.debug("cluster_colors_assigned", clusters=colors.cluster_count)
    return colors


def duplicate_anchor(perfume: Perfume) -> str:
    """
    Filter value used when a record's duplicate tag is clicked.

    Always the slug when the record has one, even if only its title is
    duplicated; the title otherwise.
    """
    if perfume.slug:
        return perfume.slug_key
    return perfume.title_key


def matches_anchor(perfume: Perfume, anchor: str) -> bool:
    """True if the record's lowercased slug or title equals the anchor."""
    key = anchor.lower()
    return perfume.slug_key == key or perfume.title_key == key
