"""
Quality service: data-quality checks over the whole catalog.

Two linear passes: first count lowercased slugs and titles, then tag each
record in a fixed check order. The result is a pure function of the input
sequence.
"""

from collections import Counter
from typing import Iterable

import structlog

from models.perfume import Perfume, PRICE_FIELDS, NOTE_FIELDS
from models.quality import DefectTag, QualitySummary
from utils.text_utils import is_blank

logger = structlog.get_logger(__name__)

# Placeholder values that mean "no price" after trimming. "N/A" is case-sensitive.
INVALID_PRICE_VALUES = frozenset({"", "-", "0", "N/A"})

_PRICE_TAGS: dict[str, DefectTag] = {
    "price_15ml": DefectTag.MISSING_PRICE_15,
    "price_30ml": DefectTag.MISSING_PRICE_30,
    "price_50ml": DefectTag.MISSING_PRICE_50,
}


def is_invalid_price(value: str) -> bool:
    """Empty, whitespace-only, "-", "0" or "N/A"."""
    return (value or "").strip() in INVALID_PRICE_VALUES


def count_keys(perfumes: Iterable[Perfume]) -> tuple[Counter, Counter]:
    """
    Count lowercased slugs and titles.

    Empty strings are counted too: two records with no slug share the
    empty slug key.

    Returns:
        Tuple of (slug_counts, title_counts)
    """
    slug_counts: Counter = Counter()
    title_counts: Counter = Counter()
    for perfume in perfumes:
        slug_counts[perfume.slug_key] += 1
        title_counts[perfume.title_key] += 1
    return slug_counts, title_counts


def is_duplicated(perfume: Perfume, slug_counts: Counter, title_counts: Counter) -> bool:
    """True if the record shares its slug or its title with another record."""
    return slug_counts[perfume.slug_key] > 1 or title_counts[perfume.title_key] > 1


def check_perfume(
    perfume: Perfume,
    slug_counts: Counter,
    title_counts: Counter
) -> list[DefectTag]:
    """
    Tags for one record, in check order.

    Args:
        perfume: Record to check
        slug_counts: Lowercased slug frequencies over the whole catalog
        title_counts: Lowercased title frequencies over the whole catalog

    Returns:
        Defect tags, empty if the record is clean
    """
    tags: list[DefectTag] = []

    if is_duplicated(perfume, slug_counts, title_counts):
        tags.append(DefectTag.DUPLICATE)

    invalid_prices = 0
    for name in PRICE_FIELDS:
        if is_invalid_price(getattr(perfume, name)):
            tags.append(_PRICE_TAGS[name])
            invalid_prices += 1

    if invalid_prices == len(PRICE_FIELDS):
        tags.append(DefectTag.NO_PRICE_AT_ALL)

    if is_blank(perfume.image):
        tags.append(DefectTag.MISSING_IMAGE)

    # Partial note coverage is fine
    if all(is_blank(getattr(perfume, name)) for name in NOTE_FIELDS):
        tags.append(DefectTag.MISSING_ALL_NOTES)

    if is_blank(perfume.brand):
        tags.append(DefectTag.MISSING_BRAND)

    if is_blank(perfume.slug):
        tags.append(DefectTag.MISSING_SLUG)

    if is_blank(perfume.title):
        tags.append(DefectTag.MISSING_TITLE)

    return tags


def analyze_quality(perfumes: list[Perfume]) -> dict[str, list[DefectTag]]:
    """
    Defect tags for every flagged record, keyed by identity.

    Clean records are absent from the mapping. Identities are not unique;
    when two flagged records share one, the later record's tags win.

    Args:
        perfumes: Full catalog in order

    Returns:
        Mapping of identity to ordered defect tags
    """
    slug_counts, title_counts = count_keys(perfumes)

    issues: dict[str, list[DefectTag]] = {}
    for perfume in perfumes:
        tags = check_perfume(perfume, slug_counts, title_counts)
        if tags:
            issues[perfume.identity] = tags

    logger.debug(
        "quality_analyzed",
        records=len(perfumes),
        flagged=len(issues),
    )
    return issues


def build_quality_summary(perfumes: list[Perfume]) -> QualitySummary:
    """
    Numbers for the header banner.

    `flagged` counts identities (matching the mapping size); `by_tag`
    counts records, so duplicates sharing an identity are each counted.
    """
    slug_counts, title_counts = count_keys(perfumes)

    by_tag: Counter = Counter()
    flagged_identities = set()
    for perfume in perfumes:
        tags = check_perfume(perfume, slug_counts, title_counts)
        if tags:
            flagged_identities.add(perfume.identity)
        by_tag.update(tags)

    return QualitySummary(
        flagged=len(flagged_identities),
        by_tag={tag: by_tag[tag] for tag in DefectTag if by_tag[tag]},
    )
