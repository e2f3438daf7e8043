"""
Exact-duplicate collapse.

Two records are exact duplicates when every field matches byte for byte,
extra CSV columns included. The first occurrence is kept; later ones are
removal candidates. Detection never changes anything.
"""

import structlog

from models.perfume import Perfume, PERFUME_FIELDS

logger = structlog.get_logger(__name__)

# Unit separator: cannot collide with printable cell text
KEY_SEPARATOR = "\x1f"


def composite_key(perfume: Perfume) -> str:
    """
    All field values joined in a fixed order.

    Declared fields come first in column order, then extra columns sorted
    by name (as name=value so a missing extra differs from an empty one).
    """
    parts = [getattr(perfume, name) for name in PERFUME_FIELDS]
    extras = perfume.extra_fields()
    parts.extend(f"{name}={extras[name]}" for name in sorted(extras))
    return KEY_SEPARATOR.join(parts)


def count_exact_duplicates(perfumes: list[Perfume]) -> int:
    """
    Number of records a collapse would remove.

    Args:
        perfumes: Records in catalog order

    Returns:
        Count of non-first occurrences
    """
    seen: set[str] = set()
    candidates = 0
    for perfume in perfumes:
        key = composite_key(perfume)
        if key in seen:
            candidates += 1
        else:
            seen.add(key)
    return candidates


def remove_exact_duplicates(perfumes: list[Perfume]) -> list[Perfume]:
    """
    Keep the first occurrence of every composite key, in order.

    Args:
        perfumes: Records in catalog order

    Returns:
        New list; the input is not modified
    """
    seen: set[str] = set()
    kept: list[Perfume] = []
    for perfume in perfumes:
        key = composite_key(perfume)
        if key in seen:
            continue
        seen.add(key)
        kept.append(perfume)

    logger.info(
        "exact_duplicates_collapsed",
        before=len(perfumes),
        after=len(kept),
        removed=len(perfumes) - len(kept),
    )
    return kept
