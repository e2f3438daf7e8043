"""
Text utilities for catalog fields.

Used for emptiness checks, search matching and slug generation.
"""

import re
from typing import Optional


def is_blank(value: Optional[str]) -> bool:
    """
    True for None, empty or whitespace-only strings.

    - "" → True
    - "   " → True
    - " Dior " → False
    """
    return not value or not value.strip()


def contains_text(value: Optional[str], needle: str) -> bool:
    """
    Case-insensitive substring match.

    An empty needle matches everything, including empty values.
    """
    if not needle:
        return True
    if not value:
        return False
    return needle.lower() in value.lower()


def slugify_title(title: str) -> str:
    """
    Build a note slug from its title.

    - "Pink Pepper" → "pink-pepper"
    - "Oud  Wood" → "oud-wood"
    """
    return re.sub(r"\s+", "-", title.strip().lower())
