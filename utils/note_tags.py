"""
Comma-separated note lists.

The three note fields hold names like "Bergamot, Lemon, Pink Pepper".
Names are trimmed, empty entries dropped, and lists re-joined with ", ".
"""

NOTE_SEPARATOR = ", "


def parse_note_list(value: str) -> list[str]:
    """Split a note field into trimmed, non-empty names."""
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def join_note_list(names: list[str]) -> str:
    return NOTE_SEPARATOR.join(names)


def add_note(value: str, name: str) -> str:
    """
    Append a note name unless it is already listed.

    Args:
        value: Current field value
        name: Note to add (trimmed before comparison)

    Returns:
        New field value
    """
    names = parse_note_list(value)
    name = name.strip()
    if name and name not in names:
        names.append(name)
    return join_note_list(names)


def remove_note(value: str, name: str) -> str:
    """Drop every occurrence of a note name."""
    name = name.strip()
    return join_note_list([n for n in parse_note_list(value) if n != name])
