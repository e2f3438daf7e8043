"""
Note service: the read-mostly note catalog used by the note-tag editor.

Notes map a name (Title) to an illustration (Image). New notes can be
added in memory; their slug is derived from the title.
"""

from pathlib import Path
from typing import Optional

import structlog

from exceptions import NoteExistsError
from models.note import EMPTY_NOTE_CONTENT, Note, NoteCreate
from parsers.csv_parser import parse_notes_csv, serialize_notes
from utils.text_utils import contains_text, slugify_title

logger = structlog.get_logger(__name__)


class NoteService:
    """Note catalog lookups and additions."""

    def __init__(self):
        self.notes: list[Note] = []

    def load(self, notes: list[Note]) -> int:
        """Replace the note catalog."""
        self.notes = list(notes)
        logger.info("notes_loaded", count=len(self.notes))
        return len(self.notes)

    def load_csv(self, text: str) -> int:
        return self.load(parse_notes_csv(text))

    def load_file(self, path: str, encoding: str = "utf-8") -> int:
        return self.load(parse_notes_csv(Path(path), encoding=encoding))

    def export_csv(self) -> str:
        return serialize_notes(self.notes)

    def search(self, term: str = "", titles_only: bool = False) -> list[Note]:
        """
        Notes whose title (or slug) contains the term, case-insensitive.

        Args:
            term: Search text; empty returns every note
            titles_only: Match titles only, as the note picker does
        """
        return [
            note for note in self.notes
            if contains_text(note.title, term)
            or (not titles_only and contains_text(note.slug, term))
        ]

    def get_image(self, title: str) -> Optional[str]:
        """Image of the first note whose title matches, case-insensitive."""
        wanted = title.strip().lower()
        for note in self.notes:
            if note.title.lower() == wanted:
                return note.image
        return None

    def add(self, data: NoteCreate) -> Note:
        """
        Add a note to the catalog.

        Raises:
            NoteExistsError: If a note with the same slug exists
        """
        slug = slugify_title(data.title)
        if any(note.slug == slug for note in self.notes):
            raise NoteExistsError(slug)

        note = Note(
            slug=slug,
            title=data.title,
            image=data.image,
            image_alt="",
            content=data.content or EMPTY_NOTE_CONTENT,
        )
        self.notes.append(note)

        logger.info("note_created", slug=slug, total=len(self.notes))
        return note


# Singleton instance
_service: Optional[NoteService] = None


def get_note_service() -> NoteService:
    """Get or create NoteService instance."""
    global _service
    if _service is None:
        _service = NoteService()
    return _service


def reset_note_service() -> None:
    global _service
    _service = None
