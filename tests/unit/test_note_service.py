"""
Unit tests for NoteService.
"""

import pytest

from exceptions import NoteExistsError
from models.note import EMPTY_NOTE_CONTENT, NoteCreate
from services.note_service import NoteService

from tests.factories import NoteFactory


@pytest.fixture
def note_service() -> NoteService:
    service = NoteService()
    service.load([
        NoteFactory.create(title="Bergamot"),
        NoteFactory.create(title="Pink Pepper"),
        NoteFactory.create(title="Black Pepper"),
    ])
    return service


class TestSearch:
    """Tests for search()"""

    def test_empty_term_returns_all(self, note_service):
        assert len(note_service.search()) == 3

    def test_case_insensitive(self, note_service):
        titles = [n.title for n in note_service.search("PEPPER")]

        assert titles == ["Pink Pepper", "Black Pepper"]

    def test_slug_match_unless_titles_only(self, note_service):
        assert len(note_service.search("pink-")) == 1
        assert note_service.search("pink-", titles_only=True) == []


class TestGetImage:
    """Tests for get_image()"""

    def test_found(self, note_service):
        assert note_service.get_image("bergamot") == "/notes/bergamot.png"

    def test_missing(self, note_service):
        assert note_service.get_image("Oud") is None


class TestAdd:
    """Tests for add()"""

    def test_add_derives_slug(self, note_service):
        note = note_service.add(NoteCreate(title="Pink  Rose", image="/notes/rose.png"))

        assert note.slug == "pink-rose"
        assert note.content == EMPTY_NOTE_CONTENT
        assert len(note_service.notes) == 4

    def test_add_duplicate_slug(self, note_service):
        with pytest.raises(NoteExistsError):
            note_service.add(NoteCreate(title="pink pepper", image="/x.png"))

    def test_added_note_is_exported(self, note_service):
        note_service.add(NoteCreate(title="Iris", image="/notes/iris.png", content="<p>Powdery</p>"))

        assert "iris,Iris,/notes/iris.png" in note_service.export_csv()
