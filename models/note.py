"""
Note catalog schemas.

The notes CSV uses capitalised headers (Slug, Title, Image, Image:alt,
Content); aliases map them onto Python names.
"""

from typing import Optional

from pydantic import ConfigDict, Field

from models.base import BaseSchema, RecordSchema


NOTE_COLUMNS: tuple[str, ...] = ("Slug", "Title", "Image", "Image:alt", "Content")

EMPTY_NOTE_CONTENT = "<p><br></p>"


class Note(RecordSchema):
    """One fragrance note with its illustration."""

    model_config = ConfigDict(
        extra="allow",
        validate_assignment=True,
        populate_by_name=True,
    )

    slug: str = Field("", alias="Slug")
    title: str = Field("", alias="Title")
    image: str = Field("", alias="Image")
    image_alt: str = Field("", alias="Image:alt")
    content: str = Field("", alias="Content")


class NoteCreate(BaseSchema):
    """Add a note to the catalog. The slug is derived from the title."""

    title: str = Field(..., min_length=1, examples=["Bergamot"])
    image: str = Field(..., min_length=1, description="Image reference")
    content: Optional[str] = Field(None, description="HTML description")


class NoteListResponse(BaseSchema):
    """Notes matching a search."""

    data: list[Note]
    total: int


class NoteImageResponse(BaseSchema):
    """Image lookup by note title."""

    title: str
    image: Optional[str] = None
