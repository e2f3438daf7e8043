"""
Perfume record schemas.

A perfume is one row of the catalog CSV. Every field is free text; prices
are only ever checked for presence, never parsed as numbers.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from models.base import BaseSchema, RecordSchema
from models.quality import DefectTag


# Column order of the catalog CSV
PERFUME_FIELDS: tuple[str, ...] = (
    "slug",
    "title",
    "image",
    "image_alt",
    "gender",
    "price_15ml",
    "price_30ml",
    "price_50ml",
    "brand",
    "top_notes",
    "heart_notes",
    "base_notes",
    "link",
    "stock_status",
)

PRICE_FIELDS: tuple[str, ...] = ("price_15ml", "price_30ml", "price_50ml")

UNKNOWN_IDENTITY = "unknown"


class NoteLayer(str, Enum):
    """The three note pyramid layers."""
    TOP = "top"
    HEART = "heart"
    BASE = "base"

    @property
    def field_name(self) -> str:
        """Perfume field holding this layer's comma-separated notes."""
        return f"{self.value}_notes"


NOTE_FIELDS: tuple[str, ...] = tuple(layer.field_name for layer in NoteLayer)


class Perfume(RecordSchema):
    """
    One catalog row.

    Identity is the slug, or the title if the slug is empty. It is not
    unique: duplicates are exactly what the quality checks look for.
    """

    slug: str = ""
    title: str = ""
    image: str = ""
    image_alt: str = ""
    gender: str = ""
    price_15ml: str = ""
    price_30ml: str = ""
    price_50ml: str = ""
    brand: str = ""
    top_notes: str = ""
    heart_notes: str = ""
    base_notes: str = ""
    link: str = ""
    stock_status: str = ""

    @field_validator(*PERFUME_FIELDS, mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> str:
        """Blank cells arrive as None or NaN from some readers."""
        if v is None or (isinstance(v, float) and v != v):
            return ""
        return str(v)

    @property
    def identity(self) -> str:
        return self.slug or self.title or UNKNOWN_IDENTITY

    @property
    def slug_key(self) -> str:
        """Lowercased slug used for duplicate counting."""
        return self.slug.lower()

    @property
    def title_key(self) -> str:
        """Lowercased title used for duplicate counting."""
        return self.title.lower()

    def extra_fields(self) -> dict[str, str]:
        """Columns carried from the CSV that are not declared fields."""
        return {k: "" if v is None else str(v) for k, v in (self.model_extra or {}).items()}

    def get_value(self, column: str) -> str:
        """Value of a declared field or an extra column, "" if absent."""
        if column in PERFUME_FIELDS:
            return getattr(self, column)
        return self.extra_fields().get(column, "")

    def to_row(self, columns: list[str]) -> list[str]:
        """Values in the given column order, for CSV export."""
        return [self.get_value(column) for column in columns]


class PerfumeFieldUpdate(BaseModel):
    """
    Set one field on the current draft.

    Not a BaseSchema: the value is stored exactly as typed.
    """

    field: str = Field(
        ...,
        min_length=1,
        description="Perfume field name",
        examples=["brand", "price_30ml"]
    )
    value: str = Field(
        ...,
        description="New field value"
    )


class NoteTagRequest(BaseSchema):
    """Add a note name to one of the note fields."""

    name: str = Field(
        ...,
        min_length=1,
        description="Note name as listed in the note catalog",
        examples=["Bergamot"]
    )


class ViewRow(BaseSchema):
    """
    One row of the catalog view.

    `index` is the record's position in the catalog and is the handle used
    by the select/delete endpoints.
    """

    index: int = Field(..., ge=0, description="Position in the catalog")
    perfume: Perfume
    issues: list[DefectTag] = Field(default_factory=list)
    duplicate_color: Optional[str] = Field(
        None,
        description="Cluster color, slug cluster first"
    )


class CatalogViewResponse(BaseSchema):
    """Filtered, sorted catalog view."""

    data: list[ViewRow]
    total: int = Field(..., description="Records in the catalog")
    shown: int = Field(..., description="Records after filtering")
    flagged: int = Field(..., description="Identities with at least one defect")
    revision: int = Field(..., description="Catalog revision the view was built from")


class DeleteResponse(BaseSchema):
    """Result of deleting a catalog row."""

    deleted: Perfume
    remaining: int
    revision: int
