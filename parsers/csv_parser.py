"""
CSV parser for the perfume catalog and the note catalog.

Every cell is read as text; blank cells stay empty strings so that
emptiness can be reported as a data-quality defect instead of failing the
load.
"""

from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Union

import pandas as pd
import structlog

from exceptions import CatalogParseError
from models.note import NOTE_COLUMNS, Note
from models.perfume import PERFUME_FIELDS, Perfume

logger = structlog.get_logger(__name__)

# str is CSV text; files are passed as Path
CsvSource = Union[str, Path]


@dataclass
class CatalogParseResult:
    """Parsed catalog with the header order it came in."""
    perfumes: list[Perfume] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)

    @property
    def missing_columns(self) -> list[str]:
        """Declared fields the file did not have."""
        return [name for name in PERFUME_FIELDS if name not in self.columns]


def _read_frame(source: CsvSource, encoding: str) -> pd.DataFrame:
    """Read a CSV into an all-string frame."""
    buffer = StringIO(source) if isinstance(source, str) else source
    try:
        return pd.read_csv(
            buffer,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding=encoding,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except Exception as e:
        logger.error("csv_read_failed", error=str(e))
        raise CatalogParseError(
            message="Failed to read CSV",
            details={"original_error": str(e)}
        )


def _normalize_column(name: object) -> str:
    return str(name).strip()


def parse_catalog_csv(source: CsvSource, encoding: str = "utf-8") -> CatalogParseResult:
    """
    Parse the perfume catalog.

    Args:
        source: CSV text, or a Path to a .csv file
        encoding: File encoding when reading from a Path

    Returns:
        CatalogParseResult with perfumes in file order

    Raises:
        CatalogParseError: If the CSV cannot be read
    """
    logger.info("parsing_catalog_csv", source_type=type(source).__name__)

    df = _read_frame(source, encoding)
    df.columns = [_normalize_column(col) for col in df.columns]
    columns = list(df.columns)

    perfumes = [
        Perfume(**row)
        for row in df.to_dict(orient="records")
    ]
    result = CatalogParseResult(perfumes=perfumes, columns=columns)

    if result.missing_columns:
        logger.warning("catalog_columns_missing", missing=result.missing_columns)

    logger.info(
        "catalog_csv_parsed",
        rows=len(perfumes),
        columns=len(columns),
    )
    return result


def parse_notes_csv(source: CsvSource, encoding: str = "utf-8") -> list[Note]:
    """
    Parse the note catalog (Slug, Title, Image, Image:alt, Content).

    Raises:
        CatalogParseError: If the CSV cannot be read
    """
    logger.info("parsing_notes_csv", source_type=type(source).__name__)

    df = _read_frame(source, encoding)
    df.columns = [_normalize_column(col) for col in df.columns]

    notes = [Note(**row) for row in df.to_dict(orient="records")]

    logger.info("notes_csv_parsed", rows=len(notes))
    return notes


def export_columns(columns: list[str]) -> list[str]:
    """Consumed header order, then any declared field the source lacked."""
    ordered = list(columns)
    ordered.extend(name for name in PERFUME_FIELDS if name not in ordered)
    return ordered


def serialize_catalog(perfumes: list[Perfume], columns: list[str]) -> str:
    """
    Serialize perfumes back to CSV text.

    Args:
        perfumes: Records in catalog order
        columns: Header order consumed at load time (may be empty)

    Returns:
        CSV text with a header row and "\\n" line endings
    """
    ordered = export_columns(columns)
    df = pd.DataFrame(
        [perfume.to_row(ordered) for perfume in perfumes],
        columns=ordered,
    )
    text = df.to_csv(index=False, lineterminator="\n")

    logger.info("catalog_serialized", rows=len(perfumes), columns=len(ordered))
    return text


def serialize_notes(notes: list[Note]) -> str:
    """Serialize the note catalog with its original headers."""
    rows = [note.model_dump(by_alias=True) for note in notes]
    df = pd.DataFrame(rows, columns=list(NOTE_COLUMNS))
    return df.to_csv(index=False, lineterminator="\n")


def decode_upload(content: bytes, encoding: str = "utf-8-sig") -> str:
    """
    Decode an uploaded CSV file.

    Raises:
        CatalogParseError: If the bytes are not valid in the encoding
    """
    try:
        return content.decode(encoding)
    except UnicodeDecodeError as e:
        logger.error("csv_decode_failed", encoding=encoding, error=str(e))
        raise CatalogParseError(
            message=f"CSV file is not valid {encoding}",
            details={"encoding": encoding, "position": e.start}
        )
