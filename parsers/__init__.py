"""
CSV parsers module.
"""

from parsers.csv_parser import (
    parse_catalog_csv,
    parse_notes_csv,
    serialize_catalog,
    serialize_notes,
    export_columns,
    decode_upload,
    CatalogParseResult,
)

__all__ = [
    "parse_catalog_csv",
    "parse_notes_csv",
    "serialize_catalog",
    "serialize_notes",
    "export_columns",
    "decode_upload",
    "CatalogParseResult",
]
