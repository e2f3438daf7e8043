"""
Base schemas for all models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for request/response schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow attribute objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class RecordSchema(BaseModel):
    """
    Base for rows read from a CSV file.

    Values are kept verbatim (no trimming) so exact-duplicate detection and
    export see exactly what was loaded. Columns outside the declared fields
    are kept as extras and round-trip through export.
    """
    model_config = ConfigDict(
        extra="allow",
        validate_assignment=True
    )
