"""
Edit session schemas.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from models.base import BaseSchema
from models.perfume import Perfume


class SessionState(str, Enum):
    """Lifecycle of the detail view."""
    IDLE = "idle"
    VIEWING = "viewing"
    EDITING = "editing"
    CONFIRMING_DISCARD = "confirming_discard"


class SessionSnapshot(BaseSchema):
    """
    Current edit session.

    `current` is what the detail view shows: the draft if one exists,
    otherwise the selected record.
    """

    state: SessionState
    selected: Optional[Perfume] = None
    draft: Optional[Perfume] = None
    current: Optional[Perfume] = None
    dirty: bool = False
    pending: Optional[str] = Field(
        None,
        description="Queued action waiting on the discard confirmation: navigate or close"
    )
    pending_target: Optional[Perfume] = None
    revision: int = Field(..., description="Catalog revision")
