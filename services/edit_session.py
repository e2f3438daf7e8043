"""
Edit session: selection, draft overlay and the unsaved-changes guard.

States:
    idle                no record selected
    viewing             a record selected, no unsaved changes
    editing             a draft exists and differs from the selected record
    confirming_discard  a select/close was attempted while editing and is
                        queued until the user discards or cancels

The catalog itself is never touched by draft edits. save() receives the
catalog and returns a new list with the draft written back.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

import structlog

from exceptions import ConfirmationPendingError, InvalidFieldError, NoSelectionError
from models.perfume import Perfume, PERFUME_FIELDS
from models.session import SessionState, SessionSnapshot

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class NavigateTo:
    """Queued: select another record."""
    perfume: Perfume
    kind: ClassVar[str] = "navigate"


@dataclass(frozen=True)
class Close:
    """Queued: close the detail view."""
    kind: ClassVar[str] = "close"


PendingAction = Union[NavigateTo, Close]


def _same_record(a: Optional[Perfume], b: Optional[Perfume]) -> bool:
    if a is None or b is None:
        return False
    return a.model_dump() == b.model_dump()


class EditSession:
    """
    Single-user edit session.

    Holds at most one selected record, at most one draft and at most one
    queued action.
    """

    def __init__(self):
        self.selected: Optional[Perfume] = None
        self.draft: Optional[Perfume] = None
        self.pending: Optional[PendingAction] = None

    # ===================
    # STATE
    # ===================

    @property
    def dirty(self) -> bool:
        """A draft exists and differs from the selected record."""
        if self.draft is None or self.selected is None:
            return False
        return not _same_record(self.draft, self.selected)

    @property
    def state(self) -> SessionState:
        if self.selected is None:
            return SessionState.IDLE
        if self.pending is not None:
            return SessionState.CONFIRMING_DISCARD
        if self.dirty:
            return SessionState.EDITING
        return SessionState.VIEWING

    @property
    def current(self) -> Optional[Perfume]:
        """What the detail view shows."""
        return self.draft if self.draft is not None else self.selected

    def snapshot(self, revision: int = 0) -> SessionSnapshot:
        pending_target = self.pending.perfume if isinstance(self.pending, NavigateTo) else None
        return SessionSnapshot(
            state=self.state,
            selected=self.selected,
            draft=self.draft,
            current=self.current,
            dirty=self.dirty,
            pending=self.pending.kind if self.pending is not None else None,
            pending_target=pending_target,
            revision=revision,
        )

    def _ensure_not_confirming(self, operation: str) -> None:
        if self.pending is not None:
            raise ConfirmationPendingError(operation, self.pending.kind)

    # ===================
    # NAVIGATION
    # ===================

    def select(self, perfume: Perfume) -> SessionState:
        """
        Open a record in the detail view.

        With unsaved changes the selection is queued and the session waits
        for discard or cancel.

        Raises:
            ConfirmationPendingError: If a confirmation is already open
        """
        self._ensure_not_confirming("select")

        if self.dirty:
            self.pending = NavigateTo(perfume)
            logger.info(
                "navigation_queued",
                action=NavigateTo.kind,
                target=perfume.identity,
                current=self.selected.identity,
            )
            return self.state

        self._dispatch(NavigateTo(perfume))
        return self.state

    def close(self) -> SessionState:
        """
        Close the detail view.

        Raises:
            ConfirmationPendingError: If a confirmation is already open
        """
        self._ensure_not_confirming("close")

        if self.dirty:
            self.pending = Close()
            logger.info("navigation_queued", action=Close.kind, current=self.selected.identity)
            return self.state

        self._dispatch(Close())
        return self.state

    def _dispatch(self, action: PendingAction) -> None:
        """Run a navigation. The draft is always gone before this is called."""
        self.draft = None
        if isinstance(action, NavigateTo):
            self.selected = action.perfume
            logger.debug("record_selected", identity=action.perfume.identity)
        else:
            self.selected = None
            logger.debug("detail_closed")

    # ===================
    # EDITING
    # ===================

    def update_field(self, field: str, value: str) -> Perfume:
        """
        Set one field on the draft, creating it from the selected record.

        Returns:
            The updated draft

        Raises:
            InvalidFieldError: If field is not a perfume field
            NoSelectionError: If nothing is selected
            ConfirmationPendingError: If a confirmation is open
        """
        if field not in PERFUME_FIELDS:
            raise InvalidFieldError(field, list(PERFUME_FIELDS))
        self._ensure_not_confirming("update_field")
        if self.selected is None:
            raise NoSelectionError("update_field")

        draft = self.draft if self.draft is not None else self.selected.model_copy(deep=True)
        setattr(draft, field, value)
        self.draft = draft

        logger.debug("draft_updated", identity=self.selected.identity, field=field, dirty=self.dirty)
        return draft

    def save(self, perfumes: list[Perfume]) -> list[Perfume]:
        """
        Write the draft back into the catalog.

        The record replaced is the one whose slug equals the slug the
        selected record had before editing, so editing the slug itself
        never adds a row. A queued navigation is dropped, not run.

        Args:
            perfumes: Current catalog

        Returns:
            New catalog list (the input list is not modified)
        """
        updated = list(perfumes)
        queued = self.pending
        self.pending = None

        if not self.dirty:
            self.draft = None
            logger.debug("save_skipped", reason="no_changes")
            return updated

        original = self.selected
        draft = self.draft
        self.draft = None

        position = _locate(updated, original)
        if position is None:
            logger.warning("save_target_missing", slug=original.slug)
            return updated

        updated[position] = draft
        self.selected = draft

        logger.info(
            "draft_saved",
            original_slug=original.slug,
            slug=draft.slug,
            position=position,
            dropped_pending=queued.kind if queued is not None else None,
        )
        return updated

    def discard(self) -> Optional[PendingAction]:
        """
        Drop the draft, then run the queued action if there is one.

        Returns:
            The action that was run, or None
        """
        action = self.pending
        self.pending = None
        self.draft = None

        logger.info("draft_discarded", pending=action.kind if action is not None else None)

        if action is not None:
            self._dispatch(action)
        return action

    def cancel(self) -> SessionState:
        """Close the confirmation, forget the queued action, keep the draft."""
        if self.pending is not None:
            logger.info("navigation_cancelled", action=self.pending.kind)
            self.pending = None
        return self.state

    # ===================
    # CATALOG EVENTS
    # ===================

    def reset(self) -> None:
        """Back to idle; used when the whole catalog is replaced."""
        self.selected = None
        self.draft = None
        self.pending = None

    def handle_removed(self, removed: Perfume, remaining: list[Perfume]) -> bool:
        """
        React to a row leaving the catalog, without any guard.

        Rows are matched by object, not by value: deleting one of two
        identical rows only affects the session if it is the selected row.
        If it was, fall back to the first remaining row (or idle) and drop
        the draft. A queued navigation to it is dropped.

        Returns:
            True if the selection changed
        """
        if isinstance(self.pending, NavigateTo) and self.pending.perfume is removed:
            self.pending = None

        if self.selected is None or self.selected is not removed:
            return False

        self.pending = None
        self.draft = None
        self.selected = remaining[0] if remaining else None
        logger.info(
            "selection_removed",
            removed=removed.identity,
            fallback=self.selected.identity if self.selected else None,
        )
        return True

    def rebind(self, perfumes: list[Perfume]) -> bool:
        """
        Point the selection (and a queued target) at rows of a new catalog.

        A row that is gone is replaced by the first row equal to it; if no
        equal row is left the session goes back to idle.

        Returns:
            True if the session was reset
        """
        if isinstance(self.pending, NavigateTo):
            target = _find_row(perfumes, self.pending.perfume)
            self.pending = NavigateTo(target) if target is not None else None

        if self.selected is None:
            return False

        survivor = _find_row(perfumes, self.selected)
        if survivor is None:
            logger.info("selection_removed", removed=self.selected.identity, fallback=None)
            self.reset()
            return True

        self.selected = survivor
        return False


def _find_row(perfumes: list[Perfume], perfume: Perfume) -> Optional[Perfume]:
    """The same row object if still present, else the first equal row."""
    if any(row is perfume for row in perfumes):
        return perfume
    return next((row for row in perfumes if _same_record(row, perfume)), None)


def _locate(perfumes: list[Perfume], original: Perfume) -> Optional[int]:
    """
    Position of the record to replace on save.

    Among records with the original slug, prefer the selected row itself,
    then one identical to it; otherwise the first slug match.
    """
    first_match: Optional[int] = None
    equal_match: Optional[int] = None
    for position, perfume in enumerate(perfumes):
        if perfume.slug != original.slug:
            continue
        if perfume is original:
            return position
        if equal_match is None and _same_record(perfume, original):
            equal_match = position
        if first_match is None:
            first_match = position
    return equal_match if equal_match is not None else first_match
