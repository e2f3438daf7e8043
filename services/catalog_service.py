"""
Catalog service: owns the perfume collection and the edit session.

Every change to the collection (load, delete, save, collapse) replaces the
list and bumps the revision. Quality analysis, cluster colors and the view
are recomputed from the current list on every call.
"""

from pathlib import Path
from typing import Optional, Sequence

import structlog

from config import get_settings
from exceptions import ConfirmationPendingError, NoSelectionError, PerfumeNotFoundError
from models.perfume import (
    Perfume,
    PERFUME_FIELDS,
    NoteLayer,
    ViewRow,
    CatalogViewResponse,
    DeleteResponse,
)
from models.quality import (
    DefectTag,
    QualityReport,
    ExactDuplicateCount,
    CollapseResult,
)
from models.session import SessionSnapshot
from parsers.csv_parser import parse_catalog_csv, serialize_catalog
from services.dedup_service import count_exact_duplicates, remove_exact_duplicates
from services.duplicate_service import ClusterColors, assign_cluster_colors, duplicate_anchor
from services.edit_session import EditSession
from services.quality_service import analyze_quality, build_quality_summary, count_keys
from services.view_service import ViewCriteria, build_view
from utils import note_tags

logger = structlog.get_logger(__name__)

NOTHING_TO_REMOVE = "nothing to remove"


class CatalogService:
    """
    Catalog business logic.

    Single-user, in-memory. The collection only changes through the
    methods below.
    """

    def __init__(self, palette: Optional[Sequence[str]] = None):
        self.perfumes: list[Perfume] = []
        self.columns: list[str] = list(PERFUME_FIELDS)
        self.revision = 0
        self.source: Optional[str] = None
        self.session = EditSession()
        self.palette = list(palette) if palette else list(get_settings().duplicate_palette)

    def _replace(self, perfumes: list[Perfume], reason: str) -> None:
        self.perfumes = perfumes
        self.revision += 1
        logger.debug("catalog_replaced", reason=reason, count=len(perfumes), revision=self.revision)

    # ===================
    # LOADING / EXPORT
    # ===================

    def load(
        self,
        perfumes: list[Perfume],
        columns: Optional[list[str]] = None,
        source: Optional[str] = None
    ) -> int:
        """
        Replace the whole catalog in one step.

        The edit session goes back to idle: a draft from the old catalog
        must not carry over.

        Returns:
            Number of records loaded
        """
        self.columns = list(columns) if columns else list(PERFUME_FIELDS)
        self.source = source
        self.session.reset()
        # one object per row; the session tracks rows by object
        self._replace([perfume.model_copy() for perfume in perfumes], "load")

        logger.info(
            "catalog_loaded",
            source=source,
            count=len(self.perfumes),
            columns=len(self.columns),
            revision=self.revision,
        )
        return len(self.perfumes)

    def load_csv(self, text: str, source: Optional[str] = None) -> int:
        """Parse CSV text and load it."""
        result = parse_catalog_csv(text)
        return self.load(result.perfumes, result.columns, source=source)

    def load_file(self, path: str, encoding: str = "utf-8") -> int:
        """Parse a catalog CSV file and load it."""
        result = parse_catalog_csv(Path(path), encoding=encoding)
        return self.load(result.perfumes, result.columns, source=path)

    def export_csv(self) -> str:
        """Current catalog as CSV, in the column order it was loaded with."""
        return serialize_catalog(self.perfumes, self.columns)

    # ===================
    # READ OPERATIONS
    # ===================

    def get(self, index: int) -> Perfume:
        """
        Record at a catalog position.

        Raises:
            PerfumeNotFoundError: If the index is out of range
        """
        if index < 0 or index >= len(self.perfumes):
            raise PerfumeNotFoundError(index)
        return self.perfumes[index]

    def analyze(self) -> dict[str, list[DefectTag]]:
        return analyze_quality(self.perfumes)

    def cluster_colors(self) -> ClusterColors:
        return assign_cluster_colors(self.perfumes, self.palette, counts=count_keys(self.perfumes))

    def quality_report(self) -> QualityReport:
        """Defect mapping, summary and cluster colors for the current catalog."""
        return QualityReport(
            issues=self.analyze(),
            summary=build_quality_summary(self.perfumes),
            cluster_colors=self.cluster_colors().to_dict(),
            revision=self.revision,
        )

    def view(self, criteria: ViewCriteria) -> CatalogViewResponse:
        """
        Build the catalog view.

        Args:
            criteria: Search text, issues-only flag, duplicate anchor

        Returns:
            CatalogViewResponse for the current revision
        """
        issues = self.analyze()
        rows = build_view(self.perfumes, criteria, issues, self.cluster_colors())

        return CatalogViewResponse(
            data=rows,
            total=len(self.perfumes),
            shown=len(rows),
            flagged=len(issues),
            revision=self.revision,
        )

    def row(self, index: int) -> ViewRow:
        """One record with its tags and cluster color."""
        perfume = self.get(index)
        issues = self.analyze()
        return ViewRow(
            index=index,
            perfume=perfume,
            issues=issues.get(perfume.identity, []),
            duplicate_color=self.cluster_colors().color_for(perfume),
        )

    def duplicate_anchor_for(self, index: int) -> str:
        """Anchor value for a click on the record's duplicate tag."""
        return duplicate_anchor(self.get(index))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def delete(self, index: int) -> DeleteResponse:
        """
        Remove one record immediately.

        Not guarded by unsaved changes. If the record was selected, the
        session falls back to the first remaining record or idle.

        Raises:
            PerfumeNotFoundError: If the index is out of range
        """
        removed = self.get(index)
        remaining = self.perfumes[:index] + self.perfumes[index + 1:]
        self._replace(remaining, "delete")
        selection_changed = self.session.handle_removed(removed, remaining)

        logger.info(
            "perfume_deleted",
            index=index,
            identity=removed.identity,
            remaining=len(remaining),
            selection_changed=selection_changed,
        )
        return DeleteResponse(deleted=removed, remaining=len(remaining), revision=self.revision)

    def count_exact_duplicates(self) -> ExactDuplicateCount:
        """How many rows a collapse would remove. Changes nothing."""
        return ExactDuplicateCount(
            count=count_exact_duplicates(self.perfumes),
            total=len(self.perfumes),
        )

    def collapse_exact_duplicates(self) -> CollapseResult:
        """
        Remove exact duplicates and re-export the catalog.

        With no candidates nothing is changed or exported.

        Returns:
            CollapseResult with the removed count and, if any, the new CSV
        """
        candidates = count_exact_duplicates(self.perfumes)
        if candidates == 0:
            logger.info("exact_duplicates_none", count=len(self.perfumes))
            return CollapseResult(
                removed=0,
                remaining=len(self.perfumes),
                message=NOTHING_TO_REMOVE,
                revision=self.revision,
            )

        kept = remove_exact_duplicates(self.perfumes)
        self._replace(kept, "collapse")

        self.session.rebind(kept)

        logger.info(
            "exact_duplicates_removed",
            removed=candidates,
            remaining=len(kept),
            revision=self.revision,
        )
        return CollapseResult(
            removed=candidates,
            remaining=len(kept),
            message=f"removed {candidates} duplicates",
            revision=self.revision,
            csv=self.export_csv(),
        )

    # ===================
    # EDIT SESSION
    # ===================

    def session_snapshot(self) -> SessionSnapshot:
        return self.session.snapshot(self.revision)

    def select(self, index: int) -> SessionSnapshot:
        """Guarded select of the record at a catalog position."""
        self.session.select(self.get(index))
        return self.session_snapshot()

    def close_detail(self) -> SessionSnapshot:
        self.session.close()
        return self.session_snapshot()

    def update_field(self, field: str, value: str) -> SessionSnapshot:
        self.session.update_field(field, value)
        return self.session_snapshot()

    def replace_image(self, reference: str) -> SessionSnapshot:
        """Point the draft at a new image (e.g. after an upload and crop)."""
        return self.update_field("image", reference)

    def add_note(self, layer: NoteLayer, name: str) -> SessionSnapshot:
        """Append a note name to one note field of the draft."""
        current = self._current_for("add_note")
        value = note_tags.add_note(getattr(current, layer.field_name), name)
        return self.update_field(layer.field_name, value)

    def remove_note(self, layer: NoteLayer, name: str) -> SessionSnapshot:
        """Remove a note name from one note field of the draft."""
        current = self._current_for("remove_note")
        value = note_tags.remove_note(getattr(current, layer.field_name), name)
        return self.update_field(layer.field_name, value)

    def _current_for(self, operation: str) -> Perfume:
        if self.session.pending is not None:
            raise ConfirmationPendingError(operation, self.session.pending.kind)
        if self.session.current is None:
            raise NoSelectionError(operation)
        return self.session.current

    def save(self) -> SessionSnapshot:
        """Write the draft into the catalog."""
        before = self.perfumes
        updated = self.session.save(before)
        if any(new is not old for new, old in zip(updated, before)):
            self._replace(updated, "save")
        return self.session_snapshot()

    def discard(self) -> SessionSnapshot:
        """Drop the draft and run any queued navigation."""
        self.session.discard()
        return self.session_snapshot()

    def cancel(self) -> SessionSnapshot:
        """Dismiss the discard confirmation."""
        self.session.cancel()
        return self.session_snapshot()


# Singleton instance
_service: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    """Get or create CatalogService instance."""
    global _service
    if _service is None:
        _service = CatalogService()
    return _service


def reset_catalog_service() -> None:
    """Drop the singleton (tests, reloads)."""
    global _service
    _service = None
