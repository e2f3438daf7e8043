"""
Unit tests for the edit session state machine.
"""

import pytest

from exceptions import ConfirmationPendingError, InvalidFieldError, NoSelectionError
from models.session import SessionState
from services.edit_session import Close, EditSession, NavigateTo

from tests.factories import PerfumeFactory


@pytest.fixture
def session() -> EditSession:
    return EditSession()


@pytest.fixture
def records():
    return [PerfumeFactory.create(title="R1"), PerfumeFactory.create(title="R2")]


class TestSelect:
    """Tests for EditSession.select()"""

    def test_idle_by_default(self, session):
        assert session.state == SessionState.IDLE
        assert session.current is None

    def test_select_from_idle(self, session, records):
        state = session.select(records[0])

        assert state == SessionState.VIEWING
        assert session.selected == records[0]
        assert session.current == records[0]

    def test_select_while_viewing_switches(self, session, records):
        session.select(records[0])

        session.select(records[1])

        assert session.selected == records[1]
        assert session.draft is None

    def test_select_while_dirty_queues(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")

        state = session.select(records[1])

        assert state == SessionState.CONFIRMING_DISCARD
        assert session.pending == NavigateTo(records[1])
        assert session.selected == records[0]
        assert session.draft.title == "changed"

    def test_reselecting_same_record_while_dirty_also_queues(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")

        session.select(records[0])

        assert session.state == SessionState.CONFIRMING_DISCARD

    def test_select_during_confirmation_is_rejected(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")
        session.select(records[1])

        with pytest.raises(ConfirmationPendingError):
            session.select(records[1])

    def test_edit_reverted_is_not_dirty(self, session, records):
        """A draft equal to the selected record does not trigger the guard."""
        session.select(records[0])
        session.update_field("title", "changed")
        session.update_field("title", "R1")

        session.select(records[1])

        assert session.selected == records[1]
        assert session.pending is None


class TestClose:
    """Tests for EditSession.close()"""

    def test_close_while_viewing(self, session, records):
        session.select(records[0])

        assert session.close() == SessionState.IDLE
        assert session.selected is None

    def test_close_while_dirty_queues(self, session, records):
        session.select(records[0])
        session.update_field("brand", "Other")

        session.close()

        assert session.pending == Close()
        assert session.state == SessionState.CONFIRMING_DISCARD

    def test_close_during_confirmation_is_rejected(self, session, records):
        session.select(records[0])
        session.update_field("brand", "Other")
        session.close()

        with pytest.raises(ConfirmationPendingError):
            session.close()


class TestUpdateField:
    """Tests for EditSession.update_field()"""

    def test_creates_draft_without_touching_selected(self, session, records):
        session.select(records[0])

        draft = session.update_field("price_15ml", "99")

        assert draft.price_15ml == "99"
        assert records[0].price_15ml == "30"
        assert session.state == SessionState.EDITING
        assert session.dirty is True

    def test_successive_edits_accumulate(self, session, records):
        session.select(records[0])

        session.update_field("price_15ml", "99")
        session.update_field("brand", "New")

        assert session.draft.price_15ml == "99"
        assert session.draft.brand == "New"

    def test_unknown_field(self, session, records):
        session.select(records[0])

        with pytest.raises(InvalidFieldError):
            session.update_field("colour", "red")

    def test_nothing_selected(self, session):
        with pytest.raises(NoSelectionError):
            session.update_field("title", "x")

    def test_blocked_during_confirmation(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")
        session.close()

        with pytest.raises(ConfirmationPendingError):
            session.update_field("title", "again")


class TestDiscardAndCancel:
    """Tests for discard() and cancel()"""

    def test_discard_runs_queued_navigation(self, session, records):
        """R1 edited, navigate to R2, discard: R2 shown, no draft."""
        # Arrange
        session.select(records[0])
        session.update_field("price_15ml", "99")
        session.select(records[1])

        # Act
        action = session.discard()

        # Assert
        assert action == NavigateTo(records[1])
        assert session.selected == records[1]
        assert session.draft is None
        assert session.state == SessionState.VIEWING
        assert records[0].price_15ml == "30"

    def test_discard_runs_queued_close(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")
        session.close()

        session.discard()

        assert session.state == SessionState.IDLE

    def test_discard_without_queue_reverts(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")

        assert session.discard() is None
        assert session.current == records[0]
        assert session.state == SessionState.VIEWING

    def test_cancel_keeps_draft(self, session, records):
        """R1 edited, navigate to R2, cancel: R1 and the draft remain."""
        session.select(records[0])
        session.update_field("price_15ml", "99")
        session.select(records[1])

        state = session.cancel()

        assert state == SessionState.EDITING
        assert session.selected == records[0]
        assert session.draft.price_15ml == "99"
        assert session.pending is None


class TestSave:
    """Tests for EditSession.save()"""

    def test_save_writes_draft_back(self, session, records):
        session.select(records[0])
        session.update_field("price_15ml", "99")

        updated = session.save(records)

        assert updated[0].price_15ml == "99"
        assert updated[1] is records[1]
        assert records[0].price_15ml == "30"
        assert session.state == SessionState.VIEWING
        assert session.selected.price_15ml == "99"

    def test_save_locates_by_original_slug(self, session):
        """Editing the slug replaces the record instead of adding one."""
        perfumes = [PerfumeFactory.create(slug="x"), PerfumeFactory.create(slug="y")]
        session.select(perfumes[0])
        session.update_field("slug", "x-new")

        updated = session.save(perfumes)

        assert [p.slug for p in updated] == ["x-new", "y"]

    def test_save_prefers_identical_record_among_slug_matches(self, session):
        perfumes = [
            PerfumeFactory.create(slug="dup", title="First"),
            PerfumeFactory.create(slug="dup", title="Second"),
        ]
        session.select(perfumes[1])
        session.update_field("brand", "Edited")

        updated = session.save(perfumes)

        assert updated[0] == perfumes[0]
        assert updated[1].brand == "Edited"

    def test_save_without_changes_is_noop(self, session, records):
        session.select(records[0])

        updated = session.save(records)

        assert updated == records

    def test_save_when_target_missing_leaves_catalog(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")

        updated = session.save([records[1]])

        assert updated == [records[1]]
        assert session.draft is None

    def test_save_drops_queued_action(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")
        session.select(records[1])

        updated = session.save(records)

        assert updated[0].title == "changed"
        assert session.pending is None
        assert session.selected.title == "changed"


class TestHandleRemoved:
    """Tests for handle_removed() and reset()"""

    def test_removing_selected_falls_back_to_first(self, session, records):
        extra = PerfumeFactory.create()
        session.select(records[1])
        session.update_field("title", "changed")

        changed = session.handle_removed(records[1], [records[0], extra])

        assert changed is True
        assert session.selected == records[0]
        assert session.draft is None

    def test_removing_last_record_goes_idle(self, session, records):
        session.select(records[0])

        session.handle_removed(records[0], [])

        assert session.state == SessionState.IDLE

    def test_removing_other_record_keeps_selection(self, session, records):
        session.select(records[0])

        assert session.handle_removed(records[1], [records[0]]) is False
        assert session.selected == records[0]

    def test_removing_queued_target_drops_queue(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")
        session.select(records[1])

        session.handle_removed(records[1], [records[0]])

        assert session.pending is None
        assert session.state == SessionState.EDITING

    def test_reset(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")

        session.reset()

        assert session.state == SessionState.IDLE
        assert session.draft is None


class TestSnapshot:
    """Tests for snapshot()"""

    def test_snapshot_reports_pending_target(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")
        session.select(records[1])

        snapshot = session.snapshot(revision=4)

        assert snapshot.state == SessionState.CONFIRMING_DISCARD
        assert snapshot.pending == "navigate"
        assert snapshot.pending_target == records[1]
        assert snapshot.current.title == "changed"
        assert snapshot.revision == 4


class TestIdenticalRows:
    """Identical rows are told apart by object, not by value"""

    def test_removing_identical_other_row_keeps_draft(self, session, sample_perfume):
        twin = sample_perfume.model_copy()
        session.select(twin)
        session.update_field("brand", "Edited")

        changed = session.handle_removed(sample_perfume, [twin])

        assert changed is False
        assert session.draft.brand == "Edited"

    def test_removing_identical_queued_target_keeps_queue(self, session, records, sample_perfume):
        twin = sample_perfume.model_copy()
        session.select(records[0])
        session.update_field("title", "changed")
        session.select(twin)

        session.handle_removed(sample_perfume, [records[0], twin])

        assert session.pending == NavigateTo(twin)

    def test_save_targets_selected_row(self, session, sample_perfume):
        perfumes = [sample_perfume, sample_perfume.model_copy()]
        session.select(perfumes[1])
        session.update_field("brand", "Edited")

        updated = session.save(perfumes)

        assert updated[0] is perfumes[0]
        assert updated[1].brand == "Edited"


class TestRebind:
    """Tests for rebind()"""

    def test_moves_selection_to_equal_survivor(self, session, sample_perfume):
        survivor = sample_perfume.model_copy()
        session.select(sample_perfume)
        session.update_field("brand", "Edited")

        reset = session.rebind([survivor])

        assert reset is False
        assert session.selected is survivor
        assert session.draft.brand == "Edited"

    def test_resets_when_nothing_equal_is_left(self, session, records):
        session.select(records[0])

        assert session.rebind([records[1]]) is True
        assert session.state == SessionState.IDLE

    def test_drops_queued_target_that_is_gone(self, session, records):
        session.select(records[0])
        session.update_field("title", "changed")
        session.select(records[1])

        session.rebind([records[0]])

        assert session.pending is None
