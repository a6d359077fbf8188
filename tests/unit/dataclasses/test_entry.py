"""
Tests for the Bullet and Entry dataclasses.

Covers task-state rules on bullets, grouping and ordering inside entries,
copy semantics and equality.
"""
import pytest
from datetime import date

from journalist.core.exceptions import EntryValidationError
from journalist.dataclasses.entry import Bullet, BulletType, Entry, TaskState


class TestBulletType:
    """Tests for BulletType enum helpers."""

    def test_canonical_order(self):
        assert BulletType.choices() == [
            "task", "event", "note", "priority", "inspiration", "insight", "misstep",
        ]

    def test_section_names(self):
        assert BulletType.TASK.section_name == "Tasks"
        assert BulletType.PRIORITY.section_name == "Priority"
        assert BulletType.MISSTEP.section_name == "Missteps"

    def test_only_tasks_and_priorities_track_state(self):
        tracking = [t for t in BulletType if t.tracks_state]
        assert tracking == [BulletType.TASK, BulletType.PRIORITY]


class TestBullet:
    """Tests for Bullet construction and state transitions."""

    def test_task_defaults_to_pending(self):
        bullet = Bullet("Write report", BulletType.TASK)
        assert bullet.task_state == TaskState.PENDING

    def test_priority_defaults_to_pending(self):
        assert Bullet("Ship it", BulletType.PRIORITY).task_state == TaskState.PENDING

    def test_note_has_no_state(self):
        assert Bullet("Just a note", BulletType.NOTE).task_state is None

    def test_state_on_non_task_rejected(self):
        with pytest.raises(EntryValidationError):
            Bullet("Lunch", BulletType.EVENT, TaskState.COMPLETED)

    def test_multiline_content_rejected(self):
        with pytest.raises(EntryValidationError):
            Bullet("first\nsecond", BulletType.NOTE)

    def test_content_is_stripped(self):
        assert Bullet("  indented  ", BulletType.TASK).content == "indented"

    @pytest.mark.parametrize("content", ["", "   ", "\t"])
    def test_blank_content_rejected(self, content):
        with pytest.raises(EntryValidationError, match="empty"):
            Bullet(content, BulletType.EVENT)

    @pytest.mark.parametrize("content", ["#hashtag idea", "  # Tasks"])
    def test_header_like_content_rejected(self, content):
        with pytest.raises(EntryValidationError, match="must not start with"):
            Bullet(content, BulletType.NOTE)

    def test_inner_hash_allowed(self):
        assert Bullet("Issue #42 fixed", BulletType.NOTE).content == "Issue #42 fixed"

    def test_string_type_is_coerced(self):
        bullet = Bullet("Coerced", "task")
        assert bullet.bullet_type is BulletType.TASK

    def test_complete_returns_new_bullet(self):
        task = Bullet("Write report", BulletType.TASK)
        done = task.complete()

        assert done.task_state == TaskState.COMPLETED
        assert task.task_state == TaskState.PENDING

    def test_migrate_and_schedule(self):
        task = Bullet("Call bank", BulletType.TASK)
        assert task.migrate().task_state == TaskState.MIGRATED
        assert task.schedule().task_state == TaskState.SCHEDULED

    def test_transition_on_note_is_noop(self):
        note = Bullet("Note", BulletType.NOTE)
        assert note.complete() is note

    def test_with_state_on_note_raises(self):
        with pytest.raises(EntryValidationError):
            Bullet("Note", BulletType.NOTE).with_state(TaskState.COMPLETED)


class TestEntry:
    """Tests for Entry grouping, copying and equality."""

    def test_new_entry_is_empty(self):
        entry = Entry(date(2024, 3, 15))
        assert entry.is_empty()
        assert entry.total_bullets() == 0

    def test_add_preserves_insertion_order_within_type(self):
        entry = Entry(date(2024, 3, 15))
        entry.add("first", BulletType.TASK).add("second", BulletType.TASK)

        contents = [b.content for b in entry.get_bullets(BulletType.TASK)]
        assert contents == ["first", "second"]

    def test_all_bullets_in_canonical_order(self):
        entry = (
            Entry(date(2024, 3, 15))
            .add("insight", BulletType.INSIGHT)
            .add("task", BulletType.TASK)
            .add("event", BulletType.EVENT)
        )
        assert [b.content for b in entry.all_bullets()] == ["task", "event", "insight"]

    def test_get_bullets_returns_copy(self, sample_entry):
        bullets = sample_entry.get_bullets(BulletType.TASK)
        bullets.append(Bullet("sneaky", BulletType.TASK))

        assert sample_entry.bullet_count(BulletType.TASK) == 1

    def test_get_bullets_mut_is_live(self, sample_entry):
        sample_entry.get_bullets_mut(BulletType.TASK).append(Bullet("added", BulletType.TASK))
        assert sample_entry.bullet_count(BulletType.TASK) == 2

    def test_get_bullets_missing_type(self, sample_entry):
        assert sample_entry.get_bullets(BulletType.INSPIRATION) == []

    def test_has_type(self, sample_entry):
        assert sample_entry.has_type(BulletType.EVENT)
        assert not sample_entry.has_type(BulletType.PRIORITY)

    def test_copy_is_independent(self, sample_entry):
        copied = sample_entry.copy()
        copied.add("extra", BulletType.NOTE)

        assert copied != sample_entry
        assert sample_entry.bullet_count(BulletType.NOTE) == 1

    def test_empty_group_equals_missing_group(self):
        with_empty = Entry(date(2024, 3, 15), {BulletType.TASK: []})
        assert with_empty == Entry(date(2024, 3, 15))

    def test_different_dates_not_equal(self):
        assert Entry(date(2024, 3, 15)) != Entry(date(2024, 3, 16))

    def test_repr_lists_counts(self, sample_entry):
        assert repr(sample_entry) == "Entry(date=2024-03-15, task=1, event=1, note=1)"
