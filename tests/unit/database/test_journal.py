"""
Tests for the Journal entry cache.

A MagicMock storage counts backend calls so that caching behavior can be
asserted directly.
"""
import pytest
from datetime import date
from unittest.mock import MagicMock

from journalist.core.exceptions import StorageError
from journalist.database.journal import EntryState, Journal
from journalist.database.storage import JournalStorage
from journalist.dataclasses.date_range import DateRange
from journalist.dataclasses.entry import BulletType, Entry


@pytest.fixture
def mock_storage(sample_entry):
    storage = MagicMock(spec=JournalStorage)
    storage.load_entry.side_effect = (
        lambda d: sample_entry.copy() if d == sample_entry.date else None
    )
    return storage


@pytest.fixture
def cached_journal(mock_storage):
    return Journal(mock_storage)


class TestGetEntry:
    def test_initially_unloaded(self, cached_journal, march_15):
        assert cached_journal.state(march_15) == EntryState.UNLOADED
        assert not cached_journal.is_cached(march_15)

    def test_first_read_loads_and_caches(self, cached_journal, mock_storage, sample_entry):
        entry = cached_journal.get_entry(sample_entry.date)

        assert entry == sample_entry
        assert cached_journal.state(sample_entry.date) == EntryState.CACHED
        mock_storage.load_entry.assert_called_once_with(sample_entry.date)

    def test_second_read_served_from_cache(self, cached_journal, mock_storage, sample_entry):
        cached_journal.get_entry(sample_entry.date)
        cached_journal.get_entry(sample_entry.date)
        assert mock_storage.load_entry.call_count == 1

    def test_returns_copy(self, cached_journal, sample_entry):
        entry = cached_journal.get_entry(sample_entry.date)
        entry.add("not cached", BulletType.NOTE)

        assert cached_journal.get_entry(sample_entry.date) == sample_entry

    def test_absent_date_not_cached(self, cached_journal, mock_storage):
        missing = date(2024, 1, 1)
        assert cached_journal.get_entry(missing) is None
        assert cached_journal.get_entry(missing) is None

        assert cached_journal.state(missing) == EntryState.UNLOADED
        assert mock_storage.load_entry.call_count == 2

    def test_storage_error_propagates(self, mock_storage, march_15):
        mock_storage.load_entry.side_effect = StorageError("disk gone")
        with pytest.raises(StorageError):
            Journal(mock_storage).get_entry(march_15)


class TestGetEntryMut:
    def test_returns_cached_instance(self, cached_journal, sample_entry):
        first = cached_journal.get_entry_mut(sample_entry.date)
        second = cached_journal.get_entry_mut(sample_entry.date)
        assert first is second

    def test_edits_visible_to_readers(self, cached_journal, sample_entry):
        cached_journal.get_entry_mut(sample_entry.date).add("added", BulletType.NOTE)
        assert cached_journal.get_entry(sample_entry.date).bullet_count(BulletType.NOTE) == 2

    def test_synthesizes_empty_entry(self, cached_journal):
        missing = date(2024, 1, 1)
        entry = cached_journal.get_entry_mut(missing)

        assert entry == Entry(missing)
        assert cached_journal.is_cached(missing)


class TestSaveEntry:
    def test_unloaded_save_is_noop(self, cached_journal, mock_storage, march_15):
        assert cached_journal.save_entry(march_15) is False
        mock_storage.save_entry.assert_not_called()

    def test_writes_through_a_copy(self, cached_journal, mock_storage, sample_entry):
        cached = cached_journal.get_entry_mut(sample_entry.date)
        cached.add("new", BulletType.TASK)

        assert cached_journal.save_entry(sample_entry.date) is True
        (saved,) = mock_storage.save_entry.call_args[0]
        assert saved == cached
        assert saved is not cached

    def test_failed_save_keeps_cache(self, cached_journal, mock_storage, sample_entry):
        cached_journal.get_entry_mut(sample_entry.date).add("unsaved", BulletType.NOTE)
        mock_storage.save_entry.side_effect = StorageError("read-only")

        with pytest.raises(StorageError):
            cached_journal.save_entry(sample_entry.date)

        assert cached_journal.get_entry(sample_entry.date).bullet_count(BulletType.NOTE) == 2


class TestReplaceEntry:
    def test_installs_copy(self, cached_journal, march_15):
        entry = Entry(march_15).add("from editor", BulletType.EVENT)
        cached_journal.replace_entry(entry)
        entry.add("later change", BulletType.EVENT)

        assert cached_journal.get_entry(march_15).bullet_count(BulletType.EVENT) == 1

    def test_then_save(self, cached_journal, mock_storage, march_15):
        cached_journal.replace_entry(Entry(march_15).add("x", BulletType.NOTE))
        assert cached_journal.save_entry(march_15) is True
        mock_storage.save_entry.assert_called_once()


class TestRanges:
    def test_entries_in_range(self, cached_journal, sample_entry):
        span = DateRange.between(date(2024, 3, 14), date(2024, 3, 16))
        assert cached_journal.get_entries_in_range(span) == [sample_entry]

    def test_list_dates_delegates(self, cached_journal, mock_storage):
        span = DateRange.month(2024, 3)
        mock_storage.list_dates.return_value = [date(2024, 3, 15)]

        assert cached_journal.list_dates_in_range(span) == [date(2024, 3, 15)]
        mock_storage.list_dates.assert_called_once_with(span)

    def test_cached_dates_sorted(self, cached_journal):
        cached_journal.get_entry_mut(date(2024, 3, 20))
        cached_journal.get_entry_mut(date(2024, 3, 10))
        assert cached_journal.cached_dates() == [date(2024, 3, 10), date(2024, 3, 20)]

    def test_evict(self, cached_journal, sample_entry):
        cached_journal.get_entry(sample_entry.date)
        cached_journal.evict(sample_entry.date)
        assert not cached_journal.is_cached(sample_entry.date)


class TestWithRealStorage:
    def test_save_round_trip(self, journal, sql_storage, march_15):
        journal.get_entry_mut(march_15).add("Call the bank", BulletType.TASK)
        journal.save_entry(march_15)

        fresh = Journal(sql_storage)
        assert fresh.get_entry(march_15) == Entry(march_15).add("Call the bank", BulletType.TASK)

    def test_saving_emptied_entry_removes_it(self, journal, sql_storage, sample_entry):
        sql_storage.save_entry(sample_entry)
        journal.replace_entry(Entry(sample_entry.date))
        journal.save_entry(sample_entry.date)

        assert sql_storage.load_entry(sample_entry.date) is None
