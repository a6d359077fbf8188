#!/usr/bin/env python3
"""
journal.py
--------------------
In-process cache of entries in front of a storage backend.

Reads go through the cache: the first get_entry() for a date loads from
storage and, if the entry exists, keeps it. Absent dates are not cached, so
a later write by another component is seen on the next read.

Writes are explicit: callers edit the cached instance returned by
get_entry_mut() (or install one with replace_entry()) and then call
save_entry(date) to write it through.

Usage:
    journal = Journal(storage, logger=logger)
    entry = journal.get_entry_mut(date.today())
    entry.add("Call the bank", BulletType.TASK)
    journal.save_entry(date.today())
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

# --- Local imports ---
from journalist.core.logging_manager import JournalLogger, safe_logger
from journalist.dataclasses.date_range import DateRange
from journalist.dataclasses.entry import Entry

from .storage.base import JournalStorage


class EntryState(str, Enum):
    """
    Cache state of a date.
    - UNLOADED: Not in the cache
    - CACHED: In the cache (may have unsaved edits)
    """

    UNLOADED = "unloaded"
    CACHED = "cached"


class Journal:
    """
    Read-through, explicit write-through entry cache.

    Attributes:
        storage: Backend entries are loaded from and saved to
        logger: Optional logger for operation tracking
    """

    def __init__(self, storage: JournalStorage, logger: Optional[JournalLogger] = None) -> None:
        self.storage = storage
        self.logger = logger
        self._entries: Dict[date, Entry] = {}

    def _load(self, entry_date: date) -> Optional[Entry]:
        """Cached instance for a date, loading from storage on a miss."""
        cached = self._entries.get(entry_date)
        if cached is not None:
            return cached

        loaded = self.storage.load_entry(entry_date)
        if loaded is None:
            return None

        self._entries[entry_date] = loaded
        safe_logger(self.logger).log_debug(
            "Cached entry", {"date": entry_date.isoformat(), "bullets": loaded.total_bullets()}
        )
        return loaded

    def get_entry(self, entry_date: date) -> Optional[Entry]:
        """
        Entry for a date, or None if storage has none.

        Returns:
            A copy; changing it does not affect the cache
        """
        entry = self._load(entry_date)
        return entry.copy() if entry is not None else None

    def get_entry_mut(self, entry_date: date) -> Entry:
        """
        Cached entry for a date, created empty if storage has none.

        Returns:
            The cache's own instance; edits are kept until save_entry()
        """
        entry = self._load(entry_date)
        if entry is None:
            entry = Entry(entry_date)
            self._entries[entry_date] = entry
        return entry

    def replace_entry(self, entry: Entry) -> None:
        """Install a copy of entry as the cached entry for its date."""
        self._entries[entry.date] = entry.copy()

    def save_entry(self, entry_date: date) -> bool:
        """
        Write a cached entry through to storage.

        Args:
            entry_date: Date to save

        Returns:
            True if the entry was cached and saved, False if the date was
            not loaded (nothing to save)

        Raises:
            StorageError: If the backend fails; the cached entry is kept
        """
        entry = self._entries.get(entry_date)
        if entry is None:
            return False

        self.storage.save_entry(entry.copy())
        safe_logger(self.logger).log_operation(
            "entry_saved",
            {"date": entry_date.isoformat(), "bullets": entry.total_bullets()},
        )
        return True

    def get_entries_in_range(self, date_range: DateRange) -> List[Entry]:
        """Present entries in the range, ascending by date, as copies."""
        entries = []
        for day in date_range.days():
            entry = self.get_entry(day)
            if entry is not None:
                entries.append(entry)
        return entries

    def list_dates_in_range(self, date_range: DateRange) -> List[date]:
        return self.storage.list_dates(date_range)

    def state(self, entry_date: date) -> EntryState:
        return EntryState.CACHED if entry_date in self._entries else EntryState.UNLOADED

    def is_cached(self, entry_date: date) -> bool:
        return entry_date in self._entries

    def cached_dates(self) -> List[date]:
        return sorted(self._entries)

    def evict(self, entry_date: date) -> None:
        """Drop a date from the cache, discarding unsaved edits."""
        self._entries.pop(entry_date, None)

    def __repr__(self) -> str:
        return f"<Journal(storage={self.storage!r}, cached={len(self._entries)})>"
