#!/usr/bin/env python3
"""
base.py
--------------------
JournalStorage: the contract every storage backend implements.

Backends are chosen at construction time and are interchangeable from the
caller's point of view:

    - load_entry returns None when a date holds no bullets
    - save_entry replaces whatever was stored for the date; saving an
      entry with no bullets removes the date
    - range results are ordered by date ascending, search results by date
      descending
    - failures surface as StorageError; absence is never an error

Realizations:
    SqlStorage         SQLite database, one row per bullet
    FileSystemStorage  one text file per date, with write hooks
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

# --- Local imports ---
from journalist.dataclasses.date_range import DateRange
from journalist.dataclasses.entry import BulletType, Entry


class JournalStorage(ABC):
    """Abstract storage backend for journal entries."""

    @abstractmethod
    def initialize(self) -> None:
        """Prepare the backend (schema, directories). Safe to call repeatedly."""

    @abstractmethod
    def backend_info(self) -> str:
        """Human-readable backend description."""

    @abstractmethod
    def maintenance(self) -> None:
        """Best-effort compaction. Never required for correctness."""

    @abstractmethod
    def load_entry(self, entry_date: date) -> Optional[Entry]:
        """Entry for a date, or None if the date holds no bullets."""

    @abstractmethod
    def load_entries(self, date_range: DateRange) -> List[Entry]:
        """Entries in the range, ascending by date."""

    @abstractmethod
    def list_dates(self, date_range: DateRange) -> List[date]:
        """Dates in the range holding an entry, ascending."""

    @abstractmethod
    def save_entry(self, entry: Entry) -> None:
        """Replace everything stored for entry.date with this entry."""

    @abstractmethod
    def delete_entry(self, entry_date: date) -> None:
        """Remove a date's entry. Deleting a missing date is not an error."""

    @abstractmethod
    def search_entries(self, query: str) -> List[Entry]:
        """
        Entries with a bullet containing the query, newest first.

        Matching is a casefolded substring test on bullet content. A blank
        query matches nothing.
        """

    @abstractmethod
    def count_entries(self) -> int:
        """Number of distinct dates holding an entry."""

    @abstractmethod
    def find_entries_by_type(
        self, bullet_type: BulletType, date_range: DateRange
    ) -> List[Entry]:
        """Entries in the range with at least one bullet of the type."""

    def find_entries_with_tasks(self, date_range: DateRange) -> List[Entry]:
        return self.find_entries_by_type(BulletType.TASK, date_range)

    def find_entries_with_events(self, date_range: DateRange) -> List[Entry]:
        return self.find_entries_by_type(BulletType.EVENT, date_range)

    def find_entries_with_priorities(self, date_range: DateRange) -> List[Entry]:
        return self.find_entries_by_type(BulletType.PRIORITY, date_range)

    def refresh_metadata(self, entry_date: date, entry: Entry) -> None:
        """Refresh secondary indexes after a write. No-op unless overridden."""
        del entry_date, entry

    def close(self) -> None:
        """Release backend resources. No-op unless overridden."""


def normalize_query(query: str) -> str:
    """Casefolded, trimmed search query ('' means match nothing)."""
    return query.strip().casefold()
