#!/usr/bin/env python3
"""
file_storage.py
--------------------
File-per-date storage backend.

Each entry lives in its own file holding exactly its stored text form:

    data_dir/
    └── 2024/
        └── 03/
            └── 15/
                └── entry.md

Writes go to a temporary file in the same directory and are moved into
place with os.replace, so a reader never sees a partial entry. After every
successful write the write-hook registry runs. Saving an entry with no
bullets and deleting a date both count as writes of empty content. Hook
failures are reported by the registry and never fail the write.

Task state is not part of the text form: tasks and priorities read back
PENDING.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
import tempfile
from datetime import date
from pathlib import Path
from typing import List, Optional

# --- Local imports ---
from journalist.core.logging_manager import JournalLogger, safe_logger
from journalist.core.paths import ENTRY_FILENAME
from journalist.dataclasses.date_range import DateRange
from journalist.dataclasses.entry import BulletType, Entry
from journalist.dataclasses.parsers.text_codec import EntryTextCodec

from ..decorators import handle_db_errors, log_database_operation
from ..hooks.registry import HookRegistry, WriteContext
from .base import JournalStorage, normalize_query

BACKEND_INFO = "File System Storage Backend v1.0"


class FileSystemStorage(JournalStorage):
    """
    Journal storage as one text file per date.

    Attributes:
        data_dir: Root of the YYYY/MM/DD tree
        journal_dir: Journal root, passed to write hooks
        hook_registry: Hooks run after each write
        logger: Optional logger for operation tracking
    """

    def __init__(
        self,
        data_dir: Path,
        journal_dir: Path,
        hook_registry: Optional[HookRegistry] = None,
        logger: Optional[JournalLogger] = None,
        auto_initialize: bool = True,
    ) -> None:
        self.data_dir = Path(data_dir)
        self.journal_dir = Path(journal_dir)
        self.hook_registry = hook_registry if hook_registry is not None else HookRegistry()
        self.logger = logger
        self.codec = EntryTextCodec()

        if auto_initialize:
            self.initialize()

    def entry_path(self, entry_date: date) -> Path:
        """Location of a date's entry file (whether or not it exists)."""
        return (
            self.data_dir
            / f"{entry_date.year:04d}"
            / f"{entry_date.month:02d}"
            / f"{entry_date.day:02d}"
            / ENTRY_FILENAME
        )

    # ---- Lifecycle ----
    @handle_db_errors
    def initialize(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.journal_dir.mkdir(parents=True, exist_ok=True)

    def backend_info(self) -> str:
        return BACKEND_INFO

    @handle_db_errors
    @log_database_operation("maintenance")
    def maintenance(self) -> None:
        """Remove empty day, month and year directories."""
        removed = 0
        # Deepest paths first, so a month emptied by its days goes too
        for directory in sorted(self.data_dir.rglob("*"), reverse=True):
            if directory.is_dir() and not any(directory.iterdir()):
                directory.rmdir()
                removed += 1

        safe_logger(self.logger).log_info(
            "File storage maintenance completed", {"directories_removed": removed}
        )

    # ---- Reads ----
    def _read(self, entry_date: date) -> Optional[Entry]:
        path = self.entry_path(entry_date)
        if not path.is_file():
            return None
        entry = self.codec.parse(entry_date, path.read_text(encoding="utf-8"))
        return None if entry.is_empty() else entry

    @handle_db_errors
    @log_database_operation("load_entry")
    def load_entry(self, entry_date: date) -> Optional[Entry]:
        return self._read(entry_date)

    @handle_db_errors
    @log_database_operation("load_entries")
    def load_entries(self, date_range: DateRange) -> List[Entry]:
        entries = []
        for day in date_range.days():
            entry = self._read(day)
            if entry is not None:
                entries.append(entry)
        return entries

    @handle_db_errors
    @log_database_operation("list_dates")
    def list_dates(self, date_range: DateRange) -> List[date]:
        return [entry.date for entry in self.load_entries(date_range)]

    def _all_dates(self) -> List[date]:
        """Dates with an entry file anywhere under data_dir, ascending."""
        found = []
        for path in self.data_dir.glob(f"*/*/*/{ENTRY_FILENAME}"):
            day_dir = path.parent
            try:
                found.append(
                    date(
                        int(day_dir.parent.parent.name),
                        int(day_dir.parent.name),
                        int(day_dir.name),
                    )
                )
            except ValueError:
                safe_logger(self.logger).log_warning(
                    "Ignoring file outside the date layout", {"path": str(path)}
                )
        return sorted(found)

    def _all_entries(self) -> List[Entry]:
        entries = []
        for entry_date in self._all_dates():
            entry = self._read(entry_date)
            if entry is not None:
                entries.append(entry)
        return entries

    @handle_db_errors
    @log_database_operation("search_entries")
    def search_entries(self, query: str) -> List[Entry]:
        needle = normalize_query(query)
        if not needle:
            return []

        matches = [
            entry
            for entry in self._all_entries()
            if any(needle in bullet.content.casefold() for bullet in entry.all_bullets())
        ]
        return list(reversed(matches))

    @handle_db_errors
    @log_database_operation("count_entries")
    def count_entries(self) -> int:
        return len(self._all_entries())

    @handle_db_errors
    @log_database_operation("find_entries_by_type")
    def find_entries_by_type(
        self, bullet_type: BulletType, date_range: DateRange
    ) -> List[Entry]:
        bullet_type = BulletType(bullet_type)
        return [
            entry
            for entry in self.load_entries(date_range)
            if entry.has_type(bullet_type)
        ]

    # ---- Writes ----
    @handle_db_errors
    @log_database_operation("save_entry")
    def save_entry(self, entry: Entry) -> None:
        path = self.entry_path(entry.date)

        if entry.is_empty():
            content = ""
            self._remove(path)
        else:
            content = self.codec.serialize(entry)
            self._write_atomic(path, content)

        self._run_hooks(entry, path, content)

    @handle_db_errors
    @log_database_operation("delete_entry")
    def delete_entry(self, entry_date: date) -> None:
        # Hooks see a delete as an empty write, so mirrors drop the date too
        path = self.entry_path(entry_date)
        self._remove(path)
        self._run_hooks(Entry(entry_date), path, "")

    # ---- Helpers ----
    def _run_hooks(self, entry: Entry, path: Path, content: str) -> None:
        context = WriteContext(
            date=entry.date,
            entry_path=path,
            journal_dir=self.journal_dir,
            content=content,
        )
        failed = self.hook_registry.execute_write_hooks(context, entry)
        if failed:
            safe_logger(self.logger).log_debug(
                "Write hooks reported failures",
                {"date": entry.date.isoformat(), "failed": failed},
            )

    @staticmethod
    def _write_atomic(path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @staticmethod
    def _remove(path: Path) -> None:
        path.unlink(missing_ok=True)

    def __repr__(self) -> str:
        return f"<FileSystemStorage(data_dir={self.data_dir})>"
