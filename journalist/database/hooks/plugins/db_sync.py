#!/usr/bin/env python3
"""
db_sync.py
-------------------
Write hook that mirrors file-backend writes into a SQL database.

Keeps the database copy of each entry, and its derived metadata (term
frequencies, cross references), current with the entry files. An empty
entry removes the date from the database as well.
"""
from __future__ import annotations

from journalist.dataclasses.entry import Entry

from ...storage.sql_storage import SqlStorage
from ..registry import WriteContext, WriteHook


class DatabaseSyncHook(WriteHook):
    """
    Save every written entry into a SqlStorage.

    Attributes:
        storage: Target database
    """

    name = "Database Sync"

    def __init__(self, storage: SqlStorage) -> None:
        self.storage = storage

    def on_entry_written(self, context: WriteContext, entry: Entry) -> None:
        self.storage.save_entry(entry)
        self.storage.refresh_metadata(context.date, entry)
