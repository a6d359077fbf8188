"""
Journalist
==========

A bullet journal for the terminal.

Dated entries are made of typed bullets (tasks, events, notes, priorities,
inspirations, insights, missteps) and edited as plain text in an external
editor. Entries are stored either in a SQLite database or as one text file
per date; the file backend mirrors its writes through write hooks.

Main Components:
    - dataclasses: Bullet, Entry, DateRange and the text codec
    - database: ORM models, migrations runner, storage backends, hooks,
      and the Journal cache
    - core: Exceptions, logging, paths, configuration, temp files
    - cli: Command-line interface

Primary Interfaces:
    - journalist.cli: `journalist` command
    - journalist.app.JournalApp: Configured storage and journal

Example Usage:
    >>> from datetime import date
    >>> from journalist import BulletType, Journal, SqlStorage
    >>> journal = Journal(SqlStorage())
    >>> journal.get_entry_mut(date(2024, 3, 15)).add("Call the bank", BulletType.TASK)
    >>> journal.save_entry(date(2024, 3, 15))
    True
"""

__version__ = "0.1.0"

# Expose primary interfaces for convenience
from journalist.database import FileSystemStorage, Journal, JournalStorage, SqlStorage
from journalist.dataclasses import Bullet, BulletType, DateRange, Entry, TaskState

__all__ = [
    "Bullet",
    "BulletType",
    "DateRange",
    "Entry",
    "FileSystemStorage",
    "Journal",
    "JournalStorage",
    "SqlStorage",
    "TaskState",
]
