"""
Journalist Database Package
---------------------------

Persistence for journal entries:
- models: SQLAlchemy ORM models
- migration_runner: Versioned schema migrations
- storage: JournalStorage interface with SQL and file realizations
- hooks: Write hooks run by the file backend
- journal: Entry cache in front of a storage backend
"""
from .journal import EntryState, Journal
from .migration_runner import MigrationRunner
from .storage import FileSystemStorage, JournalStorage, SqlStorage

__all__ = [
    "EntryState",
    "FileSystemStorage",
    "Journal",
    "JournalStorage",
    "MigrationRunner",
    "SqlStorage",
]
