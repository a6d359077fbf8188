"""
Storage backends for journal entries.

    JournalStorage     abstract interface
    SqlStorage         SQLite database, one row per bullet
    FileSystemStorage  one text file per date, with write hooks
"""
from .base import JournalStorage
from .file_storage import FileSystemStorage
from .sql_storage import SqlStorage

__all__ = ["FileSystemStorage", "JournalStorage", "SqlStorage"]
