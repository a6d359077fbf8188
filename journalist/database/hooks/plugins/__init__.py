"""Built-in write hooks."""
from .db_sync import DatabaseSyncHook
from .simple_logger import SimpleLoggerHook

__all__ = ["DatabaseSyncHook", "SimpleLoggerHook"]
