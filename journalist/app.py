#!/usr/bin/env python3
"""
app.py
-------------------
Application wiring: configuration -> logger -> storage -> journal.

The 'database' backend stores entries in journal.db directly. The 'files'
backend stores one file per date and mirrors every write through its hooks:

    FileSystemStorage
      └── HookRegistry (frozen)
            ├── Simple Logger   -> write_log.txt
            └── Database Sync   -> journal.db

Hook keys in config.yaml: simple_logger, database_sync.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Optional

# --- Local imports ---
from journalist.core.config import JournalConfig
from journalist.core.logging_manager import JournalLogger
from journalist.database.hooks import HookRegistry
from journalist.database.hooks.plugins import DatabaseSyncHook, SimpleLoggerHook
from journalist.database.journal import Journal
from journalist.database.storage import FileSystemStorage, JournalStorage, SqlStorage
from journalist.editor import EntryEditor

SIMPLE_LOGGER_KEY = "simple_logger"
DATABASE_SYNC_KEY = "database_sync"


def build_hook_registry(
    config: JournalConfig, logger: Optional[JournalLogger] = None
) -> HookRegistry:
    """Registry with the built-in hooks, honoring config.hooks, then frozen."""
    registry = HookRegistry(logger=logger)
    registry.register(SimpleLoggerHook(), enabled=config.hook_enabled(SIMPLE_LOGGER_KEY))
    registry.register(
        DatabaseSyncHook(SqlStorage(config.db_path, logger=logger)),
        enabled=config.hook_enabled(DATABASE_SYNC_KEY),
    )

    return registry.freeze()


def build_storage(
    config: JournalConfig, logger: Optional[JournalLogger] = None
) -> JournalStorage:
    """
    Create the configured storage backend.

    Raises:
        StorageError: If the backend cannot be opened or migrated
    """
    if config.backend == "files":
        return FileSystemStorage(
            data_dir=config.data_dir,
            journal_dir=config.journal_dir,
            hook_registry=build_hook_registry(config, logger),
            logger=logger,
        )
    return SqlStorage(config.db_path, logger=logger)


class JournalApp:
    """
    Everything a command needs, built once from configuration.

    Attributes:
        config: Resolved configuration
        logger: Journal logger
        storage: Active storage backend
        journal: Entry cache over storage
    """

    def __init__(
        self,
        config: JournalConfig,
        logger: Optional[JournalLogger] = None,
        storage: Optional[JournalStorage] = None,
    ) -> None:
        self.config = config
        self.logger = logger
        self.storage = storage if storage is not None else build_storage(config, logger)
        self.journal = Journal(self.storage, logger=logger)

    @property
    def hook_registry(self) -> Optional[HookRegistry]:
        """Hook registry of the files backend; None for the database backend."""
        return getattr(self.storage, "hook_registry", None)

    def editor(self) -> EntryEditor:
        return EntryEditor(self.journal, self.config.editor, logger=self.logger)

    def close(self) -> None:
        registry = self.hook_registry
        if registry is not None:
            for hook in registry.hooks():
                storage = getattr(hook, "storage", None)
                if storage is not None:
                    storage.close()
        self.storage.close()
