"""
conftest.py
-----------
Shared pytest fixtures for Journalist tests.

Provides fixtures for:
- Temporary journal directories
- Sample entries
- Storage backends (SQL, file, and both via `storage`)
- Journal cache
"""
import pytest
from pathlib import Path
from datetime import date
from tempfile import TemporaryDirectory
from unittest.mock import MagicMock

from journalist.core.logging_manager import JournalLogger
from journalist.database.hooks import HookRegistry
from journalist.database.journal import Journal
from journalist.database.storage import FileSystemStorage, SqlStorage
from journalist.dataclasses.entry import Bullet, BulletType, Entry


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def journal_dir(tmp_dir):
    """Journal root inside the temporary directory."""
    path = tmp_dir / "journal"
    path.mkdir()
    return path


@pytest.fixture
def mock_logger():
    """Logger double for asserting on log calls."""
    return MagicMock(spec=JournalLogger)


# ----- Sample Entry Fixtures -----

@pytest.fixture
def march_15():
    return date(2024, 3, 15)


@pytest.fixture
def sample_entry(march_15):
    """Entry with a task, an event and a note."""
    return (
        Entry(march_15)
        .add("Complete unit tests", BulletType.TASK)
        .add("Team standup at 9am", BulletType.EVENT)
        .add("Remember to update documentation", BulletType.NOTE)
    )


@pytest.fixture
def full_entry():
    """Entry with one bullet of every type."""
    entry = Entry(date(2024, 3, 20))
    for bullet_type in BulletType:
        entry.add_bullet(Bullet(f"A {bullet_type.value} bullet", bullet_type))
    return entry


@pytest.fixture
def march_entries():
    """Three entries on non-consecutive March dates."""
    return [
        Entry(date(2024, 3, 1)).add("Start the project", BulletType.TASK),
        Entry(date(2024, 3, 5))
        .add("Project kickoff meeting", BulletType.EVENT)
        .add("Buy milk", BulletType.TASK),
        Entry(date(2024, 3, 9)).add("Project felt slow today", BulletType.MISSTEP),
    ]


# ----- Storage Fixtures -----

@pytest.fixture
def sql_storage():
    """Migrated in-memory SQLite storage."""
    storage = SqlStorage()
    yield storage
    storage.close()


@pytest.fixture
def file_storage(journal_dir):
    """File storage with an empty hook registry."""
    return FileSystemStorage(
        data_dir=journal_dir / "data",
        journal_dir=journal_dir,
        hook_registry=HookRegistry(),
    )


@pytest.fixture(params=["sql", "files"])
def storage(request, journal_dir):
    """Each storage backend in turn, for behavior both must share."""
    if request.param == "sql":
        backend = SqlStorage(journal_dir / "journal.db")
    else:
        backend = FileSystemStorage(
            data_dir=journal_dir / "data",
            journal_dir=journal_dir,
        )
    yield backend
    backend.close()


@pytest.fixture
def journal(sql_storage):
    """Journal cache over in-memory SQL storage."""
    return Journal(sql_storage)
