#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the Journalist project.

Defines default locations as Path objects for consistent path handling.
User data lives outside the package, under the XDG data directory:

    JOURNAL_DIR/
    ├── data/          # File backend: data/YYYY/MM/DD/entry.md
    ├── indexes/       # Secondary indexes
    ├── logs/          # Application logs
    ├── journal.db     # SQLite database backend
    ├── write_log.txt  # Simple Logger hook output
    └── config.yaml    # Optional configuration overrides

Package-relative paths (migrations) are resolved at import time.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from pathlib import Path


def default_journal_dir() -> Path:
    """
    Determine the default journal directory.

    Uses $XDG_DATA_HOME when set, falling back to ~/.local/share.

    Returns:
        Path to the journal root directory
    """
    data_home = os.environ.get("XDG_DATA_HOME")
    base = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return base / "journalist"


# ----- Package directory -----
PACKAGE_DIR: Path = Path(__file__).resolve().parent.parent
MIGRATIONS_DIR = PACKAGE_DIR / "migrations" / "versions"

# ----- Journal layout -----
DATA_DIRNAME = "data"
INDEXES_DIRNAME = "indexes"
LOG_DIRNAME = "logs"
DB_FILENAME = "journal.db"
CONFIG_FILENAME = "config.yaml"
WRITE_LOG_FILENAME = "write_log.txt"
ENTRY_FILENAME = "entry.md"

JOURNAL_DIR = default_journal_dir()
DATA_DIR = JOURNAL_DIR / DATA_DIRNAME
INDEXES_DIR = JOURNAL_DIR / INDEXES_DIRNAME
LOG_DIR = JOURNAL_DIR / LOG_DIRNAME
DB_PATH = JOURNAL_DIR / DB_FILENAME
