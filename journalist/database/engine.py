#!/usr/bin/env python3
"""
engine.py
--------------------
SQLAlchemy engine factory for the SQLite journal database.

The engine holds exactly one DBAPI connection (StaticPool), which callers
must guard with a lock; SqlStorage does. Two connection-level adjustments
are installed:

    - pysqlite's implicit transaction handling is disabled and BEGIN is
      emitted by SQLAlchemy instead, so DDL inside a migration unit is
      rolled back together with its bookkeeping row on failure.
    - a `casefold(text)` SQL function mirroring str.casefold, so substring
      search matches the file backend's semantics for non-ASCII text.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Optional, Union

# --- Third party ---
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.pool import StaticPool


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def sqlite_url(db_path: Union[str, Path, None]) -> str:
    """Build a SQLite URL; None gives an in-memory database."""
    if db_path is None:
        return "sqlite://"
    return f"sqlite:///{Path(db_path)}"


def create_journal_engine(db_path: Union[str, Path, None], echo: bool = False) -> Engine:
    """
    Create the engine for a journal database.

    Args:
        db_path: Path to the SQLite file, or None for in-memory
        echo: Echo SQL statements (debugging)

    Returns:
        Configured Engine
    """
    engine = create_engine(
        sqlite_url(db_path),
        echo=echo,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Let SQLAlchemy own transaction boundaries (see module docstring)
        dbapi_connection.isolation_level = None
        dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)

    @event.listens_for(engine, "begin")
    def _on_begin(connection):
        connection.exec_driver_sql("BEGIN")

    return engine
