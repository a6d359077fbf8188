#!/usr/bin/env python3
"""
simple_logger.py
-------------------
Write hook that keeps a plain-text audit trail of entry writes.

Each write appends one line to <journal_dir>/write_log.txt:

    [2024-03-15 09:12:44 UTC] Entry written for 2024-03-15 - Path: /.../entry.md - Content length: 42 characters
"""
from __future__ import annotations

from datetime import datetime, timezone

from journalist.core.paths import WRITE_LOG_FILENAME
from journalist.dataclasses.entry import Entry

from ..registry import WriteContext, WriteHook


def format_log_line(context: WriteContext, timestamp: datetime) -> str:
    return (
        f"[{timestamp.strftime('%Y-%m-%d %H:%M:%S UTC')}] "
        f"Entry written for {context.date.isoformat()} - "
        f"Path: {context.entry_path} - "
        f"Content length: {len(context.content)} characters\n"
    )


class SimpleLoggerHook(WriteHook):
    """Append a line per write to the journal's write log."""

    name = "Simple Logger"

    def on_entry_written(self, context: WriteContext, entry: Entry) -> None:
        context.journal_dir.mkdir(parents=True, exist_ok=True)
        log_path = context.journal_dir / WRITE_LOG_FILENAME
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(format_log_line(context, datetime.now(timezone.utc)))
