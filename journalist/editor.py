#!/usr/bin/env python3
"""
editor.py
-------------------
Edit a day's entry in an external text editor.

The entry (or an empty template) is written to a temporary Markdown file,
the editor is run on it, and the edited text is parsed back and saved
through the journal:

    journal entry -> serialize_for_editing -> $EDITOR -> parse -> save

The text form carries no task state. Each state from the previous version
is copied onto the edited bullet with the same type and content, matched
in order; new or reworded tasks start PENDING.

The temporary file is removed whether or not the edit succeeds.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import shlex
import subprocess
from collections import defaultdict, deque
from datetime import date
from pathlib import Path
from typing import Callable, Deque, Dict, List, Optional, Tuple

# --- Local imports ---
from journalist.core.exceptions import EditorError
from journalist.core.logging_manager import JournalLogger, safe_logger
from journalist.core.temporal_files import TemporalFileManager
from journalist.database.journal import Journal
from journalist.dataclasses.entry import BulletType, Entry, TaskState
from journalist.dataclasses.parsers.text_codec import EntryTextCodec


def carry_task_states(previous: Optional[Entry], edited: Entry) -> Entry:
    """
    Copy task states from the previous version of an entry onto the edit.

    A parsed bullet takes the state of the first unused previous bullet
    with the same type and content. Bullets without a match keep the
    PENDING state the parser gave them.

    Args:
        previous: Entry before editing, or None if there was none
        edited: Freshly parsed entry; modified in place

    Returns:
        The edited entry
    """
    if previous is None:
        return edited

    states: Dict[Tuple[BulletType, str], Deque[TaskState]] = defaultdict(deque)
    for bullet in previous.all_bullets():
        if bullet.bullet_type.tracks_state:
            states[(bullet.bullet_type, bullet.content)].append(bullet.task_state)

    for bullet_type in BulletType:
        if not bullet_type.tracks_state:
            continue
        bullets = edited.get_bullets_mut(bullet_type)
        for i, bullet in enumerate(bullets):
            remaining = states.get((bullet_type, bullet.content))
            if remaining:
                bullets[i] = bullet.with_state(remaining.popleft())
    return edited


class EntryEditor:
    """
    Round-trips entries through an external editor.

    Attributes:
        journal: Cache the entry is read from and saved through
        editor_command: Editor command line, e.g. 'vim' or 'code --wait'
        runner: Callable compatible with subprocess.run
        temp_dir: Where temporary files are created (system temp if None)
        logger: Optional logger for operation tracking
    """

    def __init__(
        self,
        journal: Journal,
        editor_command: str,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        temp_dir: Optional[Path] = None,
        logger: Optional[JournalLogger] = None,
    ) -> None:
        self.journal = journal
        self.editor_command = editor_command
        self.runner = runner
        self.temp_dir = temp_dir
        self.logger = logger
        self.codec = EntryTextCodec()

    def build_command(self, path: Path) -> List[str]:
        """
        Editor argv for a file.

        Examples:
            >>> EntryEditor(journal, "code --wait").build_command(Path("/tmp/x.md"))
            ['code', '--wait', '/tmp/x.md']
        """
        argv = shlex.split(self.editor_command)
        if not argv:
            raise EditorError("No editor configured")
        return argv + [str(path)]

    def initial_text(self, entry: Optional[Entry]) -> str:
        """Text the editor opens with: the entry's sections, or the empty template."""
        if entry is None:
            return self.codec.empty_template()
        return self.codec.serialize_for_editing(entry)

    def edit_entry_for_date(self, entry_date: date) -> Entry:
        """
        Open a date's entry in the editor and save the result.

        Args:
            entry_date: Date to edit

        Returns:
            The entry as saved

        Raises:
            EditorError: If the editor cannot start or exits non-zero; nothing
                is saved in that case
            StorageError: If saving the edited entry fails
        """
        log = safe_logger(self.logger)
        previous = self.journal.get_entry(entry_date)

        with TemporalFileManager(self.temp_dir) as temp_manager:
            temp_path = temp_manager.create_temp_file(
                suffix=".md",
                prefix=f"journalist_{entry_date.isoformat()}_",
                content=self.initial_text(previous),
            )
            command = self.build_command(temp_path)
            log.log_debug("Launching editor", {"command": command})

            try:
                result = self.runner(command, check=False)
            except OSError as e:
                raise EditorError(f"Could not start editor '{command[0]}': {e}") from e

            if result.returncode != 0:
                raise EditorError(
                    f"Editor '{command[0]}' exited with status {result.returncode}"
                )

            edited = temp_path.read_text(encoding="utf-8")

        entry = carry_task_states(previous, self.codec.parse(entry_date, edited))
        self.journal.replace_entry(entry)
        self.journal.save_entry(entry_date)

        log.log_operation(
            "entry_edited",
            {"date": entry_date.isoformat(), "bullets": entry.total_bullets()},
        )
        return entry
