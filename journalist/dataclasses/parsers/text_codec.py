#!/usr/bin/env python3
"""
text_codec.py
-------------------
Conversion between Entry objects and their plain-text editing form.

The text form is a sequence of sections, one per bullet type, in canonical
order:

    # Tasks
    Complete unit tests
    Add documentation

    # Events
    Team standup at 9am

Each bullet is one line of raw content. Task state is not written, so
parsed tasks and priorities come back PENDING.

Parsing is forgiving: unknown headers, and any lines before the first known
header, are dropped without error.

Two serializations exist and are not interchangeable:
    serialize()             only non-empty sections (stored form)
    serialize_for_editing() all seven sections (editor form)

Because of that, serialize(parse(d, empty_template())) is "" rather than the
template itself.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from typing import Dict, List, Optional

# --- Local imports ---
from journalist.dataclasses.entry import HEADER_MARKER, Bullet, BulletType, Entry

HEADER_PREFIX = HEADER_MARKER


class EntryTextCodec:
    """
    Bidirectional mapping between Entry and its section-based text form.

    Usage:
        codec = EntryTextCodec()
        text = codec.serialize_for_editing(entry)
        entry = codec.parse(entry.date, text)
    """

    def __init__(self) -> None:
        self._headers: Dict[str, BulletType] = {
            self.header_for(bullet_type).lower(): bullet_type for bullet_type in BulletType
        }

    @staticmethod
    def header_for(bullet_type: BulletType) -> str:
        """Header line for a bullet type, e.g. '# Tasks'."""
        return f"{HEADER_PREFIX} {bullet_type.section_name}"

    def serialize(self, entry: Entry) -> str:
        """Serialize only the sections that hold bullets."""
        return self._render(entry, include_empty=False)

    def serialize_for_editing(self, entry: Entry) -> str:
        """Serialize all seven sections, empty ones included."""
        return self._render(entry, include_empty=True)

    def empty_template(self) -> str:
        """Editing form of an entry with no bullets."""
        return self.serialize_for_editing(Entry(date.min))

    def _render(self, entry: Entry, include_empty: bool) -> str:
        lines: List[str] = []
        for bullet_type in BulletType:
            bullets = entry.get_bullets(bullet_type)
            if not bullets and not include_empty:
                continue
            lines.append(self.header_for(bullet_type))
            lines.extend(bullet.content for bullet in bullets)
            lines.append("")
        return "".join(f"{line}\n" for line in lines)

    def parse(self, entry_date: date, text: str) -> Entry:
        """
        Parse edited text into an Entry.

        Args:
            entry_date: Date the entry belongs to
            text: Text in section form

        Returns:
            Entry holding every bullet found under a recognized header
        """
        entry = Entry(entry_date)
        current: Optional[BulletType] = None

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if not line:
                continue

            if line.startswith(HEADER_PREFIX):
                current = self._match_header(line)
                continue

            if current is not None:
                entry.add_bullet(Bullet(line, current))

        return entry

    def _match_header(self, line: str) -> Optional[BulletType]:
        # Collapse "#   Tasks" to "# tasks" before lookup
        title = line[len(HEADER_PREFIX):].strip().lower()
        return self._headers.get(f"{HEADER_PREFIX} {title}")


_codec = EntryTextCodec()


def serialize(entry: Entry) -> str:
    return _codec.serialize(entry)


def serialize_for_editing(entry: Entry) -> str:
    return _codec.serialize_for_editing(entry)


def parse(entry_date: date, text: str) -> Entry:
    return _codec.parse(entry_date, text)


def empty_template() -> str:
    return _codec.empty_template()
