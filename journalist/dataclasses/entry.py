#!/usr/bin/env python3
"""
entry.py
-------------------
Dataclasses for bullet-journal entries.

An Entry is the complete set of bullets recorded for one calendar date.
Bullets are typed (task, event, note, ...) and kept grouped by type, with
insertion order preserved inside each group.

Key Design:
- BulletType declaration order is the canonical section order
- Task state exists only on task-bearing bullets (tasks and priorities)
- Entries are values: copy() before handing one to another component
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Dict, Iterator, List, Optional

# --- Local imports ---
from journalist.core.exceptions import EntryValidationError

# Lines starting with this marker are section headers in the text form
HEADER_MARKER = "#"


class BulletType(str, Enum):
    """
    Enumeration of bullet types, in canonical order.
    - TASK: Something to do
    - EVENT: Something that happened or is scheduled
    - NOTE: Free-form note
    - PRIORITY: Task that matters most today
    - INSPIRATION: Idea worth keeping
    - INSIGHT: Something learned
    - MISSTEP: Something that went wrong
    """

    TASK = "task"
    EVENT = "event"
    NOTE = "note"
    PRIORITY = "priority"
    INSPIRATION = "inspiration"
    INSIGHT = "insight"
    MISSTEP = "misstep"

    @classmethod
    def choices(cls) -> List[str]:
        """Get all bullet type values in canonical order."""
        return [bullet_type.value for bullet_type in cls]

    @property
    def section_name(self) -> str:
        """Header text used by the text codec."""
        return _SECTION_NAMES[self]

    @property
    def tracks_state(self) -> bool:
        """Whether bullets of this type carry a TaskState."""
        return self in (BulletType.TASK, BulletType.PRIORITY)

    def __str__(self) -> str:
        return self.value


_SECTION_NAMES = {
    BulletType.TASK: "Tasks",
    BulletType.EVENT: "Events",
    BulletType.NOTE: "Notes",
    BulletType.PRIORITY: "Priority",
    BulletType.INSPIRATION: "Inspiration",
    BulletType.INSIGHT: "Insights",
    BulletType.MISSTEP: "Missteps",
}


class TaskState(str, Enum):
    """
    Enumeration of task states.
    - PENDING: Not done yet (default)
    - COMPLETED: Done
    - MIGRATED: Carried over to another day
    - SCHEDULED: Moved to a future date
    """

    PENDING = "pending"
    COMPLETED = "completed"
    MIGRATED = "migrated"
    SCHEDULED = "scheduled"

    @classmethod
    def choices(cls) -> List[str]:
        return [state.value for state in cls]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Bullet:
    """
    One line item of an entry.

    Attributes:
        content: Single line of free text
        bullet_type: Type of the bullet
        task_state: State for tasks and priorities; None for other types

    Content is stripped of surrounding whitespace. Empty content and content
    starting with "#" are rejected, since neither survives the text form.

    A task or priority created without a state starts PENDING. Giving a
    state to any other type raises EntryValidationError.
    """

    content: str
    bullet_type: BulletType
    task_state: Optional[TaskState] = None

    def __post_init__(self) -> None:
        bullet_type = BulletType(self.bullet_type)
        object.__setattr__(self, "bullet_type", bullet_type)

        if "\n" in self.content or "\r" in self.content:
            raise EntryValidationError("Bullet content must be a single line")

        content = self.content.strip()
        if not content:
            raise EntryValidationError("Bullet content must not be empty")
        if content.startswith(HEADER_MARKER):
            raise EntryValidationError(
                f"Bullet content must not start with '{HEADER_MARKER}': {content!r}"
            )
        object.__setattr__(self, "content", content)

        if bullet_type.tracks_state:
            state = TaskState.PENDING if self.task_state is None else TaskState(self.task_state)
            object.__setattr__(self, "task_state", state)
        elif self.task_state is not None:
            raise EntryValidationError(
                f"Bullets of type '{bullet_type.value}' cannot carry a task state"
            )

    def with_state(self, state: TaskState) -> "Bullet":
        """
        Return a copy of this bullet in the given state.

        Raises:
            EntryValidationError: If the bullet type does not track state
        """
        if not self.bullet_type.tracks_state:
            raise EntryValidationError(
                f"Bullets of type '{self.bullet_type.value}' cannot carry a task state"
            )
        return replace(self, task_state=state)

    def complete(self) -> "Bullet":
        return self._transition(TaskState.COMPLETED)

    def migrate(self) -> "Bullet":
        return self._transition(TaskState.MIGRATED)

    def schedule(self) -> "Bullet":
        return self._transition(TaskState.SCHEDULED)

    def _transition(self, state: TaskState) -> "Bullet":
        # Non-task bullets have no state to change
        if not self.bullet_type.tracks_state:
            return self
        return replace(self, task_state=state)


@dataclass(eq=False)
class Entry:
    """
    All bullets recorded for one calendar date.

    Attributes:
        date: The entry's date (unique key)
        bullets: Bullets grouped by type, insertion order preserved

    Two entries are equal when they share a date and hold the same bullets
    in the same order for every type. A type with an empty list and a type
    that is absent compare equal.
    """

    date: date
    bullets: Dict[BulletType, List[Bullet]] = field(default_factory=dict)

    def add_bullet(self, bullet: Bullet) -> "Entry":
        """Append a bullet to its type's group. Returns self for chaining."""
        self.bullets.setdefault(bullet.bullet_type, []).append(bullet)
        return self

    def add(self, content: str, bullet_type: BulletType) -> "Entry":
        """Shortcut for add_bullet(Bullet(content, bullet_type))."""
        return self.add_bullet(Bullet(content, bullet_type))

    def get_bullets(self, bullet_type: BulletType) -> List[Bullet]:
        """Return a copy of the bullets of one type (empty list if none)."""
        return list(self.bullets.get(bullet_type, []))

    def get_bullets_mut(self, bullet_type: BulletType) -> List[Bullet]:
        """Return the live list of bullets of one type, creating it if needed."""
        return self.bullets.setdefault(bullet_type, [])

    def all_bullets(self) -> Iterator[Bullet]:
        """Iterate all bullets in canonical type order."""
        for bullet_type in BulletType:
            yield from self.bullets.get(bullet_type, [])

    def bullet_count(self, bullet_type: BulletType) -> int:
        return len(self.bullets.get(bullet_type, []))

    def total_bullets(self) -> int:
        return sum(len(group) for group in self.bullets.values())

    def is_empty(self) -> bool:
        return self.total_bullets() == 0

    def has_type(self, bullet_type: BulletType) -> bool:
        return self.bullet_count(bullet_type) > 0

    def copy(self) -> "Entry":
        """Independent copy. Bullets are immutable, so only the lists are copied."""
        return Entry(
            date=self.date,
            bullets={
                bullet_type: list(group)
                for bullet_type, group in self.bullets.items()
                if group
            },
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self.date == other.date and all(
            self.bullets.get(bullet_type, []) == other.bullets.get(bullet_type, [])
            for bullet_type in BulletType
        )

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{bullet_type.value}={self.bullet_count(bullet_type)}"
            for bullet_type in BulletType
            if self.bullet_count(bullet_type)
        )
        return f"Entry(date={self.date.isoformat()}, {counts or 'empty'})"
