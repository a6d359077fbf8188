"""
Core Models
------------

Central models for the Journalist database.

Models:
    - MigrationRecord: One row per applied migration unit
    - BulletRecord: One row per bullet (the primary model)

Entries are not stored as rows of their own. An entry is the set of bullet
rows sharing a date, ordered by id within each type, so a date without
bullet rows has no entry.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from journalist.core.exceptions import EntryValidationError
from journalist.dataclasses.entry import Bullet, BulletType, TaskState

from .base import Base, TimestampMixin, utc_now


# ----- Schema Versioning -----
class MigrationRecord(Base):
    """
    Tracks applied migration units.

    Attributes:
        version: Integer version parsed from the unit name (primary key)
        name: Unit name without extension, e.g. '0001_initial_schema'
        applied_at: When the unit was applied
    """

    __tablename__ = "migrations"

    version: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=False, doc="Migration version"
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    applied_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, doc="Timestamp when applied"
    )

    def __repr__(self) -> str:
        return f"<MigrationRecord(version={self.version}, name='{self.name}')>"


# ----- Bullet Model -----
class BulletRecord(Base, TimestampMixin):
    """
    A single stored bullet.

    Attributes:
        id: Primary key; also the order of bullets within a type
        date: Date of the entry the bullet belongs to
        content: Bullet text
        type: BulletType value
        task_state: TaskState value for tasks and priorities, else NULL
    """

    __tablename__ = "bullets"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    task_state: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    @classmethod
    def from_bullet(cls, entry_date: date, bullet: Bullet) -> "BulletRecord":
        return cls(
            date=entry_date,
            content=bullet.content,
            type=bullet.bullet_type.value,
            task_state=bullet.task_state.value if bullet.task_state else None,
        )

    def to_bullet(self) -> Optional[Bullet]:
        """
        Convert back to a Bullet.

        Returns:
            The Bullet, or None if the stored type is not a known BulletType
            or the stored content is not valid bullet content
        """
        if self.type not in BulletType.choices():
            return None
        bullet_type = BulletType(self.type)

        task_state = None
        if bullet_type.tracks_state and self.task_state in TaskState.choices():
            task_state = TaskState(self.task_state)

        try:
            return Bullet(self.content, bullet_type, task_state)
        except EntryValidationError:
            return None

    def __repr__(self) -> str:
        return f"<BulletRecord(id={self.id}, date={self.date}, type='{self.type}')>"
