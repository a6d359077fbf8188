"""
Base Classes
------------

Foundational ORM classes for the Journalist database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - TimestampMixin: created_at / updated_at columns

Tables are created by the migration units, not by Base.metadata.create_all;
the models only map onto them.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import datetime, timezone

# --- Third party ---
from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# --- Base ORM class ---
class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


# --- Timestamps ---
class TimestampMixin:
    """
    Mixin providing row timestamps.

    Attributes:
        created_at: When the row was inserted
        updated_at: When the row was last modified
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, doc="Row creation time"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        doc="Row modification time",
    )
