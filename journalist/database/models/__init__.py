"""
Database Models Package
------------------------

SQLAlchemy ORM models for the Journalist database:
- base: Base class and timestamp mixin
- core: MigrationRecord, BulletRecord
- metadata: TermFrequency, CrossReference

Usage:
    from journalist.database.models import BulletRecord, MigrationRecord
"""
from .base import Base, TimestampMixin
from .core import BulletRecord, MigrationRecord
from .metadata import CrossReference, TermFrequency

__all__ = [
    "Base",
    "BulletRecord",
    "CrossReference",
    "MigrationRecord",
    "TermFrequency",
    "TimestampMixin",
]
