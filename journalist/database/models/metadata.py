"""
Metadata Models
---------------

Secondary indexes derived from stored bullets. They are rebuilt by
SqlStorage.refresh_metadata and never hold data of their own.

Models:
    - TermFrequency: How often each term appears across all bullets
    - CrossReference: Dates mentioned inside another date's bullets
"""
from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class TermFrequency(Base):
    """
    Occurrence count of one term.

    Attributes:
        term: Casefolded word
        frequency: Total occurrences across all bullets
        first_seen: Earliest entry date containing the term
        last_seen: Latest entry date containing the term
    """

    __tablename__ = "term_frequency"

    term: Mapped[str] = mapped_column(String, primary_key=True)
    frequency: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    first_seen: Mapped[date] = mapped_column(Date, nullable=False)
    last_seen: Mapped[date] = mapped_column(Date, nullable=False)


class CrossReference(Base):
    """
    A link from one entry to another date.

    Attributes:
        source_date: Entry whose bullets contain the reference
        target_date: Date being referenced
        reference_type: Kind of link ('mention' for ISO dates in content)
    """

    __tablename__ = "cross_references"

    source_date: Mapped[date] = mapped_column(Date, primary_key=True)
    target_date: Mapped[date] = mapped_column(Date, primary_key=True)
    reference_type: Mapped[str] = mapped_column(String, primary_key=True)
