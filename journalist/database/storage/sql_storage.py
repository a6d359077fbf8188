#!/usr/bin/env python3
"""
sql_storage.py
--------------------
SQLite storage backend for journal entries.

Entries are stored one row per bullet in the `bullets` table; an entry is
the set of rows sharing a date, ordered by id within each type. Saving an
entry deletes the date's rows and inserts the new ones in one transaction.

The engine holds a single connection. Every public operation acquires the
storage lock through session_scope(), so the backend can be shared between
threads even though only one statement runs at a time.

Besides the JournalStorage operations, the backend maintains two derived
tables (see refresh_metadata):
    term_frequency    occurrences of each word across all bullets
    cross_references  ISO dates mentioned inside an entry's bullets

Usage:
    storage = SqlStorage(Path("journal.db"), logger=logger)
    storage.save_entry(entry)
    storage.search_entries("standup")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
import threading
from collections import defaultdict
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

# --- Third party ---
from sqlalchemy import delete, distinct, func, select
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from journalist.core.logging_manager import JournalLogger
from journalist.core.paths import MIGRATIONS_DIR
from journalist.dataclasses.date_range import DateRange
from journalist.dataclasses.entry import BulletType, Entry

from ..decorators import handle_db_errors, log_database_operation
from ..engine import create_journal_engine
from ..migration_runner import MigrationRunner
from ..models import BulletRecord, CrossReference, TermFrequency
from .base import JournalStorage, normalize_query

BACKEND_INFO = "SQLite Storage Backend v1.0"
MENTION = "mention"

_TERM = re.compile(r"[^\W\d_]{3,}")
_ISO_DATE = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b")


def extract_terms(content: str) -> List[str]:
    """Casefolded words of three or more letters."""
    return _TERM.findall(content.casefold())


def extract_mentioned_dates(content: str) -> List[date]:
    """
    Valid ISO dates (YYYY-MM-DD) appearing in a line of text.

    Examples:
        >>> extract_mentioned_dates("Follow up from 2024-03-01 meeting")
        [datetime.date(2024, 3, 1)]
        >>> extract_mentioned_dates("Not a date: 2024-13-40")
        []
    """
    found: List[date] = []
    for year, month, day in _ISO_DATE.findall(content):
        try:
            found.append(date(int(year), int(month), int(day)))
        except ValueError:
            continue
    return found


class SqlStorage(JournalStorage):
    """
    Journal storage in a SQLite database.

    Attributes:
        db_path: Database file, or None for an in-memory database
        migrations_dir: Directory with the schema migration units
        logger: Optional logger for operation tracking
        engine: SQLAlchemy engine (single connection)
        SessionLocal: Session factory bound to the engine
    """

    def __init__(
        self,
        db_path: Union[str, Path, None] = None,
        migrations_dir: Path = MIGRATIONS_DIR,
        logger: Optional[JournalLogger] = None,
        auto_initialize: bool = True,
        echo: bool = False,
    ) -> None:
        """
        Open (and by default migrate) a journal database.

        Args:
            db_path: SQLite file; parent directories are created. None keeps
                the database in memory
            migrations_dir: Where migration units are discovered
            logger: Optional logger
            auto_initialize: Run initialize() immediately
            echo: Echo SQL statements
        """
        self.db_path = Path(db_path) if db_path is not None else None
        self.migrations_dir = Path(migrations_dir)
        self.logger = logger
        self._lock = threading.RLock()

        if self.db_path is not None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_journal_engine(self.db_path, echo=echo)
        self.SessionLocal = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

        if self.logger:
            self.logger.log_info(
                "Storage opened",
                {"backend": BACKEND_INFO, "db_path": str(self.db_path or ":memory:")},
            )

        if auto_initialize:
            self.initialize()

    # ---- Session management ----
    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Transactional scope holding the storage lock.

        Commits on success, rolls back and re-raises on error.
        """
        with self._lock:
            session = self.SessionLocal()
            try:
                yield session
                session.commit()
            except Exception as e:
                session.rollback()
                if self.logger:
                    self.logger.log_error(e, {"operation": "session_rollback"})
                raise
            finally:
                session.close()

    @property
    def migration_runner(self) -> MigrationRunner:
        return MigrationRunner(self.engine, self.migrations_dir, logger=self.logger)

    # ---- Lifecycle ----
    def initialize(self) -> None:
        """Apply outstanding schema migrations."""
        with self._lock:
            self.migration_runner.run()

    def backend_info(self) -> str:
        return BACKEND_INFO

    @handle_db_errors
    @log_database_operation("maintenance")
    def maintenance(self) -> None:
        """VACUUM and ANALYZE the database."""
        with self._lock:
            # VACUUM cannot run inside a transaction, so bypass the
            # connection's BEGIN handling
            raw = self.engine.raw_connection()
            try:
                raw.driver_connection.execute("VACUUM")
                raw.driver_connection.execute("ANALYZE")
            finally:
                raw.close()

        if self.logger:
            self.logger.log_info("Database maintenance completed")

    def close(self) -> None:
        self.engine.dispose()

    # ---- Reads ----
    @handle_db_errors
    @log_database_operation("load_entry")
    def load_entry(self, entry_date: date) -> Optional[Entry]:
        with self.session_scope() as session:
            records = session.scalars(
                select(BulletRecord)
                .where(BulletRecord.date == entry_date)
                .order_by(BulletRecord.id)
            ).all()
        entries = self._assemble(records)
        return entries[0] if entries else None

    @handle_db_errors
    @log_database_operation("load_entries")
    def load_entries(self, date_range: DateRange) -> List[Entry]:
        with self.session_scope() as session:
            records = session.scalars(
                select(BulletRecord)
                .where(BulletRecord.date.between(date_range.start, date_range.end))
                .order_by(BulletRecord.date, BulletRecord.id)
            ).all()
        return self._assemble(records)

    @handle_db_errors
    @log_database_operation("list_dates")
    def list_dates(self, date_range: DateRange) -> List[date]:
        with self.session_scope() as session:
            return list(
                session.scalars(
                    select(distinct(BulletRecord.date))
                    .where(BulletRecord.date.between(date_range.start, date_range.end))
                    .order_by(BulletRecord.date)
                )
            )

    @handle_db_errors
    @log_database_operation("search_entries")
    def search_entries(self, query: str) -> List[Entry]:
        needle = normalize_query(query)
        if not needle:
            return []

        with self.session_scope() as session:
            matching_dates = (
                select(BulletRecord.date)
                .where(func.casefold(BulletRecord.content).contains(needle, autoescape=True))
            )
            records = session.scalars(
                select(BulletRecord)
                .where(BulletRecord.date.in_(matching_dates))
                .order_by(BulletRecord.date.desc(), BulletRecord.id)
            ).all()
        return self._assemble(records)

    @handle_db_errors
    @log_database_operation("count_entries")
    def count_entries(self) -> int:
        with self.session_scope() as session:
            return session.scalar(select(func.count(distinct(BulletRecord.date)))) or 0

    @handle_db_errors
    @log_database_operation("find_entries_by_type")
    def find_entries_by_type(
        self, bullet_type: BulletType, date_range: DateRange
    ) -> List[Entry]:
        bullet_type = BulletType(bullet_type)
        with self.session_scope() as session:
            matching_dates = (
                select(BulletRecord.date)
                .where(BulletRecord.type == bullet_type.value)
                .where(BulletRecord.date.between(date_range.start, date_range.end))
            )
            records = session.scalars(
                select(BulletRecord)
                .where(BulletRecord.date.in_(matching_dates))
                .order_by(BulletRecord.date, BulletRecord.id)
            ).all()
        return self._assemble(records)

    # ---- Writes ----
    @handle_db_errors
    @log_database_operation("save_entry")
    def save_entry(self, entry: Entry) -> None:
        with self.session_scope() as session:
            session.execute(delete(BulletRecord).where(BulletRecord.date == entry.date))
            session.add_all(
                BulletRecord.from_bullet(entry.date, bullet)
                for bullet in entry.all_bullets()
            )

    @handle_db_errors
    @log_database_operation("delete_entry")
    def delete_entry(self, entry_date: date) -> None:
        with self.session_scope() as session:
            session.execute(delete(BulletRecord).where(BulletRecord.date == entry_date))
            session.execute(
                delete(CrossReference).where(CrossReference.source_date == entry_date)
            )

    # ---- Derived metadata ----
    @handle_db_errors
    @log_database_operation("refresh_metadata")
    def refresh_metadata(self, entry_date: date, entry: Entry) -> None:
        """
        Rebuild term statistics and the entry's outgoing cross references.

        Term statistics are recomputed from every stored bullet, so they
        stay exact after edits that remove words. Cross references are
        replaced for entry_date only.

        Args:
            entry_date: Date whose references are refreshed
            entry: The entry as just written
        """
        with self.session_scope() as session:
            session.execute(delete(TermFrequency))
            for term, (count, first, last) in self._term_stats(session).items():
                session.add(
                    TermFrequency(term=term, frequency=count, first_seen=first, last_seen=last)
                )

            session.execute(
                delete(CrossReference).where(CrossReference.source_date == entry_date)
            )
            targets = {
                mentioned
                for bullet in entry.all_bullets()
                for mentioned in extract_mentioned_dates(bullet.content)
                if mentioned != entry_date
            }
            session.add_all(
                CrossReference(
                    source_date=entry_date, target_date=target, reference_type=MENTION
                )
                for target in sorted(targets)
            )

    @handle_db_errors
    def top_terms(self, limit: int = 10) -> List[Tuple[str, int]]:
        """Most frequent terms, ties broken alphabetically."""
        with self.session_scope() as session:
            rows = session.execute(
                select(TermFrequency.term, TermFrequency.frequency)
                .order_by(TermFrequency.frequency.desc(), TermFrequency.term)
                .limit(limit)
            ).all()
        return [(term, frequency) for term, frequency in rows]

    @handle_db_errors
    def find_references_to(self, target_date: date) -> List[date]:
        """Dates whose entries mention target_date."""
        with self.session_scope() as session:
            return list(
                session.scalars(
                    select(CrossReference.source_date)
                    .where(CrossReference.target_date == target_date)
                    .order_by(CrossReference.source_date)
                )
            )

    @handle_db_errors
    def find_references_from(self, source_date: date) -> List[date]:
        """Dates mentioned in the entry for source_date."""
        with self.session_scope() as session:
            return list(
                session.scalars(
                    select(CrossReference.target_date)
                    .where(CrossReference.source_date == source_date)
                    .order_by(CrossReference.target_date)
                )
            )

    # ---- Helpers ----
    @staticmethod
    def _term_stats(session: Session) -> Dict[str, Tuple[int, date, date]]:
        stats: Dict[str, Tuple[int, date, date]] = {}
        rows = session.execute(select(BulletRecord.date, BulletRecord.content))
        for entry_date, content in rows:
            for term in extract_terms(content):
                if term in stats:
                    count, first, last = stats[term]
                    stats[term] = (count + 1, min(first, entry_date), max(last, entry_date))
                else:
                    stats[term] = (1, entry_date, entry_date)
        return stats

    def _assemble(self, records: Sequence[BulletRecord]) -> List[Entry]:
        """
        Group ordered bullet rows into entries, keeping the row order.

        Rows with an unrecognized type or invalid content are skipped with a
        warning.
        """
        entries: Dict[date, Entry] = {}
        skipped: Dict[date, int] = defaultdict(int)

        for record in records:
            bullet = record.to_bullet()
            if bullet is None:
                skipped[record.date] += 1
                continue
            if record.date not in entries:
                entries[record.date] = Entry(record.date)
            entries[record.date].add_bullet(bullet)

        if skipped and self.logger:
            self.logger.log_warning(
                "Skipped unreadable bullet rows",
                {"dates": {d.isoformat(): n for d, n in skipped.items()}},
            )
        return list(entries.values())

    def __repr__(self) -> str:
        return f"<SqlStorage(db_path={self.db_path or ':memory:'})>"
