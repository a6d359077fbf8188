"""Tests specific to SqlStorage: schema, metadata tables, concurrency."""
import threading
import pytest
from datetime import date
from unittest.mock import MagicMock

from sqlalchemy import inspect, text

from journalist.core.exceptions import MigrationError
from journalist.core.logging_manager import JournalLogger
from journalist.database.models import BulletRecord
from journalist.database.storage import SqlStorage
from journalist.database.storage.sql_storage import (
    extract_mentioned_dates,
    extract_terms,
)
from journalist.dataclasses.date_range import DateRange
from journalist.dataclasses.entry import Bullet, BulletType, Entry, TaskState


class TestSchema:
    def test_constructor_migrates(self, sql_storage):
        tables = set(inspect(sql_storage.engine).get_table_names())
        assert {"migrations", "bullets", "term_frequency", "cross_references"} <= tables

    def test_auto_initialize_disabled(self):
        storage = SqlStorage(auto_initialize=False)
        try:
            assert "bullets" not in inspect(storage.engine).get_table_names()
        finally:
            storage.close()

    def test_broken_migration_surfaces(self, tmp_dir):
        versions = tmp_dir / "versions"
        versions.mkdir()
        (versions / "0001_bad.sql").write_text("CREATE TABLE (;")

        with pytest.raises(MigrationError):
            SqlStorage(tmp_dir / "bad.db", migrations_dir=versions)

    def test_one_row_per_bullet(self, sql_storage, sample_entry):
        sql_storage.save_entry(sample_entry)
        with sql_storage.session_scope() as session:
            count = session.query(BulletRecord).count()
        assert count == 3


class TestPersistence:
    def test_reopen_file_database(self, tmp_dir, sample_entry):
        first = SqlStorage(tmp_dir / "journal.db")
        first.save_entry(sample_entry)
        first.close()

        second = SqlStorage(tmp_dir / "journal.db")
        try:
            assert second.load_entry(sample_entry.date) == sample_entry
        finally:
            second.close()

    def test_creates_parent_directories(self, tmp_dir):
        storage = SqlStorage(tmp_dir / "nested" / "dir" / "journal.db")
        storage.close()
        assert (tmp_dir / "nested" / "dir" / "journal.db").exists()

    def test_task_state_preserved(self, sql_storage, march_15):
        entry = (
            Entry(march_15)
            .add_bullet(Bullet("done", BulletType.TASK).complete())
            .add_bullet(Bullet("later", BulletType.TASK).schedule())
            .add_bullet(Bullet("moved", BulletType.PRIORITY).migrate())
        )
        sql_storage.save_entry(entry)

        states = [b.task_state for b in sql_storage.load_entry(march_15).all_bullets()]
        assert states == [TaskState.COMPLETED, TaskState.SCHEDULED, TaskState.MIGRATED]

    def test_unknown_type_rows_skipped(self, sql_storage, march_15):
        logger = MagicMock(spec=JournalLogger)
        sql_storage.logger = logger
        sql_storage.save_entry(Entry(march_15).add("kept", BulletType.NOTE))
        with sql_storage.session_scope() as session:
            session.execute(
                text(
                    "INSERT INTO bullets (date, content, type) "
                    "VALUES ('2024-03-15', 'legacy', 'reminder')"
                )
            )

        loaded = sql_storage.load_entry(march_15)
        assert [b.content for b in loaded.all_bullets()] == ["kept"]
        logger.log_warning.assert_called_once()

    def test_rows_with_invalid_content_skipped(self, sql_storage, march_15):
        logger = MagicMock(spec=JournalLogger)
        sql_storage.logger = logger
        sql_storage.save_entry(Entry(march_15).add("kept", BulletType.NOTE))
        with sql_storage.session_scope() as session:
            session.execute(
                text(
                    "INSERT INTO bullets (date, content, type) VALUES "
                    "('2024-03-15', '# heading', 'note'), ('2024-03-15', '   ', 'task')"
                )
            )

        loaded = sql_storage.load_entry(march_15)
        assert [b.content for b in loaded.all_bullets()] == ["kept"]
        logger.log_warning.assert_called_once()


class TestMetadata:
    def test_extract_terms(self):
        assert extract_terms("Call the Bank at 9am, re: ID") == ["call", "the", "bank"]

    def test_extract_mentioned_dates(self):
        assert extract_mentioned_dates("see 2024-03-01 and 2024-02-30") == [date(2024, 3, 1)]

    def test_refresh_builds_term_frequency(self, sql_storage):
        first = Entry(date(2024, 3, 1)).add("Project planning", BulletType.TASK)
        second = Entry(date(2024, 3, 9)).add("Project review project", BulletType.EVENT)
        for entry in (first, second):
            sql_storage.save_entry(entry)
            sql_storage.refresh_metadata(entry.date, entry)

        terms = dict(sql_storage.top_terms(10))
        assert terms["project"] == 3
        assert terms["planning"] == 1

        with sql_storage.session_scope() as session:
            row = session.execute(
                text("SELECT first_seen, last_seen FROM term_frequency WHERE term = 'project'")
            ).one()
        assert tuple(row) == ("2024-03-01", "2024-03-09")

    def test_top_terms_ordering(self, sql_storage, march_15):
        entry = Entry(march_15).add("beta alpha beta gamma", BulletType.NOTE)
        sql_storage.save_entry(entry)
        sql_storage.refresh_metadata(march_15, entry)

        assert sql_storage.top_terms(2) == [("beta", 2), ("alpha", 1)]

    def test_terms_follow_edits(self, sql_storage, march_15):
        entry = Entry(march_15).add("dentist appointment", BulletType.EVENT)
        sql_storage.save_entry(entry)
        sql_storage.refresh_metadata(march_15, entry)

        edited = Entry(march_15).add("haircut appointment", BulletType.EVENT)
        sql_storage.save_entry(edited)
        sql_storage.refresh_metadata(march_15, edited)

        terms = dict(sql_storage.top_terms(10))
        assert "dentist" not in terms
        assert terms["haircut"] == 1

    def test_cross_references(self, sql_storage, march_15):
        entry = Entry(march_15).add("Follow up on 2024-03-01 meeting", BulletType.TASK)
        sql_storage.save_entry(entry)
        sql_storage.refresh_metadata(march_15, entry)

        assert sql_storage.find_references_from(march_15) == [date(2024, 3, 1)]
        assert sql_storage.find_references_to(date(2024, 3, 1)) == [march_15]

    def test_self_reference_ignored(self, sql_storage, march_15):
        entry = Entry(march_15).add("Today is 2024-03-15", BulletType.NOTE)
        sql_storage.refresh_metadata(march_15, entry)
        assert sql_storage.find_references_from(march_15) == []

    def test_delete_clears_references(self, sql_storage, march_15):
        entry = Entry(march_15).add("About 2024-03-01", BulletType.NOTE)
        sql_storage.save_entry(entry)
        sql_storage.refresh_metadata(march_15, entry)

        sql_storage.delete_entry(march_15)
        assert sql_storage.find_references_to(date(2024, 3, 1)) == []


class TestConcurrency:
    def test_parallel_saves_serialized(self, tmp_dir):
        storage = SqlStorage(tmp_dir / "journal.db")
        errors = []

        def write(day):
            try:
                entry = Entry(date(2024, 3, day)).add(f"day {day}", BulletType.NOTE)
                storage.save_entry(entry)
                storage.load_entry(entry.date)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=write, args=(day,)) for day in range(1, 21)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        try:
            assert errors == []
            assert storage.count_entries() == 20
            assert len(storage.list_dates(DateRange.month(2024, 3))) == 20
        finally:
            storage.close()


class TestLogging:
    def test_operations_logged(self, march_15):
        logger = MagicMock(spec=JournalLogger)
        storage = SqlStorage(logger=logger)
        try:
            storage.save_entry(Entry(march_15).add("x", BulletType.NOTE))
        finally:
            storage.close()

        operations = [c.args[0] for c in logger.log_operation.call_args_list]
        assert "save_entry_completed" in operations
