"""
Integration tests for the journalist CLI.

Each test runs commands against a fresh journal directory. The editor is a
small shell command that overwrites the temporary file, standing in for a
user typing into $EDITOR.
"""
import pytest
from click.testing import CliRunner
from datetime import date

from journalist.cli import cli
from journalist.database.storage import SqlStorage
from journalist.dataclasses.entry import BulletType, Entry

WRITE_TASK_EDITOR = "sh -c 'printf \"# Tasks\\nFrom the CLI\\n\\n# Events\\nStandup\\n\" > \"$0\"'"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def clean_env():
    """Environment without journal-related variables."""
    return {"JOURNAL_DIR": None, "JOURNAL_BACKEND": None, "EDITOR": WRITE_TASK_EDITOR}


@pytest.fixture
def invoke(runner, journal_dir, clean_env):
    def _invoke(*args, backend="database", env=None):
        environment = dict(clean_env)
        environment.update(env or {})
        return runner.invoke(
            cli,
            ["--journal-dir", str(journal_dir), "--backend", backend, *args],
            env=environment,
        )
    return _invoke


@pytest.fixture
def seeded_db(journal_dir):
    """Database backend pre-populated with three March entries."""
    storage = SqlStorage(journal_dir / "journal.db")
    storage.save_entry(Entry(date(2024, 3, 1)).add("Start the project", BulletType.TASK))
    storage.save_entry(
        Entry(date(2024, 3, 5))
        .add("Project kickoff meeting", BulletType.EVENT)
        .add("Buy milk", BulletType.TASK)
    )
    storage.save_entry(Entry(date(2024, 3, 9)).add("Dentist", BulletType.EVENT))
    storage.close()
    return journal_dir


class TestEntryCommands:
    def test_show_missing_entry(self, invoke):
        result = invoke("show", "2024-03-15")
        assert result.exit_code == 1
        assert "No entry found for 2024-03-15" in result.output

    def test_show_entry(self, invoke, seeded_db):
        result = invoke("show", "2024-03-05")

        assert result.exit_code == 0, result.output
        assert "2024-03-05" in result.output
        assert "[ ] Buy milk" in result.output
        assert "• Project kickoff meeting" in result.output

    def test_invalid_date(self, invoke):
        result = invoke("show", "15/03/2024")
        assert result.exit_code == 2
        assert "YYYY-MM-DD" in result.output

    def test_list_range(self, invoke, seeded_db):
        result = invoke("list", "--start", "2024-03-01", "--end", "2024-03-05")

        assert result.exit_code == 0, result.output
        assert "2 entries in 2024-03-01..2024-03-05" in result.output
        assert "Dentist" not in result.output

    def test_list_empty_range(self, invoke):
        result = invoke("list", "--start", "2020-01-01", "--end", "2020-01-31")
        assert result.exit_code == 0
        assert "No entries in 2020-01-01..2020-01-31" in result.output

    def test_list_reversed_range(self, invoke):
        result = invoke("list", "--start", "2024-03-31", "--end", "2024-03-01")
        assert result.exit_code == 1
        assert "ValidationError" in result.output

    def test_search_newest_first(self, invoke, seeded_db):
        result = invoke("search", "project")

        assert result.exit_code == 0, result.output
        assert "2 entries match" in result.output
        assert result.output.index("2024-03-05") < result.output.index("2024-03-01")
        assert "Buy milk" not in result.output

    def test_search_no_match(self, invoke, seeded_db):
        result = invoke("search", "holiday")
        assert "No entries match 'holiday'" in result.output


class TestNewCommand:
    def test_new_with_database_backend(self, invoke, journal_dir):
        result = invoke("new", "--date", "2024-03-15")

        assert result.exit_code == 0, result.output
        assert "Saved 2 bullet(s) for 2024-03-15" in result.output

        storage = SqlStorage(journal_dir / "journal.db")
        try:
            entry = storage.load_entry(date(2024, 3, 15))
        finally:
            storage.close()
        assert [b.content for b in entry.all_bullets()] == ["From the CLI", "Standup"]

    def test_new_with_files_backend_runs_hooks(self, invoke, journal_dir):
        result = invoke("new", "--date", "2024-03-15", backend="files")

        assert result.exit_code == 0, result.output
        entry_file = journal_dir / "data" / "2024" / "03" / "15" / "entry.md"
        assert entry_file.read_text() == "# Tasks\nFrom the CLI\n\n# Events\nStandup\n\n"
        assert "Entry written for 2024-03-15" in (journal_dir / "write_log.txt").read_text()

        mirror = SqlStorage(journal_dir / "journal.db")
        try:
            assert mirror.count_entries() == 1
        finally:
            mirror.close()

    def test_then_show(self, invoke):
        invoke("new", "--date", "2024-03-15", backend="files")
        result = invoke("show", "2024-03-15", backend="files")

        assert result.exit_code == 0, result.output
        assert "[ ] From the CLI" in result.output

    def test_failing_editor(self, invoke, journal_dir):
        result = invoke("new", "--date", "2024-03-15", env={"EDITOR": "false"})

        assert result.exit_code == 1
        assert "EditorError" in result.output

    def test_editor_from_config_file(self, invoke, journal_dir):
        (journal_dir / "config.yaml").write_text("editor: 'false'\n")
        result = invoke("new", "--date", "2024-03-15")
        assert "EditorError" in result.output


class TestMaintenanceCommands:
    def test_stats(self, invoke, seeded_db):
        result = invoke("stats")

        assert result.exit_code == 0, result.output
        assert "SQLite Storage Backend" in result.output
        assert "Entries: 3" in result.output

    def test_maintenance(self, invoke, seeded_db):
        result = invoke("maintenance")
        assert result.exit_code == 0, result.output
        assert "Maintenance complete" in result.output

    def test_hooks_files_backend(self, invoke):
        result = invoke("hooks", backend="files")

        assert result.exit_code == 0, result.output
        assert "Simple Logger: ✓ enabled" in result.output
        assert "Database Sync: ✓ enabled" in result.output

    def test_hooks_disabled_by_config(self, invoke, journal_dir):
        (journal_dir / "config.yaml").write_text("hooks:\n  database_sync: false\n")
        result = invoke("hooks", backend="files")
        assert "Database Sync: ✗ disabled" in result.output

    def test_hooks_database_backend(self, invoke):
        result = invoke("hooks")
        assert "No write hooks" in result.output

    def test_invalid_config(self, invoke, journal_dir):
        (journal_dir / "config.yaml").write_text("backend: [oops\n")
        result = invoke("stats")

        assert result.exit_code == 1
        assert "ConfigError" in result.output


class TestMigrationCommands:
    def test_status_on_fresh_journal(self, invoke):
        result = invoke("migration", "status")

        assert result.exit_code == 0, result.output
        assert "0001_initial_schema (pending)" in result.output
        assert "Pending: 2" in result.output

    def test_upgrade_then_status(self, invoke):
        upgrade = invoke("migration", "upgrade")
        assert upgrade.exit_code == 0, upgrade.output
        assert "Applied 2 migration(s)" in upgrade.output

        status = invoke("migration", "status")
        assert "✓ 0001_initial_schema" in status.output
        assert "Pending: 0" in status.output

    def test_upgrade_when_current(self, invoke, seeded_db):
        result = invoke("migration", "upgrade")
        assert "Database is up to date" in result.output
