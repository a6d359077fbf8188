#!/usr/bin/env python3
"""
migration_runner.py
--------------------
Versioned schema migrations for the journal database.

Migration units live in one directory and are named with a leading integer
version:

    0001_initial_schema.py     defines upgrade(), using alembic's `op`
    0002_entry_metadata.py
    0003_extra_index.sql       semicolon-separated SQL statements

Files whose name does not start with an integer are ignored. Applied units
are recorded in the `migrations` table as (version, name, applied_at).

Each unit runs in its own transaction together with its bookkeeping row:
it is either fully applied and recorded, or rolled back and reported as a
MigrationError, which stops the run. Applied versions are skipped, so
running again is a no-op.

Usage:
    runner = MigrationRunner(engine, MIGRATIONS_DIR, logger=logger)
    applied = runner.run()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import importlib.util
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Set

# --- Third party ---
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import Engine, insert, select
from sqlalchemy.exc import SQLAlchemyError

# --- Local imports ---
from journalist.core.exceptions import MigrationError
from journalist.core.logging_manager import JournalLogger, safe_logger
from journalist.core.paths import MIGRATIONS_DIR

from .models.base import utc_now
from .models.core import MigrationRecord

SUPPORTED_SUFFIXES = (".py", ".sql")
_SQL_COMMENT = re.compile(r"--[^\n]*")


@dataclass(frozen=True)
class MigrationUnit:
    """
    One discovered migration.

    Attributes:
        version: Integer parsed from the leading name token
        name: File name without extension
        path: Location of the unit
    """

    version: int
    name: str
    path: Path

    @property
    def is_sql(self) -> bool:
        return self.path.suffix == ".sql"

    def load_upgrade(self) -> Callable[[], None]:
        """Import a Python unit and return its upgrade() function."""
        spec = importlib.util.spec_from_file_location(
            f"journalist_migration_{self.version:04d}", self.path
        )
        if spec is None or spec.loader is None:
            raise MigrationError(f"Cannot load migration {self.name}")

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        upgrade = getattr(module, "upgrade", None)
        if not callable(upgrade):
            raise MigrationError(f"Migration {self.name} does not define upgrade()")
        return upgrade

    def sql_statements(self) -> List[str]:
        """Split a SQL unit into statements, dropping `--` comments."""
        script = _SQL_COMMENT.sub("", self.path.read_text(encoding="utf-8"))
        return [stmt.strip() for stmt in script.split(";") if stmt.strip()]


@dataclass(frozen=True)
class MigrationStatus:
    """Discovered unit joined with its applied timestamp (None if pending)."""

    version: int
    name: str
    applied_at: Optional[datetime]

    @property
    def applied(self) -> bool:
        return self.applied_at is not None


def parse_version(path: Path) -> Optional[int]:
    """
    Extract the leading integer version from a unit file name.

    Examples:
        >>> parse_version(Path("0002_add_index.sql"))
        2
        >>> parse_version(Path("readme_first.sql")) is None
        True
    """
    token = path.stem.split("_", 1)[0]
    return int(token) if token.isdigit() else None


def discover_migrations(migrations_dir: Path) -> List[MigrationUnit]:
    """
    Find migration units in a directory, sorted by version.

    Args:
        migrations_dir: Directory holding the units

    Returns:
        Units in ascending version order; empty if the directory is missing

    Raises:
        MigrationError: If two units share a version
    """
    if not migrations_dir.is_dir():
        return []

    units: List[MigrationUnit] = []
    for path in migrations_dir.iterdir():
        if not path.is_file() or path.suffix not in SUPPORTED_SUFFIXES:
            continue
        version = parse_version(path)
        if version is None:
            continue
        units.append(MigrationUnit(version=version, name=path.stem, path=path))

    units.sort(key=lambda unit: unit.version)

    for previous, current in zip(units, units[1:]):
        if previous.version == current.version:
            raise MigrationError(
                f"Duplicate migration version {current.version}: "
                f"{previous.path.name}, {current.path.name}"
            )
    return units


class MigrationRunner:
    """
    Applies outstanding migration units to a database.

    Attributes:
        engine: Engine of the target database
        migrations_dir: Directory holding the units
        logger: Optional logger for operation tracking
    """

    def __init__(
        self,
        engine: Engine,
        migrations_dir: Path = MIGRATIONS_DIR,
        logger: Optional[JournalLogger] = None,
    ) -> None:
        self.engine = engine
        self.migrations_dir = Path(migrations_dir)
        self.logger = logger

    def ensure_tracking_table(self) -> None:
        """Create the migrations table if it does not exist."""
        try:
            with self.engine.begin() as connection:
                MigrationRecord.__table__.create(bind=connection, checkfirst=True)
        except SQLAlchemyError as e:
            raise MigrationError(f"Failed to create migrations table: {e}") from e

    def discover(self) -> List[MigrationUnit]:
        return discover_migrations(self.migrations_dir)

    def applied_versions(self) -> Set[int]:
        """Versions recorded in the migrations table."""
        self.ensure_tracking_table()
        try:
            with self.engine.connect() as connection:
                rows = connection.execute(select(MigrationRecord.version))
                return {row[0] for row in rows}
        except SQLAlchemyError as e:
            raise MigrationError(f"Failed to read applied migrations: {e}") from e

    def pending(self) -> List[MigrationUnit]:
        applied = self.applied_versions()
        return [unit for unit in self.discover() if unit.version not in applied]

    def status(self) -> List[MigrationStatus]:
        """Every discovered unit with its applied timestamp, if any."""
        self.ensure_tracking_table()
        try:
            with self.engine.connect() as connection:
                applied = {
                    row.version: row.applied_at
                    for row in connection.execute(
                        select(MigrationRecord.version, MigrationRecord.applied_at)
                    )
                }
        except SQLAlchemyError as e:
            raise MigrationError(f"Failed to read applied migrations: {e}") from e
        return [
            MigrationStatus(unit.version, unit.name, applied.get(unit.version))
            for unit in self.discover()
        ]

    def run(self) -> List[MigrationUnit]:
        """
        Apply every pending unit in ascending version order.

        Returns:
            Units applied by this call (empty when up to date)

        Raises:
            MigrationError: On the first unit that fails; later units are
                not attempted
        """
        log = safe_logger(self.logger)
        units = self.discover()
        applied = self.applied_versions()

        log.log_debug(
            "Running migrations",
            {"discovered": len(units), "already_applied": len(applied)},
        )

        newly_applied: List[MigrationUnit] = []
        for unit in units:
            if unit.version in applied:
                continue
            log.log_info(f"Applying migration {unit.version}: {unit.name}")
            self._apply(unit)
            newly_applied.append(unit)

        log.log_operation(
            "migrations_complete",
            {"applied": [unit.name for unit in newly_applied]},
        )
        return newly_applied

    def _apply(self, unit: MigrationUnit) -> None:
        try:
            with self.engine.begin() as connection:
                if unit.is_sql:
                    for statement in unit.sql_statements():
                        connection.exec_driver_sql(statement)
                else:
                    upgrade = unit.load_upgrade()
                    context = MigrationContext.configure(connection)
                    with Operations.context(context):
                        upgrade()

                connection.execute(
                    insert(MigrationRecord).values(
                        version=unit.version, name=unit.name, applied_at=utc_now()
                    )
                )
        except MigrationError:
            raise
        except Exception as e:
            safe_logger(self.logger).log_error(
                e, {"operation": "apply_migration", "version": unit.version}
            )
            raise MigrationError(
                f"Failed to apply migration {unit.version} ({unit.name}): {e}"
            ) from e
