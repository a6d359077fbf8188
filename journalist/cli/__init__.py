#!/usr/bin/env python3
"""
Journalist CLI
--------------

Command-line interface for the bullet journal.

This module provides the main CLI group and shared context setup
for all commands.

Command Structure:
    - Entries (new, show, list, search)
    - Maintenance (stats, maintenance, hooks)
    - Migration Management (migration status, migration upgrade)

Usage:
    # Edit today's entry
    journalist new

    # Edit a specific day
    journalist new --date 2024-03-15

    # Use the file-per-date backend for one invocation
    journalist --backend files list --start 2024-03-01 --end 2024-03-31
"""
import dataclasses
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click

from journalist.app import JournalApp
from journalist.core.config import BACKENDS, JournalConfig
from journalist.core.logging_manager import JournalLogger

DATE_FORMAT = "%Y-%m-%d"


@click.group()
@click.option(
    "--journal-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Journal directory (default: $JOURNAL_DIR or ~/.local/share/journalist)",
)
@click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default=None,
    help="Storage backend (overrides configuration)",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Path to log directory",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, journal_dir, backend, log_dir, verbose):
    """Journalist: a bullet journal for the terminal."""

    # Suppress Alembic INFO logging by default
    logging.getLogger("alembic").setLevel(logging.WARNING)

    ctx.ensure_object(dict)
    ctx.obj["journal_dir"] = Path(journal_dir) if journal_dir else None
    ctx.obj["backend"] = backend
    ctx.obj["log_dir"] = Path(log_dir) if log_dir else None
    ctx.obj["verbose"] = verbose


def get_config(ctx) -> JournalConfig:
    """Resolve configuration once per invocation, applying CLI overrides."""
    if "config" not in ctx.obj:
        config = JournalConfig.from_env(journal_dir=ctx.obj.get("journal_dir"))
        if ctx.obj.get("backend"):
            config = dataclasses.replace(config, backend=ctx.obj["backend"])
        ctx.obj["config"] = config
    return ctx.obj["config"]


def get_logger(ctx) -> JournalLogger:
    """Get or create the journal logger from context."""
    if "logger" not in ctx.obj:
        config = get_config(ctx)
        ctx.obj["logger"] = JournalLogger(
            ctx.obj.get("log_dir") or config.log_dir, component_name="journalist"
        )
        ctx.call_on_close(ctx.obj["logger"].close)
    return ctx.obj["logger"]


def get_app(ctx) -> JournalApp:
    """Get or create the application from context."""
    if "app" not in ctx.obj:
        ctx.obj["app"] = JournalApp(get_config(ctx), logger=get_logger(ctx))
        ctx.call_on_close(ctx.obj["app"].close)
    return ctx.obj["app"]


def parse_date(value: Optional[str]) -> date:
    """Parse YYYY-MM-DD; None means today."""
    if value is None:
        return date.today()
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise click.BadParameter(f"'{value}' is not a date in YYYY-MM-DD form") from e


# Import and register command modules
# These imports must come after CLI group definition
from .entries import list_entries, new, search, show  # noqa: E402
from .maintenance import hooks, maintenance, stats  # noqa: E402
from .migration import migration  # noqa: E402

# Register top-level commands
cli.add_command(new)
cli.add_command(show)
cli.add_command(list_entries)
cli.add_command(search)
cli.add_command(stats)
cli.add_command(maintenance)
cli.add_command(hooks)

# Register command groups
cli.add_command(migration)


if __name__ == "__main__":
    cli(obj={})
