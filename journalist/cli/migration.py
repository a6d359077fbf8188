"""
Migration Management Commands
------------------------------

Schema migration commands for the journal database.

The database backend migrates itself when opened; these commands operate
on journal.db without opening it as a backend, so pending migrations can
be inspected before they are applied.

Commands:
    - status: Show applied and pending migrations
    - upgrade: Apply pending migrations

Usage:
    # Show migration status
    journalist migration status

    # Apply pending migrations
    journalist migration upgrade
"""
import click

from journalist.core.exceptions import JournalError
from journalist.database.migration_runner import MigrationRunner
from journalist.database.engine import create_journal_engine
from journalist.core.logging_manager import handle_cli_error

from . import get_config, get_logger


def get_runner(ctx) -> MigrationRunner:
    """Migration runner over the configured journal.db."""
    if "runner" not in ctx.obj:
        config = get_config(ctx)
        config.db_path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_journal_engine(config.db_path)
        ctx.call_on_close(engine.dispose)
        ctx.obj["runner"] = MigrationRunner(engine, logger=get_logger(ctx))
    return ctx.obj["runner"]


@click.group()
@click.pass_context
def migration(ctx: click.Context) -> None:
    """Database migration management."""
    pass


@migration.command("status")
@click.pass_context
def migration_status(ctx):
    """Show applied and pending migrations."""
    try:
        statuses = get_runner(ctx).status()

        click.echo("\n📊 Migration Status")
        click.echo("=" * 50)

        if not statuses:
            click.echo("  No migrations found")
            return

        for status in statuses:
            if status.applied:
                click.echo(f"  ✓ {status.name} (applied {status.applied_at:%Y-%m-%d %H:%M})")
            else:
                click.echo(f"  • {status.name} (pending)")

        pending = sum(1 for status in statuses if not status.applied)
        click.echo(f"\nPending: {pending}")

    except JournalError as e:
        handle_cli_error(ctx, e, "migration_status")


@migration.command("upgrade")
@click.pass_context
def migration_upgrade(ctx):
    """Apply every pending migration."""
    try:
        click.echo("⬆️  Upgrading database...")
        applied = get_runner(ctx).run()

        if applied:
            for unit in applied:
                click.echo(f"  ✓ {unit.name}")
            click.echo(f"✅ Applied {len(applied)} migration(s)")
        else:
            click.echo("✅ Database is up to date")

    except JournalError as e:
        handle_cli_error(ctx, e, "migration_upgrade")
