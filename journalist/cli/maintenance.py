"""
Maintenance & Monitoring Commands
----------------------------------

Storage maintenance and status commands.

Commands:
    - stats: Display journal statistics
    - maintenance: Compact storage (VACUUM + ANALYZE, or prune empty dirs)
    - hooks: List write hooks of the files backend
"""
import click

from journalist.core.exceptions import JournalError
from journalist.core.logging_manager import handle_cli_error
from journalist.database.storage import SqlStorage

from . import get_app


@click.command()
@click.option("--top", default=10, show_default=True, help="Number of frequent terms to show")
@click.pass_context
def stats(ctx, top):
    """Display journal statistics."""
    try:
        app = get_app(ctx)
        storage = app.storage

        click.echo("\n📊 Journal Statistics")
        click.echo("=" * 50)
        click.echo(f"Backend: {storage.backend_info()}")
        click.echo(f"Journal directory: {app.config.journal_dir}")
        click.echo(f"Entries: {storage.count_entries()}")

        if isinstance(storage, SqlStorage) and top > 0:
            terms = storage.top_terms(top)
            if terms:
                click.echo("\nFrequent terms:")
                for term, frequency in terms:
                    click.echo(f"  • {term}: {frequency}")

    except JournalError as e:
        handle_cli_error(ctx, e, "stats")


@click.command()
@click.pass_context
def maintenance(ctx):
    """Compact the storage backend."""
    try:
        app = get_app(ctx)
        click.echo(f"🔧 Running maintenance on {app.storage.backend_info()}...")
        app.storage.maintenance()
        click.echo("✅ Maintenance complete")

    except JournalError as e:
        handle_cli_error(ctx, e, "maintenance")


@click.command()
@click.pass_context
def hooks(ctx):
    """List write hooks and whether they are enabled."""
    try:
        app = get_app(ctx)
        registry = app.hook_registry

        if registry is None:
            click.echo(
                f"No write hooks: {app.storage.backend_info()} does not run hooks"
            )
            return

        click.echo("\n🪝 Write Hooks")
        click.echo("=" * 50)
        enabled = set(registry.enabled_hooks())
        for name in registry.list_hooks():
            status = "✓ enabled" if name in enabled else "✗ disabled"
            click.echo(f"  {name}: {status}")

    except JournalError as e:
        handle_cli_error(ctx, e, "hooks")
