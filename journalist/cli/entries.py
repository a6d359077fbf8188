"""
Entry Commands
--------------

Create, display and find journal entries.

Commands:
    - new: Edit a day's entry in $EDITOR
    - show: Display one entry
    - list: Display entries in a date range
    - search: Find entries containing text

Usage:
    # Edit today's entry
    journalist new

    # Show an entry
    journalist show 2024-03-15

    # Entries of the current month
    journalist list

    # Everything mentioning the dentist, newest first
    journalist search dentist
"""
import sys
from typing import List

import click

from journalist.core.exceptions import JournalError
from journalist.core.logging_manager import handle_cli_error
from journalist.dataclasses.date_range import DateRange
from journalist.dataclasses.entry import Bullet, BulletType, Entry, TaskState

from . import get_app, parse_date

TASK_MARKERS = {
    TaskState.PENDING: "[ ]",
    TaskState.COMPLETED: "[x]",
    TaskState.MIGRATED: "[>]",
    TaskState.SCHEDULED: "[<]",
}


def format_bullet(bullet: Bullet) -> str:
    if bullet.task_state is not None:
        return f"  {TASK_MARKERS[bullet.task_state]} {bullet.content}"
    return f"  • {bullet.content}"


def format_entry(entry: Entry) -> str:
    """Readable rendering of an entry, sections in canonical order."""
    lines: List[str] = [f"📅 {entry.date.isoformat()} ({entry.date.strftime('%A')})"]
    for bullet_type in BulletType:
        bullets = entry.get_bullets(bullet_type)
        if not bullets:
            continue
        lines.append(f"\n{bullet_type.section_name}")
        lines.extend(format_bullet(bullet) for bullet in bullets)
    return "\n".join(lines)


@click.command("new")
@click.option("--date", "entry_date", default=None, help="Entry date, YYYY-MM-DD (default: today)")
@click.pass_context
def new(ctx, entry_date):
    """Edit a day's entry in your editor."""
    day = parse_date(entry_date)
    try:
        app = get_app(ctx)
        entry = app.editor().edit_entry_for_date(day)

        if entry.is_empty():
            click.echo(f"🗑️  Entry for {day.isoformat()} is empty; nothing stored")
        else:
            click.echo(
                f"✅ Saved {entry.total_bullets()} bullet(s) for {day.isoformat()}"
            )

    except JournalError as e:
        handle_cli_error(ctx, e, "new_entry", additional_context={"date": day.isoformat()})


@click.command("show")
@click.argument("entry_date")
@click.pass_context
def show(ctx, entry_date):
    """Display a single entry."""
    day = parse_date(entry_date)
    try:
        app = get_app(ctx)
        entry = app.journal.get_entry(day)
        if entry is None:
            click.echo(f"❌ No entry found for {day.isoformat()}", err=True)
            sys.exit(1)

        click.echo(format_entry(entry))

    except JournalError as e:
        handle_cli_error(ctx, e, "show_entry", additional_context={"date": day.isoformat()})


@click.command("list")
@click.option("--start", default=None, help="First date, YYYY-MM-DD (default: start of month)")
@click.option("--end", default=None, help="Last date, YYYY-MM-DD (default: end of month)")
@click.pass_context
def list_entries(ctx, start, end):
    """Display entries in a date range."""
    try:
        if start is None and end is None:
            today = parse_date(None)
            date_range = DateRange.month(today.year, today.month)
        else:
            first = parse_date(start) if start else parse_date(end)
            last = parse_date(end) if end else first
            date_range = DateRange.between(first, last)

        app = get_app(ctx)
        entries = app.journal.get_entries_in_range(date_range)

        if not entries:
            click.echo(f"No entries in {date_range}")
            return

        click.echo(f"📚 {len(entries)} entries in {date_range}\n")
        click.echo("\n\n".join(format_entry(entry) for entry in entries))

    except JournalError as e:
        handle_cli_error(
            ctx, e, "list_entries", additional_context={"start": start, "end": end}
        )


@click.command("search")
@click.argument("query")
@click.pass_context
def search(ctx, query):
    """Find entries containing QUERY (case-insensitive), newest first."""
    try:
        app = get_app(ctx)
        results = app.storage.search_entries(query)

        if not results:
            click.echo(f"No entries match '{query}'")
            return

        needle = query.strip().casefold()
        click.echo(f"🔍 {len(results)} entries match '{query}'\n")
        for entry in results:
            click.echo(f"📅 {entry.date.isoformat()}")
            for bullet in entry.all_bullets():
                if needle in bullet.content.casefold():
                    click.echo(format_bullet(bullet))

    except JournalError as e:
        handle_cli_error(ctx, e, "search", additional_context={"query": query})
