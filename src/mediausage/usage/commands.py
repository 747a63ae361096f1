"""CLI commands for media usage reports.

Shows where a media file is used, and a "Used In" overview of every
media file in the store.
"""

from __future__ import annotations

import json as json_module
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from mediausage.store.base import ContentStore
    from mediausage.usage.report import GroupedReport

console = Console()

NO_USAGE = "No usage found."


def _open_store_or_exit() -> ContentStore:
    from mediausage.store import StoreError, open_store

    try:
        return open_store()
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1) from None
    except StoreError as e:
        console.print(f"[red]Store error: {e}[/red]")
        raise SystemExit(1) from None


@click.group(name="usage")
def usage() -> None:
    """Find where media files are used.

    Looks for direct attachments, file names in body text, and file names
    in (possibly nested or serialized) metadata.
    """
    pass


@usage.command(name="show")
@click.argument("media_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show_usage(media_id: str, as_json: bool) -> None:
    """Show the content that uses a media file, grouped by status.

    \b
    Examples:
        mediausage usage show content/post/hello/cover.jpg
        mediausage usage show 42 --json
    """
    from mediausage.store import StoreError
    from mediausage.usage.finder import UsageFinder
    from mediausage.usage.report import group_by_status, report_to_dict

    store = _open_store_or_exit()
    media = store.get_media(media_id)

    if media is None:
        if as_json:
            click.echo(json_module.dumps({}, indent=2))
        else:
            console.print(f"[yellow]{NO_USAGE}[/yellow]")
        return

    try:
        matches = UsageFinder(store).find_usage(media.file_name, media.id)
    except StoreError as e:
        console.print(f"[red]Store error: {e}[/red]")
        raise SystemExit(1) from None

    report = group_by_status(matches, store.label_for)

    if as_json:
        click.echo(json_module.dumps(report_to_dict(report, store.label_for_type), indent=2))
        return

    if not report:
        console.print(f"[yellow]{NO_USAGE}[/yellow]")
        return

    console.print(f"[green]Usage of {media.file_name}:[/green]")
    console.print()
    _display_report(report, store)


def _display_report(report: GroupedReport, store: ContentStore) -> None:
    """Display a grouped report."""
    from mediausage.usage.report import type_label

    for status, matches in report.items():
        console.print(f"[bold]{status}[/bold] ({len(matches)})")
        for match in matches:
            label = type_label(match.type, store.label_for_type)
            console.print(f"  [cyan]{label}:[/cyan] {match.title}")
            console.print(f"    [dim]{match.id} ({match.via.value})[/dim]")
        console.print()


@usage.command(name="list")
@click.option("--unused", is_flag=True, help="Only show media with no usage")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_usage(unused: bool, as_json: bool) -> None:
    """List every media file with the content that uses it.

    \b
    Examples:
        mediausage usage list
        mediausage usage list --unused
    """
    from mediausage.store import StoreError
    from mediausage.usage.finder import UsageFinder

    store = _open_store_or_exit()
    finder = UsageFinder(store)

    rows = []
    try:
        for media in store.list_media():
            matches = finder.find_usage(media.file_name, media.id)
            if unused and matches:
                continue
            rows.append((media, matches))
    except StoreError as e:
        console.print(f"[red]Store error: {e}[/red]")
        raise SystemExit(1) from None

    if as_json:
        output = [
            {
                "id": media.id,
                "file_name": media.file_name,
                "used_in": [m.to_dict() for m in matches],
            }
            for media, matches in rows
        ]
        click.echo(json_module.dumps(output, indent=2))
        return

    if not rows:
        if unused:
            console.print("[green]Every media file is in use.[/green]")
        else:
            console.print("[yellow]No media files found.[/yellow]")
        return

    table = Table(title=f"Media Usage ({len(rows)})")
    table.add_column("Media", style="cyan", no_wrap=False)
    table.add_column("Used In", no_wrap=False)
    table.add_column("Count", justify="right")

    for media, matches in rows:
        used_in = ", ".join(m.title for m in matches) if matches else f"[dim]{NO_USAGE}[/dim]"
        table.add_row(media.id, used_in, str(len(matches)))

    console.print(table)
