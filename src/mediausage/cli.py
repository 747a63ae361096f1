"""
Main CLI dispatcher for mediausage.

Usage:
    mediausage init                      # Initialize .mediausage/ directory
    mediausage usage show MEDIA_ID
    mediausage usage list [--unused]
    mediausage config [show|get|set|path]
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from mediausage import __version__

console = Console()


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="mediausage")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def main(verbose: bool) -> None:
    """Find where media files are used across site content.

    Scans posts, pages and their metadata for references to a media file.
    """
    setup_logging(verbose)


@main.command()
@click.option("--force", "-f", is_flag=True, help="Overwrite existing configuration")
@click.option(
    "--store",
    "backend",
    type=click.Choice(["hugo", "export"]),
    default="hugo",
    show_default=True,
    help="Content store backend",
)
@click.option("--export-file", help="JSON export path for the export backend")
def init(force: bool, backend: str, export_file: str | None) -> None:
    """Initialize .mediausage/ directory structure.

    Creates .mediausage/config.yaml in the current directory.
    """
    from pathlib import Path

    from mediausage.config.commands import save_config
    from mediausage.core.config import get_paths

    site_root = Path.cwd()
    paths = get_paths(site_root)

    if paths.config_file.exists() and not force:
        console.print(f"[yellow]{paths.config_file} already exists[/yellow]")
        console.print("[dim]Use --force to reinitialize.[/dim]")
        return

    console.print(f"[cyan]Initializing {paths.tool_dir.name}/ directory at {site_root}[/cyan]")
    paths.tool_dir.mkdir(parents=True, exist_ok=True)

    store_cfg: dict[str, str] = {"backend": backend}
    if export_file:
        store_cfg["export_file"] = export_file
    save_config({"store": store_cfg}, site_root)
    console.print(f"  [green]Created[/green] {paths.config_file.relative_to(site_root)}")

    console.print()
    console.print(f"[green]Done![/green] {paths.tool_dir.name}/ directory initialized.")


# Import and register command groups (imports after main definition intentional)
from mediausage.config.commands import config  # noqa: E402
from mediausage.usage.commands import usage  # noqa: E402

main.add_command(usage)
main.add_command(config)


if __name__ == "__main__":
    main()
