"""
Configuration management CLI commands.

Manages mediausage settings stored in .mediausage/config.yaml
(config.json style content is accepted as well).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.table import Table

from mediausage.core.config import get_paths

console = Console()

BACKENDS = ("hugo", "export")


def get_config_path(site_root: Path | None = None) -> Path:
    """Get path to config file."""
    return get_paths(site_root).config_file


def load_config(site_root: Path | None = None) -> dict[str, Any]:
    """Load configuration from file (supports YAML and JSON)."""
    config_path = get_config_path(site_root)
    if not config_path.exists():
        return {}

    content = config_path.read_text()
    if not content.strip():
        return {}

    # YAML files typically don't start with '{'
    if content.strip().startswith("{"):
        result: dict[str, Any] = json.loads(content)
        return result
    loaded = yaml.safe_load(content)
    if isinstance(loaded, dict):
        return loaded
    return {}


def save_config(config: dict[str, Any], site_root: Path | None = None) -> None:
    """Save configuration to file (YAML format)."""
    config_path = get_config_path(site_root)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(yaml.dump(config, default_flow_style=False, sort_keys=False))


def get_config_value(key: str, default: Any = None, site_root: Path | None = None) -> Any:
    """Get a configuration value by dotted key."""
    config = load_config(site_root)
    current: Any = config
    for part in key.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return default
    return current


def set_config_value(key: str, value: Any, site_root: Path | None = None) -> None:
    """Set a configuration value by dotted key."""
    config = load_config(site_root)
    parts = key.split(".")

    current = config
    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value
    save_config(config, site_root)


# Default configuration schema with descriptions
CONFIG_SCHEMA: dict[str, dict[str, Any]] = {
    "store.backend": {
        "default": "hugo",
        "type": str,
        "choices": BACKENDS,
        "description": "Content store backend (hugo or export)",
    },
    "store.export_file": {
        "default": ".mediausage/export.json",
        "type": str,
        "description": "JSON export read by the export backend (relative to site root)",
    },
}

# Per-tag label overrides: labels.status.<tag> and labels.types.<tag>
LABEL_PREFIXES = ("labels.status.", "labels.types.")


def is_label_key(key: str) -> bool:
    """Check whether a key names a single status or type label override."""
    for prefix in LABEL_PREFIXES:
        if key.startswith(prefix):
            tag = key[len(prefix):]
            return bool(tag) and "." not in tag
    return False


def builtin_label(key: str) -> str | None:
    """Built-in label that a label override key replaces, if any."""
    from mediausage.store.base import STATUS_LABELS, TYPE_LABELS

    kind, tag = key.split(".")[1:]
    table = STATUS_LABELS if kind == "status" else TYPE_LABELS
    return table.get(tag)


def _print_unknown(key: str) -> None:
    console.print(f"[red]Unknown setting: {key}[/red]")
    console.print("\nAvailable settings:")
    for k in CONFIG_SCHEMA:
        console.print(f"  - {k}")
    for prefix in LABEL_PREFIXES:
        console.print(f"  - {prefix}<tag>")


@click.group()
def config():
    """Manage mediausage configuration.

    Settings are stored in .mediausage/config.yaml. Status and type labels
    can be overridden under labels.status and labels.types.
    """
    pass


@config.command(name="show")
@click.option("--all", "show_all", is_flag=True, help="Show all settings including defaults")
def show_cmd(show_all: bool):
    """Show current configuration.

    Without --all, only shows settings that differ from defaults.
    """
    cfg = load_config()
    config_path = get_config_path()

    if not cfg and not show_all:
        console.print("[dim]No custom configuration set. Using defaults.[/dim]")
        console.print(f"[dim]Config file: {config_path}[/dim]")
        console.print("\n[dim]Use 'mediausage config show --all' to see all settings.[/dim]")
        return

    table = Table(title="Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value", style="green")
    table.add_column("Default", style="dim")
    table.add_column("Description", style="dim")

    for key, schema in CONFIG_SCHEMA.items():
        current = get_config_value(key)
        default = schema["default"]
        is_custom = current is not None and current != default

        if show_all or is_custom:
            display_value = str(current) if current is not None else f"[dim]{default}[/dim]"
            table.add_row(key, display_value, str(default), schema["description"])

    console.print(table)

    labels = cfg.get("labels") or {}
    for kind in ("status", "types"):
        overrides = labels.get(kind) or {}
        for tag, label in overrides.items():
            console.print(f"[dim]labels.{kind}.{tag}[/dim] = {label}")

    console.print(f"\n[dim]Config file: {config_path}[/dim]")


@config.command(name="get")
@click.argument("key")
def get_cmd(key: str):
    """Get a configuration value.

    Examples:
        mediausage config get store.backend
        mediausage config get labels.status.future
    """
    if is_label_key(key):
        value = get_config_value(key)
        if value is None:
            default = builtin_label(key)
            if default is None:
                console.print(f"[dim]{key} is not set[/dim]")
            else:
                console.print(f"{key} = {default} [dim](default)[/dim]")
        else:
            console.print(f"{key} = {value}")
        return

    if key not in CONFIG_SCHEMA:
        _print_unknown(key)
        return

    value = get_config_value(key)
    default = CONFIG_SCHEMA[key]["default"]

    if value is None:
        console.print(f"{key} = {default} [dim](default)[/dim]")
    else:
        console.print(f"{key} = {value}")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
def set_cmd(key: str, value: str):
    """Set a configuration value.

    Examples:
        mediausage config set store.backend export
        mediausage config set store.export_file dumps/site.json
        mediausage config set labels.status.future Upcoming
    """
    if is_label_key(key):
        set_config_value(key, value)
        console.print(f"[green]Set {key} = {value}[/green]")
        return

    if key not in CONFIG_SCHEMA:
        _print_unknown(key)
        return

    choices = CONFIG_SCHEMA[key].get("choices")
    if choices and value not in choices:
        console.print(f"[red]Invalid value for {key}. Expected one of: {', '.join(choices)}[/red]")
        return

    set_config_value(key, value)
    console.print(f"[green]Set {key} = {value}[/green]")


@config.command(name="path")
def path_cmd():
    """Show path to config file."""
    console.print(str(get_config_path()))
