"""
Configuration and path management.

Provides site root detection and standard paths for the content site.
Uses .mediausage/ directory for tool-specific data (config, exports).

Resolution order for site root:
  1. MEDIAUSAGE_SITE_ROOT environment variable (highest priority)
  2. Walk up from cwd looking for .mediausage/ directory
  3. Global config file (~/.config/mediausage/config.yaml) site_root key
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

TOOL_DIR = ".mediausage"
SITE_ROOT_ENV = "MEDIAUSAGE_SITE_ROOT"


@dataclass(frozen=True)
class SitePaths:
    """Standard paths for the site and mediausage data."""

    root: Path
    tool_dir: Path
    content: Path
    static: Path

    # Data files (in .mediausage/)
    config_file: Path
    export_file: Path

    def resolve(self, value: str | Path) -> Path:
        """Resolve a configured path; relative paths are taken from the site root."""
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.root / path


def get_global_config_path() -> Path:
    """Path of the per-user config file, honouring XDG_CONFIG_HOME."""
    base = os.environ.get("XDG_CONFIG_HOME")
    config_home = Path(base) if base else Path.home() / ".config"
    return config_home / "mediausage" / "config.yaml"


def load_global_config() -> dict:
    """Load the per-user configuration.

    A missing file gives an empty dict. So does an unreadable or malformed
    one, with a warning logged.
    """
    config_path = get_global_config_path()
    if not config_path.is_file():
        return {}
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Ignoring global config %s: %s", config_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _is_site(path: Path) -> bool:
    return (path / TOOL_DIR).is_dir()


def _checked_root(path: Path, source: str) -> Path:
    """Return ``path`` if it holds a tool directory, else raise naming ``source``."""
    if _is_site(path):
        return path
    raise FileNotFoundError(f"{source}={path} does not contain a {TOOL_DIR}/ directory.")


def find_site_root(start_path: Path | None = None) -> Path:
    """Find the site root.

    Args:
        start_path: Starting path for the .mediausage/ walk (defaults to cwd)

    Returns:
        Path to site root

    Raises:
        FileNotFoundError: If no site root can be resolved, or an explicitly
            configured one has no .mediausage/ directory
    """
    env_root = os.environ.get(SITE_ROOT_ENV)
    if env_root:
        return _checked_root(Path(env_root).resolve(), SITE_ROOT_ENV)

    start = Path(start_path if start_path is not None else Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if _is_site(candidate):
            logger.debug("Found %s/ in %s", TOOL_DIR, candidate)
            return candidate

    configured = load_global_config().get("site_root")
    if configured:
        return _checked_root(
            Path(configured).expanduser().resolve(), "Global config site_root"
        )

    raise FileNotFoundError(
        f"Could not find {TOOL_DIR}/ directory starting from {start}. "
        f"Run 'mediausage init' to initialize, set {SITE_ROOT_ENV}, or configure "
        f"site_root in {get_global_config_path()}."
    )


@lru_cache(maxsize=1)
def get_site_root() -> Path:
    """Get the cached site root path."""
    return find_site_root()


def get_paths(site_root: Path | None = None) -> SitePaths:
    """Get all standard paths for the site.

    Args:
        site_root: Site root path (uses cached default if not provided)
    """
    root = Path(site_root) if site_root is not None else get_site_root()
    tool_dir = root / TOOL_DIR
    return SitePaths(
        root=root,
        tool_dir=tool_dir,
        content=root / "content",
        static=root / "static",
        config_file=tool_dir / "config.yaml",
        export_file=tool_dir / "export.json",
    )
