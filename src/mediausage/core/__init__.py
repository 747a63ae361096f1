"""Core utilities for mediausage."""

from mediausage.core.config import SitePaths, find_site_root, get_paths, get_site_root

__all__ = [
    "SitePaths",
    "find_site_root",
    "get_paths",
    "get_site_root",
]
