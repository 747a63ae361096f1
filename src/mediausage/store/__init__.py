"""
Content store backends.

Provides:
- The ContentStore protocol the usage finder reads through
- A Hugo site backend
- A posts/postmeta JSON export backend
"""

from __future__ import annotations

from pathlib import Path

from mediausage.store.base import (
    BaseContentStore,
    ContentRecord,
    ContentStore,
    MediaRecord,
    StoreError,
)
from mediausage.store.export import ExportContentStore
from mediausage.store.hugo import HugoContentStore


def open_store(site_root: Path | None = None) -> ContentStore:
    """Build the content store configured for a site.

    Args:
        site_root: Site root (auto-detected if not provided)

    Raises:
        StoreError: If the configured backend is unknown or unreadable
    """
    from mediausage.config.commands import CONFIG_SCHEMA, load_config
    from mediausage.core.config import get_paths

    paths = get_paths(site_root)
    cfg = load_config(paths.root)
    store_cfg = cfg.get("store") or {}
    labels = cfg.get("labels") or {}
    status_labels = labels.get("status") or {}
    type_labels = labels.get("types") or {}

    backend = store_cfg.get("backend") or CONFIG_SCHEMA["store.backend"]["default"]

    if backend == "hugo":
        return HugoContentStore(
            paths.root,
            status_labels=status_labels,
            type_labels=type_labels,
        )
    if backend == "export":
        export_file = store_cfg.get("export_file")
        path = paths.resolve(export_file) if export_file else paths.export_file
        return ExportContentStore(
            path,
            status_labels=status_labels,
            type_labels=type_labels,
        )
    raise StoreError(f"Unknown store backend: {backend}")


__all__ = [
    "ContentStore",
    "BaseContentStore",
    "ContentRecord",
    "MediaRecord",
    "StoreError",
    "HugoContentStore",
    "ExportContentStore",
    "open_store",
]
