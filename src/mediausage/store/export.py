"""
Content store backed by a JSON export of a database-driven CMS.

The export mirrors the ``posts`` and ``postmeta`` tables::

    {
      "posts": [
        {"ID": 7, "post_title": "Hello", "post_type": "post",
         "post_status": "publish", "post_parent": 0,
         "post_content": "...", "guid": "https://example.com/?p=7"}
      ],
      "postmeta": [
        {"post_id": 7, "meta_key": "gallery", "meta_value": "[\\"a.jpg\\"]"}
      ]
    }

Composite meta values are stored as serialized JSON strings.
"""

from __future__ import annotations

import json
import logging
import posixpath
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from mediausage.store.base import (
    ATTACHMENT_TYPE,
    BaseContentStore,
    ContentRecord,
    MediaRecord,
    StoreError,
)

logger = logging.getLogger(__name__)


def _id(value: Any) -> str | None:
    """Normalize a row id; 0, empty and missing mean "no record"."""
    if value is None or value == "" or value == 0 or value == "0":
        return None
    return str(value)


def file_name_from_guid(guid: str) -> str:
    """Base name of the file behind an attachment guid URL."""
    path = urlparse(guid).path or guid
    return posixpath.basename(path.rstrip("/"))


class ExportContentStore(BaseContentStore):
    """Read-only view of a posts/postmeta JSON export."""

    def __init__(
        self,
        export_file: Path,
        status_labels: Mapping[str, str] | None = None,
        type_labels: Mapping[str, str] | None = None,
    ):
        """Load the export.

        Args:
            export_file: Path to the JSON export

        Raises:
            StoreError: If the file cannot be read or parsed
        """
        super().__init__(status_labels=status_labels, type_labels=type_labels)
        self.export_file = Path(export_file)
        self._load(self._read())

    def _read(self) -> dict[str, Any]:
        try:
            data = json.loads(self.export_file.read_text(encoding="utf-8"))
        except OSError as e:
            raise StoreError(f"Cannot read export {self.export_file}: {e}") from e
        except json.JSONDecodeError as e:
            raise StoreError(f"Invalid JSON in export {self.export_file}: {e}") from e

        if not isinstance(data, dict):
            raise StoreError(f"Export {self.export_file} must be a JSON object")
        return data

    def _load(self, data: dict[str, Any]) -> None:
        posts = data.get("posts", [])
        postmeta = data.get("postmeta", [])
        if not isinstance(posts, list) or not isinstance(postmeta, list):
            raise StoreError(f"Export {self.export_file}: 'posts' and 'postmeta' must be lists")

        for row in posts:
            try:
                record_id = str(row["ID"])
            except (KeyError, TypeError) as e:
                raise StoreError(f"Export {self.export_file}: post row without ID: {row!r}") from e

            record = ContentRecord(
                id=record_id,
                title=str(row.get("post_title") or ""),
                type=str(row.get("post_type") or "post"),
                status=str(row.get("post_status") or "publish"),
                parent=_id(row.get("post_parent")),
                body=str(row.get("post_content") or ""),
            )
            self._records[record_id] = record

            if record.type == ATTACHMENT_TYPE:
                self._media[record_id] = MediaRecord(
                    id=record_id,
                    file_name=file_name_from_guid(str(row.get("guid") or "")),
                    parent=record.parent,
                )

        for row in postmeta:
            post_id = _id(row.get("post_id")) if isinstance(row, dict) else None
            record = self._records.get(post_id) if post_id else None
            if record is None:
                logger.debug("Skipping orphan meta row: %r", row)
                continue
            key = str(row.get("meta_key") or "")
            record.metadata.setdefault(key, []).append(row.get("meta_value"))

        logger.debug(
            "Loaded %d post(s), %d attachment(s) from %s",
            len(self._records),
            len(self._media),
            self.export_file,
        )
