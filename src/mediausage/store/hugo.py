"""
Content store backed by a Hugo site on disk.

Content records are the markdown files under content/. Media records are
page bundle resources (attached to their bundle page) and every file under
static/ (unattached).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from mediausage.content.scanner import ContentItem, ContentScanner, is_hidden
from mediausage.store.base import BaseContentStore, ContentRecord, MediaRecord

logger = logging.getLogger(__name__)


def _is_future(value: Any, now: datetime) -> bool:
    """Check whether a front matter date lies after ``now``."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return False
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value > now
    if isinstance(value, date):
        return value > now.date()
    return False


class HugoContentStore(BaseContentStore):
    """Read-only view of a Hugo site."""

    def __init__(
        self,
        site_root: Path,
        status_labels: Mapping[str, str] | None = None,
        type_labels: Mapping[str, str] | None = None,
        now: datetime | None = None,
    ):
        """Scan the site.

        Args:
            site_root: Hugo site root directory
            status_labels: Extra or overriding status labels
            type_labels: Extra or overriding record type labels
            now: Reference time for scheduled content (defaults to utcnow)
        """
        super().__init__(status_labels=status_labels, type_labels=type_labels)
        self.site_root = Path(site_root)
        self.scanner = ContentScanner(self.site_root)
        self.now = now or datetime.now(timezone.utc)
        self._load()

    def _rel_id(self, path: Path) -> str:
        return path.relative_to(self.site_root).as_posix()

    def _status(self, item: ContentItem) -> str:
        if item.is_draft:
            return "draft"
        if _is_future(item.date, self.now):
            return "future"
        return "publish"

    def _record(self, item: ContentItem) -> ContentRecord:
        return ContentRecord(
            id=self._rel_id(item.path),
            title=item.title,
            type=item.section,
            status=self._status(item),
            body=item.body,
            metadata={key: [value] for key, value in item.front_matter.items()},
        )

    def _load(self) -> None:
        items = self.scanner.scan_all()
        for item in items:
            record = self._record(item)
            self._records[record.id] = record

        for item in items:
            parent_id = self._rel_id(item.path)
            for resource in self.scanner.bundle_resources(item):
                self._add_media(resource, parent=parent_id)

        # Loose files in content/ that no bundle owns, then static/
        for root in (self.scanner.content_dir, self.site_root / "static"):
            if not root.is_dir():
                continue
            for path in sorted(root.rglob("*")):
                if not path.is_file() or path.is_symlink() or path.suffix == ".md":
                    continue
                if is_hidden(path, root):
                    continue
                self._add_media(path, parent=None)

        logger.debug(
            "Loaded %d record(s) and %d media file(s) from %s",
            len(self._records),
            len(self._media),
            self.site_root,
        )

    def _add_media(self, path: Path, parent: str | None) -> None:
        media_id = self._rel_id(path)
        if media_id in self._media:
            return
        self._media[media_id] = MediaRecord(id=media_id, file_name=path.name, parent=parent)

