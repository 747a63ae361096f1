"""Content store protocol and shared record types.

A content store is the only thing the usage finder talks to. Backends
(Hugo site, JSON export) implement ``ContentStore``; most of them derive
from ``BaseContentStore`` to pick up the default serialization format and
label tables.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from mediausage.usage import values
from mediausage.usage.values import Value

# Types and statuses excluded from the candidate pool
REVISION_TYPE = "revision"
ATTACHMENT_TYPE = "attachment"
INHERIT_STATUS = "inherit"

STATUS_LABELS: dict[str, str] = {
    "publish": "Published",
    "future": "Scheduled",
    "draft": "Draft",
    "pending": "Pending",
    "private": "Private",
    "trash": "Trash",
}

TYPE_LABELS: dict[str, str] = {
    "post": "Post",
    "page": "Page",
    "attachment": "Media",
}


class StoreError(Exception):
    """Raised when a content store cannot be read."""


@dataclass
class ContentRecord:
    """A single content item as seen by the finder."""

    id: str
    title: str
    type: str
    status: str
    parent: str | None = None
    body: str = ""
    metadata: dict[str, list[Any]] = field(default_factory=dict)

    @property
    def is_candidate(self) -> bool:
        """Whether this record belongs in the body/metadata scan pool."""
        return (
            self.type not in (REVISION_TYPE, ATTACHMENT_TYPE)
            and self.status != INHERIT_STATUS
        )

    @property
    def can_be_attachment_parent(self) -> bool:
        return self.type != REVISION_TYPE and self.status != INHERIT_STATUS


@dataclass(frozen=True)
class MediaRecord:
    """The media file being traced."""

    id: str
    file_name: str
    parent: str | None = None


@runtime_checkable
class ContentStore(Protocol):
    """Read-only view of a content repository."""

    def list_candidates(self) -> list[ContentRecord]:
        """Records that are neither revisions nor attachments, not inherited."""
        ...

    def list_attached(self, media_id: str) -> list[ContentRecord]:
        """Records the media is directly attached to."""
        ...

    def get_body(self, record_id: str) -> str: ...

    def get_metadata_values(self, record_id: str) -> list[Any]: ...

    def is_serialized(self, raw: Any) -> bool: ...

    def unserialize(self, raw: str) -> Value: ...

    def label_for(self, status: str) -> str | None: ...

    def label_for_type(self, type_tag: str) -> str | None: ...

    def get_media(self, media_id: str) -> MediaRecord | None: ...

    def list_media(self) -> list[MediaRecord]: ...


class BaseContentStore:
    """Shared behaviour for in-memory record stores.

    Subclasses populate ``self._records`` (ordered by id insertion, which is
    the candidate order) and ``self._media``.
    """

    def __init__(
        self,
        status_labels: Mapping[str, str] | None = None,
        type_labels: Mapping[str, str] | None = None,
    ):
        self._records: dict[str, ContentRecord] = {}
        self._media: dict[str, MediaRecord] = {}
        self.status_labels = {**STATUS_LABELS, **(status_labels or {})}
        self.type_labels = {**TYPE_LABELS, **(type_labels or {})}

    def _require(self, record_id: str) -> ContentRecord:
        record = self._records.get(record_id)
        if record is None:
            raise StoreError(f"Unknown record: {record_id}")
        return record

    def list_candidates(self) -> list[ContentRecord]:
        return [r for r in self._records.values() if r.is_candidate]

    def list_attached(self, media_id: str) -> list[ContentRecord]:
        media = self._media.get(media_id)
        if media is None or media.parent is None:
            return []
        parent = self._records.get(media.parent)
        if parent is None or not parent.can_be_attachment_parent:
            return []
        return [parent]

    def get_body(self, record_id: str) -> str:
        return self._require(record_id).body

    def get_metadata_values(self, record_id: str) -> list[Any]:
        record = self._require(record_id)
        return [v for key_values in record.metadata.values() for v in key_values]

    def is_serialized(self, raw: Any) -> bool:
        return values.is_serialized(raw)

    def unserialize(self, raw: str) -> Value:
        return values.unserialize(raw)

    def label_for(self, status: str) -> str | None:
        return self.status_labels.get(status)

    def label_for_type(self, type_tag: str) -> str | None:
        return self.type_labels.get(type_tag)

    def get_media(self, media_id: str) -> MediaRecord | None:
        return self._media.get(media_id)

    def list_media(self) -> list[MediaRecord]:
        return list(self._media.values())
