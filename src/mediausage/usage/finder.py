"""
Media usage finder.

Finds the content records that reference a media file by:
- Direct attachment (the media's parent record)
- The file name appearing in the record body
- The file name appearing in any metadata value, nested or serialized

Every call rescans the whole store; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from mediausage.usage.values import Scalar, Value, flatten, is_composite, scalar_text, to_value

if TYPE_CHECKING:
    from mediausage.store.base import ContentRecord, ContentStore

logger = logging.getLogger(__name__)


class MatchSource(Enum):
    """Which check found the reference."""

    ATTACHMENT = "attachment"  # Record is the media's parent
    BODY = "body"  # File name appears in the body text
    METADATA = "metadata"  # File name appears in a metadata value


@dataclass(frozen=True)
class UsageMatch:
    """A content record confirmed to reference the media file."""

    id: str
    title: str
    type: str
    status: str
    via: MatchSource

    @classmethod
    def from_record(cls, record: ContentRecord, via: MatchSource) -> UsageMatch:
        return cls(
            id=record.id,
            title=record.title,
            type=record.type,
            status=record.status,
            via=via,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "status": self.status,
            "via": self.via.value,
        }


class UsageFinder:
    """Finds where a media file is used."""

    def __init__(self, store: ContentStore):
        """Initialize finder.

        Args:
            store: Content store to query
        """
        self.store = store

    def find_usage(self, file_name: str, media_id: str) -> list[UsageMatch]:
        """Find every record referencing a media file.

        Args:
            file_name: Base name of the media file, matched case-sensitively
            media_id: Identifier of the media record

        Returns:
            Matches in discovery order: attachments first, then body and
            metadata matches in candidate order. No id appears twice.
        """
        candidates = self.store.list_candidates()
        if not candidates:
            logger.debug("Empty candidate pool, skipping scan for %s", file_name)
            return []

        matches: list[UsageMatch] = []

        for record in self.store.list_attached(media_id):
            if not self._already_found(matches, record.id):
                matches.append(UsageMatch.from_record(record, MatchSource.ATTACHMENT))

        for record in candidates:
            if self._already_found(matches, record.id):
                continue

            body = self.store.get_body(record.id) or ""
            if file_name in body:
                matches.append(UsageMatch.from_record(record, MatchSource.BODY))
                continue

            if self._metadata_mentions(record.id, file_name):
                matches.append(UsageMatch.from_record(record, MatchSource.METADATA))

        logger.debug(
            "Scanned %d candidate(s) for %s: %d match(es)",
            len(candidates),
            file_name,
            len(matches),
        )
        return matches

    def _already_found(self, matches: list[UsageMatch], record_id: str) -> bool:
        return any(m.id == record_id for m in matches)

    def _metadata_mentions(self, record_id: str, file_name: str) -> bool:
        """Check metadata values in order; the first hit wins."""
        for raw in self.store.get_metadata_values(record_id):
            if file_name in self.metadata_text(raw):
                return True
        return False

    def metadata_text(self, raw: Any) -> str:
        """Searchable text of one raw metadata value."""
        return flatten(self._decode(raw))

    def _decode(self, raw: Any) -> Value:
        if self.store.is_serialized(raw):
            try:
                return self.store.unserialize(raw)
            except ValueError:
                logger.debug("Malformed serialized metadata, using raw string: %.60r", raw)
                return Scalar(raw)
        if is_composite(raw):
            return to_value(raw)
        return Scalar(scalar_text(raw))
