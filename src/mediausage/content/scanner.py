"""
Hugo content scanner.

Scans Hugo content directories and parses front matter and content.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from mediausage.core.config import get_paths

logger = logging.getLogger(__name__)

BUNDLE_INDEX_NAMES = ("index.md", "_index.md")


def is_hidden(path: Path, root: Path) -> bool:
    """Check whether any part of ``path`` below ``root`` starts with a dot."""
    return any(part.startswith(".") for part in path.relative_to(root).parts)


@dataclass
class ContentItem:
    """A single piece of Hugo content."""

    path: Path
    slug: str
    section: str  # top-level directory under content/, "page" at the root
    front_matter: dict[str, Any] = field(default_factory=dict)
    body: str = ""

    @property
    def title(self) -> str:
        return str(self.front_matter.get("title", self.slug))

    @property
    def date(self) -> Any:
        return self.front_matter.get("date")

    @property
    def is_draft(self) -> bool:
        return bool(self.front_matter.get("draft", False))

    @property
    def is_leaf_bundle(self) -> bool:
        return self.path.name == "index.md"

    @property
    def is_branch_bundle(self) -> bool:
        return self.path.name == "_index.md"


class ContentScanner:
    """Scans Hugo content directories."""

    ROOT_SECTION = "page"

    def __init__(self, site_root: Path | None = None):
        """Initialize scanner.

        Args:
            site_root: Hugo site root directory (auto-detected if not provided)
        """
        if site_root is None:
            site_root = get_paths().root
        self.site_root = Path(site_root)
        self.content_dir = self.site_root / "content"

    def scan_all(self) -> list[ContentItem]:
        """Scan every content file, drafts included, in path order."""
        if not self.content_dir.is_dir():
            return []
        return sorted(self._scan_directory(self.content_dir), key=lambda item: item.path)

    def _section_for(self, path: Path) -> str:
        rel = path.relative_to(self.content_dir)
        if len(rel.parts) == 1:
            return self.ROOT_SECTION
        return rel.parts[0]

    def _is_section_index(self, path: Path) -> bool:
        return len(path.relative_to(self.content_dir).parts) <= 2

    def _scan_directory(self, directory: Path) -> Iterator[ContentItem]:
        """Scan a directory for content files.

        Handles both:
        - Leaf bundles: slug/index.md
        - Branch bundles: slug/_index.md
        - Single files: slug.md
        """
        for path in directory.rglob("*.md"):
            if path.is_dir():
                continue

            # Skip symlinks to prevent traversal outside content directory
            if path.is_symlink():
                continue

            # Skip hidden files and anything inside a hidden directory
            if is_hidden(path, directory):
                continue

            # Skip the home page and section _index.md list pages
            if path.name == "_index.md" and self._is_section_index(path):
                continue

            slug = path.stem if path.name not in BUNDLE_INDEX_NAMES else path.parent.name

            try:
                item = self._parse_file(path, slug, self._section_for(path))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Error reading %s: %s", path, e)
                continue
            if item:
                yield item

    def _parse_file(self, path: Path, slug: str, section: str) -> ContentItem | None:
        """Parse a single content file.

        Returns:
            ContentItem or None if the file has no usable front matter
        """
        content = path.read_text(encoding="utf-8")

        front_matter, body = self._split_content(content, path=path)

        if front_matter is None:
            return None

        return ContentItem(
            path=path,
            slug=slug,
            section=section,
            front_matter=front_matter,
            body=body,
        )

    def _split_content(
        self, content: str, path: Path | None = None
    ) -> tuple[dict[str, Any] | None, str]:
        """Split content into front matter and body.

        Returns:
            Tuple of (front_matter dict, body string)
        """
        if not content.startswith("---"):
            return None, content

        parts = content.split("---", 2)
        if len(parts) < 3:
            return None, content

        fm_text = parts[1].strip()
        body = parts[2].strip()

        try:
            loaded = yaml.safe_load(fm_text)
        except yaml.YAMLError as e:
            location = f" in {path}" if path else ""
            logger.warning("YAML error%s: %s", location, e)
            return None, content

        front_matter: dict[str, Any] = loaded if isinstance(loaded, dict) else {}
        return front_matter, body

    def bundle_resources(self, item: ContentItem) -> list[Path]:
        """List the non-markdown files that belong to a page bundle.

        Leaf bundles own everything below their directory; branch bundles
        only own the files directly beside ``_index.md``.
        """
        if item.is_leaf_bundle:
            candidates = item.path.parent.rglob("*")
        elif item.is_branch_bundle:
            candidates = item.path.parent.iterdir()
        else:
            return []

        resources = [
            p
            for p in candidates
            if p.is_file()
            and not p.is_symlink()
            and p.suffix != ".md"
            and not is_hidden(p, item.path.parent)
        ]
        return sorted(resources)
