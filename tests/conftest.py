"""Shared test fixtures for mediausage package."""

import json
from pathlib import Path

import pytest
import yaml

from mediausage.store.base import BaseContentStore, ContentRecord, MediaRecord


class MemoryStore(BaseContentStore):
    """In-memory store built from records, for finder tests."""

    def __init__(self, records=(), media=(), **kwargs):
        super().__init__(**kwargs)
        for record in records:
            self._records[record.id] = record
        for item in media:
            self._media[item.id] = item


@pytest.fixture
def make_store():
    """Factory fixture for in-memory content stores."""
    def _make(records=(), media=(), **kwargs) -> MemoryStore:
        return MemoryStore(records=records, media=media, **kwargs)

    return _make


@pytest.fixture
def abc_store(make_store):
    """Store with an attached page (B), a body match (A) and a metadata match (C)."""
    records = [
        ContentRecord(
            id="A", title="Article A", type="article", status="publish",
            body="see image.jpg here",
        ),
        ContentRecord(
            id="B", title="Page B", type="page", status="draft",
            body="nothing to see",
        ),
        ContentRecord(
            id="C", title="Article C", type="article", status="publish",
            metadata={"gallery": ['["a.jpg", "image.jpg"]']},
        ),
        ContentRecord(
            id="M", title="image", type="attachment", status="inherit",
            parent="B",
        ),
    ]
    media = [MediaRecord(id="M", file_name="image.jpg", parent="B")]
    return make_store(records, media)


@pytest.fixture
def mock_site_root(tmp_path, monkeypatch):
    """Create a mock site structure with .mediausage/ directory."""
    (tmp_path / ".mediausage").mkdir()
    (tmp_path / "content" / "post").mkdir(parents=True)
    (tmp_path / "static" / "images").mkdir(parents=True)

    # Mock get_site_root to return our tmp_path
    from mediausage.core import config
    config.get_site_root.cache_clear()
    monkeypatch.setattr(config, "get_site_root", lambda: tmp_path)

    return tmp_path


@pytest.fixture
def create_content_file(mock_site_root):
    """Factory fixture for creating markdown content files with frontmatter."""
    def _create(
        content_type: str = "post",
        slug: str = "test-post",
        title: str = "Test Post",
        body: str = "Test content.",
        extra_fm: dict | None = None,
        draft: bool = False,
        resources: tuple[str, ...] = (),
    ) -> Path:
        content_dir = mock_site_root / "content" / content_type / slug
        content_dir.mkdir(parents=True, exist_ok=True)

        fm = {"title": title, "date": "2024-01-01", "draft": draft}
        if extra_fm:
            fm.update(extra_fm)

        fm_str = yaml.dump(fm, default_flow_style=False)
        content = f"---\n{fm_str}---\n\n{body}\n"

        index_file = content_dir / "index.md"
        index_file.write_text(content, encoding="utf-8")

        for name in resources:
            (content_dir / name).write_bytes(b"\x89PNG")
        return index_file

    return _create


@pytest.fixture
def create_export(mock_site_root):
    """Factory fixture for writing a posts/postmeta JSON export."""
    def _create(posts: list[dict], postmeta: list[dict] | None = None) -> Path:
        path = mock_site_root / ".mediausage" / "export.json"
        path.write_text(
            json.dumps({"posts": posts, "postmeta": postmeta or []}, indent=2),
            encoding="utf-8",
        )
        return path

    return _create
