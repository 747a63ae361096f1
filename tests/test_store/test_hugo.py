"""Tests for the Hugo content store."""

from datetime import date, datetime, timezone

import pytest

from mediausage.store.hugo import HugoContentStore, _is_future
from mediausage.usage.finder import MatchSource, UsageFinder

NOW = datetime(2025, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def hugo_site(mock_site_root, create_content_file):
    """Hugo site with a bundle image, a static image and assorted posts."""
    create_content_file(
        slug="hello", title="Hello", body="Nothing here.",
        resources=("cover.jpg",),
    )
    create_content_file(
        slug="logo-post", title="Logo Post",
        body="![logo](/images/logo.png)",
    )
    create_content_file(
        slug="gallery", title="Gallery",
        body="Pictures below.",
        extra_fm={"images": [{"src": "/images/logo.png", "alt": "Logo"}]},
    )
    create_content_file(slug="wip", title="Work in progress", draft=True)
    create_content_file(
        slug="soon", title="Coming Soon", extra_fm={"date": "2999-01-01"},
    )
    create_content_file(
        content_type="docs", slug="guide", title="Guide",
        body="Uses cover.jpg too.",
    )
    (mock_site_root / "static" / "images" / "logo.png").write_bytes(b"\x89PNG")
    (mock_site_root / "content" / "about.md").write_text(
        "---\ntitle: About\n---\nAbout page.\n", encoding="utf-8",
    )
    return mock_site_root


def test_records_use_site_relative_ids(hugo_site):
    store = HugoContentStore(hugo_site, now=NOW)
    ids = [r.id for r in store.list_candidates()]
    assert "content/post/hello/index.md" in ids
    assert "content/about.md" in ids
    assert ids == sorted(ids)


def test_record_types_from_sections(hugo_site):
    store = HugoContentStore(hugo_site, now=NOW)
    types = {r.id: r.type for r in store.list_candidates()}
    assert types["content/post/hello/index.md"] == "post"
    assert types["content/docs/guide/index.md"] == "docs"
    assert types["content/about.md"] == "page"


def test_record_statuses(hugo_site):
    store = HugoContentStore(hugo_site, now=NOW)
    statuses = {r.id: r.status for r in store.list_candidates()}
    assert statuses["content/post/hello/index.md"] == "publish"
    assert statuses["content/post/wip/index.md"] == "draft"
    assert statuses["content/post/soon/index.md"] == "future"


def test_bundle_resource_attached_to_bundle(hugo_site):
    store = HugoContentStore(hugo_site, now=NOW)
    media = store.get_media("content/post/hello/cover.jpg")
    assert media is not None
    assert media.file_name == "cover.jpg"
    assert media.parent == "content/post/hello/index.md"
    assert [r.id for r in store.list_attached(media.id)] == ["content/post/hello/index.md"]


def test_static_media_has_no_parent(hugo_site):
    store = HugoContentStore(hugo_site, now=NOW)
    media = store.get_media("static/images/logo.png")
    assert media is not None
    assert media.parent is None
    assert store.list_attached(media.id) == []


def test_list_media(hugo_site):
    store = HugoContentStore(hugo_site, now=NOW)
    ids = [m.id for m in store.list_media()]
    assert ids == ["content/post/hello/cover.jpg", "static/images/logo.png"]


def test_metadata_values_are_front_matter(hugo_site):
    store = HugoContentStore(hugo_site, now=NOW)
    values = store.get_metadata_values("content/post/gallery/index.md")
    assert [{"src": "/images/logo.png", "alt": "Logo"}] in values
    assert "Gallery" in values


def test_find_usage_of_bundle_image(hugo_site):
    store = HugoContentStore(hugo_site, now=NOW)
    matches = UsageFinder(store).find_usage("cover.jpg", "content/post/hello/cover.jpg")
    assert [(m.id, m.via) for m in matches] == [
        ("content/post/hello/index.md", MatchSource.ATTACHMENT),
        ("content/docs/guide/index.md", MatchSource.BODY),
    ]


def test_find_usage_of_static_image(hugo_site):
    store = HugoContentStore(hugo_site, now=NOW)
    matches = UsageFinder(store).find_usage("logo.png", "static/images/logo.png")
    assert [(m.id, m.via) for m in matches] == [
        ("content/post/gallery/index.md", MatchSource.METADATA),
        ("content/post/logo-post/index.md", MatchSource.BODY),
    ]


def test_files_without_front_matter_skipped(mock_site_root):
    (mock_site_root / "content" / "post" / "plain.md").write_text("Just text.", encoding="utf-8")
    (mock_site_root / "content" / "post" / "bad.md").write_text(
        "---\ntitle: [unclosed\n---\nBody\n", encoding="utf-8",
    )
    store = HugoContentStore(mock_site_root, now=NOW)
    assert store.list_candidates() == []


def test_missing_content_dir(tmp_path):
    store = HugoContentStore(tmp_path, now=NOW)
    assert store.list_candidates() == []
    assert store.list_media() == []


def test_custom_labels(mock_site_root):
    store = HugoContentStore(
        mock_site_root,
        status_labels={"draft": "Unpublished"},
        type_labels={"docs": "Documentation"},
        now=NOW,
    )
    assert store.label_for("draft") == "Unpublished"
    assert store.label_for("publish") == "Published"
    assert store.label_for_type("docs") == "Documentation"
    assert store.label_for_type("recipes") is None


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2999-01-01", True),
        ("2020-01-01", False),
        ("2025-06-01T00:00:01Z", True),
        (date(2025, 6, 2), True),
        (date(2025, 6, 1), False),
        (datetime(2025, 5, 1), False),
        ("not a date", False),
        (None, False),
    ],
)
def test_is_future(value, expected):
    assert _is_future(value, NOW) is expected


def test_hidden_directories_skipped(mock_site_root, create_content_file):
    create_content_file(slug="real", resources=("a.jpg",))
    well_known = mock_site_root / "static" / ".well-known"
    well_known.mkdir()
    (well_known / "security.txt").write_text("contact", encoding="utf-8")
    git_dir = mock_site_root / "content" / ".git"
    git_dir.mkdir()
    (git_dir / "HEAD").write_text("ref", encoding="utf-8")
    (git_dir / "notes.md").write_text("---\ntitle: Hidden\n---\n", encoding="utf-8")

    store = HugoContentStore(mock_site_root, now=NOW)
    assert [r.id for r in store.list_candidates()] == ["content/post/real/index.md"]
    assert [m.id for m in store.list_media()] == ["content/post/real/a.jpg"]


def test_section_list_pages_are_not_records(mock_site_root, create_content_file):
    create_content_file(slug="hello")
    section = mock_site_root / "content" / "post"
    (section / "_index.md").write_text("---\ntitle: Posts\n---\n", encoding="utf-8")
    (section / "banner.png").write_bytes(b"x")

    store = HugoContentStore(mock_site_root, now=NOW)
    assert [r.id for r in store.list_candidates()] == ["content/post/hello/index.md"]
    assert store.get_media("content/post/banner.png").parent is None
