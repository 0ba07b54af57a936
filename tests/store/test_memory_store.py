"""Tests for the in-memory content store."""

from __future__ import annotations

from pathlib import Path

import pytest

from imagechain.models.image import SizedImage
from imagechain.models.size import ExplicitSize, NamedSize
from imagechain.store.memory import Attachment, ContentItem, InMemoryContentStore

SITE_URL = "https://example.com/uploads"


class TestAttachment:
    """Tests for Attachment.image_for."""

    @pytest.fixture
    def attachment(self) -> Attachment:
        return Attachment(
            id=1,
            url=f"{SITE_URL}/dog.jpg",
            mime_type="image/jpeg",
            sizes={
                "thumbnail": SizedImage(uri=f"{SITE_URL}/dog-150x150.jpg", width=150, height=150),
                "medium": SizedImage(uri=f"{SITE_URL}/dog-300x200.jpg", width=300, height=200),
            },
        )

    def test_full_added(self, attachment: Attachment) -> None:
        full = attachment.sizes["full"]
        assert full.uri == f"{SITE_URL}/dog.jpg"
        assert full.mime_type == "image/jpeg"
        assert not full.is_intermediate

    def test_named_size(self, attachment: Attachment) -> None:
        image = attachment.image_for(NamedSize.MEDIUM)
        assert image.uri == f"{SITE_URL}/dog-300x200.jpg"
        assert image.is_intermediate

    def test_missing_named_size_uses_full(self, attachment: Attachment) -> None:
        assert attachment.image_for(NamedSize.LARGE).uri == f"{SITE_URL}/dog.jpg"

    def test_full(self, attachment: Attachment) -> None:
        assert not attachment.image_for(NamedSize.FULL).is_intermediate

    def test_explicit_size_smallest_covering(self, attachment: Attachment) -> None:
        assert attachment.image_for(ExplicitSize(width=100, height=100)).uri == f"{SITE_URL}/dog-150x150.jpg"
        assert attachment.image_for(ExplicitSize(width=200, height=100)).uri == f"{SITE_URL}/dog-300x200.jpg"

    def test_explicit_size_too_large(self, attachment: Attachment) -> None:
        assert attachment.image_for(ExplicitSize(width=800, height=600)).uri == f"{SITE_URL}/dog.jpg"


class TestInMemoryContentStore:
    """Tests for InMemoryContentStore lookups."""

    def test_unknown_item(self) -> None:
        store = InMemoryContentStore()
        assert store.get_body(1) is None
        assert store.get_title(1) == ""
        assert not store.has_featured_image(1)
        assert store.get_meta_field(1, "hero") == ""
        assert store.get_page_builder_field("hero", "image", 1, "top") == ""
        assert store.get_sized_attachment_uri(1, NamedSize.FULL) is None
        assert store.current_rendering_item_id() is None

    def test_meta_values_as_text(self) -> None:
        store = InMemoryContentStore(items=[ContentItem(id=1, meta={"count": 3, "none": None})])
        assert store.get_meta_field(1, "count") == "3"
        assert store.get_meta_field(1, "none") == ""

    def test_reverse_lookup(self, store: InMemoryContentStore) -> None:
        assert store.reverse_url_to_attachment_id(f"{SITE_URL}/photo.jpg") == 42
        assert store.reverse_url_to_attachment_id(f"  {SITE_URL}/photo.jpg\n") == 42
        assert store.reverse_url_to_attachment_id(f"{SITE_URL}/photo-150x150.jpg") is None
        assert store.reverse_url_to_attachment_id("https://elsewhere.example/photo.jpg") is None

    def test_add(self) -> None:
        store = InMemoryContentStore()
        store.add_item(ContentItem(id=3, title="Added", featured_image_id=4))
        store.add_attachment(Attachment(id=4, url=f"{SITE_URL}/a.png"))

        assert store.get_title(3) == "Added"
        assert store.get_featured_image_id(3) == 4
        assert store.get_sized_attachment_uri(4, NamedSize.THUMBNAIL).uri == f"{SITE_URL}/a.png"

    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "site.yaml"
        path.write_text(
            "current_item_id: 5\n"
            "items:\n"
            "  - id: 5\n"
            "    title: From YAML\n"
            "    body: '<img src=\"https://a/b.png\">'\n"
            "    page_builder:\n"
            "      - {part: hero, area: top, key: image, value: '12'}\n"
            "attachments:\n"
            "  - id: 12\n"
            f"    url: {SITE_URL}/b.png\n"
        )

        store = InMemoryContentStore.from_yaml(path)

        assert store.current_rendering_item_id() == 5
        assert store.get_title(5) == "From YAML"
        assert store.get_body(5) == '<img src="https://a/b.png">'
        assert store.get_page_builder_field("hero", "image", 5, "top") == "12"
        assert store.reverse_url_to_attachment_id(f"{SITE_URL}/b.png") == 12

    def test_from_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "site.yaml"
        path.write_text("")
        store = InMemoryContentStore.from_yaml(path)
        assert store.items == {}
        assert store.attachments == {}
