"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from imagechain.models.config import ImageResolverConfig
from imagechain.models.image import SizedImage
from imagechain.resize.editor import ImageEditorError, ImageHandle, PillowImageEditor
from imagechain.service import ImageService
from imagechain.store.memory import Attachment, ContentItem, InMemoryContentStore, PageBuilderEntry
from imagechain.store.settings import InMemorySettingsStore
from imagechain.store.uploads import LocalUploadStorage

SITE_URL = "https://example.com/uploads"


def make_attachment(attachment_id: int, name: str, ext: str = "jpg") -> Attachment:
    """Attachment with the standard thumbnail/medium/large renditions."""
    mime = "image/png" if ext == "png" else "image/jpeg"
    return Attachment(
        id=attachment_id,
        url=f"{SITE_URL}/{name}.{ext}",
        mime_type=mime,
        sizes={
            "thumbnail": SizedImage(
                uri=f"{SITE_URL}/{name}-150x150.{ext}", width=150, height=150, mime_type=mime
            ),
            "medium": SizedImage(
                uri=f"{SITE_URL}/{name}-300x200.{ext}", width=300, height=200, mime_type=mime
            ),
            "large": SizedImage(
                uri=f"{SITE_URL}/{name}-1024x683.{ext}", width=1024, height=683, mime_type=mime
            ),
            "full": SizedImage(
                uri=f"{SITE_URL}/{name}.{ext}", width=2048, height=1365, mime_type=mime
            ),
        },
    )


class CountingEditor(PillowImageEditor):
    """Pillow editor that counts opens and saves."""

    def __init__(self) -> None:
        super().__init__()
        self.opened = 0
        self.saved = 0

    def open(self, path: Path):
        self.opened += 1
        handle = super().open(path)
        editor = self

        class _Handle(ImageHandle):
            def __init__(self, inner: ImageHandle) -> None:
                self.inner = inner

            def resize_crop(self, width: int, height: int) -> ImageHandle:
                return _Handle(self.inner.resize_crop(width, height))

            def save_to(self, path: Path) -> None:
                editor.saved += 1
                self.inner.save_to(path)

        return _Handle(handle)


class FailingEditor(PillowImageEditor):
    """Editor that cannot open anything."""

    def open(self, path: Path):
        raise ImageEditorError(f"Unsupported image: {path}")


@pytest.fixture
def store() -> InMemoryContentStore:
    """Content store with a few items and attachments."""
    return InMemoryContentStore(
        items=[
            ContentItem(
                id=1,
                title="Featured Post",
                body="<p>No images here</p>",
                featured_image_id=7,
            ),
            ContentItem(
                id=2,
                title="Body Image Post",
                body='<p>Intro</p><img class="wide" src="https://cdn.example/x.png" alt=""><img src="https://cdn.example/y.png">',
            ),
            ContentItem(
                id=3,
                title="Meta Post",
                meta={
                    "hero": f"{SITE_URL}/hero.png",
                    "empty": "",
                    "document": f"{SITE_URL}/brochure.pdf",
                    "unknown": "https://elsewhere.example/unknown.png",
                    "banner": f"{SITE_URL}/banner.jpg",
                },
                page_builder=[
                    PageBuilderEntry(part="hero", area="top", key="image", value=f"{SITE_URL}/hero.png"),
                    PageBuilderEntry(part="gallery", area="main", key="image", value="8"),
                    PageBuilderEntry(part="gallery", area="main", key="caption", value="Not an image"),
                ],
            ),
            ContentItem(id=4, title="Plain <Post> & Co", body="Just words."),
            ContentItem(
                id=5,
                title="External Image Post",
                body="<IMG SRC='https://other.example/raw.gif'>",
            ),
        ],
        attachments=[
            make_attachment(7, "featured"),
            make_attachment(8, "gallery"),
            make_attachment(42, "photo"),
            make_attachment(55, "hero", ext="png"),
            make_attachment(56, "banner"),
            Attachment(
                id=99,
                url="https://cdn.example/x.png",
                mime_type="image/png",
                sizes={
                    "thumbnail": SizedImage(
                        uri="https://cdn.example/x-150x150.png", width=150, height=150
                    ),
                },
            ),
        ],
        current_item_id=1,
    )


@pytest.fixture
def uploads(tmp_path: Path) -> LocalUploadStorage:
    """Upload storage in a temporary directory."""
    return LocalUploadStorage(tmp_path / "uploads", SITE_URL)


@pytest.fixture
def settings() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def config() -> ImageResolverConfig:
    return ImageResolverConfig(placeholder_url="https://example.com/static/default-post-thumbnail.png")


@pytest.fixture
def editor() -> CountingEditor:
    return CountingEditor()


@pytest.fixture
def failing_editor() -> FailingEditor:
    return FailingEditor()


@pytest.fixture
def service(store, uploads, settings, config, editor) -> Generator[ImageService, None, None]:
    """Image service wired to the test collaborators."""
    svc = ImageService(store=store, uploads=uploads, settings=settings, config=config, editor=editor)
    yield svc
    svc.close()


@pytest.fixture
def sample_image(tmp_path: Path) -> Path:
    """A 400x300 PNG on disk."""
    path = tmp_path / "source" / "sample.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (400, 300), color="green").save(path, format="PNG")
    return path


# Markers for test categories
def pytest_configure(config):
    config.addinivalue_line("markers", "mock: tests using fake collaborators")
