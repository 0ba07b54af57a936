"""In-memory content store.

Holds content items and attachments as plain models, so the resolver can be
driven from a YAML site description (CLI) or built directly in tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, model_validator

from imagechain.models.image import SizedImage
from imagechain.models.size import ExplicitSize, NamedSize, SizeSpec
from imagechain.store.base import ContentStore


class Attachment(BaseModel):
    """A stored media file and its generated sizes."""

    id: int
    url: str = Field(..., description="Canonical URL of the original file")
    mime_type: str | None = None
    sizes: dict[str, SizedImage] = Field(
        default_factory=dict, description="Size name -> rendered image; 'full' is the original"
    )

    @model_validator(mode="after")
    def _ensure_full(self) -> Attachment:
        if NamedSize.FULL.value not in self.sizes:
            self.sizes[NamedSize.FULL.value] = SizedImage(uri=self.url, mime_type=self.mime_type)
        return self

    def image_for(self, size: SizeSpec) -> SizedImage:
        """Pick the stored rendition for a size, falling back to the original."""
        full = self.sizes[NamedSize.FULL.value]

        if isinstance(size, ExplicitSize):
            candidates = [
                image
                for name, image in self.sizes.items()
                if name != NamedSize.FULL.value
                and image.width >= size.width
                and image.height >= size.height
            ]
            if not candidates:
                return full
            best = min(candidates, key=lambda image: image.width * image.height)
            return best.model_copy(update={"is_intermediate": True})

        name = NamedSize(size).value
        image = self.sizes.get(name)
        if image is None or name == NamedSize.FULL.value:
            return full
        return image.model_copy(update={"is_intermediate": True})


class PageBuilderEntry(BaseModel):
    """One field value inside a page builder part."""

    part: str
    area: str
    key: str
    value: str = ""


class ContentItem(BaseModel):
    """A post, page or similar item."""

    id: int
    title: str = ""
    body: str = ""
    featured_image_id: int | None = None
    meta: dict[str, Any] = Field(default_factory=dict)
    page_builder: list[PageBuilderEntry] = Field(default_factory=list)


class InMemoryContentStore(ContentStore):
    """ContentStore backed by dictionaries."""

    def __init__(
        self,
        items: list[ContentItem] | None = None,
        attachments: list[Attachment] | None = None,
        current_item_id: int | None = None,
    ) -> None:
        self.items: dict[int, ContentItem] = {item.id: item for item in items or []}
        self.attachments: dict[int, Attachment] = {a.id: a for a in attachments or []}
        self.current_item_id = current_item_id

    def add_item(self, item: ContentItem) -> None:
        self.items[item.id] = item

    def add_attachment(self, attachment: Attachment) -> None:
        self.attachments[attachment.id] = attachment

    def get_body(self, item_id: int) -> str | None:
        item = self.items.get(item_id)
        return item.body if item else None

    def get_title(self, item_id: int) -> str:
        item = self.items.get(item_id)
        return item.title if item else ""

    def has_featured_image(self, item_id: int) -> bool:
        return bool(self.get_featured_image_id(item_id))

    def get_featured_image_id(self, item_id: int) -> int | None:
        item = self.items.get(item_id)
        return item.featured_image_id if item else None

    def get_sized_attachment_uri(self, attachment_id: int, size: SizeSpec) -> SizedImage | None:
        attachment = self.attachments.get(attachment_id)
        if attachment is None:
            return None
        return attachment.image_for(size)

    def get_meta_field(self, item_id: int, key: str) -> str:
        item = self.items.get(item_id)
        if item is None:
            return ""
        value = item.meta.get(key)
        return "" if value is None else str(value)

    def get_page_builder_field(self, part: str, key: str, item_id: int, area: str) -> str:
        item = self.items.get(item_id)
        if item is None:
            return ""
        for entry in item.page_builder:
            if entry.part == part and entry.key == key and entry.area == area:
                return entry.value
        return ""

    def reverse_url_to_attachment_id(self, url: str) -> int | None:
        url = url.strip()
        for attachment in self.attachments.values():
            if attachment.url == url:
                return attachment.id
        return None

    def current_rendering_item_id(self) -> int | None:
        return self.current_item_id

    @classmethod
    def from_yaml(cls, path: Path) -> InMemoryContentStore:
        """Load a site description with ``items``, ``attachments`` and ``current_item_id``."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(
            items=[ContentItem.model_validate(item) for item in data.get("items", [])],
            attachments=[Attachment.model_validate(a) for a in data.get("attachments", [])],
            current_item_id=data.get("current_item_id"),
        )
