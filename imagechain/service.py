"""ImageService - unified interface for resolving and resizing images."""

from __future__ import annotations

import html
from pathlib import Path
from typing import Any

from imagechain.chain import ResolutionChain
from imagechain.models.config import ImageResolverConfig
from imagechain.models.image import ImageReference
from imagechain.models.request import ResolutionRequest
from imagechain.placeholder import PlaceholderResolver
from imagechain.resize.cache import ResizeCache
from imagechain.resize.editor import ImageEditor, PillowImageEditor
from imagechain.resize.index import VariantIndex, VariantStats
from imagechain.store.base import ContentStore, SettingsStore, UploadStorage
from imagechain.store.settings import InMemorySettingsStore

VARIANT_INDEX_FILENAME = ".variants.db"


class ImageService:
    """Main interface for image resolution."""

    def __init__(
        self,
        store: ContentStore,
        uploads: UploadStorage,
        settings: SettingsStore | None = None,
        config: ImageResolverConfig | None = None,
        editor: ImageEditor | None = None,
    ) -> None:
        self.store = store
        self.uploads = uploads
        self.settings = settings or InMemorySettingsStore()
        self.config = config or ImageResolverConfig()
        self.editor = editor or PillowImageEditor(jpeg_quality=self.config.jpeg_quality)

        self._index: VariantIndex | None = None
        self._resize_cache: ResizeCache | None = None
        self._placeholder: PlaceholderResolver | None = None
        self._chain: ResolutionChain | None = None

    @property
    def index(self) -> VariantIndex | None:
        if self._index is None and self.config.variant_index:
            self._index = VariantIndex(self.uploads.base_dir() / VARIANT_INDEX_FILENAME)
        return self._index

    @property
    def resize_cache(self) -> ResizeCache:
        if self._resize_cache is None:
            self._resize_cache = ResizeCache(
                self.uploads,
                size_options=self.config.size_options,
                editor=self.editor,
                index=self.index,
            )
        return self._resize_cache

    @property
    def placeholder(self) -> PlaceholderResolver:
        if self._placeholder is None:
            self._placeholder = PlaceholderResolver(
                self.store, self.settings, self.resize_cache, self.config
            )
        return self._placeholder

    @property
    def chain(self) -> ResolutionChain:
        if self._chain is None:
            self._chain = ResolutionChain(self.store, self.placeholder, self.config)
        return self._chain

    def resolve_image_uri(self, request: ResolutionRequest | None = None) -> str | ImageReference:
        """Get the display image for a content item.

        Returns the URI, or an ImageReference with dimensions when the
        request sets ``include_meta``.
        """
        return self.chain.resolve_image(request or ResolutionRequest())

    def resolve_placeholder_uri(self, size: Any = None) -> str:
        """Get the placeholder image at a size (default: configured placeholder size)."""
        return self.placeholder.resolve_placeholder(size)

    def resolve_resized_uri(
        self,
        source: str | Path,
        size: Any,
        filename: str | None = None,
    ) -> str | None:
        """Resize an image file and return the variant's URL."""
        return self.resize_cache.get_or_create_variant(source, size, filename)

    def render_image_tag(self, request: ResolutionRequest | None = None) -> str:
        """Render an <img> element for a content item's display image."""
        request = self.chain.prepare(request or ResolutionRequest())
        if request.include_meta:
            request = request.model_copy(update={"include_meta": False})

        src = self.chain.resolve(request).uri
        title = self.store.get_title(request.content_item_id) if request.content_item_id else ""
        return (
            f'<img src="{html.escape(src, quote=True)}" '
            f'class="{html.escape(self.config.tag_classes, quote=True)}" '
            f'alt="{html.escape(title, quote=True)}" />'
        )

    def clear_variants(self) -> int:
        """Delete all generated variants recorded in the index."""
        return self.resize_cache.clear()

    def get_variant_stats(self) -> dict[str, Any]:
        """Get variant cache statistics."""
        if self.index is None:
            return VariantStats().model_dump()
        return self.index.get_stats().model_dump()

    def close(self) -> None:
        """Release resources."""
        if self._index is not None:
            self._index.close()
