"""Image resolution chain.

Finds the image to display for a content item by trying each source in
priority order:

1. An attachment id given in the request
2. The item's featured image
3. Image URLs in the requested meta fields
4. A page builder image field
5. The first image in the item's body
6. The content item id treated as an attachment id
7. The placeholder image

A ``priority_override`` on the request replaces steps 1-4 with the single
named source.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from imagechain.models.config import ImageResolverConfig
from imagechain.models.image import ImageReference
from imagechain.models.request import PriorityOverride
from imagechain.resolvers.sources import (
    AttachmentIdResolver,
    BodyImageResolver,
    FeaturedImageResolver,
    MetaFieldResolver,
    PageBuilderResolver,
)

if TYPE_CHECKING:
    from imagechain.models.request import ResolutionRequest
    from imagechain.placeholder import PlaceholderResolver
    from imagechain.resolvers.base import SourceResolver
    from imagechain.store.base import ContentStore

logger = logging.getLogger(__name__)


class ResolutionChain:
    """Resolves the display image for a content item."""

    def __init__(
        self,
        store: ContentStore,
        placeholder: PlaceholderResolver,
        config: ImageResolverConfig | None = None,
    ) -> None:
        self.store = store
        self.placeholder = placeholder
        self.config = config or ImageResolverConfig()

        extensions = self.config.image_extensions
        self.attachment = AttachmentIdResolver(store, extensions)
        self.featured = FeaturedImageResolver(store, extensions)
        self.meta = MetaFieldResolver(store, extensions)
        self.page_builder = PageBuilderResolver(store, extensions)
        self.body = BodyImageResolver(store, extensions)

        self._overrides: dict[PriorityOverride, SourceResolver] = {
            PriorityOverride.FEATURED: self.featured,
            PriorityOverride.META_KEY: self.meta,
            PriorityOverride.PAGE_BUILDER_DATA: self.page_builder,
        }

    def prepare(self, request: ResolutionRequest) -> ResolutionRequest:
        """Fill unset sizes and the content item from config and rendering context."""
        item_id = request.content_item_id
        if item_id is None:
            item_id = self.store.current_rendering_item_id()
        return request.with_defaults(
            size=self.config.default_image_size,
            placeholder_size=self.config.default_placeholder_size,
            content_item_id=item_id,
        )

    def resolve(self, request: ResolutionRequest) -> ImageReference:
        """Resolve a request to an image, ending at the placeholder."""
        request = self.prepare(request)

        image = self._from_sources(request) or self.body.resolve(request)
        if image is not None:
            return image

        return self._attachment_or_placeholder(request)

    def resolve_image(self, request: ResolutionRequest) -> str | ImageReference:
        """Resolve a request to a URI, or an ImageReference when meta is requested."""
        image = self.resolve(request)
        if request.include_meta:
            return image
        return image.uri

    def _from_sources(self, request: ResolutionRequest) -> ImageReference | None:
        if request.priority_override is not None:
            resolver = self._overrides.get(request.priority_override, self.featured)
            logger.debug(f"Priority override {request.priority_override.value}: {resolver.name}")
            return resolver.resolve(request)

        cascade: list[tuple[Callable[[], bool], SourceResolver]] = [
            (lambda: bool(request.attachment_id), self.attachment),
            (lambda: self.featured.applies_to(request), self.featured),
            (lambda: bool(request.meta_keys), self.meta),
            (lambda: request.page_builder_ref is not None, self.page_builder),
        ]
        for applies, resolver in cascade:
            if not applies():
                continue
            image = resolver.resolve(request)
            if image is not None:
                logger.debug(f"Resolved item {request.content_item_id} from {resolver.name}")
                return image
        return None

    def _attachment_or_placeholder(self, request: ResolutionRequest) -> ImageReference:
        # The item itself may be an attachment
        image = self.attachment.sized_attachment(request.content_item_id, request)
        if image is not None:
            return image

        logger.debug(f"No image for item {request.content_item_id}, using placeholder")
        return ImageReference(uri=self.placeholder.resolve_placeholder(request.placeholder_size))
