"""Image source resolvers.

Each resolver consults one place an image can come from:

- AttachmentIdResolver: an attachment id given by the caller
- FeaturedImageResolver: the item's featured image
- MetaFieldResolver: image URLs stored in item meta fields
- PageBuilderResolver: an image field in page builder data
- BodyImageResolver: the first <img> tag in the item's body
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from imagechain.models.image import ImageReference
from imagechain.resolvers.base import SourceResolver
from imagechain.resolvers.urls import clean_url, first_image_src

if TYPE_CHECKING:
    from imagechain.models.request import ResolutionRequest

logger = logging.getLogger(__name__)


class AttachmentIdResolver(SourceResolver):
    """Image from an explicitly requested attachment."""

    name = "attachment_id"

    def resolve(self, request: ResolutionRequest) -> ImageReference | None:
        return self.sized_attachment(request.attachment_id, request)


class FeaturedImageResolver(SourceResolver):
    """Image from the content item's featured image."""

    name = "featured"

    def applies_to(self, request: ResolutionRequest) -> bool:
        """True if the item has a featured image at all."""
        if not request.content_item_id:
            return False
        return self.store.has_featured_image(request.content_item_id)

    def resolve(self, request: ResolutionRequest) -> ImageReference | None:
        if not self.applies_to(request):
            return None
        featured_id = self.store.get_featured_image_id(request.content_item_id)
        return self.sized_attachment(featured_id, request)


class MetaFieldResolver(SourceResolver):
    """Image from URLs stored in one or more meta fields.

    Keys are tried in order and the first one whose value maps to a sized
    attachment wins.
    """

    name = "meta_key"

    def resolve(self, request: ResolutionRequest) -> ImageReference | None:
        if not request.content_item_id:
            return None

        for key in request.meta_keys:
            url = clean_url(self.store.get_meta_field(request.content_item_id, key))
            if not url or not self.is_image_url(url):
                continue

            image = self.sized_attachment_for_url(url, request)
            if image is not None:
                logger.debug(f"Meta key {key!r} on item {request.content_item_id} matched {url}")
                return image

        return None


class PageBuilderResolver(SourceResolver):
    """Image from a page builder field holding either a URL or an attachment id."""

    name = "page_builder_data"

    def resolve(self, request: ResolutionRequest) -> ImageReference | None:
        ref = request.page_builder_ref
        if ref is None or not ref.is_complete:
            return None

        value = self.store.get_page_builder_field(
            ref.part, ref.meta_key, ref.content_item_id, ref.area
        )
        if not value:
            return None

        url = clean_url(value)
        if url and self.is_image_url(url):
            return self.sized_attachment_for_url(url, request)

        # Not an image URL, so the field should hold an attachment id
        try:
            attachment_id = int(str(value).strip())
        except ValueError:
            return None
        return self.sized_attachment(attachment_id, request)


class BodyImageResolver(SourceResolver):
    """Image from the first <img> tag in the item's body.

    Images that are not attachments are returned as-is, since they cannot
    be resized.
    """

    name = "body"

    def resolve(self, request: ResolutionRequest) -> ImageReference | None:
        if not request.content_item_id:
            return None

        src = first_image_src(self.store.get_body(request.content_item_id))
        if not src:
            return None

        attachment_id = self.store.reverse_url_to_attachment_id(src)
        if attachment_id:
            return self.sized_attachment(attachment_id, request)

        return ImageReference(uri=src)
