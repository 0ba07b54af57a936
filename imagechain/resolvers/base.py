"""Base class for image source resolvers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from imagechain.resolvers.urls import DEFAULT_IMAGE_EXTENSIONS, is_image_file

if TYPE_CHECKING:
    from imagechain.models.image import ImageReference
    from imagechain.models.request import ResolutionRequest
    from imagechain.store.base import ContentStore


class SourceResolver(ABC):
    """Produces an image from one data source.

    Implementations return None when their source has no image. Requests
    reaching ``resolve`` already carry a size and, where one exists, a
    content item id.
    """

    name: str = "source"

    def __init__(
        self,
        store: ContentStore,
        image_extensions: list[str] | tuple[str, ...] = DEFAULT_IMAGE_EXTENSIONS,
    ) -> None:
        self.store = store
        self.image_extensions = tuple(image_extensions)

    @abstractmethod
    def resolve(self, request: ResolutionRequest) -> ImageReference | None:
        """Try to find an image for the request."""
        ...

    def is_image_url(self, url: str | None) -> bool:
        return is_image_file(url, self.image_extensions)

    def sized_attachment(
        self,
        attachment_id: int | None,
        request: ResolutionRequest,
    ) -> ImageReference | None:
        """Look up an attachment at the requested size."""
        if not attachment_id or request.size is None:
            return None
        sized = self.store.get_sized_attachment_uri(abs(attachment_id), request.size)
        if sized is None or not sized.uri:
            return None
        return sized.to_reference(include_meta=request.include_meta)

    def sized_attachment_for_url(
        self,
        url: str,
        request: ResolutionRequest,
    ) -> ImageReference | None:
        """Map an image URL back to its attachment and size it."""
        attachment_id = self.store.reverse_url_to_attachment_id(url)
        return self.sized_attachment(attachment_id, request)
