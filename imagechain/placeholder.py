"""Placeholder image resolution."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from imagechain.models.size import NamedSize, parse_size, size_prefix

if TYPE_CHECKING:
    from imagechain.models.config import ImageResolverConfig
    from imagechain.resize.cache import ResizeCache
    from imagechain.store.base import ContentStore, SettingsStore

logger = logging.getLogger(__name__)


class PlaceholderResolver:
    """Finds the placeholder image shown when an item has no image.

    The configured placeholder (an attachment URL from the settings store)
    is used when it maps to an attachment. Otherwise the built-in default
    file is served, resized through the variant cache unless ``full`` is
    requested. The setting is read on every call.
    """

    def __init__(
        self,
        store: ContentStore,
        settings: SettingsStore,
        resize_cache: ResizeCache,
        config: ImageResolverConfig,
    ) -> None:
        self.store = store
        self.settings = settings
        self.resize_cache = resize_cache
        self.config = config

    def resolve_placeholder(self, size: Any = None) -> str:
        """Return the placeholder URL at the given size."""
        spec = self.config.default_placeholder_size
        if size is not None:
            try:
                spec = parse_size(size)
            except ValueError:
                logger.warning(f"Unknown placeholder size {size!r}, using {size_prefix(spec)}")

        configured = self.settings.get_placeholder_setting()
        if configured:
            attachment_id = self.store.reverse_url_to_attachment_id(configured)
            if attachment_id:
                sized = self.store.get_sized_attachment_uri(attachment_id, spec)
                if sized is not None and sized.uri:
                    return sized.uri
            logger.debug(f"Placeholder setting {configured!r} is not an attachment, using default")

        default_url = self.config.default_placeholder_uri
        if spec == NamedSize.FULL:
            return default_url

        path = self.config.placeholder_path
        return (
            self.resize_cache.get_or_create_variant(
                path, spec, filename=path.name, source_url=default_url
            )
            or default_url
        )
