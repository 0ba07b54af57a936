"""On-disk cache of resized image variants."""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Any

from imagechain.models.config import SizeOptions
from imagechain.models.size import is_acceptable, parse_size, size_prefix
from imagechain.resize.editor import (
    ImageEditor,
    ImageEditorError,
    ImageHandle,
    PillowImageEditor,
)

if TYPE_CHECKING:
    from imagechain.resize.index import VariantIndex
    from imagechain.store.base import UploadStorage

logger = logging.getLogger(__name__)


class ResizeCache:
    """Creates resized copies of images and reuses them.

    Variants are written to ``{upload_dir}/{size_prefix}-{filename}``, e.g.
    ``medium-photo.png`` or ``100x100-photo.png``. A file already at that
    path is served as-is; there is no staleness check.
    """

    def __init__(
        self,
        uploads: UploadStorage,
        size_options: SizeOptions | None = None,
        editor: ImageEditor | None = None,
        index: VariantIndex | None = None,
    ) -> None:
        self.uploads = uploads
        self.size_options = size_options or SizeOptions()
        self.editor = editor or PillowImageEditor()
        self.index = index

    def variant_path(self, size: Any, filename: str) -> Path:
        """Deterministic location of a variant."""
        return self.uploads.base_dir() / f"{size_prefix(parse_size(size))}-{filename}"

    def get_or_create_variant(
        self,
        source_path: str | Path | None,
        size: Any,
        filename: str | None = None,
        source_url: str | None = None,
    ) -> str | None:
        """Return the URL of ``source_path`` resized to ``size``.

        Args:
            source_path: Image file to resize
            size: Named size or width/height pair
            filename: Name used for the variant (default: source basename)
            source_url: Returned when resizing is not possible
                (default: the source path as given)

        Returns:
            URL of the variant, the source URL if the size has no dimensions
            or the editor fails, or None for a missing source or invalid size.
        """
        if not source_path or not is_acceptable(size):
            return None
        try:
            spec = parse_size(size)
        except ValueError as e:
            logger.debug(f"Unusable size {size!r}: {e}")
            return None

        source = Path(source_path)
        filename = filename or source.name
        fallback = source_url or str(source_path)
        prefix = size_prefix(spec)
        target = self.variant_path(spec, filename)

        if target.exists():
            logger.debug(f"Variant cache hit: {target}")
            return self.uploads.url_for(target)

        dimensions = self.size_options.dimensions_for(spec)
        if dimensions is None:
            return fallback

        try:
            handle = self.editor.open(source)
            resized = handle.resize_crop(dimensions.width, dimensions.height)
            self._write_atomic(resized, target)
        except ImageEditorError as e:
            logger.warning(f"Failed to resize {source} to {prefix}: {e}")
            return fallback

        logger.info(f"Generated variant {target.name} ({dimensions.width}x{dimensions.height})")

        if self.index is not None:
            self.index.record(target, prefix)

        return self.uploads.url_for(target)

    def _write_atomic(self, handle: ImageHandle, target: Path) -> None:
        # Temp name keeps the extension so the editor picks the right format
        temp = target.with_name(f".{uuid.uuid4().hex}.{target.name}")
        try:
            handle.save_to(temp)
            os.replace(temp, target)
        finally:
            if temp.exists():
                temp.unlink()

    def clear(self) -> int:
        """Delete all indexed variant files. Returns count removed."""
        if self.index is None:
            return 0

        paths = self.index.drain()
        for path in paths:
            path.unlink(missing_ok=True)
        return len(paths)
