"""Image editing backends used for resizing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError


class ImageEditorError(Exception):
    """The editor could not open, process or save an image."""


class ImageHandle(ABC):
    """An opened image that can be resized and saved."""

    @abstractmethod
    def resize_crop(self, width: int, height: int) -> ImageHandle:
        """Scale and center-crop to exactly width x height."""
        ...

    @abstractmethod
    def save_to(self, path: Path) -> None:
        """Write the image, choosing the format from the file extension."""
        ...


class ImageEditor(ABC):
    """Opens images for editing."""

    @abstractmethod
    def open(self, path: Path) -> ImageHandle:
        """Open an image file.

        Raises:
            ImageEditorError: If the file is missing or not a supported image.
        """
        ...


class PillowImageHandle(ImageHandle):
    """ImageHandle backed by a Pillow image."""

    def __init__(self, image: Image.Image, source_format: str | None = None, jpeg_quality: int = 85) -> None:
        self.image = image
        self.source_format = source_format
        self.jpeg_quality = jpeg_quality

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def resize_crop(self, width: int, height: int) -> PillowImageHandle:
        # A zero dimension follows the other one proportionally
        if width <= 0 and height <= 0:
            return self
        if width <= 0:
            width = max(1, round(self.image.width * height / self.image.height))
        elif height <= 0:
            height = max(1, round(self.image.height * width / self.image.width))

        try:
            resized = ImageOps.fit(self.image, (width, height), Image.Resampling.LANCZOS)
        except (OSError, ValueError) as e:
            raise ImageEditorError(f"Failed to resize image: {e}") from e
        return PillowImageHandle(resized, self.source_format, self.jpeg_quality)

    def save_to(self, path: Path) -> None:
        image_format = Image.registered_extensions().get(path.suffix.lower()) or self.source_format
        if image_format is None:
            raise ImageEditorError(f"Cannot determine image format for {path}")

        image = self.image
        if image_format == "JPEG":
            # JPEG has no alpha channel
            if image.mode != "RGB":
                image = image.convert("RGB")
            options = {"quality": self.jpeg_quality, "optimize": True}
        else:
            options = {"optimize": True} if image_format == "PNG" else {}

        try:
            image.save(path, format=image_format, **options)
        except (OSError, ValueError, KeyError) as e:
            raise ImageEditorError(f"Failed to save image to {path}: {e}") from e


class PillowImageEditor(ImageEditor):
    """ImageEditor using Pillow."""

    def __init__(self, jpeg_quality: int = 85) -> None:
        self.jpeg_quality = jpeg_quality

    def open(self, path: Path) -> PillowImageHandle:
        try:
            with Image.open(path) as image:
                image.load()
                source_format = image.format
                # GIF and other palette images resize badly in P mode
                if image.mode not in ("RGB", "RGBA", "L"):
                    loaded = image.convert("RGBA")
                else:
                    loaded = image.copy()
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
            raise ImageEditorError(f"Cannot open image {path}: {e}") from e
        return PillowImageHandle(loaded, source_format, self.jpeg_quality)
