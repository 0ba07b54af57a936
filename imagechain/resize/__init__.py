"""Image resizing and variant caching."""

from imagechain.resize.cache import ResizeCache
from imagechain.resize.editor import (
    ImageEditor,
    ImageEditorError,
    ImageHandle,
    PillowImageEditor,
    PillowImageHandle,
)
from imagechain.resize.index import VariantIndex, VariantStats

__all__ = [
    "ImageEditor",
    "ImageEditorError",
    "ImageHandle",
    "PillowImageEditor",
    "PillowImageHandle",
    "ResizeCache",
    "VariantIndex",
    "VariantStats",
]
