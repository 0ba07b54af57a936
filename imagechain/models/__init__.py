"""Data models for image resolution."""

from imagechain.models.config import ImageResolverConfig, SizeOptions
from imagechain.models.image import ImageMeta, ImageReference, SizedImage
from imagechain.models.request import PageBuilderRef, PriorityOverride, ResolutionRequest
from imagechain.models.size import (
    ExplicitSize,
    NamedSize,
    SizeSpec,
    is_acceptable,
    is_named_size,
    parse_size,
    size_prefix,
)

__all__ = [
    "ExplicitSize",
    "ImageMeta",
    "ImageReference",
    "ImageResolverConfig",
    "NamedSize",
    "PageBuilderRef",
    "PriorityOverride",
    "ResolutionRequest",
    "SizeOptions",
    "SizeSpec",
    "SizedImage",
    "is_acceptable",
    "is_named_size",
    "parse_size",
    "size_prefix",
]
