"""ImageChain - display images for content items, with placeholder fallback and resizing."""

from imagechain.chain import ResolutionChain
from imagechain.models import (
    ExplicitSize,
    ImageReference,
    ImageResolverConfig,
    NamedSize,
    PageBuilderRef,
    PriorityOverride,
    ResolutionRequest,
)
from imagechain.placeholder import PlaceholderResolver
from imagechain.resize import ResizeCache
from imagechain.service import ImageService

__version__ = "0.1.0"
__all__ = [
    "ExplicitSize",
    "ImageReference",
    "ImageResolverConfig",
    "ImageService",
    "NamedSize",
    "PageBuilderRef",
    "PlaceholderResolver",
    "PriorityOverride",
    "ResizeCache",
    "ResolutionChain",
    "ResolutionRequest",
]
