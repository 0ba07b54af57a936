"""Image source resolvers."""

from imagechain.resolvers.base import SourceResolver
from imagechain.resolvers.sources import (
    AttachmentIdResolver,
    BodyImageResolver,
    FeaturedImageResolver,
    MetaFieldResolver,
    PageBuilderResolver,
)
from imagechain.resolvers.urls import clean_url, first_image_src, is_image_file

__all__ = [
    "AttachmentIdResolver",
    "BodyImageResolver",
    "FeaturedImageResolver",
    "MetaFieldResolver",
    "PageBuilderResolver",
    "SourceResolver",
    "clean_url",
    "first_image_src",
    "is_image_file",
]
