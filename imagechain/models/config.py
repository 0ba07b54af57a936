"""Resolver configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from imagechain.models.size import ExplicitSize, NamedSize, SizeSpec, parse_size

ASSETS_DIR = Path(__file__).resolve().parent.parent / "assets"
DEFAULT_PLACEHOLDER_FILENAME = "default-post-thumbnail.png"


class SizeOptions(BaseModel):
    """Pixel dimensions behind the resizable named sizes."""

    thumbnail: ExplicitSize = Field(default_factory=lambda: ExplicitSize(width=150, height=150))
    medium: ExplicitSize = Field(default_factory=lambda: ExplicitSize(width=300, height=300))
    large: ExplicitSize = Field(default_factory=lambda: ExplicitSize(width=1024, height=1024))

    def dimensions_for(self, size: SizeSpec) -> ExplicitSize | None:
        """Resolve a size to concrete dimensions, or None for ``full``."""
        if isinstance(size, ExplicitSize):
            return size
        if size == NamedSize.THUMBNAIL:
            return self.thumbnail
        if size == NamedSize.MEDIUM:
            return self.medium
        if size == NamedSize.LARGE:
            return self.large
        return None


class ImageResolverConfig(BaseModel):
    """Configuration for image resolution and resizing."""

    default_image_size: SizeSpec = Field(
        default=NamedSize.FULL, description="Size used when a request gives none"
    )
    default_placeholder_size: SizeSpec = Field(
        default=NamedSize.FULL, description="Placeholder size used when a request gives none"
    )
    size_options: SizeOptions = Field(default_factory=SizeOptions)
    placeholder_path: Path = Field(
        default=ASSETS_DIR / DEFAULT_PLACEHOLDER_FILENAME,
        description="Built-in placeholder image file",
    )
    placeholder_url: str | None = Field(
        default=None, description="Public URL of the built-in placeholder (file URI if unset)"
    )
    image_extensions: list[str] = Field(
        default_factory=lambda: ["jpg", "jpeg", "gif", "png"],
        description="URL extensions treated as images",
    )
    tag_classes: str = Field(
        default="attachment-thumbnail wp-post-image",
        description="CSS classes on rendered image tags",
    )
    jpeg_quality: int = Field(default=85, ge=1, le=100, description="JPEG quality (1-100)")
    variant_index: bool = Field(
        default=True, description="Record generated variants in an SQLite index"
    )

    @field_validator("default_image_size", "default_placeholder_size", mode="before")
    @classmethod
    def _parse_size(cls, value: Any) -> SizeSpec:
        return parse_size(value)

    @property
    def default_placeholder_uri(self) -> str:
        """URL of the built-in placeholder image."""
        if self.placeholder_url:
            return self.placeholder_url
        return self.placeholder_path.resolve().as_uri()

    @classmethod
    def from_yaml(cls, path: Path) -> ImageResolverConfig:
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)
