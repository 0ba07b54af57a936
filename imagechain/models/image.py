"""Resolved image models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ImageMeta(BaseModel):
    """Dimensions and type of a resolved image."""

    width: int
    height: int
    mime_type: str | None = None


class ImageReference(BaseModel):
    """A resolved image: its URI plus optional metadata."""

    uri: str
    meta: ImageMeta | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return ``{"src": ..., "meta": ...}`` for callers wanting a record."""
        return {
            "src": self.uri,
            "meta": self.meta.model_dump() if self.meta else None,
        }


class SizedImage(BaseModel):
    """An attachment rendered at one size, as reported by the content store."""

    uri: str = Field(..., description="URL of the image at this size")
    width: int = 0
    height: int = 0
    mime_type: str | None = None
    is_intermediate: bool = Field(
        default=False, description="True for a generated size, False for the original"
    )

    def to_reference(self, include_meta: bool = False) -> ImageReference:
        """Wrap as an ImageReference, keeping dimensions only when asked."""
        meta = None
        if include_meta:
            meta = ImageMeta(width=self.width, height=self.height, mime_type=self.mime_type)
        return ImageReference(uri=self.uri, meta=meta)
