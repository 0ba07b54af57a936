"""Image size definitions and validation."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


class NamedSize(str, Enum):
    """Standard named image sizes."""

    THUMBNAIL = "thumbnail"
    MEDIUM = "medium"
    LARGE = "large"
    FULL = "full"

    @classmethod
    def all_names(cls) -> list[str]:
        """Return all preset names as strings."""
        return [size.value for size in cls]


class ExplicitSize(BaseModel):
    """A custom width/height pair."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(..., ge=0, description="Target width in pixels")
    height: int = Field(..., ge=0, description="Target height in pixels")

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


SizeSpec = Union[NamedSize, ExplicitSize]


def is_named_size(value: Any) -> bool:
    """True if value is one of the preset size names."""
    if not isinstance(value, str):
        return False
    return value in NamedSize.all_names()


def _dimension(value: Any, name: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)


def is_acceptable(value: Any) -> bool:
    """Check whether value can be used as a size.

    Acceptable sizes are the preset names (full, large, medium, thumbnail)
    or anything carrying both a ``width`` and a ``height``, e.g.::

        {"width": 150, "height": 150}
    """
    if is_named_size(value):
        return True
    if isinstance(value, str):
        return False
    return _dimension(value, "width") is not None and _dimension(value, "height") is not None


def parse_size(value: Any) -> SizeSpec:
    """Convert a raw size value into a SizeSpec.

    Accepts NamedSize/ExplicitSize instances, preset names, ``"WxH"``
    strings and width/height mappings or objects.

    Raises:
        ValueError: If the value is not an acceptable size.
    """
    if isinstance(value, (NamedSize, ExplicitSize)):
        return value

    if isinstance(value, str):
        text = value.strip().lower()
        if is_named_size(text):
            return NamedSize(text)
        width, sep, height = text.partition("x")
        if sep and width.isdigit() and height.isdigit():
            return ExplicitSize(width=int(width), height=int(height))
        raise ValueError(f"Unknown image size: {value!r}")

    if is_acceptable(value):
        return ExplicitSize(
            width=int(_dimension(value, "width")),
            height=int(_dimension(value, "height")),
        )

    raise ValueError(f"Image size needs both width and height: {value!r}")


def size_prefix(size: SizeSpec) -> str:
    """File name prefix for a resized variant, e.g. ``medium`` or ``100x100``."""
    if isinstance(size, ExplicitSize):
        return f"{size.width}x{size.height}"
    return NamedSize(size).value
