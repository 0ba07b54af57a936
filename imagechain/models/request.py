"""Resolution request models."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from imagechain.models.size import SizeSpec, parse_size

logger = logging.getLogger(__name__)


class PriorityOverride(str, Enum):
    """Which single source to consult instead of the priority cascade."""

    FEATURED = "featured"
    META_KEY = "meta_key"
    PAGE_BUILDER_DATA = "page_builder_data"


class PageBuilderRef(BaseModel):
    """Location of an image field inside page builder data."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    part: str = ""
    meta_key: str = ""
    content_item_id: int = 0
    area: str = ""

    @property
    def is_complete(self) -> bool:
        """All four fields must be set before the field can be read."""
        return bool(self.part and self.meta_key and self.content_item_id and self.area)


class ResolutionRequest(BaseModel):
    """Parameters for one image resolution attempt.

    ``size``, ``placeholder_size`` and ``content_item_id`` may be left unset;
    the resolution chain fills them from its config and the content store's
    current rendering item (see ``with_defaults``).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    size: SizeSpec | None = None
    content_item_id: int | None = None
    attachment_id: int | None = None
    include_meta: bool = False
    meta_key: str | list[str] | None = None
    page_builder_ref: PageBuilderRef | None = None
    priority_override: PriorityOverride | None = None
    placeholder_size: SizeSpec | None = None

    @field_validator("size", "placeholder_size", mode="before")
    @classmethod
    def _parse_size(cls, value: Any) -> Any:
        if value is None:
            return None
        return parse_size(value)

    @field_validator("priority_override", mode="before")
    @classmethod
    def _coerce_override(cls, value: Any) -> Any:
        if value is None or value == "" or isinstance(value, PriorityOverride):
            return value or None
        try:
            return PriorityOverride(value)
        except ValueError:
            logger.warning(f"Unknown priority override {value!r}, using featured image")
            return PriorityOverride.FEATURED

    @property
    def meta_keys(self) -> list[str]:
        """Meta keys as an ordered list."""
        if not self.meta_key:
            return []
        if isinstance(self.meta_key, str):
            return [self.meta_key]
        return list(self.meta_key)

    def with_defaults(
        self,
        size: SizeSpec,
        placeholder_size: SizeSpec,
        content_item_id: int | None,
    ) -> ResolutionRequest:
        """Return a copy with unset size and item fields filled in."""
        updates: dict[str, Any] = {}
        if self.size is None:
            updates["size"] = size
        if self.placeholder_size is None:
            updates["placeholder_size"] = placeholder_size
        if self.content_item_id is None and content_item_id is not None:
            updates["content_item_id"] = content_item_id
        if not updates:
            return self
        return self.model_copy(update=updates)
