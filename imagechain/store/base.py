"""Interfaces to the systems hosting image resolution.

The resolver core never talks to a CMS directly. It needs three
collaborators:

1. ContentStore - content items, their meta data and attachments
2. SettingsStore - the configured placeholder image
3. UploadStorage - where resized variants are written and served from
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from imagechain.models.image import SizedImage
    from imagechain.models.size import SizeSpec


class ContentStore(ABC):
    """Read access to content items and their attachments.

    Lookups that find nothing return None (or an empty string for field
    values); they do not raise.
    """

    @abstractmethod
    def get_body(self, item_id: int) -> str | None:
        """Raw body text of a content item, None if the item is unknown."""
        ...

    @abstractmethod
    def get_title(self, item_id: int) -> str:
        """Title of a content item, empty if unknown."""
        ...

    @abstractmethod
    def has_featured_image(self, item_id: int) -> bool:
        ...

    @abstractmethod
    def get_featured_image_id(self, item_id: int) -> int | None:
        ...

    @abstractmethod
    def get_sized_attachment_uri(self, attachment_id: int, size: SizeSpec) -> SizedImage | None:
        """The attachment's image at the given size, None if there is no such attachment."""
        ...

    @abstractmethod
    def get_meta_field(self, item_id: int, key: str) -> str:
        ...

    @abstractmethod
    def get_page_builder_field(self, part: str, key: str, item_id: int, area: str) -> str:
        ...

    @abstractmethod
    def reverse_url_to_attachment_id(self, url: str) -> int | None:
        """Find the attachment whose canonical URL matches ``url``."""
        ...

    @abstractmethod
    def current_rendering_item_id(self) -> int | None:
        """Item being rendered, used when a request names no item."""
        ...


class SettingsStore(ABC):
    """Externally managed settings."""

    @abstractmethod
    def get_placeholder_setting(self) -> str | None:
        """Configured placeholder: an attachment URL or a file path."""
        ...


class UploadStorage(ABC):
    """Writable directory that is also served over HTTP."""

    @abstractmethod
    def base_dir(self) -> Path:
        ...

    @abstractmethod
    def base_url(self) -> str:
        ...

    def url_for(self, path: Path) -> str:
        """Public URL of a file inside ``base_dir``."""
        relative = path.relative_to(self.base_dir()).as_posix()
        return f"{self.base_url().rstrip('/')}/{relative}"
