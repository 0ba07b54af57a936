"""URL helpers for finding images in stored values and markup."""

from __future__ import annotations

import posixpath
from urllib.parse import urlparse

from bs4 import BeautifulSoup

DEFAULT_IMAGE_EXTENSIONS = ("jpg", "jpeg", "gif", "png")


def clean_url(value: str | None) -> str:
    """Return value as a usable http(s) URL, or an empty string."""
    if not value:
        return ""
    url = str(value).strip()
    parsed = urlparse(url)
    if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
        return ""
    return url


def is_image_file(url: str | None, file_types: list[str] | tuple[str, ...] | None = None) -> bool:
    """Check if a URL points at an image file by its path extension.

    Args:
        url: URL to check. Query string and fragment are ignored.
        file_types: Allowed extensions (default jpg, jpeg, gif, png).
    """
    if not url:
        return False

    allowed = {ext.lower().lstrip(".") for ext in (file_types or DEFAULT_IMAGE_EXTENSIONS)}
    path = urlparse(url).path
    ext = posixpath.splitext(posixpath.basename(path))[1].lstrip(".").lower()
    return bool(ext) and ext in allowed


def first_image_src(markup: str | None) -> str | None:
    """Return the src of the first <img> tag in markup that has one."""
    if not markup:
        return None
    soup = BeautifulSoup(markup, "html.parser")
    img = soup.find("img", src=True)
    if img is None:
        return None
    return img["src"].strip() or None
