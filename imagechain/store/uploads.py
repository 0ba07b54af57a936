"""Local filesystem upload storage."""

from __future__ import annotations

from pathlib import Path

from imagechain.store.base import UploadStorage


class LocalUploadStorage(UploadStorage):
    """Upload directory on local disk, served under a base URL."""

    def __init__(self, directory: str | Path, url: str) -> None:
        self.directory = Path(directory)
        self.url = url.rstrip("/")

    def base_dir(self) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def base_url(self) -> str:
        return self.url
