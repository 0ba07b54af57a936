"""Collaborator interfaces and reference implementations."""

from imagechain.store.base import ContentStore, SettingsStore, UploadStorage
from imagechain.store.memory import (
    Attachment,
    ContentItem,
    InMemoryContentStore,
    PageBuilderEntry,
)
from imagechain.store.settings import InMemorySettingsStore, YamlSettingsStore
from imagechain.store.uploads import LocalUploadStorage

__all__ = [
    "Attachment",
    "ContentItem",
    "ContentStore",
    "InMemoryContentStore",
    "InMemorySettingsStore",
    "LocalUploadStorage",
    "PageBuilderEntry",
    "SettingsStore",
    "UploadStorage",
    "YamlSettingsStore",
]
