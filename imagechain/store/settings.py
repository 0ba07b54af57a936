"""Placeholder settings stores."""

from __future__ import annotations

from pathlib import Path

import yaml

from imagechain.store.base import SettingsStore

PLACEHOLDER_SETTING = "image_placeholder"


class InMemorySettingsStore(SettingsStore):
    """Settings held in memory; the placeholder may be changed at any time."""

    def __init__(self, placeholder: str | None = None) -> None:
        self.placeholder = placeholder

    def get_placeholder_setting(self) -> str | None:
        return self.placeholder


class YamlSettingsStore(SettingsStore):
    """Settings read from a YAML file.

    The file is read on every call so edits take effect without a restart.
    A missing file means nothing is configured.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def get_placeholder_setting(self) -> str | None:
        if not self.path.exists():
            return None
        with open(self.path) as f:
            data = yaml.safe_load(f) or {}
        value = data.get(PLACEHOLDER_SETTING)
        return str(value) if value else None
