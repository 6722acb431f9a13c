"""Settings storage for defaults that are not given on the command line."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


SETTINGS_PATH = Path(
    os.environ.get(
        "BCRM_SETTINGS_PATH",
        Path.home() / ".config" / "bcrm" / "settings.json",
    )
)

# Default values - use these constants instead of hardcoding values elsewhere
DEFAULT_RESIZE_THRESHOLD = "2048M"

DEFAULT_SETTINGS: dict[str, Any] = {
    "resize_threshold": DEFAULT_RESIZE_THRESHOLD,
    "log_dir": os.environ.get("BCRM_LOG_DIR"),
}

# Accepted JSON types per known key; other values keep the default
SETTING_TYPES: dict[str, tuple[type, ...]] = {
    "resize_threshold": (str,),
    "log_dir": (str, type(None)),
}


@dataclass
class SettingsStore:
    values: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_SETTINGS))
    path: Path | None = None

    def get(self, key: str, default: Any | None = None) -> Any:
        return self.values.get(key, default)

    def get_path(self, key: str) -> Path | None:
        value = self.values.get(key)
        if not value:
            return None
        return Path(value).expanduser()

    def describe(self, key: str) -> str:
        """Name a setting for error messages, e.g. ``settings.json: log_dir``."""
        return f"{self.path or 'settings'}: {key}"


def _accepted(key: str, value: Any) -> bool:
    expected = SETTING_TYPES.get(key)
    return expected is None or isinstance(value, expected)


def load_settings(path: Path | None = None) -> SettingsStore:
    """Load settings from ``path`` merged over the defaults.

    A missing, unreadable or malformed file yields the defaults, and so does
    any known key whose value has the wrong JSON type.
    """
    path = path or SETTINGS_PATH
    store = SettingsStore()
    if not path.exists():
        return store
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return store
    if isinstance(data, dict):
        store.path = path
        store.values.update(
            (key, value) for key, value in data.items() if _accepted(key, value)
        )
    return store
