"""Settings storage and retrieval."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..config import BloxtSettings, DEFAULT_SETTINGS, default_storage_path, merge_settings

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


class SettingsStore:
    """Manages the persisted block editor settings."""

    def __init__(self, base_path: Optional[str] = None):
        if base_path:
            self.base_path = Path(base_path)
        else:
            self.base_path = default_storage_path()
        self.base_path.mkdir(parents=True, exist_ok=True)

    @property
    def settings_path(self) -> Path:
        return self.base_path / SETTINGS_FILENAME

    def load(self) -> BloxtSettings:
        """
        Load settings, filling any missing fields from the defaults.

        A missing file yields the defaults. An unreadable or invalid file is
        logged and also yields the defaults.
        """
        if not self.settings_path.exists():
            return merge_settings(None)

        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings file must contain a JSON object")
            return merge_settings(data)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring invalid settings file %s: %s", self.settings_path, e)
            return merge_settings(None)

    def save(self, settings: BloxtSettings) -> BloxtSettings:
        """Write the complete settings to disk."""
        with open(self.settings_path, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)
        logger.info("Saved settings to %s", self.settings_path)
        return settings

    def update(self, changes: dict[str, Any]) -> BloxtSettings:
        """Apply a partial change on top of the stored settings and save."""
        settings = merge_settings(changes, base=self.load())
        return self.save(settings)

    def reset(self) -> BloxtSettings:
        """Restore the defaults."""
        return self.save(merge_settings(None, base=DEFAULT_SETTINGS))
