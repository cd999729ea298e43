"""Tools to read and change the block editor settings."""

from typing import Any, Optional

from ..config import SettingsError
from ..storage.settings_store import SettingsStore


def get_settings(storage_path: Optional[str] = None) -> dict:
    """Get the current settings, defaults filled in."""
    store = SettingsStore(storage_path)
    return {
        "settings": store.load().to_dict(),
        "path": str(store.settings_path),
    }


def update_settings(changes: dict[str, Any], storage_path: Optional[str] = None) -> dict:
    """
    Change some settings and keep the rest.

    Args:
        changes: Partial settings, e.g. {"exclude_from_dragging": {"h1": false}}
        storage_path: Custom storage path (defaults to ~/.bloxt)

    Returns:
        Dict with the complete saved settings
    """
    store = SettingsStore(storage_path)
    try:
        settings = store.update(changes)
    except SettingsError as e:
        return {"error": str(e)}
    return {"success": True, "settings": settings.to_dict()}


def reset_settings(storage_path: Optional[str] = None) -> dict:
    """Restore the default settings."""
    settings = SettingsStore(storage_path).reset()
    return {"success": True, "settings": settings.to_dict()}
