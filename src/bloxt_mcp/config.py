"""Block editor settings and their defaults."""

import os
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Optional


class SettingsError(ValueError):
    """Raised when a settings mapping is incomplete or malformed."""


@dataclass
class ExcludeFromDragging:
    """Per block type drag exclusion. True means the block cannot be dragged."""
    h1: bool = True
    h2: bool = False
    h3: bool = False
    h4: bool = False
    h5: bool = False
    h6: bool = False
    # Front-matter is never turned into a block, so this flag has no effect.
    frontmatter: bool = True
    paragraphs: bool = False

    def header_excluded(self, level: int) -> bool:
        return getattr(self, f"h{level}")


@dataclass
class BloxtSettings:
    """Complete configuration consumed by the hierarchy builder and tools."""
    enabled: bool = True
    enable_nested_blocks: bool = True
    exclude_from_dragging: ExcludeFromDragging = field(default_factory=ExcludeFromDragging)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BloxtSettings":
        """
        Build settings from a complete mapping.

        Every field must be present and boolean. Use merge_settings() to fill
        gaps from the defaults first.
        """
        _check_keys(data, {f.name for f in fields(cls)}, "settings")
        exclude = data["exclude_from_dragging"]
        if not isinstance(exclude, dict):
            raise SettingsError("exclude_from_dragging must be an object")
        _check_keys(exclude, {f.name for f in fields(ExcludeFromDragging)}, "exclude_from_dragging")

        for key in ("enabled", "enable_nested_blocks"):
            _check_bool(key, data[key])
        for key, value in exclude.items():
            _check_bool(f"exclude_from_dragging.{key}", value)

        return cls(
            enabled=data["enabled"],
            enable_nested_blocks=data["enable_nested_blocks"],
            exclude_from_dragging=ExcludeFromDragging(**exclude),
        )


DEFAULT_SETTINGS = BloxtSettings()


def _check_keys(data: dict, expected: set[str], where: str) -> None:
    missing = expected - set(data)
    unknown = set(data) - expected
    if missing:
        raise SettingsError(f"Missing {where} keys: {', '.join(sorted(missing))}")
    if unknown:
        raise SettingsError(f"Unknown {where} keys: {', '.join(sorted(unknown))}")


def _check_bool(key: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise SettingsError(f"{key} must be a boolean, got {type(value).__name__}")


def merge_settings(overrides: Optional[dict[str, Any]], base: Optional[BloxtSettings] = None) -> BloxtSettings:
    """
    Fill a partial settings mapping from a base (the defaults unless given).

    Nested exclude_from_dragging entries are merged key by key. The result is
    validated strictly, so unknown keys and non-bool values still fail.
    """
    merged = (base or DEFAULT_SETTINGS).to_dict()
    for key, value in (overrides or {}).items():
        if key == "exclude_from_dragging" and isinstance(value, dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return BloxtSettings.from_dict(merged)


def default_storage_path() -> Path:
    """Storage directory for settings: $BLOXT_HOME or ~/.bloxt."""
    env_path = os.environ.get("BLOXT_HOME")
    if env_path:
        return Path(env_path)
    return Path.home() / ".bloxt"
