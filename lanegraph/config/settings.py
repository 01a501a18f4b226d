"""
Settings management for lanegraph
"""

import copy
import json
from pathlib import Path
from typing import Any

from lanegraph.constants import (
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_LANE_COLORS,
    DEFAULT_PADDING,
    DEFAULT_ROW_HEIGHT,
    SETTINGS_DIR,
    SETTINGS_FILE,
)


class Settings:
    """Manages layout and rendering settings"""

    DEFAULT_SETTINGS = {
        "layout": {
            "strict_ordering": True,  # Raise on cyclic input instead of dropping commits
        },
        "palette": {
            "colors": list(DEFAULT_LANE_COLORS),
        },
        "geometry": {
            "column_width": DEFAULT_COLUMN_WIDTH,
            "row_height": DEFAULT_ROW_HEIGHT,
            "padding": DEFAULT_PADDING,
        },
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path.home() / SETTINGS_DIR / SETTINGS_FILE

        self.config_path = config_path
        self.settings: dict[str, Any] = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_settings(base[key], value)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'geometry.row_height')"""
        value: Any = self.settings
        for part in path.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def get_strict_ordering(self) -> bool:
        return bool(self.get("layout.strict_ordering", True))

    def get_lane_colors(self) -> list[str]:
        """Get the lane palette. Falls back to the defaults if empty."""
        colors = self.get("palette.colors") or DEFAULT_LANE_COLORS
        return [str(c) for c in colors]
