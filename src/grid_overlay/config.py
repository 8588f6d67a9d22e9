"""Picker configuration loaded from JSON.

Lookup order for the config file:

1. An explicit path
2. The ``GRID_OVERLAY_CONFIG`` environment variable
3. ``~/.config/grid-overlay/config.json`` (optional; defaults when absent)

Example::

    {
      "colors": ["#000000", "#FF0000", "navy"],
      "columns": 15,
      "position_mode": "fixed",
      "settle_delay": 0.02,
      "editables": {"title": ["#FF0000", "#00FF00"], "footer": []}
    }

A context listed in ``editables`` with an empty list gets no picker.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from grid_overlay.core.constants import COLUMNS_PER_ROW, DEFAULT_COLORS, PREPARE_INTERVAL, STYLE_SETTLE_DELAY
from grid_overlay.core.element import PositionMode

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "GRID_OVERLAY_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "grid-overlay" / "config.json"


class ConfigError(ValueError):
    """Configuration file is unreadable or malformed."""


@dataclass
class PickerConfig:
    """
    Settings for the color picker.

    Attributes:
        colors: Default palette, also the reference palette for swatch ids
        columns: Cells per overlay row
        position_mode: How overlays are positioned (fixed tracks the viewport)
        settle_delay: Seconds to wait before reading back an applied color
        prepare_interval: Seconds between pre-building overlays
        editables: Per-context palettes, overriding `colors`
    """
    colors: list[str] = field(default_factory=lambda: list(DEFAULT_COLORS))
    columns: int = COLUMNS_PER_ROW
    position_mode: PositionMode = PositionMode.FIXED
    settle_delay: float = STYLE_SETTLE_DELAY
    prepare_interval: float = PREPARE_INTERVAL
    editables: dict[str, list[str]] = field(default_factory=dict)
    source: Optional[Path] = None

    def colors_for(self, context_id: str) -> list[str]:
        """Palette for a context; empty means the context gets no picker."""
        return list(self.editables.get(context_id, self.colors))

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: Optional[Path] = None) -> PickerConfig:
        if not isinstance(data, dict):
            raise ConfigError(f"{source or 'config'}: top level must be an object")

        config = cls(source=source)
        if "colors" in data:
            config.colors = _color_list(data["colors"], "colors")
        if "columns" in data:
            columns = data["columns"]
            if not isinstance(columns, int) or isinstance(columns, bool) or columns < 1:
                raise ConfigError(f"columns must be a positive integer, got {columns!r}")
            config.columns = columns
        if "position_mode" in data:
            try:
                config.position_mode = PositionMode(data["position_mode"])
            except ValueError as e:
                raise ConfigError(f"unknown position_mode {data['position_mode']!r}") from e
        for name in ("settle_delay", "prepare_interval"):
            if name in data:
                value = data[name]
                if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                    raise ConfigError(f"{name} must be a non-negative number, got {value!r}")
                setattr(config, name, float(value))
        if "editables" in data:
            editables = data["editables"]
            if not isinstance(editables, dict):
                raise ConfigError("editables must map context ids to color lists")
            config.editables = {
                str(key): _color_list(value, f"editables.{key}")
                for key, value in editables.items()
            }
        return config

    def to_dict(self) -> dict[str, Any]:
        return {
            "colors": list(self.colors),
            "columns": self.columns,
            "position_mode": self.position_mode.value,
            "settle_delay": self.settle_delay,
            "prepare_interval": self.prepare_interval,
            "editables": {key: list(value) for key, value in self.editables.items()},
        }


def _color_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{name} must be a list of color strings")
    return list(value)


def resolve_config_path(path: Optional[Path] = None) -> tuple[Path, bool]:
    """Config path to read, and whether it was asked for explicitly."""
    if path is not None:
        return Path(path).expanduser(), True
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path).expanduser(), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Optional[Path] = None) -> PickerConfig:
    """
    Load picker configuration.

    Raises:
        ConfigError: If an explicitly requested file is missing, or any
            file found cannot be read or parsed
    """
    config_path, explicit = resolve_config_path(path)
    if not config_path.exists():
        if explicit:
            raise ConfigError(f"config file not found: {config_path}")
        logger.debug("No config at %s, using defaults", config_path)
        return PickerConfig()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{config_path}: invalid JSON ({e})") from e
    except OSError as e:
        raise ConfigError(f"{config_path}: {e}") from e

    config = PickerConfig.from_dict(data, source=config_path)
    logger.info("Loaded picker config from %s", config_path)
    return config


def save_config(config: PickerConfig, path: Path) -> None:
    """Write config as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2)
