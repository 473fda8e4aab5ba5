"""
Configuration management for GridGraph.

Settings are resolved in priority order:
1. Environment variables GRIDGRAPH_<KEY> (a .env file is loaded by app.py)
2. config.json next to the project root
3. DEFAULT_CONFIG

Values are coerced to the type of their default.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from gridgraph.paths import get_config_path, get_default_state_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "GRIDGRAPH_"

DEFAULT_CONFIG: Dict[str, Any] = {
    "grid_size": 48,
    "frame_rate": 60,
    "save_interval_ticks": 60,
    "monotonic_ids": True,
    "min_radius": 1.0,
    "storage_backend": "file",
    "storage_path": "",  # empty -> paths.get_default_state_path()
    "canvas_width": 1280,
    "canvas_height": 800,
    "port": 8080,
}


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from config.json."""
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                if isinstance(data, dict):
                    return data
                logger.warning(f"Ignoring {config_path}: expected a JSON object")
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
    return {}


def _coerce(key: str, value: Any, default: Any) -> Any:
    """Coerce a raw value (often an env string) to the type of its default."""
    try:
        if isinstance(default, bool):
            if isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes", "on")
            return bool(value)
        if isinstance(default, int):
            return int(value)
        if isinstance(default, float):
            return float(value)
        return str(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value {value!r} for setting '{key}', using default {default!r}")
        return default


def get_setting(key: str, config: Optional[dict] = None) -> Any:
    """
    Get a single setting.

    Priority:
    1. Environment variable GRIDGRAPH_<KEY>
    2. Stored in config.json (or the passed config dict)
    3. DEFAULT_CONFIG
    """
    if key not in DEFAULT_CONFIG:
        raise KeyError(f"Unknown setting: {key}")
    default = DEFAULT_CONFIG[key]

    env_value = os.environ.get(ENV_PREFIX + key.upper())
    if env_value is not None and env_value != "":
        return _coerce(key, env_value, default)

    if config is None:
        config = load_config()
    if key in config:
        return _coerce(key, config[key], default)
    return default


def get_settings(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Resolve every setting at once (reads config.json a single time)."""
    config = load_config(config_path)
    settings = {key: get_setting(key, config) for key in DEFAULT_CONFIG}
    if not settings["storage_path"]:
        settings["storage_path"] = str(get_default_state_path())
    return settings
