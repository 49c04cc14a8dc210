"""
Engine settings backed by a JSON file.

The file holds tuning knobs for PuzzleAnalyzer.from_settings(): which
search strategy to use, cache size and eviction policy, and the search
budget. Unknown keys are kept so callers can store their own values.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

SETTINGS_FILE = Path("config.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "strategy_name": "astar",
    "cache_capacity": 100,
    "eviction_policy": "fifo",
    "max_iterations": 5000,
    "timeout_sec": 2.0,
    "yield_every": 256,
}


def _value_fits(default: Any, value: Any) -> bool:
    """True if value has the same kind as the default (ints allowed for floats)."""
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    if isinstance(default, float):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, type(default))


def load_settings(path: Path = SETTINGS_FILE) -> Dict[str, Any]:
    """
    Read settings, filling gaps from DEFAULT_SETTINGS.

    A missing or unreadable file gives the defaults. A known key whose
    value has the wrong type falls back to its default with a warning.

    Args:
        path: Settings file

    Returns:
        New settings dictionary
    """
    settings = DEFAULT_SETTINGS.copy()
    if not path.exists():
        logger.debug(f"No settings at {path}, using defaults")
        return settings

    try:
        with open(path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Cannot read settings {path}: {e}, using defaults")
        return settings

    if not isinstance(stored, dict):
        logger.warning(f"Settings {path} is not a JSON object, using defaults")
        return settings

    for key, value in stored.items():
        default = DEFAULT_SETTINGS.get(key)
        if default is not None and not _value_fits(default, value):
            logger.warning(f"Ignoring setting {key}={value!r}, keeping {default!r}")
            continue
        settings[key] = value

    logger.debug(f"Settings loaded from {path}: {settings}")
    return settings


def save_settings(settings: Dict[str, Any], path: Path = SETTINGS_FILE) -> None:
    """Write settings as indented JSON. Failures are logged, not raised."""
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved to {path}")
    except IOError as e:
        logger.error(f"Failed to save settings {path}: {e}")
