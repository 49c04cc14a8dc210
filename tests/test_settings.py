"""
Tests for JSON settings persistence.
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from puzzle_ai.settings import DEFAULT_SETTINGS, load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "config.json")
    assert settings == DEFAULT_SETTINGS
    assert settings is not DEFAULT_SETTINGS


def test_round_trip(tmp_path):
    path = tmp_path / "config.json"
    settings = dict(DEFAULT_SETTINGS, strategy_name="cycle", cache_capacity=7)
    save_settings(settings, path)

    assert load_settings(path) == settings


def test_missing_keys_are_filled_from_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"eviction_policy": "lru"}), encoding="utf-8")

    settings = load_settings(path)
    assert settings["eviction_policy"] == "lru"
    assert settings["max_iterations"] == DEFAULT_SETTINGS["max_iterations"]


def test_invalid_json_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_non_object_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_settings(path) == DEFAULT_SETTINGS


def test_wrongly_typed_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "cache_capacity": "lots",
        "timeout_sec": 5,
        "debug_enabled": 1,
        "max_iterations": True,
        "theme": "dark",
    }), encoding="utf-8")

    settings = load_settings(path)

    assert settings["cache_capacity"] == DEFAULT_SETTINGS["cache_capacity"]
    assert settings["timeout_sec"] == 5
    assert settings["debug_enabled"] is False
    assert settings["max_iterations"] == DEFAULT_SETTINGS["max_iterations"]
    assert settings["theme"] == "dark"
