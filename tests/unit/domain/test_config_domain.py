from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Resilience against corrupted config files.
3. Merging of stored values over defaults.
4. Persistence (Save/Load) without touching real user data.
"""

import json
from unittest.mock import patch

import pytest

from zipscope.domain.config import (
    get_default_app_state,
    get_default_config,
    load_app_state,
    load_config,
    save_config,
)
from zipscope.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_DATE_FORMAT


@pytest.fixture
def config_path(tmp_path):
    """Redirect CONFIG_FILE into a temporary directory."""
    path = tmp_path / "ZipScope" / "config.json"
    with patch("zipscope.domain.config.CONFIG_FILE", str(path)):
        yield path


def test_default_config_keys() -> None:
    cfg = get_default_config()

    assert cfg["input_path"] == ""
    assert cfg["sort_case_sensitive"] is False
    assert cfg["size_precision"] == 3
    assert cfg["date_format"] == DEFAULT_DATE_FORMAT
    assert cfg["cache_content"] is True


def test_default_app_state_structure() -> None:
    state = get_default_app_state()

    assert state["version"] == CURRENT_CONFIG_VERSION
    assert state["app_settings"]["log_level"] == "INFO"
    assert state["last_session"] == get_default_config()


def test_load_fresh_state_returns_defaults(config_path) -> None:
    """If no config file exists, it should return the default state structure."""
    assert not config_path.exists()

    state = load_app_state()

    assert state == get_default_app_state()


def test_load_corrupted_file_returns_defaults(config_path) -> None:
    """If JSON is malformed, it should fall back to defaults safely."""
    config_path.parent.mkdir(parents=True)
    config_path.write_text("{ not json", encoding="utf-8")

    state = load_app_state()

    assert state["last_session"] == get_default_config()


def test_load_non_dict_payload_returns_defaults(config_path) -> None:
    config_path.parent.mkdir(parents=True)
    config_path.write_text("[1, 2, 3]", encoding="utf-8")

    assert load_app_state() == get_default_app_state()


def test_stored_values_are_merged_over_defaults(config_path) -> None:
    """Partial files keep their values and gain any missing keys."""
    config_path.parent.mkdir(parents=True)
    config_path.write_text(json.dumps({
        "version": "0.9.0",
        "app_settings": {"log_level": "DEBUG"},
        "last_session": {"size_precision": 5, "input_path": "/data/a.zip"},
    }), encoding="utf-8")

    state = load_app_state()

    assert state["version"] == CURRENT_CONFIG_VERSION
    assert state["app_settings"]["log_level"] == "DEBUG"
    assert state["app_settings"]["log_to_file"] is False
    assert state["last_session"]["size_precision"] == 5
    assert state["last_session"]["show_sizes"] is True


def test_save_and_load_round_trip(config_path) -> None:
    """save_config creates the directory and load_config reads it back."""
    cfg = get_default_config()
    cfg["input_path"] = "archive.zip"
    cfg["sort_locale_aware"] = True

    save_config(cfg)

    assert config_path.exists()
    loaded = load_config()
    assert loaded["input_path"] == "archive.zip"
    assert loaded["sort_locale_aware"] is True

    on_disk = json.loads(config_path.read_text(encoding="utf-8"))
    assert on_disk["version"] == CURRENT_CONFIG_VERSION
