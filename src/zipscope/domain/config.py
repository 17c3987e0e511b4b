from __future__ import annotations

"""
Configuration Domain Management.

Handles persistent storage of application state and the last session
settings using JSON. Missing keys are filled from defaults on load.
"""

import json
import logging
import os
from typing import Any, Dict

from zipscope.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_DATE_FORMAT,
    DEFAULT_MAX_DOWNLOAD_BYTES,
    DEFAULT_NETWORK_TIMEOUT,
    DEFAULT_SIZE_PRECISION,
)
from zipscope.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE = os.path.join(get_user_data_dir(), "config.json")


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default session configuration.

    Returns:
        Dict[str, Any]: Default values driving the archive pipeline.
    """
    return {
        # Source & Destinations
        "input_path": "",
        "extract_dir": "",
        "temp_dir": "",

        # Sibling Ordering
        "sort_case_sensitive": False,
        "sort_locale_aware": False,

        # Presentation
        "size_precision": DEFAULT_SIZE_PRECISION,
        "date_format": DEFAULT_DATE_FORMAT,
        "show_sizes": True,
        "print_tree": True,

        # Content Access
        "cache_content": True,

        # Network
        "network_timeout": DEFAULT_NETWORK_TIMEOUT,
        "max_download_bytes": DEFAULT_MAX_DOWNLOAD_BYTES,
    }


def get_default_app_state() -> Dict[str, Any]:
    """
    Generate the complete default structure of config.json.

    Returns:
        Dict[str, Any]: Version stamp, global settings and last session.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "app_settings": {
            "log_level": "INFO",
            "log_to_file": False,
        },
        "last_session": get_default_config(),
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_app_state() -> Dict[str, Any]:
    """
    Load application state from disk.

    Returns:
        Dict[str, Any]: The stored state merged over defaults, or the
        defaults when the file is missing or unreadable.
    """
    state = get_default_app_state()

    if not os.path.exists(CONFIG_FILE):
        logger.debug("Config file not found. Returning defaults.")
        return state

    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return state

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return state

    if isinstance(data.get("app_settings"), dict):
        state["app_settings"].update(data["app_settings"])
    if isinstance(data.get("last_session"), dict):
        state["last_session"].update(data["last_session"])

    state["version"] = CURRENT_CONFIG_VERSION
    return state


def save_app_state(state: Dict[str, Any]) -> None:
    """
    Persist application state to disk.

    Args:
        state: The state dictionary to save.
    """
    try:
        os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
        state["version"] = CURRENT_CONFIG_VERSION
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {CONFIG_FILE}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config() -> Dict[str, Any]:
    """Retrieve the last session configuration merged over defaults."""
    state = load_app_state()
    defaults = get_default_config()
    defaults.update(state.get("last_session", {}))
    return defaults


def save_config(config: Dict[str, Any]) -> None:
    """Store config as the 'last_session'."""
    state = load_app_state()
    state["last_session"] = config
    save_app_state(state)
