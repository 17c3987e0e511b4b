from __future__ import annotations

"""
Configuration Validation Stage.

Gatekeeper between untrusted configuration sources (CLI, config.json) and
the archive pipeline. Coerces types, normalizes values and injects
defaults so downstream code can index the dictionary without checks.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from zipscope.domain.config import get_default_config

logger = logging.getLogger(__name__)

_STRING_FIELDS = ("input_path", "extract_dir", "temp_dir", "date_format")

_BOOL_FIELDS = (
    "sort_case_sensitive",
    "sort_locale_aware",
    "show_sizes",
    "print_tree",
    "cache_content",
)

# field -> minimum accepted value
_INT_FIELDS: Dict[str, int] = {
    "size_precision": 1,
    "network_timeout": 1,
    "max_download_bytes": 1,
}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: Raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized config and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in _STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in _BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field, minimum in _INT_FIELDS.items():
        merged[field] = _as_int(
            merged.get(field), defaults[field], field, minimum, warnings, strict
        )

    # A format without directives renders every timestamp identically
    if "%" not in merged["date_format"]:
        msg = f"Field 'date_format' has no strftime directives: '{merged['date_format']}'."
        if strict:
            raise ValueError(msg)
        warnings.append(msg)

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and trim string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce numbers and human-friendly keywords into booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(
        value: Any,
        fallback: int,
        field: str,
        minimum: int,
        warnings: List[str],
        strict: bool,
) -> int:
    """Coerce numeric strings to int and enforce a lower bound."""
    if value is None:
        return fallback

    parsed: Optional[int] = None
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    elif not strict and isinstance(value, str) and value.strip().lstrip("-").isdigit():
        parsed = int(value.strip())
        warnings.append(f"Field '{field}' converted from '{value}' to {parsed}.")

    if parsed is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if parsed < minimum:
        msg = f"Field '{field}' must be >= {minimum}, received {parsed}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    return parsed
