from __future__ import annotations

"""
Domain Constants.

Centralized application-wide constants: versioning, size units and
display defaults shared by the tree builder, aggregator and interfaces.
"""

from typing import Tuple

APP_NAME = "ZipScope"
APP_VERSION = "1.0.0"
CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# TREE PRESENTATION
# -----------------------------------------------------------------------------

PATH_SEPARATOR = "/"

# Binary magnitudes, 1 KB == 1024 B
SIZE_UNITS: Tuple[str, ...] = ("B", "KB", "MB", "GB", "TB", "PB")
SIZE_STEP = 1024
DEFAULT_SIZE_PRECISION = 3

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# -----------------------------------------------------------------------------
# SOURCES
# -----------------------------------------------------------------------------

REMOTE_SCHEMES: Tuple[str, ...] = ("http://", "https://")
DEFAULT_NETWORK_TIMEOUT = 10
DEFAULT_MAX_DOWNLOAD_BYTES = 512 * 1024 * 1024
TEMP_WORKSPACE_PREFIX = "zipscope."
