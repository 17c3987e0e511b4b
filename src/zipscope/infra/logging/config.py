from __future__ import annotations

"""
Logging Configuration Model.

Immutable settings consumed by configure_logging() and the map from level
names to the numeric constants of the logging module.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging subsystem settings.

    Attributes:
        level: Minimum severity captured.
        console: Emit to stderr.
        log_file: Optional path of the rotating log file.
        max_bytes: Rollover threshold per log segment.
        backup_count: Rotated segments kept on disk.
        console_fmt: Terminal record format.
        file_fmt: File record format.
        datefmt: Timestamp format for file records.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024
    backup_count: int = 3

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
