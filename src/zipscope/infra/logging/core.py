from __future__ import annotations

"""
Logging Core Orchestrator.

Owns the lifecycle of the application's logging: a single tagged
QueueHandler on the root logger feeds a QueueListener, which fans records
out to the console and the optional rotating log file. Archive extraction
and tree building log heavily at DEBUG level, so file I/O stays off the
calling thread.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from zipscope.infra.fs import get_user_data_dir
from zipscope.infra.logging.config import _LEVEL_MAP, LoggingConfig
from zipscope.infra.logging.handlers import (
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_zipscope_configured"
_QUEUE_LISTENER_ATTR: str = "_zipscope_queue_listener"

DEFAULT_LOG_FILE_NAME = "zipscope.log"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = DEFAULT_LOG_FILE_NAME) -> str:
    """
    Resolve the persistent log path inside the user data directory.

    Args:
        file_name: Target log filename.

    Returns:
        str: Absolute path of '<user data>/logs/<file_name>'.
    """
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once; later calls are no-ops unless forced.

    Args:
        cfg: Logging subsystem settings.
        force: Tear down our previous handlers and listener and rebuild.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    try:
        if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
            return root

        level_int = _parse_level(cfg.level)
        root.setLevel(level_int)

        _remove_our_handlers(root)
        _stop_existing_listener(root)

        sinks = _build_sinks(cfg, level_int)
        if not sinks:
            return root

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        queue_handler = QueueHandler(log_queue)
        _tag_handler(queue_handler)

        listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
        listener.start()
        root.addHandler(queue_handler)

        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)

        # Flush pending records on interpreter shutdown
        atexit.register(_safe_stop_listener, listener)
        return root

    except Exception:
        return _emergency_console(root)


def shutdown_logging() -> None:
    """Stop the listener and detach our handlers, flushing queued records."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        setattr(root, _CONFIGURED_FLAG_ATTR, False)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger (usually __name__) under the configured root.
    """
    return logging.getLogger(name)


def get_recent_logs(n_lines: int = 100, log_path: Optional[str] = None) -> str:
    """
    Return the last lines of the persistent log file.

    Args:
        n_lines: Maximum number of trailing lines.
        log_path: Explicit log file, defaults to get_default_log_path().

    Returns:
        str: Log tail, or a short notice when the file is missing/unreadable.
    """
    path = log_path or get_default_log_path()
    if not os.path.exists(path):
        return "Log file not found."

    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
        return "".join(lines[-n_lines:])
    except OSError as e:
        return f"Error retrieving logs: {e}"


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _build_sinks(cfg: LoggingConfig, level_int: int) -> List[logging.Handler]:
    """Create the terminal handlers the queue listener dispatches to."""
    sinks: List[logging.Handler] = []

    if cfg.console:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(level_int)
        sh.setFormatter(logging.Formatter(cfg.console_fmt))
        _tag_handler(sh)
        sinks.append(sh)

    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            sinks.append(fh)

    return sinks


def _emergency_console(root: logging.Logger) -> logging.Logger:
    """Fall back to a bare stderr handler when the normal setup fails."""
    try:
        root.setLevel(logging.INFO)
        _remove_our_handlers(root)
        _stop_existing_listener(root)

        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
        _tag_handler(sh)
        root.addHandler(sh)
        root.warning("Logging setup failed. Switched to emergency console.")
    except Exception:
        pass
    return root


def _parse_level(level: str) -> int:
    """Convert a level name to its numeric constant, INFO when unknown."""
    if not level:
        return logging.INFO
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener, tolerating one that was already stopped."""
    if not listener:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
