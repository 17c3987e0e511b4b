from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform path resolution, temp workspace management and
small I/O helpers used by the archive session. Acts as an abstraction over
the 'os' module to ensure uniform behavior across Windows and Unix-like
systems.
"""

import os
import shutil
import tempfile
import time
from typing import Optional, Tuple

from zipscope.domain.constants import APP_NAME, TEMP_WORKSPACE_PREFIX
from zipscope.domain.errors import ArchiveSourceError, UnsafeEntryPathError

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = APP_NAME
UNIX_APP_DIR_NAME = ".zipscope"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/ZipScope
    - Linux/Mac: ~/.zipscope

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def resolve_inside(base_dir: str, rel_path: str) -> str:
    """
    Join an archive-relative path onto base_dir, refusing escapes.

    Args:
        base_dir: Directory that must contain the result.
        rel_path: '/'-delimited archive path.

    Returns:
        str: Absolute destination path.

    Raises:
        UnsafeEntryPathError: If the path resolves outside base_dir.
    """
    base = os.path.abspath(base_dir)
    target = os.path.abspath(os.path.join(base, *rel_path.split("/")))
    if os.path.commonpath([base, target]) != base or target == base:
        raise UnsafeEntryPathError(f"Entry path '{rel_path}' escapes '{base}'.")
    return target

# -----------------------------------------------------------------------------
# WORKSPACE API
# -----------------------------------------------------------------------------

def create_temp_workspace(root: Optional[str] = None) -> str:
    """
    Compute a unique per-session workspace path ('<tmp>/zipscope.<ms>').

    The directory itself is created lazily by the first extraction.
    """
    base = root or tempfile.gettempdir()
    return os.path.join(base, f"{TEMP_WORKSPACE_PREFIX}{int(time.time() * 1000)}")


def remove_tree(path: str) -> bool:
    """Delete a directory tree if it exists. Returns True when removed."""
    if not path or not os.path.isdir(path):
        return False
    shutil.rmtree(path, ignore_errors=True)
    return True


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)

# -----------------------------------------------------------------------------
# BYTE I/O
# -----------------------------------------------------------------------------

def read_file_bytes(path: str) -> bytes:
    """Read a whole local file, mapping OS failures to ArchiveSourceError."""
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ArchiveSourceError(f"Cannot read archive '{path}': {e}") from e


def write_file_bytes(path: str, data: bytes) -> None:
    """Write bytes to path, creating parent directories as needed."""
    parent = os.path.dirname(os.path.abspath(path))
    ok, err = safe_mkdir(parent)
    if not ok:
        raise ArchiveSourceError(f"Cannot create directory '{parent}': {err}")
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise ArchiveSourceError(f"Cannot write '{path}': {e}") from e
