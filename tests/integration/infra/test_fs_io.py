from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution,
safe extraction targets and byte I/O helpers.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from zipscope.domain.errors import ArchiveSourceError, UnsafeEntryPathError
from zipscope.infra.fs import (
    create_temp_workspace,
    get_user_data_dir,
    normalize_path,
    read_file_bytes,
    remove_tree,
    resolve_inside,
    safe_mkdir,
    write_file_bytes,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "ZipScope" in path


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.zipscope on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.zipscope")


def test_normalize_path_expansion() -> None:
    """TC-02: Verify expansion of environment variables and blank fallback."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())

    assert normalize_path("   ", fallback="/base") == os.path.abspath("/base")


def test_resolve_inside_accepts_nested(tmp_path: Path) -> None:
    target = resolve_inside(str(tmp_path), "a/b/c.txt")
    assert target == os.path.join(str(tmp_path), "a", "b", "c.txt")


@pytest.mark.parametrize("rel", ["../evil.txt", "a/../../evil.txt", "", "a/.."])
def test_resolve_inside_rejects_escapes(tmp_path: Path, rel: str) -> None:
    """TC-03: Paths resolving outside or onto the base are refused."""
    with pytest.raises(UnsafeEntryPathError):
        resolve_inside(str(tmp_path), rel)

# -----------------------------------------------------------------------------
# WORKSPACE TESTS
# -----------------------------------------------------------------------------

def test_create_temp_workspace_is_lazy(tmp_path: Path) -> None:
    path = create_temp_workspace(str(tmp_path))

    assert os.path.basename(path).startswith("zipscope.")
    assert os.path.dirname(path) == str(tmp_path)
    assert not os.path.exists(path)


def test_remove_tree(tmp_path: Path) -> None:
    victim = tmp_path / "ws"
    (victim / "nested").mkdir(parents=True)
    (victim / "nested" / "f.txt").write_text("x")

    assert remove_tree(str(victim)) is True
    assert not victim.exists()
    assert remove_tree(str(victim)) is False


def test_safe_mkdir_success(tmp_path: Path) -> None:
    ok, err = safe_mkdir(str(tmp_path / "a" / "b"))
    assert ok is True
    assert err is None


def test_safe_mkdir_failure(tmp_path: Path) -> None:
    with patch("os.makedirs", side_effect=PermissionError("Access Denied")):
        ok, err = safe_mkdir(str(tmp_path / "locked"))
    assert ok is False
    assert "Access Denied" in err

# -----------------------------------------------------------------------------
# BYTE I/O TESTS
# -----------------------------------------------------------------------------

def test_write_and_read_bytes(tmp_path: Path) -> None:
    path = tmp_path / "deep" / "dir" / "blob.bin"

    write_file_bytes(str(path), b"\x00\x01")

    assert read_file_bytes(str(path)) == b"\x00\x01"


def test_read_missing_file_raises_source_error(tmp_path: Path) -> None:
    with pytest.raises(ArchiveSourceError):
        read_file_bytes(str(tmp_path / "missing.zip"))
