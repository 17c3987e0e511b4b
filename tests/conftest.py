from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Builders for in-memory zip archives and raw entry lists.
3. A complete configuration dictionary shared by unit tests.
"""

import io
import os
import sys
import zipfile
from typing import Any, Callable, Dict, List, Tuple, Union

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from zipscope.domain.tree_models import RawEntry  # noqa: E402

ZipMember = Tuple[str, Union[bytes, None]]


def build_zip_bytes(members: List[ZipMember]) -> bytes:
    """
    Create zip bytes from (name, payload) pairs in the given order.

    A payload of None writes an explicit directory entry; names ending in
    '/' are expected for those.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, payload in members:
            if payload is None:
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, payload)
    return buffer.getvalue()


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def file_entry() -> Callable[..., RawEntry]:
    """Factory for leaf RawEntry records: file_entry(path, size=0, compressed=0)."""
    def make(path: str, size: int = 0, compressed: int = 0) -> RawEntry:
        return RawEntry(path=path, is_directory=False, raw_size=size, compressed_size=compressed)
    return make


@pytest.fixture
def dir_entry() -> Callable[[str], RawEntry]:
    """Factory for explicit directory RawEntry records."""
    def make(path: str) -> RawEntry:
        return RawEntry(path=path, is_directory=True)
    return make


@pytest.fixture
def zip_builder() -> Callable[[List[ZipMember]], bytes]:
    """Expose build_zip_bytes to tests as a fixture."""
    return build_zip_bytes


@pytest.fixture
def sample_zip_bytes() -> bytes:
    """
    Archive with explicit and implicit folders, listed out of order.

    Structure:
    docs/
      guide.md
    src/
      pkg/
        core.py
        util.py
      main.py
    README.md
    """
    return build_zip_bytes([
        ("src/pkg/util.py", b"def util():\n    return 1\n"),
        ("README.md", b"# Sample\n"),
        ("docs/", None),
        ("src/main.py", b"print('hello')\n"),
        ("docs/guide.md", b"guide " * 50),
        ("src/pkg/core.py", b"x = 1\n" * 200),
    ])


@pytest.fixture
def sample_zip_file(tmp_path: Any, sample_zip_bytes: bytes) -> Any:
    """Write the sample archive to disk and return its path."""
    path = tmp_path / "sample.zip"
    path.write_bytes(sample_zip_bytes)
    return path


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Mirrors 'zipscope.domain.config.get_default_config'.
    """
    return {
        "input_path": "",
        "extract_dir": "",
        "temp_dir": "",
        "sort_case_sensitive": False,
        "sort_locale_aware": False,
        "size_precision": 3,
        "date_format": "%Y-%m-%d %H:%M:%S",
        "show_sizes": True,
        "print_tree": False,
        "cache_content": True,
        "network_timeout": 10,
        "max_download_bytes": 1024 * 1024,
    }
