from __future__ import annotations

"""
Unit tests for human-readable size formatting.
"""

import pytest

from zipscope.utils.size_format import format_size


@pytest.mark.parametrize("num_bytes, expected", [
    (0, "0 B"),
    (None, "0 B"),
    (1, "1 B"),
    (1023, "1023 B"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (1024 * 1024, "1 MB"),
    (123456789, "118 MB"),
    (3 * 1024 ** 3, "3 GB"),
    (1024 ** 4, "1 TB"),
    (1024 ** 5, "1 PB"),
])
def test_format_size_default_precision(num_bytes, expected) -> None:
    assert format_size(num_bytes) == expected


def test_format_size_caps_at_largest_unit() -> None:
    assert format_size(2048 * 1024 ** 5) == "2050 PB"


def test_format_size_custom_precision() -> None:
    assert format_size(1234567, precision=5) == "1.1774 MB"
    assert format_size(1234567, precision=1) == "1 MB"


def test_format_size_carries_into_next_unit() -> None:
    """A value that rounds up to 1024 of a unit is shown in the next unit."""
    almost_one_mb = 1024 * 1024 - 1
    assert format_size(almost_one_mb, precision=4) == "1 MB"


def test_format_size_rejects_negative() -> None:
    with pytest.raises(ValueError):
        format_size(-1)


def test_format_size_rejects_zero_precision() -> None:
    with pytest.raises(ValueError):
        format_size(10, precision=0)
