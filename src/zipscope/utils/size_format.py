from __future__ import annotations

"""
Human-readable Byte Sizes.

Formats byte counts with binary magnitudes (1 KB == 1024 B), rounded to
a fixed number of significant digits.
"""

from typing import Optional

from zipscope.domain.constants import DEFAULT_SIZE_PRECISION, SIZE_STEP, SIZE_UNITS


def format_size(num_bytes: Optional[float], precision: int = DEFAULT_SIZE_PRECISION) -> str:
    """
    Convert a byte count into a display string such as '1.5 KB'.

    Args:
        num_bytes: Size in bytes. None is treated as zero.
        precision: Number of significant digits kept in the mantissa.

    Returns:
        str: Formatted size with unit suffix.
    """
    value = float(num_bytes or 0)
    if value < 0:
        raise ValueError(f"Size cannot be negative: {num_bytes}")
    if precision < 1:
        raise ValueError(f"Precision must be >= 1, received {precision}")

    unit_index = 0
    while value >= SIZE_STEP and unit_index < len(SIZE_UNITS) - 1:
        value /= SIZE_STEP
        unit_index += 1

    if unit_index == 0:
        return f"{int(value)} {SIZE_UNITS[0]}"

    # Rounding may carry into the next unit (1023.9 KB -> 1024 KB -> 1 MB)
    rounded = _to_precision(value, precision)
    if rounded >= SIZE_STEP and unit_index < len(SIZE_UNITS) - 1:
        rounded = _to_precision(rounded / SIZE_STEP, precision)
        unit_index += 1

    return f"{rounded:g} {SIZE_UNITS[unit_index]}"


def _to_precision(value: float, precision: int) -> float:
    """Round to significant digits, e.g. 1.23456 -> 1.23 for precision 3."""
    if value == 0:
        return 0.0
    return float(f"{value:.{precision}g}")
