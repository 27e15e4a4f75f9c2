"""
Financial number helpers for allocation calculations.

All amounts are plain floats. Dollar balances in a household portfolio stay
far inside float64's ~15-16 significant digits, so rounding is applied only
when formatting for export, never inside the calculation.

Precision notes:
- Sums of targets are compared with a tolerance, never for equality
- ``Σ dollars_to_add == contribution`` holds up to float rounding
- Use the provided formatting functions for consistent export precision
"""

import math
from typing import Any

from rebalancer.core.constants import CURRENCY_DECIMALS, PERCENTAGE_DECIMALS

# Common financial values as float constants
ZERO = 0.0
ONE = 1.0
HUNDRED = 100.0


def to_float(value: str | int | float) -> float:
    """Convert various numeric types to float.

    Args:
        value: Numeric value to convert

    Returns:
        Float representation of the value

    Raises:
        ValueError: If a string does not hold a number

    Examples:
        >>> to_float(50000)
        50000.0
        >>> to_float(' 1.5 ')
        1.5
    """
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        return float(value.strip())
    return float(value)


def parse_finite(value: Any) -> float | None:
    """Parse a value into a finite float, or return None.

    Booleans, None, non-numeric text, NaN and infinities all yield None.

    Examples:
        >>> parse_finite("0.6")
        0.6
        >>> parse_finite("abc") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = to_float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def is_finite_number(value: Any) -> bool:
    """Check if a value is an int or float that is neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value)


def percent_to_fraction(percent: float) -> float:
    """Convert a percentage (60.0) into a fraction (0.6)."""
    return percent / HUNDRED


def fraction_to_percent(fraction: float) -> float:
    """Convert a fraction (0.6) into a percentage (60.0)."""
    return fraction * HUNDRED


def format_currency(amount: float) -> str:
    """Format a dollar amount for export, e.g. ``1234.5`` -> ``'1234.50'``."""
    return f"{amount:.{CURRENCY_DECIMALS}f}"


def format_percentage(fraction: float) -> str:
    """Format a fraction as a percentage for export, e.g. ``0.755`` -> ``'75.50'``."""
    return f"{fraction_to_percent(fraction):.{PERCENTAGE_DECIMALS}f}"


def format_raw_number(value: float) -> str:
    """Format a number with the shortest text that parses back to it.

    Integral values drop the trailing ``.0`` so exports read like hand-written
    CSV (``1000`` rather than ``1000.0``).

    Examples:
        >>> format_raw_number(1000.0)
        '1000'
        >>> format_raw_number(0.6)
        '0.6'
    """
    if math.isfinite(value) and value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def safe_float_comparison(a: float, b: float, tolerance: float = 1e-9) -> bool:
    """Compare floats with tolerance for precision issues.

    Args:
        a: First float to compare
        b: Second float to compare
        tolerance: Acceptable difference (default: 1e-9), inclusive

    Returns:
        True if floats are equal within tolerance

    Examples:
        >>> safe_float_comparison(0.1 + 0.2, 0.3)
        True
        >>> safe_float_comparison(0.95, 1.0, 0.001)
        False
    """
    return abs(a - b) <= tolerance
