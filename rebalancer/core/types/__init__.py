"""
Core type definitions and utilities.
"""

# Re-export financial utilities for easy access
from .financial import (
    HUNDRED,
    ONE,
    ZERO,
    format_currency,
    format_percentage,
    format_raw_number,
    fraction_to_percent,
    is_finite_number,
    parse_finite,
    percent_to_fraction,
    safe_float_comparison,
    to_float,
)

__all__ = [
    # Utility functions
    "to_float",
    "parse_finite",
    "is_finite_number",
    "percent_to_fraction",
    "fraction_to_percent",
    "format_currency",
    "format_percentage",
    "format_raw_number",
    "safe_float_comparison",
    # Constants
    "ZERO",
    "ONE",
    "HUNDRED",
]
