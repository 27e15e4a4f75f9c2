"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

import math

from rebalancer.core.constants import MAX_FUND_NAME_LENGTH
from rebalancer.core.exceptions.rebalance import ConfigurationError, ValidationError


def validate_fund_name(fund: str, param_name: str = "fund") -> str:
    """Validate and trim a fund label.

    Args:
        fund: Label to validate
        param_name: Parameter name for error messages

    Returns:
        The trimmed label

    Raises:
        ValidationError: If the label is empty or too long
    """
    if not isinstance(fund, str):
        raise ValidationError(f"{param_name} must be a string, got {type(fund).__name__}")

    name = fund.strip()
    if not name:
        raise ValidationError(f"{param_name} cannot be empty")
    if len(name) > MAX_FUND_NAME_LENGTH:
        raise ValidationError(f"{param_name} too long: maximum {MAX_FUND_NAME_LENGTH} characters")
    return name


def validate_tolerance(value: float, param_name: str) -> float:
    """Validate that a policy tolerance is a finite, non-negative number.

    Args:
        value: Tolerance to validate
        param_name: Parameter name for error messages

    Returns:
        The validated tolerance as float

    Raises:
        ConfigurationError: If tolerance is negative or not finite
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ConfigurationError(f"{param_name} must be a number, got {type(value).__name__}")
    if not math.isfinite(value) or value < 0:
        raise ConfigurationError(f"{param_name} must be finite and non-negative, got {value}")
    return float(value)
