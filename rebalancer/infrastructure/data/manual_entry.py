"""
Manual-entry ingestion boundary.

Form fields take the target as a percentage (``60`` for 60%) while CSV import
takes a raw fraction (``0.6``). Both conventions are kept and named by
``TargetUnit``; everything entering the core leaves this module as a fraction.
Whether forms should switch to fractions is an open product decision.
"""

from enum import StrEnum
from typing import Any, Literal

from loguru import logger

from rebalancer.core.exceptions.rebalance import InvalidEntryError, ValidationError
from rebalancer.core.models.policy import DEFAULT_POLICY, RebalancePolicy
from rebalancer.core.models.portfolio import Portfolio, PortfolioLine
from rebalancer.core.types.financial import (
    fraction_to_percent,
    parse_finite,
    percent_to_fraction,
    safe_float_comparison,
)
from rebalancer.core.utils.validation import validate_fund_name

EntryField = Literal["fund", "balance", "target"]


class TargetUnit(StrEnum):
    """Unit a caller uses for target allocations."""

    FRACTION = "fraction"  # CSV convention: 0.6
    PERCENT = "percent"  # Form convention: 60

    def to_fraction(self, value: float) -> float:
        """Normalize a target in this unit to a fraction."""
        return percent_to_fraction(value) if self == TargetUnit.PERCENT else value


def build_line(
    fund: Any, balance: Any, target: Any, unit: TargetUnit = TargetUnit.PERCENT
) -> PortfolioLine | InvalidEntryError:
    """Build a portfolio line from raw form values.

    Args:
        fund: Fund label; surrounding whitespace is trimmed
        balance: Dollar balance as number or text
        target: Target allocation in ``unit``
        unit: Unit of ``target``

    Returns:
        The normalized line, or the first invalid field as a typed error
    """
    try:
        name = validate_fund_name(fund)
    except ValidationError as e:
        return InvalidEntryError("fund", fund, str(e))

    parsed_balance = parse_finite(balance)
    if parsed_balance is None:
        return InvalidEntryError("balance", balance, "must be a finite number")

    parsed_target = parse_finite(target)
    if parsed_target is None:
        return InvalidEntryError("target", target, "must be a finite number")

    return PortfolioLine(fund=name, balance=parsed_balance, target=unit.to_fraction(parsed_target))


def add_entry(
    portfolio: Portfolio,
    fund: Any,
    balance: Any,
    target: Any,
    unit: TargetUnit = TargetUnit.PERCENT,
) -> Portfolio | InvalidEntryError:
    """Return a new portfolio with one manually entered fund appended."""
    line = build_line(fund, balance, target, unit)
    if isinstance(line, InvalidEntryError):
        logger.warning(f"Manual entry rejected: {line}")
        return line
    return portfolio.add_line(line)


def update_entry(
    portfolio: Portfolio,
    index: int,
    field: EntryField,
    raw_value: Any,
    unit: TargetUnit = TargetUnit.PERCENT,
) -> Portfolio:
    """Return a portfolio with one field of one line replaced.

    Fund text replaces the name as typed. A numeric field that does not parse
    leaves the portfolio unchanged and the same object is returned.

    Raises:
        PortfolioEditError: If index is out of range
        ValueError: If field is not one of fund, balance or target
    """
    if field == "fund":
        return portfolio.update_line(index, fund=str(raw_value))
    if field not in ("balance", "target"):
        raise ValueError(f"Unknown portfolio field: {field}")

    value = parse_finite(raw_value)
    if value is None:
        logger.debug(f"Ignoring non-numeric {field} edit: {raw_value!r}")
        portfolio.update_line(index)  # still reports a bad index
        return portfolio

    if field == "balance":
        return portfolio.update_line(index, balance=value)
    return portfolio.update_line(index, target=unit.to_fraction(value))


def remove_entry(portfolio: Portfolio, index: int) -> Portfolio:
    """Return a new portfolio without the line at ``index``."""
    return portfolio.remove_line(index)


def target_total_pct(portfolio: Portfolio) -> float:
    """Sum of targets expressed as a percentage, for form footers."""
    return fraction_to_percent(portfolio.target_sum())


def is_target_total_valid(portfolio: Portfolio, policy: RebalancePolicy = DEFAULT_POLICY) -> bool:
    """Check whether targets sum to 100% within the policy tolerance."""
    return safe_float_comparison(
        portfolio.target_sum(), 1.0, policy.target_sum_tolerance + 1e-12
    )
