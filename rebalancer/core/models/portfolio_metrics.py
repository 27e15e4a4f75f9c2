"""
Portfolio metrics and calculations.

This module handles current-allocation percentages, drift and drift
classification. It depends only on the data model, never on the rebalance
engine, and is used by any consumer that needs display figures.
"""

from dataclasses import dataclass
from typing import Any

import pandas as pd

from rebalancer.core.enums import AllocationStatus
from rebalancer.core.types.financial import HUNDRED, ZERO, fraction_to_percent

from .policy import DEFAULT_POLICY, RebalancePolicy
from .portfolio import Portfolio, PortfolioLine


@dataclass(frozen=True)
class DerivedLine:
    """Display figures for one fund, all in percentage points."""

    fund: str
    current_allocation_pct: float
    target_allocation_pct: float
    difference_pct: float
    status: AllocationStatus

    def to_dict(self) -> dict[str, Any]:
        """Convert line to dictionary."""
        return {
            "fund": self.fund,
            "current_allocation_pct": self.current_allocation_pct,
            "target_allocation_pct": self.target_allocation_pct,
            "difference_pct": self.difference_pct,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class AllocationSummary:
    """Portfolio-level view of drift."""

    total_balance: float
    fund_count: int
    overweight: list[str]
    underweight: list[str]
    balanced: list[str]
    largest_drift: DerivedLine | None

    def to_dict(self) -> dict[str, Any]:
        """Convert summary to dictionary."""
        return {
            "total_balance": self.total_balance,
            "fund_count": self.fund_count,
            "overweight": self.overweight,
            "underweight": self.underweight,
            "balanced": self.balanced,
            "largest_drift": self.largest_drift.to_dict() if self.largest_drift else None,
        }


class PortfolioMetrics:
    """Portfolio metrics and calculations.

    Pure projections of a portfolio. A zero total balance makes every current
    allocation 0% instead of NaN.
    """

    def __init__(self, portfolio: Portfolio, policy: RebalancePolicy = DEFAULT_POLICY) -> None:
        """Initialize with the portfolio to measure.

        Args:
            portfolio: Portfolio to calculate metrics for
            policy: Supplies the balanced/overweight/underweight threshold
        """
        self.portfolio = portfolio
        self.policy = policy

    def total_balance(self) -> float:
        """Calculate total portfolio value."""
        return self.portfolio.total_balance()

    def current_allocation_pct(self, line: PortfolioLine, total_balance: float) -> float:
        """Calculate one line's share of the total balance in percent.

        Returns:
            Allocation percentage, or 0.0 when the total balance is zero
        """
        if total_balance == ZERO:
            return ZERO
        return line.balance / total_balance * HUNDRED

    def derived_lines(self) -> list[DerivedLine]:
        """Calculate display figures for every line in portfolio order."""
        total_balance = self.total_balance()
        threshold = self.policy.balanced_threshold_pct

        derived = []
        for line in self.portfolio:
            current_pct = self.current_allocation_pct(line, total_balance)
            target_pct = fraction_to_percent(line.target)
            difference_pct = current_pct - target_pct
            derived.append(
                DerivedLine(
                    fund=line.fund,
                    current_allocation_pct=current_pct,
                    target_allocation_pct=target_pct,
                    difference_pct=difference_pct,
                    status=AllocationStatus.classify(difference_pct, threshold),
                )
            )
        return derived

    def sorted_by_drift(self) -> list[DerivedLine]:
        """Get derived lines from most overweight to most underweight."""
        return sorted(self.derived_lines(), key=lambda item: item.difference_pct, reverse=True)

    def summary(self) -> AllocationSummary:
        """Summarize drift across the portfolio."""
        derived = self.derived_lines()
        by_status: dict[AllocationStatus, list[str]] = {status: [] for status in AllocationStatus}
        for item in derived:
            by_status[item.status].append(item.fund)

        largest = max(derived, key=lambda item: abs(item.difference_pct), default=None)
        return AllocationSummary(
            total_balance=self.total_balance(),
            fund_count=len(derived),
            overweight=by_status[AllocationStatus.OVERWEIGHT],
            underweight=by_status[AllocationStatus.UNDERWEIGHT],
            balanced=by_status[AllocationStatus.BALANCED],
            largest_drift=largest,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Get derived lines as a DataFrame, one row per fund in portfolio order."""
        columns = [
            "fund",
            "current_allocation_pct",
            "target_allocation_pct",
            "difference_pct",
            "status",
        ]
        return pd.DataFrame([item.to_dict() for item in self.derived_lines()], columns=columns)


def calculate_metrics(
    portfolio: Portfolio, policy: RebalancePolicy = DEFAULT_POLICY
) -> list[DerivedLine]:
    """Calculate derived display figures for every portfolio line."""
    return PortfolioMetrics(portfolio, policy).derived_lines()
