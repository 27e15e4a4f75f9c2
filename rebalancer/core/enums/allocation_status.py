"""
Allocation status and trade action enumerations.

This module defines how a fund's drift is classified for display and
which direction a rebalance line trades in.
"""

from enum import StrEnum

from rebalancer.core.constants import BALANCED_THRESHOLD_PCT


class AllocationStatus(StrEnum):
    """
    Drift classification of a fund against its target.

    The threshold is a display convention, not an engine invariant.
    """

    BALANCED = "balanced"
    OVERWEIGHT = "overweight"
    UNDERWEIGHT = "underweight"

    @classmethod
    def classify(
        cls, difference_pct: float, threshold_pct: float = BALANCED_THRESHOLD_PCT
    ) -> "AllocationStatus":
        """
        Classify a drift expressed in percentage points.

        Args:
            difference_pct: Current allocation % minus target allocation %
            threshold_pct: Largest absolute drift still counted as balanced

        Returns:
            The matching allocation status
        """
        if abs(difference_pct) <= threshold_pct:
            return cls.BALANCED
        if difference_pct > threshold_pct:
            return cls.OVERWEIGHT
        return cls.UNDERWEIGHT

    @property
    def needs_attention(self) -> bool:
        """Check if the fund has drifted outside the balanced band."""
        return self != self.BALANCED


class TradeAction(StrEnum):
    """
    Direction of a rebalance line.

    Zero-dollar lines count as buys, matching the results export.
    """

    BUY = "Buy"
    SELL = "Sell"

    @classmethod
    def from_amount(cls, dollars: float) -> "TradeAction":
        """Get the action implied by the sign of a dollar delta."""
        return cls.BUY if dollars >= 0 else cls.SELL
