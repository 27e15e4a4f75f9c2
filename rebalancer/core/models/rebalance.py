"""
Rebalance request and result models.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from rebalancer.core.enums import TradeAction
from rebalancer.core.types.financial import parse_finite


@dataclass(frozen=True)
class RebalanceRequest:
    """New cash to distribute and whether funds may be sold.

    The contribution is checked by the engine, which reports a bad amount as
    a typed error rather than failing here.
    """

    contribution: float
    allow_selling: bool = False

    @classmethod
    def from_raw(cls, contribution: Any, allow_selling: bool = False) -> "RebalanceRequest":
        """Build a request from user input such as form text.

        Values that do not parse as finite numbers become NaN so that the
        engine rejects them as an invalid contribution.
        """
        parsed = parse_finite(contribution)
        return cls(
            contribution=parsed if parsed is not None else float("nan"),
            allow_selling=allow_selling,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert request to dictionary."""
        return {"contribution": self.contribution, "allow_selling": self.allow_selling}


@dataclass(frozen=True)
class RebalanceLine:
    """Cash to move into (or out of) one fund.

    Attributes:
        fund: Fund label copied from the portfolio line
        dollars_to_add: Signed delta; positive buys, negative sells
        allocation_of_contribution: Share of the new money this line uses
        target_allocation: Target fraction copied from the portfolio line
        difference_from_target: allocation_of_contribution - target_allocation
    """

    fund: str
    dollars_to_add: float
    allocation_of_contribution: float
    target_allocation: float
    difference_from_target: float

    @property
    def action(self) -> TradeAction:
        """Trade direction implied by the dollar delta."""
        return TradeAction.from_amount(self.dollars_to_add)

    def to_dict(self) -> dict[str, Any]:
        """Convert line to dictionary."""
        return {
            "fund": self.fund,
            "dollars_to_add": self.dollars_to_add,
            "action": self.action.value,
            "allocation_of_contribution": self.allocation_of_contribution,
            "target_allocation": self.target_allocation,
            "difference_from_target": self.difference_from_target,
        }


@dataclass(frozen=True)
class RebalanceSummary:
    """Order totals across a set of rebalance lines."""

    buy_total: float
    sell_total: float
    total_traded: float
    buy_count: int
    sell_count: int
    net_contribution: float

    @classmethod
    def from_lines(cls, lines: Iterable[RebalanceLine]) -> "RebalanceSummary":
        """Aggregate buy and sell orders.

        Lines with a zero delta are neither buys nor sells here.
        """
        buys = []
        sells = []
        for line in lines:
            if line.dollars_to_add > 0:
                buys.append(line.dollars_to_add)
            elif line.dollars_to_add < 0:
                sells.append(line.dollars_to_add)

        buy_total = sum(buys, 0.0)
        sell_total = abs(sum(sells, 0.0))
        return cls(
            buy_total=buy_total,
            sell_total=sell_total,
            total_traded=buy_total + sell_total,
            buy_count=len(buys),
            sell_count=len(sells),
            net_contribution=buy_total - sell_total,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert summary to dictionary."""
        return {
            "buy_total": self.buy_total,
            "sell_total": self.sell_total,
            "total_traded": self.total_traded,
            "buy_count": self.buy_count,
            "sell_count": self.sell_count,
            "net_contribution": self.net_contribution,
        }
