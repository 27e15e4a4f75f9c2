"""
Proportional rebalance of a new contribution.

Each fund receives the amount that brings it to ``target * projected_total``,
where the projected total already includes the contribution. A single pass
therefore lands every fund exactly on target when all deltas are realizable.
"""

from loguru import logger

from rebalancer.core.exceptions.rebalance import (
    InvalidContributionError,
    RebalanceError,
    SellingRequiredError,
)
from rebalancer.core.types.financial import is_finite_number
from rebalancer.core.utils.decorators import log_operation

from .policy import DEFAULT_POLICY, RebalancePolicy
from .portfolio import Portfolio, PortfolioLine
from .portfolio_validator import PortfolioValidator
from .rebalance import RebalanceLine, RebalanceRequest


class RebalanceEngine:
    """Computes per-fund cash allocations for a contribution.

    The engine is stateless apart from its policy and never mutates the
    portfolio it is given; the same inputs always give the same output.
    """

    def __init__(self, policy: RebalancePolicy = DEFAULT_POLICY) -> None:
        self.policy = policy
        self._validator = PortfolioValidator(policy)

    def rebalance(
        self, portfolio: Portfolio, request: RebalanceRequest
    ) -> list[RebalanceLine] | RebalanceError:
        """Distribute ``request.contribution`` across the portfolio.

        Args:
            portfolio: Portfolio to rebalance
            request: Contribution amount and selling policy

        Returns:
            One RebalanceLine per portfolio line in input order, or the typed
            error that stopped the calculation
        """
        validation_error = self._validator.validate(portfolio)
        if validation_error is not None:
            return validation_error

        contribution = request.contribution
        if not is_finite_number(contribution) or contribution <= 0:
            return InvalidContributionError(contribution)

        projected_total = portfolio.total_balance() + contribution
        deltas = [self._delta(line, projected_total) for line in portfolio]

        if not request.allow_selling:
            selling = [line.fund for line, delta in zip(portfolio, deltas) if delta < 0]
            if selling:
                logger.debug(f"Selling required for {len(selling)} of {len(portfolio)} funds")
                return SellingRequiredError(selling)

        return [
            self._build_line(line, delta, contribution) for line, delta in zip(portfolio, deltas)
        ]

    @staticmethod
    def _delta(line: PortfolioLine, projected_total: float) -> float:
        """Dollars that bring one fund to its target share of the projected total."""
        return line.target * projected_total - line.balance

    @staticmethod
    def _build_line(line: PortfolioLine, delta: float, contribution: float) -> RebalanceLine:
        allocation = delta / contribution
        return RebalanceLine(
            fund=line.fund,
            dollars_to_add=delta,
            allocation_of_contribution=allocation,
            target_allocation=line.target,
            difference_from_target=allocation - line.target,
        )


@log_operation
def rebalance(
    portfolio: Portfolio,
    request: RebalanceRequest,
    policy: RebalancePolicy = DEFAULT_POLICY,
) -> list[RebalanceLine] | RebalanceError:
    """Rebalance a portfolio for a contribution with the given policy.

    Selling is all-or-nothing: if ``request.allow_selling`` is false and any
    fund would need a negative contribution, the whole batch is rejected with
    ``SellingRequiredError``.
    """
    return RebalanceEngine(policy).rebalance(portfolio, request)
