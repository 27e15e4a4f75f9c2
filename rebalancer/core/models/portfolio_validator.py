"""
Portfolio validation before any calculation.

Checks run in a fixed order and stop at the first failure. The error is
returned, not raised, so callers can render it directly.
"""

from loguru import logger

from rebalancer.core.exceptions.rebalance import (
    EmptyPortfolioError,
    NegativeBalanceError,
    PortfolioValidationError,
    TargetSumMismatchError,
)
from rebalancer.core.types.financial import safe_float_comparison

from .policy import DEFAULT_POLICY, RebalancePolicy
from .portfolio import Portfolio


class PortfolioValidator:
    """Centralized validation of candidate portfolios.

    Only the three pre-calculation invariants are enforced here. Fund-name
    emptiness and non-finite numbers belong to whichever collaborator builds
    the lines.
    """

    def __init__(self, policy: RebalancePolicy = DEFAULT_POLICY) -> None:
        self.policy = policy

    def validate(self, portfolio: Portfolio) -> PortfolioValidationError | None:
        """Validate a portfolio.

        Args:
            portfolio: Portfolio to check

        Returns:
            The first failing check as a typed error, or None if valid
        """
        error = (
            self._check_not_empty(portfolio)
            or self._check_target_sum(portfolio)
            or self._check_balances(portfolio)
        )
        if error is not None:
            logger.debug(f"Portfolio rejected: {error.code}")
        return error

    @staticmethod
    def _check_not_empty(portfolio: Portfolio) -> PortfolioValidationError | None:
        if len(portfolio) == 0:
            return EmptyPortfolioError()
        return None

    def _check_target_sum(self, portfolio: Portfolio) -> PortfolioValidationError | None:
        tolerance = self.policy.target_sum_tolerance
        target_sum = portfolio.target_sum()
        # Inclusive band; epsilon absorbs float noise at the edges
        if not safe_float_comparison(target_sum, 1.0, tolerance + 1e-12):
            return TargetSumMismatchError(actual_sum=target_sum, tolerance=tolerance)
        return None

    @staticmethod
    def _check_balances(portfolio: Portfolio) -> PortfolioValidationError | None:
        for line in portfolio:
            if line.balance < 0:
                return NegativeBalanceError(fund=line.fund, balance=line.balance)
        return None


def validate_portfolio(
    portfolio: Portfolio, policy: RebalancePolicy = DEFAULT_POLICY
) -> PortfolioValidationError | None:
    """Validate a portfolio with the given policy.

    Returns:
        A typed validation error, or None if the portfolio may be rebalanced
    """
    return PortfolioValidator(policy).validate(portfolio)
