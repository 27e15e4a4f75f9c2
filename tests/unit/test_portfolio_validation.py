"""
Unit tests for portfolio validation and policy configuration.
"""

import pytest

from rebalancer.core.exceptions.rebalance import (
    ConfigurationError,
    EmptyPortfolioError,
    NegativeBalanceError,
    TargetSumMismatchError,
)
from rebalancer.core.models.policy import DEFAULT_POLICY, RebalancePolicy
from rebalancer.core.models.portfolio import Portfolio, PortfolioLine
from rebalancer.core.models.portfolio_validator import PortfolioValidator, validate_portfolio


def make_portfolio(*lines: tuple[str, float, float]) -> Portfolio:
    return Portfolio.from_lines(PortfolioLine(*line) for line in lines)


class TestPortfolioValidator:
    """Test the ordered pre-calculation checks."""

    def test_should_accept_valid_portfolio(self) -> None:
        """Test a well-formed portfolio passes."""
        portfolio = make_portfolio(("A", 250, 0.5), ("B", 100, 0.2), ("C", 200, 0.3))
        assert validate_portfolio(portfolio) is None

    def test_should_reject_empty_portfolio(self) -> None:
        """Test empty portfolio check."""
        assert isinstance(validate_portfolio(Portfolio.empty()), EmptyPortfolioError)

    def test_should_report_actual_target_sum(self) -> None:
        """Test a 0.95 target sum is reported with the actual value."""
        portfolio = make_portfolio(("A", 100, 0.5), ("B", 100, 0.45))
        error = validate_portfolio(portfolio)

        assert isinstance(error, TargetSumMismatchError)
        assert error.actual_sum == pytest.approx(0.95)

    @pytest.mark.parametrize("target_sum", [0.999, 0.9995, 1.0, 1.0005, 1.001])
    def test_should_accept_target_sums_within_tolerance(self, target_sum: float) -> None:
        """Test the inclusive 0.001 band around 1.0."""
        portfolio = make_portfolio(("A", 100, 0.5), ("B", 100, target_sum - 0.5))
        assert validate_portfolio(portfolio) is None

    @pytest.mark.parametrize("target_sum", [0.9985, 1.0015, 0.0, 2.0])
    def test_should_reject_target_sums_outside_tolerance(self, target_sum: float) -> None:
        """Test sums deviating by more than 0.001."""
        portfolio = make_portfolio(("A", 100, 0.5), ("B", 100, target_sum - 0.5))
        assert isinstance(validate_portfolio(portfolio), TargetSumMismatchError)

    def test_should_name_first_negative_balance(self) -> None:
        """Test the first fund with a negative balance is reported."""
        portfolio = make_portfolio(("A", 10, 0.5), ("B", -1, 0.25), ("C", -2, 0.25))
        error = validate_portfolio(portfolio)

        assert isinstance(error, NegativeBalanceError)
        assert error.fund == "B"

    def test_should_check_target_sum_before_balances(self) -> None:
        """Test checks short-circuit in order."""
        portfolio = make_portfolio(("A", -10, 0.5))
        assert isinstance(validate_portfolio(portfolio), TargetSumMismatchError)

    def test_should_accept_zero_balances(self) -> None:
        """Test zero is a valid balance."""
        portfolio = make_portfolio(("A", 0, 0.5), ("B", 0, 0.5))
        assert validate_portfolio(portfolio) is None

    def test_should_not_check_fund_names(self) -> None:
        """Test name checks belong to the line builder."""
        portfolio = make_portfolio(("", 10, 1.0))
        assert validate_portfolio(portfolio) is None

    def test_should_use_policy_tolerance(self) -> None:
        """Test a wider tolerance accepts a 0.95 sum."""
        portfolio = make_portfolio(("A", 100, 0.5), ("B", 100, 0.45))
        validator = PortfolioValidator(RebalancePolicy(target_sum_tolerance=0.05))
        assert validator.validate(portfolio) is None

    def test_should_return_errors_instead_of_raising(self) -> None:
        """Test invalid portfolios never raise."""
        result = PortfolioValidator().validate(Portfolio.empty())
        assert isinstance(result, EmptyPortfolioError)


class TestRebalancePolicy:
    """Test policy configuration."""

    def test_should_use_documented_defaults(self) -> None:
        """Test default tolerances."""
        assert DEFAULT_POLICY.target_sum_tolerance == 0.001
        assert DEFAULT_POLICY.balanced_threshold_pct == 0.5
        assert DEFAULT_POLICY.to_dict() == {
            "target_sum_tolerance": 0.001,
            "balanced_threshold_pct": 0.5,
        }

    def test_should_coerce_integer_tolerances(self) -> None:
        """Test integers are stored as floats."""
        policy = RebalancePolicy(target_sum_tolerance=0, balanced_threshold_pct=1)
        assert policy.balanced_threshold_pct == 1.0
        assert isinstance(policy.balanced_threshold_pct, float)

    def test_should_reject_negative_tolerance(self) -> None:
        """Test invalid policy values raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match="target_sum_tolerance"):
            RebalancePolicy(target_sum_tolerance=-0.001)

        with pytest.raises(ConfigurationError, match="balanced_threshold_pct"):
            RebalancePolicy(balanced_threshold_pct=float("nan"))
