"""
Portfolio rebalancer.

Distributes a new cash contribution across funds so the portfolio lands on
its target allocation.
"""

from rebalancer.core.exceptions.rebalance import is_error, unwrap
from rebalancer.core.models.policy import DEFAULT_POLICY, RebalancePolicy
from rebalancer.core.models.portfolio import Portfolio, PortfolioLine
from rebalancer.core.models.portfolio_metrics import calculate_metrics
from rebalancer.core.models.portfolio_validator import validate_portfolio
from rebalancer.core.models.rebalance import RebalanceLine, RebalanceRequest
from rebalancer.core.models.rebalance_engine import rebalance

__version__ = "1.0.0"

__all__ = [
    "Portfolio",
    "PortfolioLine",
    "RebalanceRequest",
    "RebalanceLine",
    "RebalancePolicy",
    "DEFAULT_POLICY",
    "validate_portfolio",
    "rebalance",
    "calculate_metrics",
    "is_error",
    "unwrap",
]
