#!/usr/bin/env python3
"""
Rebalance Script: Portfolio CSV to Contribution Plan

Reads a portfolio CSV and prints how to split a new contribution across funds.
Input: CSV file with columns: Fund,Balance,Target (target as a fraction, e.g. 0.6)
Output: CSV with columns: Fund,Dollars_to_Add[,Action],Allocation_%,Target_Allocation_%,Difference_%
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from rebalancer.core.exceptions.rebalance import RebalancerException, unwrap
from rebalancer.core.models.policy import RebalancePolicy
from rebalancer.core.models.portfolio import Portfolio
from rebalancer.core.models.portfolio_metrics import PortfolioMetrics
from rebalancer.core.models.rebalance import RebalanceRequest, RebalanceSummary
from rebalancer.core.models.rebalance_engine import rebalance
from rebalancer.infrastructure.data.csv_codec import serialize_results
from rebalancer.infrastructure.data.csv_file_loader import load_portfolio_file, write_csv_file
from rebalancer.infrastructure.data.manual_entry import is_target_total_valid, target_total_pct


def print_metrics(portfolio: Portfolio, policy: RebalancePolicy) -> None:
    """Print the current allocation table to stdout."""
    metrics = PortfolioMetrics(portfolio, policy)
    frame = metrics.to_dataframe()
    print(frame.to_string(index=False, float_format=lambda value: f"{value:.2f}"))

    summary = metrics.summary()
    logger.info(
        f"Total balance ${summary.total_balance:,.2f} across {summary.fund_count} funds: "
        f"{len(summary.overweight)} overweight, {len(summary.underweight)} underweight"
    )
    for line in metrics.sorted_by_drift():
        if line.status.needs_attention:
            logger.info(f"{line.fund} is {line.status.value} by {line.difference_pct:+.2f} points")
    if not is_target_total_valid(portfolio, policy):
        logger.warning(f"Target allocations total {target_total_pct(portfolio):.2f}%, not 100%")


def run(args: argparse.Namespace) -> int:
    """Execute one rebalance from parsed arguments."""
    policy = RebalancePolicy(
        target_sum_tolerance=args.target_tolerance,
        balanced_threshold_pct=args.balanced_threshold,
    )
    portfolio = unwrap(load_portfolio_file(args.portfolio))
    logger.info(f"Loaded {len(portfolio)} funds from {args.portfolio}")

    if args.metrics:
        print_metrics(portfolio, policy)

    request = RebalanceRequest.from_raw(args.contribution, allow_selling=args.allow_selling)
    lines = unwrap(rebalance(portfolio, request, policy))

    summary = RebalanceSummary.from_lines(lines)
    logger.success(
        f"Planned {summary.buy_count} buys (${summary.buy_total:,.2f}) and "
        f"{summary.sell_count} sells (${summary.sell_total:,.2f})"
    )

    csv_text = serialize_results(lines, include_action=args.include_action)
    if args.output:
        output_path = write_csv_file(args.output, csv_text)
        logger.success(f"Wrote results to {output_path}")
    else:
        print(csv_text)
    return 0


def setup_logging(debug: bool = False):
    """Configure logging with loguru."""
    logger.remove()

    level = "DEBUG" if debug else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split a new contribution across funds to reach target allocations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python rebalance_portfolio.py --portfolio portfolio.csv --contribution 5000
  python rebalance_portfolio.py --portfolio portfolio.csv --contribution 100 --allow-selling --include-action
  python rebalance_portfolio.py --portfolio portfolio.csv --contribution 5000 --metrics --output plan.csv
        """,
    )

    parser.add_argument(
        "--portfolio", type=Path, required=True, help="CSV file with Fund,Balance,Target columns"
    )

    parser.add_argument(
        "--contribution", type=str, required=True, help="Dollars of new money to invest"
    )

    parser.add_argument(
        "--allow-selling",
        action="store_true",
        help="Allow negative contributions (sells) to reach the targets",
    )

    parser.add_argument(
        "--include-action", action="store_true", help="Add a Buy/Sell column to the output"
    )

    parser.add_argument(
        "--output", type=Path, help="Write results CSV here instead of printing to stdout"
    )

    parser.add_argument(
        "--metrics", action="store_true", help="Print current allocation and drift first"
    )

    parser.add_argument(
        "--target-tolerance",
        type=float,
        default=RebalancePolicy.target_sum_tolerance,
        help="Allowed distance of the target sum from 1.0 (default: 0.001)",
    )

    parser.add_argument(
        "--balanced-threshold",
        type=float,
        default=RebalancePolicy.balanced_threshold_pct,
        help="Drift in percentage points still counted as balanced (default: 0.5)",
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(args.debug)

    try:
        return run(args)
    except RebalancerException as e:
        logger.error(f"{e.code}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
