"""
Portfolio data infrastructure.

This module provides CSV import/export, file loading and the manual-entry
conversion boundary that feed the rebalance core.
"""

from .csv_codec import (
    PortfolioCSVCodec,
    parse_portfolio_csv,
    serialize,
    serialize_portfolio,
    serialize_results,
)
from .csv_file_loader import CSVFileLoader, load_portfolio_file, write_csv_file
from .manual_entry import (
    TargetUnit,
    add_entry,
    build_line,
    is_target_total_valid,
    remove_entry,
    target_total_pct,
    update_entry,
)

__all__ = [
    "PortfolioCSVCodec",
    "parse_portfolio_csv",
    "serialize",
    "serialize_portfolio",
    "serialize_results",
    "CSVFileLoader",
    "load_portfolio_file",
    "write_csv_file",
    "TargetUnit",
    "build_line",
    "add_entry",
    "update_entry",
    "remove_entry",
    "target_total_pct",
    "is_target_total_valid",
]
