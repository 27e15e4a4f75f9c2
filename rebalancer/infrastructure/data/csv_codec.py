"""
Portfolio CSV import and export.

Import reads ``Fund,Balance,Target`` text where ``target`` is a raw fraction
(``0.6``), not a percentage. Manual-entry forms use percentages instead and
convert through ``manual_entry``; the codec does not accept percentages.

Export writes comma-joined rows with no quoting. A fund name containing a
comma corrupts its row; this is a known limitation of the format.
"""

from collections.abc import Sequence

from loguru import logger

from rebalancer.core.constants import (
    CSV_BALANCE_COLUMN,
    CSV_FUND_COLUMN,
    CSV_MIN_FIELDS_PER_ROW,
    CSV_TARGET_COLUMN,
    PORTFOLIO_EXPORT_HEADER,
    RESULTS_EXPORT_HEADER,
    RESULTS_EXPORT_HEADER_WITH_ACTION,
)
from rebalancer.core.exceptions.rebalance import CsvParseError
from rebalancer.core.models.portfolio import Portfolio, PortfolioLine
from rebalancer.core.models.rebalance import RebalanceLine
from rebalancer.core.types.financial import format_currency, format_percentage, format_raw_number
from rebalancer.core.utils.decorators import log_operation

from .csv_validator import CSVValidator


class PortfolioCSVCodec:
    """Converts between CSV text and portfolio or result values."""

    def parse(self, text: str) -> Portfolio | CsvParseError:
        """Parse CSV text into a portfolio.

        Args:
            text: Whole CSV document

        Returns:
            The parsed portfolio, or the first parse error encountered
        """
        try:
            return self._parse_lines(text.strip().split("\n"))
        except CsvParseError as e:
            logger.warning(f"CSV import rejected: {e}")
            return e

    def _parse_lines(self, lines: list[str]) -> Portfolio:
        CSVValidator.validate_line_count(lines)
        columns = CSVValidator.resolve_columns(CSVValidator.normalize_header(lines[0]))

        parsed = []
        skipped = 0
        for row_number, raw_line in enumerate(lines[1:], start=2):
            values = [value.strip() for value in raw_line.split(",")]
            if len(values) < CSV_MIN_FIELDS_PER_ROW:
                skipped += 1
                continue
            parsed.append(self._parse_row(values, columns, row_number))

        if skipped:
            logger.debug(f"Skipped {skipped} short CSV rows")
        return Portfolio.from_lines(parsed)

    @staticmethod
    def _parse_row(values: list[str], columns: dict[str, int], row_number: int) -> PortfolioLine:
        def field(column: str) -> str:
            index = columns[column]
            return values[index] if index < len(values) else ""

        balance = CSVValidator.parse_numeric_field(
            field(CSV_BALANCE_COLUMN), CSV_BALANCE_COLUMN, row_number
        )
        target = CSVValidator.parse_numeric_field(
            field(CSV_TARGET_COLUMN), CSV_TARGET_COLUMN, row_number
        )
        return PortfolioLine(fund=field(CSV_FUND_COLUMN), balance=balance, target=target)

    @staticmethod
    def serialize_portfolio(portfolio: Portfolio) -> str:
        """Serialize a portfolio as ``Fund,Balance,Target`` with raw fractional targets."""
        rows = [
            f"{line.fund},{format_raw_number(line.balance)},{format_raw_number(line.target)}"
            for line in portfolio
        ]
        return "\n".join([PORTFOLIO_EXPORT_HEADER, *rows])

    @staticmethod
    def serialize_results(results: Sequence[RebalanceLine], include_action: bool = False) -> str:
        """Serialize rebalance results.

        Dollar amounts use 2 decimals; fractions are written as percentages
        with 2 decimals. With ``include_action`` the dollar column holds the
        absolute amount and an ``Action`` column carries ``Buy``/``Sell``.
        """
        header = RESULTS_EXPORT_HEADER_WITH_ACTION if include_action else RESULTS_EXPORT_HEADER
        rows = []
        for result in results:
            percentages = ",".join(
                format_percentage(value)
                for value in (
                    result.allocation_of_contribution,
                    result.target_allocation,
                    result.difference_from_target,
                )
            )
            if include_action:
                dollars = format_currency(abs(result.dollars_to_add))
                rows.append(f"{result.fund},{dollars},{result.action.value},{percentages}")
            else:
                dollars = format_currency(result.dollars_to_add)
                rows.append(f"{result.fund},{dollars},{percentages}")
        return "\n".join([header, *rows])


_codec = PortfolioCSVCodec()


@log_operation
def parse_portfolio_csv(text: str) -> Portfolio | CsvParseError:
    """Parse ``Fund,Balance,Target`` CSV text into a portfolio."""
    return _codec.parse(text)


def serialize_portfolio(portfolio: Portfolio) -> str:
    """Serialize a portfolio to CSV text."""
    return _codec.serialize_portfolio(portfolio)


def serialize_results(results: Sequence[RebalanceLine], include_action: bool = False) -> str:
    """Serialize rebalance results to CSV text."""
    return _codec.serialize_results(results, include_action=include_action)


def serialize(
    value: Portfolio | Sequence[RebalanceLine], include_action: bool = False
) -> str:
    """Serialize either a portfolio or a list of rebalance results."""
    if isinstance(value, Portfolio):
        return serialize_portfolio(value)
    return serialize_results(value, include_action=include_action)
