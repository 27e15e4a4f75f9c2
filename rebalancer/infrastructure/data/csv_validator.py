"""
CSV Data Validation utilities.

This module provides structure and numeric validation for portfolio CSV text.
Checks raise typed parse errors; the codec turns them into returned results.
"""

from rebalancer.core.constants import CSV_REQUIRED_COLUMNS
from rebalancer.core.exceptions.rebalance import (
    InvalidNumericValueError,
    MalformedCsvError,
    MissingColumnsError,
)
from rebalancer.core.types.financial import parse_finite


class CSVValidator:
    """Handles validation of portfolio CSV structure and values."""

    @staticmethod
    def validate_line_count(lines: list[str]) -> None:
        """Validate the text has a header and at least one data row."""
        if len(lines) < 2:
            raise MalformedCsvError(line_count=len(lines))

    @staticmethod
    def normalize_header(header_line: str) -> list[str]:
        """Split a header row into trimmed, lower-cased column names."""
        return [name.strip().lower() for name in header_line.split(",")]

    @staticmethod
    def resolve_columns(header: list[str]) -> dict[str, int]:
        """Map each required column to its position in the header.

        Column order is free and extra columns are ignored. When a name
        repeats, its first occurrence is used.

        Raises:
            MissingColumnsError: If any required column is absent
        """
        missing = [column for column in CSV_REQUIRED_COLUMNS if column not in header]
        if missing:
            raise MissingColumnsError(missing)
        return {column: header.index(column) for column in CSV_REQUIRED_COLUMNS}

    @staticmethod
    def parse_numeric_field(value: str, column: str, row: int) -> float:
        """Parse a balance or target field.

        Args:
            value: Trimmed field text
            column: Column name for error context
            row: 1-based line number in the CSV text

        Returns:
            The parsed finite number

        Raises:
            InvalidNumericValueError: If the field is not a finite number
        """
        number = parse_finite(value)
        if number is None:
            raise InvalidNumericValueError(row=row, column=column, value=value)
        return number
