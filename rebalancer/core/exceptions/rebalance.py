"""
Custom exception hierarchy for the portfolio rebalancer.

This module defines domain-specific exceptions for better error handling.
Core operations return these as typed results instead of raising them,
so every class carries a stable ``code`` and a user-facing message.
"""

from typing import Any


class RebalancerException(Exception):
    """Base exception for all rebalancer errors."""

    code = "REBALANCER_ERROR"

    def details(self) -> dict[str, Any]:
        """Structured context for API error payloads."""
        return {}


class ValidationError(RebalancerException):
    """Raised when input validation fails."""

    code = "VALIDATION_ERROR"


class DataError(RebalancerException):
    """Raised when data access or processing fails."""

    code = "DATA_ERROR"


class ConfigurationError(RebalancerException):
    """Raised when configuration is invalid."""

    code = "CONFIGURATION_ERROR"


class PortfolioError(RebalancerException):
    """Raised when portfolio operations fail."""

    code = "PORTFOLIO_ERROR"


class PortfolioValidationError(ValidationError):
    """A candidate portfolio breaks one of the pre-calculation invariants."""

    code = "PORTFOLIO_INVALID"


class EmptyPortfolioError(PortfolioValidationError):
    """Raised when a portfolio has no lines."""

    code = "EMPTY_PORTFOLIO"

    def __init__(self) -> None:
        super().__init__("Portfolio cannot be empty")


class TargetSumMismatchError(PortfolioValidationError):
    """Raised when target allocations do not sum to 1.0."""

    code = "TARGET_SUM_MISMATCH"

    def __init__(self, actual_sum: float, tolerance: float):
        self.actual_sum = actual_sum
        self.tolerance = tolerance
        super().__init__(
            f"Target allocations must sum to 100% (1.0), got {actual_sum:.4f} "
            f"(tolerance {tolerance})"
        )

    def details(self) -> dict[str, Any]:
        return {"actual_sum": self.actual_sum, "tolerance": self.tolerance}


class NegativeBalanceError(PortfolioValidationError):
    """Raised when a fund carries a negative balance."""

    code = "NEGATIVE_BALANCE"

    def __init__(self, fund: str, balance: float):
        self.fund = fund
        self.balance = balance
        super().__init__(f"Balances cannot be negative: {fund} has {balance:.2f}")

    def details(self) -> dict[str, Any]:
        return {"fund": self.fund, "balance": self.balance}


class InvalidContributionError(ValidationError):
    """Raised when the contribution is non-numeric, zero or negative."""

    code = "INVALID_CONTRIBUTION"

    def __init__(self, contribution: Any):
        self.contribution = contribution
        super().__init__(
            f"Please enter a valid amount of dollars to add, got {contribution!r}"
        )

    def details(self) -> dict[str, Any]:
        return {"contribution": repr(self.contribution)}


class InvalidEntryError(ValidationError):
    """Raised when a manually entered fund field cannot be used."""

    code = "INVALID_ENTRY"

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")

    def details(self) -> dict[str, Any]:
        return {"field": self.field, "value": repr(self.value), "reason": self.reason}


class SellingRequiredError(PortfolioError):
    """Raised when reaching the targets needs selling but selling is disallowed.

    This is a single condition for the whole batch. ``funds`` lists the lines
    that would need a negative contribution, for context only.
    """

    code = "SELLING_REQUIRED"

    def __init__(self, funds: list[str]):
        self.funds = list(funds)
        super().__init__(
            "Some funds require selling to reach target allocation. "
            "Enable 'Allow negative contributions' or add more money."
        )

    def details(self) -> dict[str, Any]:
        return {"funds": self.funds}


class PortfolioEditError(PortfolioError):
    """Raised when an edit addresses a line that does not exist."""

    code = "PORTFOLIO_EDIT_ERROR"

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Line index {index} out of range for portfolio of {size} lines")

    def details(self) -> dict[str, Any]:
        return {"index": self.index, "size": self.size}


class CsvParseError(DataError):
    """Raised when CSV text cannot be turned into a portfolio."""

    code = "CSV_PARSE_ERROR"


class MalformedCsvError(CsvParseError):
    """Raised when the CSV lacks a header or data rows."""

    code = "MALFORMED_CSV"

    def __init__(self, line_count: int):
        self.line_count = line_count
        super().__init__("CSV must have at least a header and one data row")

    def details(self) -> dict[str, Any]:
        return {"line_count": self.line_count}


class MissingColumnsError(CsvParseError):
    """Raised when the CSV header lacks a required column."""

    code = "MISSING_COLUMNS"

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            f"CSV must contain Fund, Balance, and Target columns (missing: {', '.join(missing)})"
        )

    def details(self) -> dict[str, Any]:
        return {"missing": self.missing}


class InvalidNumericValueError(CsvParseError):
    """Raised when a balance or target field is not a number."""

    code = "INVALID_NUMERIC_VALUE"

    def __init__(self, row: int, column: str, value: str):
        self.row = row
        self.column = column
        self.value = value
        super().__init__(f"Invalid numeric values in row {row} ({column}={value!r})")

    def details(self) -> dict[str, Any]:
        return {"row": self.row, "column": self.column, "value": self.value}


RebalanceError = PortfolioValidationError | InvalidContributionError | SellingRequiredError


def is_error(result: object) -> bool:
    """Check whether a core operation returned a typed error."""
    return isinstance(result, RebalancerException)


def unwrap[T](result: T | RebalancerException) -> T:
    """Return a successful result or raise the typed error it carries."""
    if isinstance(result, RebalancerException):
        raise result
    return result
