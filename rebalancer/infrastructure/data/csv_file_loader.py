"""
CSV File Loading utilities.

This module reads portfolio CSV files from disk and writes exports back,
delegating all parsing to the portfolio codec.
"""

from pathlib import Path

from loguru import logger

from rebalancer.core.constants import MAX_CSV_BYTES
from rebalancer.core.exceptions.rebalance import CsvParseError, DataError
from rebalancer.core.models.portfolio import Portfolio

from .csv_codec import parse_portfolio_csv


class CSVFileLoader:
    """Handles reading and writing portfolio CSV files."""

    def __init__(self, max_bytes: int = MAX_CSV_BYTES):
        """Initialize the file loader with a size limit."""
        self.max_bytes = max_bytes

    def load_portfolio(self, file_path: Path) -> Portfolio | CsvParseError:
        """Load a portfolio CSV file.

        Returns:
            The parsed portfolio, or the parse error for its contents

        Raises:
            DataError: If the file is missing, too large or unreadable
        """
        text = self.read_text(file_path)
        return parse_portfolio_csv(text)

    def read_text(self, file_path: Path) -> str:
        """Read a CSV file as UTF-8 text (a leading BOM is dropped)."""
        if not file_path.exists():
            raise DataError(f"Portfolio file not found: {file_path}")

        try:
            size = file_path.stat().st_size
            if size > self.max_bytes:
                raise DataError(
                    f"Portfolio file {file_path.name} too large: {size} bytes "
                    f"(maximum {self.max_bytes})"
                )
            logger.debug(f"Loading file: {file_path}")
            return file_path.read_text(encoding="utf-8-sig")
        except OSError as e:
            logger.error(f"File system error loading {file_path.name}: {str(e)}")
            raise DataError(f"File system error loading {file_path.name}") from e
        except UnicodeDecodeError as e:
            logger.error(f"Encoding error loading {file_path.name}: {str(e)}")
            raise DataError(f"File {file_path.name} is not valid UTF-8 text") from e

    @staticmethod
    def write_text(file_path: Path, text: str) -> Path:
        """Write CSV text to ``file_path``, creating parent directories."""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(text, encoding="utf-8")
        except OSError as e:
            logger.error(f"File system error writing {file_path.name}: {str(e)}")
            raise DataError(f"File system error writing {file_path.name}") from e

        logger.debug(f"Wrote {len(text)} characters to {file_path}")
        return file_path


def load_portfolio_file(file_path: Path | str) -> Portfolio | CsvParseError:
    """Load a portfolio from a CSV file."""
    return CSVFileLoader().load_portfolio(Path(file_path))


def write_csv_file(file_path: Path | str, text: str) -> Path:
    """Write exported CSV text to a file."""
    return CSVFileLoader.write_text(Path(file_path), text)
