"""
Portfolio domain model.

A Portfolio is an immutable, ordered collection of fund lines. Every edit
returns a new Portfolio; callers store the returned value as their current
state. Order is kept for display and export only.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from typing import Any, overload

from rebalancer.core.exceptions.rebalance import PortfolioEditError


@dataclass(frozen=True)
class PortfolioLine:
    """One fund position.

    ``target`` is a fraction of the whole portfolio (0.6, not 60). Balance and
    target invariants are checked by the portfolio validator so that invalid
    candidates can still be represented and reported.
    """

    fund: str
    balance: float
    target: float

    def to_dict(self) -> dict[str, Any]:
        """Convert line to dictionary."""
        return {"fund": self.fund, "balance": self.balance, "target": self.target}


@dataclass(frozen=True)
class Portfolio:
    """Ordered, immutable sequence of PortfolioLine.

    Duplicate fund names are allowed and treated as distinct lines.
    """

    lines: tuple[PortfolioLine, ...] = ()

    @classmethod
    def from_lines(cls, lines: Iterable[PortfolioLine]) -> "Portfolio":
        """Build a portfolio from any iterable of lines, keeping order."""
        return cls(tuple(lines))

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "Portfolio":
        """Build a portfolio from ``{"fund", "balance", "target"}`` mappings."""
        return cls(
            tuple(
                PortfolioLine(
                    fund=record["fund"],
                    balance=float(record["balance"]),
                    target=float(record["target"]),
                )
                for record in records
            )
        )

    @classmethod
    def empty(cls) -> "Portfolio":
        """Create a portfolio with no lines."""
        return cls()

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[PortfolioLine]:
        return iter(self.lines)

    @overload
    def __getitem__(self, index: int) -> PortfolioLine: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[PortfolioLine, ...]: ...

    def __getitem__(self, index: int | slice) -> PortfolioLine | tuple[PortfolioLine, ...]:
        return self.lines[index]

    def __bool__(self) -> bool:
        return bool(self.lines)

    def funds(self) -> list[str]:
        """Get fund names in portfolio order."""
        return [line.fund for line in self.lines]

    def total_balance(self) -> float:
        """Calculate the sum of all balances."""
        return sum((line.balance for line in self.lines), 0.0)

    def target_sum(self) -> float:
        """Calculate the sum of all target fractions."""
        return sum((line.target for line in self.lines), 0.0)

    def add_line(self, line: PortfolioLine) -> "Portfolio":
        """Return a new portfolio with ``line`` appended."""
        return Portfolio(self.lines + (line,))

    def remove_line(self, index: int) -> "Portfolio":
        """Return a new portfolio without the line at ``index``.

        Raises:
            PortfolioEditError: If index is out of range
        """
        position = self._resolve_index(index)
        return Portfolio(self.lines[:position] + self.lines[position + 1 :])

    def update_line(
        self,
        index: int,
        *,
        fund: str | None = None,
        balance: float | None = None,
        target: float | None = None,
    ) -> "Portfolio":
        """Return a new portfolio with selected fields of one line replaced.

        Raises:
            PortfolioEditError: If index is out of range
        """
        position = self._resolve_index(index)
        changes: dict[str, Any] = {}
        if fund is not None:
            changes["fund"] = fund
        if balance is not None:
            changes["balance"] = balance
        if target is not None:
            changes["target"] = target

        updated = replace(self.lines[position], **changes)
        return Portfolio(self.lines[:position] + (updated,) + self.lines[position + 1 :])

    def to_records(self) -> list[dict[str, Any]]:
        """Convert portfolio to a list of dictionaries."""
        return [line.to_dict() for line in self.lines]

    def _resolve_index(self, index: int) -> int:
        """Map a possibly negative index onto the line tuple."""
        size = len(self.lines)
        if not -size <= index < size:
            raise PortfolioEditError(index, size)
        return index % size
