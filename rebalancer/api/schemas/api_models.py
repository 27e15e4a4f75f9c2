"""
Pydantic schemas for API request/response models.
"""

from pydantic import BaseModel, Field, field_validator

from rebalancer.core.constants import MAX_CSV_BYTES, MAX_FUND_NAME_LENGTH, MAX_PORTFOLIO_LINES
from rebalancer.core.models.portfolio import Portfolio, PortfolioLine


class PortfolioLineModel(BaseModel):
    """One fund position; ``target`` is a fraction (0.6 for 60%)."""

    fund: str = Field(..., min_length=1, max_length=MAX_FUND_NAME_LENGTH)
    balance: float = Field(..., allow_inf_nan=False, description="Current dollar balance")
    target: float = Field(..., allow_inf_nan=False, description="Target allocation fraction")

    @field_validator("fund")
    @classmethod
    def validate_fund(cls, v: str) -> str:
        """Reject labels that are only whitespace."""
        if not v.strip():
            raise ValueError("fund cannot be empty")
        return v.strip()

    @classmethod
    def from_domain(cls, line: PortfolioLine) -> "PortfolioLineModel":
        return cls(fund=line.fund, balance=line.balance, target=line.target)

    def to_domain(self) -> PortfolioLine:
        return PortfolioLine(fund=self.fund, balance=self.balance, target=self.target)


class PortfolioPayload(BaseModel):
    """A whole portfolio; every edit sends the complete collection."""

    lines: list[PortfolioLineModel] = Field(default_factory=list, max_length=MAX_PORTFOLIO_LINES)

    @classmethod
    def from_domain(cls, portfolio: Portfolio) -> "PortfolioPayload":
        return cls(lines=[PortfolioLineModel.from_domain(line) for line in portfolio])

    def to_domain(self) -> Portfolio:
        return Portfolio.from_lines(line.to_domain() for line in self.lines)


class RebalancePayload(BaseModel):
    """Request model for a rebalance calculation.

    ``contribution`` is left unconstrained here so that zero, negative or
    non-numeric amounts reach the engine and come back as its typed error.
    """

    portfolio: PortfolioPayload
    contribution: float | str
    allow_selling: bool = False


class CsvImportRequest(BaseModel):
    """Request model for CSV import."""

    csv_text: str = Field(..., max_length=MAX_CSV_BYTES)


class ErrorResponse(BaseModel):
    """Response model for errors."""

    error: str
    message: str
    details: dict | None = None


class ValidationResponse(BaseModel):
    """Response model for portfolio validation."""

    valid: bool
    error: ErrorResponse | None = None


class RebalanceLineModel(BaseModel):
    """One computed rebalance line."""

    fund: str
    dollars_to_add: float
    action: str
    allocation_of_contribution: float
    target_allocation: float
    difference_from_target: float


class RebalanceSummaryModel(BaseModel):
    """Buy and sell totals for a rebalance."""

    buy_total: float
    sell_total: float
    total_traded: float
    buy_count: int
    sell_count: int
    net_contribution: float


class RebalanceResponse(BaseModel):
    """Response model for a successful rebalance."""

    contribution: float
    allow_selling: bool
    lines: list[RebalanceLineModel]
    summary: RebalanceSummaryModel


class DerivedLineModel(BaseModel):
    """Display figures for one fund."""

    fund: str
    current_allocation_pct: float
    target_allocation_pct: float
    difference_pct: float
    status: str


class AllocationSummaryModel(BaseModel):
    """Portfolio-level drift summary."""

    total_balance: float
    fund_count: int
    overweight: list[str]
    underweight: list[str]
    balanced: list[str]
    largest_drift: DerivedLineModel | None = None


class MetricsResponse(BaseModel):
    """Response model for derived metrics."""

    lines: list[DerivedLineModel]
    summary: AllocationSummaryModel
    target_total_pct: float = Field(..., description="Sum of targets as a percentage")
    target_total_valid: bool = Field(..., description="Targets sum to 100% within tolerance")
