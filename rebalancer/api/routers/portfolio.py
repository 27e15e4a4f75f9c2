"""
Portfolio API endpoints.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from rebalancer.core.exceptions.rebalance import InvalidEntryError, ValidationError, unwrap
from rebalancer.core.models.portfolio import Portfolio
from rebalancer.core.models.portfolio_metrics import PortfolioMetrics
from rebalancer.core.models.portfolio_validator import validate_portfolio
from rebalancer.core.utils.validation import validate_fund_name
from rebalancer.infrastructure.data.csv_codec import parse_portfolio_csv, serialize_portfolio
from rebalancer.infrastructure.data.manual_entry import is_target_total_valid, target_total_pct

from ..errors import error_response
from ..schemas.api_models import (
    CsvImportRequest,
    MetricsResponse,
    PortfolioPayload,
    ValidationResponse,
)

router = APIRouter()


def _check_fund_names(portfolio: Portfolio) -> None:
    """Reject imported labels the portfolio payload cannot carry.

    Raises:
        InvalidEntryError: For the first empty or over-long fund name
    """
    for line in portfolio:
        try:
            validate_fund_name(line.fund)
        except ValidationError as e:
            raise InvalidEntryError("fund", line.fund, str(e)) from e


@router.post("/validate")
async def validate(payload: PortfolioPayload) -> ValidationResponse:
    """Check a portfolio against the pre-calculation invariants."""
    error = validate_portfolio(payload.to_domain())
    if error is None:
        return ValidationResponse(valid=True)
    return ValidationResponse(valid=False, error=error_response(error))


@router.post("/metrics")
async def metrics(payload: PortfolioPayload) -> MetricsResponse:
    """Get current allocation, drift and classification per fund."""
    portfolio = payload.to_domain()
    calculator = PortfolioMetrics(portfolio)
    return MetricsResponse.model_validate(
        {
            "lines": [line.to_dict() for line in calculator.derived_lines()],
            "summary": calculator.summary().to_dict(),
            "target_total_pct": target_total_pct(portfolio),
            "target_total_valid": is_target_total_valid(portfolio),
        }
    )


@router.post("/import")
async def import_csv(request: CsvImportRequest) -> PortfolioPayload:
    """Parse ``Fund,Balance,Target`` CSV text; targets are fractions."""
    portfolio = unwrap(parse_portfolio_csv(request.csv_text))
    _check_fund_names(portfolio)
    return PortfolioPayload.from_domain(portfolio)


@router.post("/export", response_class=PlainTextResponse)
async def export_csv(payload: PortfolioPayload) -> PlainTextResponse:
    """Export a portfolio as CSV."""
    return PlainTextResponse(
        serialize_portfolio(payload.to_domain()),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="portfolio.csv"'},
    )
