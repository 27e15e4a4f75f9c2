"""
Rebalance API endpoints.
"""

from datetime import date

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from rebalancer.core.exceptions.rebalance import unwrap
from rebalancer.core.models.rebalance import RebalanceLine, RebalanceRequest, RebalanceSummary
from rebalancer.core.models.rebalance_engine import rebalance
from rebalancer.infrastructure.data.csv_codec import serialize_results

from ..schemas.api_models import RebalancePayload, RebalanceResponse

router = APIRouter()


def _calculate(payload: RebalancePayload) -> tuple[RebalanceRequest, list[RebalanceLine]]:
    request = RebalanceRequest.from_raw(payload.contribution, payload.allow_selling)
    lines = unwrap(rebalance(payload.portfolio.to_domain(), request))
    return request, lines


@router.post("")
async def calculate_rebalance(payload: RebalancePayload) -> RebalanceResponse:
    """Distribute a contribution across the portfolio."""
    request, lines = _calculate(payload)
    return RebalanceResponse.model_validate(
        {
            "contribution": request.contribution,
            "allow_selling": request.allow_selling,
            "lines": [line.to_dict() for line in lines],
            "summary": RebalanceSummary.from_lines(lines).to_dict(),
        }
    )


@router.post("/export", response_class=PlainTextResponse)
async def export_rebalance(
    payload: RebalancePayload, include_action: bool = True
) -> PlainTextResponse:
    """Calculate a rebalance and return the results as CSV."""
    _, lines = _calculate(payload)
    filename = f"rebalance_results_{date.today().isoformat()}.csv"
    return PlainTextResponse(
        serialize_results(lines, include_action=include_action),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
