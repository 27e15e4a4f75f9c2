"""
Translation of typed rebalancer errors into HTTP responses.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from rebalancer.core.exceptions.rebalance import RebalancerException

from .schemas.api_models import ErrorResponse


def error_response(error: RebalancerException) -> ErrorResponse:
    """Build the API error body for a typed error."""
    return ErrorResponse(error=error.code, message=str(error), details=error.details() or None)


async def rebalancer_exception_handler(
    request: Request, exc: RebalancerException
) -> JSONResponse:
    """Render any typed rebalancer error as 422 with an ErrorResponse body."""
    logger.info(f"{request.method} {request.url.path} rejected: {exc.code}")
    return JSONResponse(
        status_code=422,
        content=error_response(exc).model_dump(),
    )
