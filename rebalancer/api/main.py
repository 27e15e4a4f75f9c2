"""
FastAPI main application for the portfolio rebalancer.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rebalancer import __version__
from rebalancer.core.exceptions.rebalance import RebalancerException

from .errors import rebalancer_exception_handler
from .routers import portfolio, rebalance

app = FastAPI(
    title="Portfolio Rebalancer API",
    version=__version__,
    description="API for distributing new contributions across a target allocation",
)

# Development frontends; production origins belong in deployment config
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:8080",
    ],
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Accept", "Origin"],
)

app.add_exception_handler(RebalancerException, rebalancer_exception_handler)  # type: ignore[arg-type]

app.include_router(portfolio.router, prefix="/api/portfolio", tags=["portfolio"])
app.include_router(rebalance.router, prefix="/api/rebalance", tags=["rebalance"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint returning API information."""
    return {"message": "Portfolio Rebalancer API", "version": __version__, "status": "running"}


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
