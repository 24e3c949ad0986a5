"""
Solar Portal - commission reconciliation service

Main FastAPI application with:
- Commission rule catalog (read-only)
- Payout reconciliation per deal and per sales rep
- Health checks
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from solar_portal import __version__
from solar_portal.api import api_router
from solar_portal.config import settings
from solar_portal.db import engine

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Shutdown:
    - Disposes the database engine
    """
    logger.info("Starting Solar Portal...")
    logger.info(
        f"Drift threshold: {settings.drift_threshold}, "
        f"unassigned rep label: '{settings.unassigned_rep_label}'"
    )

    yield

    logger.info("Shutting down Solar Portal...")
    await engine.dispose()


# Create FastAPI application
app = FastAPI(
    title="Solar Portal",
    description="Commission rule resolution and payout reconciliation",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
)

app.include_router(api_router)  # /api/* endpoints


@app.get("/", include_in_schema=False)
async def root():
    """Redirect root to the reconciliation report."""
    return RedirectResponse(url="/api/commissions/reconciliation", status_code=302)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "solar_portal.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production,
    )
