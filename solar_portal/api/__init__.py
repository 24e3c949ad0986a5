"""API router aggregation."""

from fastapi import APIRouter

from solar_portal.api.commissions import router as commissions_router
from solar_portal.api.health import router as health_router

# Main API router (for /api/* endpoints)
api_router = APIRouter(prefix="/api")

api_router.include_router(health_router)
api_router.include_router(commissions_router)

__all__ = ["api_router"]
