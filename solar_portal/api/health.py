"""
Service health for the commission reconciliation API.

/ready reports ready only when the rule catalog and the deals table can
both be read.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from solar_portal import __version__
from solar_portal.db import get_db
from solar_portal.models import CommissionRuleRecord, DealRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


class CatalogReadiness(BaseModel):
    """Readiness of the commission store."""

    status: str
    rule_count: int = 0
    active_rule_count: int = 0
    newest_active_rule_start: Optional[date] = None
    deal_count: int = 0
    error: Optional[str] = None


@router.get("")
async def health_check():
    """Process is up; does not touch the database."""
    return {"status": "healthy", "service": "solar-portal", "version": __version__}


@router.get("/ready", response_model=CatalogReadiness)
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """
    Check that commission_rules and deals are readable.

    Reports the catalog size and the start date of the most recently
    effective active rule.
    """
    try:
        rule_count = await db.scalar(
            select(func.count()).select_from(CommissionRuleRecord)
        )
        active_rule_count, newest_start = (
            await db.execute(
                select(
                    func.count(),
                    func.max(CommissionRuleRecord.effective_start),
                ).where(CommissionRuleRecord.is_active.is_(True))
            )
        ).one()
        deal_count = await db.scalar(
            select(func.count()).select_from(DealRecord)
        )
    except SQLAlchemyError as e:
        logger.error(f"Commission store not readable: {e}")
        return CatalogReadiness(status="not_ready", error=str(e))

    return CatalogReadiness(
        status="ready",
        rule_count=rule_count or 0,
        active_rule_count=active_rule_count or 0,
        newest_active_rule_start=newest_start,
        deal_count=deal_count or 0,
    )


@router.get("/live")
async def liveness_check():
    """Liveness probe for the container platform."""
    return {"status": "alive"}
