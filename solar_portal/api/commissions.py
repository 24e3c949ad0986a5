"""Commission reconciliation API endpoints (read-only)."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from solar_portal.config import settings
from solar_portal.db import get_db
from solar_portal.schemas.commission import (
    CommissionRuleListResponse,
    CommissionRuleResponse,
    DealDetailResponse,
    PayoutPreviewResponse,
    ReconciliationResponse,
)
from solar_portal.services.commission_engine import evaluate, preview_payout, reconcile_deal
from solar_portal.services.rule_store import load_deal, load_deals, load_rules
from solar_portal.services.snapshots import Deal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/commissions", tags=["Commissions"])


@router.get("/reconciliation", response_model=ReconciliationResponse)
async def get_reconciliation(
    db: AsyncSession = Depends(get_db),
    as_of: Optional[date] = Query(None, description="Evaluation date (default: today)"),
    start_date: Optional[date] = Query(None, description="Deals closed on or after"),
    end_date: Optional[date] = Query(None, description="Deals closed on or before"),
    sales_rep: Optional[str] = Query(None, max_length=255),
):
    """Reconcile recorded agent payouts against the commission rule catalog."""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date must not be after end_date",
        )

    rules = await load_rules(db)
    deals = await load_deals(
        db,
        start_date=start_date,
        end_date=end_date,
        sales_rep=sales_rep,
        unassigned_label=settings.unassigned_rep_label,
    )

    report = evaluate(
        deals,
        rules,
        as_of=as_of or date.today(),
        drift_threshold=settings.drift_threshold,
        unassigned_label=settings.unassigned_rep_label,
    )
    return ReconciliationResponse.from_report(report)


@router.get("/deals/{deal_id}", response_model=DealDetailResponse)
async def get_deal_reconciliation(
    deal_id: int,
    db: AsyncSession = Depends(get_db),
    as_of: Optional[date] = Query(None, description="Evaluation date (default: today)"),
):
    """Show which rule governs one deal and how its payout compares."""
    deal = await load_deal(db, deal_id)
    if deal is None:
        logger.warning(f"Deal {deal_id} not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Deal not found",
        )

    rules = await load_rules(db)
    detail = reconcile_deal(
        deal,
        rules,
        as_of or date.today(),
        drift_threshold=settings.drift_threshold,
    )
    return DealDetailResponse.from_detail(detail)


@router.get("/rules", response_model=CommissionRuleListResponse)
async def list_rules(
    db: AsyncSession = Depends(get_db),
    as_of: Optional[date] = Query(None, description="Date statuses are computed for"),
    active_only: bool = Query(False),
):
    """List commission rules with their status on as_of."""
    as_of = as_of or date.today()
    rules = await load_rules(db, active_only=active_only)

    return CommissionRuleListResponse(
        as_of=as_of,
        items=[CommissionRuleResponse.from_rule(rule, as_of) for rule in rules],
        total=len(rules),
    )


@router.get("/preview", response_model=PayoutPreviewResponse)
async def preview_commission(
    db: AsyncSession = Depends(get_db),
    as_of: Optional[date] = Query(None, description="Evaluation date (default: today)"),
    sales_rep: Optional[str] = Query(None, max_length=255),
    team: Optional[str] = Query(None, max_length=255),
    install_partner: Optional[str] = Query(None, max_length=255),
    state: Optional[str] = Query(None, max_length=20),
    contract_value: Optional[Decimal] = Query(None, ge=0),
    kw_system: Optional[Decimal] = Query(None, ge=0),
    net_price_per_watt: Optional[Decimal] = Query(None, ge=0),
):
    """Which rule would govern a hypothetical deal, and what the agent would earn."""
    as_of = as_of or date.today()
    deal = Deal(
        id=None,
        sales_rep=sales_rep,
        team=team,
        install_partner=install_partner,
        state=state,
        contract_value=contract_value,
        kw_system=kw_system,
        net_price_per_watt=net_price_per_watt,
    )

    rules = await load_rules(db)
    preview = preview_payout(deal, rules, as_of)
    return PayoutPreviewResponse.from_preview(preview, as_of)
