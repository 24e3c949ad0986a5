"""
Read path from the portal database into engine snapshots.

The reconciliation engine never writes; these helpers only select rows
and copy them into immutable CommissionRule / Deal snapshots.
"""

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from solar_portal.models import CommissionRuleRecord, DealRecord
from solar_portal.services.aggregator import UNASSIGNED_REP
from solar_portal.services.snapshots import CommissionRule, Deal

logger = logging.getLogger(__name__)


def rule_from_row(row: CommissionRuleRecord) -> CommissionRule:
    """Snapshot a commission rule row (NULL scope columns become WILDCARD)."""
    return CommissionRule(
        id=row.id,
        name=row.name,
        effective_start=row.effective_start,
        effective_end=row.effective_end,
        is_active=bool(row.is_active),
        priority=row.priority if row.priority is not None else 0,
        sales_rep=row.sales_rep,
        team=row.team,
        install_partner=row.install_partner,
        state=row.state,
        commission_basis=row.commission_basis,
        agent_commission_pct=row.agent_commission_pct,
        agent_flat_amount=row.agent_flat_amount,
        manager_commission_pct=row.manager_commission_pct,
        manager_flat_amount=row.manager_flat_amount,
        setter_commission_pct=row.setter_commission_pct,
        setter_flat_amount=row.setter_flat_amount,
        company_margin_pct=row.company_margin_pct,
    )


def deal_from_row(row: DealRecord) -> Deal:
    """Snapshot a deal row."""
    return Deal(
        id=row.id,
        customer_name=row.customer_name,
        sales_rep=row.sales_rep,
        team=row.team,
        install_partner=row.install_partner,
        company=row.company,
        state=row.state,
        contract_value=row.contract_value,
        kw_system=row.kw_system,
        net_price_per_watt=row.net_price_per_watt,
        agent_payout=row.agent_payout,
        date_closed=row.date_closed,
    )


async def load_rules(
    db: AsyncSession,
    active_only: bool = False,
) -> List[CommissionRule]:
    """
    Load the rule catalog ordered by priority descending.

    Within one priority the store returns rules by id, and that order is
    what the matcher uses to break ties.
    """
    query = select(CommissionRuleRecord)
    if active_only:
        query = query.where(CommissionRuleRecord.is_active.is_(True))
    query = query.order_by(
        CommissionRuleRecord.priority.desc(),
        CommissionRuleRecord.id.asc(),
    )

    result = await db.execute(query)
    rules = [rule_from_row(row) for row in result.scalars().all()]
    logger.debug(f"Loaded {len(rules)} commission rules")
    return rules


async def load_deals(
    db: AsyncSession,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    sales_rep: Optional[str] = None,
    unassigned_label: str = UNASSIGNED_REP,
) -> List[Deal]:
    """
    Load closed deals, optionally limited to a close-date period and one rep.

    Passing the unassigned label as sales_rep selects deals without a rep,
    the same group the aggregator reports under that label.
    """
    query = select(DealRecord)

    if start_date:
        query = query.where(DealRecord.date_closed >= start_date)

    if end_date:
        query = query.where(DealRecord.date_closed <= end_date)

    if sales_rep and sales_rep == unassigned_label:
        query = query.where(
            or_(
                DealRecord.sales_rep.is_(None),
                DealRecord.sales_rep == "",
                DealRecord.sales_rep == unassigned_label,
            )
        )
    elif sales_rep:
        query = query.where(DealRecord.sales_rep == sales_rep)

    query = query.order_by(DealRecord.date_closed.asc(), DealRecord.id.asc())

    result = await db.execute(query)
    deals = [deal_from_row(row) for row in result.scalars().all()]
    logger.debug(f"Loaded {len(deals)} deals")
    return deals


async def load_deal(db: AsyncSession, deal_id: int) -> Optional[Deal]:
    """Load a single deal by id, or None."""
    row = await db.get(DealRecord, deal_id)
    if row is None:
        return None
    return deal_from_row(row)
