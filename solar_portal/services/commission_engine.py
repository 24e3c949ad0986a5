"""
Commission reconciliation engine.

Runs rule matching, payout calculation and drift detection for every
deal in a snapshot, then groups the results per sales rep. The engine
is a pure function of (deals, rules, as_of): no I/O, no shared state.
A result is only valid for the as_of it was computed at, because rule
windows move with the date.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from solar_portal.services.aggregator import UNASSIGNED_REP, aggregate_by_rep
from solar_portal.services.payout import (
    DRIFT_THRESHOLD,
    calculate_payout,
    commission_basis_amount,
    detect_drift,
)
from solar_portal.services.rule_matcher import match_rule
from solar_portal.services.snapshots import (
    ZERO,
    CommissionRule,
    Deal,
    DealDetail,
    PayoutPreview,
    ReconciliationReport,
    to_date,
    to_decimal,
)

logger = logging.getLogger(__name__)


def reconcile_deal(
    deal: Deal,
    rules: Iterable[CommissionRule],
    as_of: date,
    drift_threshold: Decimal = DRIFT_THRESHOLD,
) -> DealDetail:
    """Build the reconciliation line for a single deal."""
    rule = match_rule(deal, rules, as_of)
    calculated = calculate_payout(rule, deal)
    actual = to_decimal(deal.agent_payout)
    drift = detect_drift(calculated, actual, drift_threshold)

    return DealDetail(
        deal=deal,
        matched_rule=rule,
        calculated_payout=calculated,
        actual_payout=actual,
        drift_amount=drift.diff,
        has_drift=drift.has_drift,
    )


def evaluate(
    deals: Optional[Iterable[Deal]],
    rules: Optional[Iterable[CommissionRule]],
    as_of: Optional[date] = None,
    drift_threshold: Decimal = DRIFT_THRESHOLD,
    unassigned_label: str = UNASSIGNED_REP,
) -> ReconciliationReport:
    """
    Reconcile a batch of deals against a rule catalog.

    Args:
        deals: Closed deals to check (None is treated as empty)
        rules: Commission rules in store order (None is treated as empty)
        as_of: Evaluation date; defaults to today at this boundary only
        drift_threshold: Allowed |actual - calculated| before flagging
        unassigned_label: Rep name for deals without a sales rep

    Returns:
        ReconciliationReport with per-deal details, rep summaries and
        the subset of details flagged as drift
    """
    as_of = to_date(as_of) or date.today()

    rule_list = list(rules or ())
    details = [
        reconcile_deal(deal, rule_list, as_of, drift_threshold)
        for deal in deals or ()
    ]

    rep_summaries = aggregate_by_rep(details, unassigned_label)
    drift_deals = [d for d in details if d.has_drift]

    matched = sum(1 for d in details if d.matched_rule is not None)
    logger.info(
        f"Commission reconciliation as of {as_of}: {len(details)} deals, "
        f"{matched} matched, {len(drift_deals)} with drift, "
        f"{len(rep_summaries)} reps"
    )

    return ReconciliationReport(
        as_of=as_of,
        deal_details=details,
        rep_summaries=rep_summaries,
        drift_deals=drift_deals,
    )


def preview_payout(
    deal: Deal,
    rules: Optional[Iterable[CommissionRule]],
    as_of: date,
) -> PayoutPreview:
    """
    Resolve the rule for a hypothetical deal and compute the agent payout.

    Only the agent side is calculated; manager, setter and company margin
    fields on the rule stay reserved.
    """
    rule = match_rule(deal, rules, as_of)
    if rule is None:
        return PayoutPreview(deal=deal, matched_rule=None, basis_amount=ZERO, agent_payout=ZERO)

    return PayoutPreview(
        deal=deal,
        matched_rule=rule,
        basis_amount=commission_basis_amount(rule, deal),
        agent_payout=calculate_payout(rule, deal),
    )
