"""
Expected payout calculation and drift detection.

Rules:
- contract basis: contract_value
- per_kw basis: kw_system x 1000 (kW -> W)
- net_price basis: net_price_per_watt x kw_system x 1000
- payout = basis x agent_commission_pct / 100 + agent_flat_amount
- drift when |actual - calculated| is strictly above the threshold
"""

from decimal import Decimal
from typing import Any, Optional

from solar_portal.services.snapshots import (
    ZERO,
    CommissionBasis,
    CommissionRule,
    Deal,
    DriftResult,
    to_decimal,
)

WATTS_PER_KW = Decimal("1000")
DRIFT_THRESHOLD = Decimal("1.00")  # one currency unit


def commission_basis_amount(rule: CommissionRule, deal: Deal) -> Decimal:
    """Monetary basis the rule's percentage applies to."""
    if rule.commission_basis == CommissionBasis.PER_KW:
        return to_decimal(deal.kw_system) * WATTS_PER_KW
    if rule.commission_basis == CommissionBasis.NET_PRICE:
        return to_decimal(deal.net_price_per_watt) * to_decimal(deal.kw_system) * WATTS_PER_KW
    return to_decimal(deal.contract_value)


def calculate_payout(rule: Optional[CommissionRule], deal: Deal) -> Decimal:
    """Calculate the agent payout a rule implies for a deal.

    Manager percentage/flat fields on the rule are not used. No rounding
    is applied; presentation decides how to display the amount.

    Args:
        rule: Matched rule, or None when nothing applied
        deal: The deal being paid

    Returns:
        Expected payout as Decimal (0 when rule is None)
    """
    if rule is None:
        return ZERO

    basis = commission_basis_amount(rule, deal)
    pct = rule.agent_commission_pct if rule.agent_commission_pct is not None else ZERO
    flat = rule.agent_flat_amount if rule.agent_flat_amount is not None else ZERO

    return basis * (pct / Decimal("100")) + flat


def detect_drift(
    calculated: Any,
    actual: Any,
    threshold: Decimal = DRIFT_THRESHOLD,
) -> DriftResult:
    """Compare recorded payout against the calculated one."""
    diff = to_decimal(actual) - to_decimal(calculated)
    return DriftResult(has_drift=abs(diff) > threshold, diff=diff)
