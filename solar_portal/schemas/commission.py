"""Commission reconciliation response schemas."""

from datetime import date
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel

from solar_portal.services.rule_matcher import RuleStatus, rule_status
from solar_portal.services.snapshots import (
    WILDCARD,
    CommissionRule,
    DealDetail,
    PayoutPreview,
    ReconciliationReport,
    RepSummary,
    Scope,
    to_decimal,
)


def _scope_value(value: Scope) -> Optional[str]:
    """WILDCARD is rendered as null for clients."""
    return None if value is WILDCARD else value


class CommissionRuleResponse(BaseModel):
    """Commission rule as shown in reconciliation views."""

    id: Any
    name: str

    # Scope (null = any)
    sales_rep: Optional[str]
    team: Optional[str]
    install_partner: Optional[str]
    state: Optional[str]

    commission_basis: str
    agent_commission_pct: Optional[Decimal]
    agent_flat_amount: Optional[Decimal]
    manager_commission_pct: Optional[Decimal]
    manager_flat_amount: Optional[Decimal]
    setter_commission_pct: Optional[Decimal]
    setter_flat_amount: Optional[Decimal]
    company_margin_pct: Optional[Decimal]

    effective_start: Optional[date]
    effective_end: Optional[date]
    is_active: bool
    priority: int
    status: Optional[RuleStatus] = None

    @classmethod
    def from_rule(
        cls,
        rule: CommissionRule,
        as_of: Optional[date] = None,
    ) -> "CommissionRuleResponse":
        return cls(
            id=rule.id,
            name=rule.name,
            sales_rep=_scope_value(rule.sales_rep),
            team=_scope_value(rule.team),
            install_partner=_scope_value(rule.install_partner),
            state=_scope_value(rule.state),
            commission_basis=rule.commission_basis.value,
            agent_commission_pct=rule.agent_commission_pct,
            agent_flat_amount=rule.agent_flat_amount,
            manager_commission_pct=rule.manager_commission_pct,
            manager_flat_amount=rule.manager_flat_amount,
            setter_commission_pct=rule.setter_commission_pct,
            setter_flat_amount=rule.setter_flat_amount,
            company_margin_pct=rule.company_margin_pct,
            effective_start=rule.effective_start,
            effective_end=rule.effective_end,
            is_active=rule.is_active,
            priority=rule.priority,
            status=rule_status(rule, as_of) if as_of is not None else None,
        )


class DealDetailResponse(BaseModel):
    """Reconciliation line for one deal."""

    deal_id: Any
    customer_name: Optional[str]
    sales_rep: Optional[str]
    state: Optional[str]
    contract_value: Decimal
    matched_rule: Optional[CommissionRuleResponse]
    calculated_payout: Decimal
    actual_payout: Decimal
    drift_amount: Decimal  # actual - calculated
    has_drift: bool

    @classmethod
    def from_detail(cls, detail: DealDetail) -> "DealDetailResponse":
        deal = detail.deal
        return cls(
            deal_id=deal.id,
            customer_name=deal.customer_name,
            sales_rep=deal.sales_rep,
            state=deal.state,
            contract_value=to_decimal(deal.contract_value),
            matched_rule=(
                CommissionRuleResponse.from_rule(detail.matched_rule)
                if detail.matched_rule is not None
                else None
            ),
            calculated_payout=detail.calculated_payout,
            actual_payout=detail.actual_payout,
            drift_amount=detail.drift_amount,
            has_drift=detail.has_drift,
        )


class RepSummaryResponse(BaseModel):
    """Per-rep totals."""

    rep_name: str
    representative_rule: Optional[CommissionRuleResponse]
    total_deals: int
    total_contract_value: Decimal
    total_actual_payout: Decimal
    total_calculated_payout: Decimal
    drift_count: int
    deals: List[DealDetailResponse]

    @classmethod
    def from_summary(cls, summary: RepSummary) -> "RepSummaryResponse":
        return cls(
            rep_name=summary.rep_name,
            representative_rule=(
                CommissionRuleResponse.from_rule(summary.representative_rule)
                if summary.representative_rule is not None
                else None
            ),
            total_deals=summary.total_deals,
            total_contract_value=summary.total_contract_value,
            total_actual_payout=summary.total_actual_payout,
            total_calculated_payout=summary.total_calculated_payout,
            drift_count=summary.drift_count,
            deals=[DealDetailResponse.from_detail(d) for d in summary.deals],
        )


class ReconciliationResponse(BaseModel):
    """Full reconciliation report."""

    as_of: date
    deal_details: List[DealDetailResponse]
    rep_summaries: List[RepSummaryResponse]
    drift_deals: List[DealDetailResponse]

    @classmethod
    def from_report(cls, report: ReconciliationReport) -> "ReconciliationResponse":
        return cls(
            as_of=report.as_of,
            deal_details=[DealDetailResponse.from_detail(d) for d in report.deal_details],
            rep_summaries=[RepSummaryResponse.from_summary(s) for s in report.rep_summaries],
            drift_deals=[DealDetailResponse.from_detail(d) for d in report.drift_deals],
        )


class CommissionRuleListResponse(BaseModel):
    """Rule catalog with statuses as of a date."""

    as_of: date
    items: List[CommissionRuleResponse]
    total: int


class PayoutPreviewResponse(BaseModel):
    """What-if agent payout for a hypothetical deal."""

    as_of: date
    matched_rule: Optional[CommissionRuleResponse]
    basis_amount: Decimal
    agent_payout: Decimal

    @classmethod
    def from_preview(cls, preview: PayoutPreview, as_of: date) -> "PayoutPreviewResponse":
        return cls(
            as_of=as_of,
            matched_rule=(
                CommissionRuleResponse.from_rule(preview.matched_rule, as_of)
                if preview.matched_rule is not None
                else None
            ),
            basis_amount=preview.basis_amount,
            agent_payout=preview.agent_payout,
        )
