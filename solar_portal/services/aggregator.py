"""Per-representative aggregation of reconciliation lines."""

from typing import Dict, Iterable, List, Optional

from solar_portal.services.snapshots import DealDetail, RepSummary, to_decimal

UNASSIGNED_REP = "Unassigned"


def rep_key(detail: DealDetail, unassigned_label: str = UNASSIGNED_REP) -> str:
    """Group key for a detail: its sales rep, or the unassigned label."""
    return detail.deal.sales_rep or unassigned_label


def aggregate_by_rep(
    details: Optional[Iterable[DealDetail]],
    unassigned_label: str = UNASSIGNED_REP,
) -> List[RepSummary]:
    """
    Group deal details by sales rep and total them.

    representative_rule is the matched rule of the first detail seen for
    the rep. It does not imply the rep's other deals used the same rule.

    Returns:
        Summaries sorted by total contract value, largest first
    """
    summaries: Dict[str, RepSummary] = {}

    for detail in details or ():
        name = rep_key(detail, unassigned_label)
        summary = summaries.get(name)
        if summary is None:
            summary = RepSummary(
                rep_name=name,
                representative_rule=detail.matched_rule,
            )
            summaries[name] = summary

        summary.total_deals += 1
        summary.total_contract_value += to_decimal(detail.deal.contract_value)
        summary.total_actual_payout += detail.actual_payout
        summary.total_calculated_payout += detail.calculated_payout
        if detail.has_drift:
            summary.drift_count += 1
        summary.deals.append(detail)

    return sorted(
        summaries.values(),
        key=lambda s: s.total_contract_value,
        reverse=True,
    )
