"""Business logic services."""

from solar_portal.services.aggregator import aggregate_by_rep
from solar_portal.services.commission_engine import evaluate, preview_payout, reconcile_deal
from solar_portal.services.payout import calculate_payout, detect_drift
from solar_portal.services.rule_matcher import match_rule, rule_status

__all__ = [
    "aggregate_by_rep",
    "calculate_payout",
    "detect_drift",
    "evaluate",
    "match_rule",
    "preview_payout",
    "reconcile_deal",
    "rule_status",
]
