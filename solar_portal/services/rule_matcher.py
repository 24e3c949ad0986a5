"""
Commission rule resolution.

A rule is a candidate for a deal when it is active, its inclusive
[effective_start, effective_end] window contains the evaluation date,
and every non-wildcard scoping attribute equals the deal's value.
The highest-priority candidate wins. Equal priorities resolve to the
rule that appears first in the input list.
"""

import logging
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional

from solar_portal.services.snapshots import WILDCARD, CommissionRule, Deal, to_date

logger = logging.getLogger(__name__)


class RuleStatus(str, Enum):
    """Lifecycle status of a rule relative to a date."""
    CURRENT = "current"
    FUTURE = "future"
    EXPIRED = "expired"
    INACTIVE = "inactive"


def is_well_formed(rule: CommissionRule) -> bool:
    """A rule can only ever match if it has a start date, a sane window and an integer priority."""
    if rule.effective_start is None:
        return False
    if rule.effective_end is not None and rule.effective_end < rule.effective_start:
        return False
    if isinstance(rule.priority, bool) or not isinstance(rule.priority, int):
        return False
    return True


def is_in_window(rule: CommissionRule, as_of: date) -> bool:
    """Check the active flag and the inclusive validity window."""
    if not rule.is_active:
        return False
    if rule.effective_start > as_of:
        return False
    if rule.effective_end is not None and rule.effective_end < as_of:
        return False
    return True


def matches_scope(rule: CommissionRule, deal: Deal) -> bool:
    """Check every scoping attribute; WILDCARD matches anything."""
    pairs = (
        (rule.sales_rep, deal.sales_rep),
        (rule.team, deal.team),
        (rule.install_partner, deal.effective_install_partner),
        (rule.state, deal.state),
    )
    for rule_value, deal_value in pairs:
        if rule_value is WILDCARD:
            continue
        if rule_value != deal_value:
            return False
    return True


def candidate_rules(
    deal: Deal,
    rules: Optional[Iterable[CommissionRule]],
    as_of: date,
) -> List[CommissionRule]:
    """All rules applicable to the deal on as_of, in input order."""
    as_of = to_date(as_of)
    if as_of is None:
        logger.debug("No usable evaluation date, no commission rule can apply")
        return []

    candidates = []
    for rule in rules or ():
        if not is_well_formed(rule):
            logger.debug(f"Skipping malformed commission rule {rule.id!r} ({rule.name})")
            continue
        if is_in_window(rule, as_of) and matches_scope(rule, deal):
            candidates.append(rule)
    return candidates


def match_rule(
    deal: Deal,
    rules: Optional[Iterable[CommissionRule]],
    as_of: date,
) -> Optional[CommissionRule]:
    """
    Select the single commission rule governing a deal.

    Args:
        deal: The deal to resolve
        rules: Rule snapshot, in the order the store returned it
        as_of: Evaluation date (never read from the clock here)

    Returns:
        The winning rule, or None if no rule applies
    """
    candidates = candidate_rules(deal, rules, as_of)
    if not candidates:
        return None

    # sorted() is stable: equal priorities keep input order
    candidates = sorted(candidates, key=lambda r: r.priority, reverse=True)
    return candidates[0]


def rule_status(rule: CommissionRule, as_of: date) -> RuleStatus:
    """
    Classify a rule as current, future, expired or inactive on as_of.

    A malformed rule (see is_well_formed) never matches, so it is
    reported as inactive.

    Raises:
        ValueError: if as_of is not a date or ISO date string
    """
    as_of_date = to_date(as_of)
    if as_of_date is None:
        raise ValueError(f"as_of must be a date, got {as_of!r}")
    as_of = as_of_date

    if not rule.is_active or not is_well_formed(rule):
        return RuleStatus.INACTIVE
    if rule.effective_start is not None and rule.effective_start > as_of:
        return RuleStatus.FUTURE
    if rule.effective_end is not None and rule.effective_end < as_of:
        return RuleStatus.EXPIRED
    return RuleStatus.CURRENT
