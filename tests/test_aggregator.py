"""
Tests for per-rep aggregation.

Covers:
- Grouping, totals and drift counts
- Unassigned sentinel
- First-seen representative rule
- Sort by total contract value
"""

from datetime import date
from decimal import Decimal

from solar_portal.services.aggregator import UNASSIGNED_REP, aggregate_by_rep
from solar_portal.services.snapshots import CommissionRule, Deal, DealDetail


def _make_rule(rule_id):
    return CommissionRule(id=rule_id, name=f"rule {rule_id}", effective_start=date(2024, 1, 1))


def _make_detail(rep, contract_value, calculated=0, actual=0, has_drift=False, rule=None):
    calculated = Decimal(str(calculated))
    actual = Decimal(str(actual))
    return DealDetail(
        deal=Deal(id=f"{rep}-{contract_value}", sales_rep=rep, contract_value=contract_value),
        matched_rule=rule,
        calculated_payout=calculated,
        actual_payout=actual,
        drift_amount=actual - calculated,
        has_drift=has_drift,
    )


class TestAggregateByRep:
    def test_empty_input(self):
        assert aggregate_by_rep([]) == []
        assert aggregate_by_rep(None) == []

    def test_totals_per_rep(self):
        details = [
            _make_detail("A", 50000, calculated=2500, actual=2400, has_drift=True),
            _make_detail("A", 60000, calculated=0, actual=3000, has_drift=True),
            _make_detail("B", 40000, calculated=2000, actual=2000),
        ]
        summaries = aggregate_by_rep(details)
        by_name = {s.rep_name: s for s in summaries}

        a = by_name["A"]
        assert a.total_deals == 2
        assert a.total_contract_value == Decimal("110000")
        assert a.total_actual_payout == Decimal("5400")
        assert a.total_calculated_payout == Decimal("2500")
        assert a.drift_count == 2
        assert [d.deal.contract_value for d in a.deals] == [50000, 60000]

        b = by_name["B"]
        assert b.total_deals == 1
        assert b.drift_count == 0

    def test_missing_rep_grouped_as_unassigned(self):
        details = [_make_detail(None, 1000), _make_detail("", 2000)]
        summaries = aggregate_by_rep(details)
        assert len(summaries) == 1
        assert summaries[0].rep_name == UNASSIGNED_REP == "Unassigned"
        assert summaries[0].total_deals == 2

    def test_custom_unassigned_label(self):
        summaries = aggregate_by_rep([_make_detail(None, 1000)], unassigned_label="(no rep)")
        assert summaries[0].rep_name == "(no rep)"

    def test_representative_rule_is_first_seen(self):
        first, second = _make_rule(1), _make_rule(2)
        details = [
            _make_detail("A", 100, rule=None),
            _make_detail("A", 200, rule=first),
            _make_detail("A", 300, rule=second),
            _make_detail("B", 100, rule=second),
            _make_detail("B", 200, rule=first),
        ]
        by_name = {s.rep_name: s for s in aggregate_by_rep(details)}
        assert by_name["A"].representative_rule is None
        assert by_name["B"].representative_rule is second

    def test_sorted_by_contract_value_descending(self):
        details = [
            _make_detail("small", 1000),
            _make_detail("big", 90000),
            _make_detail("mid", 5000),
            _make_detail("mid", 6000),
        ]
        assert [s.rep_name for s in aggregate_by_rep(details)] == ["big", "mid", "small"]

    def test_bad_contract_value_counts_as_zero(self):
        summaries = aggregate_by_rep([_make_detail("A", None), _make_detail("A", "oops")])
        assert summaries[0].total_contract_value == Decimal("0")
