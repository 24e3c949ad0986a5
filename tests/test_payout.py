"""
Tests for expected payout calculation and drift detection.

Covers:
- contract / per_kw / net_price basis
- Missing and non-numeric deal fields
- Absent percentage or flat amount
- Drift threshold boundary
"""

from datetime import date
from decimal import Decimal

import pytest

from solar_portal.services.payout import (
    DRIFT_THRESHOLD,
    calculate_payout,
    commission_basis_amount,
    detect_drift,
)
from solar_portal.services.snapshots import CommissionBasis, CommissionRule, Deal


def _make_rule(**kwargs):
    defaults = {
        "id": 1,
        "name": "rule",
        "effective_start": date(2024, 1, 1),
        "commission_basis": "contract",
    }
    defaults.update(kwargs)
    return CommissionRule(**defaults)


def _make_deal(**kwargs):
    defaults = {"id": 1}
    defaults.update(kwargs)
    return Deal(**defaults)


# ── calculate_payout ─────────────────────────────────────


class TestCalculatePayout:
    def test_no_rule_pays_zero(self):
        deal = _make_deal(contract_value=100000)
        assert calculate_payout(None, deal) == Decimal("0")

    def test_contract_basis(self):
        """100K contract × 5% = 5000."""
        rule = _make_rule(agent_commission_pct=5)
        deal = _make_deal(contract_value=100000)
        assert calculate_payout(rule, deal) == Decimal("5000")

    def test_per_kw_basis_with_flat(self):
        """10 kW → 10,000 W × 5% + 100 = 600."""
        rule = _make_rule(commission_basis="per_kw", agent_commission_pct=5, agent_flat_amount=100)
        deal = _make_deal(kw_system=10, contract_value=999999)
        assert calculate_payout(rule, deal) == Decimal("600")

    def test_net_price_basis(self):
        """2.5 $/W × 8 kW × 1000 = 20,000 basis × 10% = 2000."""
        rule = _make_rule(commission_basis="net_price", agent_commission_pct=10)
        deal = _make_deal(net_price_per_watt=2.5, kw_system=8)
        assert commission_basis_amount(rule, deal) == Decimal("20000")
        assert calculate_payout(rule, deal) == Decimal("2000")

    def test_legacy_contract_value_spelling(self):
        rule = _make_rule(commission_basis="contract_value", agent_commission_pct=5)
        assert rule.commission_basis == CommissionBasis.CONTRACT
        assert calculate_payout(rule, _make_deal(contract_value=40000)) == Decimal("2000")

    def test_unknown_basis_falls_back_to_contract(self):
        rule = _make_rule(commission_basis="per_panel", agent_commission_pct=10)
        assert calculate_payout(rule, _make_deal(contract_value=1000, kw_system=5)) == Decimal("100")

    def test_flat_only(self):
        rule = _make_rule(agent_commission_pct=None, agent_flat_amount=750)
        assert calculate_payout(rule, _make_deal(contract_value=80000)) == Decimal("750")

    def test_no_pct_no_flat_pays_zero(self):
        rule = _make_rule(agent_commission_pct=None, agent_flat_amount=None)
        assert calculate_payout(rule, _make_deal(contract_value=80000)) == Decimal("0")

    @pytest.mark.parametrize("bad", [None, "", "n/a", float("nan"), float("inf")])
    def test_bad_deal_fields_count_as_zero(self, bad):
        rule = _make_rule(agent_commission_pct=5, agent_flat_amount=10)
        assert calculate_payout(rule, _make_deal(contract_value=bad)) == Decimal("10")

    def test_net_price_missing_kw_is_zero_basis(self):
        rule = _make_rule(commission_basis="net_price", agent_commission_pct=10)
        assert calculate_payout(rule, _make_deal(net_price_per_watt=3)) == Decimal("0")

    def test_numeric_strings_are_accepted(self):
        rule = _make_rule(agent_commission_pct="5")
        assert calculate_payout(rule, _make_deal(contract_value="100000")) == Decimal("5000")

    def test_no_rounding(self):
        rule = _make_rule(agent_commission_pct=Decimal("3.333"))
        payout = calculate_payout(rule, _make_deal(contract_value=Decimal("1000.01")))
        assert payout == Decimal("1000.01") * Decimal("3.333") / Decimal("100")

    def test_manager_fields_ignored(self):
        rule = _make_rule(
            agent_commission_pct=5,
            manager_commission_pct=50,
            manager_flat_amount=10000,
        )
        assert calculate_payout(rule, _make_deal(contract_value=100000)) == Decimal("5000")


# ── detect_drift ─────────────────────────────────────────


class TestDetectDrift:
    def test_threshold_is_one_unit(self):
        assert DRIFT_THRESHOLD == Decimal("1.00")

    def test_exactly_at_threshold_is_not_drift(self):
        result = detect_drift(Decimal("1000"), Decimal("1001.00"))
        assert result.has_drift is False
        assert result.diff == Decimal("1.00")

    def test_just_over_threshold_is_drift(self):
        result = detect_drift(Decimal("1000"), Decimal("1001.01"))
        assert result.has_drift is True

    def test_underpaid_is_negative_diff(self):
        result = detect_drift(Decimal("2500"), Decimal("2400"))
        assert result.diff == Decimal("-100")
        assert result.has_drift is True

    def test_negative_boundary(self):
        assert detect_drift(Decimal("1000"), Decimal("999")).has_drift is False
        assert detect_drift(Decimal("1000"), Decimal("998.99")).has_drift is True

    def test_missing_actual_is_zero(self):
        result = detect_drift(Decimal("0"), None)
        assert result.has_drift is False
        assert result.diff == Decimal("0")

    def test_custom_threshold(self):
        assert detect_drift(100, 150, threshold=Decimal("50")).has_drift is False
        assert detect_drift(100, 151, threshold=Decimal("50")).has_drift is True
