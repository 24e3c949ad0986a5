"""
Tests for snapshot coercion helpers.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from solar_portal.services.snapshots import (
    WILDCARD,
    CommissionBasis,
    CommissionRule,
    Deal,
    to_date,
    to_decimal,
    to_scope,
)


class TestToDecimal:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (100, Decimal("100")),
            (2.5, Decimal("2.5")),
            ("42.10", Decimal("42.10")),
            (" 7 ", Decimal("7")),
            (Decimal("1.01"), Decimal("1.01")),
        ],
    )
    def test_numeric_values(self, value, expected):
        assert to_decimal(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", True, [], float("nan"), Decimal("NaN")])
    def test_garbage_is_zero(self, value):
        assert to_decimal(value) == Decimal("0")

    def test_float_uses_shortest_repr(self):
        # 0.1 must not turn into 0.1000000000000000055511151231257827...
        assert to_decimal(0.1) == Decimal("0.1")


class TestToScope:
    def test_values(self):
        assert to_scope("TX") == "TX"
        assert to_scope(None) is WILDCARD
        assert to_scope("") is WILDCARD
        assert to_scope(WILDCARD) is WILDCARD

    def test_whitespace_is_a_value(self):
        assert to_scope(" ") == " "


class TestToDate:
    def test_conversions(self):
        assert to_date(date(2024, 1, 2)) == date(2024, 1, 2)
        assert to_date(datetime(2024, 1, 2, 15, 30)) == date(2024, 1, 2)
        assert to_date("2024-01-02") == date(2024, 1, 2)
        assert to_date("2024-01-02T10:00:00Z") == date(2024, 1, 2)
        assert to_date("soon") is None
        assert to_date(None) is None


class TestCommissionBasis:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("contract", CommissionBasis.CONTRACT),
            ("contract_value", CommissionBasis.CONTRACT),
            ("per_kw", CommissionBasis.PER_KW),
            ("net_price", CommissionBasis.NET_PRICE),
            ("PER_KW", CommissionBasis.CONTRACT),
            (None, CommissionBasis.CONTRACT),
        ],
    )
    def test_parse(self, value, expected):
        assert CommissionBasis.parse(value) == expected


class TestDeal:
    def test_install_partner_fallback(self):
        assert Deal(id=1, company="SunBuild").effective_install_partner == "SunBuild"
        assert Deal(id=1, install_partner="X", company="SunBuild").effective_install_partner == "X"
        assert Deal(id=1).effective_install_partner is None


class TestCommissionRule:
    def test_reserved_fields_coerced(self):
        rule = CommissionRule(
            id=1,
            name="r",
            effective_start="2024-01-01",
            setter_commission_pct="1.5",
            setter_flat_amount=250,
            company_margin_pct="n/a",
        )
        assert rule.setter_commission_pct == Decimal("1.5")
        assert rule.setter_flat_amount == Decimal("250")
        assert rule.company_margin_pct == Decimal("0")

    def test_reserved_fields_default_to_none(self):
        rule = CommissionRule(id=1, name="r", effective_start=date(2024, 1, 1))
        assert rule.setter_commission_pct is None
        assert rule.setter_flat_amount is None
        assert rule.company_margin_pct is None
