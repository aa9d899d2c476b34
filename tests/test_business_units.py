"""Tests for the business-unit aggregator."""

from datetime import datetime
from decimal import Decimal

import pytest

from cashbook.ledgers import (
    build_business_performance,
    build_business_unit_ledger,
    percentage,
)
from cashbook.models.ledger import DirectionFilter


class TestBusinessPerformance:
    """Tests for per-unit income, expense, net and margin."""

    @pytest.fixture
    def payments(self, make_payment):
        return [
            make_payment("IN", "1000", business_unit="A"),
            make_payment("OUT", "400", business_unit="A"),
            make_payment("OUT", "100", business_unit="B"),
            make_payment("IN", "999"),  # untagged, belongs to no unit
        ]

    def test_unit_figures(self, payments):
        report = build_business_performance(["A", "B"], payments)

        a = report.for_unit("A")
        assert a.income == Decimal("1000")
        assert a.expense == Decimal("400")
        assert a.net == Decimal("600")
        assert a.margin == Decimal("60")

    def test_margin_is_zero_without_income(self, payments):
        """A unit with expenses but no income has margin 0, not an error."""
        b = build_business_performance(["A", "B"], payments).for_unit("B")
        assert b.net == Decimal("-100")
        assert b.margin == Decimal("0")

    def test_totals(self, payments):
        report = build_business_performance(["A", "B"], payments)
        assert report.totals.income == Decimal("1000")
        assert report.totals.expense == Decimal("500")
        assert report.totals.net == Decimal("500")

    def test_income_share(self, make_payment):
        payments = [
            make_payment("IN", "300", business_unit="A"),
            make_payment("IN", "100", business_unit="B"),
        ]
        report = build_business_performance(["A", "B"], payments)
        assert report.for_unit("A").income_share == Decimal("75")
        assert report.for_unit("B").income_share == Decimal("25")

    def test_units_keep_configured_order(self, payments):
        report = build_business_performance(["B", "A"], payments)
        assert [u.name for u in report.units] == ["B", "A"]

    def test_unit_without_payments(self):
        report = build_business_performance(["Idle"], [])
        idle = report.for_unit("Idle")
        assert idle.net == Decimal("0")
        assert idle.margin == Decimal("0")
        assert report.for_unit("Missing") is None


class TestBusinessUnitLedger:
    """Tests for the per-unit drill-down ledger."""

    def test_opens_at_zero(self, make_payment):
        payments = [
            make_payment("IN", "1000", datetime(2024, 6, 1), business_unit="A"),
            make_payment("OUT", "400", datetime(2024, 6, 2), business_unit="A", mode="KVB"),
            make_payment("OUT", "100", datetime(2024, 6, 3), business_unit="B"),
        ]

        ledger = build_business_unit_ledger("A", payments)

        assert ledger.opening_balance == Decimal("0")
        assert [r.running_balance for r in ledger.rows] == [Decimal("1000"), Decimal("600")]
        assert ledger.closing_balance == Decimal("600")

    def test_direction_filter(self, make_payment):
        payments = [
            make_payment("IN", "1000", datetime(2024, 6, 1), business_unit="A"),
            make_payment("OUT", "400", datetime(2024, 6, 2), business_unit="A"),
        ]
        ledger = build_business_unit_ledger("A", payments, DirectionFilter.OUT)
        assert len(ledger.rows) == 1
        assert ledger.rows[0].running_balance == Decimal("600")


class TestPercentage:
    def test_zero_whole(self):
        assert percentage(Decimal("5"), Decimal("0")) == Decimal("0")

    def test_negative_whole(self):
        assert percentage(Decimal("5"), Decimal("-10")) == Decimal("0")
