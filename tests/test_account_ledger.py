"""Tests for the account (book) ledger builder."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from cashbook.ledgers import build_account_ledger, display_label, replay
from cashbook.ledgers.rules import chronological, newest_first
from cashbook.models.ledger import DirectionFilter
from cashbook.models.records import Direction


DAY_1 = datetime(2024, 6, 1, 9, 0)
DAY_2 = datetime(2024, 6, 2, 9, 0)
DAY_3 = datetime(2024, 6, 3, 9, 0)


class TestRunningBalance:
    """Tests for running balances and closing balance."""

    def test_opening_plus_in_minus_out(self, make_payment):
        """Opening 1000, IN 500 on day 1, OUT 200 on day 2."""
        payments = [
            make_payment("IN", "500", DAY_1),
            make_payment("OUT", "200", DAY_2),
        ]

        ledger = build_account_ledger("CASH", Decimal("1000"), payments)

        assert [r.running_balance for r in ledger.rows] == [Decimal("1500"), Decimal("1300")]
        assert ledger.closing_balance == Decimal("1300")
        assert ledger.total_in == Decimal("500")
        assert ledger.total_out == Decimal("200")

    def test_rows_are_sorted_oldest_first(self, make_payment):
        """Rows follow the date, not the insertion order."""
        payments = [
            make_payment("OUT", "200", DAY_2, id="late"),
            make_payment("IN", "500", DAY_1, id="early"),
        ]

        ledger = build_account_ledger("CASH", Decimal("1000"), payments)

        assert [r.payment.id for r in ledger.rows] == ["early", "late"]
        assert [r.running_balance for r in ledger.rows] == [Decimal("1500"), Decimal("1300")]

    def test_same_timestamp_keeps_insertion_order(self, make_payment):
        """Ties are broken by insertion order, so balances are reproducible."""
        payments = [
            make_payment("IN", "100", DAY_1, id="a"),
            make_payment("OUT", "30", DAY_1, id="b"),
            make_payment("IN", "5", DAY_1, id="c"),
        ]

        ledger = build_account_ledger("CASH", Decimal("0"), payments)

        assert [r.payment.id for r in ledger.rows] == ["a", "b", "c"]
        assert [r.running_balance for r in ledger.rows] == [
            Decimal("100"), Decimal("70"), Decimal("75"),
        ]

    def test_only_payments_on_the_book_are_included(self, make_payment):
        payments = [
            make_payment("IN", "500", DAY_1, mode="CASH"),
            make_payment("IN", "900", DAY_1, mode="KVB"),
        ]

        ledger = build_account_ledger("KVB", Decimal("100"), payments)

        assert len(ledger.rows) == 1
        assert ledger.closing_balance == Decimal("1000")

    def test_empty_book_closes_at_opening(self):
        ledger = build_account_ledger("CUB", Decimal("250"), [])
        assert ledger.rows == ()
        assert ledger.closing_balance == Decimal("250")
        assert ledger.total_in == Decimal("0")

    def test_balance_can_go_negative(self, make_payment):
        ledger = build_account_ledger(
            "CASH", Decimal("0"), [make_payment("OUT", "75", DAY_1)]
        )
        assert ledger.closing_balance == Decimal("-75")

    def test_rows_wrap_the_source_payment(self, make_payment):
        """Derived rows reference the payment instead of copying fields."""
        payment = make_payment("IN", "10", DAY_1, notes="Counter sales")
        row = build_account_ledger("CASH", Decimal("0"), [payment]).rows[0]

        assert row.payment == payment
        assert row.amount == Decimal("10")
        assert row.type == Direction.IN
        assert row.date == DAY_1


class TestDirectionFilter:
    """Tests for the IN / OUT row filter."""

    @pytest.fixture
    def payments(self, make_payment):
        return [
            make_payment("IN", "500", DAY_1, id="in-1"),
            make_payment("OUT", "200", DAY_2, id="out-1"),
            make_payment("IN", "50", DAY_3, id="in-2"),
        ]

    def test_filter_does_not_change_balances(self, payments):
        """Each shown row keeps the balance it has in the unfiltered ledger."""
        full = build_account_ledger("CASH", Decimal("1000"), payments)
        only_in = build_account_ledger(
            "CASH", Decimal("1000"), payments, DirectionFilter.IN
        )

        full_by_id = {r.payment.id: r.running_balance for r in full.rows}
        assert [r.payment.id for r in only_in.rows] == ["in-1", "in-2"]
        for row in only_in.rows:
            assert row.running_balance == full_by_id[row.payment.id]
        assert only_in.closing_balance == full.closing_balance == Decimal("1350")

    def test_filter_restricts_totals(self, payments):
        only_out = build_account_ledger(
            "CASH", Decimal("1000"), payments, DirectionFilter.OUT
        )
        assert only_out.total_out == Decimal("200")
        assert only_out.total_in == Decimal("0")

    def test_filter_is_idempotent(self, payments):
        """Filtering the shown rows again changes nothing."""
        only_in = build_account_ledger(
            "CASH", Decimal("1000"), payments, DirectionFilter.IN
        )
        again = [r for r in only_in.rows if DirectionFilter.IN.matches(r.type)]
        assert tuple(again) == only_in.rows

    def test_all_matches_every_direction(self):
        assert DirectionFilter.ALL.matches(Direction.IN)
        assert DirectionFilter.ALL.matches(Direction.OUT)
        assert not DirectionFilter.OUT.matches(Direction.IN)


class TestOrderingHelpers:
    """Tests for the shared ordering and labelling rules."""

    def test_newest_first_mirrors_chronological(self, make_payment):
        payments = [
            make_payment(date=DAY_1, id="a"),
            make_payment(date=DAY_1, id="b"),
            make_payment(date=DAY_2, id="c"),
        ]
        assert [p.id for p in chronological(payments)] == ["a", "b", "c"]
        assert [p.id for p in newest_first(payments)] == ["c", "b", "a"]

    def test_replay_with_no_payments(self):
        assert replay([], Decimal("10")) == []

    def test_display_label_fallback_chain(self, make_payment):
        """notes, then category, then voucher type, then the default."""
        assert display_label(make_payment(notes="Rent", category="GENERAL")) == "Rent"
        assert display_label(make_payment(category="GENERAL", voucher_type="PAYMENT")) == "GENERAL"
        assert display_label(make_payment(voucher_type="PAYMENT")) == "PAYMENT"
        assert display_label(make_payment()) == "Other"
        assert display_label(make_payment(), default="Misc") == "Misc"

    def test_mixed_naive_and_aware_dates_replay(self, make_payment):
        """Naive dates are read as UTC when ordered against aware ones."""
        ist = timezone(timedelta(hours=5, minutes=30))
        payments = [
            make_payment("IN", "10", datetime(2024, 6, 2, tzinfo=timezone.utc), id="aware"),
            make_payment("IN", "10", datetime(2024, 6, 1), id="naive"),
            # 2024-06-01 23:00 UTC, between the two
            make_payment("OUT", "5", datetime(2024, 6, 2, 4, 30, tzinfo=ist), id="ist"),
        ]

        ledger = build_account_ledger("CASH", Decimal("0"), payments)

        assert [r.payment.id for r in ledger.rows] == ["naive", "ist", "aware"]
        assert ledger.closing_balance == Decimal("15")


class TestRowLabels:
    """Tests for the one-line label carried by each row."""

    def test_rows_carry_display_label(self, make_payment):
        payments = [
            make_payment(date=DAY_1, notes="Diesel advance", category="GENERAL"),
            make_payment(date=DAY_2, voucher_type="RECEIPT"),
            make_payment(date=DAY_3),
        ]
        ledger = build_account_ledger("CASH", Decimal("0"), payments)
        assert [r.label for r in ledger.rows] == ["Diesel advance", "RECEIPT", "Other"]

    def test_default_label_is_configurable(self, make_payment):
        ledger = build_account_ledger(
            "CASH", Decimal("0"), [make_payment()], default_label="Misc",
        )
        assert ledger.rows[0].label == "Misc"
