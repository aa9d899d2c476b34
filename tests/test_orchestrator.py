"""Integration tests for the report center over in-memory storage."""

from datetime import datetime
from decimal import Decimal

import pytest

from cashbook.config import ReportSettings
from cashbook.exceptions import SnapshotSourceError, UnknownBusinessUnitError, UnknownPartyError
from cashbook.models.audit import AuditEventType
from cashbook.models.ledger import DirectionFilter, LedgerKind
from cashbook.models.records import BankAccount, Customer, Invoice, Liability, LiabilityType, OpeningBalances
from cashbook.models.snapshot import LedgerSnapshot
from cashbook.models.statements import (
    BalanceSheetStatistics,
    OutstandingView,
    Period,
    ReconciliationStatus,
)
from cashbook.orchestrator import ReportCenter, create_report_center
from cashbook.audit import AuditLogger
from cashbook.services.storage import InMemoryAuditSink, InMemorySnapshotSource


NOW = datetime(2024, 6, 15)


@pytest.fixture
def snapshot(make_payment):
    return LedgerSnapshot(
        opening_balances=OpeningBalances(CASH="1000", CAPITAL="500"),
        bank_accounts=[BankAccount(id="KVB", name="Karur Vysya", opening_balance="200")],
        customers=[Customer(id="C1", name="Arun", is_royalty=True)],
        liabilities=[
            Liability(id="L1", provider_name="Selvam", type=LiabilityType.PRIVATE, principal="300"),
        ],
        invoices=[
            Invoice(id="I1", customer_id="C1", type="ROYALTY", amount="800",
                    balance="300", date=datetime(2024, 6, 2)),
        ],
        payments=[
            make_payment("IN", "500", datetime(2024, 6, 3), source_id="C1",
                         category="ROYALTY", source_name="Arun"),
            make_payment("OUT", "200", datetime(2024, 6, 4), voucher_type="PAYMENT",
                         category="RENT"),
            make_payment("IN", "900", datetime(2024, 6, 5), business_unit="Quarry"),
            make_payment("OUT", "100", datetime(2024, 6, 6), mode="KVB", business_unit="Quarry"),
        ],
        business_units=("Quarry",),
    )


@pytest.fixture
def center(snapshot):
    report_center, _, sink = create_report_center(snapshot)
    return report_center, sink


class TestLedgers:
    """Tests for ledger requests through the facade."""

    def test_account_ledger_uses_snapshot_opening(self, center):
        report_center, sink = center

        ledger = report_center.account_ledger("CASH")

        assert ledger.opening_balance == Decimal("1000")
        assert [r.running_balance for r in ledger.rows] == [
            Decimal("1500"), Decimal("1300"), Decimal("2200"),
        ]
        assert sink.events[-1].event_type == AuditEventType.ACCOUNT_LEDGER_BUILT

    def test_bank_ledger(self, center):
        report_center, _ = center
        ledger = report_center.account_ledger("KVB", DirectionFilter.OUT)
        assert ledger.opening_balance == Decimal("200")
        assert ledger.closing_balance == Decimal("100")

    def test_income_and_expense_ledgers(self, center):
        report_center, sink = center

        income = report_center.income_ledger()
        expense = report_center.expense_ledger(search="nobody")

        assert income.kind == LedgerKind.INCOME
        assert income.grand_total == Decimal("1400")
        assert expense.rows == ()
        assert expense.overall_total == Decimal("300")
        assert [e.event_type for e in sink.events] == [AuditEventType.CATEGORY_LEDGER_BUILT] * 2

    def test_business_performance_falls_back_to_snapshot_units(self, center):
        report_center, _ = center
        report = report_center.business_performance()
        quarry = report.for_unit("Quarry")
        assert quarry.net == Decimal("800")

    def test_business_unit_ledger(self, center):
        report_center, _ = center
        ledger = report_center.business_unit_ledger("Quarry")
        assert ledger.closing_balance == Decimal("800")

    def test_unknown_business_unit(self, center):
        report_center, _ = center
        with pytest.raises(UnknownBusinessUnitError):
            report_center.business_unit_ledger("Bakery")

    def test_party_ledger(self, center):
        report_center, sink = center
        ledger = report_center.party_ledger("C1")
        assert ledger.closing_balance == Decimal("300")
        assert sink.events[-1].event_type == AuditEventType.PARTY_LEDGER_BUILT

    def test_unknown_party_is_raised_and_audited(self, center):
        report_center, sink = center
        with pytest.raises(UnknownPartyError):
            report_center.party_ledger("C404")
        assert sink.events[-1].event_type == AuditEventType.PARTY_NOT_FOUND

    def test_party_directory(self, center):
        report_center, _ = center
        assert [p.label for p in report_center.party_directory()] == ["Arun", "Selvam (Lender)"]


class TestStatements:
    """Tests for statements and supporting reports through the facade."""

    def test_statements_derive_statistics_when_missing(self, center):
        report_center, sink = center

        result = report_center.financial_statements(Period.THIS_MONTH, now=NOW)

        # cash 1000 + 500 - 200 + 900 ; bank 200 - 100 ; receivable 800 - 500
        assert result.assets.cash == Decimal("2200")
        assert result.assets.bank_balances == {"KVB": Decimal("100")}
        assert result.assets.receivables == Decimal("300")
        assert result.total_liabilities == Decimal("300")
        assert result.total_equity == Decimal("2300")
        assert result.reconciliation.status == ReconciliationStatus.BALANCED

        event_types = [e.event_type for e in sink.events]
        assert event_types == [
            AuditEventType.STATEMENT_GENERATED,
            AuditEventType.RECONCILIATION_PASSED,
        ]
        assert len({e.correlation_id for e in sink.events}) == 1

    def test_snapshot_statistics_win(self, snapshot):
        snapshot = snapshot.model_copy(
            update={"statistics": BalanceSheetStatistics(cash_in_hand="1")}
        )
        report_center, _, _ = create_report_center(snapshot)
        result = report_center.financial_statements(now=NOW)
        assert result.assets.cash == Decimal("1")

    def test_book_statistics(self, center):
        report_center, _ = center
        stats = report_center.book_statistics(now=NOW)
        assert stats.cash_in_hand == Decimal("2200")
        assert stats.royalty_income_month == Decimal("800")

    def test_outstanding_views(self, center):
        report_center, sink = center

        receivables = report_center.outstanding()
        advances = report_center.outstanding(OutstandingView.ADVANCES)
        payables = report_center.outstanding(OutstandingView.PAYABLES)

        assert [l.display_amount for l in receivables] == [Decimal("300")]
        assert advances == []
        assert [l.provider_name for l in payables] == ["Selvam"]
        assert [e.entity_id for e in sink.events] == ["receivables", "advances", "payables"]

    def test_market_capital_and_lending_customers(self, snapshot):
        snapshot = snapshot.model_copy(update={"customers": (
            Customer(id="C1", name="Arun", is_royalty=True),
            Customer(id="C2", name="Bala", is_interest=True, interest_principal="4000"),
            Customer(id="C3", name="Chitra", is_lender=True, credit_principal="600"),
        )})
        report_center, _, sink = create_report_center(snapshot)

        market = report_center.outstanding(OutstandingView.MARKET_CAPITAL)
        payables = report_center.outstanding(OutstandingView.PAYABLES)

        assert [(l.name, l.display_amount) for l in market] == [("Bala", Decimal("4000"))]
        assert [(l.provider_name, l.principal) for l in payables] == [
            ("Chitra (Lender)", Decimal("600")),
            ("Selvam", Decimal("300")),
        ]
        assert [e.entity_id for e in sink.events] == ["market_capital", "payables"]

    def test_validate_snapshot(self, center):
        report_center, sink = center
        result = report_center.validate_snapshot()
        assert result.is_valid is True
        assert sink.events[-1].event_type == AuditEventType.SNAPSHOT_VALIDATED


class TestReportCenterWiring:
    """Tests for settings, snapshot reloading and sources."""

    def test_each_request_reloads_the_snapshot(self, snapshot):
        report_center, source, _ = create_report_center(snapshot)
        assert report_center.account_ledger("CASH").closing_balance == Decimal("2200")

        source.replace(snapshot.model_copy(update={"payments": ()}))

        assert report_center.account_ledger("CASH").closing_balance == Decimal("1000")

    def test_missing_snapshot(self):
        report_center, _, _ = create_report_center()
        with pytest.raises(SnapshotSourceError):
            report_center.account_ledger("CASH")

    def test_settings_override_tolerance_and_units(self, snapshot):
        settings = ReportSettings(reconciliation_tolerance=Decimal("0"), business_units="Bakery")
        sink = InMemoryAuditSink()
        report_center = ReportCenter(
            InMemorySnapshotSource(snapshot),
            settings=settings,
            audit_logger=AuditLogger(sink),
        )

        result = report_center.financial_statements(now=NOW)

        assert result.reconciliation.tolerance == Decimal("0")
        assert result.reconciliation.status == ReconciliationStatus.BALANCED
        assert sink.events[-1].event_type == AuditEventType.RECONCILIATION_PASSED
        assert [u.name for u in report_center.business_performance().units] == ["Bakery"]

    def test_zero_tolerance_from_environment(self, snapshot, monkeypatch):
        monkeypatch.setenv("CASHBOOK_RECONCILIATION_TOLERANCE", "0")
        report_center, _, sink = create_report_center(snapshot)

        result = report_center.financial_statements(now=NOW)

        assert result.is_balanced is True
        assert sink.events[-1].event_type == AuditEventType.RECONCILIATION_PASSED

    def test_without_audit_trail(self, snapshot):
        report_center, _, sink = create_report_center(snapshot, keep_audit_trail=False)
        assert sink is None
        assert report_center.account_ledger("CASH").rows
