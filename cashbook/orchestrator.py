"""
Main Orchestrator for Cashbook

This module ties together all the components and defines the single
entry point a host application calls for every report:
1. Ledgers (per book, per category, per business unit, per party)
2. Statements (profit & loss, balance sheet, reconciliation)
3. Supporting reports (book statistics, outstanding, data quality)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Every request loads the snapshot fresh; nothing is cached between calls
- Builders stay pure; settings and logging are applied only here
- Every report is audited under its own correlation ID

This is the "glue" that lets the pure builders be used safely by a UI
or an API without either one knowing about settings or audit trails.
"""

from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from cashbook.audit import AuditLogger, create_correlation_id
from cashbook.config import ReportSettings, get_settings
from cashbook.exceptions import UnknownBusinessUnitError, UnknownPartyError
from cashbook.ledgers import (
    build_account_ledger,
    build_business_performance,
    build_business_unit_ledger,
    build_expense_ledger,
    build_income_ledger,
    build_party_directory,
    build_party_ledger,
)
from cashbook.models.audit import AuditEventBuilder
from cashbook.models.ledger import (
    ALL_CATEGORIES,
    AccountLedger,
    BusinessPerformanceReport,
    CategoryLedger,
    DirectionFilter,
    LedgerScope,
    Party,
    PartyLedger,
)
from cashbook.models.snapshot import LedgerSnapshot
from cashbook.models.statements import (
    BookStatistics,
    CustomerOutstanding,
    OutstandingView,
    PayableLine,
    Period,
    PeriodFinancials,
    ReceivableBucket,
    SortOrder,
)
from cashbook.models.validation import ValidationResult
from cashbook.services.storage import (
    InMemoryAuditSink,
    InMemorySnapshotSource,
    SnapshotSourceInterface,
)
from cashbook.statements import (
    FinancialStatementEngine,
    build_advances,
    build_market_capital,
    build_payables,
    build_receivables,
    compute_book_statistics,
)
from cashbook.validation import SnapshotValidator

OutstandingLine = Union[CustomerOutstanding, PayableLine]


class ReportCenter:
    """
    Facade over every report the core can produce.

    Each public method:
    1. Loads the current snapshot from the source
    2. Runs the matching pure builder
    3. Emits an audit event
    4. Returns the immutable result
    """

    def __init__(
        self,
        snapshot_source: SnapshotSourceInterface,
        settings: Optional[ReportSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._source = snapshot_source
        self._settings = settings or get_settings().reports
        self._audit_logger = audit_logger or AuditLogger()
        self._engine = FinancialStatementEngine(
            tolerance=self._settings.reconciliation_tolerance,
        )

    def _business_units(self, snapshot: LedgerSnapshot) -> list[str]:
        return self._settings.business_units_list or list(snapshot.business_units)

    # =========================================================================
    # Ledgers
    # =========================================================================

    def account_ledger(
        self,
        book_id: str,
        direction_filter: DirectionFilter = DirectionFilter.ALL,
        correlation_id: Optional[UUID] = None,
    ) -> AccountLedger:
        """Running-balance ledger of one book (cash drawer or bank)."""
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._source.load_snapshot()

        ledger = build_account_ledger(
            book_id=book_id,
            opening_balance=snapshot.opening_balance_for(
                book_id, cash_book_id=self._settings.cash_book_id
            ),
            payments=snapshot.payments,
            direction_filter=direction_filter,
            default_label=self._settings.default_category_label,
        )

        self._audit_logger.log(AuditEventBuilder.account_ledger_built(
            book_id=book_id,
            row_count=len(ledger.rows),
            closing_balance=ledger.closing_balance,
            correlation_id=correlation_id,
        ))
        return ledger

    def income_ledger(
        self,
        category_filter: str = ALL_CATEGORIES,
        search: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> CategoryLedger:
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._source.load_snapshot()

        ledger = build_income_ledger(
            snapshot.payments,
            category_filter=category_filter,
            search=search,
            default_label=self._settings.default_category_label,
        )
        self._log_category_ledger(ledger, correlation_id)
        return ledger

    def expense_ledger(
        self,
        category_filter: str = ALL_CATEGORIES,
        search: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> CategoryLedger:
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._source.load_snapshot()

        ledger = build_expense_ledger(
            snapshot.payments,
            category_filter=category_filter,
            search=search,
            default_label=self._settings.default_category_label,
        )
        self._log_category_ledger(ledger, correlation_id)
        return ledger

    def _log_category_ledger(self, ledger: CategoryLedger, correlation_id: UUID) -> None:
        self._audit_logger.log(AuditEventBuilder.category_ledger_built(
            kind=ledger.kind.value,
            category_filter=ledger.category_filter,
            row_count=len(ledger.rows),
            grand_total=ledger.grand_total,
            correlation_id=correlation_id,
        ))

    def business_performance(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> BusinessPerformanceReport:
        """Income, expense, net and margin of every tracked business unit."""
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._source.load_snapshot()

        report = build_business_performance(
            self._business_units(snapshot),
            snapshot.payments,
        )

        self._audit_logger.log(AuditEventBuilder.business_performance_built(
            unit_count=len(report.units),
            net_total=report.totals.net,
            correlation_id=correlation_id,
        ))
        return report

    def business_unit_ledger(
        self,
        unit: str,
        direction_filter: DirectionFilter = DirectionFilter.ALL,
        correlation_id: Optional[UUID] = None,
    ) -> AccountLedger:
        """
        Running-balance ledger of one business unit, opening at zero.

        Raises:
            UnknownBusinessUnitError: If the unit is not tracked
        """
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._source.load_snapshot()

        if unit not in self._business_units(snapshot):
            raise UnknownBusinessUnitError(unit)

        ledger = build_business_unit_ledger(unit, snapshot.payments, direction_filter)

        self._audit_logger.log(AuditEventBuilder.business_unit_ledger_built(
            unit=unit,
            row_count=len(ledger.rows),
            correlation_id=correlation_id,
        ))
        return ledger

    def party_directory(self) -> list[Party]:
        snapshot = self._source.load_snapshot()
        return build_party_directory(snapshot.customers, snapshot.liabilities)

    def party_ledger(
        self,
        party_id: str,
        scope: LedgerScope = LedgerScope.COMBINED,
        correlation_id: Optional[UUID] = None,
    ) -> PartyLedger:
        """
        Statement of account for a customer or lender.

        Raises:
            UnknownPartyError: If no customer or lender has this id
        """
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._source.load_snapshot()

        ledger = build_party_ledger(
            party_id,
            customers=snapshot.customers,
            liabilities=snapshot.liabilities,
            invoices=snapshot.invoices,
            payments=snapshot.payments,
            scope=scope,
        )
        if ledger is None:
            self._audit_logger.log_party_not_found(party_id, correlation_id)
            raise UnknownPartyError(party_id)

        self._audit_logger.log(AuditEventBuilder.party_ledger_built(
            party_id=party_id,
            scope=ledger.scope.value,
            closing_balance=ledger.closing_balance,
            correlation_id=correlation_id,
        ))
        return ledger

    # =========================================================================
    # Statements and supporting reports
    # =========================================================================

    def book_statistics(
        self,
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> BookStatistics:
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._source.load_snapshot()

        stats = compute_book_statistics(
            snapshot,
            now=now,
            cash_book_id=self._settings.cash_book_id,
        )

        self._audit_logger.log(AuditEventBuilder.book_statistics_computed(
            cash_in_hand=stats.cash_in_hand,
            bank_count=len(stats.bank_balances),
            correlation_id=correlation_id,
        ))
        return stats

    def outstanding(
        self,
        view: OutstandingView = OutstandingView.RECEIVABLES,
        bucket: ReceivableBucket = ReceivableBucket.ALL,
        order: SortOrder = SortOrder.DESC,
        correlation_id: Optional[UUID] = None,
    ) -> list[OutstandingLine]:
        """
        Outstanding report.

        RECEIVABLES honours `bucket`; the other views ignore it. Every
        view is sorted by its amount in `order`.
        """
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._source.load_snapshot()

        if view == OutstandingView.PAYABLES:
            lines = build_payables(snapshot.liabilities, snapshot.customers, order=order)
        elif view == OutstandingView.MARKET_CAPITAL:
            lines = build_market_capital(
                snapshot.customers, snapshot.invoices, snapshot.payments, order=order
            )
        elif view == OutstandingView.ADVANCES:
            lines = build_advances(
                snapshot.customers, snapshot.invoices, snapshot.payments, order=order
            )
        else:
            lines = build_receivables(
                snapshot.customers,
                snapshot.invoices,
                snapshot.payments,
                bucket=bucket,
                order=order,
            )

        self._audit_logger.log(AuditEventBuilder.outstanding_report_built(
            view=view.value,
            line_count=len(lines),
            correlation_id=correlation_id,
        ))
        return lines

    def financial_statements(
        self,
        period: Period = Period.THIS_MONTH,
        now: Optional[datetime] = None,
        correlation_id: Optional[UUID] = None,
    ) -> PeriodFinancials:
        """
        Profit & loss and balance sheet for a period.

        When the snapshot carries no balance-sheet statistics they are
        derived from the books. An unbalanced result is returned, not
        raised, and logged as a warning.
        """
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._source.load_snapshot()

        statistics = snapshot.statistics
        if statistics is None:
            statistics = compute_book_statistics(
                snapshot,
                now=now,
                cash_book_id=self._settings.cash_book_id,
            ).to_balance_sheet_statistics()

        financials = self._engine.compute(
            snapshot,
            period=period,
            statistics=statistics,
            now=now,
        )

        self._audit_logger.log_statement_generated(
            period=period.value,
            net_profit=financials.net_profit,
            total_assets=financials.total_assets,
            correlation_id=correlation_id,
        )
        self._audit_logger.log_reconciliation(
            is_balanced=financials.is_balanced,
            difference=financials.reconciliation.difference,
            tolerance=financials.reconciliation.tolerance,
            correlation_id=correlation_id,
        )
        return financials

    def validate_snapshot(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> ValidationResult:
        correlation_id = correlation_id or create_correlation_id()
        snapshot = self._source.load_snapshot()

        validator = SnapshotValidator(
            cash_book_id=self._settings.cash_book_id,
            business_units=self._business_units(snapshot),
        )
        result = validator.validate(snapshot)

        self._audit_logger.log_snapshot_validated(
            is_valid=result.is_valid,
            issues=[issue.model_dump() for issue in result.issues],
            correlation_id=correlation_id,
        )
        return result


def create_report_center(
    snapshot: Optional[LedgerSnapshot] = None,
    keep_audit_trail: bool = True,
) -> tuple[ReportCenter, InMemorySnapshotSource, Optional[InMemoryAuditSink]]:
    """
    Factory function to create a report center over in-memory storage.

    Args:
        snapshot: Initial snapshot. Can be supplied later through the
                  returned source's `replace`.
        keep_audit_trail: Whether to collect audit events in memory.
                          Set to False to only log locally.

    Returns:
        (report_center, snapshot_source, audit_sink)
    """
    source = InMemorySnapshotSource(snapshot)
    sink = InMemoryAuditSink() if keep_audit_trail else None
    center = ReportCenter(source, audit_logger=AuditLogger(sink))
    return center, source, sink
