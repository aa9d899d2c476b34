"""Data models package."""

from cashbook.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from cashbook.models.ledger import (
    ALL_CATEGORIES,
    AccountLedger,
    BusinessPerformanceReport,
    BusinessUnitPerformance,
    BusinessUnitTotals,
    CategoryLedger,
    CategoryLedgerRow,
    DirectionFilter,
    EntrySource,
    LedgerKind,
    LedgerRow,
    LedgerScope,
    Party,
    PartyLedger,
    PartyLedgerEntry,
    PartyType,
)
from cashbook.models.records import (
    INVESTMENT_CATEGORY_PREFIX,
    BankAccount,
    Category,
    ChitAuction,
    ChitGroup,
    ContributionType,
    Customer,
    Direction,
    Investment,
    InvestmentTransaction,
    InvestmentType,
    Invoice,
    InvoiceStatus,
    InvoiceType,
    Liability,
    LiabilityType,
    OpeningBalances,
    Payment,
    Supplier,
    VoucherType,
)
from cashbook.models.snapshot import LedgerSnapshot
from cashbook.models.statements import (
    AssetBreakdown,
    BalanceSheetStatistics,
    BookStatistics,
    CustomerOutstanding,
    EquityBreakdown,
    ExpenseBreakdown,
    InvestmentBreakdown,
    LiabilityBreakdown,
    OutstandingBreakdown,
    OutstandingView,
    PayableLine,
    Period,
    PeriodFinancials,
    ReceivableBucket,
    ReconciliationResult,
    ReconciliationStatus,
    RevenueBreakdown,
    SortOrder,
)
from cashbook.models.validation import ValidationIssue, ValidationResult

__all__ = [
    # Source records
    "BankAccount",
    "Category",
    "ChitAuction",
    "ChitGroup",
    "ContributionType",
    "Customer",
    "Direction",
    "INVESTMENT_CATEGORY_PREFIX",
    "Investment",
    "InvestmentTransaction",
    "InvestmentType",
    "Invoice",
    "InvoiceStatus",
    "InvoiceType",
    "Liability",
    "LiabilityType",
    "OpeningBalances",
    "Payment",
    "Supplier",
    "VoucherType",
    "LedgerSnapshot",
    # Ledger views
    "ALL_CATEGORIES",
    "AccountLedger",
    "BusinessPerformanceReport",
    "BusinessUnitPerformance",
    "BusinessUnitTotals",
    "CategoryLedger",
    "CategoryLedgerRow",
    "DirectionFilter",
    "EntrySource",
    "LedgerKind",
    "LedgerRow",
    "LedgerScope",
    "Party",
    "PartyLedger",
    "PartyLedgerEntry",
    "PartyType",
    # Statements
    "AssetBreakdown",
    "BalanceSheetStatistics",
    "BookStatistics",
    "CustomerOutstanding",
    "EquityBreakdown",
    "ExpenseBreakdown",
    "InvestmentBreakdown",
    "LiabilityBreakdown",
    "OutstandingBreakdown",
    "OutstandingView",
    "PayableLine",
    "Period",
    "PeriodFinancials",
    "ReceivableBucket",
    "ReconciliationResult",
    "ReconciliationStatus",
    "RevenueBreakdown",
    "SortOrder",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
