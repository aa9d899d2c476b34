"""
Financial Statement Models

Profit & Loss, Balance Sheet and the supporting statistics.

DESIGN DECISION: Reconciliation failures are DATA, not exceptions.
A statement that does not balance is still returned, carrying a
NOT_BALANCED reconciliation result and the numeric difference, so the
caller can show a warning instead of crashing.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Statement(BaseModel):
    model_config = ConfigDict(frozen=True)


class Period(str, Enum):
    """Reporting window for the Profit & Loss statement."""
    THIS_MONTH = "THIS_MONTH"
    LAST_MONTH = "LAST_MONTH"
    ALL_TIME = "ALL_TIME"


# =============================================================================
# PROFIT & LOSS
# =============================================================================

class RevenueBreakdown(_Statement):
    royalty: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    chit_commission: Decimal = Field(
        default=Decimal("0"),
        description="Foreman commission only, never the auction value"
    )
    business_units: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.royalty + self.interest + self.chit_commission + self.business_units


class ExpenseBreakdown(_Statement):
    operational: Decimal = Decimal("0")
    loan_interest: Decimal = Decimal("0")
    business_units: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.operational + self.loan_interest + self.business_units


# =============================================================================
# BALANCE SHEET
# =============================================================================

class BalanceSheetStatistics(_Statement):
    """
    Running figures maintained outside the statement engine.

    The engine takes these as given. `BookStatistics` can produce them
    from a snapshot when the caller has nothing better.
    """

    cash_in_hand: Decimal = Decimal("0")
    bank_balances: dict[str, Decimal] = Field(
        default_factory=dict,
        description="Closing balance per bank book id"
    )
    receivable_outstanding: Decimal = Decimal("0")
    advances_owed: Decimal = Decimal("0")


class InvestmentBreakdown(_Statement):
    chit: Decimal = Decimal("0")
    lic: Decimal = Decimal("0")
    sip: Decimal = Decimal("0")
    gold: Decimal = Decimal("0")
    fixed_deposit: Decimal = Decimal("0")
    other: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return (
            self.chit + self.lic + self.sip
            + self.gold + self.fixed_deposit + self.other
        )


class AssetBreakdown(_Statement):
    cash: Decimal = Decimal("0")
    bank_balances: dict[str, Decimal] = Field(default_factory=dict)
    receivables: Decimal = Decimal("0")
    lending_principal: Decimal = Decimal("0")
    investments: InvestmentBreakdown = Field(default_factory=InvestmentBreakdown)

    @property
    def total(self) -> Decimal:
        banks = sum(self.bank_balances.values(), Decimal("0"))
        return (
            self.cash + banks + self.receivables
            + self.lending_principal + self.investments.total
        )


class LiabilityBreakdown(_Statement):
    bank_loans: Decimal = Decimal("0")
    private_debt: Decimal = Field(
        default=Decimal("0"),
        description="Private liabilities plus credit principal of lender customers"
    )
    accounts_payable: Decimal = Decimal("0")
    advances: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.bank_loans + self.private_debt + self.accounts_payable + self.advances


class EquityBreakdown(_Statement):
    """
    Informational split of equity.

    Total equity is the residual of assets minus liabilities. These
    components are for display and are NOT expected to add up to it:
    current net profit is already inside the live asset/liability figures.
    """

    opening_capital: Decimal = Decimal("0")
    reserves: Decimal = Decimal("0")
    current_net_profit: Decimal = Decimal("0")


class ReconciliationStatus(str, Enum):
    BALANCED = "BALANCED"
    NOT_BALANCED = "NOT_BALANCED"


class ReconciliationResult(_Statement):
    """Outcome of checking Assets = Liabilities + Equity."""

    status: ReconciliationStatus
    difference: Decimal = Decimal("0")
    tolerance: Decimal = Decimal("1")

    @property
    def is_balanced(self) -> bool:
        return self.status == ReconciliationStatus.BALANCED


class PeriodFinancials(_Statement):
    """
    Everything the statements page shows for one period selection.

    Revenue, expenses and net profit cover the selected period only.
    Assets, liabilities and equity are always the current snapshot.
    """

    period: Period
    as_of: datetime

    revenue: RevenueBreakdown
    total_revenue: Decimal
    expenses: ExpenseBreakdown
    total_expenses: Decimal
    net_profit: Decimal

    assets: AssetBreakdown
    total_assets: Decimal
    liabilities: LiabilityBreakdown
    total_liabilities: Decimal
    equity: EquityBreakdown
    total_equity: Decimal

    reconciliation: ReconciliationResult

    @property
    def balance_difference(self) -> Decimal:
        return self.reconciliation.difference

    @property
    def is_balanced(self) -> bool:
        return self.reconciliation.is_balanced


# =============================================================================
# DASHBOARD STATISTICS
# =============================================================================

class BookStatistics(_Statement):
    """Book balances, outstanding figures and this month's headline numbers."""

    cash_in_hand: Decimal = Decimal("0")
    bank_balances: dict[str, Decimal] = Field(default_factory=dict)
    receivable_outstanding: Decimal = Decimal("0")
    payable_outstanding: Decimal = Decimal("0")
    advances_owed: Decimal = Decimal("0")

    royalty_income_month: Decimal = Decimal("0")
    interest_income_month: Decimal = Decimal("0")
    chit_income_month: Decimal = Decimal("0")
    expenses_month: Decimal = Decimal("0")
    net_profit_month: Decimal = Decimal("0")

    total_investments: Decimal = Decimal("0")

    def to_balance_sheet_statistics(self) -> BalanceSheetStatistics:
        """The subset of these figures the balance sheet consumes."""
        return BalanceSheetStatistics(
            cash_in_hand=self.cash_in_hand,
            bank_balances=dict(self.bank_balances),
            receivable_outstanding=self.receivable_outstanding,
            advances_owed=self.advances_owed,
        )


# =============================================================================
# OUTSTANDING ANALYSIS
# =============================================================================

class ReceivableBucket(str, Enum):
    ALL = "ALL"
    ROYALTY = "ROYALTY"
    INTEREST = "INTEREST"
    CHIT = "CHIT"
    GENERAL = "GENERAL"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class OutstandingView(str, Enum):
    RECEIVABLES = "receivables"
    MARKET_CAPITAL = "market_capital"
    ADVANCES = "advances"
    PAYABLES = "payables"


class OutstandingBreakdown(_Statement):
    royalty: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    chit: Decimal = Decimal("0")
    general: Decimal = Field(
        default=Decimal("0"),
        description="Net balance not explained by the other buckets"
    )

    def for_bucket(self, bucket: ReceivableBucket) -> Decimal:
        if bucket == ReceivableBucket.ROYALTY:
            return self.royalty
        if bucket == ReceivableBucket.INTEREST:
            return self.interest
        if bucket == ReceivableBucket.CHIT:
            return self.chit
        if bucket == ReceivableBucket.GENERAL:
            return self.general
        return self.royalty + self.interest + self.chit + self.general


class CustomerOutstanding(_Statement):
    customer_id: str
    name: str
    phone: Optional[str] = None
    net_ledger_balance: Decimal
    breakdown: OutstandingBreakdown
    display_amount: Decimal = Decimal("0")


class PayableLine(_Statement):
    """Principal we owe to one lender, either a liability or a lending customer."""

    party_id: str
    provider_name: str
    type: str = Field(
        ...,
        description="Liability type, or CUSTOMER for a customer who lent to us"
    )
    principal: Decimal
