"""
Financial Statement Engine

Builds the Profit & Loss statement for a period and the Balance Sheet
for the current snapshot, then checks that the balance sheet balances.

DESIGN DECISION: Equity is a RESIDUAL.
    true_equity = total_assets - total_liabilities
Opening capital, reserves and current profit are shown as a breakdown,
but the equity total is the residual. The statement therefore balances
by construction, and a non-zero difference can only come from a
classification bug upstream. Such a difference is REPORTED as a
NOT_BALANCED result; it is never raised and never silently accepted.

Time-boxing applies to the P&L only. The balance sheet always reflects
the whole snapshot.
"""

from collections.abc import Callable, Iterable
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cashbook.ledgers.rules import ZERO, is_expense, total
from cashbook.models.records import (
    Category,
    ContributionType,
    Customer,
    Direction,
    Investment,
    InvestmentType,
    InvoiceStatus,
    InvoiceType,
    LiabilityType,
    VoucherType,
)
from cashbook.models.snapshot import LedgerSnapshot
from cashbook.models.statements import (
    AssetBreakdown,
    BalanceSheetStatistics,
    EquityBreakdown,
    ExpenseBreakdown,
    InvestmentBreakdown,
    LiabilityBreakdown,
    Period,
    PeriodFinancials,
    ReconciliationResult,
    ReconciliationStatus,
    RevenueBreakdown,
)
from cashbook.statements.periods import period_predicate


DatePredicate = Callable[[datetime], bool]

# Investment types valued by what has been paid in so far
INSTALLMENT_VALUED_TYPES = frozenset({
    InvestmentType.CHIT_SAVINGS.value,
    InvestmentType.LIC.value,
    InvestmentType.SIP.value,
    InvestmentType.GOLD_SAVINGS.value,
})


# =============================================================================
# PROFIT & LOSS (time-boxed)
# =============================================================================

def compute_revenue(snapshot: LedgerSnapshot, in_period: DatePredicate) -> RevenueBreakdown:
    """
    Revenue for the period.

    Chit revenue is the foreman commission of each auction, not the
    auction value, which passes through to the winner.
    """
    live_invoices = [i for i in snapshot.invoices if not i.is_void and in_period(i.date)]

    chit_commission = sum(
        (
            auction.commission_amount
            for group in snapshot.chit_groups
            for auction in group.auctions
            if in_period(auction.date)
        ),
        ZERO,
    )

    business_income = total(
        p for p in snapshot.payments
        if p.type == Direction.IN
        and p.category == Category.OTHER_BUSINESS.value
        and in_period(p.date)
    )

    return RevenueBreakdown(
        royalty=sum(
            (i.amount for i in live_invoices if i.type == InvoiceType.ROYALTY.value),
            ZERO,
        ),
        interest=sum(
            (i.amount for i in live_invoices if i.type == InvoiceType.INTEREST.value),
            ZERO,
        ),
        chit_commission=chit_commission,
        business_units=business_income,
    )


def compute_expenses(snapshot: LedgerSnapshot, in_period: DatePredicate) -> ExpenseBreakdown:
    """
    Expenses for the period.

    Transfers, loan principal and asset purchases are removed first.
    What remains splits into operational payment vouchers, loan interest
    and business-unit spending.
    """
    spent = [p for p in snapshot.payments if is_expense(p) and in_period(p.date)]

    return ExpenseBreakdown(
        operational=total(
            p for p in spent
            if p.voucher_type == VoucherType.PAYMENT.value
            and p.category not in (Category.LOAN_INTEREST.value, Category.OTHER_BUSINESS.value)
        ),
        loan_interest=total(p for p in spent if p.category == Category.LOAN_INTEREST.value),
        business_units=total(p for p in spent if p.category == Category.OTHER_BUSINESS.value),
    )


# =============================================================================
# BALANCE SHEET (snapshot)
# =============================================================================

def investment_value(investment: Investment) -> Decimal:
    """Balance-sheet value of one investment."""
    if investment.type in INSTALLMENT_VALUED_TYPES:
        return investment.total_paid
    if investment.type == InvestmentType.FIXED_DEPOSIT.value:
        return investment.amount_invested
    if investment.contribution_type == ContributionType.LUMP_SUM:
        return investment.amount_invested
    return investment.total_paid


def compute_investments(investments: Iterable[Investment]) -> InvestmentBreakdown:
    buckets = {
        InvestmentType.CHIT_SAVINGS.value: "chit",
        InvestmentType.LIC.value: "lic",
        InvestmentType.SIP.value: "sip",
        InvestmentType.GOLD_SAVINGS.value: "gold",
        InvestmentType.FIXED_DEPOSIT.value: "fixed_deposit",
    }
    values = dict.fromkeys(["chit", "lic", "sip", "gold", "fixed_deposit", "other"], ZERO)
    for investment in investments:
        bucket = buckets.get(investment.type, "other")
        values[bucket] += investment_value(investment)
    return InvestmentBreakdown(**values)


def general_receivables(customers: Iterable[Customer]) -> Decimal:
    """Sum of positive customer opening balances (they owe us)."""
    return sum((max(ZERO, c.opening_balance) for c in customers), ZERO)


def general_payables(customers: Iterable[Customer]) -> Decimal:
    """Sum of |negative customer opening balances| (we owe them)."""
    return sum((-min(ZERO, c.opening_balance) for c in customers), ZERO)


def compute_assets(
    snapshot: LedgerSnapshot,
    statistics: BalanceSheetStatistics,
) -> AssetBreakdown:
    return AssetBreakdown(
        cash=statistics.cash_in_hand,
        bank_balances=dict(statistics.bank_balances),
        receivables=statistics.receivable_outstanding + general_receivables(snapshot.customers),
        lending_principal=sum(
            (c.interest_principal for c in snapshot.customers if c.is_interest),
            ZERO,
        ),
        investments=compute_investments(snapshot.investments),
    )


def compute_liabilities(
    snapshot: LedgerSnapshot,
    statistics: BalanceSheetStatistics,
) -> LiabilityBreakdown:
    """
    Liabilities of the snapshot.

    Private debt has two independent sources, PRIVATE liabilities and
    lender customers' credit principal. Both are added.
    """
    bank_loans = sum(
        (l.principal for l in snapshot.liabilities if l.type == LiabilityType.BANK),
        ZERO,
    )
    private_liabilities = sum(
        (l.principal for l in snapshot.liabilities if l.type == LiabilityType.PRIVATE),
        ZERO,
    )
    customer_credit = sum(
        (c.credit_principal for c in snapshot.customers if c.is_lender),
        ZERO,
    )
    accounts_payable = sum(
        (
            i.balance for i in snapshot.invoices
            if i.direction == Direction.OUT
            and i.status != InvoiceStatus.PAID
            and not i.is_void
        ),
        ZERO,
    )

    return LiabilityBreakdown(
        bank_loans=bank_loans,
        private_debt=private_liabilities + customer_credit,
        accounts_payable=accounts_payable,
        advances=statistics.advances_owed + general_payables(snapshot.customers),
    )


def reconcile(
    total_assets: Decimal,
    total_liabilities: Decimal,
    total_equity: Decimal,
    tolerance: Decimal = Decimal("1"),
) -> ReconciliationResult:
    """
    Check Assets = Liabilities + Equity within `tolerance`.

    An exact match always balances, even with a zero tolerance.
    """
    difference = total_assets - (total_liabilities + total_equity)
    status = (
        ReconciliationStatus.BALANCED
        if difference == 0 or abs(difference) < tolerance
        else ReconciliationStatus.NOT_BALANCED
    )
    return ReconciliationResult(status=status, difference=difference, tolerance=tolerance)


class FinancialStatementEngine:
    """
    Produces PeriodFinancials from a snapshot.

    Stateless apart from the reconciliation tolerance: the same inputs
    always give the same statements, and calls never interfere.
    """

    def __init__(self, tolerance: Decimal = Decimal("1")):
        """
        Initialize engine.

        Args:
            tolerance: Largest absolute balance difference still treated
                       as balanced (rounding slack).
        """
        self._tolerance = tolerance

    def compute(
        self,
        snapshot: LedgerSnapshot,
        period: Period = Period.THIS_MONTH,
        statistics: Optional[BalanceSheetStatistics] = None,
        now: Optional[datetime] = None,
    ) -> PeriodFinancials:
        """
        Compute both statements.

        Args:
            snapshot: Source collections
            period: Window for revenue, expenses and net profit
            statistics: Running figures (cash, banks, outstanding). Falls
                        back to the snapshot's own, then to zeros.
            now: Reference time for the period; defaults to the current time

        Returns:
            PeriodFinancials including the reconciliation result
        """
        now = now or datetime.now()
        statistics = statistics or snapshot.statistics or BalanceSheetStatistics()
        in_period = period_predicate(period, now)

        revenue = compute_revenue(snapshot, in_period)
        expenses = compute_expenses(snapshot, in_period)
        net_profit = revenue.total - expenses.total

        assets = compute_assets(snapshot, statistics)
        liabilities = compute_liabilities(snapshot, statistics)
        total_assets = assets.total
        total_liabilities = liabilities.total

        true_equity = total_assets - total_liabilities
        opening_capital = snapshot.opening_balances.CAPITAL
        equity = EquityBreakdown(
            opening_capital=opening_capital,
            reserves=true_equity - opening_capital,
            current_net_profit=net_profit,
        )

        return PeriodFinancials(
            period=period,
            as_of=now,
            revenue=revenue,
            total_revenue=revenue.total,
            expenses=expenses,
            total_expenses=expenses.total,
            net_profit=net_profit,
            assets=assets,
            total_assets=total_assets,
            liabilities=liabilities,
            total_liabilities=total_liabilities,
            equity=equity,
            total_equity=true_equity,
            reconciliation=reconcile(
                total_assets, total_liabilities, true_equity, self._tolerance
            ),
        )
