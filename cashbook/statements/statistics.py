"""
Book Statistics

Running figures for the dashboard and the balance sheet: book balances,
customer outstanding, and this month's headline income and expenses.

These are the figures the statement engine treats as externally
supplied. Computing them here lets a caller without its own running
totals still produce a balance sheet from a bare snapshot.
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cashbook.ledgers.rules import ZERO
from cashbook.models.records import (
    Category,
    ContributionType,
    Customer,
    Direction,
    Investment,
    InvestmentType,
    Invoice,
    InvoiceType,
    Payment,
    VoucherType,
)
from cashbook.models.snapshot import LedgerSnapshot
from cashbook.models.statements import BookStatistics, Period
from cashbook.statements.periods import period_predicate


def book_balance(book_id: str, opening_balance: Decimal, payments: Iterable[Payment]) -> Decimal:
    """
    Current balance of a book.

    Payments recorded on the book move it by their signed amount. Contra
    vouchers recorded on another book and targeting this one add to it.
    """
    balance = opening_balance
    for payment in payments:
        if payment.mode == book_id:
            balance += payment.signed_amount
        elif payment.voucher_type == VoucherType.CONTRA.value and payment.target_mode == book_id:
            balance += payment.amount
    return balance


def customer_outstanding(
    customer: Customer,
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
) -> Decimal:
    """
    Invoiced minus received for one customer.

    Principal recoveries are excluded from "received": they settle the
    lending principal, not invoices.
    """
    invoiced = sum(
        (i.amount for i in invoices if i.customer_id == customer.id and not i.is_void),
        ZERO,
    )
    received = sum(
        (
            p.amount for p in payments
            if p.source_id == customer.id
            and p.type == Direction.IN
            and p.category != Category.PRINCIPAL_RECOVERY.value
        ),
        ZERO,
    )
    return invoiced - received


def dashboard_investment_value(investment: Investment) -> Decimal:
    """Installment plans and chit savings count what was paid in."""
    if (
        investment.contribution_type in (ContributionType.MONTHLY, ContributionType.INSTALLMENT)
        or investment.type == InvestmentType.CHIT_SAVINGS.value
    ):
        return investment.total_paid
    return investment.current_value or investment.amount_invested


def compute_book_statistics(
    snapshot: LedgerSnapshot,
    now: Optional[datetime] = None,
    cash_book_id: str = "CASH",
) -> BookStatistics:
    """
    Compute every dashboard statistic from a snapshot.

    Bank balances are only reported for books that have a bank-account
    record; a payment tagged with an unknown bank does not create one.
    """
    payments = snapshot.payments
    invoices = snapshot.invoices

    cash_in_hand = book_balance(cash_book_id, snapshot.opening_balances.CASH, payments)
    bank_balances = {
        bank.id: book_balance(bank.id, bank.opening_balance, payments)
        for bank in snapshot.bank_accounts
    }

    balances = [customer_outstanding(c, invoices, payments) for c in snapshot.customers]
    receivable_outstanding = sum((b for b in balances if b > 0), ZERO)
    advances_owed = -sum((b for b in balances if b < 0), ZERO)
    payable_outstanding = sum((l.principal for l in snapshot.liabilities), ZERO)

    this_month = period_predicate(Period.THIS_MONTH, now)
    month_invoices = [i for i in invoices if not i.is_void and this_month(i.date)]

    def invoiced(invoice_type: InvoiceType) -> Decimal:
        return sum(
            (i.amount for i in month_invoices if i.type == invoice_type.value),
            ZERO,
        )

    royalty = invoiced(InvoiceType.ROYALTY)
    interest = invoiced(InvoiceType.INTEREST)
    chit = invoiced(InvoiceType.CHIT)
    expenses = sum(
        (
            p.amount for p in payments
            if p.type == Direction.OUT
            and p.voucher_type == VoucherType.PAYMENT.value
            and p.category != Category.LOAN_REPAYMENT.value
            and this_month(p.date)
        ),
        ZERO,
    )

    return BookStatistics(
        cash_in_hand=cash_in_hand,
        bank_balances=bank_balances,
        receivable_outstanding=receivable_outstanding,
        payable_outstanding=payable_outstanding,
        advances_owed=advances_owed,
        royalty_income_month=royalty,
        interest_income_month=interest,
        chit_income_month=chit,
        expenses_month=expenses,
        net_profit_month=royalty + interest + chit - expenses,
        total_investments=sum(
            (dashboard_investment_value(i) for i in snapshot.investments),
            ZERO,
        ),
    )
