"""
Outstanding Analysis

Who owes us, whom we owe, and how much of each customer's balance comes
from royalty, interest, chit or general trade.
"""

from collections.abc import Iterable
from decimal import Decimal

from cashbook.ledgers.rules import ZERO
from cashbook.models.records import (
    Customer,
    Direction,
    Invoice,
    InvoiceType,
    Liability,
    Payment,
    Supplier,
)
from cashbook.models.statements import (
    CustomerOutstanding,
    OutstandingBreakdown,
    PayableLine,
    ReceivableBucket,
    SortOrder,
)


LENDING_CUSTOMER_TYPE = "CUSTOMER"


def analyse_customer(
    customer: Customer,
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
) -> CustomerOutstanding:
    """
    Net ledger balance of a customer and its breakdown.

    Net = (opening + receivable invoices + payments to them)
        - (payable invoices + payments from them)

    Royalty, interest and chit come from open invoice balances. GENERAL
    absorbs the rest so the buckets always add up to the net balance.
    """
    own_invoices = [i for i in invoices if i.customer_id == customer.id and not i.is_void]
    own_payments = [p for p in payments if p.source_id == customer.id]

    def invoice_sum(direction: Direction) -> Decimal:
        return sum((i.amount for i in own_invoices if i.direction == direction), ZERO)

    def payment_sum(direction: Direction) -> Decimal:
        return sum((p.amount for p in own_payments if p.type == direction), ZERO)

    net = (
        customer.opening_balance
        + invoice_sum(Direction.IN)
        + payment_sum(Direction.OUT)
        - invoice_sum(Direction.OUT)
        - payment_sum(Direction.IN)
    )

    def open_balance(invoice_type: InvoiceType, receivable_only: bool = False) -> Decimal:
        return sum(
            (
                i.balance for i in own_invoices
                if i.type == invoice_type.value
                and (not receivable_only or i.direction == Direction.IN)
            ),
            ZERO,
        )

    royalty = open_balance(InvoiceType.ROYALTY)
    interest = open_balance(InvoiceType.INTEREST)
    chit = open_balance(InvoiceType.CHIT, receivable_only=True)

    return CustomerOutstanding(
        customer_id=customer.id,
        name=customer.name,
        phone=customer.phone,
        net_ledger_balance=net,
        breakdown=OutstandingBreakdown(
            royalty=royalty,
            interest=interest,
            chit=chit,
            general=net - (royalty + interest + chit),
        ),
    )


def _sorted(lines: list[CustomerOutstanding], order: SortOrder) -> list[CustomerOutstanding]:
    return sorted(
        lines,
        key=lambda line: line.display_amount,
        reverse=order == SortOrder.DESC,
    )


def build_receivables(
    customers: Iterable[Customer],
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
    bucket: ReceivableBucket = ReceivableBucket.ALL,
    order: SortOrder = SortOrder.DESC,
) -> list[CustomerOutstanding]:
    """
    Customers with a positive amount due in the chosen bucket.

    ALL uses the net ledger balance; a specific bucket uses that bucket.
    """
    invoices = list(invoices)
    payments = list(payments)
    lines = []
    for customer in customers:
        analysis = analyse_customer(customer, invoices, payments)
        amount = (
            analysis.net_ledger_balance
            if bucket == ReceivableBucket.ALL
            else analysis.breakdown.for_bucket(bucket)
        )
        if amount > 0:
            lines.append(analysis.model_copy(update={"display_amount": amount}))
    return _sorted(lines, order)


def build_advances(
    customers: Iterable[Customer],
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
    order: SortOrder = SortOrder.DESC,
) -> list[CustomerOutstanding]:
    """Customers we owe money to, shown as positive amounts."""
    invoices = list(invoices)
    payments = list(payments)
    lines = []
    for customer in customers:
        analysis = analyse_customer(customer, invoices, payments)
        if analysis.net_ledger_balance < 0:
            lines.append(
                analysis.model_copy(update={"display_amount": -analysis.net_ledger_balance})
            )
    return _sorted(lines, order)


def build_market_capital(
    customers: Iterable[Customer],
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
    order: SortOrder = SortOrder.DESC,
) -> list[CustomerOutstanding]:
    """Principal we have lent out, one line per interest customer."""
    invoices = list(invoices)
    payments = list(payments)
    lines = [
        analyse_customer(c, invoices, payments).model_copy(
            update={"display_amount": c.interest_principal}
        )
        for c in customers
        if c.is_interest and c.interest_principal > 0
    ]
    return _sorted(lines, order)


def build_payables(
    liabilities: Iterable[Liability],
    customers: Iterable[Customer] = (),
    order: SortOrder = SortOrder.DESC,
) -> list[PayableLine]:
    """
    Borrowed principal still owed.

    Liabilities with a positive principal plus customers flagged as
    lenders at their credit principal, sorted by principal.
    """
    lines = [
        PayableLine(
            party_id=l.id,
            provider_name=l.provider_name,
            type=l.type.value,
            principal=l.principal,
        )
        for l in liabilities
        if l.principal > 0
    ]
    lines.extend(
        PayableLine(
            party_id=c.id,
            provider_name=f"{c.name} (Lender)",
            type=LENDING_CUSTOMER_TYPE,
            principal=c.credit_principal,
        )
        for c in customers
        if c.is_lender and c.credit_principal > 0
    )
    return sorted(lines, key=lambda line: line.principal, reverse=order == SortOrder.DESC)


def supplier_outstanding(suppliers: Iterable[Supplier]) -> Decimal:
    return sum((s.outstanding for s in suppliers), ZERO)
