"""
Party Ledger Builder

Debit/credit statement for a single customer or lender, built from
invoices raised against the party and payments exchanged with them.

Sign convention (from our side):
- Debit increases what the party owes us: receivable invoices, money we
  paid out to them.
- Credit decreases it: payable invoices, money they paid in to us.
A positive balance means they owe us.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Optional

from cashbook.ledgers.rules import ZERO, timeline_key
from cashbook.models.ledger import (
    EntrySource,
    LedgerScope,
    Party,
    PartyLedger,
    PartyLedgerEntry,
    PartyType,
)
from cashbook.models.records import (
    Category,
    Customer,
    Direction,
    Invoice,
    Liability,
    Payment,
)


# Payment categories shown under each customer scope
SCOPE_CATEGORIES: dict[LedgerScope, frozenset[str]] = {
    LedgerScope.ROYALTY: frozenset({Category.ROYALTY.value}),
    LedgerScope.INTEREST: frozenset({
        Category.INTEREST.value,
        Category.PRINCIPAL_RECOVERY.value,
    }),
    LedgerScope.CHIT: frozenset({Category.CHIT.value, Category.CHIT_FUND.value}),
    LedgerScope.GENERAL: frozenset({
        Category.GENERAL.value,
        Category.CUSTOMER_PAYMENT.value,
    }),
}


def build_party_directory(
    customers: Iterable[Customer],
    liabilities: Iterable[Liability],
) -> list[Party]:
    """Customers and lenders in one list, sorted by name."""
    parties = [
        Party(id=c.id, name=c.name, type=PartyType.CUSTOMER, label=c.name)
        for c in customers
    ]
    parties.extend(
        Party(
            id=l.id,
            name=l.provider_name,
            type=PartyType.LENDER,
            label=f"{l.provider_name} (Lender)",
        )
        for l in liabilities
    )
    return sorted(parties, key=lambda p: p.name.lower())


def available_scopes(customer: Customer) -> tuple[LedgerScope, ...]:
    """COMBINED plus one scope per portfolio flag the customer carries."""
    scopes = [LedgerScope.COMBINED]
    if customer.is_royalty:
        scopes.append(LedgerScope.ROYALTY)
    if customer.is_interest:
        scopes.append(LedgerScope.INTEREST)
    if customer.is_chit:
        scopes.append(LedgerScope.CHIT)
    if customer.is_general:
        scopes.append(LedgerScope.GENERAL)
    return tuple(scopes)


def customer_opening_balance(customer: Customer, scope: LedgerScope) -> Decimal:
    if scope == LedgerScope.COMBINED:
        return (
            customer.interest_principal
            + customer.opening_balance
            - customer.credit_principal
        )
    if scope == LedgerScope.INTEREST:
        return customer.interest_principal
    if scope == LedgerScope.GENERAL:
        return customer.opening_balance
    return ZERO


def _payment_entry(payment: Payment) -> PartyLedgerEntry:
    outgoing = payment.type == Direction.OUT
    return PartyLedgerEntry(
        date=payment.date,
        reference=payment.voucher_type,
        description=payment.category or "",
        debit=payment.amount if outgoing else ZERO,
        credit=ZERO if outgoing else payment.amount,
        source=EntrySource.PAYMENT,
    )


def _invoice_entry(invoice: Invoice) -> PartyLedgerEntry:
    payable = invoice.direction == Direction.OUT
    description = f"{invoice.type} BILLING"
    if payable:
        description += " (PAYOUT)"
    return PartyLedgerEntry(
        date=invoice.date,
        reference=invoice.invoice_number,
        description=description,
        debit=ZERO if payable else invoice.amount,
        credit=invoice.amount if payable else ZERO,
        source=EntrySource.INVOICE,
    )


def _in_scope(payment: Payment, scope: LedgerScope) -> bool:
    if scope == LedgerScope.COMBINED:
        return True
    return payment.category in SCOPE_CATEGORIES[scope]


def _with_balances(
    entries: Sequence[PartyLedgerEntry],
    opening: Decimal,
) -> tuple[tuple[PartyLedgerEntry, ...], Decimal]:
    balance = opening
    rows = []
    for entry in sorted(entries, key=lambda e: timeline_key(e.date)):
        balance += entry.debit - entry.credit
        rows.append(entry.model_copy(update={"balance": balance}))
    return tuple(rows), balance


def build_customer_ledger(
    customer: Customer,
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
    scope: LedgerScope = LedgerScope.COMBINED,
) -> PartyLedger:
    """
    Ledger for one customer, optionally narrowed to one relationship.

    Invoices come first and payments second before the stable date sort,
    so an invoice and a payment on the same timestamp list the invoice
    first.
    """
    opening = customer_opening_balance(customer, scope)

    entries = [
        _invoice_entry(i)
        for i in invoices
        if i.customer_id == customer.id
        and not i.is_void
        and (scope == LedgerScope.COMBINED or i.type == scope.value)
    ]
    entries.extend(
        _payment_entry(p)
        for p in payments
        if p.source_id == customer.id and _in_scope(p, scope)
    )

    rows, closing = _with_balances(entries, opening)
    return PartyLedger(
        party=Party(
            id=customer.id,
            name=customer.name,
            type=PartyType.CUSTOMER,
            label=customer.name,
        ),
        scope=scope,
        opening_balance=opening,
        entries=rows,
        closing_balance=closing,
        available_scopes=available_scopes(customer),
    )


def build_lender_ledger(
    liability: Liability,
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
) -> PartyLedger:
    """
    Ledger for a lender. The principal we owe opens as a credit balance
    and interest accruals add to it.
    """
    opening = -liability.principal

    entries = [
        PartyLedgerEntry(
            date=i.date,
            reference=i.invoice_number,
            description="INTEREST ACCRUAL",
            credit=i.amount,
            source=EntrySource.INVOICE,
        )
        for i in invoices
        if i.lender_id == liability.id and not i.is_void
    ]
    entries.extend(_payment_entry(p) for p in payments if p.source_id == liability.id)

    rows, closing = _with_balances(entries, opening)
    return PartyLedger(
        party=Party(
            id=liability.id,
            name=liability.provider_name,
            type=PartyType.LENDER,
            label=f"{liability.provider_name} (Lender)",
        ),
        scope=LedgerScope.COMBINED,
        opening_balance=opening,
        entries=rows,
        closing_balance=closing,
    )


def build_party_ledger(
    party_id: str,
    customers: Iterable[Customer],
    liabilities: Iterable[Liability],
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
    scope: LedgerScope = LedgerScope.COMBINED,
) -> Optional[PartyLedger]:
    """
    Ledger for whichever customer or lender has `party_id`.

    Customers take precedence over lenders. Returns None when neither
    exists. The scope only applies to customers.
    """
    customer = next((c for c in customers if c.id == party_id), None)
    if customer is not None:
        return build_customer_ledger(customer, invoices, payments, scope)

    liability = next((l for l in liabilities if l.id == party_id), None)
    if liability is not None:
        return build_lender_ledger(liability, invoices, payments)

    return None
