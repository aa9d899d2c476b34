"""
Category Ledger Builder

Income and expense ledgers across all books, newest entries first, with
a cumulative total that grows from the oldest listed entry to the newest.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Optional

from cashbook.ledgers.rules import (
    DEFAULT_CATEGORY_LABEL,
    ZERO,
    category_label,
    display_label,
    is_expense,
    is_income,
    newest_first,
    total,
)
from cashbook.models.ledger import (
    ALL_CATEGORIES,
    CategoryLedger,
    CategoryLedgerRow,
    LedgerKind,
)
from cashbook.models.records import Payment


def eligible_payments(kind: LedgerKind, payments: Iterable[Payment]) -> list[Payment]:
    """Payments of this kind, internal movements removed, newest first."""
    keep = is_income if kind == LedgerKind.INCOME else is_expense
    return newest_first(p for p in payments if keep(p))


def _matches_search(payment: Payment, needle: str) -> bool:
    return bool(payment.source_name) and needle in payment.source_name.lower()


def build_category_ledger(
    kind: LedgerKind,
    payments: Iterable[Payment],
    category_filter: str = ALL_CATEGORIES,
    search: Optional[str] = None,
    default_label: str = DEFAULT_CATEGORY_LABEL,
) -> CategoryLedger:
    """
    Build the income or expense ledger.

    Args:
        kind: INCOME or EXPENSE
        payments: The full payment log
        category_filter: ALL or an exact category label
        search: Case-insensitive substring of the counterparty name
        default_label: Label for payments without a category

    Returns:
        CategoryLedger, rows newest first. The newest row's running total
        equals the grand total; the oldest row's equals its own amount.
    """
    eligible = eligible_payments(kind, payments)

    category_totals: dict[str, Decimal] = {}
    for payment in eligible:
        label = category_label(payment, default_label)
        category_totals[label] = category_totals.get(label, ZERO) + payment.amount
    categories = tuple(sorted(category_totals))

    shown = eligible
    if category_filter != ALL_CATEGORIES:
        shown = [p for p in shown if category_label(p, default_label) == category_filter]
    if search:
        needle = search.lower()
        shown = [p for p in shown if _matches_search(p, needle)]

    # Accumulate oldest to newest, then present newest first again
    running = ZERO
    ascending_rows = []
    for payment in reversed(shown):
        running += payment.amount
        ascending_rows.append(CategoryLedgerRow(
            payment=payment,
            running_total=running,
            label=display_label(payment, default_label),
        ))

    return CategoryLedger(
        kind=kind,
        category_filter=category_filter,
        search=search or None,
        rows=tuple(reversed(ascending_rows)),
        grand_total=running,
        categories=categories,
        category_totals={c: category_totals[c] for c in categories},
        overall_total=total(eligible),
    )


def build_income_ledger(payments: Iterable[Payment], **kwargs) -> CategoryLedger:
    return build_category_ledger(LedgerKind.INCOME, payments, **kwargs)


def build_expense_ledger(payments: Iterable[Payment], **kwargs) -> CategoryLedger:
    return build_category_ledger(LedgerKind.EXPENSE, payments, **kwargs)
