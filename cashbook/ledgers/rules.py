"""
Classification Rules

Which payments count as income or expense, how missing fields are
labelled, and how payments are ordered before balances are accumulated.
Every ledger and statement goes through these helpers so the rules are
written exactly once.

DESIGN DECISION: Internal movements never count as income or expense.
- CONTRA: transfer between two of our own books
- LOAN_REPAYMENT: reduces a liability
- CHIT_SAVINGS / INVESTMENT_*: buys an asset
Counting them would double-count money that never left the business.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from cashbook.models.records import (
    INVESTMENT_CATEGORY_PREFIX,
    Category,
    Direction,
    Payment,
)


EXPENSE_EXCLUDED_CATEGORIES = frozenset({
    Category.CONTRA.value,
    Category.LOAN_REPAYMENT.value,
    Category.CHIT_SAVINGS.value,
})

INCOME_EXCLUDED_CATEGORIES = frozenset({
    Category.CONTRA.value,
})

# Fields tried in order when a payment needs a one-line label.
DISPLAY_LABEL_FIELDS = ("notes", "category", "voucher_type")

DEFAULT_CATEGORY_LABEL = "Other"

ZERO = Decimal("0")


def _is_investment(category: Optional[str]) -> bool:
    return bool(category) and category.startswith(INVESTMENT_CATEGORY_PREFIX)


def is_expense_category(category: Optional[str]) -> bool:
    """True if an OUT payment with this category is a real expense."""
    if category in EXPENSE_EXCLUDED_CATEGORIES:
        return False
    return not _is_investment(category)


def is_income_category(category: Optional[str]) -> bool:
    """True if an IN payment with this category is real income."""
    if category in INCOME_EXCLUDED_CATEGORIES:
        return False
    return not _is_investment(category)


def is_expense(payment: Payment) -> bool:
    return payment.type == Direction.OUT and is_expense_category(payment.category)


def is_income(payment: Payment) -> bool:
    return payment.type == Direction.IN and is_income_category(payment.category)


def category_label(
    payment: Payment,
    default: str = DEFAULT_CATEGORY_LABEL,
) -> str:
    """Category used for grouping; a missing category groups as `default`."""
    return payment.category or default


def display_label(
    payment: Payment,
    default: str = DEFAULT_CATEGORY_LABEL,
) -> str:
    """
    One-line description of a payment.

    The first non-empty field of DISPLAY_LABEL_FIELDS wins, so a payment
    shows its notes, then its category, then its voucher type, then
    `default`.
    """
    for field_name in DISPLAY_LABEL_FIELDS:
        value = getattr(payment, field_name)
        if value:
            return value
    return default


def timeline_key(ts: datetime) -> datetime:
    """
    Sort key that puts naive and timezone-aware timestamps on one axis.

    Naive timestamps are read as UTC.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def chronological(payments: Iterable[Payment]) -> list[Payment]:
    """
    Oldest first.

    sorted() is stable, so payments sharing a timestamp keep their
    insertion order and running balances are reproducible.
    """
    return sorted(payments, key=lambda p: timeline_key(p.date))


def newest_first(payments: Iterable[Payment]) -> list[Payment]:
    """
    Newest first, ties in reverse insertion order.

    This is the exact mirror of chronological(), so reversing a
    newest-first list always gives the oldest-first replay order.
    """
    return list(reversed(chronological(payments)))


def total(payments: Iterable[Payment]) -> Decimal:
    return sum((p.amount for p in payments), ZERO)
