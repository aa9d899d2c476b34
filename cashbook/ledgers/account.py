"""
Account Ledger Builder

Replays the payments of one book in date order and attaches the running
balance to each row.

IMPORTANT: Balances are always computed over EVERY payment on the book.
The direction filter is applied afterwards and only hides rows; it never
changes the balance printed next to a row or the closing balance.
"""

from collections.abc import Callable, Iterable
from decimal import Decimal

from cashbook.ledgers.rules import DEFAULT_CATEGORY_LABEL, ZERO, chronological, display_label
from cashbook.models.ledger import AccountLedger, DirectionFilter, LedgerRow
from cashbook.models.records import Direction, Payment


def replay(
    payments: Iterable[Payment],
    opening_balance: Decimal,
    default_label: str = DEFAULT_CATEGORY_LABEL,
) -> list[LedgerRow]:
    """
    Accumulate a running balance over payments, oldest first.

    IN payments add to the balance, OUT payments subtract from it.
    """
    balance = opening_balance
    rows = []
    for payment in chronological(payments):
        balance += payment.signed_amount
        rows.append(LedgerRow(
            payment=payment,
            running_balance=balance,
            label=display_label(payment, default_label),
        ))
    return rows


def build_ledger(
    key: str,
    opening_balance: Decimal,
    payments: Iterable[Payment],
    belongs: Callable[[Payment], bool],
    direction_filter: DirectionFilter = DirectionFilter.ALL,
    default_label: str = DEFAULT_CATEGORY_LABEL,
) -> AccountLedger:
    """Ledger over the payments selected by `belongs`."""
    all_rows = replay((p for p in payments if belongs(p)), opening_balance, default_label)
    closing = all_rows[-1].running_balance if all_rows else opening_balance

    shown = tuple(row for row in all_rows if direction_filter.matches(row.type))
    total_in = sum((r.amount for r in shown if r.type == Direction.IN), ZERO)
    total_out = sum((r.amount for r in shown if r.type == Direction.OUT), ZERO)

    return AccountLedger(
        book_id=key,
        direction_filter=direction_filter,
        opening_balance=opening_balance,
        closing_balance=closing,
        rows=shown,
        total_in=total_in,
        total_out=total_out,
    )


def build_account_ledger(
    book_id: str,
    opening_balance: Decimal,
    payments: Iterable[Payment],
    direction_filter: DirectionFilter = DirectionFilter.ALL,
    default_label: str = DEFAULT_CATEGORY_LABEL,
) -> AccountLedger:
    """
    Chronological ledger for one book (cash drawer or bank account).

    Args:
        book_id: Book identifier matched against `Payment.mode`
        opening_balance: Balance before the first payment
        payments: The full payment log, in insertion order
        direction_filter: ALL, IN or OUT rows to list
        default_label: Row label for payments without notes, category or voucher type

    Returns:
        AccountLedger with rows, closing balance and filtered totals
    """
    return build_ledger(
        book_id,
        opening_balance,
        payments,
        lambda p: p.mode == book_id,
        direction_filter,
        default_label,
    )
