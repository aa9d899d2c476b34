"""
Ledger View Models

Derived rows and ledger envelopes produced by the ledger builders.

DESIGN DECISION: A derived row WRAPS its source payment instead of
copying the payment's fields and bolting a balance onto them. The source
record stays untouched and the computed value lives on its own type, so
nobody can confuse a stored field with a derived one.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cashbook.models.records import Direction, Payment


class DirectionFilter(str, Enum):
    """Display filter for account ledgers."""
    ALL = "ALL"
    IN = "IN"
    OUT = "OUT"

    def matches(self, direction: Direction) -> bool:
        return self is DirectionFilter.ALL or self.value == direction.value


class LedgerKind(str, Enum):
    """Which side of the category ledger is being viewed."""
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def direction(self) -> Direction:
        return Direction.IN if self is LedgerKind.INCOME else Direction.OUT


# Category filter value meaning "no category restriction"
ALL_CATEGORIES = "ALL"


class _View(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# ACCOUNT (BOOK) LEDGER
# =============================================================================

class LedgerRow(_View):
    """A payment with the book balance after it was applied."""

    payment: Payment
    running_balance: Decimal
    label: str = Field(
        default="Other",
        description="Notes, else category, else voucher type, else the default label"
    )

    @property
    def date(self) -> datetime:
        return self.payment.date

    @property
    def amount(self) -> Decimal:
        return self.payment.amount

    @property
    def type(self) -> Direction:
        return self.payment.type


class AccountLedger(_View):
    """
    Chronological ledger for one book.

    `closing_balance` always reflects every payment on the book; the
    direction filter only decides which rows are listed and which rows
    feed `total_in` / `total_out`.
    """

    book_id: str
    direction_filter: DirectionFilter = DirectionFilter.ALL
    opening_balance: Decimal
    closing_balance: Decimal
    rows: tuple[LedgerRow, ...] = Field(default_factory=tuple)
    total_in: Decimal = Decimal("0")
    total_out: Decimal = Decimal("0")


# =============================================================================
# CATEGORY (INCOME / EXPENSE) LEDGER
# =============================================================================

class CategoryLedgerRow(_View):
    """A payment with the cumulative total up to and including it."""

    payment: Payment
    running_total: Decimal
    label: str = "Other"

    @property
    def date(self) -> datetime:
        return self.payment.date

    @property
    def amount(self) -> Decimal:
        return self.payment.amount


class CategoryLedger(_View):
    """
    Income or expense ledger, newest entries first.

    `categories`, `category_totals` and `overall_total` describe every
    eligible payment of this kind and ignore the category and search
    filters. `rows` and `grand_total` honour both filters.
    """

    kind: LedgerKind
    category_filter: str = ALL_CATEGORIES
    search: Optional[str] = None
    rows: tuple[CategoryLedgerRow, ...] = Field(default_factory=tuple)
    grand_total: Decimal = Decimal("0")
    categories: tuple[str, ...] = Field(default_factory=tuple)
    category_totals: dict[str, Decimal] = Field(default_factory=dict)
    overall_total: Decimal = Decimal("0")


# =============================================================================
# BUSINESS UNITS
# =============================================================================

class BusinessUnitPerformance(_View):
    """Mini P&L for one business unit."""

    name: str
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    net: Decimal = Decimal("0")
    margin: Decimal = Field(
        default=Decimal("0"),
        description="net / income * 100, zero when there is no income"
    )
    income_share: Decimal = Field(
        default=Decimal("0"),
        description="Share of all units' income, in percent"
    )


class BusinessUnitTotals(_View):
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    net: Decimal = Decimal("0")


class BusinessPerformanceReport(_View):
    units: tuple[BusinessUnitPerformance, ...] = Field(default_factory=tuple)
    totals: BusinessUnitTotals = Field(default_factory=BusinessUnitTotals)

    def for_unit(self, name: str) -> Optional[BusinessUnitPerformance]:
        return next((u for u in self.units if u.name == name), None)


# =============================================================================
# PARTY LEDGER
# =============================================================================

class PartyType(str, Enum):
    CUSTOMER = "CUSTOMER"
    LENDER = "LENDER"


class LedgerScope(str, Enum):
    """
    Which slice of a customer relationship a party ledger shows.

    COMBINED merges every relationship; the others follow the customer's
    portfolio flags.
    """
    COMBINED = "COMBINED"
    ROYALTY = "ROYALTY"
    INTEREST = "INTEREST"
    CHIT = "CHIT"
    GENERAL = "GENERAL"


class EntrySource(str, Enum):
    INVOICE = "INVOICE"
    PAYMENT = "PAYMENT"


class Party(_View):
    """A customer or lender as listed in the party directory."""

    id: str
    name: str
    type: PartyType
    label: str


class PartyLedgerEntry(_View):
    date: datetime
    reference: Optional[str] = None
    description: str = ""
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    source: EntrySource
    balance: Decimal = Decimal("0")


class PartyLedger(_View):
    """
    Debit/credit statement for one party.

    A positive balance means the party owes us; a negative one means we
    owe them.
    """

    party: Party
    scope: LedgerScope = LedgerScope.COMBINED
    opening_balance: Decimal = Decimal("0")
    entries: tuple[PartyLedgerEntry, ...] = Field(default_factory=tuple)
    closing_balance: Decimal = Decimal("0")
    available_scopes: tuple[LedgerScope, ...] = (LedgerScope.COMBINED,)

    @property
    def total_debit(self) -> Decimal:
        """Debits including a debit (positive) opening balance."""
        opening = self.opening_balance if self.opening_balance > 0 else Decimal("0")
        return sum((e.debit for e in self.entries), opening)

    @property
    def total_credit(self) -> Decimal:
        """Credits including a credit (negative) opening balance."""
        opening = -self.opening_balance if self.opening_balance < 0 else Decimal("0")
        return sum((e.credit for e in self.entries), opening)

    @property
    def they_owe_us(self) -> bool:
        return self.closing_balance >= 0
