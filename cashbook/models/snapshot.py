"""
Ledger Snapshot

One immutable bundle of everything the reports read. The payment tuple
keeps insertion order; ledger builders rely on it to break ties between
payments with the same timestamp.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from cashbook.models.records import (
    BankAccount,
    ChitGroup,
    Customer,
    Investment,
    Invoice,
    Liability,
    OpeningBalances,
    Payment,
    Supplier,
)
from cashbook.models.statements import BalanceSheetStatistics


class LedgerSnapshot(BaseModel):
    """Read-only view of the books at one point in time."""

    model_config = ConfigDict(frozen=True)

    payments: tuple[Payment, ...] = Field(default_factory=tuple)
    invoices: tuple[Invoice, ...] = Field(default_factory=tuple)
    customers: tuple[Customer, ...] = Field(default_factory=tuple)
    suppliers: tuple[Supplier, ...] = Field(default_factory=tuple)
    liabilities: tuple[Liability, ...] = Field(default_factory=tuple)
    investments: tuple[Investment, ...] = Field(default_factory=tuple)
    chit_groups: tuple[ChitGroup, ...] = Field(default_factory=tuple)
    bank_accounts: tuple[BankAccount, ...] = Field(default_factory=tuple)
    opening_balances: OpeningBalances = Field(default_factory=OpeningBalances)
    business_units: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Names of the side businesses tracked separately"
    )
    statistics: Optional[BalanceSheetStatistics] = Field(
        default=None,
        description="Externally maintained running figures, if the store keeps them"
    )

    def bank_account(self, bank_id: str) -> Optional[BankAccount]:
        return next((b for b in self.bank_accounts if b.id == bank_id), None)

    def opening_balance_for(self, book_id: str, cash_book_id: str = "CASH") -> Decimal:
        """
        Opening balance of a book.

        The cash book seeds from the opening balances; bank books seed from
        their bank-account record, falling back to the opening balances.
        """
        if book_id == cash_book_id:
            return self.opening_balances.CASH
        bank = self.bank_account(book_id)
        if bank is not None:
            return bank.opening_balance
        return self.opening_balances.for_book(book_id)
