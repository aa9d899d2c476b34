"""
Source Records for Cashbook

These models describe the master data and the payment log that the
reporting core reads. They arrive from an external store already
materialized; the core never creates, edits or deletes them.

DESIGN DECISION: Every source model is frozen. Reports derive new values
from a snapshot and never write back into it, so an accidental mutation
is an error rather than a silent change to someone's books.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Direction(str, Enum):
    """Cash direction of a payment or invoice."""
    IN = "IN"
    OUT = "OUT"


class VoucherType(str, Enum):
    """
    Document type of a payment voucher.

    Independent of the payment's category: a PAYMENT voucher can carry
    any expense category, a CONTRA voucher moves money between own books.
    """
    RECEIPT = "RECEIPT"
    PAYMENT = "PAYMENT"
    CONTRA = "CONTRA"
    JOURNAL = "JOURNAL"


class InvoiceType(str, Enum):
    ROYALTY = "ROYALTY"
    INTEREST = "INTEREST"
    CHIT = "CHIT"
    INTEREST_OUT = "INTEREST_OUT"


class InvoiceStatus(str, Enum):
    PAID = "PAID"
    PARTIAL = "PARTIAL"
    UNPAID = "UNPAID"


class LiabilityType(str, Enum):
    BANK = "BANK"
    PRIVATE = "PRIVATE"


class InvestmentType(str, Enum):
    """
    Investment types with a dedicated valuation rule.

    Investments may carry any other type string; those fall back to the
    contribution-type rule on the balance sheet.
    """
    CHIT_SAVINGS = "CHIT_SAVINGS"
    LIC = "LIC"
    SIP = "SIP"
    GOLD_SAVINGS = "GOLD_SAVINGS"
    FIXED_DEPOSIT = "FIXED_DEPOSIT"


class ContributionType(str, Enum):
    LUMP_SUM = "LUMP_SUM"
    INSTALLMENT = "INSTALLMENT"
    MONTHLY = "MONTHLY"


class Category(str, Enum):
    """
    Payment categories the reports treat specially.

    Categories are free text on the payment; this enum only names the
    ones that classification rules look for.
    """
    CONTRA = "CONTRA"
    LOAN_REPAYMENT = "LOAN_REPAYMENT"
    LOAN_INTEREST = "LOAN_INTEREST"
    CHIT_SAVINGS = "CHIT_SAVINGS"
    OTHER_BUSINESS = "OTHER_BUSINESS"
    PRINCIPAL_RECOVERY = "PRINCIPAL_RECOVERY"
    ROYALTY = "ROYALTY"
    INTEREST = "INTEREST"
    CHIT = "CHIT"
    CHIT_FUND = "CHIT_FUND"
    GENERAL = "GENERAL"
    CUSTOMER_PAYMENT = "CUSTOMER_PAYMENT"


# Prefix shared by every asset-purchase category (INVESTMENT_LIC, ...)
INVESTMENT_CATEGORY_PREFIX = "INVESTMENT_"


class _Record(BaseModel):
    """Base for all source records: immutable, whitespace-stripped."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)


# =============================================================================
# TRANSACTION LOG
# =============================================================================

class Payment(_Record):
    """
    A single cash movement on one book.

    The `type` decides the sign when aggregating: IN adds to the book,
    OUT subtracts from it. Amounts are never negative.
    """

    id: str = Field(..., min_length=1, description="Payment identifier")
    type: Direction = Field(..., description="IN (receipt) or OUT (payout)")
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Amount in INR"
    )
    date: datetime = Field(..., description="When the money moved")
    mode: str = Field(
        ...,
        min_length=1,
        description="Book the payment is recorded in (CASH or a bank id)"
    )
    target_mode: Optional[str] = Field(
        default=None,
        description="Receiving book for contra transfers"
    )
    category: Optional[str] = Field(
        default=None,
        description="Free-text category tag"
    )
    voucher_type: Optional[str] = Field(
        default=None,
        description="Voucher document type (RECEIPT, PAYMENT, CONTRA, JOURNAL)"
    )
    source_id: Optional[str] = Field(
        default=None,
        description="Counterparty identifier (customer, lender, supplier)"
    )
    source_name: Optional[str] = Field(
        default=None,
        description="Counterparty display name"
    )
    business_unit: Optional[str] = Field(
        default=None,
        description="Side-business tag this payment belongs to"
    )
    invoice_id: Optional[str] = None
    notes: Optional[str] = None

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign its direction implies."""
        return self.amount if self.type == Direction.IN else -self.amount


# =============================================================================
# MASTER DATA
# =============================================================================

class Invoice(_Record):
    """
    A royalty, interest or chit bill raised to or by a party.

    Voided invoices stay in the snapshot for audit purposes but are
    excluded from every computation.
    """

    id: str
    invoice_number: Optional[str] = None
    customer_id: Optional[str] = None
    lender_id: Optional[str] = None
    customer_name: Optional[str] = None
    type: str = Field(
        ...,
        description="ROYALTY, INTEREST, CHIT, INTEREST_OUT or another tag"
    )
    direction: Direction = Field(
        default=Direction.IN,
        description="IN = receivable, OUT = payable"
    )
    amount: Decimal = Field(..., ge=0)
    date: datetime
    balance: Decimal = Field(
        default=Decimal("0"),
        description="Outstanding amount still to be settled"
    )
    status: InvoiceStatus = InvoiceStatus.UNPAID
    is_void: bool = False


class Customer(_Record):
    """
    A party we trade with, lend to, or borrow from.

    Portfolio flags say which relationships the party has. The opening
    balance is signed: positive means they owe us, negative means we owe
    them.
    """

    id: str
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    opening_balance: Decimal = Field(
        default=Decimal("0"),
        description="General trade balance (+ receivable, - payable)"
    )

    is_royalty: bool = False
    is_interest: bool = Field(
        default=False,
        description="We lent money to this party"
    )
    is_chit: bool = False
    is_general: bool = False
    is_lender: bool = Field(
        default=False,
        description="This party lent money to us"
    )

    interest_principal: Decimal = Field(
        default=Decimal("0"),
        description="Principal lent to the party (asset side)"
    )
    credit_principal: Decimal = Field(
        default=Decimal("0"),
        description="Principal borrowed from the party (liability side)"
    )
    created_at: Optional[datetime] = None


class Supplier(_Record):
    id: str
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    outstanding: Decimal = Field(default=Decimal("0"), ge=0)


class Liability(_Record):
    """A bank loan or private borrowing."""

    id: str
    provider_name: str = Field(..., min_length=1, description="Lender or bank name")
    type: LiabilityType
    principal: Decimal = Field(default=Decimal("0"), ge=0)
    start_date: Optional[datetime] = None


class InvestmentTransaction(_Record):
    amount_paid: Decimal = Field(..., ge=0)
    date: datetime


class Investment(_Record):
    """
    A savings or investment holding.

    Installment-style holdings are valued by what has been paid in so
    far; lump-sum holdings by the amount invested.
    """

    id: str
    name: Optional[str] = None
    type: str = Field(..., description="Investment type tag")
    amount_invested: Decimal = Field(default=Decimal("0"), ge=0)
    contribution_type: ContributionType = ContributionType.LUMP_SUM
    current_value: Optional[Decimal] = None
    transactions: tuple[InvestmentTransaction, ...] = Field(default_factory=tuple)

    @property
    def total_paid(self) -> Decimal:
        """Sum of all installments paid into this investment."""
        return sum((t.amount_paid for t in self.transactions), Decimal("0"))


class ChitAuction(_Record):
    date: datetime
    commission_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Foreman commission earned on this auction"
    )


class ChitGroup(_Record):
    id: str
    name: Optional[str] = None
    auctions: tuple[ChitAuction, ...] = Field(default_factory=tuple)


class BankAccount(_Record):
    id: str
    name: str
    opening_balance: Decimal = Decimal("0")


class OpeningBalances(_Record):
    """
    Seed values for the built-in books and the owner's capital.

    Field names follow the book identifiers used on payments.
    """

    CASH: Decimal = Decimal("0")
    CUB: Decimal = Decimal("0")
    KVB: Decimal = Decimal("0")
    CAPITAL: Decimal = Decimal("0")

    def for_book(self, book_id: str) -> Decimal:
        """Opening balance for a book, zero for books without a seed."""
        if book_id in ("CASH", "CUB", "KVB"):
            return getattr(self, book_id)
        return Decimal("0")
