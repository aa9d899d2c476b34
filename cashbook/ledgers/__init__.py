"""
Ledger builders.

Pure functions from a payment log (and master data, for party ledgers)
to ledger views. Nothing here reads settings, logs, or mutates input.
"""

from cashbook.ledgers.account import build_account_ledger, build_ledger, replay
from cashbook.ledgers.business_unit import (
    build_business_performance,
    build_business_unit_ledger,
    percentage,
)
from cashbook.ledgers.category import (
    build_category_ledger,
    build_expense_ledger,
    build_income_ledger,
)
from cashbook.ledgers.party import (
    available_scopes,
    build_customer_ledger,
    build_lender_ledger,
    build_party_directory,
    build_party_ledger,
)
from cashbook.ledgers.rules import (
    DISPLAY_LABEL_FIELDS,
    category_label,
    display_label,
    is_expense,
    is_income,
    timeline_key,
)

__all__ = [
    # Book ledgers
    "build_account_ledger",
    "build_ledger",
    "replay",
    # Category ledgers
    "build_category_ledger",
    "build_expense_ledger",
    "build_income_ledger",
    # Business units
    "build_business_performance",
    "build_business_unit_ledger",
    "percentage",
    # Parties
    "available_scopes",
    "build_customer_ledger",
    "build_lender_ledger",
    "build_party_directory",
    "build_party_ledger",
    # Rules
    "DISPLAY_LABEL_FIELDS",
    "category_label",
    "display_label",
    "is_expense",
    "is_income",
    "timeline_key",
]
