"""Financial statements, book statistics and outstanding reports."""

from cashbook.statements.engine import (
    FinancialStatementEngine,
    compute_assets,
    compute_expenses,
    compute_investments,
    compute_liabilities,
    compute_revenue,
    investment_value,
    reconcile,
)
from cashbook.statements.outstanding import (
    analyse_customer,
    build_advances,
    build_market_capital,
    build_payables,
    build_receivables,
    supplier_outstanding,
)
from cashbook.statements.periods import period_predicate, previous_month
from cashbook.statements.statistics import (
    book_balance,
    compute_book_statistics,
    customer_outstanding,
)

__all__ = [
    # Engine
    "FinancialStatementEngine",
    "compute_assets",
    "compute_expenses",
    "compute_investments",
    "compute_liabilities",
    "compute_revenue",
    "investment_value",
    "reconcile",
    # Outstanding
    "analyse_customer",
    "build_advances",
    "build_market_capital",
    "build_payables",
    "build_receivables",
    "supplier_outstanding",
    # Periods
    "period_predicate",
    "previous_month",
    # Statistics
    "book_balance",
    "compute_book_statistics",
    "customer_outstanding",
]
