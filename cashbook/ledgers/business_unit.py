"""
Business-Unit Aggregator

Side businesses are tracked inside the same payment log, tagged with a
business-unit name. Each unit gets a mini P&L and an on-demand ledger.
"""

from collections.abc import Iterable, Sequence
from decimal import Decimal

from cashbook.ledgers.account import build_ledger
from cashbook.ledgers.rules import ZERO
from cashbook.models.ledger import (
    AccountLedger,
    BusinessPerformanceReport,
    BusinessUnitPerformance,
    BusinessUnitTotals,
    DirectionFilter,
)
from cashbook.models.records import Direction, Payment

HUNDRED = Decimal("100")


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """part / whole * 100, or zero when whole is not positive."""
    if whole > 0:
        return part / whole * HUNDRED
    return ZERO


def _unit_performance(name: str, payments: Sequence[Payment]) -> BusinessUnitPerformance:
    unit_payments = [p for p in payments if p.business_unit == name]
    income = sum((p.amount for p in unit_payments if p.type == Direction.IN), ZERO)
    expense = sum((p.amount for p in unit_payments if p.type == Direction.OUT), ZERO)
    net = income - expense
    return BusinessUnitPerformance(
        name=name,
        income=income,
        expense=expense,
        net=net,
        margin=percentage(net, income),
    )


def build_business_performance(
    units: Iterable[str],
    payments: Iterable[Payment],
) -> BusinessPerformanceReport:
    """
    Income, expense, net and margin per business unit, plus grand totals.

    Margin is zero for a unit without income, whatever its expenses.
    """
    payments = list(payments)
    performance = [_unit_performance(name, payments) for name in units]

    totals = BusinessUnitTotals(
        income=sum((u.income for u in performance), ZERO),
        expense=sum((u.expense for u in performance), ZERO),
        net=sum((u.net for u in performance), ZERO),
    )

    with_share = tuple(
        u.model_copy(update={"income_share": percentage(u.income, totals.income)})
        for u in performance
    )
    return BusinessPerformanceReport(units=with_share, totals=totals)


def build_business_unit_ledger(
    unit: str,
    payments: Iterable[Payment],
    direction_filter: DirectionFilter = DirectionFilter.ALL,
) -> AccountLedger:
    """Drill-down ledger for one unit, opening at zero."""
    return build_ledger(
        unit,
        ZERO,
        payments,
        lambda p: p.business_unit == unit,
        direction_filter,
    )
