"""Transaction aggregation by type, category and calendar month.

Sums are exact Decimals; nothing here rounds. Rounding happens when the
analyzer builds report values.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from .models import Transaction, TransactionType
from .money import ZERO, safe_divide


@dataclass(frozen=True)
class TypeAggregate:
    """Totals for the transactions of one type."""

    transaction_type: TransactionType
    total: Decimal = ZERO
    monthly_average: Decimal = ZERO
    count: int = 0
    categories: tuple[tuple[str, Decimal], ...] = ()


@dataclass(frozen=True)
class TransactionAggregates:
    """Everything downstream stages need from the raw transactions."""

    income: TypeAggregate
    expenses: TypeAggregate
    investments: TypeAggregate
    monthly_income: dict[str, Decimal] = field(default_factory=dict)
    monthly_spending: dict[str, Decimal] = field(default_factory=dict)
    first_date: Optional[date] = None
    last_date: Optional[date] = None
    transaction_count: int = 0


def months_spanned(dates: Iterable[date]) -> int:
    """Calendar months from the earliest to the latest date, both inclusive.

    Returns 0 for no dates.
    """
    dates = list(dates)
    if not dates:
        return 0
    earliest, latest = min(dates), max(dates)
    return (latest.year - earliest.year) * 12 + (latest.month - earliest.month) + 1


def monthly_average(transactions: Sequence[Transaction]) -> Decimal:
    """Total amount divided by the number of calendar months spanned."""
    total = sum((t.amount for t in transactions), ZERO)
    return safe_divide(total, Decimal(months_spanned(t.date for t in transactions)))


def category_breakdown(transactions: Iterable[Transaction]) -> tuple[tuple[str, Decimal], ...]:
    """Summed amount per category, largest first.

    Categories with equal totals keep the order they were first seen in.
    """
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for txn in transactions:
        totals[txn.category_label] += txn.amount
    return tuple(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def monthly_totals(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """Summed amount per ``YYYY-MM`` key, in chronological key order."""
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for txn in transactions:
        totals[txn.month_key] += txn.amount
    return {key: totals[key] for key in sorted(totals)}


def summarize_type(
    transactions: Sequence[Transaction],
    transaction_type: TransactionType,
) -> TypeAggregate:
    """Aggregate the transactions of a single type."""
    selected = [t for t in transactions if t.type is transaction_type]
    return TypeAggregate(
        transaction_type=transaction_type,
        total=sum((t.amount for t in selected), ZERO),
        monthly_average=monthly_average(selected),
        count=len(selected),
        categories=category_breakdown(selected),
    )


def aggregate_transactions(transactions: Sequence[Transaction]) -> TransactionAggregates:
    """
    Group and sum transactions by type, category and month.

    Args:
        transactions: All transactions for one user, in any order

    Returns:
        TransactionAggregates with per-type totals and monthly buckets
    """
    income = summarize_type(transactions, TransactionType.INCOME)
    expenses = summarize_type(transactions, TransactionType.EXPENSE)
    investments = summarize_type(transactions, TransactionType.INVESTMENT)

    dates = [t.date for t in transactions]

    return TransactionAggregates(
        income=income,
        expenses=expenses,
        investments=investments,
        monthly_income=monthly_totals(t for t in transactions if t.type is TransactionType.INCOME),
        monthly_spending=monthly_totals(t for t in transactions if t.type is TransactionType.EXPENSE),
        first_date=min(dates) if dates else None,
        last_date=max(dates) if dates else None,
        transaction_count=len(transactions),
    )
