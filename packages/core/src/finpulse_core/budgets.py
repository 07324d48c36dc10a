"""Budgets for one calendar month against category spend."""

from collections import defaultdict
from decimal import Decimal
from typing import Sequence

from .config import CategoryMatching
from .models import (
    Budget,
    BudgetAnalysis,
    BudgetCategoryStatus,
    BudgetStatus,
    Transaction,
    TransactionType,
)
from .money import ZERO, percentage, round_money
from .standards import BUDGET_WARNING_RATIO


def category_spending(
    transactions: Sequence[Transaction],
    month: int,
    year: int,
    matching: CategoryMatching = CategoryMatching.EXACT,
    period_only: bool = False,
) -> dict[str, Decimal]:
    """Expense totals keyed by category match key.

    All expenses count unless ``period_only`` limits them to the given
    month. Transactions without a category are never matched against a
    budget.
    """
    spent: dict[str, Decimal] = defaultdict(Decimal)
    for txn in transactions:
        if txn.type is not TransactionType.EXPENSE or txn.category is None:
            continue
        if period_only and (txn.date.month != month or txn.date.year != year):
            continue
        spent[matching.key(txn.category)] += txn.amount
    return spent


def budget_status(
    spent: Decimal,
    budget: Decimal,
    warning_ratio: Decimal = BUDGET_WARNING_RATIO,
) -> BudgetStatus:
    """Over when spend exceeds the budget, on-track when close to it."""
    if spent > budget:
        return BudgetStatus.OVER
    if budget > 0 and spent > budget * warning_ratio:
        return BudgetStatus.ON_TRACK
    return BudgetStatus.UNDER


def compare_budgets(
    budgets: Sequence[Budget],
    transactions: Sequence[Transaction],
    month: int,
    year: int,
    matching: CategoryMatching = CategoryMatching.EXACT,
    warning_ratio: Decimal = BUDGET_WARNING_RATIO,
    period_only: bool = False,
) -> BudgetAnalysis:
    """
    Compare one month's budgets with category expense spend.

    Each category contributes at most its budget to ``total_spent``, so one
    large overspend does not dominate utilization. A category is over budget
    when its uncapped spend is strictly above the budget.

    Args:
        budgets: All budgets for one user; only those for the period are used
        transactions: All transactions for one user
        month: Budget month (1-12)
        year: Budget year
        matching: How budget category names are compared
        warning_ratio: Spend share above which a category is near its limit
        period_only: Count only expenses dated in the budget month; by
            default every expense in the category counts

    Returns:
        BudgetAnalysis, zero-valued when no budget covers the period
    """
    current = [b for b in budgets if b.covers(month, year)]
    if not current:
        return BudgetAnalysis(month=month, year=year)

    spent_by_category = category_spending(
        transactions, month, year, matching, period_only
    )

    total_budget = ZERO
    total_spent = ZERO
    over_budget = 0
    statuses = []

    for budget in current:
        spent = spent_by_category.get(matching.key(budget.category_name), ZERO)
        total_budget += budget.amount
        total_spent += min(spent, budget.amount)

        status = budget_status(spent, budget.amount, warning_ratio)
        if status is BudgetStatus.OVER:
            over_budget += 1

        statuses.append(
            BudgetCategoryStatus(
                category=budget.category_name,
                budget=round_money(budget.amount),
                spent=round_money(spent),
                percentage=round_money(percentage(spent, budget.amount)),
                status=status,
            )
        )

    return BudgetAnalysis(
        month=month,
        year=year,
        total_budgets=len(current),
        total_budget_amount=round_money(total_budget),
        total_spent=round_money(total_spent),
        over_budget=over_budget,
        under_budget=len(current) - over_budget,
        budget_utilization=round_money(percentage(total_spent, total_budget)),
        categories=statuses,
    )
