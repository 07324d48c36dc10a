"""Month-over-month spending trend."""

from decimal import Decimal

from .models import SpendingTrends, TrendDirection
from .money import ZERO, round_money


def spending_trend(monthly_spending: dict[str, Decimal]) -> Decimal:
    """Change from the first to the last spending month, per month observed.

    Months are ordered by their ``YYYY-MM`` key. Fewer than two months
    gives 0.
    """
    months = sorted(monthly_spending)
    if len(months) < 2:
        return ZERO
    change = monthly_spending[months[-1]] - monthly_spending[months[0]]
    return change / Decimal(len(months))


def trend_direction(magnitude: Decimal) -> TrendDirection:
    if magnitude > 0:
        return TrendDirection.INCREASING
    if magnitude < 0:
        return TrendDirection.DECREASING
    return TrendDirection.STABLE


def analyze_trends(
    monthly_spending: dict[str, Decimal],
    monthly_income: dict[str, Decimal],
) -> SpendingTrends:
    """Build the trend sub-report from the aggregator's monthly buckets."""
    magnitude = spending_trend(monthly_spending)
    return SpendingTrends(
        monthly_spending={key: round_money(monthly_spending[key]) for key in sorted(monthly_spending)},
        monthly_income={key: round_money(monthly_income[key]) for key in sorted(monthly_income)},
        spending_trend=round_money(magnitude),
        # Direction follows the unrounded magnitude
        trend_direction=trend_direction(magnitude),
    )
