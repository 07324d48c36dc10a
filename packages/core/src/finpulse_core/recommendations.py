"""Threshold-driven recommendations and summary strengths.

Each rule is evaluated independently and contributes at most one entry.
Rule order is the display order.
"""

from decimal import Decimal

from .models import (
    BudgetAnalysis,
    Priority,
    Recommendation,
    RecommendationType,
    TargetAnalysis,
)
from .money import format_currency
from .standards import LOW_SAVINGS_RATE, STRONG_SAVINGS_RATE


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def generate_recommendations(
    *,
    savings_rate: Decimal,
    monthly_net_income: Decimal,
    targets: TargetAnalysis,
    budgets: BudgetAnalysis,
    total_investments: Decimal,
    currency_symbol: str,
    low_savings_rate: Decimal = LOW_SAVINGS_RATE,
) -> list[Recommendation]:
    """
    Derive prioritized recommendations from the analysis results.

    Args:
        savings_rate: Savings rate (%) as reported
        monthly_net_income: Average monthly income minus expenses
        targets: Target progress sub-report
        budgets: Budget comparison sub-report
        total_investments: Sum of investment transactions
        currency_symbol: Symbol for amounts in the text
        low_savings_rate: Savings rate (%) below which savings are flagged

    Returns:
        Recommendations in rule order; rules that do not fire add nothing
    """
    recommendations: list[Recommendation] = []

    if savings_rate < low_savings_rate:
        recommendations.append(Recommendation(
            type=RecommendationType.SAVINGS,
            priority=Priority.HIGH,
            title="Increase Savings Rate",
            description=(
                f"Your current savings rate is {savings_rate}%. Consider increasing it "
                f"to at least 10-20% for better financial security."
            ),
            action="Review your expenses and identify areas to cut costs or increase income.",
        ))

    if monthly_net_income < 0:
        shortfall = format_currency(abs(monthly_net_income), currency_symbol)
        recommendations.append(Recommendation(
            type=RecommendationType.INCOME,
            priority=Priority.CRITICAL,
            title="Negative Cash Flow",
            description=(
                f"You are spending {shortfall} more than you earn each month. "
                f"This is unsustainable in the long term."
            ),
            action="Immediately reduce expenses or find ways to increase income.",
        ))

    if targets.behind_targets > 0:
        count = targets.behind_targets
        recommendations.append(Recommendation(
            type=RecommendationType.TARGETS,
            priority=Priority.MEDIUM,
            title="Target Progress",
            description=(
                f"You have {count} {_plural(count, 'target', 'targets')} "
                f"behind schedule."
            ),
            action="Review your action plans and consider increasing monthly contributions.",
        ))

    if budgets.over_budget > 0:
        count = budgets.over_budget
        recommendations.append(Recommendation(
            type=RecommendationType.BUDGET,
            priority=Priority.MEDIUM,
            title="Budget Overspending",
            description=(
                f"You are over budget in {count} "
                f"{_plural(count, 'category', 'categories')}."
            ),
            action="Review your spending patterns and adjust your budget or spending habits.",
        ))

    if total_investments == 0 and monthly_net_income > 0:
        surplus = format_currency(monthly_net_income, currency_symbol)
        recommendations.append(Recommendation(
            type=RecommendationType.INVESTMENT,
            priority=Priority.MEDIUM,
            title="Start Investing",
            description=(
                f"You have positive cash flow of {surplus} per month but no investments. "
                f"Consider starting to invest for long-term growth."
            ),
            action="Research investment options like SIPs, mutual funds, or fixed deposits.",
        ))

    return recommendations


def identify_strengths(
    *,
    savings_rate: Decimal,
    monthly_net_income: Decimal,
    targets: TargetAnalysis,
    budgets: BudgetAnalysis,
    strong_savings_rate: Decimal = STRONG_SAVINGS_RATE,
) -> list[str]:
    strengths = []
    if savings_rate > strong_savings_rate:
        strengths.append("Good savings rate")
    if monthly_net_income > 0:
        strengths.append("Positive cash flow")
    if targets.completed_targets > 0:
        strengths.append("Achieving financial goals")
    if budgets.over_budget == 0:
        strengths.append("Good budget adherence")
    return strengths


def identify_improvements(
    *,
    savings_rate: Decimal,
    monthly_net_income: Decimal,
    targets: TargetAnalysis,
    budgets: BudgetAnalysis,
    low_savings_rate: Decimal = LOW_SAVINGS_RATE,
) -> list[str]:
    areas = []
    if savings_rate < low_savings_rate:
        areas.append("Increase savings rate")
    if monthly_net_income < 0:
        areas.append("Improve cash flow")
    if targets.behind_targets > 0:
        areas.append("Accelerate target progress")
    if budgets.over_budget > 0:
        areas.append("Better budget management")
    return areas
