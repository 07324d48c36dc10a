"""Composite 0-100 financial health score."""

from decimal import Decimal
from typing import NamedTuple, Optional, Sequence

from .config import HealthScoreWeights
from .models import HealthStatus, TrendDirection
from .money import HUNDRED, round_whole
from .standards import HEALTH_STATUS_FLOORS


class FactorScore(NamedTuple):
    factor: str
    points: int
    max_points: int


def _tier_points(value: Decimal, tiers: Sequence[tuple[Decimal, int]]) -> int:
    for threshold, points in tiers:
        if value >= threshold:
            return points
    return 0


def score_factors(
    *,
    savings_rate: Decimal,
    monthly_net_income: Decimal,
    target_progress: Decimal,
    over_budget: int,
    total_budgets: int,
    trend: TrendDirection,
    weights: Optional[HealthScoreWeights] = None,
) -> list[FactorScore]:
    """Points earned by each health factor."""
    weights = weights or HealthScoreWeights()

    if monthly_net_income > 0:
        net_points = weights.net_income_max
    elif monthly_net_income >= weights.net_income_deficit_floor:
        net_points = weights.net_income_deficit_points
    else:
        net_points = 0

    if over_budget == 0:
        budget_points = weights.budget_adherence_max
    elif over_budget <= total_budgets * weights.budget_over_ratio_limit:
        budget_points = weights.budget_partial_points
    else:
        budget_points = 0

    trend_points = {
        TrendDirection.DECREASING: weights.trend_decreasing_points,
        TrendDirection.STABLE: weights.trend_stable_points,
        TrendDirection.INCREASING: weights.trend_increasing_points,
    }[trend]

    return [
        FactorScore(
            "savings_rate",
            _tier_points(savings_rate, weights.savings_rate_tiers),
            weights.savings_rate_max,
        ),
        FactorScore("net_income", net_points, weights.net_income_max),
        FactorScore(
            "target_progress",
            _tier_points(target_progress, weights.target_progress_tiers),
            weights.target_progress_max,
        ),
        FactorScore("budget_adherence", budget_points, weights.budget_adherence_max),
        FactorScore("spending_trend", trend_points, weights.trend_max),
    ]


def calculate_health_score(factors: Sequence[FactorScore]) -> int:
    """Achieved points as a share of achievable points, scaled to 0-100.

    Rounded half-up to the nearest integer and clamped to [0, 100].
    """
    score = sum(f.points for f in factors)
    max_score = sum(f.max_points for f in factors)
    if max_score <= 0:
        return 0
    scaled = round_whole(Decimal(score) / Decimal(max_score) * HUNDRED)
    return max(0, min(scaled, 100))


def health_status(score: int) -> HealthStatus:
    """Label for a health score."""
    for floor, label in HEALTH_STATUS_FLOORS:
        if score >= floor:
            return HealthStatus(label)
    return HealthStatus.POOR
