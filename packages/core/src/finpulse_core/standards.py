"""Policy constants for the financial analysis engine.

Every threshold and point value the engine uses lives here as a named
constant. ``config.AnalysisPolicy`` takes its defaults from this module,
so any of them can be overridden per deployment without code changes.
"""

from decimal import Decimal

from .models import Budget, CategoryDefinition, CategoryKind


# =============================================================================
# REPORT TEXT
# =============================================================================

DEFAULT_CURRENCY_SYMBOL = "₹"


# =============================================================================
# TARGET PACING
# =============================================================================
# A target is on track when its progress is at least this fraction of the
# progress expected from linear pacing between creation and deadline.

ON_TRACK_TOLERANCE = Decimal("0.8")


# =============================================================================
# HEALTH SCORE
# =============================================================================
# Each factor maps to (threshold, points) tiers, checked top-down.

SAVINGS_RATE_MAX_POINTS = 30
SAVINGS_RATE_TIERS = (
    (Decimal("20"), 30),
    (Decimal("10"), 20),
    (Decimal("5"), 10),
)

NET_INCOME_MAX_POINTS = 25
NET_INCOME_DEFICIT_FLOOR = Decimal("-1000")
NET_INCOME_DEFICIT_POINTS = 15

TARGET_PROGRESS_MAX_POINTS = 20
TARGET_PROGRESS_TIERS = (
    (Decimal("80"), 20),
    (Decimal("50"), 15),
    (Decimal("25"), 10),
)

BUDGET_ADHERENCE_MAX_POINTS = 15
BUDGET_PARTIAL_POINTS = 10
BUDGET_OVER_RATIO_LIMIT = Decimal("0.3")

TREND_MAX_POINTS = 10
TREND_DECREASING_POINTS = 10
TREND_STABLE_POINTS = 5
TREND_INCREASING_POINTS = 0

# Health status labels, checked top-down (score >= floor)
HEALTH_STATUS_FLOORS = (
    (80, "Excellent"),
    (60, "Good"),
    (40, "Fair"),
)


# =============================================================================
# RECOMMENDATION AND SUMMARY THRESHOLDS
# =============================================================================

LOW_SAVINGS_RATE = Decimal("10")
STRONG_SAVINGS_RATE = Decimal("15")

# Share of a category budget above which it is flagged "on-track" (close to
# the limit) rather than "under"
BUDGET_WARNING_RATIO = Decimal("0.8")


# =============================================================================
# NEEDS VS WANTS
# =============================================================================
# Keywords are matched case-insensitively in both directions (keyword in
# category, or category in keyword). Spend that matches neither list is split
# by NEEDS_FALLBACK_RATIO.

NEEDS_KEYWORDS = (
    "Rent",
    "Utilities",
    "Groceries",
    "Healthcare",
    "Transportation",
    "Insurance",
    "Education",
)

WANTS_KEYWORDS = (
    "Entertainment",
    "Shopping",
    "Dining",
    "Travel",
    "Hobbies",
    "Gifts",
)

NEEDS_FALLBACK_RATIO = Decimal("0.7")


# =============================================================================
# DEFAULT CATEGORIES
# =============================================================================
# Offered to a newly provisioned account.

DEFAULT_CATEGORIES = (
    # Income
    CategoryDefinition(name="Salary", kind=CategoryKind.INCOME),
    CategoryDefinition(name="Freelance", kind=CategoryKind.INCOME),
    CategoryDefinition(name="Investment", kind=CategoryKind.INCOME),
    CategoryDefinition(name="Bonus", kind=CategoryKind.INCOME),
    CategoryDefinition(name="Other Income", kind=CategoryKind.INCOME),
    # Expense
    CategoryDefinition(name="Food & Dining", kind=CategoryKind.EXPENSE),
    CategoryDefinition(name="Transportation", kind=CategoryKind.EXPENSE),
    CategoryDefinition(name="Shopping", kind=CategoryKind.EXPENSE),
    CategoryDefinition(name="Entertainment", kind=CategoryKind.EXPENSE),
    CategoryDefinition(name="Bills & Utilities", kind=CategoryKind.EXPENSE),
    CategoryDefinition(name="Healthcare", kind=CategoryKind.EXPENSE),
    CategoryDefinition(name="Education", kind=CategoryKind.EXPENSE),
    CategoryDefinition(name="Travel", kind=CategoryKind.EXPENSE),
    CategoryDefinition(name="Rent", kind=CategoryKind.EXPENSE),
    CategoryDefinition(name="Other Expenses", kind=CategoryKind.EXPENSE),
)


def build_default_budgets(
    categories: tuple[CategoryDefinition, ...] = DEFAULT_CATEGORIES,
    *,
    month: int,
    year: int,
) -> list[Budget]:
    """Zero-amount budgets for every expense category in ``categories``.

    Args:
        categories: Category table to provision from
        month: Budget month (1-12)
        year: Budget year

    Returns:
        One Budget per expense category, in table order
    """
    return [
        Budget(category_name=category.name, amount=Decimal("0"), month=month, year=year)
        for category in categories
        if category.kind is CategoryKind.EXPENSE
    ]
