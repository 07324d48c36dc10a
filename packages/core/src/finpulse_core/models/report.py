"""Analysis report models.

The report is a tree of frozen models built fresh on every analysis run.
Monetary amounts and percentages are rounded to cents when the report is
assembled; serialization uses camelCase keys.
"""

import json
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import Field

from .financial import EngineModel


class TrendDirection(str, Enum):
    """Direction of month-over-month spending."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class BudgetStatus(str, Enum):
    """Spend position of one budgeted category."""

    UNDER = "under"
    ON_TRACK = "on-track"
    OVER = "over"


class Priority(str, Enum):
    """Recommendation urgency, most urgent first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class RecommendationType(str, Enum):
    SAVINGS = "savings"
    INCOME = "income"
    TARGETS = "targets"
    BUDGET = "budget"
    INVESTMENT = "investment"


class HealthStatus(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class CategoryAmount(EngineModel):
    """Summed amount for one category."""

    name: str
    amount: Decimal


class FlowSummary(EngineModel):
    """Totals for one transaction type (income, expenses or investments)."""

    total: Decimal = Decimal("0")
    monthly: Decimal = Decimal("0")
    transactions: int = 0
    categories: list[CategoryAmount] = Field(default_factory=list)


class NetIncome(EngineModel):
    total: Decimal = Decimal("0")
    monthly: Decimal = Decimal("0")


class TargetAnalysis(EngineModel):
    """Progress across all savings targets.

    ``completed + on_track + behind == total_targets``. Unfinished targets
    without a deadline cannot be paced, so they count as behind;
    ``unscheduled_targets`` reports how many of the behind targets those are.
    """

    total_targets: int = 0
    total_target_amount: Decimal = Decimal("0")
    total_current_amount: Decimal = Decimal("0")
    overall_progress: Decimal = Decimal("0")
    completed_targets: int = 0
    on_track_targets: int = 0
    behind_targets: int = 0
    unscheduled_targets: int = 0


class BudgetCategoryStatus(EngineModel):
    """Budget against actual spend for one category in the period."""

    category: str
    budget: Decimal
    spent: Decimal
    percentage: Decimal
    status: BudgetStatus


class BudgetAnalysis(EngineModel):
    """Budget against actual spend for the current period."""

    month: Optional[int] = None
    year: Optional[int] = None
    total_budgets: int = 0
    total_budget_amount: Decimal = Decimal("0")
    total_spent: Decimal = Decimal("0")
    over_budget: int = 0
    under_budget: int = 0
    budget_utilization: Decimal = Decimal("0")
    categories: list[BudgetCategoryStatus] = Field(default_factory=list)


class SpendingTrends(EngineModel):
    monthly_spending: dict[str, Decimal] = Field(default_factory=dict)
    monthly_income: dict[str, Decimal] = Field(default_factory=dict)
    spending_trend: Decimal = Decimal("0")
    trend_direction: TrendDirection = TrendDirection.STABLE


class NeedsVsWants(EngineModel):
    """Expense split between essential and discretionary spending."""

    needs: Decimal = Decimal("0")
    wants: Decimal = Decimal("0")
    needs_percentage: int = 0
    wants_percentage: int = 0


class Recommendation(EngineModel):
    type: RecommendationType
    priority: Priority
    title: str
    description: str
    action: str


class KeyMetrics(EngineModel):
    monthly_income: Decimal = Decimal("0")
    monthly_expenses: Decimal = Decimal("0")
    monthly_savings: Decimal = Decimal("0")
    savings_rate: Decimal = Decimal("0")
    target_progress: Decimal = Decimal("0")


class AnalysisSummary(EngineModel):
    health_score: int
    health_status: HealthStatus
    overview: str
    key_metrics: KeyMetrics
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)


class ReportPeriod(EngineModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_transactions: int = 0


class AnalysisReport(EngineModel):
    """Complete output of one analysis run."""

    generated_on: date
    currency_symbol: str
    income: FlowSummary
    expenses: FlowSummary
    investments: FlowSummary
    net_income: NetIncome
    savings_rate: Decimal
    targets: TargetAnalysis
    budgets: BudgetAnalysis
    trends: SpendingTrends
    needs_vs_wants: NeedsVsWants
    health_score: int = Field(ge=0, le=100)
    recommendations: list[Recommendation] = Field(default_factory=list)
    summary: AnalysisSummary
    period: ReportPeriod

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
