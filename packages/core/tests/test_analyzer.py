"""Tests for the analysis pipeline.

This module tests:
- Cash flow, savings rate and health score on small profiles
- Target, budget and trend sections as they appear in the report
- Empty input and reference date handling
- Serialization of the report
"""

import json
from datetime import date, datetime
from decimal import Decimal

import pytest

from finpulse_core import FinancialAnalyzer, analyze
from finpulse_core.config import AnalysisPolicy, CategoryMatching, FinpulseConfig
from finpulse_core.standards import DEFAULT_CURRENCY_SYMBOL
from finpulse_core.models import (
    Budget,
    HealthStatus,
    Priority,
    Target,
    Transaction,
    TrendDirection,
)


@pytest.fixture
def analyzer() -> FinancialAnalyzer:
    """Create an analyzer with the default policy."""
    return FinancialAnalyzer()


@pytest.fixture
def household() -> dict:
    """A few months of a typical household."""
    return {
        "transactions": [
            Transaction(date=date(2024, 4, 1), amount="5000", type="income", category="Salary"),
            Transaction(date=date(2024, 5, 1), amount="5000", type="income", category="Salary"),
            Transaction(date=date(2024, 6, 1), amount="5000", type="income", category="Salary"),
            Transaction(date=date(2024, 4, 3), amount="1500", type="expense", category="Rent"),
            Transaction(date=date(2024, 5, 3), amount="1500", type="expense", category="Rent"),
            Transaction(date=date(2024, 6, 3), amount="1500", type="expense", category="Rent"),
            Transaction(date=date(2024, 6, 10), amount="900", type="expense", category="Shopping"),
            Transaction(date=date(2024, 5, 20), amount="1000", type="investment", category="Index Fund"),
        ],
        "targets": [
            Target(
                title="Emergency fund",
                target_amount="6000",
                current_amount="3000",
                target_date=date(2024, 12, 31),
                created_at=date(2024, 1, 1),
            ),
        ],
        "budgets": [
            Budget(category_name="Rent", amount="1500", month=6, year=2024),
            Budget(category_name="Shopping", amount="500", month=6, year=2024),
        ],
    }


class TestIncomeOnly:
    """One income transaction and nothing else."""

    def test_cash_flow(self, analyzer):
        report = analyzer.analyze(
            [Transaction(date=date(2024, 1, 5), amount=1000, type="income")],
            [],
            [],
            now=date(2024, 1, 31),
        )

        assert report.income.total == Decimal("1000.00")
        assert report.expenses.total == Decimal("0.00")
        assert report.net_income.total == Decimal("1000.00")
        assert report.savings_rate == Decimal("100.00")

    def test_health_score(self, analyzer):
        """30 savings + 25 net income + 0 targets + 15 budgets + 5 stable trend."""
        report = analyzer.analyze(
            [Transaction(date=date(2024, 1, 5), amount=1000, type="income")],
            [],
            [],
            now=date(2024, 1, 31),
        )

        assert report.health_score == 75
        assert report.summary.health_score == 75
        assert report.summary.health_status is HealthStatus.GOOD

    def test_suggests_investing(self, analyzer):
        report = analyzer.analyze(
            [Transaction(date=date(2024, 1, 5), amount=1000, type="income")],
            [],
            [],
            now=date(2024, 1, 31),
        )
        assert [r.title for r in report.recommendations] == ["Start Investing"]
        assert report.summary.strengths == [
            "Good savings rate",
            "Positive cash flow",
            "Good budget adherence",
        ]


class TestRisingSpend:
    def test_trend(self, analyzer):
        report = analyzer.analyze(
            [
                Transaction(date=date(2024, 1, 10), amount=500, type="expense", category="Food"),
                Transaction(date=date(2024, 2, 10), amount=800, type="expense", category="Food"),
            ],
            [],
            [],
            now=date(2024, 2, 28),
        )

        assert report.trends.monthly_spending == {
            "2024-01": Decimal("500.00"),
            "2024-02": Decimal("800.00"),
        }
        assert report.trends.spending_trend == Decimal("150.00")
        assert report.trends.trend_direction is TrendDirection.INCREASING
        # No income: savings rate is zero rather than undefined
        assert report.savings_rate == Decimal("0.00")


class TestCompletedTarget:
    def test_counts(self, analyzer):
        report = analyzer.analyze(
            [],
            [Target(target_amount=10000, current_amount=10000, created_at=date(2024, 1, 1))],
            [],
            now=date(2024, 6, 1),
        )

        assert report.targets.completed_targets == 1
        assert report.targets.on_track_targets == 0
        assert report.targets.behind_targets == 0
        assert report.targets.overall_progress == Decimal("100.00")
        assert "Achieving financial goals" in report.summary.strengths


class TestUndatedTarget:
    """An unfinished target without a deadline."""

    def test_counts_as_behind(self, analyzer):
        report = analyzer.analyze(
            [],
            [Target(target_amount=1000, current_amount=10, created_at=date(2024, 1, 1))],
            [],
            now=date(2024, 6, 1),
        )

        assert report.targets.total_targets == 1
        assert report.targets.behind_targets == 1
        assert report.targets.unscheduled_targets == 1
        assert "Target Progress" in [r.title for r in report.recommendations]
        assert "Accelerate target progress" in report.summary.areas_for_improvement


class TestOverBudget:
    def test_over_budget_recommendation(self, analyzer):
        report = analyzer.analyze(
            [Transaction(date=date(2024, 6, 2), amount=1200, type="expense", category="Rent")],
            [],
            [Budget(category_name="Rent", amount=1000, month=6, year=2024)],
            now=date(2024, 6, 15),
        )

        assert report.budgets.over_budget == 1
        assert report.budgets.total_spent == Decimal("1000.00")

        overspending = [r for r in report.recommendations if r.title == "Budget Overspending"]
        assert len(overspending) == 1
        assert overspending[0].description == "You are over budget in 1 category."

    def test_budget_period_follows_reference_date(self, analyzer):
        """Next month's budgets are not compared with this month's spend."""
        report = analyzer.analyze(
            [Transaction(date=date(2024, 6, 2), amount=1200, type="expense", category="Rent")],
            [],
            [Budget(category_name="Rent", amount=1000, month=6, year=2024)],
            now=date(2024, 7, 1),
        )
        assert report.budgets.total_budgets == 0
        assert report.budgets.month == 7

    def test_earlier_spend_counts_against_budget(self, analyzer):
        transactions = [
            Transaction(date=date(2024, 5, 3), amount=900, type="expense", category="Rent"),
            Transaction(date=date(2024, 6, 3), amount=200, type="expense", category="Rent"),
        ]
        report = analyzer.analyze(
            transactions,
            [],
            [Budget(category_name="Rent", amount=1000, month=6, year=2024)],
            now=date(2024, 6, 15),
        )
        assert report.budgets.over_budget == 1
        assert report.budgets.categories[0].spent == Decimal("1100.00")

    def test_period_only_policy(self):
        analyzer = FinancialAnalyzer(policy=AnalysisPolicy(budget_spend_in_period_only=True))
        transactions = [
            Transaction(date=date(2024, 5, 3), amount=900, type="expense", category="Rent"),
            Transaction(date=date(2024, 6, 3), amount=200, type="expense", category="Rent"),
        ]
        report = analyzer.analyze(
            transactions,
            [],
            [Budget(category_name="Rent", amount=1000, month=6, year=2024)],
            now=date(2024, 6, 15),
        )
        assert report.budgets.over_budget == 0
        assert report.budgets.total_spent == Decimal("200.00")

    def test_normalized_matching_policy(self):
        analyzer = FinancialAnalyzer(
            policy=AnalysisPolicy(category_matching=CategoryMatching.NORMALIZED)
        )
        report = analyzer.analyze(
            [Transaction(date=date(2024, 6, 2), amount=1200, type="expense", category="rent ")],
            [],
            [Budget(category_name="Rent", amount=1000, month=6, year=2024)],
            now=date(2024, 6, 15),
        )
        assert report.budgets.over_budget == 1


class TestEmptyInput:
    """Empty collections still produce a complete report."""

    def test_zero_valued_report(self, analyzer):
        report = analyzer.analyze([], [], [], now=date(2024, 6, 1))

        assert report.income.total == Decimal("0.00")
        assert report.income.categories == []
        assert report.net_income.monthly == Decimal("0.00")
        assert report.savings_rate == Decimal("0.00")
        assert report.targets.total_targets == 0
        assert report.budgets.total_budgets == 0
        assert report.trends.trend_direction is TrendDirection.STABLE
        assert report.needs_vs_wants.needs_percentage == 0
        assert report.period.start_date is None
        assert report.period.total_transactions == 0

    def test_health_score(self, analyzer):
        report = analyzer.analyze([], [], [], now=date(2024, 6, 1))

        assert report.health_score == 35
        assert report.summary.health_status is HealthStatus.POOR

    def test_only_savings_recommendation(self, analyzer):
        report = analyzer.analyze([], [], [], now=date(2024, 6, 1))

        assert [r.title for r in report.recommendations] == ["Increase Savings Rate"]
        assert report.recommendations[0].priority is Priority.HIGH


class TestHousehold:
    """A realistic multi-month profile."""

    def test_sections(self, analyzer, household):
        report = analyzer.analyze(**household, now=date(2024, 6, 30))

        assert report.income.total == Decimal("15000.00")
        assert report.income.monthly == Decimal("5000.00")
        assert report.expenses.total == Decimal("5400.00")
        assert report.expenses.monthly == Decimal("1800.00")
        assert report.investments.total == Decimal("1000.00")
        assert report.net_income.monthly == Decimal("3200.00")
        assert report.savings_rate == Decimal("64.00")

        assert [c.name for c in report.expenses.categories] == ["Rent", "Shopping"]
        # Both categories include April and May spend
        assert report.budgets.over_budget == 2
        assert report.targets.on_track_targets == 1
        assert report.trends.trend_direction is TrendDirection.INCREASING
        assert report.period.start_date == date(2024, 4, 1)
        assert report.period.end_date == date(2024, 6, 10)

    def test_health_score(self, analyzer, household):
        """30 + 25 + 15 (50% saved) + 0 (2 of 2 over) + 0 (increasing)."""
        report = analyzer.analyze(**household, now=date(2024, 6, 30))
        assert report.health_score == 70

    def test_overview_uses_currency_symbol(self, household):
        report = FinancialAnalyzer(currency_symbol="$").analyze(**household, now=date(2024, 6, 30))

        assert report.currency_symbol == "$"
        assert "$5,000.00" in report.summary.overview
        assert report.summary.overview.startswith("Financial health is Good (70/100).")

    def test_per_call_currency_override(self, analyzer, household):
        report = analyzer.analyze(**household, now=date(2024, 6, 30), currency_symbol="€")
        assert report.currency_symbol == "€"

    def test_default_currency_symbol(self, analyzer, household):
        report = analyzer.analyze(**household, now=date(2024, 6, 30))
        assert report.currency_symbol == DEFAULT_CURRENCY_SYMBOL


class TestReferenceDate:
    def test_datetime_narrowed(self, analyzer):
        report = analyzer.analyze([], [], [], now=datetime(2024, 6, 1, 23, 59))
        assert report.generated_on == date(2024, 6, 1)

    def test_same_inputs_same_report(self, analyzer, household):
        first = analyzer.analyze(**household, now=date(2024, 6, 30))
        second = analyzer.analyze(**household, now=date(2024, 6, 30))
        assert first == second


class TestFromConfig:
    def test_uses_config_policy_and_symbol(self):
        config = FinpulseConfig(
            currency_symbol="$",
            policy=AnalysisPolicy(low_savings_rate=Decimal("80")),
        )
        analyzer = FinancialAnalyzer.from_config(config)

        report = analyzer.analyze(
            [
                Transaction(date=date(2024, 1, 5), amount=1000, type="income"),
                Transaction(date=date(2024, 1, 6), amount=500, type="expense"),
            ],
            [],
            [],
            now=date(2024, 1, 31),
        )

        assert report.currency_symbol == "$"
        assert "Increase Savings Rate" in [r.title for r in report.recommendations]


class TestModuleAnalyze:
    def test_convenience_function(self):
        report = analyze(
            [Transaction(date=date(2024, 1, 5), amount=1000, type="income")],
            [],
            [],
            now=date(2024, 1, 31),
            currency_symbol="$",
        )
        assert report.health_score == 75
        assert report.currency_symbol == "$"


class TestSerialization:
    """Tests for the report's JSON form."""

    def test_camel_case_keys(self, analyzer, household):
        data = analyzer.analyze(**household, now=date(2024, 6, 30)).to_dict()

        for key in (
            "generatedOn",
            "netIncome",
            "savingsRate",
            "needsVsWants",
            "healthScore",
            "recommendations",
            "summary",
        ):
            assert key in data
        assert "totalBudgetAmount" in data["budgets"]
        assert "areasForImprovement" in data["summary"]
        assert data["generatedOn"] == "2024-06-30"

    def test_to_json_is_stable(self, analyzer, household):
        report = analyzer.analyze(**household, now=date(2024, 6, 30))

        first = report.to_json()
        assert report.to_json() == first
        assert json.loads(first)["healthScore"] == 70

    def test_very_large_amounts(self, analyzer):
        report = analyzer.analyze(
            [Transaction(date=date(2024, 1, 5), amount="1e27", type="income")],
            [],
            [],
            now=date(2024, 1, 31),
        )

        assert report.income.total == Decimal("1e27")
        assert report.savings_rate == Decimal("100.00")
        assert json.loads(report.to_json())["healthScore"] == 75

    def test_non_ascii_symbol_preserved(self, analyzer):
        report = analyzer.analyze([], [], [], now=date(2024, 6, 1))
        assert '"currencySymbol": "₹"' in report.to_json()
