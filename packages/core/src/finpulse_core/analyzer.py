"""Financial analysis pipeline.

FinancialAnalyzer is the single entry point for collaborators. It runs the
stages in order (aggregation, target progress, budget comparison, spending
trend, health score, recommendations) and assembles an AnalysisReport.

The analyzer holds only its configuration; every call builds a new report
from the collections it is given, so one instance can be shared across
threads.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence, Union

import structlog

from .aggregator import TypeAggregate, aggregate_transactions
from .budgets import compare_budgets
from .classification import classify_needs_wants
from .config import AnalysisPolicy, FinpulseConfig
from .health import calculate_health_score, health_status, score_factors
from .models import (
    AnalysisReport,
    AnalysisSummary,
    Budget,
    CategoryAmount,
    FlowSummary,
    KeyMetrics,
    NetIncome,
    ReportPeriod,
    Target,
    Transaction,
)
from .money import format_currency, percentage, round_money
from .recommendations import (
    generate_recommendations,
    identify_improvements,
    identify_strengths,
)
from .standards import DEFAULT_CURRENCY_SYMBOL
from .targets import analyze_targets
from .trends import analyze_trends

logger = structlog.get_logger()


def _log_step(step: str, input_value: str, output_value: str) -> None:
    logger.info(
        "analysis_step",
        step=step,
        input=input_value,
        output=output_value,
    )


def _flow_summary(aggregate: TypeAggregate) -> FlowSummary:
    return FlowSummary(
        total=round_money(aggregate.total),
        monthly=round_money(aggregate.monthly_average),
        transactions=aggregate.count,
        categories=[
            CategoryAmount(name=name, amount=round_money(amount))
            for name, amount in aggregate.categories
        ],
    )


class FinancialAnalyzer:
    """
    Turn a user's transactions, targets and budgets into an analysis report.

    The reference date is always passed in, never read from the clock, so
    the same inputs and date produce the same report.
    """

    def __init__(
        self,
        policy: Optional[AnalysisPolicy] = None,
        currency_symbol: Optional[str] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            policy: Thresholds and score weights (default: built-in policy)
            currency_symbol: Symbol for report text (default: DEFAULT_CURRENCY_SYMBOL)
        """
        self.policy = policy or AnalysisPolicy()
        self.currency_symbol = currency_symbol or DEFAULT_CURRENCY_SYMBOL

    @classmethod
    def from_config(cls, config: FinpulseConfig) -> "FinancialAnalyzer":
        return cls(policy=config.policy, currency_symbol=config.currency_symbol)

    def analyze(
        self,
        transactions: Sequence[Transaction],
        targets: Sequence[Target],
        budgets: Sequence[Budget],
        now: Union[date, datetime],
        currency_symbol: Optional[str] = None,
    ) -> AnalysisReport:
        """
        Run the full analysis.

        Args:
            transactions: All transactions for one user, any order
            targets: All savings targets for one user
            budgets: All budgets for one user; the period of ``now`` is used
            now: Reference date for target pacing and the budget period
            currency_symbol: Overrides the analyzer's symbol for this call

        Returns:
            A complete AnalysisReport; empty inputs give zero-valued sections
        """
        if isinstance(now, datetime):
            now = now.date()
        symbol = currency_symbol or self.currency_symbol
        policy = self.policy

        _log_step(
            step="analysis_start",
            input_value=(
                f"{len(transactions)} transactions, {len(targets)} targets, "
                f"{len(budgets)} budgets"
            ),
            output_value=f"as_of={now.isoformat()}",
        )

        # Step 1: Aggregate transactions
        aggregates = aggregate_transactions(transactions)
        income = aggregates.income
        expenses = aggregates.expenses

        net_total = income.total - expenses.total
        net_monthly = income.monthly_average - expenses.monthly_average
        savings_rate = percentage(net_total, income.total)

        _log_step(
            step="aggregation",
            input_value=f"{aggregates.transaction_count} transactions",
            output_value=(
                f"income={income.total}, expenses={expenses.total}, "
                f"investments={aggregates.investments.total}, savings_rate={savings_rate}"
            ),
        )

        # Step 2: Target progress
        target_analysis = analyze_targets(targets, now, policy.on_track_tolerance)
        _log_step(
            step="targets",
            input_value=f"{len(targets)} targets",
            output_value=(
                f"progress={target_analysis.overall_progress}, "
                f"completed={target_analysis.completed_targets}, "
                f"on_track={target_analysis.on_track_targets}, "
                f"behind={target_analysis.behind_targets}"
            ),
        )

        # Step 3: Budget comparison for the current period
        budget_analysis = compare_budgets(
            budgets,
            transactions,
            month=now.month,
            year=now.year,
            matching=policy.category_matching,
            warning_ratio=policy.budget_warning_ratio,
            period_only=policy.budget_spend_in_period_only,
        )
        _log_step(
            step="budgets",
            input_value=f"{len(budgets)} budgets, period={now.year}-{now.month:02d}",
            output_value=(
                f"over={budget_analysis.over_budget}, "
                f"utilization={budget_analysis.budget_utilization}"
            ),
        )

        # Step 4: Spending trend
        trends = analyze_trends(aggregates.monthly_spending, aggregates.monthly_income)
        _log_step(
            step="trends",
            input_value=f"{len(aggregates.monthly_spending)} spending months",
            output_value=f"trend={trends.spending_trend}, direction={trends.trend_direction.value}",
        )

        # Step 5: Health score
        factors = score_factors(
            savings_rate=savings_rate,
            monthly_net_income=net_monthly,
            target_progress=target_analysis.overall_progress,
            over_budget=budget_analysis.over_budget,
            total_budgets=budget_analysis.total_budgets,
            trend=trends.trend_direction,
            weights=policy.weights,
        )
        health_score = calculate_health_score(factors)
        status = health_status(health_score)
        _log_step(
            step="health_score",
            input_value=", ".join(f"{f.factor}={f.points}/{f.max_points}" for f in factors),
            output_value=f"score={health_score}, status={status.value}",
        )

        # Step 6: Recommendations and summary
        reported_rate = round_money(savings_rate)
        recommendations = generate_recommendations(
            savings_rate=reported_rate,
            monthly_net_income=net_monthly,
            targets=target_analysis,
            budgets=budget_analysis,
            total_investments=aggregates.investments.total,
            currency_symbol=symbol,
            low_savings_rate=policy.low_savings_rate,
        )
        strengths = identify_strengths(
            savings_rate=reported_rate,
            monthly_net_income=net_monthly,
            targets=target_analysis,
            budgets=budget_analysis,
            strong_savings_rate=policy.strong_savings_rate,
        )
        improvements = identify_improvements(
            savings_rate=reported_rate,
            monthly_net_income=net_monthly,
            targets=target_analysis,
            budgets=budget_analysis,
            low_savings_rate=policy.low_savings_rate,
        )
        _log_step(
            step="recommendations",
            input_value=f"score={health_score}",
            output_value=f"{len(recommendations)} recommendations",
        )

        needs_vs_wants = classify_needs_wants(
            expenses.categories,
            needs_keywords=policy.needs_keywords,
            wants_keywords=policy.wants_keywords,
            fallback_needs_ratio=policy.needs_fallback_ratio,
        )

        key_metrics = KeyMetrics(
            monthly_income=round_money(income.monthly_average),
            monthly_expenses=round_money(expenses.monthly_average),
            monthly_savings=round_money(net_monthly),
            savings_rate=reported_rate,
            target_progress=target_analysis.overall_progress,
        )
        overview = (
            f"Financial health is {status.value} ({health_score}/100). "
            f"Average monthly income {format_currency(income.monthly_average, symbol)}, "
            f"expenses {format_currency(expenses.monthly_average, symbol)}, "
            f"savings rate {reported_rate}%."
        )

        return AnalysisReport(
            generated_on=now,
            currency_symbol=symbol,
            income=_flow_summary(income),
            expenses=_flow_summary(expenses),
            investments=_flow_summary(aggregates.investments),
            net_income=NetIncome(
                total=round_money(net_total),
                monthly=round_money(net_monthly),
            ),
            savings_rate=reported_rate,
            targets=target_analysis,
            budgets=budget_analysis,
            trends=trends,
            needs_vs_wants=needs_vs_wants,
            health_score=health_score,
            recommendations=recommendations,
            summary=AnalysisSummary(
                health_score=health_score,
                health_status=status,
                overview=overview,
                key_metrics=key_metrics,
                strengths=strengths,
                areas_for_improvement=improvements,
            ),
            period=ReportPeriod(
                start_date=aggregates.first_date,
                end_date=aggregates.last_date,
                total_transactions=aggregates.transaction_count,
            ),
        )


def analyze(
    transactions: Sequence[Transaction],
    targets: Sequence[Target],
    budgets: Sequence[Budget],
    now: Union[date, datetime],
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    policy: Optional[AnalysisPolicy] = None,
) -> AnalysisReport:
    """Run one analysis with a throwaway analyzer."""
    return FinancialAnalyzer(policy=policy, currency_symbol=currency_symbol).analyze(
        transactions, targets, budgets, now
    )
