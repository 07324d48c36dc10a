"""Data models for finpulse-core.

This package provides:
- Input collections consumed by the engine (financial.py)
- The analysis report and its sub-reports (report.py)
"""

from finpulse_core.models.financial import (
    UNCATEGORIZED,
    AnalysisInput,
    Budget,
    CategoryDefinition,
    CategoryKind,
    EngineModel,
    Target,
    Transaction,
    TransactionType,
)
from finpulse_core.models.report import (
    AnalysisReport,
    AnalysisSummary,
    BudgetAnalysis,
    BudgetCategoryStatus,
    BudgetStatus,
    CategoryAmount,
    FlowSummary,
    HealthStatus,
    KeyMetrics,
    NeedsVsWants,
    NetIncome,
    Priority,
    Recommendation,
    RecommendationType,
    ReportPeriod,
    SpendingTrends,
    TargetAnalysis,
    TrendDirection,
)

__all__ = [
    # Inputs
    "UNCATEGORIZED",
    "AnalysisInput",
    "Budget",
    "CategoryDefinition",
    "CategoryKind",
    "EngineModel",
    "Target",
    "Transaction",
    "TransactionType",
    # Enumerations
    "BudgetStatus",
    "HealthStatus",
    "Priority",
    "RecommendationType",
    "TrendDirection",
    # Report
    "AnalysisReport",
    "AnalysisSummary",
    "BudgetAnalysis",
    "BudgetCategoryStatus",
    "CategoryAmount",
    "FlowSummary",
    "KeyMetrics",
    "NeedsVsWants",
    "NetIncome",
    "Recommendation",
    "ReportPeriod",
    "SpendingTrends",
    "TargetAnalysis",
]
