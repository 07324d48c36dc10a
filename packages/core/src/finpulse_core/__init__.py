"""Finpulse Core - Personal finance analysis engine."""

__version__ = "0.1.0"

from .analyzer import FinancialAnalyzer, analyze
from .config import AnalysisPolicy, FinpulseConfig
from .models import AnalysisReport, Budget, Target, Transaction, TransactionType

__all__ = [
    "FinancialAnalyzer",
    "analyze",
    "AnalysisPolicy",
    "FinpulseConfig",
    "AnalysisReport",
    "Budget",
    "Target",
    "Transaction",
    "TransactionType",
]
