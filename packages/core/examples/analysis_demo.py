#!/usr/bin/env python3
"""
Financial Analysis Demonstration

This script walks through a complete analysis run:
1. Build a few months of transactions, savings targets and budgets
2. Analyze them as of a fixed date
3. Render the report as text, Markdown and JSON

Run: python examples/analysis_demo.py
"""

from datetime import date
from decimal import Decimal

from finpulse_core import Budget, FinancialAnalyzer, Target, Transaction
from finpulse_core.report_generator import AnalysisReportGenerator
from finpulse_core.standards import build_default_budgets

AS_OF = date(2025, 3, 28)


def create_sample_transactions() -> list[Transaction]:
    """Three months of salary, rent, everyday spend and one SIP."""
    transactions = []
    for month in (1, 2, 3):
        transactions.extend([
            Transaction(date=date(2025, month, 1), amount="85000", type="income", category="Salary"),
            Transaction(date=date(2025, month, 3), amount="28000", type="expense", category="Rent"),
            Transaction(date=date(2025, month, 5), amount="5000", type="investment", category="SIP"),
        ])

    transactions.extend([
        Transaction(date=date(2025, 1, 12), amount="6200", type="expense", category="Food & Dining"),
        Transaction(date=date(2025, 2, 14), amount="9400", type="expense", category="Food & Dining"),
        Transaction(date=date(2025, 3, 9), amount="11800", type="expense", category="Food & Dining"),
        Transaction(date=date(2025, 2, 20), amount="3100", type="expense", category="Bills & Utilities"),
        Transaction(date=date(2025, 3, 18), amount="14500", type="expense", category="Shopping"),
        Transaction(date=date(2025, 3, 22), amount="12000", type="income", category="Freelance"),
    ])
    return transactions


def create_sample_targets() -> list[Target]:
    return [
        Target(
            title="Emergency fund",
            target_amount="300000",
            current_amount="120000",
            target_date=date(2025, 12, 31),
            created_at=date(2024, 7, 1),
        ),
        Target(
            title="Goa trip",
            target_amount="60000",
            current_amount="60000",
            target_date=date(2025, 5, 1),
            created_at=date(2024, 11, 1),
        ),
        Target(title="New laptop", target_amount="120000", current_amount="15000", created_at=date(2025, 1, 1)),
    ]


def create_sample_budgets() -> list[Budget]:
    """Start from the zero-amount defaults and fill in the ones that matter."""
    limits = {
        "Rent": Decimal("28000"),
        "Food & Dining": Decimal("10000"),
        "Shopping": Decimal("8000"),
        "Bills & Utilities": Decimal("4000"),
    }
    return [
        budget.model_copy(update={"amount": limits[budget.category_name]})
        for budget in build_default_budgets(month=AS_OF.month, year=AS_OF.year)
        if budget.category_name in limits
    ]


def main():
    print("=" * 70)
    print("FINANCIAL ANALYSIS DEMONSTRATION")
    print("=" * 70)
    print()

    # Step 1: Build the inputs
    print("Step 1: Creating sample data...")
    transactions = create_sample_transactions()
    targets = create_sample_targets()
    budgets = create_sample_budgets()
    print(f"  - Transactions: {len(transactions)}")
    print(f"  - Targets: {len(targets)}")
    print(f"  - Budgets for {AS_OF:%B %Y}: {len(budgets)}")
    print()

    # Step 2: Analyze
    print("Step 2: Running analysis...")
    report = FinancialAnalyzer().analyze(transactions, targets, budgets, now=AS_OF)
    print(f"  - Monthly Income: ₹{report.income.monthly:,.2f}")
    print(f"  - Monthly Expenses: ₹{report.expenses.monthly:,.2f}")
    print(f"  - Savings Rate: {report.savings_rate}%")
    print(f"  - Health Score: {report.health_score}/100 ({report.summary.health_status.value})")
    print(f"  - Recommendations: {len(report.recommendations)}")
    print()

    # Step 3: Render
    print("Step 3: Generating reports...")
    generator = AnalysisReportGenerator()
    report_text = generator.generate(report, format="text")
    print()
    print(report_text)

    print()
    print("-" * 70)
    print("Saving reports...")

    with open("analysis_report.md", "w", encoding="utf-8") as f:
        f.write(generator.generate(report, format="markdown"))
    print("  - Saved: analysis_report.md")

    with open("analysis_report.json", "w", encoding="utf-8") as f:
        f.write(report.to_json())
    print("  - Saved: analysis_report.json")

    print()
    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
