"""Human-readable rendering of analysis reports.

Renders an AnalysisReport as plain text, Markdown or HTML. Amounts are
shown with the report's currency symbol.
"""

from dataclasses import dataclass
from html import escape

import structlog

from .models import AnalysisReport, FlowSummary
from .money import format_currency

logger = structlog.get_logger()

FORMATS = ("text", "markdown", "html")


@dataclass
class ReportSection:
    """A section of the report."""
    title: str
    content: str


class AnalysisReportGenerator:
    """
    Generate readable financial analysis reports.

    Reports include:
    - Overview and health score
    - Cash flow and category breakdowns
    - Savings target progress
    - Budget against actual
    - Spending trend
    - Recommendations
    """

    def __init__(self):
        """Initialize the report generator."""
        self._sections: list[ReportSection] = []
        self._symbol = ""

    def generate(self, report: AnalysisReport, format: str = "text") -> str:
        """
        Render a complete analysis report.

        Args:
            report: The analysis result
            format: Output format ("text", "markdown", "html")

        Returns:
            Formatted report string
        """
        if format not in FORMATS:
            raise ValueError(f"Unsupported format: {format}. Must be one of: {FORMATS}")

        self._sections = []
        self._symbol = report.currency_symbol

        self._add_header(report)
        self._add_overview(report)
        self._add_cash_flow(report)
        self._add_categories(report)
        self._add_targets(report)
        self._add_budgets(report)
        self._add_trends(report)
        self._add_recommendations(report)

        logger.info("report_rendered", format=format, sections=len(self._sections))

        if format == "markdown":
            return self._format_markdown()
        elif format == "html":
            return self._format_html()
        else:
            return self._format_text()

    def _money(self, amount) -> str:
        return format_currency(amount, self._symbol)

    def _add_header(self, report: AnalysisReport) -> None:
        """Add report header."""
        period = report.period
        if period.start_date and period.end_date:
            span = f"{period.start_date.isoformat()} to {period.end_date.isoformat()}"
        else:
            span = "no transactions"

        content = f"""
FINANCIAL ANALYSIS REPORT
=========================

Report Date: {report.generated_on.strftime('%B %d, %Y')}
Period: {span}
Transactions: {period.total_transactions}
""".strip()

        self._sections.append(ReportSection(title="Header", content=content))

    def _add_overview(self, report: AnalysisReport) -> None:
        """Add the health score and key metrics."""
        summary = report.summary
        metrics = summary.key_metrics
        lines = [
            f"HEALTH: {summary.health_status.value.upper()} ({summary.health_score}/100)",
            summary.overview,
            "",
            f"Monthly Income:    {self._money(metrics.monthly_income)}",
            f"Monthly Expenses:  {self._money(metrics.monthly_expenses)}",
            f"Monthly Savings:   {self._money(metrics.monthly_savings)}",
            f"Savings Rate:      {metrics.savings_rate}%",
            f"Target Progress:   {metrics.target_progress}%",
        ]

        if summary.strengths:
            lines.append("")
            lines.append("STRENGTHS:")
            lines.extend(f"  + {item}" for item in summary.strengths)

        if summary.areas_for_improvement:
            lines.append("")
            lines.append("AREAS FOR IMPROVEMENT:")
            lines.extend(f"  - {item}" for item in summary.areas_for_improvement)

        self._sections.append(ReportSection(title="Overview", content="\n".join(lines)))

    def _flow_line(self, label: str, flow: FlowSummary) -> str:
        return (
            f"{label:<12} total {self._money(flow.total):>14}   "
            f"monthly {self._money(flow.monthly):>12}   ({flow.transactions} transactions)"
        )

    def _add_cash_flow(self, report: AnalysisReport) -> None:
        """Add income, expense and investment totals."""
        lines = [
            self._flow_line("Income", report.income),
            self._flow_line("Expenses", report.expenses),
            self._flow_line("Investments", report.investments),
            "",
            f"Net Income: {self._money(report.net_income.total)} total, "
            f"{self._money(report.net_income.monthly)} per month",
        ]
        self._sections.append(ReportSection(title="Cash Flow", content="\n".join(lines)))

    def _add_categories(self, report: AnalysisReport) -> None:
        """Add category breakdowns and the needs/wants split."""
        lines = []
        for label, flow in (("EXPENSES", report.expenses), ("INCOME", report.income)):
            lines.append(f"{label}:")
            if not flow.categories:
                lines.append("  (none)")
            for category in flow.categories:
                lines.append(f"  {category.name:<28} {self._money(category.amount):>14}")
            lines.append("")

        split = report.needs_vs_wants
        lines.append(
            f"Needs: {self._money(split.needs)} ({split.needs_percentage}%)   "
            f"Wants: {self._money(split.wants)} ({split.wants_percentage}%)"
        )
        self._sections.append(ReportSection(title="Categories", content="\n".join(lines)))

    def _add_targets(self, report: AnalysisReport) -> None:
        """Add savings target progress."""
        targets = report.targets
        if targets.total_targets == 0:
            content = "No savings targets."
        else:
            content = "\n".join([
                f"Targets: {targets.total_targets}",
                f"Saved: {self._money(targets.total_current_amount)} of "
                f"{self._money(targets.total_target_amount)} ({targets.overall_progress}%)",
                f"Completed: {targets.completed_targets}   On track: {targets.on_track_targets}   "
                f"Behind: {targets.behind_targets} ({targets.unscheduled_targets} without a deadline)",
            ])
        self._sections.append(ReportSection(title="Savings Targets", content=content))

    def _add_budgets(self, report: AnalysisReport) -> None:
        """Add budget against actual for the current period."""
        budgets = report.budgets
        if budgets.total_budgets == 0:
            content = "No budgets for the current month."
        else:
            lines = [
                f"Period: {budgets.year}-{budgets.month:02d}",
                f"Budgeted: {self._money(budgets.total_budget_amount)}   "
                f"Spent (capped): {self._money(budgets.total_spent)}   "
                f"Utilization: {budgets.budget_utilization}%",
                f"Over budget: {budgets.over_budget}   Within budget: {budgets.under_budget}",
                "",
            ]
            for item in budgets.categories:
                lines.append(
                    f"  {item.category:<24} {self._money(item.spent):>12} / "
                    f"{self._money(item.budget):<12} {item.percentage:>7}%  [{item.status.value}]"
                )
            content = "\n".join(lines)
        self._sections.append(ReportSection(title="Budgets", content=content))

    def _add_trends(self, report: AnalysisReport) -> None:
        """Add monthly spending and the trend direction."""
        trends = report.trends
        lines = [
            f"Direction: {trends.trend_direction.value} "
            f"({self._money(trends.spending_trend)} per month)",
        ]
        months = sorted(set(trends.monthly_spending) | set(trends.monthly_income))
        if months:
            lines.append("")
            lines.append(f"  {'Month':<8} {'Income':>14} {'Spending':>14}")
            for month in months:
                income = trends.monthly_income.get(month)
                spending = trends.monthly_spending.get(month)
                income_text = "-" if income is None else self._money(income)
                spending_text = "-" if spending is None else self._money(spending)
                lines.append(f"  {month:<8} {income_text:>14} {spending_text:>14}")
        self._sections.append(ReportSection(title="Spending Trend", content="\n".join(lines)))

    def _add_recommendations(self, report: AnalysisReport) -> None:
        """Add recommendations section."""
        if not report.recommendations:
            content = "No recommendations. Keep it up."
        else:
            lines = []
            for i, rec in enumerate(report.recommendations, start=1):
                lines.append(f"{i}. [{rec.priority.value.upper()}] {rec.title}")
                lines.append(f"   {rec.description}")
                lines.append(f"   Action: {rec.action}")
            content = "\n".join(lines)
        self._sections.append(ReportSection(title="Recommendations", content=content))

    def _format_text(self) -> str:
        """Format report as plain text."""
        output = []

        for section in self._sections:
            if section.title != "Header":
                output.append("")
                output.append("=" * 60)
                output.append(section.title.upper())
                output.append("=" * 60)

            output.append(section.content)

        output.append("")
        output.append("=" * 60)
        output.append("END OF REPORT")
        output.append("=" * 60)

        return "\n".join(output)

    def _format_markdown(self) -> str:
        """Format report as Markdown."""
        output = []

        for section in self._sections:
            if section.title == "Header":
                output.append(section.content)
            else:
                output.append(f"\n## {section.title}\n")
                output.append("```")
                output.append(section.content)
                output.append("```")

        return "\n".join(output)

    def _format_html(self) -> str:
        """Format report as HTML."""
        lines = [
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            "<meta charset=\"utf-8\">",
            "<title>Financial Analysis Report</title>",
            "<style>",
            "body { font-family: 'Courier New', monospace; margin: 40px; }",
            "h2 { color: #555; border-bottom: 2px solid #333; padding-bottom: 5px; }",
            "pre { background: #f5f5f5; padding: 15px; overflow-x: auto; }",
            "</style>",
            "</head>",
            "<body>",
        ]

        for section in self._sections:
            if section.title != "Header":
                lines.append(f"<h2>{escape(section.title)}</h2>")
            lines.append(f"<pre>{escape(section.content)}</pre>")

        lines.append("</body>")
        lines.append("</html>")

        return "\n".join(lines)
