"""Command line interface.

Usage:
    finpulse analyze data.json
    finpulse analyze data.json --now 2025-03-15 --format text
    finpulse analyze data.json --currency '$' --output report.md --format markdown
    finpulse categories
"""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

import structlog
from dotenv import load_dotenv

from .analyzer import FinancialAnalyzer
from .config import configure_logging, load_config
from .exceptions import FinpulseError
from .loader import load_analysis_input
from .report_generator import FORMATS, AnalysisReportGenerator
from .standards import DEFAULT_CATEGORIES

logger = structlog.get_logger()


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not a YYYY-MM-DD date: {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="finpulse",
        description="Analyze transactions, savings targets and budgets.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze an input document")
    analyze.add_argument(
        "input",
        type=Path,
        help="JSON file with transactions, targets and budgets",
    )
    analyze.add_argument(
        "--now",
        type=_parse_date,
        default=None,
        help="Reference date (YYYY-MM-DD, default: today)",
    )
    analyze.add_argument(
        "--currency",
        default=None,
        help="Currency symbol for report text (default: configured symbol)",
    )
    analyze.add_argument(
        "--format",
        choices=("json",) + FORMATS,
        default="json",
        help="Output format (default: json)",
    )
    analyze.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to this file instead of stdout",
    )

    subparsers.add_parser("categories", help="List the default category table")
    return parser


def _run_analyze(args: argparse.Namespace) -> str:
    overrides = {"currency_symbol": args.currency} if args.currency else {}
    config = load_config(**overrides)
    configure_logging(config.log_level)

    data = load_analysis_input(args.input)
    analyzer = FinancialAnalyzer.from_config(config)
    report = analyzer.analyze(
        data.transactions,
        data.targets,
        data.budgets,
        now=args.now or date.today(),
    )

    if args.format == "json":
        return report.to_json()
    return AnalysisReportGenerator().generate(report, format=args.format)


def _run_categories() -> str:
    return "\n".join(f"{c.kind.value:<8} {c.name}" for c in DEFAULT_CATEGORIES)


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        if args.command == "analyze":
            output = _run_analyze(args)
        else:
            output = _run_categories()
    except FinpulseError as e:
        logger.error("command_failed", command=args.command, error=str(e), **e.details)
        print(f"error: {e}", file=sys.stderr)
        return 1

    if getattr(args, "output", None):
        args.output.write_text(output + "\n", encoding="utf-8")
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
