"""Command-line entry point for printing workspace reports."""

import argparse
import logging
import sys

from dotenv import load_dotenv

from src.insights.exceptions import WeeklyReviewValidationError
from src.insights.health import format_health_report, run_health_check
from src.insights.scoring import format_today_tasks, get_today_tasks
from src.insights.strategy import format_strategy_report, run_strategy_analysis
from src.insights.weekly_review import get_weekly_review
from src.notion.exceptions import NotionClientError
from src.notion.workspace import Workspace, get_workspace
from src.observability.sentry import init_sentry
from src.paths import ENV_FILE
from src.utils.logging import configure_logging

logger = logging.getLogger(__name__)

EXIT_CLIENT_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def positive_int(value: str) -> int:
    """Argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {value!r}") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the reports CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m src.insights",
        description="Print task, health, strategy or weekly review reports.",
    )
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL (default INFO)")
    subparsers = parser.add_subparsers(dest="report", required=True)

    today = subparsers.add_parser("today", help="Most urgent active tasks")
    today.add_argument("--limit", type=positive_int, default=5, help="Number of tasks to show")

    subparsers.add_parser("health", help="Workspace health check")
    subparsers.add_parser("strategy", help="Focus and goal/project linkage analysis")

    weekly = subparsers.add_parser("weekly", help="Items completed in an ISO week")
    weekly.add_argument("--week-start", default=None, help="Monday as YYYY-MM-DD")

    return parser


def render_report(workspace: Workspace, args: argparse.Namespace) -> str:
    """Run the requested report and return its text.

    :param workspace: Workspace to analyse.
    :param args: Parsed command-line arguments.
    :returns: Report text.
    """
    match args.report:
        case "today":
            return format_today_tasks(get_today_tasks(workspace, limit=args.limit))
        case "health":
            return format_health_report(run_health_check(workspace))
        case "strategy":
            return format_strategy_report(run_strategy_analysis(workspace))
        case "weekly":
            review = get_weekly_review(workspace, args.week_start)
            return review.model_dump_json(indent=2)
        case _:
            raise ValueError(f"Unknown report: {args.report}")


def main(argv: list[str] | None = None) -> int:
    """Entry point for running reports from the command line.

    :param argv: Arguments to parse. Defaults to sys.argv.
    :returns: Process exit code.
    """
    args = build_parser().parse_args(argv)

    load_dotenv(ENV_FILE)
    configure_logging(args.log_level)
    init_sentry(args.report)

    try:
        output = render_report(get_workspace(), args)
    except WeeklyReviewValidationError as e:
        logger.warning(f"Invalid weekly review request: {e}")
        print(str(e), file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except NotionClientError as e:
        logger.exception(f"Failed to build report: report={args.report}, error={e}")
        return EXIT_CLIENT_ERROR

    print(output)
    return 0
