"""Analyses over the Notion workspace: urgency, health, strategy and weekly review."""

from src.insights.exceptions import InvalidDateError, NotMondayError, WeeklyReviewValidationError
from src.insights.health import format_health_report, run_health_check
from src.insights.scoring import get_today_tasks, score_task
from src.insights.strategy import run_strategy_analysis
from src.insights.weekly_review import get_weekly_review

__all__ = [
    "InvalidDateError",
    "NotMondayError",
    "WeeklyReviewValidationError",
    "format_health_report",
    "get_today_tasks",
    "get_weekly_review",
    "run_health_check",
    "run_strategy_analysis",
    "score_task",
]
