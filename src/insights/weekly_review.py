"""Weekly review of tasks, projects and goals completed in an ISO week.

A week runs Monday to Sunday. An item counts as completed in the week when its
Status reads as completed and its "Completed Date" falls within the week, both
ends inclusive.
"""

import logging
import re
from datetime import date, timedelta

from src.insights.exceptions import InvalidDateError, NotMondayError
from src.insights.models import (
    CompletedItem,
    CompletedTask,
    WeeklyReviewResult,
    WeeklyReviewTotals,
)
from src.notion.models import NotionPage
from src.notion.properties import (
    COMPLETED_DATE_PROPERTY,
    get_date,
    get_priority,
    get_title,
    parse_iso_date,
)
from src.notion.status import is_completed
from src.notion.workspace import Workspace

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_plain_date(value: str | None) -> date | None:
    """Parse a strict YYYY-MM-DD string.

    :param value: Date string.
    :returns: The date, or None if empty or not a valid calendar date.
    """
    if not value or not _ISO_DATE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def get_monday_of(day: date) -> date:
    """Return the Monday of the ISO week containing a date."""
    return day - timedelta(days=day.isoweekday() - 1)


def current_week_monday(today: date | None = None) -> date:
    """Return the Monday of the current ISO week."""
    return get_monday_of(today or date.today())


def is_in_week(day: date, week_start: date) -> bool:
    """Return True if a date falls within [week_start, week_start + 6]."""
    return week_start <= day <= week_start + timedelta(days=6)


def resolve_week_start(week_start: str | None, today: date | None = None) -> date:
    """Validate a requested week start, or default to this week's Monday.

    :param week_start: Optional YYYY-MM-DD Monday.
    :param today: Reference date for the default. Defaults to the current date.
    :returns: The Monday starting the review week.
    :raises InvalidDateError: If week_start is not a valid date.
    :raises NotMondayError: If week_start is not a Monday.
    """
    if not week_start:
        return current_week_monday(today)

    parsed = parse_plain_date(week_start)
    if parsed is None:
        raise InvalidDateError(week_start)
    if parsed.isoweekday() != 1:
        raise NotMondayError(week_start, parsed.isoweekday())
    return parsed


def _completed_in_week(pages: list[NotionPage], week_start: date) -> list[NotionPage]:
    completed: list[NotionPage] = []
    for page in pages:
        if not is_completed(page):
            continue
        completed_on = parse_iso_date(get_date(page, COMPLETED_DATE_PROPERTY))
        if completed_on is not None and is_in_week(completed_on, week_start):
            completed.append(page)
    return completed


def _to_completed_item(page: NotionPage) -> CompletedItem:
    return CompletedItem(
        id=page.get("id", ""),
        title=get_title(page),
        completed_date=get_date(page, COMPLETED_DATE_PROPERTY) or "",
        url=page.get("url"),
    )


def _to_completed_task(page: NotionPage) -> CompletedTask:
    return CompletedTask(
        id=page.get("id", ""),
        title=get_title(page),
        completed_date=get_date(page, COMPLETED_DATE_PROPERTY) or "",
        url=page.get("url"),
        priority=get_priority(page),
    )


def get_weekly_review(
    workspace: Workspace,
    week_start: str | None = None,
    today: date | None = None,
) -> WeeklyReviewResult:
    """Collect everything completed in the week starting on week_start.

    The week start is validated before anything is fetched.

    :param workspace: Workspace to read from.
    :param week_start: Optional YYYY-MM-DD Monday. Defaults to the current week.
    :param today: Reference date for the default week. Defaults to the current date.
    :returns: Completed items per collection, each sorted by completion date.
    :raises InvalidDateError: If week_start is not a valid date.
    :raises NotMondayError: If week_start is not a Monday.
    :raises NotionClientError: If fetching any collection fails.
    """
    start = resolve_week_start(week_start, today)
    end = start + timedelta(days=6)

    tasks, projects, goals = workspace.fetch_all()

    completed_tasks = sorted(
        (_to_completed_task(page) for page in _completed_in_week(tasks, start)),
        key=lambda item: item.completed_date,
    )
    completed_projects = sorted(
        (_to_completed_item(page) for page in _completed_in_week(projects, start)),
        key=lambda item: item.completed_date,
    )
    completed_goals = sorted(
        (_to_completed_item(page) for page in _completed_in_week(goals, start)),
        key=lambda item: item.completed_date,
    )

    logger.info(
        f"Weekly review: week_start={start}, tasks={len(completed_tasks)}, "
        f"projects={len(completed_projects)}, goals={len(completed_goals)}"
    )

    return WeeklyReviewResult(
        week_start=start.isoformat(),
        week_end=end.isoformat(),
        tasks=completed_tasks,
        projects=completed_projects,
        goals=completed_goals,
        totals=WeeklyReviewTotals(
            tasks=len(completed_tasks),
            projects=len(completed_projects),
            goals=len(completed_goals),
        ),
    )
