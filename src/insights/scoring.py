"""Urgency scoring for tasks.

The score is a fixed weighted sum of four components, each in [0, 1]:

- due date (40%)
- scheduled date (30%)
- priority (25%)
- status (5%)

The weights are policy and are not configurable. A task with nothing
recognisable scores exactly 0.
"""

import logging
from datetime import date

from src.insights.models import ScoredTask
from src.notion.models import NotionPage
from src.notion.properties import (
    SCHEDULED_PROPERTY,
    get_date,
    get_due_date,
    get_priority,
    get_status_name,
    get_title,
    has_relation,
    parse_iso_date,
)
from src.notion.status import is_completed
from src.notion.workspace import Workspace

logger = logging.getLogger(__name__)

DUE_WEIGHT = 0.40
SCHEDULED_WEIGHT = 0.30
PRIORITY_WEIGHT = 0.25
STATUS_WEIGHT = 0.05

# (substrings, score) pairs checked in order against lowercased labels
PRIORITY_LEVELS: tuple[tuple[tuple[str, ...], float], ...] = (
    (("high", "p1", "urgent"), 1.0),
    (("medium", "p2"), 0.6),
    (("low", "p3", "p4"), 0.2),
)

STATUS_LEVELS: tuple[tuple[tuple[str, ...], float], ...] = (
    (("in progress", "doing", "active"), 1.0),
    (("todo", "to do", "not started"), 0.5),
)


def _days_until(value: str | None, today: date) -> int | None:
    parsed = parse_iso_date(value)
    if parsed is None:
        return None
    return (parsed - today).days


def _match_level(label: str | None, levels: tuple[tuple[tuple[str, ...], float], ...]) -> float:
    lowered = (label or "").lower()
    for needles, score in levels:
        if any(needle in lowered for needle in needles):
            return score
    return 0.0


def due_date_score(days_until_due: int | None) -> float:
    """Score a due date by days remaining; negative means overdue."""
    if days_until_due is None:
        return 0.0
    if days_until_due < 0:
        return 1.0
    if days_until_due == 0:
        return 0.95
    if days_until_due <= 2:
        return 0.8
    if days_until_due <= 7:
        return 0.5
    return max(0.0, 0.3 - (days_until_due - 7) * 0.01)


def scheduled_date_score(days_until_scheduled: int | None) -> float:
    """Score a scheduled date by days remaining; negative means missed."""
    if days_until_scheduled is None:
        return 0.0
    if days_until_scheduled < 0:
        return 1.0
    if days_until_scheduled == 0:
        return 0.95
    if days_until_scheduled == 1:
        return 0.7
    if days_until_scheduled <= 3:
        return 0.4
    return 0.0


def priority_score(priority: str | None) -> float:
    """Score a raw priority label such as "High" or "P2"."""
    return _match_level(priority, PRIORITY_LEVELS)


def status_score(status: str | None) -> float:
    """Score a raw status name, favouring work already under way."""
    return _match_level(status, STATUS_LEVELS)


def score_task(task: NotionPage, today: date | None = None) -> float:
    """Score a task by urgency.

    :param task: Raw Notion task page.
    :param today: Reference date. Defaults to the current date.
    :returns: Score in [0, 1], higher meaning more urgent.
    """
    today = today or date.today()

    score = (
        DUE_WEIGHT * due_date_score(_days_until(get_due_date(task), today))
        + SCHEDULED_WEIGHT
        * scheduled_date_score(_days_until(get_date(task, SCHEDULED_PROPERTY), today))
        + PRIORITY_WEIGHT * priority_score(get_priority(task))
        + STATUS_WEIGHT * status_score(get_status_name(task))
    )
    return min(1.0, max(0.0, score))


def to_scored_task(task: NotionPage, today: date | None = None) -> ScoredTask:
    """Build a ScoredTask from a raw task page."""
    return ScoredTask(
        id=task.get("id", ""),
        title=get_title(task),
        priority=get_priority(task),
        status=get_status_name(task),
        due_date=get_due_date(task),
        scheduled_date=get_date(task, SCHEDULED_PROPERTY),
        has_project=has_relation(task),
        score=score_task(task, today),
        url=task.get("url"),
    )


def get_today_tasks(
    workspace: Workspace,
    limit: int = 5,
    today: date | None = None,
) -> list[ScoredTask]:
    """Get the most urgent active tasks.

    Ties keep the order in which Notion returned the tasks.

    :param workspace: Workspace to read tasks from.
    :param limit: Maximum number of tasks to return. Zero or less returns nothing.
    :param today: Reference date. Defaults to the current date.
    :returns: Active tasks sorted by descending score, truncated to limit.
    :raises NotionClientError: If fetching tasks fails.
    """
    today = today or date.today()
    active_tasks = [task for task in workspace.fetch_tasks() if not is_completed(task)]

    scored = sorted(
        (to_scored_task(task, today) for task in active_tasks),
        key=lambda scored_task: scored_task.score,
        reverse=True,
    )

    top = scored[: max(limit, 0)]
    logger.info(f"Scored tasks: active={len(active_tasks)}, returned={len(top)}")
    return top


def format_today_tasks(tasks: list[ScoredTask], today: date | None = None) -> str:
    """Format the top tasks as a plain-text list.

    :param tasks: Scored tasks, most urgent first.
    :param today: Reference date for overdue markers. Defaults to the current date.
    :returns: Message text.
    """
    if not tasks:
        return "No urgent tasks! You're all caught up."

    today = today or date.today()
    lines = ["Your top tasks for today:", ""]

    for i, task in enumerate(tasks, start=1):
        lines.append(f"{i}. {task.title}")

        due = parse_iso_date(task.due_date)
        scheduled = parse_iso_date(task.scheduled_date)
        if due is not None:
            marker = " OVERDUE" if due < today else " (today)" if due == today else ""
            lines.append(f"   Due: {due:%d %b}{marker}")
        elif scheduled is not None:
            marker = " MISSED" if scheduled < today else " (today)" if scheduled == today else ""
            lines.append(f"   Scheduled: {scheduled:%d %b}{marker}")

    lines.append("")
    lines.extend(completion_summary(tasks, today))
    return "\n".join(lines)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def completion_summary(tasks: list[ScoredTask], today: date | None = None) -> list[str]:
    """Summarise what finishing the listed tasks would achieve.

    A task counts as overdue when either its due or scheduled date has passed.
    High priority means a "high" or "p1" label.

    :param tasks: Tasks being shown.
    :param today: Reference date. Defaults to the current date.
    :returns: Summary lines, starting with a heading.
    """
    today = today or date.today()
    due_dates = [parse_iso_date(task.due_date) for task in tasks]
    scheduled_dates = [parse_iso_date(task.scheduled_date) for task in tasks]

    overdue = sum(
        1
        for due, scheduled in zip(due_dates, scheduled_dates, strict=True)
        if (due is not None and due < today) or (scheduled is not None and scheduled < today)
    )
    due_today = sum(1 for due in due_dates if due == today)
    scheduled_today = sum(1 for scheduled in scheduled_dates if scheduled == today)
    high_priority = sum(
        1
        for task in tasks
        if any(label in (task.priority or "").lower() for label in ("high", "p1"))
    )

    reasons: list[str] = []
    if overdue:
        reasons.append(f"Clear {_plural(overdue, 'overdue item')} from your plate")
    if due_today:
        reasons.append(f"Meet {_plural(due_today, 'deadline')} due today")
    if scheduled_today:
        reasons.append(f"Complete {_plural(scheduled_today, 'task')} you planned for today")
    if high_priority:
        reasons.append(f"Tackle {_plural(high_priority, 'high-priority item')}")
    if not reasons:
        reasons.append("Build momentum and reduce mental load")

    return ["Completing these will:", *(f"  - {reason}" for reason in reasons)]
