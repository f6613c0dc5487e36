"""Workspace health check over the Goals, Projects and Tasks hierarchy."""

import logging
from datetime import date

from src.insights.models import HealthIssues, HealthReport, HealthTotals
from src.notion.models import NotionPage
from src.notion.properties import (
    SCHEDULED_PROPERTY,
    UNTITLED,
    get_date,
    get_description,
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


def _is_before(value: str | None, today: date) -> bool:
    parsed = parse_iso_date(value)
    return parsed is not None and parsed < today


def missing_fields(task: NotionPage) -> list[str]:
    """List which of title, priority and status a task lacks."""
    missing: list[str] = []
    if get_title(task) == UNTITLED:
        missing.append("title")
    if not get_priority(task):
        missing.append("priority")
    if not get_status_name(task):
        missing.append("status")
    return missing


def run_health_check(workspace: Workspace, today: date | None = None) -> HealthReport:
    """Run the workspace health check.

    Task checks only look at active (not completed) tasks. Project checks look
    at every project.

    :param workspace: Workspace to analyse.
    :param today: Reference date for overdue checks. Defaults to the current date.
    :returns: Totals and the pages flagged by each check.
    :raises NotionClientError: If fetching any collection fails.
    """
    today = today or date.today()
    tasks, projects, goals = workspace.fetch_all()

    active_tasks = [task for task in tasks if not is_completed(task)]

    issues = HealthIssues(
        orphaned_tasks=[task for task in active_tasks if not has_relation(task)],
        projects_without_goal=[project for project in projects if not has_relation(project)],
        overdue_due_date=[task for task in active_tasks if _is_before(get_due_date(task), today)],
        overdue_scheduled=[
            task
            for task in active_tasks
            if _is_before(get_date(task, SCHEDULED_PROPERTY), today)
        ],
        missing_required_fields=[task for task in active_tasks if missing_fields(task)],
        missing_description=[task for task in active_tasks if not get_description(task)],
        projects_missing_description=[
            project for project in projects if not get_description(project)
        ],
    )

    report = HealthReport(
        totals=HealthTotals(
            tasks=len(tasks),
            active_tasks=len(active_tasks),
            projects=len(projects),
            goals=len(goals),
        ),
        issues=issues,
    )

    logger.info(
        f"Health check complete: active_tasks={len(active_tasks)}, "
        f"needs_attention={report.needs_attention}"
    )
    return report


def _page_line(page: NotionPage, suffix: str = "") -> str:
    url = page.get("url")
    link = f" ({url})" if url else ""
    return f"  - {get_title(page)}{link}{suffix}"


def format_health_report(report: HealthReport) -> str:
    """Format a health report as plain text.

    :param report: Report to format.
    :returns: Message text.
    """
    totals = report.totals
    issues = report.issues

    lines = [
        "Notion Health Report",
        "--------------------",
        f"Tasks: {totals.active_tasks} active / {totals.tasks} total",
        f"Projects: {totals.projects}",
        f"Goals: {totals.goals}",
        "",
        f"Orphaned tasks (no project): {len(issues.orphaned_tasks)}",
    ]
    lines.extend(_page_line(task) for task in issues.orphaned_tasks)
    lines.append("")

    lines.append(f"Projects without goal: {len(issues.projects_without_goal)}")
    lines.extend(_page_line(project) for project in issues.projects_without_goal)
    lines.append("")

    lines.append(f"Overdue (due date passed): {len(issues.overdue_due_date)}")
    lines.extend(
        _page_line(task, f" - due {get_due_date(task)}") for task in issues.overdue_due_date
    )
    lines.append("")

    lines.append(f"Overdue (scheduled date passed): {len(issues.overdue_scheduled)}")
    lines.extend(
        _page_line(task, f" - scheduled {get_date(task, SCHEDULED_PROPERTY)}")
        for task in issues.overdue_scheduled
    )
    lines.append("")

    lines.append(f"Missing required fields: {len(issues.missing_required_fields)}")
    lines.extend(
        _page_line(task, f" - missing: {', '.join(missing_fields(task))}")
        for task in issues.missing_required_fields
    )
    lines.append("")

    lines.append(f"Tasks missing description: {len(issues.missing_description)}")
    lines.append(f"Projects missing description: {len(issues.projects_missing_description)}")
    lines.append("")

    if report.needs_attention == 0:
        lines.append("Your Notion workspace is healthy!")
    else:
        lines.append(f"{report.needs_attention} issues need attention")

    return "\n".join(lines)
