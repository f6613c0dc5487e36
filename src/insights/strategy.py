"""Strategy analysis across goals, projects and tasks."""

import logging
import math

from src.insights.models import GoalProgress, StrategyAnalysis, StrategyIssues, StrategyMetrics
from src.notion.models import NotionPage
from src.notion.properties import get_first_relation_ids, get_title
from src.notion.status import is_active_project, is_completed
from src.notion.workspace import Workspace

logger = logging.getLogger(__name__)

FOCUS_THRESHOLD = 5
FOCUS_PENALTY_PER_PROJECT = 10

# Relation names tried in order; the first one holding any IDs is used
GOAL_RELATION_NAMES = ("Goal", "Goals")
PROJECT_RELATION_NAMES = ("Project", "Projects")

ZOMBIE_DISPLAY_LIMIT = 5


def linked_goal_ids(project: NotionPage) -> list[str]:
    """IDs of the goals a project links to."""
    return get_first_relation_ids(project, *GOAL_RELATION_NAMES)


def linked_project_ids(task: NotionPage) -> list[str]:
    """IDs of the projects a task links to."""
    return get_first_relation_ids(task, *PROJECT_RELATION_NAMES)


def focus_score(active_projects_count: int) -> int:
    """Score focus from 100 down to 0 as active projects pile up."""
    return max(0, 100 - FOCUS_PENALTY_PER_PROJECT * active_projects_count)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def goal_progress(goal: NotionPage, projects: list[NotionPage]) -> GoalProgress:
    """Compute how many of a goal's linked projects are completed.

    :param goal: Raw goal page.
    :param projects: All projects, active or not.
    :returns: Progress, with zero totals when no project links to the goal.
    """
    goal_id = goal.get("id", "")
    linked = [project for project in projects if goal_id in linked_goal_ids(project)]
    completed = sum(1 for project in linked if is_completed(project))
    percent = _round_half_up(100 * completed / len(linked)) if linked else 0

    return GoalProgress(
        id=goal_id,
        title=get_title(goal),
        url=goal.get("url"),
        percent=percent,
        total=len(linked),
        completed=completed,
    )


def run_strategy_analysis(workspace: Workspace) -> StrategyAnalysis:
    """Analyse focus and linkage across the workspace.

    A goal is stalled when no active project links to it. A project is a
    zombie when it is active but no active task links to it.

    :param workspace: Workspace to analyse.
    :returns: Metrics, issues and per-goal progress.
    :raises NotionClientError: If fetching any collection fails.
    """
    tasks, projects, goals = workspace.fetch_all()

    active_projects = [project for project in projects if is_active_project(project)]
    active_goals = [goal for goal in goals if not is_completed(goal)]
    active_tasks = [task for task in tasks if not is_completed(task)]

    goals_with_active_project = {
        goal_id for project in active_projects for goal_id in linked_goal_ids(project)
    }
    projects_with_active_task = {
        project_id for task in active_tasks for project_id in linked_project_ids(task)
    }

    stalled_goals = [
        goal for goal in active_goals if goal.get("id") not in goals_with_active_project
    ]
    zombie_projects = [
        project
        for project in active_projects
        if project.get("id") not in projects_with_active_task
    ]

    analysis = StrategyAnalysis(
        metrics=StrategyMetrics(
            active_goals_count=len(active_goals),
            active_projects_count=len(active_projects),
            active_tasks_count=len(active_tasks),
            focus_score=focus_score(len(active_projects)),
        ),
        issues=StrategyIssues(
            stalled_goals=stalled_goals,
            zombie_projects=zombie_projects,
            is_overloaded=len(active_projects) > FOCUS_THRESHOLD,
        ),
        progress=[goal_progress(goal, projects) for goal in active_goals],
    )

    logger.info(
        f"Strategy analysis complete: active_projects={len(active_projects)}, "
        f"stalled_goals={len(stalled_goals)}, zombie_projects={len(zombie_projects)}"
    )
    return analysis


def _progress_bar(percent: int) -> str:
    filled = _round_half_up(percent / 10)
    return "#" * filled + "-" * (10 - filled)


def format_strategy_report(analysis: StrategyAnalysis) -> str:
    """Format a strategy analysis as plain text.

    :param analysis: Analysis to format.
    :returns: Message text.
    """
    metrics = analysis.metrics
    issues = analysis.issues

    lines = [
        "Tactical Strategy Report",
        f"Focus Score: {metrics.focus_score}/100",
        "------------------------",
    ]

    if issues.is_overloaded:
        lines.append(f"FOCUS ALERT: You have {metrics.active_projects_count} active projects.")
        lines.append(
            f"   Suggested limit is {FOCUS_THRESHOLD}. "
            f"Consider pausing {metrics.active_projects_count - FOCUS_THRESHOLD}."
        )
    else:
        lines.append(f"Focus looks good ({metrics.active_projects_count} active projects).")
    lines.append("")

    if issues.stalled_goals:
        lines.append("Stalled Goals (no active projects):")
        lines.extend(f"   - {get_title(goal)}" for goal in issues.stalled_goals)
        lines.append("   Action: Archive goal or start a project.")
        lines.append("")

    if issues.zombie_projects:
        lines.append("Zombie Projects (active but no tasks):")
        lines.extend(
            f"   - {get_title(project)}"
            for project in issues.zombie_projects[:ZOMBIE_DISPLAY_LIMIT]
        )
        overflow = len(issues.zombie_projects) - ZOMBIE_DISPLAY_LIMIT
        if overflow > 0:
            lines.append(f"   ...and {overflow} more")
        lines.append('   Action: Plan tasks or move project to "On Hold".')
        lines.append("")

    lines.append("Goal Progress:")
    for progress in sorted(analysis.progress, key=lambda p: p.percent, reverse=True):
        lines.append(f"   {_progress_bar(progress.percent)} {progress.percent}% | {progress.title}")

    return "\n".join(lines)
