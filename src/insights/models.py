"""Pydantic models for analysis results.

Every model is built fresh by the call that produced it and is never stored.
"""

from typing import Any

from pydantic import BaseModel, Field, computed_field


class ScoredTask(BaseModel):
    """An active task with its urgency score."""

    id: str = Field(..., description="Notion page ID")
    title: str = Field(..., description="Task title")
    priority: str | None = Field(None, description="Raw priority label")
    status: str | None = Field(None, description="Raw status name")
    due_date: str | None = Field(None, description="Due date as stored in Notion")
    scheduled_date: str | None = Field(None, description="Scheduled date as stored in Notion")
    has_project: bool = Field(default=False, description="Whether the task links to anything")
    score: float = Field(..., ge=0, le=1, description="Urgency score, higher is more urgent")
    url: str | None = Field(None, description="Notion page URL")


class HealthTotals(BaseModel):
    """Raw collection sizes seen by a health check."""

    tasks: int = Field(default=0, description="All tasks")
    active_tasks: int = Field(default=0, description="Tasks not completed")
    projects: int = Field(default=0, description="All projects")
    goals: int = Field(default=0, description="All goals")


class HealthIssues(BaseModel):
    """Pages flagged by each health check category."""

    orphaned_tasks: list[dict[str, Any]] = Field(default_factory=list)
    projects_without_goal: list[dict[str, Any]] = Field(default_factory=list)
    overdue_due_date: list[dict[str, Any]] = Field(default_factory=list)
    overdue_scheduled: list[dict[str, Any]] = Field(default_factory=list)
    missing_required_fields: list[dict[str, Any]] = Field(default_factory=list)
    missing_description: list[dict[str, Any]] = Field(default_factory=list)
    projects_missing_description: list[dict[str, Any]] = Field(default_factory=list)


class HealthReport(BaseModel):
    """Result of a workspace health check."""

    totals: HealthTotals = Field(default_factory=HealthTotals)
    issues: HealthIssues = Field(default_factory=HealthIssues)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def needs_attention(self) -> int:
        """Count of actionable issues.

        Missing descriptions are informational and not included.
        """
        return (
            len(self.issues.orphaned_tasks)
            + len(self.issues.projects_without_goal)
            + len(self.issues.overdue_due_date)
            + len(self.issues.overdue_scheduled)
            + len(self.issues.missing_required_fields)
        )


class GoalProgress(BaseModel):
    """Share of a goal's linked projects that are completed."""

    id: str = Field(..., description="Goal page ID")
    title: str = Field(..., description="Goal title")
    url: str | None = Field(None, description="Notion page URL")
    percent: int = Field(default=0, ge=0, le=100, description="Completed projects (0-100)")
    total: int = Field(default=0, ge=0, description="Linked projects")
    completed: int = Field(default=0, ge=0, description="Completed linked projects")


class StrategyMetrics(BaseModel):
    """Headline counts of a strategy analysis."""

    active_goals_count: int = Field(default=0)
    active_projects_count: int = Field(default=0)
    active_tasks_count: int = Field(default=0)
    focus_score: int = Field(default=100, ge=0, le=100)


class StrategyIssues(BaseModel):
    """Cross-entity problems found by a strategy analysis."""

    stalled_goals: list[dict[str, Any]] = Field(
        default_factory=list, description="Active goals with no active project"
    )
    zombie_projects: list[dict[str, Any]] = Field(
        default_factory=list, description="Active projects with no active task"
    )
    is_overloaded: bool = Field(default=False, description="Too many active projects")


class StrategyAnalysis(BaseModel):
    """Result of a strategy analysis."""

    metrics: StrategyMetrics = Field(default_factory=StrategyMetrics)
    issues: StrategyIssues = Field(default_factory=StrategyIssues)
    progress: list[GoalProgress] = Field(default_factory=list)


class CompletedItem(BaseModel):
    """A project or goal completed during the review week."""

    id: str = Field(..., description="Notion page ID")
    title: str = Field(..., description="Page title")
    completed_date: str = Field(..., description="Completed Date as stored in Notion")
    url: str | None = Field(None, description="Notion page URL")


class CompletedTask(CompletedItem):
    """A task completed during the review week."""

    priority: str | None = Field(None, description="Raw priority label")


class WeeklyReviewTotals(BaseModel):
    """Number of completed items per collection."""

    tasks: int = Field(default=0)
    projects: int = Field(default=0)
    goals: int = Field(default=0)


class WeeklyReviewResult(BaseModel):
    """Everything completed between a Monday and the following Sunday."""

    week_start: str = Field(..., description="Monday, YYYY-MM-DD")
    week_end: str = Field(..., description="Sunday, YYYY-MM-DD")
    tasks: list[CompletedTask] = Field(default_factory=list)
    projects: list[CompletedItem] = Field(default_factory=list)
    goals: list[CompletedItem] = Field(default_factory=list)
    totals: WeeklyReviewTotals = Field(default_factory=WeeklyReviewTotals)
