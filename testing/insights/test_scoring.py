"""Tests for task urgency scoring."""

import unittest
from datetime import date

from src.insights.scoring import (
    due_date_score,
    format_today_tasks,
    get_today_tasks,
    priority_score,
    scheduled_date_score,
    score_task,
    status_score,
)
from testing.insights.fixtures import build_page, build_workspace

TODAY = date(2026, 2, 18)


class TestComponentScores(unittest.TestCase):
    """Tests for the individual score components."""

    def test_due_date_bands(self) -> None:
        """Test each due-date band."""
        cases = [
            (None, 0.0),
            (-3, 1.0),
            (0, 0.95),
            (1, 0.8),
            (2, 0.8),
            (5, 0.5),
            (7, 0.5),
            (10, 0.27),
            (60, 0.0),
        ]
        for days, expected in cases:
            with self.subTest(days=days):
                self.assertAlmostEqual(due_date_score(days), expected)

    def test_scheduled_date_bands(self) -> None:
        """Test each scheduled-date band."""
        cases = [(None, 0.0), (-1, 1.0), (0, 0.95), (1, 0.7), (3, 0.4), (4, 0.0)]
        for days, expected in cases:
            with self.subTest(days=days):
                self.assertAlmostEqual(scheduled_date_score(days), expected)

    def test_priority_labels(self) -> None:
        """Test priority labels are matched case-insensitively by substring."""
        cases = [
            ("High", 1.0),
            ("P1 - Urgent", 1.0),
            ("medium", 0.6),
            ("P2", 0.6),
            ("Low", 0.2),
            ("P4", 0.2),
            ("Someday", 0.0),
            (None, 0.0),
        ]
        for label, expected in cases:
            with self.subTest(label=label):
                self.assertEqual(priority_score(label), expected)

    def test_status_labels(self) -> None:
        """Test status labels favour work in progress."""
        self.assertEqual(status_score("In progress"), 1.0)
        self.assertEqual(status_score("Doing"), 1.0)
        self.assertEqual(status_score("Not started"), 0.5)
        self.assertEqual(status_score("To Do"), 0.5)
        self.assertEqual(status_score("Backlog"), 0.0)
        self.assertEqual(status_score(None), 0.0)


class TestScoreTask(unittest.TestCase):
    """Tests for score_task function."""

    def test_weighted_sum(self) -> None:
        """Test the weighted combination of all components."""
        task = build_page(
            "t-1",
            status="In progress",
            priority="High",
            due_date="2026-02-17",
            scheduled="2026-02-18",
        )

        self.assertAlmostEqual(score_task(task, TODAY), 0.4 + 0.285 + 0.25 + 0.05)

    def test_task_with_nothing_recognisable_scores_zero(self) -> None:
        """Test that a bare task scores exactly zero."""
        self.assertEqual(score_task(build_page("t-1"), TODAY), 0.0)
        self.assertEqual(score_task({}, TODAY), 0.0)

    def test_unparseable_dates_score_zero(self) -> None:
        """Test that garbage dates contribute nothing."""
        task = build_page("t-1", due_date="soon", scheduled="not-a-date")

        self.assertEqual(score_task(task, TODAY), 0.0)

    def test_due_property_fallback(self) -> None:
        """Test that a task using "Due" instead of "Due Date" is scored."""
        task = build_page("t-1", due_date="2026-02-18", due_property="Due")

        self.assertAlmostEqual(score_task(task, TODAY), 0.4 * 0.95)

    def test_score_stays_within_bounds(self) -> None:
        """Test the score is in [0, 1] across a spread of inputs."""
        for due in ("2020-01-01", "2026-02-18", "2026-02-20", "2027-01-01"):
            for priority in ("High", "Low", None):
                task = build_page("t", priority=priority, due_date=due, status="Doing")
                with self.subTest(due=due, priority=priority):
                    self.assertGreaterEqual(score_task(task, TODAY), 0.0)
                    self.assertLessEqual(score_task(task, TODAY), 1.0)

    def test_sooner_due_date_never_scores_lower(self) -> None:
        """Test that bringing a due date closer never lowers the score."""
        scores = [
            score_task(build_page("t", due_date=due), TODAY)
            for due in (
                "2026-04-01",
                "2026-02-28",
                "2026-02-24",
                "2026-02-19",
                "2026-02-18",
                "2026-02-17",
                "2026-01-01",
            )
        ]

        self.assertEqual(scores, sorted(scores))

    def test_overdue_beats_due_in_ten_days(self) -> None:
        """Test that an overdue task outranks one due in ten days, all else equal."""
        overdue = build_page("t-1", priority="Low", due_date="2026-02-17")
        upcoming = build_page("t-2", priority="Low", due_date="2026-02-28")

        self.assertGreater(score_task(overdue, TODAY), score_task(upcoming, TODAY))


class TestGetTodayTasks(unittest.TestCase):
    """Tests for get_today_tasks function."""

    def test_returns_active_tasks_sorted_by_score(self) -> None:
        """Test ordering, completed filtering and model fields."""
        workspace, _ = build_workspace(
            tasks=[
                build_page("low", "Low one", priority="Low"),
                build_page("done", "Done one", status="Done", priority="High"),
                build_page("high", "High one", priority="High", relations={"Project": ["p-1"]}),
                build_page("due", "Due today", due_date="2026-02-18"),
            ]
        )

        result = get_today_tasks(workspace, today=TODAY)

        self.assertEqual([task.id for task in result], ["due", "high", "low"])
        self.assertEqual(result[1].title, "High one")
        self.assertEqual(result[1].priority, "High")
        self.assertTrue(result[1].has_project)
        self.assertFalse(result[2].has_project)
        self.assertEqual(result[0].due_date, "2026-02-18")
        self.assertEqual(result[0].url, "https://notion.so/due")

    def test_limit_truncates(self) -> None:
        """Test that at most limit tasks are returned."""
        workspace, _ = build_workspace(
            tasks=[build_page(f"t-{i}", priority="Medium") for i in range(8)]
        )

        self.assertEqual(len(get_today_tasks(workspace, limit=3, today=TODAY)), 3)
        self.assertEqual(len(get_today_tasks(workspace, today=TODAY)), 5)

    def test_non_positive_limit_returns_nothing(self) -> None:
        """Test that a zero or negative limit never trims from the end."""
        workspace, _ = build_workspace(
            tasks=[build_page(f"t-{i}", priority="Medium") for i in range(3)]
        )

        self.assertEqual(get_today_tasks(workspace, limit=0, today=TODAY), [])
        self.assertEqual(get_today_tasks(workspace, limit=-1, today=TODAY), [])

    def test_ties_keep_fetch_order(self) -> None:
        """Test that equal scores keep the order Notion returned."""
        workspace, _ = build_workspace(
            tasks=[build_page(f"t-{i}", priority="Medium") for i in range(4)]
        )

        result = get_today_tasks(workspace, today=TODAY)

        self.assertEqual([task.id for task in result], ["t-0", "t-1", "t-2", "t-3"])

    def test_no_active_tasks(self) -> None:
        """Test an empty result when every task is completed."""
        workspace, _ = build_workspace(tasks=[build_page("t-1", status="Completed")])

        self.assertEqual(get_today_tasks(workspace, today=TODAY), [])


class TestFormatTodayTasks(unittest.TestCase):
    """Tests for format_today_tasks function."""

    def test_empty_list(self) -> None:
        """Test the all-caught-up message."""
        self.assertEqual(format_today_tasks([], TODAY), "No urgent tasks! You're all caught up.")

    def test_lists_tasks_with_date_markers(self) -> None:
        """Test numbering and overdue, today and missed markers."""
        workspace, _ = build_workspace(
            tasks=[
                build_page("a", "Overdue task", due_date="2026-02-10"),
                build_page("b", "Missed task", scheduled="2026-02-17"),
                build_page("c", "Due today", due_date="2026-02-18"),
            ]
        )
        tasks = get_today_tasks(workspace, today=TODAY)

        result = format_today_tasks(tasks, TODAY)

        self.assertIn("1. Overdue task", result)
        self.assertIn("Due: 10 Feb OVERDUE", result)
        self.assertIn("Scheduled: 17 Feb MISSED", result)
        self.assertIn("Due: 18 Feb (today)", result)

    def test_completion_summary_counts(self) -> None:
        """Test the summary of overdue, due-today, planned and high-priority tasks."""
        workspace, _ = build_workspace(
            tasks=[
                build_page("a", "Overdue", due_date="2026-02-10", priority="High"),
                build_page("b", "Missed", scheduled="2026-02-17"),
                build_page("c", "Due today", due_date="2026-02-18", priority="P1"),
                build_page("d", "Planned", scheduled="2026-02-18"),
            ]
        )
        tasks = get_today_tasks(workspace, today=TODAY)

        result = format_today_tasks(tasks, TODAY)

        self.assertIn("Completing these will:", result)
        self.assertIn("  - Clear 2 overdue items from your plate", result)
        self.assertIn("  - Meet 1 deadline due today", result)
        self.assertIn("  - Complete 1 task you planned for today", result)
        self.assertIn("  - Tackle 2 high-priority items", result)

    def test_completion_summary_without_reasons(self) -> None:
        """Test the fallback line when no task is urgent by date or priority."""
        workspace, _ = build_workspace(tasks=[build_page("a", "Someday", priority="Low")])

        result = format_today_tasks(get_today_tasks(workspace, today=TODAY), TODAY)

        self.assertTrue(
            result.endswith("Completing these will:\n  - Build momentum and reduce mental load")
        )


if __name__ == "__main__":
    unittest.main()
