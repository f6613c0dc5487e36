"""Tests for Notion property payload builders."""

import unittest
from datetime import date

from src.notion.builders import (
    build_completion_properties,
    build_goal_properties,
    build_project_properties,
    build_task_properties,
)


class TestBuildTaskProperties(unittest.TestCase):
    """Tests for build_task_properties function."""

    def test_builds_each_property_type(self) -> None:
        """Test payloads for title, status, select, date, rich text and relation."""
        result = build_task_properties(
            title="Write report",
            status="Not started",
            priority="High",
            due_date=date(2026, 3, 1),
            description="Quarterly numbers",
            project_ids=["p-1", "p-2"],
        )

        self.assertEqual(result["Name"], {"title": [{"text": {"content": "Write report"}}]})
        self.assertEqual(result["Status"], {"status": {"name": "Not started"}})
        self.assertEqual(result["Priority"], {"select": {"name": "High"}})
        self.assertEqual(result["Due Date"], {"date": {"start": "2026-03-01"}})
        self.assertEqual(
            result["Description"], {"rich_text": [{"text": {"content": "Quarterly numbers"}}]}
        )
        self.assertEqual(result["Project"], {"relation": [{"id": "p-1"}, {"id": "p-2"}]})

    def test_none_values_are_skipped(self) -> None:
        """Test that unset fields are left out of the payload."""
        result = build_task_properties(title="Only title", priority=None)

        self.assertEqual(list(result), ["Name"])

    def test_unknown_field_raises_value_error(self) -> None:
        """Test that an unknown field name is rejected."""
        with self.assertRaises(ValueError) as context:
            build_task_properties(colour="red")

        self.assertIn("colour", str(context.exception))

    def test_unknown_field_is_rejected_even_when_none(self) -> None:
        """Test that a misspelt optional field is reported rather than ignored."""
        with self.assertRaises(ValueError) as context:
            build_task_properties(title="Report", due=None)

        self.assertIn("due", str(context.exception))


class TestBuildProjectAndGoalProperties(unittest.TestCase):
    """Tests for project and goal builders."""

    def test_project_checkboxes_and_goal_relation(self) -> None:
        """Test checkbox and relation payloads for projects."""
        result = build_project_properties(blocked=True, evergreen=False, goal_ids=["g-1"])

        self.assertEqual(result["Blocked?"], {"checkbox": True})
        self.assertEqual(result["Evergreen"], {"checkbox": False})
        self.assertEqual(result["Goal"], {"relation": [{"id": "g-1"}]})

    def test_goal_completed_date_accepts_string(self) -> None:
        """Test that ISO strings pass through unchanged."""
        result = build_goal_properties(completed_date="2026-02-20")

        self.assertEqual(result["Completed Date"], {"date": {"start": "2026-02-20"}})


class TestBuildCompletionProperties(unittest.TestCase):
    """Tests for build_completion_properties function."""

    def test_sets_status_and_completed_date(self) -> None:
        """Test the payload that marks a page done."""
        result = build_completion_properties(date(2026, 2, 18))

        self.assertEqual(
            result,
            {
                "Status": {"status": {"name": "Done"}},
                "Completed Date": {"date": {"start": "2026-02-18"}},
            },
        )


if __name__ == "__main__":
    unittest.main()
