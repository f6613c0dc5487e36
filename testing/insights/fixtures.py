"""Shared test fixtures for workspace analysis tests.

Pages are built in the raw shape returned by the Notion API, so the analyses
run through the real property accessors.
"""

from typing import Any
from unittest.mock import MagicMock

from src.notion.cache import TTLCache
from src.notion.client import NotionClient
from src.notion.models import NotionPage
from src.notion.workspace import Workspace

TASKS_DB = "db-tasks"
PROJECTS_DB = "db-projects"
GOALS_DB = "db-goals"


def build_page(  # noqa: PLR0913
    page_id: str,
    title: str | None = "Test Page",
    *,
    status: str | None = None,
    status_type: str = "status",
    priority: str | None = None,
    due_date: str | None = None,
    due_property: str = "Due Date",
    scheduled: str | None = None,
    completed_date: str | None = None,
    description: str | None = None,
    relations: dict[str, list[str]] | None = None,
    blocked: bool | None = None,
    evergreen: bool | None = None,
) -> NotionPage:
    """Build a raw Notion page with the given properties.

    :param page_id: Page ID.
    :param title: Text of the title-typed "Name" property. None leaves it empty.
    :param status: Status option name.
    :param status_type: Whether Status is a "status" or "select" property.
    :param priority: Priority option name.
    :param due_date: Due date string.
    :param due_property: Property name holding the due date.
    :param scheduled: Scheduled date string.
    :param completed_date: Completed Date string.
    :param description: Description text.
    :param relations: Relation property name to referenced page IDs.
    :param blocked: Value of the "Blocked?" checkbox, if present.
    :param evergreen: Value of the "Evergreen" checkbox, if present.
    :returns: Page object.
    """
    properties: dict[str, Any] = {
        "Name": {
            "type": "title",
            "title": [{"plain_text": title}] if title is not None else [],
        },
    }

    if status is not None:
        properties["Status"] = {"type": status_type, status_type: {"name": status}}
    if priority is not None:
        properties["Priority"] = {"type": "select", "select": {"name": priority}}
    if due_date is not None:
        properties[due_property] = {"type": "date", "date": {"start": due_date, "end": None}}
    if scheduled is not None:
        properties["Scheduled"] = {"type": "date", "date": {"start": scheduled, "end": None}}
    if completed_date is not None:
        properties["Completed Date"] = {
            "type": "date",
            "date": {"start": completed_date, "end": None},
        }
    if description is not None:
        properties["Description"] = {
            "type": "rich_text",
            "rich_text": [{"plain_text": description}],
        }
    for name, ids in (relations or {}).items():
        properties[name] = {"type": "relation", "relation": [{"id": i} for i in ids]}
    if blocked is not None:
        properties["Blocked?"] = {"type": "checkbox", "checkbox": blocked}
    if evergreen is not None:
        properties["Evergreen"] = {"type": "checkbox", "checkbox": evergreen}

    return {
        "id": page_id,
        "url": f"https://notion.so/{page_id}",
        "created_time": "2026-01-01T00:00:00.000Z",
        "last_edited_time": "2026-01-01T00:00:00.000Z",
        "properties": properties,
    }


def build_workspace(
    tasks: list[NotionPage] | None = None,
    projects: list[NotionPage] | None = None,
    goals: list[NotionPage] | None = None,
) -> tuple[Workspace, MagicMock]:
    """Build a Workspace backed by a mocked Notion client.

    :param tasks: Pages returned for the tasks database.
    :param projects: Pages returned for the projects database.
    :param goals: Pages returned for the goals database.
    :returns: The workspace and its mocked client.
    """
    pages = {
        TASKS_DB: tasks or [],
        PROJECTS_DB: projects or [],
        GOALS_DB: goals or [],
    }
    client = MagicMock(spec=NotionClient)
    client.query_all.side_effect = lambda database_id, page_size=100: list(pages[database_id])

    workspace = Workspace(
        client,
        tasks_db=TASKS_DB,
        projects_db=PROJECTS_DB,
        goals_db=GOALS_DB,
        cache=TTLCache(),
    )
    return workspace, client
