"""Builders for Notion property payloads used by create and update calls."""

from dataclasses import dataclass
from datetime import date
from typing import Any

from src.notion.models import PropertyType
from src.notion.properties import (
    BLOCKED_PROPERTY,
    COMPLETED_DATE_PROPERTY,
    EVERGREEN_PROPERTY,
    PRIORITY_PROPERTY,
    SCHEDULED_PROPERTY,
    STATUS_PROPERTY,
)


@dataclass(frozen=True)
class PropertyField:
    """Metadata for a field mapping to a Notion property."""

    notion_name: str
    property_type: PropertyType


# Keyword name to Notion property, one registry per collection
TASK_FIELDS: dict[str, PropertyField] = {
    "title": PropertyField("Name", PropertyType.TITLE),
    "status": PropertyField(STATUS_PROPERTY, PropertyType.STATUS),
    "priority": PropertyField(PRIORITY_PROPERTY, PropertyType.SELECT),
    "due_date": PropertyField("Due Date", PropertyType.DATE),
    "scheduled": PropertyField(SCHEDULED_PROPERTY, PropertyType.DATE),
    "completed_date": PropertyField(COMPLETED_DATE_PROPERTY, PropertyType.DATE),
    "description": PropertyField("Description", PropertyType.RICH_TEXT),
    "project_ids": PropertyField("Project", PropertyType.RELATION),
}

PROJECT_FIELDS: dict[str, PropertyField] = {
    "title": PropertyField("Name", PropertyType.TITLE),
    "status": PropertyField(STATUS_PROPERTY, PropertyType.STATUS),
    "description": PropertyField("Description", PropertyType.RICH_TEXT),
    "completed_date": PropertyField(COMPLETED_DATE_PROPERTY, PropertyType.DATE),
    "goal_ids": PropertyField("Goal", PropertyType.RELATION),
    "blocked": PropertyField(BLOCKED_PROPERTY, PropertyType.CHECKBOX),
    "evergreen": PropertyField(EVERGREEN_PROPERTY, PropertyType.CHECKBOX),
}

GOAL_FIELDS: dict[str, PropertyField] = {
    "title": PropertyField("Name", PropertyType.TITLE),
    "status": PropertyField(STATUS_PROPERTY, PropertyType.STATUS),
    "description": PropertyField("Description", PropertyType.RICH_TEXT),
    "completed_date": PropertyField(COMPLETED_DATE_PROPERTY, PropertyType.DATE),
}


def build_property(field: PropertyField, value: Any) -> dict[str, Any]:  # noqa: PLR0911
    """Wrap one value in the payload shape its property type expects.

    Dates may be given as date objects or ISO strings. Relations take a list of page IDs.
    """
    match field.property_type:
        case PropertyType.TITLE:
            return {field.notion_name: {"title": [{"text": {"content": value}}]}}
        case PropertyType.RICH_TEXT:
            return {field.notion_name: {"rich_text": [{"text": {"content": value}}]}}
        case PropertyType.STATUS:
            return {field.notion_name: {"status": {"name": value}}}
        case PropertyType.SELECT:
            return {field.notion_name: {"select": {"name": value}}}
        case PropertyType.DATE:
            if isinstance(value, date):
                value = value.isoformat()
            return {field.notion_name: {"date": {"start": value}}}
        case PropertyType.RELATION:
            return {field.notion_name: {"relation": [{"id": page_id} for page_id in value]}}
        case PropertyType.CHECKBOX:
            return {field.notion_name: {"checkbox": bool(value)}}
        case PropertyType.NUMBER:
            return {field.notion_name: {"number": value}}


def _build_properties(field_registry: dict[str, PropertyField], **kwargs: Any) -> dict[str, Any]:
    """Merge one payload per keyword, looked up by name in field_registry.

    Keywords set to None are left out, so callers can pass optional values
    straight through.

    :raises ValueError: If a keyword is not in the registry.
    """
    unknown = sorted(set(kwargs) - set(field_registry))
    if unknown:
        raise ValueError(f"Unknown field: {', '.join(unknown)}")

    properties: dict[str, Any] = {}
    for field_name, value in kwargs.items():
        if value is not None:
            properties.update(build_property(field_registry[field_name], value))
    return properties


def build_task_properties(**kwargs: Any) -> dict[str, Any]:
    """Payload for creating or updating a task, keyed by TASK_FIELDS names."""
    return _build_properties(TASK_FIELDS, **kwargs)


def build_project_properties(**kwargs: Any) -> dict[str, Any]:
    """Payload for a project, including the Blocked? and Evergreen checkboxes."""
    return _build_properties(PROJECT_FIELDS, **kwargs)


def build_goal_properties(**kwargs: Any) -> dict[str, Any]:
    """Payload for a goal, keyed by GOAL_FIELDS names."""
    return _build_properties(GOAL_FIELDS, **kwargs)


def build_completion_properties(completed_on: date, status: str = "Done") -> dict[str, Any]:
    """Status and Completed Date payload that marks a page done.

    Tasks, projects and goals share both property names, so the task registry
    serves all three.

    :param completed_on: Day the item was finished.
    :param status: Status option to set.
    :returns: Properties object for update_page.
    """
    return build_task_properties(status=status, completed_date=completed_on)
