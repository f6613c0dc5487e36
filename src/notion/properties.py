"""Defensive accessors for Notion page properties.

Property names are editable in the workspace and may be renamed, removed or
change type. Every accessor resolves its field in layers (exact name, then a
fuzzy or fallback name, then a default) and returns an absent value instead of
raising when the page does not look as expected.
"""

from datetime import date, datetime
from typing import Any

from src.notion.models import NotionPage, PropertyType

UNTITLED = "Untitled"

# Rich-text properties that may hold a title when no title-typed one is set
TITLE_CANDIDATES: tuple[str, ...] = ("Title", "Name", "Goal", "Project", "Task")

DESCRIPTION_CANDIDATES: tuple[str, ...] = ("Description", "Notes", "Summary")

DUE_DATE_CANDIDATES: tuple[str, ...] = ("Due Date", "Due")

STATUS_PROPERTY = "Status"
PRIORITY_PROPERTY = "Priority"
SCHEDULED_PROPERTY = "Scheduled"
COMPLETED_DATE_PROPERTY = "Completed Date"
BLOCKED_PROPERTY = "Blocked?"
EVERGREEN_PROPERTY = "Evergreen"


def get_properties(page: NotionPage) -> dict[str, Any]:
    """Return the page's property mapping, or an empty dict if it has none."""
    if not isinstance(page, dict):
        return {}
    properties = page.get("properties")
    return properties if isinstance(properties, dict) else {}


def get_property(page: NotionPage, name: str) -> dict[str, Any]:
    """Return a property by exact name, or an empty dict."""
    prop = get_properties(page).get(name)
    return prop if isinstance(prop, dict) else {}


def _find_key_ignore_case(properties: dict[str, Any], name: str) -> str | None:
    lowered = name.lower()
    return next((key for key in properties if key.lower() == lowered), None)


def _find_key_containing(properties: dict[str, Any], name: str) -> str | None:
    lowered = name.lower()
    return next((key for key in properties if lowered in key.lower()), None)


def _plain_text(items: Any) -> str:
    """Join the plain_text runs of a title or rich_text array."""
    if not isinstance(items, list):
        return ""
    return "".join(
        item.get("plain_text") or "" for item in items if isinstance(item, dict)
    )


def _named_option(prop: dict[str, Any], key: str) -> str | None:
    option = prop.get(key)
    if not isinstance(option, dict):
        return None
    name = option.get("name")
    return name if isinstance(name, str) and name else None


def get_title(page: NotionPage) -> str:
    """Extract the page title.

    Tries the title-typed property first, then the rich_text properties named
    in TITLE_CANDIDATES (matched case-insensitively).

    :param page: Raw Notion page.
    :returns: The title, or "Untitled" if nothing resolves. Never empty.
    """
    properties = get_properties(page)

    for prop in properties.values():
        if isinstance(prop, dict) and prop.get("type") == PropertyType.TITLE:
            text = _plain_text(prop.get("title"))
            if text.strip():
                return text

    for name in TITLE_CANDIDATES:
        key = name if name in properties else _find_key_ignore_case(properties, name)
        if key is None:
            continue
        text = get_rich_text(page, key)
        if text and text.strip():
            return text

    return UNTITLED


def get_rich_text(page: NotionPage, name: str) -> str | None:
    """Extract plain text from a rich_text property.

    :param page: Raw Notion page.
    :param name: Exact property name.
    :returns: The joined text, or None if absent or empty.
    """
    text = _plain_text(get_property(page, name).get("rich_text"))
    return text or None


def get_description(page: NotionPage) -> str | None:
    """Return the first non-empty Description, Notes or Summary text."""
    for name in DESCRIPTION_CANDIDATES:
        text = get_rich_text(page, name)
        if text:
            return text
    return None


def get_status_name(page: NotionPage, name: str = STATUS_PROPERTY) -> str | None:
    """Extract the option name from a status-typed property."""
    return _named_option(get_property(page, name), "status")


def get_select_name(page: NotionPage, name: str) -> str | None:
    """Extract the option name from a select-typed property."""
    return _named_option(get_property(page, name), "select")


def get_priority(page: NotionPage) -> str | None:
    """Return the raw Priority label of a task."""
    return get_select_name(page, PRIORITY_PROPERTY)


def get_date(page: NotionPage, name: str) -> str | None:
    """Extract the start date string from a date property.

    :param page: Raw Notion page.
    :param name: Exact property name.
    :returns: The ISO start value as stored, or None.
    """
    date_obj = get_property(page, name).get("date")
    if not isinstance(date_obj, dict):
        return None
    start = date_obj.get("start")
    return start if isinstance(start, str) and start else None


def get_due_date(page: NotionPage) -> str | None:
    """Return the due date, checking "Due Date" before "Due"."""
    for name in DUE_DATE_CANDIDATES:
        value = get_date(page, name)
        if value:
            return value
    return None


def parse_iso_date(value: str | None) -> date | None:
    """Parse a Notion date or datetime string into a date.

    :param value: ISO 8601 date or datetime string.
    :returns: The calendar date, or None if missing or malformed.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        return None


def get_checkbox(page: NotionPage, name: str) -> bool:
    """Return True only if the checkbox property is checked."""
    return get_property(page, name).get("checkbox") is True


def get_number(page: NotionPage, name: str) -> float | None:
    """Extract the value of a number property."""
    value = get_property(page, name).get("number")
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def get_relation_ids(page: NotionPage, name: str) -> list[str]:
    """Get IDs of related pages from a relation property.

    The property is resolved by exact name, then by the first key containing
    the name case-insensitively (so "Project" also finds "Projects").

    :param page: Raw Notion page.
    :param name: Relation property name.
    :returns: Referenced page IDs, or an empty list.
    """
    properties = get_properties(page)
    key = name if name in properties else _find_key_containing(properties, name)
    if key is None:
        return []

    prop = properties[key]
    if not isinstance(prop, dict) or prop.get("type") != PropertyType.RELATION:
        return []

    relation = prop.get("relation")
    if not isinstance(relation, list):
        return []
    return [item["id"] for item in relation if isinstance(item, dict) and item.get("id")]


def get_first_relation_ids(page: NotionPage, *names: str) -> list[str]:
    """Return the relation IDs of the first name that resolves to any."""
    for name in names:
        ids = get_relation_ids(page, name)
        if ids:
            return ids
    return []


def has_relation(page: NotionPage, name: str | None = None) -> bool:
    """Check whether a page links to any other page.

    :param page: Raw Notion page.
    :param name: Relation to check. If omitted, any relation property counts.
    :returns: True if the relation has at least one entry.
    """
    if name is not None:
        return bool(get_relation_ids(page, name))

    return any(
        isinstance(prop, dict)
        and prop.get("type") == PropertyType.RELATION
        and bool(prop.get("relation"))
        for prop in get_properties(page).values()
    )
