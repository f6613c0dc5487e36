"""Status classification for tasks, projects and goals.

Classification is a pure function of the page as fetched. Nothing here stores
a previous status, so results always follow the current snapshot.
"""

import re
from enum import StrEnum

from src.notion.models import NotionPage
from src.notion.properties import (
    BLOCKED_PROPERTY,
    EVERGREEN_PROPERTY,
    STATUS_PROPERTY,
    get_checkbox,
    get_select_name,
    get_status_name,
)


class StatusCategory(StrEnum):
    """Canonical categories a project status maps to."""

    ACTIVE = "ACTIVE"
    READY = "READY"
    BACKLOG = "BACKLOG"
    PARKED = "PARKED"
    DONE = "DONE"
    UNKNOWN = "UNKNOWN"


# Lowercase status values per category, matched after trimming
PROJECT_STATUS: dict[StatusCategory, tuple[str, ...]] = {
    StatusCategory.ACTIVE: ("in progress",),
    StatusCategory.READY: ("ready to start", "ready for review"),
    StatusCategory.BACKLOG: ("backlog",),
    StatusCategory.PARKED: ("parked", "on hold"),
    StatusCategory.DONE: ("done", "completed", "cancelled", "canceled"),
}

COMPLETED_PATTERN = re.compile(r"completed|canceled|cancelled|done", re.IGNORECASE)


def classify_status(status: str | None) -> StatusCategory:
    """Map a raw status value to its category.

    :param status: Status option name, in any case and with any padding.
    :returns: The matching category, or UNKNOWN.
    """
    normalised = (status or "").strip().lower()
    for category, values in PROJECT_STATUS.items():
        if normalised in values:
            return category
    return StatusCategory.UNKNOWN


def is_completed(page: NotionPage) -> bool:
    """Return True if the Status reads as done, completed or cancelled."""
    status = get_status_name(page, STATUS_PROPERTY) or ""
    return COMPLETED_PATTERN.search(status) is not None


def get_project_status_category(page: NotionPage) -> StatusCategory:
    """Classify a project's Status, whether it is a status or a select property."""
    status = get_status_name(page, STATUS_PROPERTY) or get_select_name(page, STATUS_PROPERTY)
    return classify_status(status)


def is_blocked(page: NotionPage) -> bool:
    """True if the project's "Blocked?" checkbox is checked."""
    return get_checkbox(page, BLOCKED_PROPERTY)


def is_evergreen(page: NotionPage) -> bool:
    """True if the project's "Evergreen" checkbox is checked."""
    return get_checkbox(page, EVERGREEN_PROPERTY)


def is_active_project(page: NotionPage) -> bool:
    """True if a project is in progress, not blocked and not evergreen."""
    return (
        get_project_status_category(page) == StatusCategory.ACTIVE
        and not is_blocked(page)
        and not is_evergreen(page)
    )
