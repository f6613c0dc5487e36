"""Types describing raw Notion page data.

Pages are kept as the raw mappings returned by the API. Property names are
editable in the workspace, so the accessors in src.notion.properties read them
defensively instead of parsing pages into fixed models.
"""

from enum import StrEnum
from typing import Any

# A page object as returned by the Notion API: id, url, created_time,
# last_edited_time and a mapping of property name to property value.
NotionPage = dict[str, Any]


class PropertyType(StrEnum):
    """Discriminator values of Notion property objects."""

    TITLE = "title"
    RICH_TEXT = "rich_text"
    STATUS = "status"
    SELECT = "select"
    RELATION = "relation"
    DATE = "date"
    CHECKBOX = "checkbox"
    NUMBER = "number"
