"""Notion workspace access: API client, cache and property accessors."""

from src.notion.cache import TTLCache
from src.notion.client import NotionClient
from src.notion.exceptions import NotionClientError
from src.notion.models import NotionPage
from src.notion.status import StatusCategory
from src.notion.workspace import Collection, Workspace, get_workspace

__all__ = [
    "Collection",
    "NotionClient",
    "NotionClientError",
    "NotionPage",
    "StatusCategory",
    "TTLCache",
    "Workspace",
    "get_workspace",
]
