"""Cached access to the tasks, projects and goals collections."""

import concurrent.futures
import logging
from datetime import date
from enum import StrEnum
from functools import lru_cache
from typing import Any, NamedTuple

from src.notion.builders import build_completion_properties
from src.notion.cache import TTLCache
from src.notion.client import NotionClient
from src.notion.config import NotionSettings, get_notion_settings
from src.notion.models import NotionPage

logger = logging.getLogger(__name__)


class Collection(StrEnum):
    """Bulk collections, valued by their cache key."""

    TASKS = "notion:tasks"
    PROJECTS = "notion:projects"
    GOALS = "notion:goals"


class WorkspaceSnapshot(NamedTuple):
    """The three collections fetched together for one analysis."""

    tasks: list[NotionPage]
    projects: list[NotionPage]
    goals: list[NotionPage]


class Workspace:
    """Read-through cached view of the Notion workspace.

    Bulk collection fetches go through the cache. Writes go straight to Notion
    and evict the affected cache entries before returning, so a caller that
    writes and then reads sees fresh data.
    """

    def __init__(
        self,
        client: NotionClient,
        *,
        tasks_db: str,
        projects_db: str,
        goals_db: str,
        cache: TTLCache | None = None,
        page_size: int = 100,
    ) -> None:
        """Initialise the workspace.

        :param client: Notion API client.
        :param tasks_db: Database ID of the tasks collection.
        :param projects_db: Database ID of the projects collection.
        :param goals_db: Database ID of the goals collection.
        :param cache: Cache for bulk fetches. A default TTL cache if omitted.
        :param page_size: Results requested per query page.
        """
        self._client = client
        self._cache = cache if cache is not None else TTLCache()
        self._page_size = page_size
        self._database_ids: dict[Collection, str] = {
            Collection.TASKS: tasks_db,
            Collection.PROJECTS: projects_db,
            Collection.GOALS: goals_db,
        }

    @classmethod
    def from_settings(cls, settings: NotionSettings) -> "Workspace":
        """Build a workspace, client and cache from settings.

        :param settings: Validated Notion settings.
        :returns: Configured Workspace instance.
        """
        client = NotionClient(
            token=settings.token,
            read_timeout=settings.request_timeout,
            write_timeout=settings.write_timeout,
        )
        return cls(
            client,
            tasks_db=settings.tasks_db,
            projects_db=settings.projects_db,
            goals_db=settings.goals_db,
            cache=TTLCache(settings.cache_ttl_seconds),
            page_size=settings.page_size,
        )

    @property
    def client(self) -> NotionClient:
        """The underlying Notion API client."""
        return self._client

    def database_id(self, collection: Collection) -> str:
        """Return the database ID configured for a collection."""
        return self._database_ids[collection]

    def _collection_for(self, database_id: str) -> Collection | None:
        for collection, configured_id in self._database_ids.items():
            if configured_id == database_id:
                return collection
        return None

    # Cached reads

    def fetch(self, collection: Collection) -> list[NotionPage]:
        """Fetch every page of a collection, served from cache when fresh.

        :param collection: Collection to fetch.
        :returns: All pages in the collection.
        :raises NotionClientError: If a query fails on a cache miss.
        """
        database_id = self._database_ids[collection]
        return self._cache.cached(
            collection.value,
            lambda: self._client.query_all(database_id, page_size=self._page_size),
        )

    def fetch_tasks(self) -> list[NotionPage]:
        """Fetch all tasks."""
        return self.fetch(Collection.TASKS)

    def fetch_projects(self) -> list[NotionPage]:
        """Fetch all projects."""
        return self.fetch(Collection.PROJECTS)

    def fetch_goals(self) -> list[NotionPage]:
        """Fetch all goals."""
        return self.fetch(Collection.GOALS)

    def fetch_all(self) -> WorkspaceSnapshot:
        """Fetch tasks, projects and goals concurrently.

        Waits for all three before returning. The collections are fetched
        independently, so they are not a consistent snapshot if the workspace
        changes mid-fetch.

        :returns: The three collections.
        :raises NotionClientError: If any of the fetches fails.
        """
        with concurrent.futures.ThreadPoolExecutor(max_workers=3) as executor:
            tasks = executor.submit(self.fetch_tasks)
            projects = executor.submit(self.fetch_projects)
            goals = executor.submit(self.fetch_goals)
            snapshot = WorkspaceSnapshot(
                tasks=tasks.result(),
                projects=projects.result(),
                goals=goals.result(),
            )

        logger.debug(
            f"Fetched workspace: tasks={len(snapshot.tasks)}, "
            f"projects={len(snapshot.projects)}, goals={len(snapshot.goals)}"
        )
        return snapshot

    # Uncached reads

    def query_filtered(
        self,
        collection: Collection,
        *,
        filter_: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
    ) -> list[NotionPage]:
        """Query a collection with server-side filters, bypassing the cache.

        :param collection: Collection to query.
        :param filter_: Optional Notion filter object.
        :param sorts: Optional list of sort objects.
        :returns: Matching pages.
        :raises NotionClientError: If any request fails.
        """
        return self._client.query_filtered(
            self._database_ids[collection],
            filter_=filter_,
            sorts=sorts,
            page_size=self._page_size,
        )

    def get_page(self, page_id: str) -> NotionPage:
        """Retrieve a single page directly from Notion."""
        return self._client.get_page(page_id)

    def search(self, query: str, limit: int = 7) -> list[NotionPage]:
        """Search the workspace for pages."""
        return self._client.search(query, limit=limit)

    # Writes

    def create_record(self, database_id: str, properties: dict[str, Any]) -> NotionPage:
        """Create a page and evict the owning collection from the cache.

        :param database_id: Parent database ID.
        :param properties: Page properties to set.
        :returns: Created page object.
        :raises NotionClientError: If the request fails.
        """
        page = self._client.create_page(database_id, properties)

        collection = self._collection_for(database_id)
        if collection is not None:
            self._cache.invalidate(collection.value)
        return page

    def update_record(self, page_id: str, properties: dict[str, Any]) -> NotionPage:
        """Update a page and clear the whole cache.

        The collection a page belongs to is not known without another lookup,
        so every cached collection is evicted.

        :param page_id: Notion page ID.
        :param properties: Properties to update.
        :returns: Updated page object.
        :raises NotionClientError: If the request fails.
        """
        page = self._client.update_page(page_id, properties)
        self._cache.invalidate()
        return page

    def complete_record(self, page_id: str, completed_on: date | None = None) -> NotionPage:
        """Mark a task, project or goal done with today's completion date.

        :param page_id: Notion page ID.
        :param completed_on: Completion date. Defaults to today.
        :returns: Updated page object.
        :raises NotionClientError: If the request fails.
        """
        completed_on = completed_on or date.today()
        logger.info(f"Completing page: id={page_id}, completed_on={completed_on}")
        return self.update_record(page_id, build_completion_properties(completed_on))

    def invalidate(self, collection: Collection | str | None = None) -> None:
        """Evict one collection from the cache, or all of them.

        :param collection: Collection or raw cache key. Clears everything if omitted.
        """
        self._cache.invalidate(str(collection) if collection is not None else None)


@lru_cache
def get_workspace() -> Workspace:
    """Get the process-wide workspace built from environment settings.

    :returns: Configured Workspace instance.
    :raises pydantic.ValidationError: If required settings are missing.
    """
    return Workspace.from_settings(get_notion_settings())
