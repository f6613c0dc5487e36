"""HTTP client for the Notion REST API.

Covers the handful of endpoints the workspace needs: database queries (with
cursor pagination), page reads, search and page writes. Reads and writes have
separate timeouts. Failures are raised as NotionClientError and never retried.
"""

import logging
import os
from collections.abc import Iterator
from typing import Any

import requests

from src.notion.exceptions import NotionClientError
from src.notion.models import NotionPage

logger = logging.getLogger(__name__)

READ_TIMEOUT = 15.0
WRITE_TIMEOUT = 10.0

NOTION_VERSION = "2022-06-28"

# The query and search endpoints reject anything larger
MAX_PAGE_SIZE = 100


class NotionClient:
    """Thin wrapper over the Notion API with bounded timeouts."""

    BASE_URL = "https://api.notion.com/v1"

    def __init__(
        self,
        *,
        token: str | None = None,
        read_timeout: float = READ_TIMEOUT,
        write_timeout: float = WRITE_TIMEOUT,
    ) -> None:
        """Initialise the client.

        :param token: Integration token. Falls back to NOTION_TOKEN.
        :param read_timeout: Seconds allowed for queries, page reads and search.
        :param write_timeout: Seconds allowed for creating and updating pages.
        :raises ValueError: If no token is given or found in the environment.
        """
        self._token = token or os.environ.get("NOTION_TOKEN")
        if not self._token:
            raise ValueError("No Notion token: pass token= or set NOTION_TOKEN.")

        self._read_timeout = read_timeout
        self._write_timeout = write_timeout

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
            "Notion-Version": NOTION_VERSION,
        }

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        payload: dict[str, Any] | None = None,
        timeout: float,
    ) -> dict[str, Any]:
        """Send one request and decode the JSON body.

        :param method: HTTP method.
        :param endpoint: Path relative to BASE_URL.
        :param payload: JSON body, if any.
        :param timeout: Seconds before the call is abandoned.
        :returns: Decoded response body.
        :raises NotionClientError: On timeout, transport failure or non-2xx status.
        """
        logger.debug(f"Notion request: method={method}, endpoint={endpoint}")
        try:
            response = requests.request(
                method,
                f"{self.BASE_URL}/{endpoint}",
                headers=self._headers,
                json=payload,
                timeout=timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout as e:
            raise NotionClientError(
                f"Notion request timed out after {timeout}s: {method} {endpoint}"
            ) from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code
            raise NotionClientError(
                f"Notion API error: {status} - {self._error_message(e.response)}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise NotionClientError(f"Notion request failed: {method} {endpoint}: {e}") from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Pull the "message" field out of an error body, else the raw text."""
        try:
            data = response.json()
        except ValueError:
            return response.text
        if isinstance(data, dict):
            return data.get("message", response.text)
        return response.text

    # Databases

    def query_database(
        self,
        database_id: str,
        *,
        filter_: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        start_cursor: str | None = None,
        page_size: int = MAX_PAGE_SIZE,
    ) -> dict[str, Any]:
        """Fetch one page of query results.

        :param database_id: Database to query.
        :param filter_: Notion filter object.
        :param sorts: Notion sort objects.
        :param start_cursor: Cursor returned by the previous page.
        :param page_size: Results per page, capped at MAX_PAGE_SIZE.
        :returns: Raw response with results, has_more and next_cursor.
        :raises NotionClientError: If the request fails.
        """
        payload: dict[str, Any] = {"page_size": min(page_size, MAX_PAGE_SIZE)}
        optional = {"filter": filter_, "sorts": sorts, "start_cursor": start_cursor}
        payload.update({key: value for key, value in optional.items() if value is not None})

        return self._request(
            "POST",
            f"databases/{database_id}/query",
            payload=payload,
            timeout=self._read_timeout,
        )

    def iter_query(
        self,
        database_id: str,
        *,
        filter_: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        page_size: int = MAX_PAGE_SIZE,
    ) -> Iterator[NotionPage]:
        """Yield every matching page, following cursors until Notion runs out.

        A response claiming more results without a cursor ends the iteration.

        :raises NotionClientError: If any page request fails.
        """
        cursor: str | None = None
        while True:
            response = self.query_database(
                database_id,
                filter_=filter_,
                sorts=sorts,
                start_cursor=cursor,
                page_size=page_size,
            )
            yield from response.get("results", [])

            cursor = response.get("next_cursor")
            if not response.get("has_more", False) or cursor is None:
                return

    def query_filtered(
        self,
        database_id: str,
        *,
        filter_: dict[str, Any] | None = None,
        sorts: list[dict[str, Any]] | None = None,
        page_size: int = MAX_PAGE_SIZE,
    ) -> list[NotionPage]:
        """Collect every page matching a server-side filter, in Notion's order.

        :param database_id: Database to query.
        :param filter_: Notion filter object.
        :param sorts: Notion sort objects.
        :param page_size: Results per request, capped at MAX_PAGE_SIZE.
        :returns: All matching pages.
        :raises NotionClientError: If any request fails. Partial results are discarded.
        """
        pages = list(
            self.iter_query(database_id, filter_=filter_, sorts=sorts, page_size=page_size)
        )
        logger.info(f"Queried database: database_id={database_id}, pages={len(pages)}")
        return pages

    def query_all(self, database_id: str, *, page_size: int = MAX_PAGE_SIZE) -> list[NotionPage]:
        """Collect every page of a database, unfiltered."""
        return self.query_filtered(database_id, page_size=page_size)

    # Pages

    def get_page(self, page_id: str) -> NotionPage:
        """Read a single page by ID."""
        return self._request("GET", f"pages/{page_id}", timeout=self._read_timeout)

    def search(self, query: str, limit: int = 7) -> list[NotionPage]:
        """Search page titles across the workspace.

        :param query: Search text.
        :param limit: Most results to return, capped at MAX_PAGE_SIZE.
        :returns: Pages in Notion's relevance order.
        :raises NotionClientError: If the request fails.
        """
        payload = {
            "query": query,
            "page_size": min(limit, MAX_PAGE_SIZE),
            "filter": {"property": "object", "value": "page"},
        }
        response = self._request("POST", "search", payload=payload, timeout=self._read_timeout)
        return response.get("results", [])

    def create_page(self, database_id: str, properties: dict[str, Any]) -> NotionPage:
        """Create a page under a database.

        :param database_id: Parent database.
        :param properties: Property payload, see src.notion.builders.
        :returns: The created page.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Creating page: database_id={database_id}")
        payload = {"parent": {"database_id": database_id}, "properties": properties}
        return self._request("POST", "pages", payload=payload, timeout=self._write_timeout)

    def update_page(self, page_id: str, properties: dict[str, Any]) -> NotionPage:
        """Patch a page's properties.

        :param page_id: Page to update.
        :param properties: Property payload, see src.notion.builders.
        :returns: The updated page.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Updating page: page_id={page_id}")
        return self._request(
            "PATCH",
            f"pages/{page_id}",
            payload={"properties": properties},
            timeout=self._write_timeout,
        )
