"""Custom exceptions for the Notion API client."""


class NotionClientError(Exception):
    """Raised when a Notion API request fails.

    Covers timeouts, connection failures and non-success HTTP responses. The
    client never retries, so callers decide whether to try again.
    """

    pass
