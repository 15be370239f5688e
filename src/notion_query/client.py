"""Notion Query Client - Rate-limited wrapper around Notion API."""

import logging
import time
from typing import Any

from notion_client import Client
from notion_client.errors import APIResponseError, HTTPResponseError

from notion_query.utils import get_notion_api_version, get_notion_token

logger = logging.getLogger(__name__)

# Rate limiting: max 3 requests/second
MIN_REQUEST_INTERVAL = 0.35
MAX_RETRIES = 5


class RateLimitedNotionClient:
    """Wrapper around Notion client with rate limiting and exponential backoff.

    Implements rate limiting (min 0.35s between requests) and automatic retry
    with exponential backoff on 429 (rate limit) and 5xx gateway errors.

    Attributes:
        notion: The underlying notion_client.Client instance.
        request_count: Total number of API requests made.
    """

    def __init__(self, notion: Client):
        """Initialize the rate-limited client.

        Args:
            notion: A configured notion_client.Client instance.
        """
        self.notion = notion
        self._last_request_time: float = 0
        self.request_count: int = 0

    def _wait_for_rate_limit(self) -> None:
        """Wait if needed to respect rate limit."""
        elapsed = time.time() - self._last_request_time
        if elapsed < MIN_REQUEST_INTERVAL:
            time.sleep(MIN_REQUEST_INTERVAL - elapsed)
        self._last_request_time = time.time()
        self.request_count += 1

    def _handle_rate_limit_error(self, e: APIResponseError | HTTPResponseError, attempt: int) -> bool:
        """Handle API errors with exponential backoff (429, 502, 503, 504).

        Args:
            e: The API response error (APIResponseError or HTTPResponseError).
            attempt: Current retry attempt number (0-indexed).

        Returns:
            True if should retry, False if should give up.
        """
        retryable_statuses = {429, 502, 503, 504}
        if e.status not in retryable_statuses:
            return False
        if attempt >= MAX_RETRIES - 1:
            logger.error(f"Max retry attempts reached after {e.status} errors")
            return False
        wait_time = 2 ** attempt
        logger.warning(f"API error {e.status}, waiting {wait_time}s before retry (attempt {attempt + 1}/{MAX_RETRIES})...")
        time.sleep(wait_time)
        return True

    def get_page(self, page_id: str) -> dict[str, Any]:
        """Get a page object including its properties.

        Args:
            page_id: The Notion page ID.

        Returns:
            Page object from Notion API.

        Raises:
            APIResponseError: On API errors after retries exhausted.
        """
        for attempt in range(MAX_RETRIES):
            self._wait_for_rate_limit()
            try:
                return self.notion.pages.retrieve(page_id=page_id)
            except (APIResponseError, HTTPResponseError) as e:
                if self._handle_rate_limit_error(e, attempt):
                    continue
                raise
        raise Exception(f"Failed to get page {page_id} after {MAX_RETRIES} retries")

    def retrieve_data_source(self, data_source_id: str) -> dict[str, Any]:
        """Get a data source object (schema and metadata).

        Args:
            data_source_id: The Notion data source ID.

        Returns:
            Data source object from Notion API.

        Raises:
            APIResponseError: On API errors after retries exhausted.
        """
        for attempt in range(MAX_RETRIES):
            self._wait_for_rate_limit()
            try:
                return self.notion.request(
                    path=f"data_sources/{data_source_id}",
                    method="GET",
                )
            except (APIResponseError, HTTPResponseError) as e:
                if self._handle_rate_limit_error(e, attempt):
                    continue
                raise
        raise Exception(f"Failed to get data source {data_source_id} after {MAX_RETRIES} retries")

    def query_data_source(self, data_source_id: str, body: dict[str, Any]) -> dict[str, Any]:
        """Query one page of results from a data source.

        Args:
            data_source_id: The Notion data source ID.
            body: Query payload (filter, sorts, start_cursor, page_size).

        Returns:
            List response with results, next_cursor and has_more.

        Raises:
            APIResponseError: On API errors after retries exhausted.
        """
        for attempt in range(MAX_RETRIES):
            self._wait_for_rate_limit()
            try:
                return self.notion.request(
                    path=f"data_sources/{data_source_id}/query",
                    method="POST",
                    body=body,
                )
            except (APIResponseError, HTTPResponseError) as e:
                if self._handle_rate_limit_error(e, attempt):
                    continue
                raise
        raise Exception(f"Failed to query data source {data_source_id} after {MAX_RETRIES} retries")


def get_notion_client() -> RateLimitedNotionClient:
    """Factory function to create a configured RateLimitedNotionClient.

    Reads NOTION_API_TOKEN (and optionally NOTION_API_VERSION) from the
    environment and creates a rate-limited client ready for use.

    Returns:
        A configured RateLimitedNotionClient instance.

    Raises:
        ValueError: If NOTION_API_TOKEN environment variable is not set.
    """
    token = get_notion_token()
    notion = Client(auth=token, notion_version=get_notion_api_version())
    return RateLimitedNotionClient(notion)
