"""Notion Query Utilities - Configuration and ID helpers."""

import os
import re
import logging
from pathlib import Path

from dotenv import load_dotenv

from notion_query.rich_text import RichText

logger = logging.getLogger(__name__)

# First API version exposing data sources
DEFAULT_NOTION_API_VERSION = "2025-09-03"

# Auto-load .env from project root
_env_loaded = False


def _ensure_env_loaded() -> None:
    """Load .env file if not already loaded."""
    global _env_loaded
    if _env_loaded:
        return

    # Find project root (look for .env going up from this file)
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        env_file = parent / ".env"
        if env_file.exists():
            load_dotenv(env_file)
            logger.debug(f"Loaded environment from {env_file}")
            break

    _env_loaded = True


def get_notion_token() -> str:
    """Get Notion API token from environment.

    Automatically loads .env file from project root if present.

    Returns:
        The NOTION_API_TOKEN environment variable value.

    Raises:
        ValueError: If NOTION_API_TOKEN is not set.
    """
    _ensure_env_loaded()

    token = os.environ.get("NOTION_API_TOKEN")
    if not token:
        raise ValueError(
            "NOTION_API_TOKEN environment variable not set.\n"
            "Get your token at: https://www.notion.so/my-integrations"
        )
    return token


def get_notion_api_version() -> str:
    """Get the Notion-Version header value (NOTION_API_VERSION or default)."""
    _ensure_env_loaded()
    return os.environ.get("NOTION_API_VERSION") or DEFAULT_NOTION_API_VERSION


def extract_page_title(page: dict) -> str:
    """Extract plain text title from a Notion page object.

    Args:
        page: Page object from Notion API (from client.get_page()).

    Returns:
        Plain text title of the page.

    Raises:
        ValueError: If title property is not found.
    """
    properties = page.get("properties", {})

    # Title property is usually "Name" or "title"
    for prop_data in properties.values():
        if prop_data.get("type") == "title":
            return RichText.from_raw(prop_data.get("title", [])).plain_text

    raise ValueError("Could not find title property in page")


def extract_page_id(url: str) -> str:
    """Extract page or data source ID from a Notion URL and format as UUID.

    Supports formats:
    - https://notion.so/workspace/Page-Title-abc123def456
    - https://notion.so/abc123def456
    - https://www.notion.so/workspace/abc123def456?v=...

    Args:
        url: A Notion page URL.

    Returns:
        32-character ID formatted as UUID with dashes.
        Example: "2d240e6d-8f97-8077-8b8d-fd8dae6ed382"

    Raises:
        ValueError: If ID cannot be extracted from URL.
    """
    # Remove query params
    url = url.split("?")[0]

    last_segment = url.rstrip("/").split("/")[-1]

    # Match at the END of the segment (titles can contain hex chars like "face")
    match = re.search(r"([a-f0-9]{32})$", last_segment.replace("-", ""))
    if match:
        raw_id = match.group(1)
        return f"{raw_id[:8]}-{raw_id[8:12]}-{raw_id[12:16]}-{raw_id[16:20]}-{raw_id[20:]}"

    raise ValueError(f"Could not extract page ID from URL: {url}")
