"""Shared pytest fixtures: raw rich text JSON and live-test setup."""

import os
import logging
import pytest
from dotenv import load_dotenv

# Load .env file
load_dotenv()

logger = logging.getLogger(__name__)


def _annotations(**overrides) -> dict:
    annotations = {
        "bold": False,
        "italic": False,
        "strikethrough": False,
        "underline": False,
        "code": False,
        "color": "default",
    }
    annotations.update(overrides)
    return annotations


@pytest.fixture
def make_text_item():
    """Factory for raw text items as returned by the API."""

    def _make(content: str, href: str | None = None, **annotations) -> dict:
        return {
            "type": "text",
            "text": {
                "content": content,
                "link": None if href is None else {"url": href},
            },
            "annotations": _annotations(**annotations),
            "plain_text": content,
            "href": href,
        }

    return _make


@pytest.fixture
def make_mention_item():
    """Factory for raw mention items; payload is the mention object."""

    def _make(mention: dict, plain_text: str, href: str | None = None) -> dict:
        return {
            "type": "mention",
            "mention": mention,
            "annotations": _annotations(),
            "plain_text": plain_text,
            "href": href,
        }

    return _make


@pytest.fixture
def user_mention_item(make_mention_item):
    return make_mention_item(
        {
            "type": "user",
            "user": {"object": "user", "id": "b2e19928-b427-4aad-9a9d-fde65479b1d9"},
        },
        "@Anonymous",
    )


@pytest.fixture
def date_mention_item(make_mention_item):
    return make_mention_item(
        {
            "type": "date",
            "date": {"start": "2024-03-01", "end": "2024-03-05", "time_zone": None},
        },
        "March 1, 2024 → March 5, 2024",
    )


@pytest.fixture
def equation_item():
    return {
        "type": "equation",
        "equation": {"expression": "E = mc^2"},
        "annotations": _annotations(),
        "plain_text": "E = mc^2",
        "href": None,
    }


@pytest.fixture
def mixed_rich_text_raw(make_text_item, user_mention_item, date_mention_item, equation_item):
    """text, mention(user), mention(date), equation, text (linked, italic)."""
    return [
        make_text_item("Ping "),
        user_mention_item,
        date_mention_item,
        equation_item,
        make_text_item(" docs", href="https://example.com/docs", italic=True),
    ]


@pytest.fixture(scope="session")
def live_client():
    """Rate-limited client for live tests; skips without credentials."""
    if not os.getenv("NOTION_API_TOKEN"):
        pytest.skip("NOTION_API_TOKEN not set - skipping live tests")

    from notion_query import get_notion_client

    return get_notion_client()


@pytest.fixture(scope="session")
def data_source_id():
    """Data source used by live tests (TEST_DATA_SOURCE_ID)."""
    value = os.getenv("TEST_DATA_SOURCE_ID")
    if not value:
        pytest.skip("TEST_DATA_SOURCE_ID not set - skipping live tests")
    logger.info(f"Using data source {value} for live tests")
    return value
