"""Tests for notion_query.query module."""

import pytest

from notion_query.exceptions import ConflictingFilterSpecification, InvalidFilterDefinition
from notion_query.filters import FilterGroup, checkbox_filter, select_filter
from notion_query.query import DataSourceQuery
from notion_query.sorting import Sorting


class FakeClient:
    """Records query_data_source calls and returns a canned response."""

    def __init__(self, response=None):
        self.calls = []
        self.response = response or {"object": "list", "results": [], "next_cursor": None, "has_more": False}

    def query_data_source(self, data_source_id, body):
        self.calls.append((data_source_id, body))
        return self.response


class TestBuild:
    """Tests for DataSourceQuery.build."""

    def test_empty_query_is_empty_dict(self):
        """No settings produce an empty object, never a list."""
        body = DataSourceQuery("ds").build()
        assert body == {}
        assert isinstance(body, dict)

    def test_key_order(self):
        """Keys appear as sorts, filter, start_cursor, page_size."""
        body = (
            DataSourceQuery("ds")
            .page_size(10)
            .start_at("cursor-1")
            .filter_by(select_filter("Status", "equals", "Done"))
            .sort(Sorting.property_sort("Due"))
            .build()
        )
        assert list(body) == ["sorts", "filter", "start_cursor", "page_size"]

    def test_single_filter_emitted_as_is(self):
        body = DataSourceQuery("ds").filter_by(select_filter("Status", "is_empty")).build()
        assert body == {"filter": {"property": "Status", "select": {"is_empty": True}}}

    def test_filter_group(self):
        group = FilterGroup.or_(
            select_filter("Status", "equals", "Done"),
            checkbox_filter("Archived", "equals", True),
        )
        body = DataSourceQuery("ds").filter_by(group).build()
        assert body["filter"] == group.to_query()

    def test_filter_list_combined_with_and(self):
        filters = [
            select_filter("Status", "equals", "Done"),
            checkbox_filter("Archived", "equals", False),
        ]
        body = DataSourceQuery("ds").filter_by(filters).build()
        assert body["filter"] == {"and": [f.to_query() for f in filters]}

    def test_conflicting_filters(self):
        """Single filter plus filter group fails at build time."""
        query = (
            DataSourceQuery("ds")
            .filter_by(select_filter("Status", "is_empty"))
            .filter_by(FilterGroup.and_(select_filter("Status", "is_not_empty")))
        )
        with pytest.raises(ConflictingFilterSpecification):
            query.build()

    def test_unsupported_filter_type(self):
        with pytest.raises(InvalidFilterDefinition):
            DataSourceQuery("ds").filter_by({"property": "Status"})

    def test_default_page_size_omitted(self):
        assert "page_size" not in DataSourceQuery("ds").page_size(100).build()

    def test_page_size_included(self):
        assert DataSourceQuery("ds").page_size(50).build() == {"page_size": 50}

    @pytest.mark.parametrize("value", [0, 101, -5, True, "50"])
    def test_invalid_page_size(self, value):
        with pytest.raises(ValueError):
            DataSourceQuery("ds").page_size(value)

    def test_sorts_in_call_order(self):
        body = (
            DataSourceQuery("ds")
            .sort(Sorting.property_sort("B", "descending"))
            .sort(Sorting.property_sort("A"))
            .build()
        )
        assert body["sorts"] == [
            {"property": "B", "direction": "descending"},
            {"property": "A", "direction": "ascending"},
        ]

    def test_start_cursor(self):
        assert DataSourceQuery("ds").start_at("abc").build() == {"start_cursor": "abc"}


class TestQuery:
    """Tests for DataSourceQuery.query."""

    def test_posts_built_body(self):
        client = FakeClient()
        query = DataSourceQuery("ds-1", client).filter_by(select_filter("Status", "is_empty"))
        response = query.query()

        assert response == client.response
        assert client.calls == [("ds-1", query.build())]

    def test_without_client(self):
        with pytest.raises(ValueError, match="client"):
            DataSourceQuery("ds").query()
