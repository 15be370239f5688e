"""Query builder for Notion data sources.

Collects a filter (single filter or filter group), sorts, a start cursor
and a page size, then assembles the request body for
POST /v1/data_sources/{data_source_id}/query.

The builder is mutable: chained calls modify and return the same instance.
Use one instance per query.
"""

import logging
from typing import TYPE_CHECKING, Any

from notion_query.exceptions import ConflictingFilterSpecification, InvalidFilterDefinition
from notion_query.filters import Filter, FilterGroup
from notion_query.operators import AND
from notion_query.sorting import Sorting, sort_query

if TYPE_CHECKING:
    from notion_query.client import RateLimitedNotionClient

logger = logging.getLogger(__name__)

# Server-side default; sending it explicitly is redundant
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 100


class DataSourceQuery:
    """Builds (and optionally runs) a data source query.

    Example:
        >>> query = (
        ...     DataSourceQuery("f1c2...")
        ...     .filter_by(select_filter("Status", "equals", "Done"))
        ...     .sort(Sorting.property_sort("Due", "descending"))
        ...     .page_size(25)
        ... )
        >>> query.build()
        {'sorts': [...], 'filter': {...}, 'page_size': 25}

    Attributes:
        data_source_id: Target data source ID.
        client: Transport used by query(); not needed for build().
    """

    def __init__(self, data_source_id: str, client: "RateLimitedNotionClient | None" = None):
        self.data_source_id = data_source_id
        self.client = client
        self._filter: Filter | None = None
        self._filter_group: FilterGroup | None = None
        self._sortings: list[Sorting] = []
        self._start_cursor: str | None = None
        self._page_size: int | None = None

    def filter_by(self, filter: "Filter | FilterGroup | list[Filter]") -> "DataSourceQuery":
        """Set the filter from a Filter, a FilterGroup or a list of filters.

        A list is combined with "and".
        """
        if isinstance(filter, list):
            return self.filter_by_group(FilterGroup(AND, filter))
        if isinstance(filter, FilterGroup):
            return self.filter_by_group(filter)
        if isinstance(filter, Filter):
            return self.filter_by_single_filter(filter)
        raise InvalidFilterDefinition(
            f"Cannot filter by {type(filter).__name__}",
            filter=filter,
        )

    def filter_by_single_filter(self, filter: Filter) -> "DataSourceQuery":
        self._filter = filter
        return self

    def filter_by_group(self, filter_group: FilterGroup) -> "DataSourceQuery":
        self._filter_group = filter_group
        return self

    def sort(self, sorting: Sorting) -> "DataSourceQuery":
        """Append a sort; earlier sorts take precedence."""
        self._sortings.append(sorting)
        return self

    def start_at(self, start_cursor: str | None) -> "DataSourceQuery":
        """Continue from a next_cursor returned by a previous query."""
        self._start_cursor = start_cursor
        return self

    def page_size(self, page_size: int) -> "DataSourceQuery":
        """Set the number of results per page (1-100).

        Raises:
            ValueError: If page_size is outside 1..100.
        """
        if isinstance(page_size, bool) or not isinstance(page_size, int):
            raise ValueError(f"Page size must be an integer, got {page_size!r}")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"Page size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}")
        self._page_size = page_size
        return self

    def build(self) -> dict[str, Any]:
        """Assemble the request body.

        Keys are added in order sorts, filter, start_cursor, page_size and
        only when set. page_size equal to the server default is omitted.
        The result is always a dict, possibly empty.

        Raises:
            ConflictingFilterSpecification: If both a single filter and a
                filter group are set.
        """
        body: dict[str, Any] = {}

        if self._sortings:
            body["sorts"] = sort_query(self._sortings)

        if self._filter is not None and self._filter_group is not None:
            raise ConflictingFilterSpecification(
                "Please provide either a filter group or a single filter, not both",
                filter=self._filter,
                filter_group=self._filter_group,
            )
        if self._filter is not None:
            body["filter"] = self._filter.to_query()
        elif self._filter_group is not None:
            body["filter"] = self._filter_group.to_query()

        if self._start_cursor is not None:
            body["start_cursor"] = self._start_cursor

        if self._page_size is not None and self._page_size != DEFAULT_PAGE_SIZE:
            body["page_size"] = self._page_size

        logger.debug(f"Built query for data source {self.data_source_id}: {sorted(body)}")
        return body

    def query(self) -> dict[str, Any]:
        """Run the query and return one page of results.

        Returns:
            Raw list response (results, next_cursor, has_more).

        Raises:
            ValueError: If the query has no client.
        """
        if self.client is None:
            raise ValueError("DataSourceQuery needs a client to run queries")
        body = self.build()
        response = self.client.query_data_source(self.data_source_id, body)
        logger.info(
            f"Queried data source {self.data_source_id}: "
            f"{len(response.get('results', []))} results, has_more={response.get('has_more', False)}"
        )
        return response
