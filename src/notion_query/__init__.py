"""Notion Query Library - Filter/sort query builder and rich text decoding.

Module structure:
- operators: Comparison operators allowed per property type
- filters: Property filters and compound filter groups
- sorting: Property and timestamp sorts
- query: Data source query builder
- rich_text: Rich text items, mentions, annotations
- properties: Typed page property values
- client: Rate-limited API wrapper
- exceptions: Query construction errors
- utils: Token, API version and URL utilities
"""

# Operators
from notion_query.operators import OPERATOR_TABLE, valid_operators, is_valid

# Filters
from notion_query.filters import (
    Filter,
    FilterGroup,
    text_filter,
    title_filter,
    number_filter,
    checkbox_filter,
    date_filter,
    files_filter,
    multi_select_filter,
    select_filter,
    status_filter,
    people_filter,
    relation_filter,
    phone_number_filter,
    email_filter,
    url_filter,
    unique_id_filter,
    verification_filter,
    raw_filter,
)

# Sorting
from notion_query.sorting import ASCENDING, DESCENDING, Sorting, sort_query

# Query
from notion_query.query import DataSourceQuery

# Rich text
from notion_query.rich_text import (
    Annotation,
    Mention,
    RichText,
    RichTextItem,
)

# Properties
from notion_query.properties import decode_properties, decode_property

# Client
from notion_query.client import get_notion_client, RateLimitedNotionClient

# Exceptions
from notion_query.exceptions import (
    NotionQueryError,
    UnknownPropertyType,
    InvalidOperator,
    NotNumeric,
    InvalidFilterValue,
    InvalidFilterDefinition,
    ConflictingFilterSpecification,
    InvalidSortDefinition,
    ReadOnlyProperty,
)

# Utils
from notion_query.utils import get_notion_token, extract_page_id, extract_page_title

__all__ = [
    # Operators
    "OPERATOR_TABLE",
    "valid_operators",
    "is_valid",
    # Filters
    "Filter",
    "FilterGroup",
    "text_filter",
    "title_filter",
    "number_filter",
    "checkbox_filter",
    "date_filter",
    "files_filter",
    "multi_select_filter",
    "select_filter",
    "status_filter",
    "people_filter",
    "relation_filter",
    "phone_number_filter",
    "email_filter",
    "url_filter",
    "unique_id_filter",
    "verification_filter",
    "raw_filter",
    # Sorting
    "ASCENDING",
    "DESCENDING",
    "Sorting",
    "sort_query",
    # Query
    "DataSourceQuery",
    # Rich text
    "Annotation",
    "Mention",
    "RichText",
    "RichTextItem",
    # Properties
    "decode_properties",
    "decode_property",
    # Client
    "get_notion_client",
    "RateLimitedNotionClient",
    # Exceptions
    "NotionQueryError",
    "UnknownPropertyType",
    "InvalidOperator",
    "NotNumeric",
    "InvalidFilterValue",
    "InvalidFilterDefinition",
    "ConflictingFilterSpecification",
    "InvalidSortDefinition",
    "ReadOnlyProperty",
    # Utils
    "get_notion_token",
    "extract_page_id",
    "extract_page_title",
]
