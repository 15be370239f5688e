"""Comparison operators allowed per Notion property type.

The table mirrors the filter condition objects documented at
https://developers.notion.com/reference/filter-data-source-entries
"""

from types import MappingProxyType

from notion_query.exceptions import UnknownPropertyType

EQUALS = "equals"
DOES_NOT_EQUAL = "does_not_equal"
CONTAINS = "contains"
DOES_NOT_CONTAIN = "does_not_contain"
STARTS_WITH = "starts_with"
ENDS_WITH = "ends_with"
IS_EMPTY = "is_empty"
IS_NOT_EMPTY = "is_not_empty"
GREATER_THAN = "greater_than"
LESS_THAN = "less_than"
GREATER_THAN_OR_EQUAL_TO = "greater_than_or_equal_to"
LESS_THAN_OR_EQUAL_TO = "less_than_or_equal_to"
BEFORE = "before"
AFTER = "after"
ON_OR_BEFORE = "on_or_before"
ON_OR_AFTER = "on_or_after"
PAST_WEEK = "past_week"
PAST_MONTH = "past_month"
PAST_YEAR = "past_year"
NEXT_WEEK = "next_week"
NEXT_MONTH = "next_month"
NEXT_YEAR = "next_year"
THIS_WEEK = "this_week"
STATUS = "status"

AND = "and"
OR = "or"

# Operators that test emptiness; the API expects `true` as their value
PRESENCE_OPERATORS = frozenset([IS_EMPTY, IS_NOT_EMPTY])

# Relative date ranges; the API expects an empty object as their value
RELATIVE_DATE_OPERATORS = frozenset([
    PAST_WEEK, PAST_MONTH, PAST_YEAR, NEXT_WEEK, NEXT_MONTH, NEXT_YEAR, THIS_WEEK
])

_TEXT = (
    EQUALS,
    DOES_NOT_EQUAL,
    CONTAINS,
    DOES_NOT_CONTAIN,
    STARTS_WITH,
    ENDS_WITH,
    IS_EMPTY,
    IS_NOT_EMPTY,
)

_NUMERIC = (
    EQUALS,
    DOES_NOT_EQUAL,
    GREATER_THAN,
    LESS_THAN,
    GREATER_THAN_OR_EQUAL_TO,
    LESS_THAN_OR_EQUAL_TO,
)

_LIST = (CONTAINS, DOES_NOT_CONTAIN, IS_EMPTY, IS_NOT_EMPTY)

_OPTION = (EQUALS, DOES_NOT_EQUAL, IS_EMPTY, IS_NOT_EMPTY)

OPERATOR_TABLE: MappingProxyType = MappingProxyType({
    "text": _TEXT,
    "rich_text": _TEXT,
    "title": _TEXT,
    "number": _NUMERIC + (IS_EMPTY, IS_NOT_EMPTY),
    "checkbox": (EQUALS, DOES_NOT_EQUAL),
    "date": (
        AFTER,
        BEFORE,
        EQUALS,
        ON_OR_BEFORE,
        ON_OR_AFTER,
        NEXT_WEEK,
        NEXT_MONTH,
        NEXT_YEAR,
        PAST_WEEK,
        PAST_MONTH,
        PAST_YEAR,
        THIS_WEEK,
        IS_EMPTY,
        IS_NOT_EMPTY,
    ),
    "files": (IS_EMPTY, IS_NOT_EMPTY),
    "multi_select": _LIST,
    "select": _OPTION,
    "status": _OPTION,
    "people": _LIST,
    "relation": _LIST,
    "phone_number": _TEXT,
    "email": _TEXT,
    "url": _TEXT,
    "unique_id": _NUMERIC,
    "verification": (STATUS,),
})


def valid_operators(property_type: str) -> tuple[str, ...]:
    """Return the ordered operators legal for a property type.

    Args:
        property_type: Property type tag (e.g. "select", "date").

    Returns:
        Tuple of operator tags in documentation order.

    Raises:
        UnknownPropertyType: If the tag is not in the table.
    """
    try:
        return OPERATOR_TABLE[property_type]
    except KeyError:
        raise UnknownPropertyType(property_type) from None


def is_valid(property_type: str, operator: str) -> bool:
    """Check whether an operator is legal for a property type."""
    return operator in valid_operators(property_type)


__all__ = [
    "OPERATOR_TABLE",
    "PRESENCE_OPERATORS",
    "RELATIVE_DATE_OPERATORS",
    "valid_operators",
    "is_valid",
]
