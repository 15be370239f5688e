"""Filter conditions and compound filter groups for data source queries.

A `Filter` is one condition on one property. Factory functions validate the
comparison operator against the operator table before anything is sent to
the API. A `FilterGroup` composes filters and nested groups under `and` /
`or`.

See https://developers.notion.com/reference/filter-data-source-entries
"""

import copy
import logging
import math
from numbers import Real
from typing import Any

from notion_query.exceptions import (
    InvalidFilterDefinition,
    InvalidFilterValue,
    InvalidOperator,
    NotNumeric,
)
from notion_query.operators import (
    AND,
    OR,
    PRESENCE_OPERATORS,
    RELATIVE_DATE_OPERATORS,
    STATUS,
    is_valid,
    valid_operators,
)

logger = logging.getLogger(__name__)

VERIFICATION_STATUSES = ("verified", "expired", "none")

# Root group plus two nested levels
MAX_NESTING_DEPTH = 3


class Filter:
    """A single property condition.

    Exactly one of (filter_type + conditions) or definition is set. The
    latter is the escape hatch produced by `raw_filter`.

    Attributes:
        property: Name or ID of the filtered property.
        filter_type: Condition key (e.g. "select", "rich_text").
        conditions: Mapping of operator to value.
        definition: Raw condition body merged next to "property".
    """

    def __init__(
        self,
        property: str,
        filter_type: str | None = None,
        conditions: dict[str, Any] | None = None,
        definition: dict[str, Any] | None = None,
    ):
        if not isinstance(property, str) or not property:
            raise InvalidFilterDefinition(
                "Filter property must be a non-empty string", property=property
            )
        self.property = property
        self.filter_type = filter_type
        self.conditions = conditions
        self.definition = definition
        self._check_definition()
        self._check_conditions()

    def _check_definition(self) -> None:
        typed = self.filter_type is not None and self.conditions is not None
        partial = (self.filter_type is None) != (self.conditions is None)
        raw = self.definition is not None
        if partial or typed == raw:
            raise InvalidFilterDefinition(
                f"Invalid filter definition for property '{self.property}': "
                "set either filter_type and conditions, or a raw definition",
                property=self.property,
            )

    def _check_conditions(self) -> None:
        """Validate every condition key against the operator table.

        Raises:
            InvalidFilterDefinition: If conditions is not a mapping.
            UnknownPropertyType: If filter_type has no operator table row.
            InvalidOperator: If a key is not legal for filter_type.
        """
        if self.definition is not None:
            return
        if not isinstance(self.conditions, dict):
            raise InvalidFilterDefinition(
                f"Conditions for property '{self.property}' must be a dict",
                property=self.property,
            )
        for operator in self.conditions:
            if not is_valid(self.filter_type, operator):
                raise InvalidOperator(operator, self.filter_type, self.property)

    def to_query(self) -> dict[str, Any]:
        """Serialize to a filter condition object.

        Returns:
            {"property": ..., <filter_type>: conditions} or, for raw
            filters, {"property": ..., **definition}.

        Raises:
            InvalidFilterDefinition: If both or neither forms are set.
        """
        self._check_definition()
        if self.definition is not None:
            return {"property": self.property, **copy.deepcopy(self.definition)}
        return {
            "property": self.property,
            self.filter_type: copy.deepcopy(self.conditions),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Filter):
            return NotImplemented
        return (
            self.property == other.property
            and self.filter_type == other.filter_type
            and self.conditions == other.conditions
            and self.definition == other.definition
        )

    def __repr__(self) -> str:
        if self.definition is not None:
            return f"Filter({self.property!r}, definition={self.definition!r})"
        return f"Filter({self.property!r}, {self.filter_type!r}, {self.conditions!r})"


def _check_operator(property: str, property_type: str, operator: str) -> None:
    if operator not in valid_operators(property_type):
        raise InvalidOperator(operator, property_type, property)


def _condition(operator: str, value: Any) -> dict[str, Any]:
    """Build the operator -> value mapping, applying the API's sentinels."""
    if operator in RELATIVE_DATE_OPERATORS:
        return {operator: {}}
    if operator in PRESENCE_OPERATORS:
        return {operator: True}
    return {operator: value}


def _typed_filter(
    property: str,
    property_type: str,
    operator: str,
    value: Any,
    filter_type: str | None = None,
) -> Filter:
    _check_operator(property, property_type, operator)
    key = filter_type or property_type
    logger.debug(f"Built {key} filter on '{property}' ({operator})")
    return Filter(property, key, _condition(operator, value))


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def text_filter(property: str, operator: str, value: str | None = None) -> Filter:
    """Create a text filter.

    Text properties are filtered with the "rich_text" condition key.

    Args:
        property: Property name.
        operator: One of the text operators (equals, contains, starts_with, ...).
        value: String to compare; ignored for is_empty / is_not_empty.

    Raises:
        InvalidOperator: If the operator is not a text operator.
    """
    return _typed_filter(property, "text", operator, value, filter_type="rich_text")


def title_filter(property: str, operator: str, value: str | None = None) -> Filter:
    """Create a filter on a title property."""
    return _typed_filter(property, "title", operator, value)


def number_filter(property: str, operator: str, number: float | int | None = None) -> Filter:
    """Create a number filter.

    Args:
        property: Property name.
        operator: One of equals, does_not_equal, greater_than, less_than,
            greater_than_or_equal_to, less_than_or_equal_to, is_empty,
            is_not_empty.
        number: Finite int or float; ignored for presence operators.

    Raises:
        InvalidOperator: If the operator is not a number operator.
        NotNumeric: If number is not a finite int or float.
    """
    _check_operator(property, "number", operator)
    if operator not in PRESENCE_OPERATORS and not _is_finite_number(number):
        raise NotNumeric(property, number)
    return _typed_filter(property, "number", operator, number)


def checkbox_filter(property: str, operator: str, value: bool) -> Filter:
    """Create a checkbox filter (equals, does_not_equal)."""
    return _typed_filter(property, "checkbox", operator, value)


def date_filter(property: str, operator: str, value: str | None = None) -> Filter:
    """Create a date filter.

    Relative ranges (next_week, past_month, this_week, ...) are sent with
    an empty object; presence operators with `true`. Any value passed for
    them is dropped.

    Args:
        property: Property name.
        operator: Date operator.
        value: ISO 8601 date or datetime for comparison operators.
    """
    return _typed_filter(property, "date", operator, value)


def files_filter(property: str, operator: str) -> Filter:
    """Create a files filter (is_empty, is_not_empty)."""
    return _typed_filter(property, "files", operator, True)


def multi_select_filter(property: str, operator: str, value: str | None = None) -> Filter:
    """Create a multi_select filter (contains, does_not_contain, is_empty, is_not_empty)."""
    return _typed_filter(property, "multi_select", operator, value)


def select_filter(property: str, operator: str, value: str | None = None) -> Filter:
    """Create a select filter (equals, does_not_equal, is_empty, is_not_empty)."""
    return _typed_filter(property, "select", operator, value)


def status_filter(property: str, operator: str, value: str | None = None) -> Filter:
    """Create a status filter (equals, does_not_equal, is_empty, is_not_empty)."""
    return _typed_filter(property, "status", operator, value)


def people_filter(property: str, operator: str, value: str | None = None) -> Filter:
    """Create a people filter.

    Also used for created_by and last_edited_by properties. The value is
    a user UUID.
    """
    return _typed_filter(property, "people", operator, value)


def relation_filter(property: str, operator: str, value: str | None = None) -> Filter:
    """Create a relation filter; value is a page UUID."""
    return _typed_filter(property, "relation", operator, value)


def phone_number_filter(property: str, operator: str, value: str | None = None) -> Filter:
    return _typed_filter(property, "phone_number", operator, value)


def email_filter(property: str, operator: str, value: str | None = None) -> Filter:
    return _typed_filter(property, "email", operator, value)


def url_filter(property: str, operator: str, value: str | None = None) -> Filter:
    return _typed_filter(property, "url", operator, value)


def unique_id_filter(property: str, operator: str, value: int) -> Filter:
    """Create a unique_id filter.

    Raises:
        InvalidOperator: If the operator is not a unique_id operator.
        NotNumeric: If value is not an int.
    """
    _check_operator(property, "unique_id", operator)
    if isinstance(value, bool) or not isinstance(value, int):
        raise NotNumeric(property, value)
    return _typed_filter(property, "unique_id", operator, value)


def verification_filter(property: str, status: str) -> Filter:
    """Create a verification filter.

    Args:
        property: Property name.
        status: One of verified, expired, none.

    Raises:
        InvalidFilterValue: If status is not a known verification status.
    """
    if status not in VERIFICATION_STATUSES:
        raise InvalidFilterValue(property, status, VERIFICATION_STATUSES)
    return _typed_filter(property, "verification", STATUS, status)


def raw_filter(property: str, definition: dict[str, Any]) -> Filter:
    """Create a filter from a raw condition body.

    Use for conditions not covered by a typed factory, e.g.
    raw_filter("Total", {"formula": {"number": {"greater_than": 3}}}).
    Nothing is validated.
    """
    return Filter(property, definition=definition)


class FilterGroup:
    """Compound filter: an ordered `and` / `or` over filters and groups.

    Children are copied on insert, so later changes to a filter or group
    do not leak into groups it was added to.

    Example:
        >>> group = FilterGroup.or_(
        ...     select_filter("Status", "equals", "Done"),
        ...     FilterGroup.and_(
        ...         checkbox_filter("Archived", "equals", False),
        ...         date_filter("Due", "past_week"),
        ...     ),
        ... )
        >>> group.to_query()
        {'or': [{'property': 'Status', ...}, {'and': [...]}]}
    """

    def __init__(self, operator: str = AND, children: list["Filter | FilterGroup"] | None = None):
        if operator not in (AND, OR):
            raise InvalidFilterDefinition(
                f"Filter group operator must be 'and' or 'or', got '{operator}'",
                operator=operator,
            )
        self.operator = operator
        self._children: list[Filter | FilterGroup] = []
        for child in children or []:
            self.add(child)

    @classmethod
    def and_(cls, *children: "Filter | FilterGroup") -> "FilterGroup":
        return cls(AND, list(children))

    @classmethod
    def or_(cls, *children: "Filter | FilterGroup") -> "FilterGroup":
        return cls(OR, list(children))

    @property
    def children(self) -> list["Filter | FilterGroup"]:
        return list(self._children)

    def depth(self) -> int:
        """Number of group levels, counting this one."""
        nested = [c.depth() for c in self._children if isinstance(c, FilterGroup)]
        return 1 + max(nested, default=0)

    def add(self, child: "Filter | FilterGroup") -> "FilterGroup":
        """Append a filter or nested group.

        Raises:
            InvalidFilterDefinition: On unsupported child types or when
                nesting would exceed the API limit.
        """
        if isinstance(child, FilterGroup):
            if 1 + child.depth() > MAX_NESTING_DEPTH:
                raise InvalidFilterDefinition(
                    f"Compound filters can be nested at most {MAX_NESTING_DEPTH - 1} levels below the root",
                    depth=1 + child.depth(),
                )
        elif not isinstance(child, Filter):
            raise InvalidFilterDefinition(
                f"Cannot add {type(child).__name__} to a filter group",
                child=child,
            )
        self._children.append(copy.deepcopy(child))
        return self

    def add_filter(self, filter: Filter) -> "FilterGroup":
        return self.add(filter)

    def add_filter_group(self, group: "FilterGroup") -> "FilterGroup":
        return self.add(group)

    def to_query(self) -> dict[str, list[dict[str, Any]]]:
        """Serialize recursively, preserving child order."""
        return {self.operator: [child.to_query() for child in self._children]}

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"FilterGroup({self.operator!r}, {self._children!r})"


__all__ = [
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
]
