"""Sort objects for data source queries.

See https://developers.notion.com/reference/sort-data-source-entries
"""

from typing import Any, Iterable

from notion_query.exceptions import InvalidSortDefinition

ASCENDING = "ascending"
DESCENDING = "descending"

DIRECTIONS = (ASCENDING, DESCENDING)
TIMESTAMPS = ("created_time", "last_edited_time")


class Sorting:
    """One sort criterion, on a property or on a page timestamp.

    Attributes:
        direction: "ascending" or "descending".
        property: Property name, or None for timestamp sorts.
        timestamp: "created_time" / "last_edited_time", or None.
    """

    def __init__(
        self,
        direction: str,
        property: str | None = None,
        timestamp: str | None = None,
    ):
        if direction not in DIRECTIONS:
            raise InvalidSortDefinition(
                f"Sort direction must be 'ascending' or 'descending', got '{direction}'",
                direction=direction,
                property=property,
            )
        if (property is None) == (timestamp is None):
            raise InvalidSortDefinition(
                "Sort needs exactly one of property or timestamp",
                property=property,
                timestamp=timestamp,
            )
        if timestamp is not None and timestamp not in TIMESTAMPS:
            raise InvalidSortDefinition(
                f"Sort timestamp must be one of {', '.join(TIMESTAMPS)}, got '{timestamp}'",
                timestamp=timestamp,
            )
        self.direction = direction
        self.property = property
        self.timestamp = timestamp

    @classmethod
    def property_sort(cls, property: str, direction: str = ASCENDING) -> "Sorting":
        return cls(direction, property=property)

    @classmethod
    def timestamp_sort(cls, timestamp: str, direction: str = ASCENDING) -> "Sorting":
        return cls(direction, timestamp=timestamp)

    def to_query(self) -> dict[str, Any]:
        if self.property is not None:
            return {"property": self.property, "direction": self.direction}
        return {"timestamp": self.timestamp, "direction": self.direction}

    def __repr__(self) -> str:
        target = self.property if self.property is not None else self.timestamp
        return f"Sorting({target!r}, {self.direction!r})"


def sort_query(sortings: Iterable[Sorting]) -> list[dict[str, Any]]:
    """Serialize sorts in the given order.

    Duplicates and conflicting directions are passed through untouched;
    earlier entries take precedence on the server.
    """
    return [sorting.to_query() for sorting in sortings]


__all__ = [
    "ASCENDING",
    "DESCENDING",
    "Sorting",
    "sort_query",
]
