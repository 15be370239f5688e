"""Exceptions raised while building queries and decoding property values."""

from typing import Any


class NotionQueryError(ValueError):
    """Base exception for query construction errors.

    Attributes:
        message: Human readable description.
        context: Offending values (property, operator, type, ...).
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.context = context
        super().__init__(self.message)


class UnknownPropertyType(NotionQueryError):
    """Raised when the operator table is queried with an unknown type tag."""

    def __init__(self, property_type: str):
        self.property_type = property_type
        super().__init__(
            f"Unknown property type '{property_type}'",
            property_type=property_type,
        )


class InvalidOperator(NotionQueryError):
    """Raised when an operator is not legal for a property type."""

    def __init__(self, operator: str, property_type: str, property_name: str | None = None):
        self.operator = operator
        self.property_type = property_type
        self.property_name = property_name
        message = f"Invalid comparison operator '{operator}' for {property_type} filter"
        if property_name:
            message += f" on property '{property_name}'"
        super().__init__(
            message,
            operator=operator,
            property_type=property_type,
            property_name=property_name,
        )


class NotNumeric(NotionQueryError):
    """Raised when a numeric filter receives a non-numeric value."""

    def __init__(self, property_name: str, value: Any):
        self.property_name = property_name
        self.value = value
        super().__init__(
            f"Value {value!r} for property '{property_name}' must be a finite number",
            property_name=property_name,
            value=value,
        )


class InvalidFilterValue(NotionQueryError):
    """Raised when a filter value is outside the set the API accepts."""

    def __init__(self, property_name: str, value: Any, allowed: tuple[str, ...]):
        self.property_name = property_name
        self.value = value
        self.allowed = allowed
        super().__init__(
            f"Invalid value {value!r} for property '{property_name}', "
            f"expected one of: {', '.join(allowed)}",
            property_name=property_name,
            value=value,
        )


class InvalidFilterDefinition(NotionQueryError):
    """Raised when a filter or filter group cannot be serialized."""

    pass


class ConflictingFilterSpecification(NotionQueryError):
    """Raised when both a single filter and a filter group are set."""

    pass


class InvalidSortDefinition(NotionQueryError):
    """Raised when a sort has an unknown direction or timestamp."""

    pass


class ReadOnlyProperty(NotionQueryError):
    """Raised when an update payload is requested for a read-only property."""

    def __init__(self, property_type: str, property_name: str | None = None):
        self.property_type = property_type
        self.property_name = property_name
        message = f"{property_type or 'unknown'} properties are read-only"
        if property_name:
            message += f" (property '{property_name}')"
        super().__init__(
            message,
            property_type=property_type,
            property_name=property_name,
        )
