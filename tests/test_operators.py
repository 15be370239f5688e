"""Tests for notion_query.operators module."""

import pytest

from notion_query.exceptions import UnknownPropertyType
from notion_query.operators import (
    OPERATOR_TABLE,
    RELATIVE_DATE_OPERATORS,
    is_valid,
    valid_operators,
)


class TestValidOperators:
    """Tests for valid_operators function."""

    def test_checkbox_operators(self):
        """Checkbox only supports equality."""
        assert valid_operators("checkbox") == ("equals", "does_not_equal")

    def test_date_includes_relative_ranges(self):
        """Date supports every relative range plus comparisons and presence."""
        operators = set(valid_operators("date"))
        assert RELATIVE_DATE_OPERATORS <= operators
        assert {"before", "after", "on_or_before", "on_or_after", "equals"} <= operators
        assert {"is_empty", "is_not_empty"} <= operators

    def test_files_only_presence(self):
        """Files can only be tested for emptiness."""
        assert valid_operators("files") == ("is_empty", "is_not_empty")

    def test_unique_id_has_no_presence_operators(self):
        """unique_id is always set, so is_empty is not offered."""
        assert "is_empty" not in valid_operators("unique_id")
        assert "greater_than" in valid_operators("unique_id")

    def test_every_listed_type_is_present(self):
        """All documented property types have an entry."""
        expected = {
            "text", "number", "checkbox", "date", "files", "multi_select",
            "select", "status", "people", "relation", "phone_number",
            "email", "url", "unique_id", "verification",
        }
        assert expected <= set(OPERATOR_TABLE)

    def test_unknown_type_raises(self):
        """Unknown type tags raise UnknownPropertyType naming the tag."""
        with pytest.raises(UnknownPropertyType) as exc_info:
            valid_operators("formula")
        assert exc_info.value.property_type == "formula"
        assert "formula" in str(exc_info.value)

    def test_table_is_read_only(self):
        """The table cannot be modified at runtime."""
        with pytest.raises(TypeError):
            OPERATOR_TABLE["checkbox"] = ("contains",)


class TestIsValid:
    """Tests for is_valid function."""

    def test_valid_pair(self):
        assert is_valid("select", "equals") is True

    def test_invalid_pair(self):
        assert is_valid("checkbox", "contains") is False

    def test_unknown_type_raises(self):
        with pytest.raises(UnknownPropertyType):
            is_valid("rollup", "equals")
