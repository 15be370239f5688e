"""Tests for notion_query.properties module."""

import pytest

from notion_query.exceptions import ReadOnlyProperty
from notion_query.properties import (
    CheckboxProperty,
    CreatedByProperty,
    DateProperty,
    MultiSelectProperty,
    NumberProperty,
    PeopleProperty,
    PlaceProperty,
    SelectOption,
    SelectProperty,
    StatusProperty,
    TextProperty,
    TitleProperty,
    UniqueIdProperty,
    UnknownProperty,
    UrlProperty,
    decode_properties,
    decode_property,
)
from notion_query.rich_text import RichText


@pytest.fixture
def page(make_text_item, user_mention_item):
    """Page object with one property of each common type."""
    return {
        "object": "page",
        "id": "59833787-2cf9-4fdf-8782-e53db20768a5",
        "properties": {
            "Name": {"id": "title", "type": "title", "title": [make_text_item("Quarterly report")]},
            "Notes": {
                "id": "a%3Ab",
                "type": "rich_text",
                "rich_text": [user_mention_item, make_text_item(" to review", bold=True)],
            },
            "Estimate": {"id": "n1", "type": "number", "number": 3.5},
            "Done": {"id": "c1", "type": "checkbox", "checkbox": True},
            "Stage": {"id": "s1", "type": "select", "select": {"id": "o1", "name": "Draft", "color": "gray"}},
            "Status": {"id": "s2", "type": "status", "status": None},
            "Tags": {
                "id": "m1",
                "type": "multi_select",
                "multi_select": [
                    {"id": "t1", "name": "finance", "color": "green"},
                    {"id": "t2", "name": "q3", "color": "blue"},
                ],
            },
            "Owners": {"id": "p1", "type": "people", "people": [{"object": "user", "id": "u1"}, {"object": "user", "id": "u2"}]},
            "Author": {"id": "cb", "type": "created_by", "created_by": {"object": "user", "id": "u9"}},
            "Link": {"id": "l1", "type": "url", "url": "https://example.com"},
            "Due": {"id": "d1", "type": "date", "date": {"start": "2024-03-01", "end": None, "time_zone": None}},
            "Office": {"id": "pl", "type": "place", "place": {"name": "HQ", "lat": 52.37, "lon": 4.89, "address": "Dam 1"}},
            "ID": {"id": "u", "type": "unique_id", "unique_id": {"prefix": "TASK", "number": 42}},
            "Total": {"id": "f1", "type": "formula", "formula": {"type": "number", "number": 7}},
        },
    }


class TestDecodeProperties:
    """Tests for decode_properties / decode_property."""

    def test_decodes_all_by_name(self, page):
        props = decode_properties(page)
        assert set(props) == set(page["properties"])
        assert props["Estimate"].name == "Estimate"
        assert props["Estimate"].id == "n1"

    def test_title_and_text(self, page):
        props = decode_properties(page)
        assert isinstance(props["Name"], TitleProperty)
        assert props["Name"].plain_text == "Quarterly report"
        assert isinstance(props["Notes"], TextProperty)
        assert props["Notes"].rich_text.has_mentions()
        assert props["Notes"].plain_text == "@Anonymous to review"

    def test_scalar_types(self, page):
        props = decode_properties(page)
        assert props["Estimate"] == NumberProperty(name="Estimate", id="n1", number=3.5)
        assert props["Done"].checked is True
        assert isinstance(props["Link"], UrlProperty)
        assert props["Link"].url == "https://example.com"

    def test_select_status_multi_select(self, page):
        props = decode_properties(page)
        assert props["Stage"].option == SelectOption(name="Draft", id="o1", color="gray")
        assert isinstance(props["Status"], StatusProperty)
        assert props["Status"].option is None
        assert props["Tags"].names == ["finance", "q3"]

    def test_people_and_created_by(self, page):
        props = decode_properties(page)
        assert props["Owners"] == PeopleProperty(name="Owners", id="p1", user_ids=("u1", "u2"))
        assert props["Author"] == CreatedByProperty(name="Author", id="cb", user_id="u9", user_object="user")

    def test_date_place_unique_id(self, page):
        props = decode_properties(page)
        assert props["Due"].start == "2024-03-01"
        assert props["Due"].is_range() is False
        assert props["Office"].place_name == "HQ"
        assert props["Office"].lat == 52.37
        assert str(props["ID"]) == "TASK-42"

    def test_unknown_type_kept_raw(self, page):
        total = decode_properties(page)["Total"]
        assert isinstance(total, UnknownProperty)
        assert total.type == "formula"
        assert total.raw == page["properties"]["Total"]

    def test_null_title(self):
        prop = decode_property("Name", {"id": "title", "type": "title", "title": None})
        assert prop.plain_text == ""

    def test_page_without_properties(self):
        assert decode_properties({"object": "page"}) == {}


class TestToUpdate:
    """Tests for value() constructors and update payloads."""

    def test_title_from_string(self):
        payload = TitleProperty.value("Hello").to_update()
        assert payload["title"] == RichText.from_plain_text("Hello").to_raw()

    def test_text_from_rich_text(self):
        rich_text = RichText.from_plain_text("Hi ").add_text("there", {"bold": True})
        assert TextProperty.value(rich_text).to_update() == {"rich_text": rich_text.to_raw()}

    def test_number(self):
        assert NumberProperty.value(3).to_update() == {"number": 3}

    def test_checkbox(self):
        assert CheckboxProperty.value(False).to_update() == {"checkbox": False}

    def test_select(self):
        assert SelectProperty.value("Draft").to_update() == {"select": {"name": "Draft"}}
        assert SelectProperty.value(None).to_update() == {"select": None}

    def test_status(self):
        assert StatusProperty.value("Done").to_update() == {"status": {"name": "Done"}}

    def test_multi_select(self):
        assert MultiSelectProperty.value(["a", "b"]).to_update() == {
            "multi_select": [{"name": "a"}, {"name": "b"}]
        }

    def test_date(self):
        assert DateProperty.value("2024-03-01", "2024-03-05").to_update() == {
            "date": {"start": "2024-03-01", "end": "2024-03-05"}
        }
        assert DateProperty().to_update() == {"date": None}

    def test_place(self):
        assert PlaceProperty.value("HQ", 52.37, 4.89).to_update() == {
            "place": {"name": "HQ", "lat": 52.37, "lon": 4.89, "address": None}
        }

    def test_read_only_types(self):
        with pytest.raises(ReadOnlyProperty) as exc_info:
            UniqueIdProperty(name="ID", prefix="T", number=1).to_update()
        assert exc_info.value.property_type == "unique_id"
        assert exc_info.value.property_name == "ID"

    def test_unknown_type_is_read_only(self, page):
        total = decode_properties(page)["Total"]
        with pytest.raises(ReadOnlyProperty, match="formula"):
            total.to_update()


class TestHashing:
    """Decoded records can be used in sets and as dict keys."""

    def test_every_decoded_record_is_hashable(self, page):
        props = decode_properties(page)
        for prop in props.values():
            hash(prop)

    def test_title_hash(self):
        prop = decode_property("Name", {"type": "title", "title": []})
        assert hash(prop) == hash(decode_property("Name", {"type": "title", "title": []}))

    def test_equal_records_share_a_set_entry(self, page):
        first = decode_properties(page)
        second = decode_properties(page)
        assert {first["Notes"], second["Notes"]} == {first["Notes"]}
        assert len({first["Total"], second["Total"]}) == 1
