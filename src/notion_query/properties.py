"""Typed page property values.

Decodes the `properties` object of a page into one frozen record per
property type, and builds the payload fragments used to update them.

Example:
    >>> props = decode_properties(client.get_page(page_id))
    >>> props["Name"].rich_text.plain_text
    'Quarterly report'
    >>> {"Estimate": NumberProperty.value(3).to_update()}
    {'Estimate': {'number': 3}}

See https://developers.notion.com/reference/page-property-values
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar

from notion_query.exceptions import ReadOnlyProperty
from notion_query.rich_text import RichText, parse_datetime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PropertyValue:
    """Fields shared by every property record."""

    TYPE: ClassVar[str] = ""

    name: str = ""
    id: str | None = None

    @property
    def type(self) -> str:
        return self.TYPE

    def to_update(self) -> dict[str, Any]:
        """Payload fragment for pages.update, e.g. {"number": 3}.

        Raises:
            ReadOnlyProperty: For records without a writable payload
                (people, created_by, unique_id, unknown types).
        """
        raise ReadOnlyProperty(self.type, self.name or None)


@dataclass(frozen=True)
class SelectOption:
    name: str | None = None
    id: str | None = None
    color: str | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "SelectOption":
        return cls(name=raw.get("name"), id=raw.get("id"), color=raw.get("color"))

    def to_raw(self) -> dict[str, Any]:
        # Options are matched by name on write
        return {"name": self.name}


def _rich_text_input(text: "str | RichText") -> RichText:
    return RichText.from_plain_text(text) if isinstance(text, str) else text


@dataclass(frozen=True)
class TitleProperty(PropertyValue):
    TYPE: ClassVar[str] = "title"

    rich_text: RichText = field(default_factory=RichText, hash=False)

    @classmethod
    def value(cls, text: "str | RichText") -> "TitleProperty":
        return cls(rich_text=_rich_text_input(text))

    @property
    def plain_text(self) -> str:
        return self.rich_text.plain_text

    def to_update(self) -> dict[str, Any]:
        return {self.TYPE: self.rich_text.to_raw()}


@dataclass(frozen=True)
class TextProperty(PropertyValue):
    TYPE: ClassVar[str] = "rich_text"

    rich_text: RichText = field(default_factory=RichText, hash=False)

    @classmethod
    def value(cls, text: "str | RichText") -> "TextProperty":
        return cls(rich_text=_rich_text_input(text))

    @property
    def plain_text(self) -> str:
        return self.rich_text.plain_text

    def to_update(self) -> dict[str, Any]:
        return {self.TYPE: self.rich_text.to_raw()}


@dataclass(frozen=True)
class NumberProperty(PropertyValue):
    TYPE: ClassVar[str] = "number"

    number: float | int | None = None

    @classmethod
    def value(cls, number: float | int | None) -> "NumberProperty":
        return cls(number=number)

    def to_update(self) -> dict[str, Any]:
        return {self.TYPE: self.number}


@dataclass(frozen=True)
class CheckboxProperty(PropertyValue):
    TYPE: ClassVar[str] = "checkbox"

    checked: bool = False

    @classmethod
    def value(cls, checked: bool) -> "CheckboxProperty":
        return cls(checked=checked)

    def to_update(self) -> dict[str, Any]:
        return {self.TYPE: self.checked}


@dataclass(frozen=True)
class SelectProperty(PropertyValue):
    TYPE: ClassVar[str] = "select"

    option: SelectOption | None = None

    @classmethod
    def value(cls, name: str | None) -> "SelectProperty":
        return cls(option=None if name is None else SelectOption(name=name))

    def to_update(self) -> dict[str, Any]:
        return {self.TYPE: None if self.option is None else self.option.to_raw()}


@dataclass(frozen=True)
class StatusProperty(SelectProperty):
    TYPE: ClassVar[str] = "status"


@dataclass(frozen=True)
class MultiSelectProperty(PropertyValue):
    TYPE: ClassVar[str] = "multi_select"

    options: tuple[SelectOption, ...] = ()

    @classmethod
    def value(cls, names: list[str]) -> "MultiSelectProperty":
        return cls(options=tuple(SelectOption(name=name) for name in names))

    @property
    def names(self) -> list[str | None]:
        return [option.name for option in self.options]

    def to_update(self) -> dict[str, Any]:
        return {self.TYPE: [option.to_raw() for option in self.options]}


@dataclass(frozen=True)
class PeopleProperty(PropertyValue):
    TYPE: ClassVar[str] = "people"

    user_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class CreatedByProperty(PropertyValue):
    TYPE: ClassVar[str] = "created_by"

    user_id: str | None = None
    user_object: str | None = None


@dataclass(frozen=True)
class PhoneNumberProperty(PropertyValue):
    TYPE: ClassVar[str] = "phone_number"

    phone_number: str | None = None

    @classmethod
    def value(cls, phone_number: str | None) -> "PhoneNumberProperty":
        return cls(phone_number=phone_number)

    def to_update(self) -> dict[str, Any]:
        return {self.TYPE: self.phone_number}


@dataclass(frozen=True)
class EmailProperty(PropertyValue):
    TYPE: ClassVar[str] = "email"

    email: str | None = None

    @classmethod
    def value(cls, email: str | None) -> "EmailProperty":
        return cls(email=email)

    def to_update(self) -> dict[str, Any]:
        return {self.TYPE: self.email}


@dataclass(frozen=True)
class UrlProperty(PropertyValue):
    TYPE: ClassVar[str] = "url"

    url: str | None = None

    @classmethod
    def value(cls, url: str | None) -> "UrlProperty":
        return cls(url=url)

    def to_update(self) -> dict[str, Any]:
        return {self.TYPE: self.url}


@dataclass(frozen=True)
class DateProperty(PropertyValue):
    TYPE: ClassVar[str] = "date"

    start: str | None = None
    end: str | None = None
    time_zone: str | None = None

    @classmethod
    def value(cls, start: str, end: str | None = None, time_zone: str | None = None) -> "DateProperty":
        return cls(start=start, end=end, time_zone=time_zone)

    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    def is_range(self) -> bool:
        return self.end is not None

    def has_time(self) -> bool:
        return self.start is not None and "T" in self.start

    def start_datetime(self) -> datetime | None:
        return parse_datetime(self.start)

    def end_datetime(self) -> datetime | None:
        return parse_datetime(self.end)

    def to_update(self) -> dict[str, Any]:
        if self.is_empty():
            return {self.TYPE: None}
        date: dict[str, Any] = {"start": self.start, "end": self.end}
        if self.time_zone is not None:
            date["time_zone"] = self.time_zone
        return {self.TYPE: date}


@dataclass(frozen=True)
class PlaceProperty(PropertyValue):
    TYPE: ClassVar[str] = "place"

    place_name: str | None = None
    lat: float | None = None
    lon: float | None = None
    address: str | None = None

    @classmethod
    def value(cls, name: str, lat: float, lon: float, address: str | None = None) -> "PlaceProperty":
        return cls(place_name=name, lat=lat, lon=lon, address=address)

    def to_update(self) -> dict[str, Any]:
        return {
            self.TYPE: {
                "name": self.place_name,
                "lat": self.lat,
                "lon": self.lon,
                "address": self.address,
            }
        }


@dataclass(frozen=True)
class UniqueIdProperty(PropertyValue):
    TYPE: ClassVar[str] = "unique_id"

    prefix: str | None = None
    number: int | None = None

    def __str__(self) -> str:
        if self.number is None:
            return ""
        return f"{self.prefix}-{self.number}" if self.prefix else str(self.number)


@dataclass(frozen=True)
class UnknownProperty(PropertyValue):
    """Property of a type without a typed record; keeps the raw JSON."""

    property_type: str = ""
    raw: dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def type(self) -> str:
        return self.property_type


# =============================================================================
# DECODING
# =============================================================================


def _option(data: Any) -> SelectOption | None:
    return SelectOption.from_raw(data) if isinstance(data, dict) else None


def _decode_content(prop_type: str, data: Any) -> dict[str, Any]:
    """Map a property's type-specific payload to record fields."""
    if prop_type in ("title", "rich_text"):
        return {"rich_text": RichText.from_raw(data if isinstance(data, list) else [])}
    if prop_type == "number":
        return {"number": data}
    if prop_type == "checkbox":
        return {"checked": bool(data)}
    if prop_type in ("select", "status"):
        return {"option": _option(data)}
    if prop_type == "multi_select":
        return {"options": tuple(SelectOption.from_raw(o) for o in data or [] if isinstance(o, dict))}
    if prop_type == "people":
        return {"user_ids": tuple(u.get("id") for u in data or [] if isinstance(u, dict))}
    if prop_type == "created_by":
        data = data or {}
        return {"user_id": data.get("id"), "user_object": data.get("object")}
    if prop_type in ("phone_number", "email", "url"):
        return {prop_type: data}
    if prop_type == "date":
        data = data or {}
        return {"start": data.get("start"), "end": data.get("end"), "time_zone": data.get("time_zone")}
    if prop_type == "place":
        data = data or {}
        return {
            "place_name": data.get("name"),
            "lat": data.get("lat"),
            "lon": data.get("lon"),
            "address": data.get("address"),
        }
    if prop_type == "unique_id":
        data = data or {}
        return {"prefix": data.get("prefix"), "number": data.get("number")}
    raise KeyError(prop_type)


_PROPERTY_TYPES: dict[str, type[PropertyValue]] = {
    cls.TYPE: cls
    for cls in (
        TitleProperty,
        TextProperty,
        NumberProperty,
        CheckboxProperty,
        SelectProperty,
        StatusProperty,
        MultiSelectProperty,
        PeopleProperty,
        CreatedByProperty,
        PhoneNumberProperty,
        EmailProperty,
        UrlProperty,
        DateProperty,
        PlaceProperty,
        UniqueIdProperty,
    )
}


def decode_property(name: str, raw: dict[str, Any]) -> PropertyValue:
    """Decode one property value object.

    Args:
        name: Property name (key in the page's properties object).
        raw: Property value object with "id", "type" and the typed payload.

    Returns:
        The matching record, or UnknownProperty for unsupported types.
    """
    prop_type = raw.get("type") or ""
    cls = _PROPERTY_TYPES.get(prop_type)
    if cls is None:
        logger.debug(f"No typed record for property '{name}' of type {prop_type!r}")
        return UnknownProperty(name=name, id=raw.get("id"), property_type=prop_type, raw=dict(raw))
    return cls(name=name, id=raw.get("id"), **_decode_content(prop_type, raw.get(prop_type)))


def decode_properties(page: dict[str, Any]) -> dict[str, PropertyValue]:
    """Decode all properties of a page object, keyed by property name."""
    properties = page.get("properties") or {}
    return {name: decode_property(name, raw) for name, raw in properties.items()}


__all__ = [
    "PropertyValue",
    "SelectOption",
    "TitleProperty",
    "TextProperty",
    "NumberProperty",
    "CheckboxProperty",
    "SelectProperty",
    "StatusProperty",
    "MultiSelectProperty",
    "PeopleProperty",
    "CreatedByProperty",
    "PhoneNumberProperty",
    "EmailProperty",
    "UrlProperty",
    "DateProperty",
    "PlaceProperty",
    "UniqueIdProperty",
    "UnknownProperty",
    "decode_property",
    "decode_properties",
]
