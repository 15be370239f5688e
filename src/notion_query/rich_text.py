"""Rich text decoding for Notion properties and blocks.

A rich text array is a list of polymorphic objects: "text", "mention" or
"equation", each with its own payload, plus shared annotations, plain_text
and href. Mentions are themselves polymorphic (user, page, database, date,
link_preview, template_mention).

Unknown item or mention types are kept, not rejected: common fields are
decoded and the type-specific payload is left as None. The original JSON of
every decoded item is retained so `to_raw()` returns it unchanged.

See https://developers.notion.com/reference/rich-text
"""

import copy
import logging
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, Iterator

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "default"

TEXT = "text"
MENTION = "mention"
EQUATION = "equation"


@dataclass(frozen=True)
class Annotation:
    """Styling applied to a rich text item."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = DEFAULT_COLOR

    @classmethod
    def from_raw(cls, raw: dict[str, Any] | None) -> "Annotation":
        """Build from an annotations object; missing keys take defaults."""
        if not isinstance(raw, dict) or not raw:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in raw.items() if k in known and v is not None})

    def to_raw(self) -> dict[str, Any]:
        return {
            "bold": self.bold,
            "italic": self.italic,
            "strikethrough": self.strikethrough,
            "underline": self.underline,
            "code": self.code,
            "color": self.color,
        }

    def has_any_annotation(self) -> bool:
        """True if any style is set or the color is not "default"."""
        return (
            self.bold
            or self.italic
            or self.strikethrough
            or self.underline
            or self.code
            or self.color != DEFAULT_COLOR
        )


# =============================================================================
# ITEM PAYLOADS
# =============================================================================


@dataclass(frozen=True)
class TextContent:
    content: str
    link: str | None = None


@dataclass(frozen=True)
class Equation:
    expression: str


@dataclass(frozen=True)
class UserMention:
    id: str | None
    object: str | None = "user"


@dataclass(frozen=True)
class PageMention:
    id: str | None


@dataclass(frozen=True)
class DatabaseMention:
    id: str | None


@dataclass(frozen=True)
class DateMention:
    """Date or date range mention; values are ISO 8601 strings."""

    start: str | None
    end: str | None = None
    time_zone: str | None = None

    def is_range(self) -> bool:
        return self.end is not None

    def has_time(self) -> bool:
        return self.start is not None and "T" in self.start

    def start_datetime(self) -> datetime | None:
        return parse_datetime(self.start)

    def end_datetime(self) -> datetime | None:
        return parse_datetime(self.end)


@dataclass(frozen=True)
class LinkPreviewMention:
    url: str | None


@dataclass(frozen=True)
class TemplateMention:
    """Template placeholder.

    kind is "template_mention_date" (value "today" or "now") or
    "template_mention_user" (value "me").
    """

    kind: str | None
    value: str | None


MentionValue = (
    UserMention
    | PageMention
    | DatabaseMention
    | DateMention
    | LinkPreviewMention
    | TemplateMention
)


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 date or datetime as returned by the API."""
    if not value:
        return None
    # fromisoformat only accepts "Z" from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _decode_user(data: dict[str, Any]) -> UserMention:
    return UserMention(id=data.get("id"), object=data.get("object"))


def _decode_page(data: dict[str, Any]) -> PageMention:
    return PageMention(id=data.get("id"))


def _decode_database(data: dict[str, Any]) -> DatabaseMention:
    return DatabaseMention(id=data.get("id"))


def _decode_date(data: dict[str, Any]) -> DateMention:
    return DateMention(
        start=data.get("start"),
        end=data.get("end"),
        time_zone=data.get("time_zone"),
    )


def _decode_link_preview(data: dict[str, Any]) -> LinkPreviewMention:
    return LinkPreviewMention(url=data.get("url"))


def _decode_template_mention(data: dict[str, Any]) -> TemplateMention:
    kind = data.get("type")
    return TemplateMention(kind=kind, value=data.get(kind) if kind else None)


_MENTION_DECODERS = {
    "user": _decode_user,
    "page": _decode_page,
    "database": _decode_database,
    "date": _decode_date,
    "link_preview": _decode_link_preview,
    "template_mention": _decode_template_mention,
}


@dataclass(frozen=True)
class Mention:
    """Decoded mention object.

    Accessors return None when the mention is of another type, so
    `mention.user_id` is safe to call on a page mention.
    """

    type: str
    value: MentionValue | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "Mention":
        mention_type = raw.get("type") or ""
        decoder = _MENTION_DECODERS.get(mention_type)
        data = raw.get(mention_type)
        if decoder is None:
            logger.debug(f"Unrecognized mention type: {mention_type!r}")
            return cls(type=mention_type)
        if not isinstance(data, dict):
            return cls(type=mention_type)
        return cls(type=mention_type, value=decoder(data))

    def is_user(self) -> bool:
        return self.type == "user"

    def is_page(self) -> bool:
        return self.type == "page"

    def is_database(self) -> bool:
        return self.type == "database"

    def is_date(self) -> bool:
        return self.type == "date"

    def is_link_preview(self) -> bool:
        return self.type == "link_preview"

    def is_template_mention(self) -> bool:
        return self.type == "template_mention"

    @property
    def user_id(self) -> str | None:
        return self.value.id if isinstance(self.value, UserMention) else None

    @property
    def user_object_type(self) -> str | None:
        return self.value.object if isinstance(self.value, UserMention) else None

    @property
    def page_id(self) -> str | None:
        return self.value.id if isinstance(self.value, PageMention) else None

    @property
    def database_id(self) -> str | None:
        return self.value.id if isinstance(self.value, DatabaseMention) else None

    @property
    def date_start(self) -> str | None:
        return self.value.start if isinstance(self.value, DateMention) else None

    @property
    def date_end(self) -> str | None:
        return self.value.end if isinstance(self.value, DateMention) else None

    @property
    def link_preview_url(self) -> str | None:
        return self.value.url if isinstance(self.value, LinkPreviewMention) else None

    @property
    def template_mention_type(self) -> str | None:
        return self.value.kind if isinstance(self.value, TemplateMention) else None

    @property
    def template_mention_date(self) -> str | None:
        if self.template_mention_type == "template_mention_date":
            return self.value.value
        return None

    @property
    def template_mention_user(self) -> str | None:
        if self.template_mention_type == "template_mention_user":
            return self.value.value
        return None


# =============================================================================
# RICH TEXT ITEM
# =============================================================================


def _normalize_annotations(annotations: "Annotation | dict[str, Any] | None") -> Annotation:
    if isinstance(annotations, Annotation):
        return annotations
    return Annotation.from_raw(annotations)


class RichTextItem:
    """One rich text segment.

    Attributes:
        type: "text", "mention", "equation" or an unrecognized tag.
        plain_text: Unformatted text of the segment.
        href: Link target, or None.
        annotations: Annotation (all defaults when absent in the JSON).
        content: TextContent, Mention or Equation matching `type`; None for
            unrecognized types or a missing payload.
    """

    def __init__(self, raw: dict[str, Any]):
        self._raw = copy.deepcopy(raw)
        self.type: str = raw.get("type") or ""
        self.plain_text: str = raw.get("plain_text") or ""
        self.href: str | None = raw.get("href")
        self.annotations = Annotation.from_raw(raw.get("annotations"))
        self.content: TextContent | Mention | Equation | None = self._decode_content(raw)

    def _decode_content(self, raw: dict[str, Any]) -> "TextContent | Mention | Equation | None":
        data = raw.get(self.type)
        if self.type not in (TEXT, MENTION, EQUATION):
            logger.debug(f"Unrecognized rich text type: {self.type!r}")
            return None
        if not isinstance(data, dict):
            return None

        if self.type == TEXT:
            link = data.get("link")
            return TextContent(
                content=data.get("content") or "",
                link=link.get("url") if isinstance(link, dict) else None,
            )
        if self.type == MENTION:
            return Mention.from_raw(data)
        return Equation(expression=data.get("expression") or "")

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "RichTextItem":
        return cls(raw)

    @classmethod
    def from_text(
        cls,
        content: str,
        annotations: Annotation | dict[str, Any] | None = None,
        link: str | None = None,
    ) -> "RichTextItem":
        """Create a text item with full default annotations.

        Args:
            content: Text content.
            annotations: Annotation or partial annotations dict.
            link: Optional URL; also used as href.
        """
        return cls({
            "type": TEXT,
            "text": {
                "content": content,
                "link": None if link is None else {"url": link},
            },
            "annotations": _normalize_annotations(annotations).to_raw(),
            "plain_text": content,
            "href": link,
        })

    def to_raw(self) -> dict[str, Any]:
        """Return the item in Notion API format."""
        return copy.deepcopy(self._raw)

    def is_text(self) -> bool:
        return self.type == TEXT

    def is_mention(self) -> bool:
        return self.type == MENTION

    def is_equation(self) -> bool:
        return self.type == EQUATION

    def has_link(self) -> bool:
        return self.href is not None

    @property
    def text_content(self) -> str | None:
        return self.content.content if isinstance(self.content, TextContent) else None

    @property
    def text_link(self) -> dict[str, str] | None:
        """Inline link as {"url": ...}, or None."""
        url = self.text_link_url
        return None if url is None else {"url": url}

    @property
    def text_link_url(self) -> str | None:
        return self.content.link if isinstance(self.content, TextContent) else None

    def has_text_link(self) -> bool:
        return self.text_link_url is not None

    @property
    def mention(self) -> Mention | None:
        return self.content if isinstance(self.content, Mention) else None

    @property
    def equation_expression(self) -> str | None:
        return self.content.expression if isinstance(self.content, Equation) else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RichTextItem):
            return NotImplemented
        return self._raw == other._raw

    def __str__(self) -> str:
        return self.plain_text

    def __repr__(self) -> str:
        return f"RichTextItem({self.type!r}, {self.plain_text!r})"


# =============================================================================
# RICH TEXT
# =============================================================================


class RichText:
    """Ordered sequence of rich text items with derived views.

    `plain_text` is the concatenation of every item's plain text and is
    kept in sync by all mutating methods.

    Example:
        >>> rich_text = RichText.from_plain_text("Hello ")
        >>> rich_text.add_text("world", {"bold": True})
        >>> rich_text.plain_text
        'Hello world'
    """

    def __init__(self, raw: list[dict[str, Any]] | None = None):
        self._items: list[RichTextItem] = []
        self._plain_text = ""
        if raw:
            self._fill_from_raw(raw)

    def _fill_from_raw(self, raw: list[dict[str, Any]]) -> None:
        for entry in raw:
            if not isinstance(entry, dict):
                logger.debug(f"Skipping non-object rich text entry: {entry!r}")
                continue
            self._items.append(RichTextItem(entry))
        self._fill_plain_text()

    def _fill_plain_text(self) -> None:
        self._plain_text = "".join(item.plain_text for item in self._items)

    @classmethod
    def from_raw(cls, raw: list[dict[str, Any]] | None) -> "RichText":
        """Decode a rich text array from the API."""
        return cls(raw)

    @classmethod
    def from_items(cls, items: list[RichTextItem]) -> "RichText":
        return cls([item.to_raw() for item in items])

    @classmethod
    def from_plain_text(cls, text: str) -> "RichText":
        """Create a rich text with a single unstyled text item."""
        rich_text = cls()
        rich_text.set_plain_text(text)
        return rich_text

    @property
    def plain_text(self) -> str:
        return self._plain_text

    @property
    def items(self) -> list[RichTextItem]:
        return list(self._items)

    def get_item(self, index: int) -> RichTextItem | None:
        """Return the item at index, or None if out of range."""
        if 0 <= index < len(self._items):
            return self._items[index]
        return None

    def set_plain_text(self, text: str) -> None:
        """Replace all items with a single unstyled text item."""
        self._items = [RichTextItem.from_text(text)]
        self._plain_text = text

    def add_text(
        self,
        content: str,
        annotations: Annotation | dict[str, Any] | None = None,
        link: str | None = None,
    ) -> "RichText":
        """Append a text item and return self for chaining."""
        self._items.append(RichTextItem.from_text(content, annotations, link))
        self._plain_text += content
        return self

    def to_raw(self) -> list[dict[str, Any]]:
        """Return the items in Notion API format, in order."""
        return [item.to_raw() for item in self._items]

    def get_types(self) -> list[str]:
        """Distinct item types in first-occurrence order."""
        return list(dict.fromkeys(item.type for item in self._items))

    def has_annotations(self) -> bool:
        return any(item.annotations.has_any_annotation() for item in self._items)

    def has_links(self) -> bool:
        return any(item.has_link() for item in self._items)

    def get_linked_items(self) -> list[RichTextItem]:
        return [item for item in self._items if item.has_link()]

    def get_items_by_type(self, item_type: str) -> list[RichTextItem]:
        return [item for item in self._items if item.type == item_type]

    def get_text_items(self) -> list[RichTextItem]:
        return self.get_items_by_type(TEXT)

    def get_mention_items(self) -> list[RichTextItem]:
        return self.get_items_by_type(MENTION)

    def get_equation_items(self) -> list[RichTextItem]:
        return self.get_items_by_type(EQUATION)

    def has_mentions(self) -> bool:
        return any(item.is_mention() for item in self._items)

    def has_equations(self) -> bool:
        return any(item.is_equation() for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[RichTextItem]:
        return iter(list(self._items))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RichText):
            return NotImplemented
        return self._items == other._items

    def __str__(self) -> str:
        return self._plain_text

    def __repr__(self) -> str:
        return f"RichText({self._plain_text!r}, items={len(self._items)})"


__all__ = [
    "Annotation",
    "TextContent",
    "Equation",
    "Mention",
    "UserMention",
    "PageMention",
    "DatabaseMention",
    "DateMention",
    "LinkPreviewMention",
    "TemplateMention",
    "RichTextItem",
    "RichText",
]
