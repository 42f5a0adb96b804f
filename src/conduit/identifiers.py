"""Resource identifiers.

An identifier addresses either a whole table or a single row::

    content://com.example.notes/note        # collection
    content://com.example.notes/note/42     # item

``Identifier`` is a frozen dataclass: parse once, pass it around, format
it back with ``str()``. Query strings and fragments are not part of the
addressing scheme and are dropped on parse.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from urllib.parse import urlsplit

DEFAULT_SCHEME = "content"


@dataclass(frozen=True, slots=True)
class Identifier:
    """A parsed ``scheme://authority/segment/...`` reference."""

    scheme: str
    authority: str
    segments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> Identifier:
        """Parse an absolute identifier string.

        Raises ``ValueError`` if the scheme or authority is missing.
        """
        parts = urlsplit(text)
        if not parts.scheme or not parts.netloc:
            msg = f"Not an absolute identifier: {text!r} (expected scheme://authority/path)"
            raise ValueError(msg)
        segments = tuple(p for p in parts.path.split("/") if p)
        return cls(scheme=parts.scheme, authority=parts.netloc, segments=segments)

    @property
    def path(self) -> str:
        if not self.segments:
            return ""
        return "/" + "/".join(self.segments)

    @property
    def table(self) -> str | None:
        """First path segment, or ``None`` for a bare authority."""
        return self.segments[0] if self.segments else None

    @property
    def item_id(self) -> int | None:
        """Numeric id of an item identifier, ``None`` for anything else.

        Only ASCII digits count, the same set the router's ``int`` segment accepts.
        """
        if len(self.segments) < 2:
            return None
        last = self.segments[-1]
        if not (last.isascii() and last.isdigit()):
            return None
        return int(last)

    @property
    def parent(self) -> Identifier:
        """The identifier one segment up (item -> collection)."""
        return replace(self, segments=self.segments[:-1])

    def with_appended_id(self, item_id: int) -> Identifier:
        if item_id < 0:
            msg = f"Item ids are non-negative, got {item_id}"
            raise ValueError(msg)
        return replace(self, segments=(*self.segments, str(item_id)))

    def is_within(self, other: Identifier) -> bool:
        """True if ``self`` equals ``other`` or lies below it."""
        if (self.scheme, self.authority) != (other.scheme, other.authority):
            return False
        depth = len(other.segments)
        return self.segments[:depth] == other.segments

    def __str__(self) -> str:
        return f"{self.scheme}://{self.authority}{self.path}"


def as_identifier(value: str | Identifier) -> Identifier:
    """Accept either form at public entry points."""
    if isinstance(value, Identifier):
        return value
    return Identifier.parse(value)


def build_identifier(
    authority: str,
    table: str,
    item_id: int | None = None,
    *,
    scheme: str = DEFAULT_SCHEME,
) -> Identifier:
    """Build a collection identifier, or an item identifier when ``item_id`` is given.

    The table segment is lower-cased to match the routing form.
    """
    identifier = Identifier(scheme=scheme, authority=authority, segments=(table.lower(),))
    if item_id is None:
        return identifier
    return identifier.with_appended_id(item_id)


def parse_id(identifier: str | Identifier) -> int:
    """Return the numeric last segment of an item identifier.

    Raises ``ValueError`` when the identifier has no numeric id segment.
    """
    parsed = as_identifier(identifier)
    item_id = parsed.item_id
    if item_id is None:
        msg = f"Identifier has no id segment: {str(parsed)!r}"
        raise ValueError(msg)
    return item_id
