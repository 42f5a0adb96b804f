"""Compiled router with trie-based identifier matching.

Tables are registered during startup and compiled into an immutable
lookup structure before the provider serves traffic.
"""

import re
from dataclasses import dataclass

from conduit.catalog import TableInfo
from conduit.errors import ConfigurationError, RoutingError
from conduit.identifiers import Identifier, as_identifier
from conduit.registry import TypeRegistry
from conduit.routing.params import CONVERTERS
from conduit.routing.route import Cardinality, PathSegment, RouteEntry, RouteMatch


def parse_path(pattern: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "note"          -> [PathSegment("note")]
        "note/{id:int}" -> [PathSegment("note"), PathSegment("{id:int}", is_param=True, ...)]
        "note/{slug}"   -> [PathSegment("note"), PathSegment("{slug}", is_param=True, param_type="str")]
    """
    segments: list[PathSegment] = []
    for part in pattern.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = (
                    f"Unknown converter {param_type!r} in pattern {pattern!r}. "
                    f"Supported: {', '.join(sorted(CONVERTERS))}"
                )
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            # Static segments match case-insensitively
            segments.append(PathSegment(value=part.lower()))
    return segments


class _TrieNode:
    """A node in the route trie. Mutable during compilation only."""

    __slots__ = ("children", "entry", "param_child")

    def __init__(self) -> None:
        # Static segment children: "note" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param pattern per level)
        self.param_child: _ParamEdge | None = None
        # Entry terminating at this node
        self.entry: RouteEntry | None = None


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    param_type: str
    regex: re.Pattern[str]
    node: _TrieNode


class Router:
    """Compiled router mapping identifiers to route entries.

    Owns the authority, the trie and the ``TypeRegistry`` it populates.

    Usage::

        router = Router("com.example.notes")
        router.register("Note", Note)
        router.compile()
        match = router.match("content://com.example.notes/note/42")
        match.code          # 2
        match.cardinality   # Cardinality.ITEM

    Route codes are deterministic: the i-th registered table gets ``2i + 1``
    for its collection route and ``2i + 2`` for its item route.
    """

    __slots__ = ("_authority", "_compiled", "_entries", "_root", "_tables", "types")

    def __init__(self, authority: str) -> None:
        if not authority or "/" in authority:
            msg = f"Invalid authority: {authority!r}"
            raise ConfigurationError(msg)
        self._authority = authority
        self._root = _TrieNode()
        self._compiled = False
        self._entries: list[RouteEntry] = []
        self._tables: set[str] = set()
        self.types = TypeRegistry()

    @property
    def authority(self) -> str:
        return self._authority

    def register(self, table_name: str, entity_type: type) -> tuple[RouteEntry, RouteEntry]:
        """Register the collection and item routes for one table.

        Returns ``(collection_entry, item_entry)``.
        """
        if self._compiled:
            msg = "Cannot register tables after compilation."
            raise RuntimeError(msg)
        if not table_name or "/" in table_name:
            msg = f"Invalid table name: {table_name!r}"
            raise ConfigurationError(msg)

        key = table_name.lower()
        if key in self._tables:
            msg = f"Table {table_name!r} is already registered (table names are case-insensitive)."
            raise ConfigurationError(msg)
        if entity_type in self.types:
            msg = f"Entity type {entity_type.__name__} is already registered."
            raise ConfigurationError(msg)

        info = TableInfo(table_name=table_name, entity_type=entity_type)
        index = len(self._tables)
        collection = RouteEntry(
            pattern=key,
            code=index * 2 + 1,
            table=info,
            cardinality=Cardinality.COLLECTION,
        )
        item = RouteEntry(
            pattern=f"{key}/{{id:int}}",
            code=index * 2 + 2,
            table=info,
            cardinality=Cardinality.ITEM,
        )
        self._add(collection)
        self._add(item)
        self._tables.add(key)
        return collection, item

    def _add(self, entry: RouteEntry) -> None:
        node = self._root
        for seg in parse_path(entry.pattern):
            if seg.is_param:
                if node.param_child is None:
                    pattern = CONVERTERS[seg.param_type]
                    node.param_child = _ParamEdge(
                        param_name=seg.param_name or "",
                        param_type=seg.param_type,
                        regex=re.compile(pattern),
                        node=_TrieNode(),
                    )
                node = node.param_child.node
            else:
                if seg.value not in node.children:
                    node.children[seg.value] = _TrieNode()
                node = node.children[seg.value]

        if node.entry is not None:
            msg = f"Pattern {entry.pattern!r} conflicts with {node.entry.pattern!r}."
            raise ConfigurationError(msg)
        node.entry = entry
        self.types.add(entry.code, entry.table)
        self._entries.append(entry)

    @property
    def entries(self) -> tuple[RouteEntry, ...]:
        """All registered entries in route-code order."""
        return tuple(sorted(self._entries, key=lambda e: e.code))

    def compile(self) -> None:
        """Freeze the router. No more tables can be registered."""
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    def match(self, identifier: str | Identifier) -> RouteMatch | None:
        """Match an identifier against the compiled routes.

        Returns ``None`` when the identifier is malformed, names another
        authority, or has a path no pattern matches exactly.
        """
        try:
            parsed = as_identifier(identifier)
        except ValueError:
            return None
        if parsed.authority != self._authority:
            return None

        result = self._match_node(self._root, parsed.segments, 0, {})
        if result is None:
            return None
        entry, params = result
        return RouteMatch(entry=entry, path_params=params)

    def resolve(self, identifier: str | Identifier) -> RouteMatch:
        """Like ``match`` but raises ``RoutingError`` when nothing matches."""
        match = self.match(identifier)
        if match is None:
            raise RoutingError(str(identifier))
        return match

    def _match_node(
        self,
        node: _TrieNode,
        parts: tuple[str, ...],
        index: int,
        params: dict[str, str],
    ) -> tuple[RouteEntry, dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        # All parts consumed: only a terminal node is a match
        if index == len(parts):
            if node.entry is not None:
                return node.entry, params
            return None

        part = parts[index]

        # 1. Try static child first (exact, case-insensitive)
        child = node.children.get(part.lower())
        if child is not None:
            result = self._match_node(child, parts, index + 1, params)
            if result is not None:
                return result

        # 2. Try parameter child
        if node.param_child is not None:
            edge = node.param_child
            if edge.regex.fullmatch(part):
                new_params = {**params, edge.param_name: part}
                result = self._match_node(edge.node, parts, index + 1, new_params)
                if result is not None:
                    return result

        return None
