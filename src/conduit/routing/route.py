"""RouteEntry and RouteMatch frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from conduit.catalog import TableInfo


class Cardinality(Enum):
    """Whether an identifier addresses a whole table or a single row."""

    COLLECTION = "dir"
    ITEM = "item"

    @classmethod
    def of(cls, code: int) -> Cardinality:
        """Derive cardinality from a route code: odd codes are collections, even codes items."""
        return cls.ITEM if code % 2 == 0 else cls.COLLECTION


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Static:  ``note``       (is_param=False)
    Typed:   ``{id:int}``   (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One registered pattern.

    Every entity type owns exactly two: the collection pattern ``note``
    and the item pattern ``note/{id:int}``.
    """

    pattern: str
    code: int
    table: TableInfo
    cardinality: Cardinality

    @property
    def entity_type(self) -> type:
        return self.table.entity_type


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful identifier match."""

    entry: RouteEntry
    path_params: dict[str, str]

    @property
    def code(self) -> int:
        return self.entry.code

    @property
    def cardinality(self) -> Cardinality:
        return self.entry.cardinality

    @property
    def table(self) -> TableInfo:
        return self.entry.table

    @property
    def item_id(self) -> int | None:
        raw = self.path_params.get("id")
        return int(raw) if raw is not None else None
