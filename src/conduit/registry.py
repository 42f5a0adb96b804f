"""Route code -> entity type lookup.

Populated by ``Router.register`` and read-only once the router is
compiled. Lookups for codes the router never produced return ``None``;
callers are expected to pass codes taken from a ``RouteMatch``.
"""

from conduit.catalog import TableInfo


class TypeRegistry:
    """Maps route codes to the ``TableInfo`` they address."""

    __slots__ = ("_by_code", "_by_type")

    def __init__(self) -> None:
        self._by_code: dict[int, TableInfo] = {}
        self._by_type: dict[type, TableInfo] = {}

    def add(self, code: int, info: TableInfo) -> None:
        self._by_code[code] = info
        self._by_type[info.entity_type] = info

    def type_for(self, code: int) -> type | None:
        info = self._by_code.get(code)
        return info.entity_type if info is not None else None

    def table_for(self, code: int) -> TableInfo | None:
        return self._by_code.get(code)

    def info_for(self, entity_type: type) -> TableInfo | None:
        """Reverse lookup used when building identifiers from a type."""
        return self._by_type.get(entity_type)

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._by_type

    def __len__(self) -> int:
        """Number of registered entity types (not route codes)."""
        return len(self._by_type)
