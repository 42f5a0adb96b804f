"""Content-type labels per route code.

Labels are computed lazily on first request and cached for the life of
the provider::

    vnd.<authority>.dir/vnd.<authority>.<TableName>     # collection
    vnd.<authority>.item/vnd.<authority>.<TableName>    # item

The table name keeps its declared casing, unlike the lower-cased
routing form.

Free-threading safety:
    - Computation is pure, so racing first writers produce identical strings
    - ``dict.setdefault`` publishes each entry atomically; readers never see
      a partial value
    - No lock needed
"""

from conduit.catalog import TableInfo
from conduit.routing.route import Cardinality


def format_mime_type(authority: str, table_name: str, cardinality: Cardinality) -> str:
    """Build the content-type label without touching any cache."""
    return f"vnd.{authority}.{cardinality.value}/vnd.{authority}.{table_name}"


class MimeTypeCache:
    """Route code -> content-type label, computed on first access.

    The cache holds at most one entry per route code, so its size is
    bounded by ``capacity`` (two routes per registered entity type).
    A code outside that bound is a programming error and raises
    ``RuntimeError`` instead of growing the cache.
    """

    __slots__ = ("_authority", "_capacity", "_entries")

    def __init__(self, authority: str, capacity: int) -> None:
        self._authority = authority
        self._capacity = capacity
        self._entries: dict[int, str] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    def mime_type_for(self, code: int, info: TableInfo, cardinality: Cardinality) -> str:
        cached = self._entries.get(code)
        if cached is not None:
            return cached

        if not 1 <= code <= self._capacity:
            msg = f"Route code {code} is outside this provider's {self._capacity} routes."
            raise RuntimeError(msg)

        mime_type = format_mime_type(self._authority, info.table_name, cardinality)
        return self._entries.setdefault(code, mime_type)

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def __len__(self) -> int:
        return len(self._entries)
