"""Identifier -> table dispatch.

The dispatcher resolves every identifier through the router before the
backing store is touched, forwards the call, and tells observers about
mutations. It owns no mutable state of its own and holds no lock
across store calls.

Notification policy:
    - ``insert`` notifies with the new item identifier, only when the
      store produced a positive id
    - ``update`` and ``delete`` notify with the caller's identifier exactly
      once, even when zero rows were affected
    - ``query`` never notifies
"""

import logging
from collections.abc import Iterable, Sequence

from conduit.data.results import ResultSet
from conduit.data.store import BackingStore, SelectionArgs, Values
from conduit.errors import RoutingError, UnknownEntityError
from conduit.identifiers import DEFAULT_SCHEME, Identifier, as_identifier, build_identifier
from conduit.mime import MimeTypeCache
from conduit.notify import ChangeNotifier
from conduit.routing.route import Cardinality, RouteMatch
from conduit.routing.router import Router

logger = logging.getLogger("conduit.dispatch")


class Dispatcher:
    """Routes CRUD calls on identifiers to the backing store.

    Usage::

        dispatcher = Dispatcher(router, TableStore(db), ChangeNotifier(observers))
        note = await dispatcher.insert("content://com.example.notes/note", {"title": "hi"})
        rows = await dispatcher.query(note)
    """

    __slots__ = ("_mime_types", "_notifier", "_router", "_scheme", "_store")

    def __init__(
        self,
        router: Router,
        store: BackingStore,
        notifier: ChangeNotifier,
        *,
        mime_types: MimeTypeCache | None = None,
        scheme: str = DEFAULT_SCHEME,
    ) -> None:
        self._router = router
        self._store = store
        self._notifier = notifier
        if mime_types is None:
            mime_types = MimeTypeCache(router.authority, capacity=2 * len(router.types))
        self._mime_types = mime_types
        self._scheme = scheme

    @property
    def router(self) -> Router:
        return self._router

    @property
    def store(self) -> BackingStore:
        return self._store

    @property
    def mime_types(self) -> MimeTypeCache:
        return self._mime_types

    def _route(self, identifier: str | Identifier) -> tuple[Identifier, RouteMatch]:
        try:
            parsed = as_identifier(identifier)
        except ValueError as exc:
            raise RoutingError(str(identifier), str(exc)) from exc
        match = self._router.match(parsed)
        if match is None:
            raise RoutingError(str(parsed))
        return parsed, match

    # -- Identifiers and content types --

    def create_identifier(self, entity_type: type, item_id: int | None = None) -> Identifier:
        """Collection identifier for ``entity_type``, or item identifier when ``item_id`` is given."""
        info = self._router.types.info_for(entity_type)
        if info is None:
            msg = f"{entity_type.__name__} is not a registered entity type"
            raise UnknownEntityError(msg)
        return build_identifier(
            self._router.authority, info.table_name, item_id, scheme=self._scheme
        )

    def get_type(self, identifier: str | Identifier) -> str | None:
        """Content-type label for ``identifier``, ``None`` if it does not route."""
        match = self._router.match(identifier)
        if match is None:
            return None
        return self._mime_types.mime_type_for(match.code, match.table, match.cardinality)

    # -- CRUD --

    async def insert(self, identifier: str | Identifier, values: Values) -> Identifier | None:
        """Insert one row through a collection identifier.

        Returns the new item identifier, or ``None`` when the store
        rejected the insert (no positive id). Raises ``RoutingError`` for
        item identifiers.
        """
        parsed, match = self._route(identifier)
        if match.cardinality is not Cardinality.COLLECTION:
            raise RoutingError(str(parsed), "insert needs a collection identifier")

        item_id = await self._store.insert(match.table.table_name, values)
        logger.debug("insert %s -> %s", parsed, item_id)
        if item_id is None or item_id <= 0:
            return None

        created = self.create_identifier(match.entry.entity_type, item_id)
        self._notifier.notify(created)
        return created

    async def bulk_insert(self, identifier: str | Identifier, values_list: Iterable[Values]) -> int:
        """Insert each value set in turn. Returns how many rows were created."""
        created = 0
        for values in values_list:
            if await self.insert(identifier, values) is not None:
                created += 1
        return created

    async def update(
        self,
        identifier: str | Identifier,
        values: Values,
        selection: str | None = None,
        selection_args: SelectionArgs = (),
    ) -> int:
        """Update the rows ``selection`` picks. Returns rows affected."""
        parsed, match = self._route(identifier)
        count = await self._store.update(match.table.table_name, values, selection, selection_args)
        logger.debug("update %s -> %d rows", parsed, count)
        self._notifier.notify(parsed)
        return count

    async def delete(
        self,
        identifier: str | Identifier,
        selection: str | None = None,
        selection_args: SelectionArgs = (),
    ) -> int:
        """Delete the rows ``selection`` picks. Returns rows affected."""
        parsed, match = self._route(identifier)
        count = await self._store.delete(match.table.table_name, selection, selection_args)
        logger.debug("delete %s -> %d rows", parsed, count)
        self._notifier.notify(parsed)
        return count

    async def query(
        self,
        identifier: str | Identifier,
        projection: Sequence[str] | None = None,
        selection: str | None = None,
        selection_args: SelectionArgs = (),
        sort_order: str | None = None,
    ) -> ResultSet:
        """Read rows. Item identifiers do not add an id filter by themselves."""
        _, match = self._route(identifier)
        return await self._store.query(
            match.table.table_name,
            projection,
            selection,
            selection_args,
            None,
            None,
            sort_order,
        )
