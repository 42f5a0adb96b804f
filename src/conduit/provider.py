"""Conduit provider — the bootstrap object.

Mutable during setup (table registration).
Started on first use: the catalog is compiled into a Router, a
MimeTypeCache and a Dispatcher, which stay read-only from then on.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from conduit.catalog import Catalog, TableInfo, table_name_of
from conduit.config import ProviderConfig
from conduit.data.database import Database
from conduit.data.results import ResultSet
from conduit.data.store import BackingStore, SelectionArgs, TableStore, Values
from conduit.dispatcher import Dispatcher
from conduit.identifiers import Identifier
from conduit.mime import MimeTypeCache
from conduit.notify import ChangeNotifier, ChangeObservers, ObserverDispatch
from conduit.routing.router import Router

logger = logging.getLogger("conduit.provider")


class Provider:
    """A content provider serving one authority.

    Usage::

        provider = Provider(ProviderConfig(authority="com.example.notes"))

        @provider.table("Notes")
        @dataclass(frozen=True, slots=True)
        class Note:
            id: int
            title: str

        async with provider:
            created = await provider.insert(provider.create_identifier(Note), {"title": "hi"})
            rows = await provider.query(created, selection="id = ?", selection_args=[parse_id(created)])

    Thread safety:
        Registration is single-threaded (decorators at import time).
        Startup uses a Lock + double-check so exactly one thread builds
        the routing tables, even when several callers hit the provider
        concurrently on first use.
    """

    __slots__ = (
        "_db",
        "_dispatcher",
        "_observers",
        "_pending",
        "_start_lock",
        "_started",
        "_store",
        "config",
    )

    def __init__(
        self,
        config: ProviderConfig | None = None,
        *,
        catalog: Iterable[TableInfo] = (),
        observers: ObserverDispatch | None = None,
        store: BackingStore | None = None,
    ) -> None:
        self.config: ProviderConfig = config or ProviderConfig()
        self._pending: list[TableInfo] = list(catalog)
        self._observers: ObserverDispatch = observers if observers is not None else ChangeObservers()
        # None means a TableStore over config.database_url
        self._store: BackingStore | None = store
        self._db: Database | None = None
        self._started = False
        self._start_lock = threading.Lock()
        self._dispatcher: Dispatcher | None = None

    # -- Setup --

    def register(self, entity_type: type, table_name: str | None = None) -> None:
        """Add one entity type to the catalog."""
        self._check_not_started()
        name = table_name or table_name_of(entity_type)
        self._pending.append(TableInfo(table_name=name, entity_type=entity_type))

    def table[T: type](self, name: str | None = None) -> Callable[[T], T]:
        """Class decorator form of ``register``."""

        def decorator(cls: T) -> T:
            self.register(cls, name)
            return cls

        return decorator

    @property
    def catalog(self) -> Catalog:
        return Catalog(self._pending)

    @property
    def observers(self) -> ObserverDispatch:
        return self._observers

    @property
    def db(self) -> Database | None:
        """The database behind the default store, ``None`` with a custom store."""
        if self._db is None and self._store is None:
            self._db = Database(
                self.config.database_url,
                pool_size=self.config.pool_size,
                echo=self.config.echo,
            )
        return self._db

    # -- Lifecycle --

    def startup(self) -> None:
        """Build the routing tables once. Later calls are no-ops."""
        if self._started:
            return
        with self._start_lock:
            if self._started:
                return
            self._dispatcher = self._build(self.catalog)
            self._started = True

    def rebuild(self, catalog: Iterable[TableInfo] | None = None) -> None:
        """Tear down and rebuild every routing table from scratch.

        Router, TypeRegistry and MimeTypeCache are replaced together; the
        new set is built completely before it becomes visible. With a
        ``catalog`` the registered tables are replaced as well.
        """
        with self._start_lock:
            pending = list(catalog) if catalog is not None else list(self._pending)
            dispatcher = self._build(Catalog(pending))
            self._pending = pending
            self._dispatcher = dispatcher
            self._started = True

    def _build(self, catalog: Catalog) -> Dispatcher:
        """Compile a catalog into a fresh dispatcher.

        MUST only be called while holding _start_lock.
        """
        router = Router(self.config.authority)
        for info in catalog:
            collection, item = router.register(info.table_name, info.entity_type)
            logger.debug(
                "route %d %s, %d %s -> %s",
                collection.code,
                collection.pattern,
                item.code,
                item.pattern,
                info.entity_type.__name__,
            )
        router.compile()

        store = self._store
        if store is None:
            db = self.db
            assert db is not None
            store = TableStore(db, id_column=self.config.id_column)

        logger.info(
            "Provider %s ready: %d tables, %d routes",
            router.authority,
            len(catalog),
            len(router.entries),
        )
        return Dispatcher(
            router,
            store,
            ChangeNotifier(self._observers),
            mime_types=MimeTypeCache(router.authority, capacity=2 * len(catalog)),
            scheme=self.config.scheme,
        )

    async def connect(self) -> None:
        """Start the provider and open the database. Fails fast on bad config."""
        self.startup()
        if self.db is not None:
            await self.db.connect()

    async def close(self) -> None:
        if self._db is not None:
            await self._db.disconnect()

    async def __aenter__(self) -> Provider:
        await self.connect()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()

    # -- Runtime --

    @property
    def dispatcher(self) -> Dispatcher:
        self.startup()
        assert self._dispatcher is not None
        return self._dispatcher

    @property
    def router(self) -> Router:
        return self.dispatcher.router

    def create_identifier(self, entity_type: type, item_id: int | None = None) -> Identifier:
        return self.dispatcher.create_identifier(entity_type, item_id)

    def get_type(self, identifier: str | Identifier) -> str | None:
        return self.dispatcher.get_type(identifier)

    async def insert(self, identifier: str | Identifier, values: Values) -> Identifier | None:
        return await self.dispatcher.insert(identifier, values)

    async def bulk_insert(self, identifier: str | Identifier, values_list: Iterable[Values]) -> int:
        return await self.dispatcher.bulk_insert(identifier, values_list)

    async def update(
        self,
        identifier: str | Identifier,
        values: Values,
        selection: str | None = None,
        selection_args: SelectionArgs = (),
    ) -> int:
        return await self.dispatcher.update(identifier, values, selection, selection_args)

    async def delete(
        self,
        identifier: str | Identifier,
        selection: str | None = None,
        selection_args: SelectionArgs = (),
    ) -> int:
        return await self.dispatcher.delete(identifier, selection, selection_args)

    async def query(
        self,
        identifier: str | Identifier,
        projection: Sequence[str] | None = None,
        selection: str | None = None,
        selection_args: SelectionArgs = (),
        sort_order: str | None = None,
    ) -> ResultSet:
        return await self.dispatcher.query(
            identifier, projection, selection, selection_args, sort_order
        )

    # -- Internal --

    def _check_not_started(self) -> None:
        if self._started:
            msg = (
                "Cannot register tables after the provider has started. "
                "Register every table before the first request, or use rebuild()."
            )
            raise RuntimeError(msg)
