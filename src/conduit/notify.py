"""Change notification.

The dispatcher tells observers *that* a resource changed, never *how*:
a notification carries only the identifier. Delivery goes through an
``ObserverDispatch``, which is anything with a ``notify_change`` method::

    class Audit:
        def notify_change(self, identifier: Identifier) -> None:
            log.info("changed %s", identifier)

    notifier = ChangeNotifier(Audit())

``ChangeObservers`` is the in-process dispatch used by default.

Free-threading safety:
    - ChangeObservers guards its observer list with a Lock
    - Callbacks run outside the lock, on the notifying thread
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from conduit.identifiers import Identifier, as_identifier

type Observer = Callable[[Identifier], None]


class ObserverDispatch(Protocol):
    """Receives change notifications from a ``ChangeNotifier``."""

    def notify_change(self, identifier: Identifier) -> None: ...


class ChangeNotifier:
    """Synchronous, fire-and-forget bridge to an ``ObserverDispatch``.

    Notifications are delivered in call order on the calling thread.
    """

    __slots__ = ("_dispatch",)

    def __init__(self, dispatch: ObserverDispatch) -> None:
        self._dispatch = dispatch

    @property
    def dispatch(self) -> ObserverDispatch:
        return self._dispatch

    def notify(self, identifier: Identifier) -> None:
        self._dispatch.notify_change(identifier)


@dataclass(frozen=True, slots=True)
class _Registration:
    identifier: Identifier
    callback: Observer
    descendants: bool

    def wants(self, changed: Identifier) -> bool:
        # A change to a collection reaches everything registered below it
        if self.identifier.is_within(changed):
            return True
        return self.descendants and changed.is_within(self.identifier)


class ChangeObservers:
    """In-process observer registry.

    Usage::

        observers = ChangeObservers()
        observers.register("content://com.example.notes/note", on_change, descendants=True)

    An observer fires when the changed identifier equals the registered
    one, when the change is to an ancestor of it (a collection change
    reaches item observers), or, with ``descendants=True``, when the
    change lies below it. Callback errors propagate to the notifier.
    """

    __slots__ = ("_lock", "_registrations")

    def __init__(self) -> None:
        self._registrations: list[_Registration] = []
        self._lock = threading.Lock()

    def register(
        self,
        identifier: str | Identifier,
        callback: Observer,
        *,
        descendants: bool = False,
    ) -> None:
        registration = _Registration(as_identifier(identifier), callback, descendants)
        with self._lock:
            self._registrations.append(registration)

    def unregister(self, callback: Observer) -> None:
        """Remove every registration of ``callback``."""
        with self._lock:
            self._registrations = [r for r in self._registrations if r.callback != callback]

    def notify_change(self, identifier: Identifier) -> None:
        with self._lock:
            targets = [r.callback for r in self._registrations if r.wants(identifier)]
        for callback in targets:
            callback(identifier)

    def __len__(self) -> int:
        with self._lock:
            return len(self._registrations)
