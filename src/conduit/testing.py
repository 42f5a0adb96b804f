"""Test utilities for conduit providers.

``RecordingDispatch`` stands in for a real observer transport and keeps
every notification in order::

    observers = RecordingDispatch()
    provider = Provider(config, observers=observers)
    await provider.update(identifier, {"title": "x"}, "id = ?", [1])
    assert observers.changes == [identifier]
"""

from conduit.identifiers import Identifier, as_identifier


class RecordingDispatch:
    """An ``ObserverDispatch`` that records notified identifiers."""

    __slots__ = ("changes",)

    def __init__(self) -> None:
        self.changes: list[Identifier] = []

    def notify_change(self, identifier: Identifier) -> None:
        self.changes.append(identifier)

    def count(self, identifier: str | Identifier) -> int:
        """How many times ``identifier`` was notified."""
        target = as_identifier(identifier)
        return sum(1 for change in self.changes if change == target)

    def clear(self) -> None:
        self.changes.clear()
