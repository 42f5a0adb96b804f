"""Query results.

A ``ResultSet`` is what a query hands back through the dispatcher: the
column names in projection order plus the rows as dicts. It stays
untyped until the caller asks for dataclasses::

    rows = await dispatcher.query("content://com.example.notes/note")
    notes = rows.as_type(Note)

Type coercion handles the mismatch between database drivers (SQLite returns
strings for some column types) and dataclass annotations. Fields annotated
as ``int`` coerce ``"45"`` to ``45`` and empty strings to ``0``.
"""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, get_args, get_origin

type Row = dict[str, Any]

# Scalar types we know how to coerce from database driver values.
_COERCIBLE: dict[type, Any] = {
    int: lambda v: int(v) if v != "" else 0,
    float: lambda v: float(v) if v != "" else 0.0,
    bool: lambda v: bool(int(v)) if isinstance(v, str) else bool(v),
    str: str,
}


@dataclass(frozen=True, slots=True)
class ResultSet:
    """Rows returned by a query, in order, with their column names."""

    columns: tuple[str, ...]
    rows: tuple[Row, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def first(self) -> Row | None:
        return self.rows[0] if self.rows else None

    def column(self, name: str) -> list[Any]:
        """All values of one column. Raises ``KeyError`` for unknown columns."""
        if name not in self.columns:
            raise KeyError(name)
        return [row[name] for row in self.rows]

    def as_type[T](self, cls: type[T]) -> list[T]:
        return map_rows(cls, list(self.rows))


def _coercion_targets(cls: type) -> dict[str, type | None]:
    """``{field_name: target_type}``, ``None`` where no coercion applies."""
    targets: dict[str, type | None] = {}
    for f in dataclasses.fields(cls):
        annotation = f.type
        # X | None coerces to X
        if get_origin(annotation) is types.UnionType:
            args = [a for a in get_args(annotation) if a is not type(None)]
            annotation = args[0] if len(args) == 1 else None
        targets[f.name] = annotation if annotation in _COERCIBLE else None
    return targets


def _coerce(value: Any, target: type | None) -> Any:
    if target is None or value is None or isinstance(value, target):
        return value
    return _COERCIBLE[target](value)


def _require_dataclass(cls: type) -> None:
    if not dataclasses.is_dataclass(cls):
        msg = f"{cls.__name__} is not a dataclass — rows map onto dataclasses only"
        raise TypeError(msg)


def map_row[T](cls: type[T], row: Row) -> T:
    """Map one row onto a dataclass instance.

    Columns without a matching field are ignored. Raises ``TypeError`` if
    required fields are missing from the row.
    """
    _require_dataclass(cls)
    targets = _coercion_targets(cls)
    return cls(**{k: _coerce(v, targets[k]) for k, v in row.items() if k in targets})


def map_rows[T](cls: type[T], rows: list[Row]) -> list[T]:
    _require_dataclass(cls)
    targets = _coercion_targets(cls)
    return [
        cls(**{k: _coerce(v, targets[k]) for k, v in row.items() if k in targets})
        for row in rows
    ]
