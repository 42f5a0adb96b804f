"""Entity types shared by the test suite."""

from dataclasses import dataclass

from conduit.catalog import table

AUTHORITY = "com.example.notes"

SCHEMA = """
CREATE TABLE "Note" (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    body TEXT
);
CREATE TABLE "Tag" (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    label TEXT,
    weight INTEGER DEFAULT 0
);
"""


@table("Note")
@dataclass(frozen=True, slots=True)
class Note:
    id: int
    title: str
    body: str | None = None


@dataclass(frozen=True, slots=True)
class Tag:
    id: int
    label: str | None
    weight: int = 0


class Unregistered:
    pass
