"""Tests for conduit.catalog and conduit.registry."""

from dataclasses import dataclass

import pytest
from entities import Note, Tag, Unregistered

from conduit.catalog import Catalog, TableInfo, table, table_name_of
from conduit.registry import TypeRegistry


class TestTableDecorator:
    def test_declared_name(self) -> None:
        assert table_name_of(Note) == "Note"

    def test_defaults_to_class_name(self) -> None:
        assert table_name_of(Tag) == "Tag"

    def test_keeps_declared_casing(self) -> None:
        @table("NoteArchive")
        class Archived:
            pass

        assert table_name_of(Archived) == "NoteArchive"

    def test_subclass_does_not_inherit_table(self) -> None:
        @table("Base")
        class Base:
            pass

        class Child(Base):
            pass

        assert table_name_of(Child) == "Child"

    @pytest.mark.parametrize("name", ["", "a/b"])
    def test_invalid_name_raises(self, name: str) -> None:
        with pytest.raises(ValueError, match="Invalid table name"):
            table(name)


class TestCatalog:
    def test_of_keeps_order(self) -> None:
        catalog = Catalog.of(Tag, Note)
        assert [t.table_name for t in catalog] == ["Tag", "Note"]
        assert catalog[0] == TableInfo("Tag", Tag)

    def test_is_a_sequence(self) -> None:
        catalog = Catalog.of(Note, Tag)
        assert len(catalog) == 2
        assert TableInfo("Note", Note) in catalog
        assert catalog.index(TableInfo("Tag", Tag)) == 1

    def test_slice_returns_catalog(self) -> None:
        sliced = Catalog.of(Note, Tag)[1:]
        assert isinstance(sliced, Catalog)
        assert list(sliced) == [TableInfo("Tag", Tag)]

    def test_empty(self) -> None:
        assert len(Catalog()) == 0

    def test_repr(self) -> None:
        assert repr(Catalog.of(Note, Tag)) == "Catalog(Note, Tag)"


class TestTypeRegistry:
    def _registry(self) -> TypeRegistry:
        registry = TypeRegistry()
        for code, info in ((1, TableInfo("Note", Note)), (2, TableInfo("Note", Note))):
            registry.add(code, info)
        registry.add(3, TableInfo("Tag", Tag))
        registry.add(4, TableInfo("Tag", Tag))
        return registry

    def test_type_for(self) -> None:
        registry = self._registry()
        assert registry.type_for(1) is Note
        assert registry.type_for(2) is Note
        assert registry.type_for(4) is Tag

    def test_unknown_code(self) -> None:
        registry = self._registry()
        assert registry.type_for(99) is None
        assert registry.table_for(0) is None

    def test_table_for(self) -> None:
        assert self._registry().table_for(3) == TableInfo("Tag", Tag)

    def test_reverse_lookup(self) -> None:
        registry = self._registry()
        assert registry.info_for(Note) == TableInfo("Note", Note)
        assert registry.info_for(Unregistered) is None

    def test_contains_and_len(self) -> None:
        registry = self._registry()
        assert Note in registry
        assert Unregistered not in registry
        assert len(registry) == 2

    def test_dataclass_entity(self) -> None:
        @dataclass
        class Row:
            id: int

        registry = TypeRegistry()
        registry.add(1, TableInfo("Row", Row))
        assert registry.type_for(1) is Row
