"""Tests for conduit.__init__ — lazy imports cover all public names."""

import pytest

import conduit


@pytest.mark.parametrize("name", conduit.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(conduit, name)
    assert obj is not None, f"conduit.{name} resolved to None"


def test_unknown_name_raises_attribute_error() -> None:
    with pytest.raises(AttributeError, match="no attribute"):
        conduit.__getattr__("ThisDoesNotExist")
