"""Shared fixtures: a file-backed SQLite database and a started provider."""

import pytest
from entities import AUTHORITY, SCHEMA, Note, Tag

from conduit.catalog import Catalog
from conduit.config import ProviderConfig
from conduit.data import Database
from conduit.provider import Provider
from conduit.testing import RecordingDispatch


@pytest.fixture
async def db(tmp_path):
    """A connected database with the Note and Tag tables."""
    db = Database(f"sqlite:///{tmp_path / 'conduit.db'}")
    await db.connect()
    await db.execute_script(SCHEMA)
    yield db
    await db.disconnect()


@pytest.fixture
def observers() -> RecordingDispatch:
    return RecordingDispatch()


@pytest.fixture
async def provider(tmp_path, observers):
    """A started provider serving Note (codes 1, 2) and Tag (codes 3, 4)."""
    config = ProviderConfig(
        authority=AUTHORITY,
        database_url=f"sqlite:///{tmp_path / 'provider.db'}",
    )
    provider = Provider(config, catalog=Catalog.of(Note, Tag), observers=observers)
    async with provider:
        await provider.db.execute_script(SCHEMA)
        yield provider
