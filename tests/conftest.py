"""
Pytest configuration and fixtures for the marker pipeline tests.

The MongoDB client is replaced by per-collection MagicMocks that return real
pymongo result objects, so no server is needed.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pymongo.results import BulkWriteResult, InsertManyResult, InsertOneResult, UpdateResult

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from marker_config import MarkerStoreConfig  # noqa: E402
from marker_db_queries import MarkerDatabase  # noqa: E402
from marker_models import Category, Event, Marker, Tag  # noqa: E402
from marker_writer import MarkerWriter  # noqa: E402


# ==================== PYTEST CONFIGURATION ====================

def pytest_configure(config):
    """Add custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: unit test (fast, no I/O)")


# ==================== MOCK FIXTURES ====================

FIXED_NOW = 1700000000


def _mock_collection(name):
    collection = MagicMock(name=name)
    collection.name = name
    collection.insert_one.side_effect = lambda doc, **kw: InsertOneResult(doc["_id"], True)
    collection.insert_many.side_effect = lambda docs, **kw: InsertManyResult([None] * len(docs), True)
    collection.bulk_write.side_effect = lambda requests, **kw: BulkWriteResult({"nUpserted": len(requests)}, True)
    collection.update_one.return_value = UpdateResult({"n": 1, "nModified": 1}, True)
    return collection


class _MockDatabase(dict):
    def __missing__(self, key):
        self[key] = _mock_collection(key)
        return self[key]


@pytest.fixture
def store_config():
    """An isolated namespace, distinct from the production defaults."""
    return MarkerStoreConfig(database_name="markers_test", timeout=5)


@pytest.fixture
def mongo_client(store_config):
    """Mapping of database name to a lazily filled mapping of mock collections."""
    client = MagicMock()
    databases = {store_config.database_name: _MockDatabase()}
    client.__getitem__.side_effect = databases.__getitem__
    return client


@pytest.fixture
def database(mongo_client, store_config):
    return MarkerDatabase(mongo_client, store_config)


@pytest.fixture
def writer(database, store_config):
    return MarkerWriter(database, store_config, clock=lambda: FIXED_NOW)


@pytest.fixture
def make_marker():
    """Factory for markers with sensible defaults."""
    def _make(name="Motion", start=100, end=110, organisation_id="A", tags=(), events=(), categories=()):
        return Marker(
            name=name,
            start_timestamp=start,
            end_timestamp=end,
            organisation_id=organisation_id,
            device_id="camera-1",
            group_id="group-1",
            tags=[Tag(name=t) for t in tags],
            events=[Event(name=n, start_timestamp=s, end_timestamp=e) for n, s, e in events],
            categories=[Category(name=c) for c in categories],
        )
    return _make


@pytest.fixture
def written_collections(database):
    """Returns a callable listing every collection that received a write."""
    def _written():
        names = []
        for name, collection in database.db.items():
            if (collection.insert_one.called or collection.insert_many.called
                    or collection.bulk_write.called or collection.update_one.called):
                names.append(name)
        return names
    return _written
