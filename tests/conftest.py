"""
Shared fixtures for the mongo_crud tests.

Provides:
- An in-memory MongoDB client (mongomock) injected through `client_factory`
- A `SimpleCrud` bound to database "testdb"
- A `SimpleCrud` over a MagicMock client for counting driver calls
"""

from unittest.mock import MagicMock

import mongomock
import pytest

from mongo_crud import SimpleCrud


@pytest.fixture
def mongo_client():
    """In-memory client shared by the mapper and by direct assertions."""
    return mongomock.MongoClient()


@pytest.fixture
def crud(mongo_client):
    """Mapper over database "testdb" backed by mongomock."""
    return SimpleCrud("testdb", client_factory=lambda uri: mongo_client)


@pytest.fixture
def raw_db(mongo_client):
    """Direct handle on "testdb" for seeding and inspecting raw documents."""
    return mongo_client["testdb"]


@pytest.fixture
def mock_client():
    return MagicMock()


@pytest.fixture
def mock_crud(mock_client):
    """Mapper over a MagicMock client."""
    return SimpleCrud("testdb", client_factory=lambda uri: mock_client)
