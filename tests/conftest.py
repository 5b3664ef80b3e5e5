"""
Shared pytest fixtures for blog-mcp-server tests.

This module provides:
- Settings isolated from the developer's ``.env``
- An in-memory Mongo client factory and a connector bound to it
- The three-author catalog used by the substring-match scenarios

Usage:
    Fixtures are auto-discovered by pytest.  Builders live in
    ``tests._support.fake_mongo``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from blogmcp.core.settings import BridgeSettings
from blogmcp.framework.logging import clear_context
from blogmcp.store.connector import StoreConnector
from tests._support.fake_mongo import FakeMongo, make_entry


@pytest.fixture(autouse=True)
def _isolate():
    """Reset the logging context around every test."""
    clear_context()
    yield
    clear_context()


@pytest.fixture
def settings() -> BridgeSettings:
    return BridgeSettings(_env_file=None)


@pytest.fixture
def fake_mongo() -> FakeMongo:
    return FakeMongo()


@pytest.fixture
def connector(settings: BridgeSettings, fake_mongo: FakeMongo) -> StoreConnector:
    return StoreConnector(settings, client_factory=fake_mongo)


@pytest.fixture
def three_authors(fake_mongo: FakeMongo) -> list[dict[str, Any]]:
    docs = [make_entry("Anna Lee"), make_entry("Bob Anderson"), make_entry("Cara Smith")]
    fake_mongo.collection.docs = docs
    return docs


@pytest.fixture
def store_failure() -> OperationFailure:
    return OperationFailure("operation exceeded time limit", code=50)


@pytest.fixture
def loose_documents(fake_mongo: FakeMongo) -> list[dict[str, Any]]:
    """Documents the external writer left partly empty, with a mongoose timestamp."""
    full = make_entry("Anna")
    full["createdAt"] = datetime(2024, 1, 2, 3, 4, 5)
    nulls = make_entry("Dana")
    nulls.update(description=None, title=None, tags=None)
    sparse = {"_id": ObjectId(), "author": None}
    docs = [full, nulls, sparse]
    fake_mongo.collection.docs = docs
    return docs
