"""
In-memory stand-in for ``pymongo.AsyncMongoClient``.

Covers the client, database, collection and cursor surface the store
connector uses, and understands the ``$regex``/``$options`` filter the
query translator emits.
"""

from __future__ import annotations

import re
from typing import Any

from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError


def _get_path(doc: Any, path: str) -> Any:
    for part in path.split("."):
        if not isinstance(doc, dict):
            return None
        doc = doc.get(part)
    return doc


def _matches(doc: dict[str, Any], filter: dict[str, Any]) -> bool:
    for path, cond in filter.items():
        value = _get_path(doc, path)
        if isinstance(cond, dict) and "$regex" in cond:
            flags = re.IGNORECASE if "i" in cond.get("$options", "") else 0
            if not isinstance(value, str) or re.search(cond["$regex"], value, flags) is None:
                return False
        elif value != cond:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]], fail_with: Exception | None = None):
        self._docs = docs
        self._limit = 0
        self._sort: tuple[str, int] | None = None
        self._fail_with = fail_with

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._sort = (key, direction)
        return self

    def limit(self, n: int) -> "FakeCursor":
        self._limit = n
        return self

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        if self._fail_with is not None:
            raise self._fail_with
        docs = list(self._docs)
        if self._sort is not None:
            key, direction = self._sort
            docs.sort(key=lambda d: str(_get_path(d, key)), reverse=direction < 0)
        # Same as the driver: 0 means no limit
        if self._limit:
            docs = docs[: self._limit]
        return [dict(d) for d in docs]


class FakeCollection:
    def __init__(self, docs: list[dict[str, Any]] | None = None):
        self.docs: list[dict[str, Any]] = list(docs or [])
        self.find_calls: list[tuple[dict[str, Any], dict[str, Any]]] = []
        self.fail_with: Exception | None = None
        self.last_cursor: FakeCursor | None = None

    def find(self, filter: dict[str, Any] | None = None, **kwargs: Any) -> FakeCursor:
        filter = dict(filter or {})
        self.find_calls.append((filter, kwargs))
        self.last_cursor = FakeCursor(
            [d for d in self.docs if _matches(d, filter)],
            fail_with=self.fail_with,
        )
        return self.last_cursor


class FakeAdmin:
    def __init__(self, mongo: "FakeMongo"):
        self._mongo = mongo

    async def command(self, name: str) -> dict[str, Any]:
        if self._mongo.unreachable:
            raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")
        return {"ok": 1.0}


class FakeClient:
    def __init__(self, mongo: "FakeMongo", uri: str, kwargs: dict[str, Any]):
        self._mongo = mongo
        self.uri = uri
        self.kwargs = kwargs
        self.admin = FakeAdmin(mongo)
        self.close_calls = 0

    async def aconnect(self) -> None:
        if self._mongo.unreachable:
            raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")

    def __getitem__(self, db_name: str) -> "FakeDatabase":
        self._mongo.database_names.append(db_name)
        return FakeDatabase(self._mongo)

    async def close(self) -> None:
        self.close_calls += 1
        if self._mongo.close_error is not None:
            raise self._mongo.close_error


class FakeDatabase:
    def __init__(self, mongo: "FakeMongo"):
        self._mongo = mongo

    def __getitem__(self, collection_name: str) -> FakeCollection:
        self._mongo.collection_names.append(collection_name)
        return self._mongo.collection


class FakeMongo:
    """Client factory: ``FakeMongo()(uri, **kwargs)`` returns a ``FakeClient``."""

    def __init__(self, docs: list[dict[str, Any]] | None = None):
        self.collection = FakeCollection(docs)
        self.unreachable = False
        self.close_error: Exception | None = None
        self.clients: list[FakeClient] = []
        self.database_names: list[str] = []
        self.collection_names: list[str] = []

    def __call__(self, uri: str, **kwargs: Any) -> FakeClient:
        client = FakeClient(self, uri, kwargs)
        self.clients.append(client)
        return client

    @property
    def client(self) -> FakeClient:
        return self.clients[-1]


def make_entry(author_name: str, title: str = "Post", tags: list[str] | None = None) -> dict[str, Any]:
    """Build a stored blog document the way the external writer shapes it."""
    return {
        "_id": ObjectId(),
        "title": title,
        "description": f"{title} by {author_name}",
        "image": "https://img.example.com/cover.png",
        "tags": tags if tags is not None else ["python", "mcp"],
        "author": {"name": author_name, "image": "https://img.example.com/a.png"},
    }

