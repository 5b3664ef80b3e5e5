"""
Store connector - the single MongoDB connection owned by the bridge.

Manifesto:
    The bridge is a single-client, single-session process.  One connector
    owns one ``AsyncMongoClient`` for the lifetime of the process; there is
    no pooling beyond what the driver does internally, no retry and no
    backoff.  Reads re-query the store every time.

Architecture:
    ::

        DISCONNECTED ──connect()──► CONNECTING ──ok──► READY ──close()──► CLOSED
                                        │                                  ▲
                                        └──error──► FAILED ──close()───────┘

    Invariant: ``collection`` is non-None if and only if ``state`` is READY.

    ``close()`` is valid from every state and never raises.  A failed find
    raises ``StoreOperationError`` and leaves the state untouched.

Tags:
    mongodb, pymongo, connector, state-machine, blogmcp
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from blogmcp.core.errors import (
    NotConnectedError,
    StoreConnectionError,
    StoreOperationError,
    ValidationError,
)
from blogmcp.core.settings import BridgeSettings
from blogmcp.framework.logging import get_logger, log_step, timed_block

logger = get_logger(__name__)


class ConnectorState(str, Enum):
    """Connection state of the store connector."""

    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"
    CLOSED = "closed"


ClientFactory = Callable[..., Any]


class StoreConnector:
    """Owns the store client and exposes the two catalog reads.

    Args:
        settings: Store address, database/collection names and read policy.
        client_factory: Callable building the client; defaults to
            ``pymongo.AsyncMongoClient``.  Tests pass an in-memory fake.
    """

    def __init__(
        self,
        settings: BridgeSettings,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings = settings
        self._client_factory = client_factory or AsyncMongoClient
        self._client: Any = None
        self._db: Any = None
        self._collection: Any = None
        self._state = ConnectorState.DISCONNECTED

    # ── State ──────────────────────────────────────────────────────

    @property
    def state(self) -> ConnectorState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ConnectorState.READY

    @property
    def collection(self) -> Any:
        """The bound collection handle; None unless READY."""
        return self._collection

    def _require_ready(self, operation: str) -> Any:
        if self._state is not ConnectorState.READY or self._collection is None:
            raise NotConnectedError(
                f"Cannot {operation}: store connector is {self._state.value}"
            ).with_context(
                state=self._state.value,
                database=self._settings.database_name,
                collection=self._settings.collection_name,
            )
        return self._collection

    # ── Lifecycle ──────────────────────────────────────────────────

    async def connect(self) -> None:
        """Connect, verify the server answers a ping, and bind the collection.

        Raises:
            StoreConnectionError: when called outside DISCONNECTED, or when the
                store is unreachable.  The connector is then FAILED.
        """
        if self._state is not ConnectorState.DISCONNECTED:
            raise StoreConnectionError(
                f"connect() is only valid from disconnected, connector is {self._state.value}",
                retryable=False,
            ).with_context(state=self._state.value)

        self._state = ConnectorState.CONNECTING
        logger.info(
            "store.connecting",
            database=self._settings.database_name,
            collection=self._settings.collection_name,
        )

        try:
            with timed_block("store.connect") as timer:
                self._client = self._client_factory(
                    self._settings.mongodb_uri,
                    serverSelectionTimeoutMS=self._settings.server_selection_timeout_ms,
                )
                await self._client.aconnect()
                await self._client.admin.command("ping")
        except (PyMongoError, OSError) as e:
            self._state = ConnectorState.FAILED
            await self._release_client()
            logger.error("store.connect_failed", error=str(e))
            raise StoreConnectionError(
                f"Failed to connect to MongoDB: {e}",
                cause=e,
            ).with_context(
                database=self._settings.database_name,
                collection=self._settings.collection_name,
            ) from e

        self._db = self._client[self._settings.database_name]
        self._collection = self._db[self._settings.collection_name]
        self._state = ConnectorState.READY
        logger.info("store.connected", duration_ms=round(timer.duration_ms, 2))

    async def close(self) -> None:
        """Release the client. Idempotent, valid from any state, never raises."""
        if self._state is ConnectorState.CLOSED:
            return

        self._collection = None
        self._db = None
        self._state = ConnectorState.CLOSED
        await self._release_client()

    async def _release_client(self) -> None:
        client, self._client = self._client, None
        if client is None:
            return
        try:
            await client.close()
            logger.info("store.closed")
        except Exception as e:
            # Shutdown must always complete
            logger.error("store.close_failed", error=str(e), error_type=type(e).__name__)

    # ── Reads ──────────────────────────────────────────────────────

    async def find_filtered(self, filter: Mapping[str, Any], limit: int) -> list[dict[str, Any]]:
        """Return at most ``limit`` documents matching ``filter``.

        Raises:
            NotConnectedError: outside READY (checked before anything else).
            ValidationError: ``limit`` is negative or not an integer.
            StoreOperationError: the driver failed during the read.
        """
        collection = self._require_ready("find")

        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise ValidationError(
                "limit must be a non-negative integer",
                field="limit",
                value=limit,
                constraint=">= 0",
            )

        # The driver reads limit(0) as "no limit"
        if limit == 0:
            return []

        with log_step("store.find", limit=limit, filtered=bool(filter)) as timer:
            docs = await self._run_find(collection, dict(filter), limit)
            timer.add_metric("rows", len(docs))
        return docs

    async def find_all(self) -> list[dict[str, Any]]:
        """Return every document in the collection, unbounded."""
        collection = self._require_ready("find_all")

        with log_step("store.find_all") as timer:
            docs = await self._run_find(collection, {}, None)
            timer.add_metric("rows", len(docs))
        return docs

    async def _run_find(
        self,
        collection: Any,
        filter: dict[str, Any],
        limit: int | None,
    ) -> list[dict[str, Any]]:
        kwargs: dict[str, Any] = {}
        if self._settings.query_timeout_ms is not None:
            kwargs["max_time_ms"] = self._settings.query_timeout_ms

        try:
            cursor = collection.find(filter, **kwargs)
            if self._settings.sort_field:
                cursor = cursor.sort(self._settings.sort_field, 1)
            if limit is not None:
                cursor = cursor.limit(limit)
            return await cursor.to_list()
        except PyMongoError as e:
            raise StoreOperationError(
                f"Store read failed: {e}",
                cause=e,
            ).with_context(
                database=self._settings.database_name,
                collection=self._settings.collection_name,
            ) from e
