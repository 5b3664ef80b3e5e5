"""
Structured error types for the blog MCP bridge.

Every failure the bridge can report is a ``BridgeError`` carrying a
category, a retry hint, structured context and the chained driver
exception.  Tool and resource handlers catch ``BridgeError`` at the
registry boundary and hand the message back to the caller; startup code
treats ``StoreConnectionError`` as fatal.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────┐
        │                      BridgeError                          │
        │  (category, retryable, context, cause)                    │
        ├──────────────────────────────────────────────────────────┤
        │  StoreConnectionError   NotReadyError     ValidationError │
        │  (DATABASE, retryable)  (INTERNAL)        (VALIDATION)    │
        │                              │                             │
        │  StoreOperationError    NotConnectedError  ConfigError    │
        │  (DATABASE)                                (CONFIG)       │
        └──────────────────────────────────────────────────────────┘

Examples:
    >>> err = StoreConnectionError("ping failed").with_context(database="next_app_final")
    >>> err.retryable
    True
    >>> err.to_dict()["context"]["database"]
    'next_app_final'

Usage:
    from blogmcp.core.errors import NotReadyError, StoreOperationError

    try:
        docs = await cursor.to_list()
    except PyMongoError as e:
        raise StoreOperationError("find failed", cause=e) from e

Tags:
    error-handling, exception-hierarchy, error-context, blogmcp
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and log routing."""

    DATABASE = "DATABASE"         # Connect, ping, find
    VALIDATION = "VALIDATION"     # Malformed invocation input
    CONFIG = "CONFIG"             # Missing or invalid settings
    TRANSPORT = "TRANSPORT"       # Message channel failures
    INTERNAL = "INTERNAL"         # Unexpected state
    UNKNOWN = "UNKNOWN"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to a bridge error.

    Attributes:
        tool: Tool name the failing invocation targeted
        resource: Resource URI the failing read targeted
        database: Database name the store call used
        collection: Collection name the store call used
        state: Connector state when the error was raised
        metadata: Additional key-value pairs
    """

    tool: str | None = None
    resource: str | None = None
    database: str | None = None
    collection: str | None = None
    state: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["tool", "resource", "database", "collection", "state"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class BridgeError(Exception):
    """
    Base exception for all bridge errors.

    Subclasses set ``default_category`` and ``default_retryable`` so call
    sites only pass a message and, when wrapping a driver failure, the
    original exception as ``cause``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> BridgeError:
        """
        Add context to this error (fluent API).

        Usage:
            raise NotReadyError("store not connected").with_context(tool="list-blog")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }

        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict

        if self.cause is not None:
            result["cause"] = str(self.cause)

        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# STORE ERRORS
# =============================================================================


class StoreConnectionError(BridgeError):
    """
    The document store could not be reached or rejected the connection.

    Fatal at startup; a no-op concern at shutdown.
    """

    default_category = ErrorCategory.DATABASE
    default_retryable = True


class StoreOperationError(BridgeError):
    """A find failed after a successful connect. Connector state is unchanged."""

    default_category = ErrorCategory.DATABASE
    default_retryable = False


class NotReadyError(BridgeError):
    """An operation needed a ready store before connect or after close."""

    default_category = ErrorCategory.INTERNAL
    default_retryable = False


class NotConnectedError(NotReadyError):
    """Raised by the connector itself when a read is attempted outside READY."""

    pass


# =============================================================================
# INPUT / CONFIG ERRORS
# =============================================================================


class ValidationError(BridgeError):
    """
    Invocation input violated its declared contract.

    Never retryable - the caller must fix the arguments.
    """

    default_category = ErrorCategory.VALIDATION
    default_retryable = False

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        constraint: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value
        self.constraint = constraint

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        if self.value is not None:
            result["value"] = repr(self.value)
        if self.constraint:
            result["constraint"] = self.constraint
        return result


class ConfigError(BridgeError):
    """Missing or invalid configuration."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


# =============================================================================
# HELPERS
# =============================================================================


def is_retryable(error: Exception) -> bool:
    """Return the retry hint for bridge errors; other exceptions are not retryable."""
    if isinstance(error, BridgeError):
        return error.retryable
    return False


def categorize_error(error: Exception) -> ErrorCategory:
    """Map any exception onto an ``ErrorCategory`` for logging."""
    if isinstance(error, BridgeError):
        return error.category
    if isinstance(error, (ConnectionError, OSError)):
        return ErrorCategory.TRANSPORT
    if isinstance(error, ValueError):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN
