"""Core primitives for the blog MCP bridge: errors and settings."""

from blogmcp.core.errors import (
    BridgeError,
    ConfigError,
    ErrorCategory,
    ErrorContext,
    NotConnectedError,
    NotReadyError,
    StoreConnectionError,
    StoreOperationError,
    ValidationError,
)
from blogmcp.core.settings import BridgeSettings, load_settings

__all__ = [
    "BridgeError",
    "BridgeSettings",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "NotConnectedError",
    "NotReadyError",
    "StoreConnectionError",
    "StoreOperationError",
    "ValidationError",
    "load_settings",
]
