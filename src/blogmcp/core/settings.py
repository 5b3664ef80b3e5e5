"""
Centralized settings for the blog MCP bridge.

Manifesto:
    The store address, the database/collection pair and the query policy
    knobs live in one validated settings object.  Every value can come from
    a ``BLOG_MCP_*`` environment variable or a ``.env`` file, and the CLI
    overrides individual fields on top.

Fields
──────
mongodb_uri                  : Document store connection string
database_name                : Database holding the blog catalog
collection_name              : Collection holding the blog catalog
server_selection_timeout_ms  : How long connect() waits for a reachable server
query_timeout_ms             : Per-read timeout passed to the driver (None = none)
default_limit                : Result limit when ``list-blog`` omits ``limit``
max_limit                    : Upper clamp for ``limit`` (None = unbounded)
sort_field                   : Explicit sort key for reads (None = natural order)
transport / host / port      : MCP transport selection
log_level / log_format       : structlog configuration

Tags:
    settings, configuration, pydantic, environment, blogmcp
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from blogmcp.core.errors import ConfigError


class BridgeSettings(BaseSettings):
    """Bridge configuration.

    All fields can be set via ``BLOG_MCP_*`` environment variables (e.g.
    ``BLOG_MCP_MONGODB_URI=mongodb://db:27017``) or through ``.env`` files.
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOG_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Store ────────────────────────────────────────────────────
    mongodb_uri: str = Field(default="mongodb://localhost:27017")
    database_name: str = Field(default="next_app_final")
    collection_name: str = Field(default="blogmodels")
    server_selection_timeout_ms: int = Field(default=5000, gt=0)

    # ── Query policy ─────────────────────────────────────────────
    query_timeout_ms: int | None = Field(
        default=None,
        gt=0,
        description="Read timeout in milliseconds; unset means reads may block indefinitely",
    )
    default_limit: int = Field(default=20, ge=0)
    max_limit: int | None = Field(
        default=None,
        ge=0,
        description="Clamp for caller-supplied limits; unset means unbounded",
    )
    sort_field: str | None = Field(
        default=None,
        description="Explicit sort key (e.g. _id); unset keeps natural store order",
    )

    # ── MCP server ───────────────────────────────────────────────
    server_name: str = Field(default="blog-mcp-server")
    resource_uri: str = Field(default="bloglist://blogs")
    transport: Literal["stdio", "http"] = Field(default="stdio")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, gt=0, lt=65536)

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: Literal["console", "json"] = Field(default="console")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
            raise ValueError(f"unsupported log level: {value}")
        return level

    @field_validator("sort_field")
    @classmethod
    def _blank_sort_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


def load_settings(**overrides: Any) -> BridgeSettings:
    """Build settings from the environment with ``overrides`` on top.

    ``None`` overrides are ignored so unset CLI options fall through to the
    environment.

    Raises:
        ConfigError: a value failed validation
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return BridgeSettings(**values)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration:\n{e}", cause=e) from e
