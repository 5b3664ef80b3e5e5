"""Tests for blogmcp.core.settings - BridgeSettings + load_settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from blogmcp.core.errors import ConfigError, ErrorCategory
from blogmcp.core.settings import BridgeSettings, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in [
        "BLOG_MCP_MONGODB_URI",
        "BLOG_MCP_MAX_LIMIT",
        "BLOG_MCP_TRANSPORT",
        "BLOG_MCP_LOG_LEVEL",
        "BLOG_MCP_SORT_FIELD",
    ]:
        monkeypatch.delenv(key, raising=False)


class TestDefaults:
    def test_store_defaults(self):
        s = BridgeSettings(_env_file=None)
        assert s.mongodb_uri == "mongodb://localhost:27017"
        assert s.database_name == "next_app_final"
        assert s.collection_name == "blogmodels"

    def test_query_policy_defaults_are_unbounded(self):
        s = BridgeSettings(_env_file=None)
        assert s.default_limit == 20
        assert s.max_limit is None
        assert s.query_timeout_ms is None
        assert s.sort_field is None

    def test_server_defaults(self):
        s = BridgeSettings(_env_file=None)
        assert s.server_name == "blog-mcp-server"
        assert s.resource_uri == "bloglist://blogs"
        assert s.transport == "stdio"
        assert s.log_format == "console"


class TestEnvironment:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("BLOG_MCP_MONGODB_URI", "mongodb://db:27017")
        monkeypatch.setenv("BLOG_MCP_MAX_LIMIT", "100")
        s = BridgeSettings(_env_file=None)
        assert s.mongodb_uri == "mongodb://db:27017"
        assert s.max_limit == 100

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("BLOG_MCP_LOG_LEVEL", "debug")
        assert BridgeSettings(_env_file=None).log_level == "DEBUG"

    def test_blank_sort_field_means_natural_order(self, monkeypatch):
        monkeypatch.setenv("BLOG_MCP_SORT_FIELD", "  ")
        assert BridgeSettings(_env_file=None).sort_field is None


class TestValidation:
    def test_rejects_unknown_transport(self):
        with pytest.raises(PydanticValidationError):
            BridgeSettings(_env_file=None, transport="websocket")

    def test_rejects_negative_max_limit(self):
        with pytest.raises(PydanticValidationError):
            BridgeSettings(_env_file=None, max_limit=-1)

    def test_rejects_unknown_log_level(self):
        with pytest.raises(PydanticValidationError):
            BridgeSettings(_env_file=None, log_level="LOUD")


class TestLoadSettings:
    def test_overrides_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("BLOG_MCP_MONGODB_URI", "mongodb://env:27017")
        s = load_settings(_env_file=None, mongodb_uri="mongodb://cli:27017")
        assert s.mongodb_uri == "mongodb://cli:27017"

    def test_none_overrides_fall_through(self, monkeypatch):
        monkeypatch.setenv("BLOG_MCP_TRANSPORT", "http")
        s = load_settings(_env_file=None, transport=None, port=None)
        assert s.transport == "http"
        assert s.port == 8000

    def test_invalid_value_raises_config_error(self):
        with pytest.raises(ConfigError) as exc_info:
            load_settings(_env_file=None, transport="websocket")

        err = exc_info.value
        assert err.category is ErrorCategory.CONFIG
        assert err.retryable is False
        assert "transport" in err.message
        assert isinstance(err.__cause__, PydanticValidationError)
