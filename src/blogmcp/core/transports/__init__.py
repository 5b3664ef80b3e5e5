"""Transport adapters for the bridge (MCP over stdio or streamable-http)."""
