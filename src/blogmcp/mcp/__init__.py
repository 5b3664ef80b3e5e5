"""
blog-mcp-server MCP layer.

Model Context Protocol (MCP) server exposing the blog catalog as one
query tool and one snapshot resource.

Usage::

    # stdio mode (default)
    blog-mcp-server

    # HTTP mode
    blog-mcp-server --transport http --port 8000
"""

from blogmcp.mcp.server import create_server

__all__ = ["create_server"]
