"""
blog-mcp-server - MCP bridge over a MongoDB blog catalog.

Exposes one query tool (``list-blog``) and one snapshot resource
(``bloglist://blogs``) to MCP clients.  See ``blogmcp.lifecycle`` for the
startup/shutdown sequence and ``blogmcp.cli`` for the console script.
"""

__version__ = "1.0.0"
