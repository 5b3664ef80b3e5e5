"""Blog MCP server assembly.

Builds the FastMCP instance and registers the ``list-blog`` tool and the
``bloglist://blogs`` resource against an already-connected store
connector.  The connector is passed in explicitly; nothing here reaches for
process-wide state.

Tags: mcp, server, ai-tools, protocol
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from blogmcp.core.settings import BridgeSettings
from blogmcp.core.transports.mcp import create_bridge_mcp
from blogmcp.mcp.resources.blogs import register_blog_resources
from blogmcp.mcp.tools.blogs import register_blog_tools
from blogmcp.store.connector import StoreConnector

INSTRUCTIONS = """
Read-only access to the blog catalog.

Capabilities:
- list-blog: query blog posts, optionally filtered by author name
  (case-insensitive substring), bounded by `limit` (default 20)
- bloglist://blogs: full JSON snapshot of every blog post
"""


def create_server(connector: StoreConnector, settings: BridgeSettings) -> FastMCP:
    """Create the MCP server with all tools and resources registered."""
    mcp = create_bridge_mcp(name=settings.server_name, instructions=INSTRUCTIONS)
    register_blog_tools(mcp, connector, settings)
    register_blog_resources(mcp, connector, settings)
    return mcp
