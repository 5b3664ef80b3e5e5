"""MCP tools package."""

from blogmcp.mcp.tools.blogs import list_blog, register_blog_tools

__all__ = ["list_blog", "register_blog_tools"]
