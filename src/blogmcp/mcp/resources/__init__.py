"""MCP resources package."""

from blogmcp.mcp.resources.blogs import read_blog_snapshot, register_blog_resources

__all__ = ["read_blog_snapshot", "register_blog_resources"]
