"""MCP server scaffold for the bridge.

Builds the ``FastMCP`` instance and attaches it to a transport.  Unlike
``FastMCP.run()``, which owns the event loop, ``attach_transport`` is a
coroutine so the bridge lifecycle can race it against its shutdown event
and close the store on every exit path.

Usage::

    from blogmcp.core.transports.mcp import attach_transport, create_bridge_mcp

    mcp = create_bridge_mcp(name="blog-mcp-server", instructions="...")

    @mcp.tool(name="list-blog")
    async def list_blog(...): ...

    await attach_transport(mcp, settings)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from mcp.server.fastmcp import FastMCP

from blogmcp.core.settings import BridgeSettings
from blogmcp.framework.logging import get_logger

logger = get_logger("blogmcp.transport")

Transport = Callable[[FastMCP, BridgeSettings], Awaitable[None]]


def create_bridge_mcp(name: str, instructions: str) -> FastMCP:
    """Create a FastMCP server instance.

    Parameters
    ----------
    name : str
        MCP server name reported in the initialize handshake.
    instructions : str
        Natural language description of the server's capabilities.

    Returns
    -------
    FastMCP
        Server instance; register tools/resources on it before attaching.
    """
    return FastMCP(name, instructions=instructions)


async def attach_transport(mcp: FastMCP, settings: BridgeSettings) -> None:
    """Serve ``mcp`` on the configured transport until the channel closes.

    ``stdio`` returns when stdin reaches EOF.  ``http`` serves streamable-http
    on ``settings.host:settings.port`` until cancelled.
    """
    if settings.transport == "http":
        mcp.settings.host = settings.host
        mcp.settings.port = settings.port
        logger.info("transport.attached", transport="streamable-http", host=settings.host, port=settings.port)
        await mcp.run_streamable_http_async()
    else:
        logger.info("transport.attached", transport="stdio")
        await mcp.run_stdio_async()
