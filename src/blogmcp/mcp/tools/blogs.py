"""Blog query MCP tool (``list-blog``)."""

from __future__ import annotations

from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from blogmcp.core.errors import BridgeError, NotReadyError, ValidationError
from blogmcp.core.settings import BridgeSettings
from blogmcp.framework.logging import get_logger, new_request_id, push_context
from blogmcp.store.connector import StoreConnector
from blogmcp.store.models import serialize_documents
from blogmcp.store.query import ListBlogRequest, build_query

logger = get_logger(__name__)

TOOL_NAME = "list-blog"
TOOL_TITLE = "List blog posts"
TOOL_DESCRIPTION = "Fetch the blog post list, optionally filtered by author name."


def effective_limit(requested: int, settings: BridgeSettings) -> int:
    """Apply the configured ``max_limit`` clamp; unbounded when unset."""
    if settings.max_limit is not None and requested > settings.max_limit:
        return settings.max_limit
    return requested


def format_results(count: int, payload: str) -> str:
    return f"{count} results found: \n{payload}"


async def list_blog(
    connector: StoreConnector,
    request: ListBlogRequest,
    settings: BridgeSettings,
) -> str:
    """Run one ``list-blog`` invocation against the store.

    Args:
        connector: Shared store connector; must be READY
        request: Validated input contract (defaults already applied)
        settings: Supplies the limit policy

    Returns:
        ``"<N> results found: \\n<JSON array>"``

    Raises:
        NotReadyError: the connector is not READY; the store is not touched
        StoreOperationError: the read failed
    """
    if not connector.is_ready:
        raise NotReadyError("Database not connected").with_context(
            tool=TOOL_NAME, state=connector.state.value
        )

    limit = effective_limit(request.limit, settings)
    if limit != request.limit:
        logger.info("tool.limit_clamped", requested=request.limit, limit=limit)

    query = build_query(request.model_copy(update={"limit": limit}))
    docs = await connector.find_filtered(query.filter, query.limit)
    return format_results(len(docs), serialize_documents(docs))


def register_blog_tools(mcp: FastMCP, connector: StoreConnector, settings: BridgeSettings) -> None:
    """Register ``list-blog`` on ``mcp``, closing over ``connector``."""

    @mcp.tool(name=TOOL_NAME, title=TOOL_TITLE, description=TOOL_DESCRIPTION, structured_output=False)
    async def list_blog_tool(
        author: Annotated[str | None, Field(description="Author name filter (case-insensitive substring)")] = None,
        limit: Annotated[int, Field(description="Maximum number of posts to return", ge=0)] = settings.default_limit,
    ) -> str:
        token = push_context(tool=TOOL_NAME, request_id=new_request_id())
        try:
            try:
                request = ListBlogRequest(author=author, limit=limit)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid list-blog arguments: {e}") from e

            logger.info("tool.invoked", author=author, limit=request.limit)
            return await list_blog(connector, request, settings)
        except BridgeError as e:
            logger.warning("tool.failed", **e.to_dict())
            raise ToolError(e.message) from e
        finally:
            token.restore()
