"""Blog snapshot MCP resource (``bloglist://blogs``)."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ResourceError

from blogmcp.core.errors import BridgeError, NotReadyError
from blogmcp.core.settings import BridgeSettings
from blogmcp.framework.logging import get_logger, new_request_id, push_context
from blogmcp.store.connector import StoreConnector
from blogmcp.store.models import serialize_documents

logger = get_logger(__name__)

RESOURCE_NAME = "blogs"
RESOURCE_TITLE = "Blog list"
RESOURCE_DESCRIPTION = "All current blog posts."
MIME_TYPE = "application/json"


async def read_blog_snapshot(connector: StoreConnector) -> str:
    """Return every stored document as an indented JSON array (``[]`` when empty).

    Raises:
        NotReadyError: the connector is not READY
    """
    if not connector.is_ready:
        raise NotReadyError("Database not connected").with_context(state=connector.state.value)

    return serialize_documents(await connector.find_all())


def register_blog_resources(mcp: FastMCP, connector: StoreConnector, settings: BridgeSettings) -> None:
    """Register the snapshot resource on ``mcp``, closing over ``connector``."""
    uri = settings.resource_uri

    @mcp.resource(
        uri,
        name=RESOURCE_NAME,
        title=RESOURCE_TITLE,
        description=RESOURCE_DESCRIPTION,
        mime_type=MIME_TYPE,
    )
    async def blog_snapshot() -> str:
        token = push_context(resource=uri, request_id=new_request_id())
        try:
            logger.info("resource.read")
            return await read_blog_snapshot(connector)
        except BridgeError as e:
            logger.warning("resource.failed", **e.with_context(resource=uri).to_dict())
            raise ResourceError(e.message) from e
        finally:
            token.restore()
