"""Document-store access: connector, query translation and document rendering."""

from blogmcp.store.connector import ConnectorState, StoreConnector
from blogmcp.store.models import CatalogDocument, encode_bson_value, serialize_documents
from blogmcp.store.query import ListBlogRequest, StoreQuery, build_query

__all__ = [
    "CatalogDocument",
    "ConnectorState",
    "ListBlogRequest",
    "StoreConnector",
    "StoreQuery",
    "build_query",
    "encode_bson_value",
    "serialize_documents",
]
