"""Catalog documents and their JSON rendering.

The catalog collection is written by another application, so the bridge
does not validate documents against a schema.  A stored document is
passed through as-is: field order, missing fields and ``null`` values
are kept, and only BSON-specific values are converted for JSON.

    ObjectId            -> 24-char hex string
    datetime            -> ISO 8601, millisecond precision, ``Z`` suffix
    Decimal128 / other  -> ``str(value)``
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId

CatalogDocument = Mapping[str, Any]


def format_timestamp(value: datetime) -> str:
    """Render a BSON date the way JavaScript's ``toISOString`` does.

    pymongo returns naive datetimes in UTC unless the client is tz-aware.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S") + f".{value.microsecond // 1000:03d}Z"


def encode_bson_value(value: Any) -> Any:
    """``json.dumps`` fallback for values the stdlib encoder rejects."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    return str(value)


def serialize_documents(docs: Iterable[CatalogDocument]) -> str:
    """Render stored documents as a pretty-printed JSON array, order kept."""
    return json.dumps(
        [dict(doc) for doc in docs],
        indent=2,
        ensure_ascii=False,
        default=encode_bson_value,
    )
