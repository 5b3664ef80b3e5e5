"""Translation of ``list-blog`` requests into store queries."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

AUTHOR_NAME_FIELD = "author.name"
DEFAULT_LIMIT = 20


class ListBlogRequest(BaseModel):
    """Input contract of the ``list-blog`` tool.

    ``author=None`` disables filtering; ``author=""`` is a valid filter that
    matches every entry with an author name.  Defaults are applied when the
    model is built, before any handler sees it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    author: str | None = Field(default=None, description="Author name filter (case-insensitive substring)")
    limit: int = Field(default=DEFAULT_LIMIT, ge=0, description="Maximum number of posts to return")


@dataclass(frozen=True)
class StoreQuery:
    """Filter/limit pair consumed by ``StoreConnector.find_filtered``."""

    filter: dict[str, Any] = field(default_factory=dict)
    limit: int = DEFAULT_LIMIT


def author_filter(author: str) -> dict[str, Any]:
    """Case-insensitive literal substring match on the author name."""
    return {AUTHOR_NAME_FIELD: {"$regex": re.escape(author), "$options": "i"}}


def build_query(request: ListBlogRequest) -> StoreQuery:
    """Map a validated request to a store query. Pure; never raises."""
    if request.author is None:
        return StoreQuery(filter={}, limit=request.limit)
    return StoreQuery(filter=author_filter(request.author), limit=request.limit)
