"""Resource Search request/response models.

These mirror the boundary of the OCI Resource Search API: a structured
query, an opaque page cursor and a page limit go in; a page of records and
an optional next cursor come out.
"""

from pydantic import BaseModel, ConfigDict, Field

from .resource import ResourceRecord

DEFAULT_SEARCH_QUERY = "query all resources"
DEFAULT_PAGE_LIMIT = 1000


class SearchRequest(BaseModel):
    """One Resource Search call."""

    model_config = ConfigDict(frozen=True)

    query: str = Field(default=DEFAULT_SEARCH_QUERY, description="Structured search query")
    cursor: str | None = Field(
        default=None,
        description="Opaque page token from the previous response, None for the first page"
    )
    page_limit: int = Field(
        default=DEFAULT_PAGE_LIMIT,
        ge=1,
        le=1000,
        description="Maximum number of items per page"
    )


class SearchPage(BaseModel):
    """One page of Resource Search results."""

    items: list[ResourceRecord] = Field(default_factory=list)
    next_cursor: str | None = Field(
        default=None,
        description="Token for the next page; None when the result set is exhausted"
    )
