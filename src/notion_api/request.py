"""Request builders for each Notion API operation.

Every function here is pure: it maps typed parameters to an :class:`ApiRequest`
and performs no I/O. Headers are added by the client, which owns the token.
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlencode

from notion_api.ids import Identifiable, as_id
from notion_api.query import (
    AppendBlockChildrenRequest,
    DatabaseQuery,
    PageCreateRequest,
    PageUpdateRequest,
    SearchRequest,
    to_body,
)

IdInput = str | Identifiable


@dataclass(frozen=True)
class ApiRequest:
    """A single HTTP request to the Notion API.

    ``path`` is relative to the API base URL and already percent-encoded.
    """

    method: str
    path: str
    params: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] | None = None

    def url(self, base_url: str) -> str:
        """Render the full request URL.

        :param base_url: API base URL, e.g. ``https://api.notion.com/v1``.
        :returns: URL with the query string in parameter order.
        """
        url = f"{base_url.rstrip('/')}/{self.path}"
        if self.params:
            url = f"{url}?{urlencode(self.params)}"
        return url


def _path(*segments: str) -> str:
    """Join path segments, percent-encoding each one including ``/``."""
    return "/".join(quote(segment, safe="") for segment in segments)


def _pagination_params(start_cursor: str | None, page_size: int | None) -> dict[str, str]:
    params: dict[str, str] = {}
    if start_cursor is not None:
        params["start_cursor"] = start_cursor
    if page_size is not None:
        if not 1 <= page_size <= 100:
            raise ValueError(f"page_size must be between 1 and 100, got {page_size}")
        params["page_size"] = str(page_size)
    return params


# Databases


def list_databases(start_cursor: str | None = None, page_size: int | None = None) -> ApiRequest:
    """List databases shared with the integration. Deprecated by Notion in favour of search."""
    return ApiRequest("GET", _path("databases"), _pagination_params(start_cursor, page_size))


def get_database(database_id: IdInput) -> ApiRequest:
    return ApiRequest("GET", _path("databases", as_id(database_id)))


def query_database(database_id: IdInput, query: DatabaseQuery | None = None) -> ApiRequest:
    """Query the pages of a database.

    :param database_id: Database to query.
    :param query: Filter, sorts and pagination. An empty body returns every page.
    :returns: The request.
    """
    body = to_body(query) if query is not None else {}
    return ApiRequest("POST", _path("databases", as_id(database_id), "query"), body=body)


# Search


def search(request: SearchRequest | None = None) -> ApiRequest:
    body = to_body(request) if request is not None else {}
    return ApiRequest("POST", _path("search"), body=body)


# Pages


def get_page(page_id: IdInput) -> ApiRequest:
    return ApiRequest("GET", _path("pages", as_id(page_id)))


def create_page(request: PageCreateRequest) -> ApiRequest:
    return ApiRequest("POST", _path("pages"), body=to_body(request))


def update_page(page_id: IdInput, request: PageUpdateRequest) -> ApiRequest:
    return ApiRequest("PATCH", _path("pages", as_id(page_id)), body=to_body(request))


# Blocks


def get_block(block_id: IdInput) -> ApiRequest:
    return ApiRequest("GET", _path("blocks", as_id(block_id)))


def get_block_children(
    block_id: IdInput,
    start_cursor: str | None = None,
    page_size: int | None = None,
) -> ApiRequest:
    """List the children of a block. A page ID works as a block ID."""
    return ApiRequest(
        "GET",
        _path("blocks", as_id(block_id), "children"),
        _pagination_params(start_cursor, page_size),
    )


def append_block_children(block_id: IdInput, request: AppendBlockChildrenRequest) -> ApiRequest:
    return ApiRequest(
        "PATCH", _path("blocks", as_id(block_id), "children"), body=to_body(request)
    )


def delete_block(block_id: IdInput) -> ApiRequest:
    return ApiRequest("DELETE", _path("blocks", as_id(block_id)))


# Users


def get_user(user_id: IdInput) -> ApiRequest:
    return ApiRequest("GET", _path("users", as_id(user_id)))


def list_users(start_cursor: str | None = None, page_size: int | None = None) -> ApiRequest:
    return ApiRequest("GET", _path("users"), _pagination_params(start_cursor, page_size))


def get_bot_user() -> ApiRequest:
    """Retrieve the bot user behind the integration token."""
    return ApiRequest("GET", _path("users", "me"))
