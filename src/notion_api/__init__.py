"""Typed async client for the Notion API."""

from notion_api.client import ClientConfig, NotionClient
from notion_api.exceptions import (
    ApiError,
    DeserializationError,
    ErrorCode,
    NotionClientError,
    RateLimitedError,
    TransportError,
)
from notion_api.models import Block, Database, ListResponse, Page, User
from notion_api.pagination import Paginator
from notion_api.query import (
    AppendBlockChildrenRequest,
    CompoundFilter,
    DatabaseQuery,
    PageCreateRequest,
    PageUpdateRequest,
    PropertyFilter,
    SearchRequest,
)

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "AppendBlockChildrenRequest",
    "Block",
    "ClientConfig",
    "CompoundFilter",
    "Database",
    "DatabaseQuery",
    "DeserializationError",
    "ErrorCode",
    "ListResponse",
    "NotionClient",
    "NotionClientError",
    "Page",
    "PageCreateRequest",
    "PageUpdateRequest",
    "Paginator",
    "PropertyFilter",
    "RateLimitedError",
    "SearchRequest",
    "TransportError",
    "User",
]
