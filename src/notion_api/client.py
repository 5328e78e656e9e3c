"""Async Notion API client for databases, pages, blocks and users."""

import logging
from types import TracebackType
from typing import Any, Self, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, SecretStr, TypeAdapter, ValidationError

from notion_api import request as builders
from notion_api.exceptions import (
    DeserializationError,
    classify_response,
    classify_transport_error,
)
from notion_api.models.blocks import Block
from notion_api.models.common import ListResponse
from notion_api.models.objects import SearchResult
from notion_api.models.resources import Database, Page
from notion_api.models.users import User
from notion_api.pagination import Paginator
from notion_api.query import (
    AppendBlockChildrenRequest,
    DatabaseQuery,
    PageCreateRequest,
    PageUpdateRequest,
    SearchRequest,
)
from notion_api.request import ApiRequest, IdInput

logger = logging.getLogger(__name__)

T = TypeVar("T")

BASE_URL = "https://api.notion.com/v1"

# Notion API version, fixed per client release
NOTION_VERSION = "2022-06-28"

DEFAULT_USER_AGENT = "notion-api-client/0.1.0"

# Notion API timeout in seconds
REQUEST_TIMEOUT = 30.0

_DATABASE: TypeAdapter[Database] = TypeAdapter(Database)
_PAGE: TypeAdapter[Page] = TypeAdapter(Page)
_BLOCK: TypeAdapter[Any] = TypeAdapter(Block)
_USER: TypeAdapter[Any] = TypeAdapter(User)
_DATABASE_LIST: TypeAdapter[ListResponse[Database]] = TypeAdapter(ListResponse[Database])
_SEARCH_LIST: TypeAdapter[Any] = TypeAdapter(ListResponse[SearchResult])
_PAGE_LIST: TypeAdapter[ListResponse[Page]] = TypeAdapter(ListResponse[Page])
_BLOCK_LIST: TypeAdapter[Any] = TypeAdapter(ListResponse[Block])
_USER_LIST: TypeAdapter[Any] = TypeAdapter(ListResponse[User])


class ClientConfig(BaseModel):
    """Connection settings captured once when the client is created."""

    model_config = ConfigDict(frozen=True)

    token: SecretStr
    base_url: str = BASE_URL
    notion_version: str = NOTION_VERSION
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = Field(default=REQUEST_TIMEOUT, gt=0)

    @property
    def headers(self) -> dict[str, str]:
        """Headers sent with every request.

        :returns: Dictionary of required headers.
        """
        return {
            "Authorization": f"Bearer {self.token.get_secret_value()}",
            "Notion-Version": self.notion_version,
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        }


class NotionClient:
    """Async client for the Notion API.

    Every operation performs exactly one HTTP round trip and returns a typed
    model, or raises a :class:`~notion_api.exceptions.NotionClientError`. The
    ``iter_*`` methods return :class:`~notion_api.pagination.Paginator`
    objects that follow cursors lazily.

    One client can be shared by concurrent tasks. Use it as an async context
    manager, or call :meth:`aclose` when done::

        async with NotionClient(token) as client:
            database = await client.get_database(database_id)
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = BASE_URL,
        notion_version: str = NOTION_VERSION,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialise the Notion client.

        :param token: Notion integration token.
        :param base_url: API base URL.
        :param notion_version: Value of the ``Notion-Version`` header.
        :param user_agent: Value of the ``User-Agent`` header.
        :param timeout: Timeout in seconds for each request.
        :param transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
        :raises ValueError: If the token is empty.
        """
        if not token or not token.strip():
            raise ValueError("Notion integration token not provided.")

        self._config = ClientConfig(
            token=SecretStr(token),
            base_url=base_url,
            notion_version=notion_version,
            user_agent=user_agent,
            timeout=timeout,
        )
        self._http = httpx.AsyncClient(
            headers=self._config.headers,
            timeout=self._config.timeout,
            transport=transport,
        )

        logger.debug("NotionClient initialised")

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _send(self, request: ApiRequest) -> Any:
        """Send a request and return the decoded JSON body.

        :param request: Request built by :mod:`notion_api.request`.
        :returns: Decoded JSON body.
        :raises TransportError: If no response was received.
        :raises ApiError: If Notion returned an error.
        :raises DeserializationError: If the body is not JSON.
        """
        logger.debug(f"Making {request.method} request to path={request.path}")

        try:
            response = await self._http.request(
                request.method,
                request.url(self._config.base_url),
                json=request.body,
            )
        except httpx.TransportError as e:
            raise classify_transport_error(e) from e

        if not response.is_success:
            raise classify_response(response)

        try:
            data = response.json()
        except ValueError as e:
            raise DeserializationError(f"Notion API returned a non-JSON body: {e}") from e

        if isinstance(data, dict) and data.get("object") == "error":
            raise classify_response(response)

        return data

    async def _call(self, request: ApiRequest, adapter: TypeAdapter[T], expected: str) -> T:
        """Send a request and decode the response as the expected object kind.

        :param request: Request to send.
        :param adapter: Adapter for the expected model.
        :param expected: Expected value of the response's ``object`` field.
        :returns: Decoded model.
        :raises DeserializationError: If the response is of another kind or malformed.
        """
        data = await self._send(request)

        found = data.get("object") if isinstance(data, dict) else None
        if found != expected:
            raise DeserializationError(f"Expected a {expected} object, got {found!r}")

        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            raise DeserializationError(f"Malformed {expected} object: {e}") from e

    # Database endpoints

    async def list_databases(
        self, start_cursor: str | None = None, page_size: int | None = None
    ) -> ListResponse[Database]:
        """List databases shared with the integration.

        Notion deprecated this endpoint; prefer :meth:`search` with
        :meth:`SearchRequest.filter_by_databases`.

        :param start_cursor: Cursor from a previous page.
        :param page_size: Number of results per page (max 100).
        :returns: One page of databases.
        :raises NotionClientError: If the request fails.
        """
        logger.info("Listing databases")
        return await self._call(
            builders.list_databases(start_cursor, page_size), _DATABASE_LIST, "list"
        )

    async def get_database(self, database_id: IdInput) -> Database:
        """Retrieve database structure and properties.

        :param database_id: Notion database ID.
        :returns: Database with its property schema.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Retrieving database: {database_id}")
        return await self._call(builders.get_database(database_id), _DATABASE, "database")

    async def query_database(
        self, database_id: IdInput, query: DatabaseQuery | None = None
    ) -> ListResponse[Page]:
        """Query pages from a database with filters and sorts.

        :param database_id: Notion database ID.
        :param query: Optional filter, sorts and pagination.
        :returns: One page of matching pages.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Querying database: {database_id}")
        return await self._call(builders.query_database(database_id, query), _PAGE_LIST, "list")

    def iter_database_pages(
        self, database_id: IdInput, query: DatabaseQuery | None = None
    ) -> Paginator[Page]:
        """Iterate over every page matching a database query.

        :param database_id: Notion database ID.
        :param query: Optional filter and sorts. Its ``start_cursor`` is the starting point.
        :returns: Lazy paginator of pages.
        """
        base = query or DatabaseQuery()

        async def fetch(cursor: str | None) -> ListResponse[Page]:
            return await self.query_database(
                database_id, base.model_copy(update={"start_cursor": cursor})
            )

        return Paginator(fetch, start_cursor=base.start_cursor)

    # Search

    async def search(self, request: SearchRequest | None = None) -> ListResponse[Page | Database]:
        """Search pages and databases shared with the integration.

        :param request: Optional query, filter, sort and pagination.
        :returns: One page of matching pages and databases.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Searching: query={request.query if request else None}")
        return await self._call(builders.search(request), _SEARCH_LIST, "list")

    def iter_search(self, request: SearchRequest | None = None) -> Paginator[Page | Database]:
        """Iterate over every search result.

        :param request: Optional query, filter and sort.
        :returns: Lazy paginator of pages and databases.
        """
        base = request or SearchRequest()

        async def fetch(cursor: str | None) -> ListResponse[Page | Database]:
            return await self.search(base.model_copy(update={"start_cursor": cursor}))

        return Paginator(fetch, start_cursor=base.start_cursor)

    # Page endpoints

    async def get_page(self, page_id: IdInput) -> Page:
        """Retrieve a single page.

        :param page_id: Notion page ID.
        :returns: Page with its property values.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Retrieving page: {page_id}")
        return await self._call(builders.get_page(page_id), _PAGE, "page")

    async def create_page(self, request: PageCreateRequest) -> Page:
        """Create a new page in a database or under a page.

        :param request: Parent, properties and optional content.
        :returns: Created page.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Creating page under: {request.parent.model_dump()}")
        return await self._call(builders.create_page(request), _PAGE, "page")

    async def update_page(self, page_id: IdInput, request: PageUpdateRequest) -> Page:
        """Update a page's properties, icon, cover or archived state.

        :param page_id: Notion page ID.
        :param request: Fields to update.
        :returns: Updated page.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Updating page: {page_id}")
        return await self._call(builders.update_page(page_id, request), _PAGE, "page")

    # Block endpoints

    async def get_block(self, block_id: IdInput) -> Block:
        """Retrieve a single block.

        :param block_id: Notion block ID.
        :returns: Block.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Retrieving block: {block_id}")
        return await self._call(builders.get_block(block_id), _BLOCK, "block")

    async def get_block_children(
        self,
        block_id: IdInput,
        start_cursor: str | None = None,
        page_size: int | None = None,
    ) -> ListResponse[Block]:
        """Retrieve one page of a block's children.

        A page ID can be passed to read the page's content.

        :param block_id: Notion block or page ID.
        :param start_cursor: Cursor from a previous page.
        :param page_size: Number of results per page (max 100).
        :returns: One page of child blocks.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Retrieving block children: {block_id}")
        return await self._call(
            builders.get_block_children(block_id, start_cursor, page_size), _BLOCK_LIST, "list"
        )

    def iter_block_children(
        self, block_id: IdInput, page_size: int | None = None
    ) -> Paginator[Block]:
        """Iterate over every child of a block.

        :param block_id: Notion block or page ID.
        :param page_size: Number of results per request (max 100).
        :returns: Lazy paginator of blocks.
        """

        async def fetch(cursor: str | None) -> ListResponse[Block]:
            return await self.get_block_children(block_id, cursor, page_size)

        return Paginator(fetch)

    async def append_block_children(
        self, block_id: IdInput, request: AppendBlockChildrenRequest
    ) -> ListResponse[Block]:
        """Append blocks to a block or page.

        :param block_id: Notion block or page ID.
        :param request: Blocks to append.
        :returns: The appended blocks.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Appending {len(request.children)} blocks to: {block_id}")
        return await self._call(
            builders.append_block_children(block_id, request), _BLOCK_LIST, "list"
        )

    async def delete_block(self, block_id: IdInput) -> Block:
        """Archive a block.

        :param block_id: Notion block ID.
        :returns: The archived block.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Deleting block: {block_id}")
        return await self._call(builders.delete_block(block_id), _BLOCK, "block")

    # User endpoints

    async def get_user(self, user_id: IdInput) -> User:
        """Retrieve a single user.

        :param user_id: Notion user ID.
        :returns: Person or bot user.
        :raises NotionClientError: If the request fails.
        """
        logger.info(f"Retrieving user: {user_id}")
        return await self._call(builders.get_user(user_id), _USER, "user")

    async def list_users(
        self, start_cursor: str | None = None, page_size: int | None = None
    ) -> ListResponse[User]:
        """List users of the workspace.

        :param start_cursor: Cursor from a previous page.
        :param page_size: Number of results per page (max 100).
        :returns: One page of users.
        :raises NotionClientError: If the request fails.
        """
        logger.info("Listing users")
        return await self._call(builders.list_users(start_cursor, page_size), _USER_LIST, "list")

    def iter_users(self, page_size: int | None = None) -> Paginator[User]:
        """Iterate over every user of the workspace.

        :param page_size: Number of results per request (max 100).
        :returns: Lazy paginator of users.
        """

        async def fetch(cursor: str | None) -> ListResponse[User]:
            return await self.list_users(cursor, page_size)

        return Paginator(fetch)

    async def get_bot_user(self) -> User:
        """Retrieve the bot user behind the integration token.

        :returns: Bot user.
        :raises NotionClientError: If the request fails.
        """
        logger.info("Retrieving bot user")
        return await self._call(builders.get_bot_user(), _USER, "user")
