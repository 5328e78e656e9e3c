"""Lazy iteration over paginated Notion list endpoints."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Generic, TypeVar

from notion_api.models.common import ListResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Paginator(Generic[T]):
    """Restartable lazy sequence over a cursor-paginated list operation.

    Nothing is fetched until iteration starts, and every new iteration starts
    again from the initial cursor. Each page is one call to ``fetch``. The
    caller may stop iterating at any point.

    Example::

        async for page in client.iter_database_pages(database_id):
            print(page.title())
    """

    def __init__(
        self,
        fetch: Callable[[str | None], Awaitable[ListResponse[T]]],
        *,
        start_cursor: str | None = None,
    ) -> None:
        """Initialise the paginator.

        :param fetch: Coroutine function fetching one page from a cursor.
        :param start_cursor: Cursor to start from. None starts at the beginning.
        """
        self._fetch = fetch
        self._start_cursor = start_cursor

    async def pages(self) -> AsyncIterator[ListResponse[T]]:
        """Iterate over whole result pages.

        :yields: One list response per page, in order.
        :raises NotionClientError: If fetching a page fails.
        """
        cursor = self._start_cursor
        page_number = 0

        while True:
            page_number += 1
            logger.debug(f"Fetching page {page_number}: start_cursor={cursor}")
            response = await self._fetch(cursor)
            yield response

            if not response.has_more or response.next_cursor is None:
                logger.debug(f"Pagination finished after {page_number} pages")
                return
            cursor = response.next_cursor

    async def __aiter__(self) -> AsyncIterator[T]:
        async for page in self.pages():
            for item in page.results:
                yield item

    async def collect(self, limit: int | None = None) -> list[T]:
        """Fetch items into a list.

        :param limit: Maximum number of items. Stops fetching once reached.
        :returns: Items in order.
        """
        items: list[T] = []
        if limit is not None and limit <= 0:
            return items

        async for item in self:
            items.append(item)
            if limit is not None and len(items) >= limit:
                break

        return items
