"""Tests for Notion client module."""

import asyncio
import json
import unittest
from collections.abc import Callable
from typing import Any

import httpx

from notion_api.client import NOTION_VERSION, ClientConfig, NotionClient
from notion_api.exceptions import (
    ApiError,
    DeserializationError,
    RateLimitedError,
    TransportError,
)
from notion_api.models import BotUser, Database, Page, PersonUser
from notion_api.models.blocks import ParagraphBlock, ToDoBlock
from notion_api.payloads import checkbox_value, title_value
from notion_api.query import (
    AppendBlockChildrenRequest,
    CheckboxCondition,
    DatabaseQuery,
    PageCreateRequest,
    PageUpdateRequest,
    PropertyFilter,
    SearchRequest,
)
from testing.notion_api.fixtures import (
    BLOCK_ID,
    BOT_ID,
    DATABASE_ID,
    PAGE_ID,
    USER_ID,
    build_block,
    build_bot_user,
    build_database,
    build_error,
    build_list,
    build_page,
    build_person_user,
    build_text_block,
    build_to_do,
)

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingHandler:
    """Mock transport handler that records requests and answers with a callback."""

    def __init__(self, respond: Handler) -> None:
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> Any:
        return json.loads(self.last.content)


def reply(body: Any, status: int = 200, headers: dict[str, str] | None = None) -> Handler:
    return lambda request: httpx.Response(status, json=body, headers=headers)


def make_client(handler: RecordingHandler) -> NotionClient:
    return NotionClient("secret-token", transport=httpx.MockTransport(handler))


class TestNotionClientInitialisation(unittest.IsolatedAsyncioTestCase):
    """Tests for NotionClient initialisation."""

    async def test_missing_token_raises_value_error(self) -> None:
        with self.assertRaises(ValueError) as context:
            NotionClient("  ")

        self.assertIn("token", str(context.exception).lower())

    async def test_config_is_frozen_and_hides_token(self) -> None:
        client = NotionClient("secret-token", timeout=5.0)

        config = client.config
        self.assertIsInstance(config, ClientConfig)
        self.assertEqual(config.timeout, 5.0)
        self.assertNotIn("secret-token", repr(config))
        with self.assertRaises(ValueError):
            config.timeout = 10.0  # type: ignore[misc]
        await client.aclose()

    async def test_context_manager_closes_connection_pool(self) -> None:
        handler = RecordingHandler(reply(build_database()))

        async with make_client(handler) as client:
            await client.get_database(DATABASE_ID)

        self.assertTrue(client._http.is_closed)


class TestNotionClientHeaders(unittest.IsolatedAsyncioTestCase):
    """Tests for the headers sent with every request."""

    async def test_headers_contain_required_fields(self) -> None:
        handler = RecordingHandler(reply(build_list([])))

        async with make_client(handler) as client:
            await client.search(SearchRequest.for_query("milk"))

        headers = handler.last.headers
        self.assertEqual(headers["Authorization"], "Bearer secret-token")
        self.assertEqual(headers["Notion-Version"], NOTION_VERSION)
        self.assertEqual(headers["Notion-Version"], "2022-06-28")
        self.assertEqual(headers["Accept"], "application/json")
        self.assertEqual(headers["Content-Type"], "application/json")
        self.assertTrue(headers["User-Agent"].startswith("notion-api-client/"))

    async def test_custom_base_url_and_user_agent(self) -> None:
        handler = RecordingHandler(reply(build_database()))
        client = NotionClient(
            "secret-token",
            base_url="https://proxy.example.org/notion/v1/",
            user_agent="todo-cli/2.0",
            transport=httpx.MockTransport(handler),
        )

        async with client:
            await client.get_database(DATABASE_ID)

        self.assertEqual(
            str(handler.last.url), f"https://proxy.example.org/notion/v1/databases/{DATABASE_ID}"
        )
        self.assertEqual(handler.last.headers["User-Agent"], "todo-cli/2.0")


class TestNotionClientDatabases(unittest.IsolatedAsyncioTestCase):
    """Tests for database operations."""

    async def test_get_database(self) -> None:
        handler = RecordingHandler(reply(build_database()))

        async with make_client(handler) as client:
            database = await client.get_database(DATABASE_ID)

        self.assertIsInstance(database, Database)
        self.assertEqual(database.title_plain_text(), "Tasks")
        self.assertEqual(handler.last.method, "GET")
        self.assertEqual(
            str(handler.last.url), f"https://api.notion.com/v1/databases/{DATABASE_ID}"
        )

    async def test_list_databases(self) -> None:
        handler = RecordingHandler(reply(build_list([build_database()], result_type="database")))

        async with make_client(handler) as client:
            response = await client.list_databases(page_size=10)

        self.assertEqual(response.results[0].id, DATABASE_ID)
        self.assertEqual(handler.last.url.params["page_size"], "10")

    async def test_query_database_sends_filter(self) -> None:
        handler = RecordingHandler(reply(build_list([build_page()], result_type="page")))
        query = DatabaseQuery(
            filter=PropertyFilter(property="Done", checkbox=CheckboxCondition(equals=False))
        )

        async with make_client(handler) as client:
            response = await client.query_database(DATABASE_ID, query)

        self.assertIsInstance(response.results[0], Page)
        self.assertEqual(handler.last.method, "POST")
        self.assertEqual(handler.last.url.path, f"/v1/databases/{DATABASE_ID}/query")
        self.assertEqual(
            handler.last_body(),
            {"filter": {"property": "Done", "checkbox": {"equals": False}}},
        )

    async def test_iter_database_pages_follows_cursors(self) -> None:
        pages = {
            None: build_list([build_page("p-1"), build_page("p-2")], next_cursor="c1"),
            "c1": build_list([build_page("p-3")], next_cursor="c2"),
            "c2": build_list([build_page("p-4")]),
        }
        handler = RecordingHandler(
            lambda request: httpx.Response(
                200, json=pages[json.loads(request.content).get("start_cursor")]
            )
        )
        query = DatabaseQuery(page_size=2)

        async with make_client(handler) as client:
            results = await client.iter_database_pages(DATABASE_ID, query).collect()

        self.assertEqual([page.id for page in results], ["p-1", "p-2", "p-3", "p-4"])
        self.assertEqual(len(handler.requests), 3)
        self.assertEqual(handler.last_body(), {"start_cursor": "c2", "page_size": 2})


class TestNotionClientSearch(unittest.IsolatedAsyncioTestCase):
    """Tests for search."""

    async def test_search_returns_pages_and_databases(self) -> None:
        handler = RecordingHandler(reply(build_list([build_page(), build_database()])))

        async with make_client(handler) as client:
            response = await client.search()

        self.assertIsInstance(response.results[0], Page)
        self.assertIsInstance(response.results[1], Database)
        self.assertEqual(handler.last_body(), {})

    async def test_iter_search(self) -> None:
        pages = {
            None: build_list([build_database("db-1")], next_cursor="next"),
            "next": build_list([build_database("db-2")]),
        }
        handler = RecordingHandler(
            lambda request: httpx.Response(
                200, json=pages[json.loads(request.content).get("start_cursor")]
            )
        )

        async with make_client(handler) as client:
            results = [
                result async for result in client.iter_search(SearchRequest.filter_by_databases())
            ]

        self.assertEqual([result.id for result in results], ["db-1", "db-2"])
        self.assertEqual(
            handler.last_body(),
            {"filter": {"value": "database", "property": "object"}, "start_cursor": "next"},
        )


class TestNotionClientPages(unittest.IsolatedAsyncioTestCase):
    """Tests for page operations."""

    async def test_get_page(self) -> None:
        handler = RecordingHandler(reply(build_page(title="Buy milk")))

        async with make_client(handler) as client:
            page = await client.get_page(PAGE_ID)

        self.assertEqual(page.title(), "Buy milk")
        self.assertEqual(handler.last.url.path, f"/v1/pages/{PAGE_ID}")

    async def test_create_page(self) -> None:
        handler = RecordingHandler(reply(build_page(title="Buy bread")))
        request = PageCreateRequest.in_database(DATABASE_ID, {"Name": title_value("Buy bread")})

        async with make_client(handler) as client:
            page = await client.create_page(request)

        self.assertEqual(page.title(), "Buy bread")
        self.assertEqual(handler.last.method, "POST")
        self.assertEqual(handler.last_body()["parent"], {"database_id": DATABASE_ID})

    async def test_update_page(self) -> None:
        handler = RecordingHandler(reply(build_page(done=True)))
        request = PageUpdateRequest(properties={"Done": checkbox_value(True)})

        async with make_client(handler) as client:
            page = await client.update_page(PAGE_ID, request)

        self.assertTrue(page.properties["Done"].checkbox)
        self.assertEqual(handler.last.method, "PATCH")
        self.assertEqual(handler.last_body(), {"properties": {"Done": {"checkbox": True}}})


class TestNotionClientBlocks(unittest.IsolatedAsyncioTestCase):
    """Tests for block operations."""

    async def test_get_block(self) -> None:
        handler = RecordingHandler(reply(build_text_block("paragraph", "Hello")))

        async with make_client(handler) as client:
            block = await client.get_block(BLOCK_ID)

        self.assertIsInstance(block, ParagraphBlock)

    async def test_get_block_children(self) -> None:
        handler = RecordingHandler(
            reply(build_list([build_to_do("One"), build_to_do("Two", checked=True)]))
        )

        async with make_client(handler) as client:
            response = await client.get_block_children(PAGE_ID, start_cursor="abc", page_size=25)

        self.assertEqual([block.plain_text() for block in response.results], ["One", "Two"])
        self.assertEqual(handler.last.url.path, f"/v1/blocks/{PAGE_ID}/children")
        self.assertEqual(
            dict(handler.last.url.params), {"start_cursor": "abc", "page_size": "25"}
        )

    async def test_iter_block_children(self) -> None:
        pages = {
            None: build_list([build_to_do("One", block_id="b-1")], next_cursor="b-2"),
            "b-2": build_list([build_to_do("Two", block_id="b-2")]),
        }
        handler = RecordingHandler(
            lambda request: httpx.Response(200, json=pages[request.url.params.get("start_cursor")])
        )

        async with make_client(handler) as client:
            blocks = await client.iter_block_children(PAGE_ID).collect()

        self.assertEqual([block.id for block in blocks], ["b-1", "b-2"])

    async def test_append_block_children(self) -> None:
        handler = RecordingHandler(reply(build_list([build_to_do("New")])))
        children = [{"type": "to_do", "to_do": {"rich_text": [], "checked": False}}]

        async with make_client(handler) as client:
            response = await client.append_block_children(
                PAGE_ID, AppendBlockChildrenRequest(children=children)
            )

        self.assertIsInstance(response.results[0], ToDoBlock)
        self.assertEqual(handler.last.method, "PATCH")
        self.assertEqual(handler.last_body(), {"children": children})

    async def test_delete_block(self) -> None:
        archived = build_block("divider", {})
        archived["archived"] = True
        handler = RecordingHandler(reply(archived))

        async with make_client(handler) as client:
            block = await client.delete_block(BLOCK_ID)

        self.assertTrue(block.archived)
        self.assertEqual(handler.last.method, "DELETE")


class TestNotionClientUsers(unittest.IsolatedAsyncioTestCase):
    """Tests for user operations."""

    async def test_get_user(self) -> None:
        handler = RecordingHandler(reply(build_person_user()))

        async with make_client(handler) as client:
            user = await client.get_user(USER_ID)

        self.assertIsInstance(user, PersonUser)
        self.assertEqual(handler.last.url.path, f"/v1/users/{USER_ID}")

    async def test_get_bot_user(self) -> None:
        handler = RecordingHandler(reply(build_bot_user()))

        async with make_client(handler) as client:
            user = await client.get_bot_user()

        self.assertIsInstance(user, BotUser)
        self.assertEqual(user.id, BOT_ID)
        self.assertEqual(handler.last.url.path, "/v1/users/me")

    async def test_iter_users(self) -> None:
        pages = {
            None: build_list([build_person_user()], next_cursor="u2", result_type="user"),
            "u2": build_list([build_bot_user()], result_type="user"),
        }
        handler = RecordingHandler(
            lambda request: httpx.Response(200, json=pages[request.url.params.get("start_cursor")])
        )

        async with make_client(handler) as client:
            users = await client.iter_users(page_size=1).collect()

        self.assertEqual([user.id for user in users], [USER_ID, BOT_ID])
        self.assertEqual(handler.last.url.params["page_size"], "1")


class TestNotionClientErrors(unittest.IsolatedAsyncioTestCase):
    """Tests for error classification at the client boundary."""

    async def test_not_found_raises_api_error(self) -> None:
        handler = RecordingHandler(
            reply(build_error(404, "object_not_found", "Could not find page"), status=404)
        )

        async with make_client(handler) as client:
            with self.assertRaises(ApiError) as context:
                await client.get_page(PAGE_ID)

        self.assertEqual(context.exception.code, "object_not_found")
        self.assertEqual(context.exception.status, 404)

    async def test_rate_limited_raises_with_retry_after(self) -> None:
        handler = RecordingHandler(
            reply(
                build_error(429, "rate_limited", "You have been rate limited."),
                status=429,
                headers={"Retry-After": "3"},
            )
        )

        async with make_client(handler) as client:
            with self.assertRaises(RateLimitedError) as context:
                await client.get_page(PAGE_ID)

        self.assertEqual(context.exception.retry_after, 3.0)

    async def test_connection_reset_raises_transport_error(self) -> None:
        def reset(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadError("Connection reset by peer", request=request)

        async with make_client(RecordingHandler(reset)) as client:
            with self.assertRaises(TransportError) as context:
                await client.get_page(PAGE_ID)

        self.assertNotIsInstance(context.exception, ApiError)
        self.assertIsInstance(context.exception.__cause__, httpx.ReadError)

    async def test_timeout_raises_transport_error(self) -> None:
        def timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        async with make_client(RecordingHandler(timeout)) as client:
            with self.assertRaises(TransportError) as context:
                await client.get_database(DATABASE_ID)

        self.assertIn("timed out", str(context.exception))

    async def test_error_object_with_success_status_raises_api_error(self) -> None:
        handler = RecordingHandler(reply(build_error(409, "conflict_error", "Conflict")))

        async with make_client(handler) as client:
            with self.assertRaises(ApiError) as context:
                await client.get_page(PAGE_ID)

        self.assertEqual(context.exception.status, 409)

    async def test_gateway_error_body_raises_api_error(self) -> None:
        """Test an error body with a non-numeric status is still an ApiError."""
        handler = RecordingHandler(
            reply({"status": "error", "message": "upstream down"}, status=502)
        )

        async with make_client(handler) as client:
            with self.assertRaises(ApiError) as context:
                await client.get_database(DATABASE_ID)

        self.assertEqual(context.exception.status, 502)
        self.assertEqual(context.exception.code, "bad_gateway")
        self.assertEqual(context.exception.message, "upstream down")

    async def test_non_json_body_raises_deserialization_error(self) -> None:
        handler = RecordingHandler(lambda request: httpx.Response(200, text="<html></html>"))

        async with make_client(handler) as client:
            with self.assertRaises(DeserializationError):
                await client.get_page(PAGE_ID)

    async def test_unexpected_object_kind_raises_deserialization_error(self) -> None:
        handler = RecordingHandler(reply(build_database()))

        async with make_client(handler) as client:
            with self.assertRaises(DeserializationError) as context:
                await client.get_page(PAGE_ID)

        self.assertIn("page", str(context.exception))

    async def test_malformed_body_raises_deserialization_error(self) -> None:
        body = build_page()
        body["created_time"] = "not a date"
        handler = RecordingHandler(reply(body))

        async with make_client(handler) as client:
            with self.assertRaises(DeserializationError):
                await client.get_page(PAGE_ID)

    async def test_empty_id_fails_before_any_request(self) -> None:
        handler = RecordingHandler(reply(build_page()))

        async with make_client(handler) as client:
            with self.assertRaises(ValueError):
                await client.get_page("")

        self.assertEqual(handler.requests, [])


class TestNotionClientConcurrency(unittest.IsolatedAsyncioTestCase):
    """Tests for sharing one client between concurrent tasks."""

    async def test_concurrent_calls_do_not_interfere(self) -> None:
        """Test N concurrent retrieves each get their own page back."""

        async def respond(request: httpx.Request) -> httpx.Response:
            page_id = request.url.path.rsplit("/", 1)[-1]
            # Answer out of order so responses interleave
            await asyncio.sleep(0.001 * (hash(page_id) % 5))
            return httpx.Response(200, json=build_page(page_id, title=f"Task {page_id}"))

        page_ids = [f"page-{n}" for n in range(20)]
        async with NotionClient("secret-token", transport=httpx.MockTransport(respond)) as client:
            pages = await asyncio.gather(*(client.get_page(page_id) for page_id in page_ids))

        self.assertEqual([page.id for page in pages], page_ids)
        self.assertEqual([page.title() for page in pages], [f"Task {p}" for p in page_ids])


if __name__ == "__main__":
    unittest.main()
