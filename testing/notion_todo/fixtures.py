"""In-memory Notion workspace for todo CLI tests."""

import json
from typing import Any

import httpx

from notion_api import NotionClient
from testing.notion_api.fixtures import (
    DATABASE_ID,
    build_database,
    build_error,
    build_list,
    build_page,
)


class FakeNotion:
    """Mock transport handler serving one task database.

    Supports the endpoints the todo CLI uses: search, database retrieve and
    query, page create and page update. Pages are kept in insertion order.
    """

    def __init__(
        self,
        tasks: list[tuple[str, bool]] | None = None,
        databases: list[dict[str, Any]] | None = None,
    ) -> None:
        self.databases = databases if databases is not None else [build_database()]
        self.pages: dict[str, dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []
        for title, done in tasks or []:
            self._add_page(title, done=done)

    def client(self) -> NotionClient:
        return NotionClient("secret-token", transport=httpx.MockTransport(self))

    def bodies(self, method: str, path_suffix: str) -> list[Any]:
        """JSON bodies of recorded requests matching a method and path ending."""
        return [
            json.loads(request.content)
            for request in self.requests
            if request.method == method and request.url.path.endswith(path_suffix)
        ]

    def _add_page(self, title: str, *, done: bool = False) -> dict[str, Any]:
        page_id = f"task-{len(self.pages) + 1}"
        page = build_page(page_id, title, done=done)
        self.pages[page_id] = page
        return page

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1/").split("/")
        body = json.loads(request.content) if request.content else {}

        match request.method, path:
            case "POST", ["search"]:
                return httpx.Response(200, json=build_list(self.databases))
            case "GET", ["databases", database_id]:
                for database in self.databases:
                    if database["id"] == database_id:
                        return httpx.Response(200, json=database)
            case "POST", ["databases", database_id, "query"] if database_id == DATABASE_ID:
                return httpx.Response(200, json=build_list(self._query(body), result_type="page"))
            case "POST", ["pages"]:
                title = body["properties"]["Name"]["title"][0]["text"]["content"]
                return httpx.Response(200, json=self._add_page(title))
            case "PATCH", ["pages", page_id] if page_id in self.pages:
                page = self.pages[page_id]
                for name, value in body.get("properties", {}).items():
                    page["properties"][name].update(value)
                return httpx.Response(200, json=page)

        return httpx.Response(
            404, json=build_error(404, "object_not_found", f"Could not find {request.url.path}")
        )

    def _query(self, body: dict[str, Any]) -> list[dict[str, Any]]:
        pages = list(self.pages.values())
        condition = body.get("filter", {}).get("checkbox")
        if condition is None:
            return pages
        name = body["filter"]["property"]
        return [
            page for page in pages if page["properties"][name]["checkbox"] == condition["equals"]
        ]
