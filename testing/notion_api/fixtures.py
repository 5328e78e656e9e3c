"""Shared test fixtures for Notion API tests.

Builders return JSON bodies shaped like recorded Notion API responses, so
tests exercise the same decoding paths as real traffic.
"""

from typing import Any

DATABASE_ID = "d9824bdc-8445-4327-be8b-5b47500af6ce"
PAGE_ID = "59833787-2cf9-4fdf-8782-e53db20768a5"
BLOCK_ID = "c02fc1d3-db8b-45c5-a222-27595b15aea7"
USER_ID = "e79a0b74-3aba-4149-9f74-0bb5791a6ee6"
BOT_ID = "9188c6a5-7381-452f-b3dc-d4865aa89bdf"
REQUEST_ID = "3e1f4a2b-7c6d-4e5f-8a9b-0c1d2e3f4a5b"

CREATED_TIME = "2024-03-01T09:30:00.000Z"
EDITED_TIME = "2024-03-02T17:45:00.000Z"


def partial_user(user_id: str = USER_ID) -> dict[str, Any]:
    return {"object": "user", "id": user_id}


def rich_text(content: str, *, link: str | None = None) -> dict[str, Any]:
    """Build a text rich text item as Notion returns it."""
    return {
        "type": "text",
        "text": {"content": content, "link": {"url": link} if link else None},
        "annotations": {
            "bold": False,
            "italic": False,
            "strikethrough": False,
            "underline": False,
            "code": False,
            "color": "default",
        },
        "plain_text": content,
        "href": link,
    }


def task_schema() -> dict[str, Any]:
    """Schema of a simple task database."""
    return {
        "Name": {"id": "title", "name": "Name", "type": "title", "title": {}},
        "Done": {"id": "%3DqQs", "name": "Done", "type": "checkbox", "checkbox": {}},
        "Tags": {
            "id": "flsb",
            "name": "Tags",
            "type": "multi_select",
            "multi_select": {
                "options": [
                    {"id": "5de29601", "name": "home", "color": "green"},
                    {"id": "b1a7d9c2", "name": "work", "color": "blue"},
                ]
            },
        },
        "Due": {"id": "AJP%7D", "name": "Due", "type": "date", "date": {}},
    }


def full_schema() -> dict[str, Any]:
    """Schema covering every property type, plus one type the client does not know."""
    schema = task_schema()
    schema.update(
        {
            "Notes": {"id": "n%3Ad", "name": "Notes", "type": "rich_text", "rich_text": {}},
            "Estimate": {
                "id": "est",
                "name": "Estimate",
                "type": "number",
                "number": {"format": "number_with_commas"},
            },
            "Priority": {
                "id": "pri",
                "name": "Priority",
                "type": "select",
                "select": {"options": [{"id": "p1", "name": "High", "color": "red"}]},
            },
            "Status": {
                "id": "sts",
                "name": "Status",
                "type": "status",
                "status": {
                    "options": [
                        {"id": "s1", "name": "Not started", "color": "default"},
                        {"id": "s2", "name": "Done", "color": "green"},
                    ],
                    "groups": [
                        {"id": "g1", "name": "To-do", "color": "gray", "option_ids": ["s1"]},
                        {"id": "g2", "name": "Complete", "color": "green", "option_ids": ["s2"]},
                    ],
                },
            },
            "Owner": {"id": "own", "name": "Owner", "type": "people", "people": {}},
            "Attachments": {"id": "att", "name": "Attachments", "type": "files", "files": {}},
            "Link": {"id": "lnk", "name": "Link", "type": "url", "url": {}},
            "Email": {"id": "eml", "name": "Email", "type": "email", "email": {}},
            "Phone": {"id": "phn", "name": "Phone", "type": "phone_number", "phone_number": {}},
            "Score": {
                "id": "scr",
                "name": "Score",
                "type": "formula",
                "formula": {"expression": "prop(\"Estimate\") * 2"},
            },
            "Project": {
                "id": "prj",
                "name": "Project",
                "type": "relation",
                "relation": {
                    "database_id": "668d797c-76fa-4934-9b05-ad288df2d136",
                    "type": "dual_property",
                    "synced_property_name": "Tasks",
                    "synced_property_id": "fy%3A%7B",
                },
            },
            "Project size": {
                "id": "rol",
                "name": "Project size",
                "type": "rollup",
                "rollup": {
                    "relation_property_name": "Project",
                    "relation_property_id": "prj",
                    "rollup_property_name": "Size",
                    "rollup_property_id": "siz",
                    "function": "sum",
                },
            },
            "Created": {"id": "crt", "name": "Created", "type": "created_time", "created_time": {}},
            "Author": {"id": "aut", "name": "Author", "type": "created_by", "created_by": {}},
            "Edited": {
                "id": "edt",
                "name": "Edited",
                "type": "last_edited_time",
                "last_edited_time": {},
            },
            "Editor": {
                "id": "edb",
                "name": "Editor",
                "type": "last_edited_by",
                "last_edited_by": {},
            },
            "Ticket": {
                "id": "tkt",
                "name": "Ticket",
                "type": "unique_id",
                "unique_id": {"prefix": "TASK"},
            },
            "Action": {"id": "btn", "name": "Action", "type": "button", "button": {}},
        }
    )
    return schema


def build_database(
    database_id: str = DATABASE_ID,
    title: str = "Tasks",
    properties: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a database object."""
    return {
        "object": "database",
        "id": database_id,
        "cover": None,
        "icon": {"type": "emoji", "emoji": "✅"},
        "created_time": CREATED_TIME,
        "created_by": partial_user(),
        "last_edited_by": partial_user(),
        "last_edited_time": EDITED_TIME,
        "title": [rich_text(title)],
        "description": [],
        "is_inline": False,
        "properties": properties if properties is not None else task_schema(),
        "parent": {"type": "page_id", "page_id": "98ad959b-2b6a-4774-80ee-00246fb0ea9b"},
        "url": f"https://www.notion.so/{database_id.replace('-', '')}",
        "archived": False,
    }


def task_values(title: str = "Buy milk", *, done: bool = False) -> dict[str, Any]:
    """Property values of a page in the task database."""
    return {
        "Name": {"id": "title", "type": "title", "title": [rich_text(title)]},
        "Done": {"id": "%3DqQs", "type": "checkbox", "checkbox": done},
        "Tags": {
            "id": "flsb",
            "type": "multi_select",
            "multi_select": [{"id": "5de29601", "name": "home", "color": "green"}],
        },
        "Due": {
            "id": "AJP%7D",
            "type": "date",
            "date": {"start": "2024-03-05", "end": None, "time_zone": None},
        },
    }


def build_page(
    page_id: str = PAGE_ID,
    title: str = "Buy milk",
    *,
    done: bool = False,
    database_id: str = DATABASE_ID,
    properties: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a page object that is a row of a database."""
    return {
        "object": "page",
        "id": page_id,
        "created_time": CREATED_TIME,
        "last_edited_time": EDITED_TIME,
        "created_by": partial_user(),
        "last_edited_by": partial_user(),
        "cover": None,
        "icon": None,
        "parent": {"type": "database_id", "database_id": database_id},
        "archived": False,
        "properties": properties if properties is not None else task_values(title, done=done),
        "url": f"https://www.notion.so/{page_id.replace('-', '')}",
        "public_url": None,
    }


def build_block(
    block_type: str,
    content: dict[str, Any],
    block_id: str = BLOCK_ID,
    *,
    has_children: bool = False,
) -> dict[str, Any]:
    """Build a block object of any type."""
    return {
        "object": "block",
        "id": block_id,
        "parent": {"type": "page_id", "page_id": PAGE_ID},
        "created_time": CREATED_TIME,
        "last_edited_time": EDITED_TIME,
        "created_by": partial_user(),
        "last_edited_by": partial_user(),
        "has_children": has_children,
        "archived": False,
        "type": block_type,
        block_type: content,
    }


def build_text_block(block_type: str, text: str, block_id: str = BLOCK_ID) -> dict[str, Any]:
    """Build a block whose content is rich text, such as a paragraph."""
    return build_block(block_type, {"rich_text": [rich_text(text)], "color": "default"}, block_id)


def build_to_do(text: str, *, checked: bool = False, block_id: str = BLOCK_ID) -> dict[str, Any]:
    return build_block(
        "to_do",
        {"rich_text": [rich_text(text)], "checked": checked, "color": "default"},
        block_id,
    )


def build_person_user(user_id: str = USER_ID) -> dict[str, Any]:
    return {
        "object": "user",
        "id": user_id,
        "type": "person",
        "name": "Avocado Lovelace",
        "avatar_url": "https://secure.notion-static.com/e6a352a8.jpg",
        "person": {"email": "avo@example.org"},
    }


def build_bot_user(user_id: str = BOT_ID) -> dict[str, Any]:
    return {
        "object": "user",
        "id": user_id,
        "type": "bot",
        "name": "Todo integration",
        "avatar_url": None,
        "bot": {
            "owner": {"type": "workspace", "workspace": True},
            "workspace_name": "Avocado's Notion",
        },
    }


def build_list(
    results: list[dict[str, Any]],
    next_cursor: str | None = None,
    result_type: str = "page_or_database",
) -> dict[str, Any]:
    """Build one page of a paginated list response."""
    return {
        "object": "list",
        "results": results,
        "next_cursor": next_cursor,
        "has_more": next_cursor is not None,
        "type": result_type,
        result_type: {},
        "request_id": REQUEST_ID,
    }


def build_error(status: int, code: str, message: str) -> dict[str, Any]:
    return {
        "object": "error",
        "status": status,
        "code": code,
        "message": message,
        "request_id": REQUEST_ID,
    }
