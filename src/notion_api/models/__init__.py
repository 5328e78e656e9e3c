"""Typed models for objects returned by the Notion API."""

from notion_api.models.blocks import Block, BlockBase, UnknownBlock
from notion_api.models.common import (
    BlockParent,
    DatabaseParent,
    DateValue,
    ErrorResponse,
    ListResponse,
    PageParent,
    Parent,
    UnknownParent,
    WorkspaceParent,
)
from notion_api.models.objects import (
    NotionObject,
    SearchResult,
    only_databases,
    only_pages,
    parse_object,
)
from notion_api.models.properties import PropertyConfiguration, PropertyValue, SelectOption
from notion_api.models.resources import Database, Page
from notion_api.models.text import RichText, plain_text
from notion_api.models.users import BotUser, PartialUser, PersonUser, User, UserReference

__all__ = [
    "Block",
    "BlockBase",
    "BlockParent",
    "BotUser",
    "Database",
    "DatabaseParent",
    "DateValue",
    "ErrorResponse",
    "ListResponse",
    "NotionObject",
    "Page",
    "PageParent",
    "Parent",
    "PartialUser",
    "PersonUser",
    "PropertyConfiguration",
    "PropertyValue",
    "RichText",
    "SearchResult",
    "SelectOption",
    "UnknownBlock",
    "UnknownParent",
    "User",
    "UserReference",
    "WorkspaceParent",
    "only_databases",
    "only_pages",
    "parse_object",
    "plain_text",
]
