"""Database and page models."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from notion_api.models.common import DatabaseParent, NotionModel, Parent
from notion_api.models.files import FileObject, Icon
from notion_api.models.properties import PropertyConfiguration, PropertyValue, TitleValue
from notion_api.models.text import RichText, plain_text
from notion_api.models.users import UserReference


def _normalise_id(identifier: str) -> str:
    """Notion accepts IDs with or without dashes; compare them without."""
    return identifier.replace("-", "").lower()


class Database(NotionModel):
    """A Notion database and its property schema.

    See https://developers.notion.com/reference/database
    """

    object: Literal["database"] = "database"
    id: str
    created_time: datetime
    last_edited_time: datetime
    created_by: UserReference | None = None
    last_edited_by: UserReference | None = None
    title: list[RichText] = Field(default_factory=list)
    description: list[RichText] = Field(default_factory=list)
    properties: dict[str, PropertyConfiguration] = Field(default_factory=dict)
    parent: Parent | None = None
    url: str | None = None
    icon: Icon | None = None
    cover: FileObject | None = None
    archived: bool = False
    is_inline: bool = False

    def title_plain_text(self) -> str:
        """Database name as plain text."""
        return plain_text(self.title)

    def properties_of_type(self, property_type: str) -> dict[str, PropertyConfiguration]:
        """Schema entries of the given type, keyed by property name."""
        return {name: prop for name, prop in self.properties.items() if prop.type == property_type}


class Page(NotionModel):
    """A Notion page. Pages in a database carry one value per schema property.

    See https://developers.notion.com/reference/page
    """

    object: Literal["page"] = "page"
    id: str
    created_time: datetime
    last_edited_time: datetime
    created_by: UserReference | None = None
    last_edited_by: UserReference | None = None
    archived: bool = False
    properties: dict[str, PropertyValue] = Field(default_factory=dict)
    parent: Parent
    url: str | None = None
    icon: Icon | None = None
    cover: FileObject | None = None

    def title(self) -> str | None:
        """Plain text of the page's title property, or None if it has none."""
        for value in self.properties.values():
            if isinstance(value, TitleValue):
                return value.plain_text()
        return None

    def schema_mismatches(self, database: Database) -> list[str]:
        """Describe how this page's properties disagree with a database schema.

        Schemas can change between requests, so a page fetched earlier may no
        longer match the current schema of its database.

        :param database: Database whose schema the page should follow.
        :returns: One message per mismatch; empty when the page conforms.
        """
        mismatches: list[str] = []

        if isinstance(self.parent, DatabaseParent) and _normalise_id(
            self.parent.database_id
        ) != _normalise_id(database.id):
            mismatches.append(
                f"Page parent database {self.parent.database_id} is not {database.id}"
            )

        for name, value in self.properties.items():
            schema = database.properties.get(name)
            if schema is None:
                mismatches.append(f"Property '{name}' is not in the database schema")
            elif schema.type != value.type:
                mismatches.append(
                    f"Property '{name}' has type {value.type} but the schema says {schema.type}"
                )

        for name in sorted(database.properties.keys() - self.properties.keys()):
            mismatches.append(f"Property '{name}' is missing from the page")

        return mismatches
