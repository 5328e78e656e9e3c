"""User models.

See https://developers.notion.com/reference/user
"""

from typing import Annotated, Any, Literal

from pydantic import Field

from notion_api.models.common import NotionModel, tagged_union


class PartialUser(NotionModel):
    """A user reference carrying only an ID, e.g. ``created_by``."""

    object: Literal["user"] = "user"
    id: str


class Person(NotionModel):
    """Details specific to a person user."""

    email: str | None = None


class PersonUser(PartialUser):
    """A human member of the workspace."""

    type: Literal["person"] = "person"
    name: str | None = None
    avatar_url: str | None = None
    person: Person = Field(default_factory=Person)


class Bot(NotionModel):
    """Details specific to a bot user."""

    owner: dict[str, Any] | None = None
    workspace_name: str | None = None


class BotUser(PartialUser):
    """An integration acting in the workspace."""

    type: Literal["bot"] = "bot"
    name: str | None = None
    avatar_url: str | None = None
    bot: Bot = Field(default_factory=Bot)


User = Annotated[PersonUser | BotUser, Field(discriminator="type")]

# References decode to full users when Notion includes the details
UserReference = tagged_union([PersonUser, BotUser], tag="type", fallback=PartialUser)
