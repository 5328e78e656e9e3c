"""File and icon models.

See https://developers.notion.com/reference/file-object
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import Field

from notion_api.models.common import NotionModel, tagged_union
from notion_api.models.text import RichText


class HostedFileInfo(NotionModel):
    """A file uploaded to Notion. The URL expires at ``expiry_time``."""

    url: str
    expiry_time: datetime


class ExternalFileInfo(NotionModel):
    """A file hosted outside Notion."""

    url: str


class HostedFile(NotionModel):
    type: Literal["file"] = "file"
    file: HostedFileInfo
    name: str | None = None
    caption: list[RichText] = Field(default_factory=list)


class ExternalFile(NotionModel):
    type: Literal["external"] = "external"
    external: ExternalFileInfo
    name: str | None = None
    caption: list[RichText] = Field(default_factory=list)


FileObject = Annotated[HostedFile | ExternalFile, Field(discriminator="type")]


class EmojiIcon(NotionModel):
    type: Literal["emoji"] = "emoji"
    emoji: str


class UnknownIcon(NotionModel):
    """An icon of a kind this client does not model, e.g. custom emojis."""

    type: str


Icon = tagged_union([EmojiIcon, HostedFile, ExternalFile], fallback=UnknownIcon)
