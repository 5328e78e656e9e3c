"""Rich text models.

Rich text arrays are used by titles, text properties and most blocks.
See https://developers.notion.com/reference/rich-text
"""

from collections.abc import Iterable
from typing import Annotated, Literal

from pydantic import Field

from notion_api.models.common import DateValue, NotionModel, tagged_union
from notion_api.models.users import UserReference


class Annotations(NotionModel):
    """Styling applied to a rich text item."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    underline: bool = False
    code: bool = False
    color: str = "default"


class Link(NotionModel):
    """Inline link target."""

    url: str


class TextContent(NotionModel):
    """Content of a text rich text item."""

    content: str
    link: Link | None = None


class MentionId(NotionModel):
    """Reference to a mentioned page or database."""

    id: str


class LinkPreview(NotionModel):
    """Reference to a mentioned link preview."""

    url: str


class UserMention(NotionModel):
    type: Literal["user"] = "user"
    user: UserReference


class PageMention(NotionModel):
    type: Literal["page"] = "page"
    page: MentionId


class DatabaseMention(NotionModel):
    type: Literal["database"] = "database"
    database: MentionId


class DateMention(NotionModel):
    type: Literal["date"] = "date"
    date: DateValue


class LinkPreviewMention(NotionModel):
    type: Literal["link_preview"] = "link_preview"
    link_preview: LinkPreview


class UnknownMention(NotionModel):
    """A mention of a kind this client does not model."""

    type: str


Mention = tagged_union(
    [UserMention, PageMention, DatabaseMention, DateMention, LinkPreviewMention],
    fallback=UnknownMention,
)


class _RichTextBase(NotionModel):
    plain_text: str
    href: str | None = None
    annotations: Annotations = Field(default_factory=Annotations)


class TextRichText(_RichTextBase):
    """Plain or linked text."""

    type: Literal["text"] = "text"
    text: TextContent


class MentionRichText(_RichTextBase):
    """Inline mention of a user, page, database or date."""

    type: Literal["mention"] = "mention"
    mention: Mention


class Equation(NotionModel):
    expression: str


class EquationRichText(_RichTextBase):
    """Inline KaTeX equation."""

    type: Literal["equation"] = "equation"
    equation: Equation


RichText = Annotated[
    TextRichText | MentionRichText | EquationRichText,
    Field(discriminator="type"),
]


def plain_text(rich_text: Iterable[_RichTextBase]) -> str:
    """Concatenate the plain text of a rich text array."""
    return "".join(item.plain_text for item in rich_text)
