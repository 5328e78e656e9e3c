"""Block models.

Every block shares the common fields on :class:`BlockBase` and carries its
type-specific content under a key named after its type, e.g. a paragraph
block has a ``paragraph`` field. Block types this client does not model decode
to :class:`UnknownBlock`.

See https://developers.notion.com/reference/block
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from notion_api.models.common import NotionModel, tagged_union
from notion_api.models.files import FileObject, Icon
from notion_api.models.text import RichText, plain_text
from notion_api.models.users import UserReference


class BlockBase(NotionModel):
    """Fields common to every block."""

    object: Literal["block"] = "block"
    id: str
    parent: dict[str, Any] | None = None
    created_time: datetime
    last_edited_time: datetime
    created_by: UserReference
    last_edited_by: UserReference
    has_children: bool = False
    archived: bool = False

    def plain_text(self) -> str:
        """Plain text of the block's rich text content, empty if it has none."""
        content = getattr(self, str(getattr(self, "type", "")), None)
        rich_text = getattr(content, "rich_text", None)
        if not rich_text:
            return ""
        return plain_text(rich_text)


# Block contents


class TextBlockContent(NotionModel):
    """Content of paragraphs, quotes, list items and toggles."""

    rich_text: list[RichText] = Field(default_factory=list)
    color: str = "default"
    children: list[Block] | None = None


class HeadingContent(NotionModel):
    rich_text: list[RichText] = Field(default_factory=list)
    color: str = "default"
    is_toggleable: bool = False


class CalloutContent(NotionModel):
    rich_text: list[RichText] = Field(default_factory=list)
    icon: Icon | None = None
    color: str = "default"


class ToDoContent(NotionModel):
    rich_text: list[RichText] = Field(default_factory=list)
    checked: bool = False
    color: str = "default"
    children: list[Block] | None = None


class CodeContent(NotionModel):
    rich_text: list[RichText] = Field(default_factory=list)
    caption: list[RichText] = Field(default_factory=list)
    language: str = "plain text"


class TitleContent(NotionModel):
    title: str


class UrlContent(NotionModel):
    url: str
    caption: list[RichText] = Field(default_factory=list)


class EquationContent(NotionModel):
    expression: str


class ColorContent(NotionModel):
    color: str = "default"


class TemplateContent(NotionModel):
    rich_text: list[RichText] = Field(default_factory=list)


class PageLink(NotionModel):
    type: Literal["page_id"] = "page_id"
    page_id: str


class DatabaseLink(NotionModel):
    type: Literal["database_id"] = "database_id"
    database_id: str


class UnknownLink(NotionModel):
    type: str


LinkToPage = tagged_union([PageLink, DatabaseLink], fallback=UnknownLink)


class SyncedFrom(NotionModel):
    block_id: str


class SyncedBlockContent(NotionModel):
    """Original synced blocks have no ``synced_from``; duplicates point at the original."""

    synced_from: SyncedFrom | None = None


class TableContent(NotionModel):
    table_width: int
    has_column_header: bool = False
    has_row_header: bool = False


class TableRowContent(NotionModel):
    cells: list[list[RichText]] = Field(default_factory=list)


# Block types


class ParagraphBlock(BlockBase):
    type: Literal["paragraph"] = "paragraph"
    paragraph: TextBlockContent


class Heading1Block(BlockBase):
    type: Literal["heading_1"] = "heading_1"
    heading_1: HeadingContent


class Heading2Block(BlockBase):
    type: Literal["heading_2"] = "heading_2"
    heading_2: HeadingContent


class Heading3Block(BlockBase):
    type: Literal["heading_3"] = "heading_3"
    heading_3: HeadingContent


class CalloutBlock(BlockBase):
    type: Literal["callout"] = "callout"
    callout: CalloutContent


class QuoteBlock(BlockBase):
    type: Literal["quote"] = "quote"
    quote: TextBlockContent


class BulletedListItemBlock(BlockBase):
    type: Literal["bulleted_list_item"] = "bulleted_list_item"
    bulleted_list_item: TextBlockContent


class NumberedListItemBlock(BlockBase):
    type: Literal["numbered_list_item"] = "numbered_list_item"
    numbered_list_item: TextBlockContent


class ToDoBlock(BlockBase):
    type: Literal["to_do"] = "to_do"
    to_do: ToDoContent


class ToggleBlock(BlockBase):
    type: Literal["toggle"] = "toggle"
    toggle: TextBlockContent


class CodeBlock(BlockBase):
    type: Literal["code"] = "code"
    code: CodeContent


class ChildPageBlock(BlockBase):
    type: Literal["child_page"] = "child_page"
    child_page: TitleContent


class ChildDatabaseBlock(BlockBase):
    type: Literal["child_database"] = "child_database"
    child_database: TitleContent


class EmbedBlock(BlockBase):
    type: Literal["embed"] = "embed"
    embed: UrlContent


class ImageBlock(BlockBase):
    type: Literal["image"] = "image"
    image: FileObject


class VideoBlock(BlockBase):
    type: Literal["video"] = "video"
    video: FileObject


class FileBlock(BlockBase):
    type: Literal["file"] = "file"
    file: FileObject


class PdfBlock(BlockBase):
    type: Literal["pdf"] = "pdf"
    pdf: FileObject


class BookmarkBlock(BlockBase):
    type: Literal["bookmark"] = "bookmark"
    bookmark: UrlContent


class EquationBlock(BlockBase):
    type: Literal["equation"] = "equation"
    equation: EquationContent


class DividerBlock(BlockBase):
    type: Literal["divider"] = "divider"


class TableOfContentsBlock(BlockBase):
    type: Literal["table_of_contents"] = "table_of_contents"
    table_of_contents: ColorContent = Field(default_factory=ColorContent)


class BreadcrumbBlock(BlockBase):
    type: Literal["breadcrumb"] = "breadcrumb"


class ColumnListBlock(BlockBase):
    type: Literal["column_list"] = "column_list"


class ColumnBlock(BlockBase):
    type: Literal["column"] = "column"


class LinkPreviewBlock(BlockBase):
    type: Literal["link_preview"] = "link_preview"
    link_preview: UrlContent


class TemplateBlock(BlockBase):
    type: Literal["template"] = "template"
    template: TemplateContent


class LinkToPageBlock(BlockBase):
    type: Literal["link_to_page"] = "link_to_page"
    link_to_page: LinkToPage


class SyncedBlock(BlockBase):
    type: Literal["synced_block"] = "synced_block"
    synced_block: SyncedBlockContent


class TableBlock(BlockBase):
    type: Literal["table"] = "table"
    table: TableContent


class TableRowBlock(BlockBase):
    type: Literal["table_row"] = "table_row"
    table_row: TableRowContent


class UnsupportedBlock(BlockBase):
    """A block Notion itself does not expose through the API."""

    type: Literal["unsupported"] = "unsupported"


class UnknownBlock(BlockBase):
    """A block of a type this client does not model."""

    type: str


Block = tagged_union(
    [
        ParagraphBlock,
        Heading1Block,
        Heading2Block,
        Heading3Block,
        CalloutBlock,
        QuoteBlock,
        BulletedListItemBlock,
        NumberedListItemBlock,
        ToDoBlock,
        ToggleBlock,
        CodeBlock,
        ChildPageBlock,
        ChildDatabaseBlock,
        EmbedBlock,
        ImageBlock,
        VideoBlock,
        FileBlock,
        PdfBlock,
        BookmarkBlock,
        EquationBlock,
        DividerBlock,
        TableOfContentsBlock,
        BreadcrumbBlock,
        ColumnListBlock,
        ColumnBlock,
        LinkPreviewBlock,
        TemplateBlock,
        LinkToPageBlock,
        SyncedBlock,
        TableBlock,
        TableRowBlock,
        UnsupportedBlock,
    ],
    fallback=UnknownBlock,
)

# Content models nest blocks, so resolve the recursive reference now Block exists
for _model in (
    TextBlockContent,
    ToDoContent,
    ParagraphBlock,
    QuoteBlock,
    BulletedListItemBlock,
    NumberedListItemBlock,
    ToDoBlock,
    ToggleBlock,
):
    _model.model_rebuild()
