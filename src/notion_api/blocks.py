"""Markdown to/from Notion blocks conversion.

This module converts between markdown text and Notion blocks, supporting a
subset of common block types. Markdown is turned into block payloads ready for
:class:`~notion_api.query.AppendBlockChildrenRequest`; decoded
:class:`~notion_api.models.Block` models are rendered back to markdown.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from notion_api.models.blocks import (
    BulletedListItemBlock,
    CodeBlock,
    DividerBlock,
    Heading1Block,
    Heading2Block,
    Heading3Block,
    NumberedListItemBlock,
    ParagraphBlock,
    QuoteBlock,
    ToDoBlock,
)
from notion_api.payloads import text_item

_NUMBERED_ITEM = re.compile(r"^(\d+)\.\s+(.+)$")
_CODE_FENCE = "```"

# Notion rejects rich text items longer than this
MAX_TEXT_LENGTH = 2000


def markdown_to_blocks(markdown: str) -> list[dict[str, Any]]:
    """Convert markdown text to Notion block payloads.

    Supports the following markdown patterns:
    - # Heading -> heading_1
    - ## Heading -> heading_2
    - ### Heading -> heading_3
    - - [ ] Item -> to_do (unchecked)
    - - [x] Item -> to_do (checked)
    - - Item -> bulleted_list_item
    - 1. Item -> numbered_list_item
    - > Quote -> quote
    - ```lang fenced code``` -> code
    - --- -> divider
    - Plain text -> paragraph

    :param markdown: Markdown formatted text.
    :returns: List of Notion block payloads.
    """
    if not markdown or not markdown.strip():
        return []

    blocks: list[dict[str, Any]] = []
    lines = markdown.split("\n")
    index = 0

    while index < len(lines):
        line = lines[index]

        if line.strip().startswith(_CODE_FENCE):
            block, index = _parse_code_fence(lines, index)
            blocks.append(block)
            continue

        block = _parse_line_to_block(line)
        if block:
            blocks.append(block)
        index += 1

    return blocks


def blocks_to_markdown(blocks: Iterable[Any]) -> str:
    """Convert decoded Notion blocks to markdown text.

    Supports the same block types as :func:`markdown_to_blocks`. Other block
    types are skipped.

    :param blocks: Decoded block models.
    :returns: Markdown formatted text.
    """
    lines: list[str] = []
    numbered_counter = 1

    for block in blocks:
        line = _block_to_line(block, numbered_counter)
        if line is None:
            continue
        lines.append(line)
        if isinstance(block, NumberedListItemBlock):
            numbered_counter += 1
        else:
            numbered_counter = 1

    return "\n".join(lines)


def _parse_code_fence(lines: list[str], start: int) -> tuple[dict[str, Any], int]:
    """Parse a fenced code block starting at ``lines[start]``.

    An unterminated fence runs to the end of the text.

    :param lines: All markdown lines.
    :param start: Index of the opening fence.
    :returns: The code block payload and the index of the line after the fence.
    """
    language = lines[start].strip()[len(_CODE_FENCE) :].strip() or "plain text"
    body: list[str] = []
    index = start + 1

    while index < len(lines) and lines[index].strip() != _CODE_FENCE:
        body.append(lines[index])
        index += 1

    return _create_code_block("\n".join(body), language), index + 1


def _parse_line_to_block(line: str) -> dict[str, Any] | None:
    """Parse a single markdown line to a Notion block.

    :param line: A single line of markdown text.
    :returns: Notion block payload or None for empty lines.
    """
    stripped = line.strip()

    if not stripped:
        return None

    if stripped == "---":
        return {"object": "block", "type": "divider", "divider": {}}

    block = _try_pattern_match(line)
    if block:
        return block

    return _create_text_block("paragraph", line)


def _try_pattern_match(line: str) -> dict[str, Any] | None:
    """Try to match line against known markdown patterns.

    :param line: A single line of markdown text.
    :returns: Notion block payload or None if no pattern matches.
    """
    if line.startswith("### "):
        return _create_text_block("heading_3", line[4:].strip())
    if line.startswith("## "):
        return _create_text_block("heading_2", line[3:].strip())
    if line.startswith("# "):
        return _create_text_block("heading_1", line[2:].strip())

    if line.startswith("> "):
        return _create_text_block("quote", line[2:].strip())

    if line.startswith("- "):
        return _parse_list_item(line)

    numbered_match = _NUMBERED_ITEM.match(line)
    if numbered_match:
        return _create_text_block("numbered_list_item", numbered_match.group(2).strip())

    return None


def _parse_list_item(line: str) -> dict[str, Any]:
    """Parse a list item line (todo or bulleted).

    :param line: A line starting with "- ".
    :returns: Notion block payload for the list item.
    """
    if line.startswith("- [ ] "):
        return _create_todo_block(line[6:].strip(), checked=False)
    if line.startswith("- [x] ") or line.startswith("- [X] "):
        return _create_todo_block(line[6:].strip(), checked=True)

    return _create_text_block("bulleted_list_item", line[2:].strip())


def _rich_text(text: str) -> list[dict[str, Any]]:
    """Split text into rich text items no longer than Notion accepts."""
    if not text:
        return []
    return [
        text_item(text[offset : offset + MAX_TEXT_LENGTH])
        for offset in range(0, len(text), MAX_TEXT_LENGTH)
    ]


def _create_text_block(block_type: str, text: str) -> dict[str, Any]:
    return {
        "object": "block",
        "type": block_type,
        block_type: {"rich_text": _rich_text(text)},
    }


def _create_todo_block(text: str, *, checked: bool) -> dict[str, Any]:
    return {
        "object": "block",
        "type": "to_do",
        "to_do": {"rich_text": _rich_text(text), "checked": checked},
    }


def _create_code_block(code: str, language: str) -> dict[str, Any]:
    return {
        "object": "block",
        "type": "code",
        "code": {"rich_text": _rich_text(code), "language": language},
    }


_PREFIXES: dict[type, str] = {
    Heading1Block: "# ",
    Heading2Block: "## ",
    Heading3Block: "### ",
    BulletedListItemBlock: "- ",
    QuoteBlock: "> ",
    ParagraphBlock: "",
}


def _block_to_line(block: Any, numbered_counter: int) -> str | None:
    """Convert a single decoded block to markdown.

    :param block: The decoded block model.
    :param numbered_counter: Current counter for numbered lists.
    :returns: Markdown text or None for unsupported blocks.
    """
    if isinstance(block, DividerBlock):
        return "---"

    if isinstance(block, ToDoBlock):
        checkbox = "[x]" if block.to_do.checked else "[ ]"
        return f"- {checkbox} {block.plain_text()}"

    if isinstance(block, NumberedListItemBlock):
        return f"{numbered_counter}. {block.plain_text()}"

    if isinstance(block, CodeBlock):
        language = "" if block.code.language == "plain text" else block.code.language
        return f"{_CODE_FENCE}{language}\n{block.plain_text()}\n{_CODE_FENCE}"

    prefix = _PREFIXES.get(type(block))
    if prefix is None:
        return None
    return f"{prefix}{block.plain_text()}"
