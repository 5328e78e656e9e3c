"""Interactive selection from a list of items in the terminal."""

from collections.abc import Callable, Sequence
from typing import TypeVar

import click

T = TypeVar("T")


def filter_items(items: Sequence[T], label: Callable[[T], str], text: str) -> list[T]:
    """Keep the items whose label contains the text, ignoring case."""
    needle = text.casefold()
    return [item for item in items if needle in label(item).casefold()]


def select_item(items: Sequence[T], label: Callable[[T], str], prompt: str) -> T:
    """Let the user pick one item.

    The items are shown as a numbered list. Entering a number picks that
    item; entering any other text narrows the list to labels containing it.
    Entering nothing clears the filter.

    :param items: Items to choose from.
    :param label: Text shown for each item.
    :param prompt: Prompt shown to the user.
    :returns: The selected item.
    :raises click.Abort: If there is nothing to choose from.
    """
    if not items:
        click.echo("Nothing to choose from.", err=True)
        raise click.Abort()

    shown = list(items)
    while True:
        for number, item in enumerate(shown, start=1):
            click.echo(f"  {number}. {label(item)}")

        answer = click.prompt(prompt, default="", show_default=False).strip()

        if answer.isdigit() and 1 <= int(answer) <= len(shown):
            return shown[int(answer) - 1]

        matches = filter_items(items, label, answer)
        if len(matches) == 1:
            return matches[0]
        if not matches:
            click.echo(f"No match for '{answer}'.")
            shown = list(items)
            continue

        shown = matches
