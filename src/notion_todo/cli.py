"""Command line interface for the Notion todo example.

Commands:
- config: pick the task database and save it to ``todo_config.env``
- list: list every task
- add: add a task
- check: tick an open task
"""

import asyncio
import functools
import logging
import sys
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

import click

from notion_api import NotionClient, NotionClientError, __version__
from notion_api.models import Database
from notion_todo.config import ConfigError, TodoConfig, load_config, save_database_id
from notion_todo.select import select_item
from notion_todo.tasks import (
    Task,
    TaskDatabaseError,
    add_task,
    complete_task,
    find_databases,
    list_tasks,
)
from notion_todo.utils.logging import configure_logging

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def create_client(config: TodoConfig) -> NotionClient:
    """Create a Notion client from the CLI configuration.

    :raises ConfigError: If no API token is configured.
    """
    return NotionClient(config.require_token())


def handle_errors(f: Callable[P, R]) -> Callable[P, R]:
    """Print known errors as ``<Kind>: <message>`` and exit with status 1."""

    @functools.wraps(f)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return f(*args, **kwargs)
        except NotionClientError as e:
            logger.debug("Command failed", exc_info=True)
            click.echo(f"{e.kind}: {e}", err=True)
            sys.exit(1)
        except (ConfigError, TaskDatabaseError) as e:
            logger.debug("Command failed", exc_info=True)
            click.echo(f"{type(e).__name__}: {e}", err=True)
            sys.exit(1)

    return wrapper


@click.group()
@click.version_option(version=__version__, prog_name="notion-todo")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logs")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Manage a todo list kept in a Notion database.

    \b
    Environment Variables:
      NOTION_API_TOKEN         - Notion integration token
      NOTION_TASK_DATABASE_ID  - Task database (set by `notion-todo config`)
      LOG_LEVEL                - Log level when --verbose is not given
    """
    try:
        configure_logging("DEBUG" if verbose else None, default_level="WARNING")
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    ctx.obj = load_config()


@cli.command("config")
@click.pass_obj
@handle_errors
def configure(config: TodoConfig) -> None:
    """Choose which database this todo list uses."""

    async def _find() -> list[Database]:
        async with create_client(config) as client:
            return await find_databases(client)

    databases = asyncio.run(_find())
    database = select_item(
        databases,
        label=lambda db: db.title_plain_text() or db.id,
        prompt="Select a database (number or text to filter)",
    )

    save_database_id(database.id)
    click.echo(f"Selected database's id: {database.id}")


@cli.command("list")
@click.pass_obj
@handle_errors
def list_command(config: TodoConfig) -> None:
    """List all todos."""
    database_id = config.require_database_id()

    async def _list() -> list[Task]:
        async with create_client(config) as client:
            return await list_tasks(client, database_id)

    tasks = asyncio.run(_list())
    if not tasks:
        click.echo("No tasks.")
        return

    for task in tasks:
        click.echo(task.describe())


@cli.command("add")
@click.argument("title")
@click.pass_obj
@handle_errors
def add_command(config: TodoConfig, title: str) -> None:
    """Add a todo item to the Notion database."""
    database_id = config.require_database_id()

    async def _add() -> Task:
        async with create_client(config) as client:
            return await add_task(client, database_id, title)

    task = asyncio.run(_add())
    click.echo(f"Added: {task.title}")


@cli.command("check")
@click.pass_obj
@handle_errors
def check_command(config: TodoConfig) -> None:
    """Complete a todo item."""
    database_id = config.require_database_id()

    async def _open_tasks() -> list[Task]:
        async with create_client(config) as client:
            return await list_tasks(client, database_id, only_open=True)

    tasks = asyncio.run(_open_tasks())
    if not tasks:
        click.echo("Nothing left to do.")
        return

    task = select_item(tasks, label=lambda t: t.title, prompt="Select a task to complete")

    async def _complete() -> Task:
        async with create_client(config) as client:
            return await complete_task(client, database_id, task.id)

    completed = asyncio.run(_complete())
    click.echo(f"Completed: {completed.title}")


def main(argv: list[str] | None = None) -> Any:
    """Entry point for the ``notion-todo`` command."""
    return cli.main(args=argv, prog_name="notion-todo")
