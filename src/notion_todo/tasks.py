"""Task operations on a Notion database, used by the todo CLI."""

import logging

from pydantic import BaseModel

from notion_api import NotionClient
from notion_api.enums import PropertyType
from notion_api.models import Database, Page
from notion_api.models.properties import CheckboxValue
from notion_api.payloads import build_properties, checkbox_value
from notion_api.query import (
    CheckboxCondition,
    DatabaseQuery,
    PageCreateRequest,
    PageUpdateRequest,
    PropertyFilter,
    SearchRequest,
)

logger = logging.getLogger(__name__)

UNTITLED = "(untitled)"


class TaskDatabaseError(Exception):
    """Raised when a database cannot be used as a task list."""


class Task(BaseModel):
    """A task row of the task database.

    :param id: Page ID of the task.
    :param title: Task title.
    :param done: Whether the task's checkbox is ticked.
    """

    id: str
    title: str
    done: bool

    def describe(self) -> str:
        """One line summary with a checkbox marker."""
        marker = "[x]" if self.done else "[ ]"
        return f"{marker} {self.title}"


def title_property(database: Database) -> str:
    """Name of the database's title property.

    :raises TaskDatabaseError: If the database has no title property.
    """
    for name in database.properties_of_type(PropertyType.TITLE):
        return name
    raise TaskDatabaseError(f"Database '{database.title_plain_text()}' has no title property")


def checkbox_property(database: Database) -> str:
    """Name of the first checkbox property in the database schema.

    :raises TaskDatabaseError: If the database has no checkbox property.
    """
    for name in database.properties_of_type(PropertyType.CHECKBOX):
        return name
    raise TaskDatabaseError(
        f"Database '{database.title_plain_text()}' has no checkbox property to mark tasks done"
    )


def to_task(page: Page, checkbox: str) -> Task:
    """Convert a database page to a task.

    :param page: Page from the task database.
    :param checkbox: Name of the checkbox property.
    :returns: The task.
    """
    value = page.properties.get(checkbox)
    done = isinstance(value, CheckboxValue) and value.checkbox
    return Task(id=page.id, title=page.title() or UNTITLED, done=done)


async def find_databases(client: NotionClient) -> list[Database]:
    """Find every database shared with the integration.

    :param client: Notion client.
    :returns: Databases, in search order.
    """
    logger.info("Searching for databases")
    return [
        result
        async for result in client.iter_search(SearchRequest.filter_by_databases())
        if isinstance(result, Database)
    ]


async def list_tasks(
    client: NotionClient, database_id: str, *, only_open: bool = False
) -> list[Task]:
    """List the tasks in a database.

    :param client: Notion client.
    :param database_id: Task database ID.
    :param only_open: Only return tasks whose checkbox is not ticked.
    :returns: Tasks, in query order.
    :raises TaskDatabaseError: If the database has no checkbox property.
    """
    database = await client.get_database(database_id)
    checkbox = checkbox_property(database)

    query = DatabaseQuery()
    if only_open:
        query = DatabaseQuery(
            filter=PropertyFilter(property=checkbox, checkbox=CheckboxCondition(equals=False))
        )

    pages = client.iter_database_pages(database_id, query)
    tasks = [to_task(page, checkbox) async for page in pages]
    logger.info(f"Found {len(tasks)} tasks in database: {database_id}")
    return tasks


async def add_task(client: NotionClient, database_id: str, title: str) -> Task:
    """Create a task in a database.

    :param client: Notion client.
    :param database_id: Task database ID.
    :param title: Task title.
    :returns: The created task.
    :raises TaskDatabaseError: If the database has no title property.
    """
    if not title.strip():
        raise TaskDatabaseError("Task title must not be empty")

    database = await client.get_database(database_id)
    properties = build_properties(database, **{title_property(database): title})

    page = await client.create_page(PageCreateRequest.in_database(database.id, properties))
    logger.info(f"Created task: {page.id}")

    return Task(id=page.id, title=page.title() or title, done=False)


async def complete_task(client: NotionClient, database_id: str, task_id: str) -> Task:
    """Tick the checkbox of a task.

    :param client: Notion client.
    :param database_id: Task database ID.
    :param task_id: Page ID of the task.
    :returns: The updated task.
    :raises TaskDatabaseError: If the database has no checkbox property.
    """
    database = await client.get_database(database_id)
    checkbox = checkbox_property(database)

    page = await client.update_page(
        task_id, PageUpdateRequest(properties={checkbox: checkbox_value(True)})
    )
    logger.info(f"Completed task: {page.id}")
    return to_task(page, checkbox)
