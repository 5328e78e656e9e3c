"""Top-level Notion objects, tagged by their ``object`` field."""

import logging
from typing import Annotated, Any, Union

from pydantic import Discriminator, Field, Tag, TypeAdapter, ValidationError

from notion_api.exceptions import DeserializationError
from notion_api.models.blocks import Block
from notion_api.models.common import ErrorResponse, ListResponse
from notion_api.models.resources import Database, Page
from notion_api.models.users import User

logger = logging.getLogger(__name__)


def _object_tag(value: Any) -> str | None:
    if isinstance(value, dict):
        return value.get("object")
    return getattr(value, "object", None)


ResultObject = Annotated[
    Union[  # noqa: UP007
        Annotated[Database, Tag("database")],
        Annotated[Page, Tag("page")],
        Annotated[Block, Tag("block")],
        Annotated[User, Tag("user")],
    ],
    Discriminator(_object_tag),
]

NotionObject = Annotated[
    Union[  # noqa: UP007
        Annotated[Database, Tag("database")],
        Annotated[Page, Tag("page")],
        Annotated[Block, Tag("block")],
        Annotated[User, Tag("user")],
        Annotated[ListResponse[ResultObject], Tag("list")],
        Annotated[ErrorResponse, Tag("error")],
    ],
    Discriminator(_object_tag),
]

SearchResult = Annotated[Page | Database, Field(discriminator="object")]

_OBJECT_ADAPTER: TypeAdapter[Any] = TypeAdapter(NotionObject)


def parse_object(data: Any) -> Any:
    """Decode any Notion JSON object according to its ``object`` tag.

    :param data: Decoded JSON body.
    :returns: A Database, Page, Block, User, ListResponse or ErrorResponse.
    :raises DeserializationError: If the body does not match any known object.
    """
    try:
        return _OBJECT_ADAPTER.validate_python(data)
    except ValidationError as e:
        logger.debug(f"Failed to decode Notion object: {e}")
        raise DeserializationError(f"Unrecognised Notion object: {e}") from e


def only_databases(response: ListResponse[Any]) -> ListResponse[Database]:
    """Keep only the databases from a mixed list, such as search results."""
    return ListResponse[Database](
        results=[item for item in response.results if isinstance(item, Database)],
        next_cursor=response.next_cursor,
        has_more=response.has_more,
    )


def only_pages(response: ListResponse[Any]) -> ListResponse[Page]:
    """Keep only the pages from a mixed list, such as search results."""
    return ListResponse[Page](
        results=[item for item in response.results if isinstance(item, Page)],
        next_cursor=response.next_cursor,
        has_more=response.has_more,
    )
