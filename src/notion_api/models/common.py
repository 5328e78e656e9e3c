"""Shared building blocks for Notion response models."""

from collections.abc import Sequence
from datetime import date, datetime
from typing import Annotated, Any, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

T = TypeVar("T")

FALLBACK_TAG = "__unknown__"


class NotionModel(BaseModel):
    """Base class for all models decoded from Notion responses.

    Unknown fields are ignored so that additions to the Notion API do not
    break decoding.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def tagged_union(
    models: Sequence[type[BaseModel]],
    *,
    tag: str = "type",
    fallback: type[BaseModel] | None = None,
) -> Any:
    """Build a discriminated union over models tagged by a literal field.

    Each model must declare ``tag`` as a ``Literal`` field with a default.
    Values whose tag is not known decode to ``fallback``, which lets new
    Notion types flow through instead of failing the whole response.

    :param models: Models making up the union.
    :param tag: Name of the discriminating field.
    :param fallback: Model used for unknown tags. Unknown tags are rejected
        if omitted.
    :returns: An ``Annotated`` union usable as a pydantic field type.
    """
    members: list[Any] = [
        Annotated[model, Tag(model.model_fields[tag].default)] for model in models
    ]
    known = {model.model_fields[tag].default for model in models}
    if fallback is not None:
        members.append(Annotated[fallback, Tag(FALLBACK_TAG)])

    def _discriminate(value: Any) -> str | None:
        found = value.get(tag) if isinstance(value, dict) else getattr(value, tag, None)
        if found in known:
            return found
        return FALLBACK_TAG if fallback is not None else None

    return Annotated[Union[tuple(members)], Discriminator(_discriminate)]  # noqa: UP007


class DateValue(NotionModel):
    """A date or date range, as used by date properties and mentions.

    ``start`` and ``end`` are kept as ISO 8601 strings because Notion mixes
    dates and datetimes; use :meth:`start_value` to get a typed value.
    """

    start: str
    end: str | None = None
    time_zone: str | None = None

    def start_value(self) -> date | datetime:
        """Parse ``start`` into a date, or a datetime when it has a time part."""
        return _parse_date_or_datetime(self.start)

    def end_value(self) -> date | datetime | None:
        """Parse ``end`` into a date or datetime, if present."""
        if self.end is None:
            return None
        return _parse_date_or_datetime(self.end)


def _parse_date_or_datetime(value: str) -> date | datetime:
    if "T" in value:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    return date.fromisoformat(value)


# Parents


class DatabaseParent(NotionModel):
    """Parent of a page that is a row in a database."""

    type: Literal["database_id"] = "database_id"
    database_id: str


class PageParent(NotionModel):
    """Parent of a page or database nested in another page."""

    type: Literal["page_id"] = "page_id"
    page_id: str


class BlockParent(NotionModel):
    """Parent of a block or inline database nested in a block."""

    type: Literal["block_id"] = "block_id"
    block_id: str


class WorkspaceParent(NotionModel):
    """Parent of a top-level page or database."""

    type: Literal["workspace"] = "workspace"
    workspace: bool = True


class UnknownParent(NotionModel):
    """Parent of a kind this client does not model."""

    type: str


Parent = tagged_union(
    [DatabaseParent, PageParent, BlockParent, WorkspaceParent], fallback=UnknownParent
)


class ListResponse(NotionModel, Generic[T]):
    """One page of results from a paginated endpoint.

    See https://developers.notion.com/reference/pagination
    """

    object: Literal["list"] = "list"
    results: list[T] = Field(default_factory=list)
    next_cursor: str | None = None
    has_more: bool = False


class ErrorResponse(NotionModel):
    """Error object returned by Notion alongside non-2xx statuses."""

    object: Literal["error"] = "error"
    status: int
    code: str
    message: str
    request_id: str | None = None
