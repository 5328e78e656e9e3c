"""Request parameter types for searches, database queries and page writes.

These models serialize to the exact JSON bodies Notion expects. Unset
optional fields are omitted, and fields named after Python keywords
(``and``, ``or``) use aliases. Always serialize with :func:`to_body`.

See https://developers.notion.com/reference/post-database-query-filter
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from notion_api.enums import SearchObjectType, SortDirection, TimestampType


class RequestModel(BaseModel):
    """Base class for request bodies."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


def to_body(model: BaseModel) -> dict[str, Any]:
    """Serialize a request model to its JSON body.

    :param model: Request model.
    :returns: JSON-compatible dict with wire field names and unset fields omitted.
    """
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


DateInput = datetime | date | str


# Filter conditions


class TextCondition(RequestModel):
    """Condition on title, rich_text, url, email and phone_number properties."""

    equals: str | None = None
    does_not_equal: str | None = None
    contains: str | None = None
    does_not_contain: str | None = None
    starts_with: str | None = None
    ends_with: str | None = None
    is_empty: Literal[True] | None = None
    is_not_empty: Literal[True] | None = None


class NumberCondition(RequestModel):
    equals: int | float | None = None
    does_not_equal: int | float | None = None
    greater_than: int | float | None = None
    less_than: int | float | None = None
    greater_than_or_equal_to: int | float | None = None
    less_than_or_equal_to: int | float | None = None
    is_empty: Literal[True] | None = None
    is_not_empty: Literal[True] | None = None


class CheckboxCondition(RequestModel):
    equals: bool | None = None
    does_not_equal: bool | None = None


class SelectCondition(RequestModel):
    """Condition on select and status properties."""

    equals: str | None = None
    does_not_equal: str | None = None
    is_empty: Literal[True] | None = None
    is_not_empty: Literal[True] | None = None


class MultiSelectCondition(RequestModel):
    contains: str | None = None
    does_not_contain: str | None = None
    is_empty: Literal[True] | None = None
    is_not_empty: Literal[True] | None = None


class DateCondition(RequestModel):
    """Condition on date properties and timestamps.

    Relative conditions such as ``past_week`` take an empty object.
    """

    equals: DateInput | None = None
    before: DateInput | None = None
    after: DateInput | None = None
    on_or_before: DateInput | None = None
    on_or_after: DateInput | None = None
    is_empty: Literal[True] | None = None
    is_not_empty: Literal[True] | None = None
    past_week: dict[str, Any] | None = None
    past_month: dict[str, Any] | None = None
    past_year: dict[str, Any] | None = None
    this_week: dict[str, Any] | None = None
    next_week: dict[str, Any] | None = None
    next_month: dict[str, Any] | None = None
    next_year: dict[str, Any] | None = None


class PeopleCondition(RequestModel):
    """Condition on people, created_by and last_edited_by properties."""

    contains: str | None = None
    does_not_contain: str | None = None
    is_empty: Literal[True] | None = None
    is_not_empty: Literal[True] | None = None


class FilesCondition(RequestModel):
    is_empty: Literal[True] | None = None
    is_not_empty: Literal[True] | None = None


class RelationCondition(RequestModel):
    contains: str | None = None
    does_not_contain: str | None = None
    is_empty: Literal[True] | None = None
    is_not_empty: Literal[True] | None = None


class FormulaCondition(RequestModel):
    """Condition on a formula property, by the formula's result type."""

    string: TextCondition | None = None
    checkbox: CheckboxCondition | None = None
    number: NumberCondition | None = None
    date: DateCondition | None = None


# Filters

_CONDITION_FIELDS = (
    "title",
    "rich_text",
    "url",
    "email",
    "phone_number",
    "number",
    "checkbox",
    "select",
    "status",
    "multi_select",
    "date",
    "people",
    "created_by",
    "last_edited_by",
    "files",
    "relation",
    "formula",
)


class PropertyFilter(RequestModel):
    """Filter on a single database property. Exactly one condition must be set."""

    property: str
    title: TextCondition | None = None
    rich_text: TextCondition | None = None
    url: TextCondition | None = None
    email: TextCondition | None = None
    phone_number: TextCondition | None = None
    number: NumberCondition | None = None
    checkbox: CheckboxCondition | None = None
    select: SelectCondition | None = None
    status: SelectCondition | None = None
    multi_select: MultiSelectCondition | None = None
    date: DateCondition | None = None
    people: PeopleCondition | None = None
    created_by: PeopleCondition | None = None
    last_edited_by: PeopleCondition | None = None
    files: FilesCondition | None = None
    relation: RelationCondition | None = None
    formula: FormulaCondition | None = None

    @model_validator(mode="after")
    def _check_single_condition(self) -> PropertyFilter:
        conditions = [name for name in _CONDITION_FIELDS if getattr(self, name) is not None]
        if len(conditions) != 1:
            raise ValueError(
                f"Property filter on '{self.property}' needs exactly one condition, "
                f"got {len(conditions)}"
            )
        return self


class TimestampFilter(RequestModel):
    """Filter on a page's created or last edited time."""

    timestamp: TimestampType
    created_time: DateCondition | None = None
    last_edited_time: DateCondition | None = None

    @model_validator(mode="after")
    def _check_condition_matches(self) -> TimestampFilter:
        condition = getattr(self, self.timestamp.value)
        if condition is None:
            raise ValueError(f"Timestamp filter needs a '{self.timestamp.value}' condition")
        return self


class CompoundFilter(RequestModel):
    """Combines filters with ``and`` or ``or``. Nests up to two levels deep."""

    and_: list[Filter] | None = Field(default=None, alias="and")
    or_: list[Filter] | None = Field(default=None, alias="or")

    @model_validator(mode="after")
    def _check_single_operator(self) -> CompoundFilter:
        if (self.and_ is None) == (self.or_ is None):
            raise ValueError("Compound filter needs exactly one of 'and' or 'or'")
        return self

    @classmethod
    def all_of(cls, *filters: Filter) -> CompoundFilter:
        return cls(and_=list(filters))

    @classmethod
    def any_of(cls, *filters: Filter) -> CompoundFilter:
        return cls(or_=list(filters))


Filter = PropertyFilter | TimestampFilter | CompoundFilter


# Sorts


class PropertySort(RequestModel):
    property: str
    direction: SortDirection = SortDirection.ASCENDING


class TimestampSort(RequestModel):
    timestamp: TimestampType
    direction: SortDirection = SortDirection.ASCENDING


Sort = PropertySort | TimestampSort


# Query bodies


class DatabaseQuery(RequestModel):
    """Body of a database query.

    See https://developers.notion.com/reference/post-database-query
    """

    filter: Filter | None = None
    sorts: list[Sort] | None = None
    start_cursor: str | None = None
    page_size: int | None = Field(default=None, ge=1, le=100)


class SearchSort(RequestModel):
    direction: SortDirection
    timestamp: Literal["last_edited_time"] = "last_edited_time"


class SearchFilter(RequestModel):
    value: SearchObjectType
    property: Literal["object"] = "object"


class SearchRequest(RequestModel):
    """Body of a search across pages and databases shared with the integration.

    See https://developers.notion.com/reference/post-search
    """

    query: str | None = None
    sort: SearchSort | None = None
    filter: SearchFilter | None = None
    start_cursor: str | None = None
    page_size: int | None = Field(default=None, ge=1, le=100)

    @classmethod
    def for_query(cls, query: str) -> SearchRequest:
        """Search titles for the given text."""
        return cls(query=query)

    @classmethod
    def filter_by_databases(cls) -> SearchRequest:
        """Search databases only."""
        return cls(filter=SearchFilter(value=SearchObjectType.DATABASE))

    @classmethod
    def filter_by_pages(cls) -> SearchRequest:
        """Search pages only."""
        return cls(filter=SearchFilter(value=SearchObjectType.PAGE))

    @classmethod
    def sorted_by_last_edited(
        cls, direction: SortDirection = SortDirection.DESCENDING
    ) -> SearchRequest:
        """Search everything, ordered by last edit."""
        return cls(sort=SearchSort(direction=direction))


# Page and block writes


class DatabaseParentInput(RequestModel):
    database_id: str


class PageParentInput(RequestModel):
    page_id: str


class PageCreateRequest(RequestModel):
    """Body for creating a page.

    ``properties`` and ``children`` hold payloads such as those produced by
    :mod:`notion_api.payloads` and :mod:`notion_api.blocks`.

    See https://developers.notion.com/reference/post-page
    """

    parent: DatabaseParentInput | PageParentInput
    properties: dict[str, Any] = Field(default_factory=dict)
    children: list[dict[str, Any]] | None = Field(default=None, max_length=100)
    icon: dict[str, Any] | None = None
    cover: dict[str, Any] | None = None

    @classmethod
    def in_database(
        cls,
        database_id: str,
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> PageCreateRequest:
        """Create a page as a row of a database."""
        return cls(
            parent=DatabaseParentInput(database_id=database_id),
            properties=properties,
            children=children,
        )


class PageUpdateRequest(RequestModel):
    """Body for updating a page's properties or archiving it.

    See https://developers.notion.com/reference/patch-page
    """

    properties: dict[str, Any] | None = None
    archived: bool | None = None
    icon: dict[str, Any] | None = None
    cover: dict[str, Any] | None = None


class AppendBlockChildrenRequest(RequestModel):
    """Body for appending blocks to a block or page.

    See https://developers.notion.com/reference/patch-block-children
    """

    children: list[dict[str, Any]] = Field(..., min_length=1, max_length=100)
    after: str | None = None


CompoundFilter.model_rebuild()
DatabaseQuery.model_rebuild()
