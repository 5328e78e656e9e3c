"""Database property schemas and page property values.

A database's ``properties`` map each property name to a
:data:`PropertyConfiguration` describing its type. Each page in that database
carries a :data:`PropertyValue` of the matching type under the same name.

See https://developers.notion.com/reference/property-object and
https://developers.notion.com/reference/property-value-object
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from notion_api.models.common import DateValue, NotionModel, tagged_union
from notion_api.models.files import FileObject
from notion_api.models.text import RichText, plain_text
from notion_api.models.users import UserReference


class SelectOption(NotionModel):
    """An option of a select, multi-select or status property."""

    id: str | None = None
    name: str
    color: str = "default"


# Schema configurations


class _ConfigurationBase(NotionModel):
    id: str
    name: str | None = None


class TitleConfiguration(_ConfigurationBase):
    """The title property every database has exactly one of."""

    type: Literal["title"] = "title"


class RichTextConfiguration(_ConfigurationBase):
    type: Literal["rich_text"] = "rich_text"


class NumberConfig(NotionModel):
    format: str = "number"


class NumberConfiguration(_ConfigurationBase):
    type: Literal["number"] = "number"
    number: NumberConfig = Field(default_factory=NumberConfig)


class SelectOptions(NotionModel):
    options: list[SelectOption] = Field(default_factory=list)


class SelectConfiguration(_ConfigurationBase):
    type: Literal["select"] = "select"
    select: SelectOptions = Field(default_factory=SelectOptions)


class StatusGroup(NotionModel):
    id: str | None = None
    name: str
    color: str = "default"
    option_ids: list[str] = Field(default_factory=list)


class StatusConfig(NotionModel):
    options: list[SelectOption] = Field(default_factory=list)
    groups: list[StatusGroup] = Field(default_factory=list)


class StatusConfiguration(_ConfigurationBase):
    type: Literal["status"] = "status"
    status: StatusConfig = Field(default_factory=StatusConfig)


class MultiSelectConfiguration(_ConfigurationBase):
    type: Literal["multi_select"] = "multi_select"
    multi_select: SelectOptions = Field(default_factory=SelectOptions)


class DateConfiguration(_ConfigurationBase):
    type: Literal["date"] = "date"


class PeopleConfiguration(_ConfigurationBase):
    type: Literal["people"] = "people"


class FilesConfiguration(_ConfigurationBase):
    type: Literal["files"] = "files"


class CheckboxConfiguration(_ConfigurationBase):
    type: Literal["checkbox"] = "checkbox"


class UrlConfiguration(_ConfigurationBase):
    type: Literal["url"] = "url"


class EmailConfiguration(_ConfigurationBase):
    type: Literal["email"] = "email"


class PhoneNumberConfiguration(_ConfigurationBase):
    type: Literal["phone_number"] = "phone_number"


class FormulaConfig(NotionModel):
    expression: str


class FormulaConfiguration(_ConfigurationBase):
    type: Literal["formula"] = "formula"
    formula: FormulaConfig


class RelationConfig(NotionModel):
    """Target of a relation property.

    Two-way relations also name the synced property in the related database.
    """

    database_id: str
    type: str | None = None
    synced_property_name: str | None = None
    synced_property_id: str | None = None


class RelationConfiguration(_ConfigurationBase):
    type: Literal["relation"] = "relation"
    relation: RelationConfig


class RollupConfig(NotionModel):
    relation_property_name: str
    relation_property_id: str
    rollup_property_name: str
    rollup_property_id: str
    function: str


class RollupConfiguration(_ConfigurationBase):
    type: Literal["rollup"] = "rollup"
    rollup: RollupConfig


class CreatedTimeConfiguration(_ConfigurationBase):
    type: Literal["created_time"] = "created_time"


class CreatedByConfiguration(_ConfigurationBase):
    type: Literal["created_by"] = "created_by"


class LastEditedTimeConfiguration(_ConfigurationBase):
    type: Literal["last_edited_time"] = "last_edited_time"


class LastEditedByConfiguration(_ConfigurationBase):
    type: Literal["last_edited_by"] = "last_edited_by"


class UniqueIdConfig(NotionModel):
    prefix: str | None = None


class UniqueIdConfiguration(_ConfigurationBase):
    type: Literal["unique_id"] = "unique_id"
    unique_id: UniqueIdConfig = Field(default_factory=UniqueIdConfig)


class UnknownConfiguration(_ConfigurationBase):
    """A property type this client does not model."""

    type: str


PropertyConfiguration = tagged_union(
    [
        TitleConfiguration,
        RichTextConfiguration,
        NumberConfiguration,
        SelectConfiguration,
        StatusConfiguration,
        MultiSelectConfiguration,
        DateConfiguration,
        PeopleConfiguration,
        FilesConfiguration,
        CheckboxConfiguration,
        UrlConfiguration,
        EmailConfiguration,
        PhoneNumberConfiguration,
        FormulaConfiguration,
        RelationConfiguration,
        RollupConfiguration,
        CreatedTimeConfiguration,
        CreatedByConfiguration,
        LastEditedTimeConfiguration,
        LastEditedByConfiguration,
        UniqueIdConfiguration,
    ],
    fallback=UnknownConfiguration,
)


# Page property values


class _ValueBase(NotionModel):
    id: str


class TitleValue(_ValueBase):
    type: Literal["title"] = "title"
    title: list[RichText] = Field(default_factory=list)

    def plain_text(self) -> str:
        return plain_text(self.title)


class RichTextValue(_ValueBase):
    type: Literal["rich_text"] = "rich_text"
    rich_text: list[RichText] = Field(default_factory=list)

    def plain_text(self) -> str:
        return plain_text(self.rich_text)


class NumberValue(_ValueBase):
    type: Literal["number"] = "number"
    number: int | float | None = None


class SelectValue(_ValueBase):
    type: Literal["select"] = "select"
    select: SelectOption | None = None


class StatusValue(_ValueBase):
    type: Literal["status"] = "status"
    status: SelectOption | None = None


class MultiSelectValue(_ValueBase):
    type: Literal["multi_select"] = "multi_select"
    multi_select: list[SelectOption] = Field(default_factory=list)


class DatePropertyValue(_ValueBase):
    type: Literal["date"] = "date"
    date: DateValue | None = None


class StringFormula(NotionModel):
    type: Literal["string"] = "string"
    string: str | None = None


class NumberFormula(NotionModel):
    type: Literal["number"] = "number"
    number: int | float | None = None


class BooleanFormula(NotionModel):
    type: Literal["boolean"] = "boolean"
    boolean: bool | None = None


class DateFormula(NotionModel):
    type: Literal["date"] = "date"
    date: DateValue | None = None


class UnknownFormula(NotionModel):
    type: str


FormulaResult = tagged_union(
    [StringFormula, NumberFormula, BooleanFormula, DateFormula],
    fallback=UnknownFormula,
)


class FormulaValue(_ValueBase):
    type: Literal["formula"] = "formula"
    formula: FormulaResult


class RelationReference(NotionModel):
    id: str


class RelationValue(_ValueBase):
    """Pages related to this one. ``has_more`` is set for relations over 25 pages."""

    type: Literal["relation"] = "relation"
    relation: list[RelationReference] = Field(default_factory=list)
    has_more: bool = False


class NumberRollup(NotionModel):
    type: Literal["number"] = "number"
    number: int | float | None = None
    function: str | None = None


class DateRollup(NotionModel):
    type: Literal["date"] = "date"
    date: DateValue | None = None
    function: str | None = None


class ArrayRollup(NotionModel):
    """Rollup showing the original values; items are raw property values."""

    type: Literal["array"] = "array"
    array: list[dict[str, Any]] = Field(default_factory=list)
    function: str | None = None


class UnknownRollup(NotionModel):
    type: str
    function: str | None = None


RollupResult = tagged_union([NumberRollup, DateRollup, ArrayRollup], fallback=UnknownRollup)


class RollupValue(_ValueBase):
    type: Literal["rollup"] = "rollup"
    rollup: RollupResult


class PeopleValue(_ValueBase):
    type: Literal["people"] = "people"
    people: list[UserReference] = Field(default_factory=list)


class FilesValue(_ValueBase):
    type: Literal["files"] = "files"
    files: list[FileObject] = Field(default_factory=list)


class CheckboxValue(_ValueBase):
    type: Literal["checkbox"] = "checkbox"
    checkbox: bool = False


class UrlValue(_ValueBase):
    type: Literal["url"] = "url"
    url: str | None = None


class EmailValue(_ValueBase):
    type: Literal["email"] = "email"
    email: str | None = None


class PhoneNumberValue(_ValueBase):
    type: Literal["phone_number"] = "phone_number"
    phone_number: str | None = None


class CreatedTimeValue(_ValueBase):
    type: Literal["created_time"] = "created_time"
    created_time: datetime


class CreatedByValue(_ValueBase):
    type: Literal["created_by"] = "created_by"
    created_by: UserReference


class LastEditedTimeValue(_ValueBase):
    type: Literal["last_edited_time"] = "last_edited_time"
    last_edited_time: datetime


class LastEditedByValue(_ValueBase):
    type: Literal["last_edited_by"] = "last_edited_by"
    last_edited_by: UserReference


class UniqueId(NotionModel):
    number: int | None = None
    prefix: str | None = None


class UniqueIdValue(_ValueBase):
    type: Literal["unique_id"] = "unique_id"
    unique_id: UniqueId = Field(default_factory=UniqueId)


class UnknownPropertyValue(_ValueBase):
    """A property value of a type this client does not model."""

    type: str


PropertyValue = tagged_union(
    [
        TitleValue,
        RichTextValue,
        NumberValue,
        SelectValue,
        StatusValue,
        MultiSelectValue,
        DatePropertyValue,
        FormulaValue,
        RelationValue,
        RollupValue,
        PeopleValue,
        FilesValue,
        CheckboxValue,
        UrlValue,
        EmailValue,
        PhoneNumberValue,
        CreatedTimeValue,
        CreatedByValue,
        LastEditedTimeValue,
        LastEditedByValue,
        UniqueIdValue,
    ],
    fallback=UnknownPropertyValue,
)
