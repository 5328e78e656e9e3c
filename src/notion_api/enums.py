"""Enums for Notion API field values.

Response models keep these fields as plain strings so that values Notion adds
later still decode; the enums compare equal to the strings they name.
"""

from enum import StrEnum


class PropertyType(StrEnum):
    """Property kinds shared by database schemas and page values."""

    TITLE = "title"
    RICH_TEXT = "rich_text"
    NUMBER = "number"
    SELECT = "select"
    STATUS = "status"
    MULTI_SELECT = "multi_select"
    DATE = "date"
    PEOPLE = "people"
    FILES = "files"
    CHECKBOX = "checkbox"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    FORMULA = "formula"
    RELATION = "relation"
    ROLLUP = "rollup"
    CREATED_TIME = "created_time"
    CREATED_BY = "created_by"
    LAST_EDITED_TIME = "last_edited_time"
    LAST_EDITED_BY = "last_edited_by"
    UNIQUE_ID = "unique_id"


class SortDirection(StrEnum):
    """Sort direction for queries and searches."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class TimestampType(StrEnum):
    """Timestamps usable in sorts and filters."""

    CREATED_TIME = "created_time"
    LAST_EDITED_TIME = "last_edited_time"


class SearchObjectType(StrEnum):
    """Object kinds a search can be restricted to."""

    PAGE = "page"
    DATABASE = "database"
