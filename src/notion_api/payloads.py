"""Builders for page property payloads.

Notion expects property values in a shape that depends on the property type.
These helpers build that shape from plain Python values, for use in
:class:`~notion_api.query.PageCreateRequest` and
:class:`~notion_api.query.PageUpdateRequest`.
"""

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

from notion_api.enums import PropertyType
from notion_api.models.resources import Database


def text_item(content: str, *, link: str | None = None) -> dict[str, Any]:
    """Build a single rich text item."""
    text: dict[str, Any] = {"content": content}
    if link is not None:
        text["link"] = {"url": link}
    return {"type": "text", "text": text}


def title_value(text: str) -> dict[str, Any]:
    return {"title": [text_item(text)]}


def rich_text_value(text: str) -> dict[str, Any]:
    return {"rich_text": [text_item(text)] if text else []}


def number_value(number: int | float | None) -> dict[str, Any]:
    return {"number": number}


def checkbox_value(checked: bool) -> dict[str, Any]:
    return {"checkbox": checked}


def select_value(name: str | None) -> dict[str, Any]:
    return {"select": {"name": name} if name is not None else None}


def status_value(name: str) -> dict[str, Any]:
    return {"status": {"name": name}}


def multi_select_value(names: Iterable[str]) -> dict[str, Any]:
    return {"multi_select": [{"name": name} for name in names]}


def date_value(
    start: date | datetime | None,
    end: date | datetime | None = None,
) -> dict[str, Any]:
    """Build a date payload. Passing None for ``start`` clears the date."""
    if start is None:
        return {"date": None}
    value: dict[str, Any] = {"start": start.isoformat()}
    if end is not None:
        value["end"] = end.isoformat()
    return {"date": value}


def url_value(url: str | None) -> dict[str, Any]:
    return {"url": url}


def email_value(email: str | None) -> dict[str, Any]:
    return {"email": email}


def phone_number_value(phone_number: str | None) -> dict[str, Any]:
    return {"phone_number": phone_number}


def people_value(user_ids: Iterable[str]) -> dict[str, Any]:
    return {"people": [{"object": "user", "id": user_id} for user_id in user_ids]}


def relation_value(page_ids: Iterable[str]) -> dict[str, Any]:
    return {"relation": [{"id": page_id} for page_id in page_ids]}


_BUILDERS = {
    PropertyType.TITLE: title_value,
    PropertyType.RICH_TEXT: rich_text_value,
    PropertyType.NUMBER: number_value,
    PropertyType.CHECKBOX: checkbox_value,
    PropertyType.SELECT: select_value,
    PropertyType.STATUS: status_value,
    PropertyType.MULTI_SELECT: multi_select_value,
    PropertyType.DATE: date_value,
    PropertyType.URL: url_value,
    PropertyType.EMAIL: email_value,
    PropertyType.PHONE_NUMBER: phone_number_value,
    PropertyType.PEOPLE: people_value,
    PropertyType.RELATION: relation_value,
}


def build_property(property_type: str, value: Any) -> dict[str, Any]:
    """Build the payload for one property value of the given type.

    :param property_type: Notion property type, e.g. ``select``.
    :param value: Plain Python value for the property.
    :returns: Property value payload.
    :raises ValueError: If the type cannot be written through the API.
    """
    builder = _BUILDERS.get(property_type)  # type: ignore[call-overload]
    if builder is None:
        raise ValueError(f"Property type '{property_type}' cannot be set")
    return builder(value)


def build_properties(database: Database, **values: Any) -> dict[str, Any]:
    """Build a properties payload using a database schema.

    Each keyword names a property of the database; the schema decides which
    payload shape its value gets. Values that are None are skipped.

    :param database: Database whose schema describes the properties.
    :param values: Property name to plain Python value mappings.
    :returns: Properties object for page create and update requests.
    :raises ValueError: If a property is not in the schema or cannot be set.
    """
    properties: dict[str, Any] = {}

    for name, value in values.items():
        if value is None:
            continue

        schema = database.properties.get(name)
        if schema is None:
            raise ValueError(f"Unknown property: {name}")

        properties[name] = build_property(schema.type, value)

    return properties
