"""Identifier types for Notion resources.

Identifiers are opaque strings assigned by Notion. They are typed with
``NewType`` so signatures document which kind of resource they refer to,
while still being plain strings at runtime.
"""

from typing import NewType, Protocol, runtime_checkable

DatabaseId = NewType("DatabaseId", str)
PageId = NewType("PageId", str)
BlockId = NewType("BlockId", str)
UserId = NewType("UserId", str)
PropertyId = NewType("PropertyId", str)


@runtime_checkable
class Identifiable(Protocol):
    """Anything carrying a Notion identifier, such as a decoded resource."""

    id: str


def as_id(value: str | Identifiable) -> str:
    """Resolve an identifier from a string or a resource carrying an ``id``.

    A page can be passed wherever a block is expected, since Notion pages
    are blocks and share the same identifier space.

    :param value: Identifier string or resource model.
    :returns: The identifier string.
    :raises ValueError: If the identifier is empty.
    """
    identifier = value if isinstance(value, str) else value.id
    identifier = identifier.strip()
    if not identifier:
        raise ValueError("Notion identifier must not be empty")
    return identifier
