"""Reading component names from field metadata."""

from collections.abc import Mapping
from typing import Optional

from simplewire.domain import FieldDecl, Tag

__all__ = ["tag", "resolve_tag"]


def tag(key: str, name: str) -> Tag:
    """Build an ``Annotated`` marker requesting the component ``name``.

    Example:
        >>> class Users:
        ...     accounts: Annotated[Accounts, tag("component", "accounts")]
    """
    return Tag(key, name)


def resolve_tag(field: FieldDecl, key: str) -> Optional[str]:
    """Return the component name ``field`` requests under ``key``.

    ``dataclasses.field`` metadata is consulted first, then ``Annotated``
    extras, which may be :class:`Tag` markers or plain mappings. The first
    match wins.

    Args:
        field: The field declaration to inspect.
        key: The metadata namespace the injector is configured with.

    Returns:
        The requested component name, or None if the field is not tagged
        under ``key`` (or the tag is empty).

    Example:
        >>> @dataclass
        ... class Thing:
        ...     users: Users = field(default=None, metadata={"component": "users"})
        >>> resolve_tag(record_fields(Thing)[0], "component")   # Returns "users"
        >>> resolve_tag(record_fields(Thing)[0], "inject")      # Returns None
    """
    name = field.field_metadata.get(key)
    if name:
        return name

    for extra in field.annotated_metadata:
        if isinstance(extra, Tag) and extra.key == key and extra.name:
            return extra.name
        if isinstance(extra, Mapping) and extra.get(key):
            return extra[key]

    return None
