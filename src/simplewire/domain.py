"""Domain models used throughout the package."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


@dataclass(frozen=True)
class Tag:
    """Marks a field as wanting the named component.

    Used as ``Annotated`` metadata; ``key`` is the metadata namespace the
    injector is configured with and ``name`` the requested component.

    Example:
        >>> class Users:
        ...     db: Annotated[Database, tag("component", "db")]
    """

    key: str
    name: str


@dataclass(frozen=True)
class FieldDecl:
    """A field declared on a record's type.

    Attributes:
        name: The attribute name.
        annotation: The declared type hint, including any ``Annotated`` extras.
        declared_type: The declared type with ``Annotated`` extras stripped.
        annotated_metadata: The extras carried by ``Annotated``, if any.
        field_metadata: ``dataclasses.field`` metadata, if the owner is a dataclass.
    """

    name: str
    annotation: Any
    declared_type: Any
    annotated_metadata: tuple = ()
    field_metadata: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_exposed(self) -> bool:
        return not self.name.startswith("_")


class LookupStatus(Enum):
    """Outcome of looking a component up by name."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    NOT_VISIBLE = "not_visible"
