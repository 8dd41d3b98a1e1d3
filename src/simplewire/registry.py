"""Case-insensitive lookup of the components exposed by a reference object.

The reference is the object handed to :func:`simplewire.injector.connect`.
Its members are the components available for injection: the annotated
fields of a record followed by any other instance attributes (so a
:class:`types.SimpleNamespace` works too), or the items of a mapping.
Values are read at lookup time, so a member reassigned after the registry
is built is seen with its current value.
"""

from collections.abc import Mapping
from typing import Any

from simplewire.domain import LookupStatus
from simplewire.fields import dereference, is_record, record_fields

__all__ = ["ComponentRegistry"]


class ComponentRegistry:
    """Name-to-component lookup over a reference object.

    Lookup is a linear scan over the member names, matched case-insensitively.
    If two members differ only by case, the first declared one wins.

    Example:
        >>> registry = ComponentRegistry(Components(users=Users(), db=MockDB()))
        >>> registry.lookup("DB")    # Returns (<MockDB>, LookupStatus.FOUND)
        >>> registry.lookup("nope")  # Returns (None, LookupStatus.NOT_FOUND)
    """

    def __init__(self, reference: Any):
        self._reference = dereference(reference)
        if not isinstance(self._reference, Mapping) and not is_record(self._reference):
            raise TypeError(
                f"reference must be a record or a mapping, not {type(self._reference).__name__}"
            )

    @property
    def reference(self) -> Any:
        return self._reference

    def member_names(self) -> list[str]:
        """All member names of the reference, private ones included."""
        if isinstance(self._reference, Mapping):
            return list(self._reference)

        names = [f.name for f in record_fields(type(self._reference))]
        for name in getattr(self._reference, "__dict__", {}):
            if name not in names:
                names.append(name)
        return names

    def exposed_names(self) -> list[str]:
        return [name for name in self.member_names() if not name.startswith("_")]

    def exposed_values(self) -> list[Any]:
        """Current values of the exposed members, in declaration order."""
        return [self._value_of(name) for name in self.exposed_names()]

    def lookup(self, name: str) -> tuple[Any, LookupStatus]:
        """Find the member matching ``name`` regardless of case.

        Args:
            name: The requested component name.

        Returns:
            A ``(value, status)`` pair. The value is None unless the status is
            :attr:`LookupStatus.FOUND`. An unset member is found with value None.
        """
        wanted = name.lower()
        match = next((n for n in self.member_names() if n.lower() == wanted), None)
        if match is None:
            return None, LookupStatus.NOT_FOUND
        if match.startswith("_"):
            return None, LookupStatus.NOT_VISIBLE
        return self._value_of(match), LookupStatus.FOUND

    def _value_of(self, name: str) -> Any:
        if isinstance(self._reference, Mapping):
            return self._reference[name]
        return getattr(self._reference, name, None)
