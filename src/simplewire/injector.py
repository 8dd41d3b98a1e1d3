"""Wiring components into the tagged fields of destination objects.

:func:`connect` is the entry point: it builds a :class:`ComponentRegistry`
over a reference object, wires the reference's own members into each other,
and returns an :class:`Injector` that can wire further destinations later.

Each call is a single synchronous pass. Destinations are processed in the
given order and their fields in declaration order; the first error aborts the
call and nothing already assigned is rolled back.
"""

import logging
from typing import Any, Protocol, runtime_checkable

from simplewire.assignability import check_assignable
from simplewire.domain import FieldDecl, LookupStatus
from simplewire.errors import (
    ComponentNotFoundError,
    ComponentNotVisibleError,
    DependencyError,
    InitializationFailedError,
    InternalWalkFailureError,
)
from simplewire.fields import dereference, is_record, record_fields
from simplewire.registry import ComponentRegistry
from simplewire.tags import resolve_tag

__all__ = ["Initializable", "Injector", "connect"]

logger = logging.getLogger(__name__)


@runtime_checkable
class Initializable(Protocol):
    """A destination with initialization logic to run before it is wired."""

    def init(self) -> None:
        ...


class Injector:
    """Wires destinations against the components of one registry.

    The injector holds no state beyond its metadata key and registry, so it
    can be kept and reused. It is not synchronized: concurrent calls to
    :meth:`inject` must be serialized by the caller.

    Attributes:
        key: The metadata namespace fields are tagged under.
        registry: The components available for injection.
    """

    def __init__(self, key: str, registry: ComponentRegistry):
        if not key:
            raise ValueError("metadata key must be a non-empty string")
        self._key = key
        self._registry = registry

    @property
    def key(self) -> str:
        return self._key

    @property
    def registry(self) -> ComponentRegistry:
        return self._registry

    def inject(self, *destinations: Any) -> None:
        """Wire each destination's tagged fields.

        A destination exposing ``init()`` has it called once, before its
        fields are wired. None destinations and destinations that are not
        records (such as scalars) are skipped.

        Args:
            destinations: The objects to wire, processed in order.

        Raises:
            DependencyError: On the first destination that cannot be wired;
                later destinations are left untouched.
        """
        for destination in destinations:
            target = dereference(destination)
            if target is None:
                continue
            if _has_init_hook(target):
                _initialise(target)
            self._inject_single(target)

    def _inject_single(self, destination: Any) -> None:
        destination_type = type(destination).__name__
        if not is_record(destination):
            logger.debug("Nothing to wire in %s", destination_type)
            return

        field_name = None
        try:
            for field in record_fields(type(destination)):
                field_name = field.name
                self._wire_field(destination, field)
        except DependencyError:
            raise
        except Exception as e:
            raise InternalWalkFailureError(
                destination_type, field_name, f"{type(e).__name__}: {e}"
            ) from e

    def _wire_field(self, destination: Any, field: FieldDecl) -> None:
        component_name = resolve_tag(field, self._key)
        if not component_name:
            return

        destination_type = type(destination).__name__
        value, status = self._registry.lookup(component_name)
        if status is LookupStatus.NOT_FOUND:
            raise ComponentNotFoundError(destination_type, field.name, component_name)
        if status is LookupStatus.NOT_VISIBLE:
            raise ComponentNotVisibleError(destination_type, field.name, component_name)

        check_assignable(destination, field, value)
        setattr(destination, field.name, value)
        logger.debug(
            "Wired %s.%s with component %r", destination_type, field.name, component_name
        )


def connect(key: str, reference: Any) -> Injector:
    """Wire the members of ``reference`` into each other.

    Every exposed member of the reference is a component available by name
    and is also wired as a destination, so components may refer to each
    other, cyclically included.

    Args:
        key: The metadata namespace fields are tagged under.
        reference: A record or mapping whose members are the components.

    Returns:
        An :class:`Injector` bound to ``key`` and the reference's components,
        for wiring further destinations.

    Raises:
        DependencyError: If any member cannot be wired. The injector is still
            attached to the error as ``injector``, so it can be used once the
            offending declaration is dealt with.
        TypeError: If ``reference`` is neither a record nor a mapping.

    Example:
        >>> components = Components(users=Users(), accounts=AccountsImpl(), db=MockDB())
        >>> injector = connect("component", components)
        >>> components.users.db is components.db   # True
        >>> injector.inject(consumer)
    """
    registry = ComponentRegistry(reference)
    injector = Injector(key, registry)
    reference_type = type(registry.reference).__name__
    try:
        try:
            components = registry.exposed_values()
        except Exception as e:
            raise InternalWalkFailureError(
                reference_type, None, f"{type(e).__name__}: {e}"
            ) from e
        logger.info("Connecting %d components from %s", len(components), reference_type)
        injector.inject(*components)
    except DependencyError as e:
        e.injector = injector
        raise
    return injector


def _has_init_hook(destination: Any) -> bool:
    if isinstance(destination, type):
        return False
    return isinstance(destination, Initializable) and callable(destination.init)


def _initialise(destination: Any) -> None:
    try:
        destination.init()
    except Exception as e:
        raise InitializationFailedError(
            type(destination).__name__, None, f"init failed: {e}"
        ) from e
