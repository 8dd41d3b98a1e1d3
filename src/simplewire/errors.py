"""Exceptions raised while wiring components into destinations."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from simplewire.injector import Injector

__all__ = [
    "DependencyError",
    "ComponentNotFoundError",
    "ComponentNotVisibleError",
    "DestinationFieldPrivateError",
    "DestinationFieldNotReferenceTypeError",
    "DestinationFieldNotSettableError",
    "ComponentNotAssignableError",
    "InitializationFailedError",
    "InternalWalkFailureError",
]


class DependencyError(Exception):
    """Raised when a component cannot be wired into a destination.

    Attributes:
        destination_type: Name of the destination's type.
        field_name: Name of the destination field being wired, if any.
        component_name: Name of the requested component, if any.
        injector: The injector built by ``connect`` when the error was raised
            while it wired the reference's own members, otherwise None.
    """

    def __init__(
        self,
        destination_type: str,
        field_name: Optional[str],
        detail: str,
        component_name: Optional[str] = None,
    ):
        self.destination_type = destination_type
        self.field_name = field_name
        self.component_name = component_name
        self.detail = detail
        self.injector: Optional["Injector"] = None
        super().__init__(
            f"simplewire inject failed at {destination_type}:{field_name or ''} - {detail}"
        )


class ComponentNotFoundError(DependencyError):
    """The tagged name has no matching member in the reference."""

    def __init__(self, destination_type: str, field_name: str, component_name: str):
        super().__init__(
            destination_type,
            field_name,
            f"{component_name} not found in reference",
            component_name,
        )


class ComponentNotVisibleError(DependencyError):
    """A matching member exists in the reference but is private."""

    def __init__(self, destination_type: str, field_name: str, component_name: str):
        super().__init__(
            destination_type,
            field_name,
            f"{component_name} must be exposed from reference",
            component_name,
        )


class DestinationFieldPrivateError(DependencyError):
    pass


class DestinationFieldNotReferenceTypeError(DependencyError):
    pass


class DestinationFieldNotSettableError(DependencyError):
    pass


class ComponentNotAssignableError(DependencyError):
    pass


class InitializationFailedError(DependencyError):
    """The destination's ``init`` hook raised."""


class InternalWalkFailureError(DependencyError):
    """An unexpected exception escaped while walking a destination's fields."""
