"""Checks that a component may be written into a destination field.

A field accepts a component when all of the following hold, checked in order:

1. Its declared type is a reference type. Every class instance is shared by
   reference, so only immutable value types (numbers, strings, bytes, tuples,
   frozensets, None, and literals of those) are rejected.
2. It is exposed (no leading underscore) and can be set on the destination.
3. The component's runtime type satisfies the declared type.
"""

import dataclasses
import inspect
import types
from collections.abc import Callable
from typing import (
    Annotated,
    Any,
    ClassVar,
    Final,
    Generic,
    Literal,
    NewType,
    Protocol,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from simplewire.domain import FieldDecl
from simplewire.errors import (
    ComponentNotAssignableError,
    DestinationFieldNotReferenceTypeError,
    DestinationFieldNotSettableError,
    DestinationFieldPrivateError,
)

__all__ = ["check_assignable", "satisfies"]

_VALUE_TYPES = (int, float, complex, bool, str, bytes, tuple, frozenset, type(None))


def check_assignable(destination: Any, field: FieldDecl, value: Any) -> None:
    """Validate that ``value`` can be assigned to ``field`` of ``destination``.

    A None value passes the type check: it is assigned like any other.

    Args:
        destination: The record whose field is being wired.
        field: The field declaration.
        value: The resolved component.

    Raises:
        DestinationFieldNotReferenceTypeError: The field is declared as a value type.
        DestinationFieldPrivateError: The field name starts with an underscore.
        DestinationFieldNotSettableError: The field cannot be assigned on the destination.
        ComponentNotAssignableError: The component does not satisfy the declared type.
    """
    owner = type(destination).__name__
    name = field.name

    if _is_value_type(field.declared_type):
        raise DestinationFieldNotReferenceTypeError(
            owner, name, f"{name} must be a reference or protocol type"
        )
    if not field.is_exposed:
        raise DestinationFieldPrivateError(owner, name, f"{name} cannot be private")
    if not _is_settable(destination, field):
        raise DestinationFieldNotSettableError(owner, name, f"{name} cannot be changed")
    if value is not None and not satisfies(value, field.declared_type):
        raise ComponentNotAssignableError(
            owner,
            name,
            f"{type(value).__name__} is not assignable to {_type_name(field.declared_type)}",
        )


def satisfies(value: Any, declared_type: Any) -> bool:
    """Whether ``value``'s runtime type satisfies ``declared_type``.

    Example:
        >>> satisfies(MockDB(), Database)            # True if MockDB implements Database
        >>> satisfies(MockDB(), Optional[Database])  # Same, through the union
        >>> satisfies(print, Callable[[str], None])  # True, only callable() is checked
        >>> satisfies([1], list[str])                # True, parameters are not checked
    """
    if declared_type is Any or declared_type is object:
        return True

    origin = get_origin(declared_type)
    args = get_args(declared_type)
    if origin in (Annotated, ClassVar, Final):
        return satisfies(value, args[0]) if args else True
    if origin is Union or origin is types.UnionType:
        return any(satisfies(value, arm) for arm in args)
    if origin is Literal:
        return value in args
    if origin is Callable:
        return callable(value)
    if origin is not None:
        return satisfies(value, origin)

    if isinstance(declared_type, TypeVar):
        bound = declared_type.__bound__
        return bound is None or satisfies(value, bound)
    if isinstance(declared_type, NewType):
        return satisfies(value, declared_type.__supertype__)
    if declared_type is Final:
        return True
    if isinstance(declared_type, type):
        if _is_protocol(declared_type) and not getattr(declared_type, "_is_runtime_protocol", False):
            return all(hasattr(value, member) for member in _protocol_members(declared_type))
        return isinstance(value, declared_type)
    return False


def _unwrap_qualifiers(declared_type: Any) -> Any:
    while get_origin(declared_type) in (Annotated, ClassVar, Final) and get_args(declared_type):
        declared_type = get_args(declared_type)[0]
    return declared_type


def _is_value_type(declared_type: Any) -> bool:
    declared_type = _unwrap_qualifiers(declared_type)
    origin = get_origin(declared_type)
    if origin is Union or origin is types.UnionType:
        arms = [arm for arm in get_args(declared_type) if arm is not type(None)]
        return bool(arms) and all(_is_value_type(arm) for arm in arms)
    if origin is Literal:
        return all(isinstance(arg, _VALUE_TYPES) for arg in get_args(declared_type))
    if origin is not None:
        return _is_value_type(origin)
    if declared_type is None:
        return True
    return isinstance(declared_type, type) and issubclass(declared_type, _VALUE_TYPES)


def _is_settable(destination: Any, field: FieldDecl) -> bool:
    if _is_class_level_or_final(field.declared_type):
        return False

    owner = type(destination)
    if dataclasses.is_dataclass(owner) and owner.__dataclass_params__.frozen:
        return False

    attribute = inspect.getattr_static(owner, field.name, None)
    if isinstance(attribute, property):
        return attribute.fset is not None
    if not hasattr(destination, "__dict__"):
        return isinstance(attribute, types.MemberDescriptorType)
    return True


def _is_class_level_or_final(declared_type: Any) -> bool:
    return declared_type is Final or get_origin(declared_type) in (ClassVar, Final)


def _is_protocol(cls: type) -> bool:
    return getattr(cls, "_is_protocol", False) and cls is not Protocol


def _protocol_members(protocol: type) -> set[str]:
    members = set()
    for base in protocol.__mro__:
        if base in (Protocol, Generic, object) or not _is_protocol(base):
            continue
        names = list(vars(base)) + list(getattr(base, "__annotations__", {}))
        members.update(name for name in names if not name.startswith("_"))
    return members


def _type_name(declared_type: Any) -> str:
    return declared_type.__name__ if isinstance(declared_type, type) else repr(declared_type)
