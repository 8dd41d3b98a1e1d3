"""Introspection of the fields a record's type declares."""

import dataclasses
import weakref
from typing import Annotated, Any, ClassVar, Final, get_args, get_origin, get_type_hints

from simplewire.domain import FieldDecl

__all__ = ["record_fields", "dereference", "is_record"]

_NOT_RECORDS = (
    int,
    float,
    complex,
    bool,
    str,
    bytes,
    bytearray,
    list,
    tuple,
    dict,
    set,
    frozenset,
    type(None),
    type,
)


def dereference(obj: Any) -> Any:
    """Follow weak references until a concrete object is reached.

    A dead weak reference dereferences to None.
    """
    while isinstance(obj, weakref.ref):
        obj = obj()
    return obj


def is_record(obj: Any) -> bool:
    """Whether ``obj`` is an instance whose fields can be wired.

    Scalars, builtin containers and classes themselves are not records.
    """
    return not isinstance(obj, _NOT_RECORDS)


def record_fields(cls: type) -> list[FieldDecl]:
    """List the fields declared by ``cls`` in declaration order.

    Fields come from the class annotations (base classes first). For
    dataclasses the ``dataclasses.field`` metadata of each field is attached.

    Args:
        cls: The record type to inspect.

    Returns:
        A list of :class:`FieldDecl`, one per annotated attribute.

    Raises:
        NameError: If an annotation refers to a name that cannot be resolved.
    """
    hints = get_type_hints(cls, include_extras=True)
    metadata = (
        {f.name: f.metadata for f in dataclasses.fields(cls)}
        if dataclasses.is_dataclass(cls)
        else {}
    )
    return [_make_field(name, hint, metadata.get(name, {})) for name, hint in hints.items()]


def _make_field(name: str, annotation: Any, field_metadata) -> FieldDecl:
    qualifier = get_origin(annotation)
    if qualifier in (ClassVar, Final) and get_args(annotation):
        inner = _make_field(name, get_args(annotation)[0], field_metadata)
        return FieldDecl(
            name,
            annotation,
            qualifier[inner.declared_type],
            inner.annotated_metadata,
            field_metadata,
        )
    if qualifier is Annotated:
        declared_type, *extras = get_args(annotation)
        return FieldDecl(name, annotation, declared_type, tuple(extras), field_metadata)
    return FieldDecl(name, annotation, annotation, (), field_metadata)
