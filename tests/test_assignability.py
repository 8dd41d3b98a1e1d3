from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, Literal, NewType, Optional, TypeVar, Union

import pytest

from simplewire.assignability import check_assignable, satisfies
from simplewire.errors import (
    ComponentNotAssignableError,
    DestinationFieldNotReferenceTypeError,
    DestinationFieldNotSettableError,
    DestinationFieldPrivateError,
)
from simplewire.fields import record_fields

from example_services import Accounts, AccountsImpl, Database, MockDB, Users


class Store(ABC):
    @abstractmethod
    def get(self, key): ...


class MemoryStore(Store):
    def get(self, key):
        return None


UserId = NewType("UserId", str)
StoreT = TypeVar("StoreT", bound=Store)


def field_of(cls, name):
    return next(f for f in record_fields(cls) if f.name == name)


@pytest.mark.parametrize(
    "value, declared_type",
    [
        (MockDB(), Database),
        (AccountsImpl(), Accounts),
        (MockDB(), Optional[Database]),
        (MockDB(), Union[Users, Database]),
        (MockDB(), MockDB | None),
        (MemoryStore(), Store),
        (MemoryStore(), StoreT),
        (print, Callable[[str], None]),
        ([1], list[str]),
        (Users(), Any),
        (Users(), object),
        ("a", Literal["a", "b"]),
        ("x", UserId),
    ],
)
def test_satisfies(value, declared_type):
    assert satisfies(value, declared_type)


@pytest.mark.parametrize(
    "value, declared_type",
    [
        (Users(), Database),
        (MockDB(), Accounts),
        (Users(), Optional[Database]),
        (Users(), Store),
        (Users(), StoreT),
        (MockDB(), Callable[[str], None]),
        ({}, list[str]),
        ("c", Literal["a", "b"]),
        (1, UserId),
    ],
)
def test_does_not_satisfy(value, declared_type):
    assert not satisfies(value, declared_type)


@dataclass
class Destination:
    db: Optional[Database] = None
    count: int = 0
    maybe_name: Optional[str] = None
    pair: tuple[Database, Database] = ()
    _private: Optional[Database] = None
    _private_count: int = 0
    shared: ClassVar[Optional[Database]] = None


@pytest.mark.parametrize("name", ["count", "maybe_name", "pair", "_private_count"])
def test_value_types_are_rejected_first(name):
    with pytest.raises(DestinationFieldNotReferenceTypeError):
        check_assignable(Destination(), field_of(Destination, name), MockDB())


def test_private_field_is_rejected():
    with pytest.raises(DestinationFieldPrivateError):
        check_assignable(Destination(), field_of(Destination, "_private"), MockDB())


def test_class_level_field_is_not_settable():
    with pytest.raises(DestinationFieldNotSettableError):
        check_assignable(Destination(), field_of(Destination, "shared"), MockDB())


def test_slotted_class_without_slot_is_not_settable():
    class Slotted:
        __slots__ = ()
        db: Database

    with pytest.raises(DestinationFieldNotSettableError):
        check_assignable(Slotted(), field_of(Slotted, "db"), MockDB())


def test_slotted_class_with_slot_is_settable():
    @dataclass(slots=True)
    class Slotted:
        db: Optional[Database] = None

    check_assignable(Slotted(), field_of(Slotted, "db"), MockDB())


def test_wrong_runtime_type_is_rejected():
    with pytest.raises(
        ComponentNotAssignableError, match="Users is not assignable to"
    ):
        check_assignable(Destination(), field_of(Destination, "db"), Users())


def test_none_is_always_assignable_to_reference_fields():
    @dataclass
    class Strict:
        db: Database = None

    check_assignable(Strict(), field_of(Strict, "db"), None)
