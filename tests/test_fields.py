import gc
import weakref
from dataclasses import dataclass, field
from typing import Annotated, ClassVar, Optional

import pytest

from simplewire import tag
from simplewire.fields import dereference, is_record, record_fields

from example_services import Database, MockDB, Users


class Base:
    db: Annotated[Database, tag("component", "db")]


class Derived(Base):
    users: Users
    shared: ClassVar[Annotated[Users, tag("component", "users")]]


def test_fields_in_declaration_order_base_first():
    assert [f.name for f in record_fields(Derived)] == ["db", "users", "shared"]


def test_annotated_extras_are_split_from_declared_type():
    db, users, shared = record_fields(Derived)

    assert db.declared_type is Database
    assert db.annotated_metadata == (tag("component", "db"),)
    assert users.declared_type is Users
    assert users.annotated_metadata == ()
    assert shared.declared_type == ClassVar[Users]
    assert shared.annotated_metadata == (tag("component", "users"),)


def test_dataclass_field_metadata_is_attached():
    @dataclass
    class Thing:
        db: Optional[Database] = field(default=None, metadata={"component": "db"})

    [decl] = record_fields(Thing)
    assert decl.field_metadata == {"component": "db"}
    assert decl.is_exposed


def test_dereference_follows_weak_references():
    db = MockDB()

    assert dereference(weakref.ref(db)) is db
    assert dereference(db) is db


def test_dead_weak_reference_dereferences_to_none():
    ref = weakref.ref(MockDB())
    gc.collect()

    assert dereference(ref) is None


@pytest.mark.parametrize("value", [1, 1.5, True, "s", b"b", None, (), [], {}, set(), Users])
def test_scalars_containers_and_classes_are_not_records(value):
    assert not is_record(value)


@pytest.mark.parametrize("value", [Users(), MockDB(), object()])
def test_instances_are_records(value):
    assert is_record(value)
