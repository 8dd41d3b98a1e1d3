"""Simplewire dependency injection through field metadata.

Simplewire wires pre-constructed components into each other without
generated code or hand-written glue. Components are the members of a
reference object; any object can ask for one by tagging a field with the
component's name under a metadata key. Wiring copies references only, so
components that depend on each other cyclically are wired in one pass.

Key Features:
    - Field tags through ``dataclasses.field`` metadata or ``Annotated`` markers
    - Case-insensitive component names
    - Runtime type checking of every assignment against the field's declared type
    - Optional ``init()`` hook run before a destination is wired
    - Reusable injector for wiring objects created after startup

Basic Usage:
    >>> from simplewire import connect
    >>>
    >>> @dataclass
    ... class Users:
    ...     db: Database = field(default=None, metadata={"component": "db"})
    >>>
    >>> @dataclass
    ... class Components:
    ...     users: Users
    ...     db: Database
    >>>
    >>> components = Components(Users(), MockDB())
    >>> injector = connect("component", components)
    >>> components.users.db is components.db   # True

The package consists of several modules:
    - injector: The ``connect`` entry point and the ``Injector``
    - registry: Case-insensitive component lookup over a reference object
    - assignability: Checks a component may be written into a field
    - tags: Reading component names from field metadata
    - fields: Introspection of a record's declared fields
    - domain: Core domain models (Tag, FieldDecl, LookupStatus)
    - errors: Package-specific exceptions
"""

from simplewire.domain import LookupStatus, Tag
from simplewire.errors import DependencyError
from simplewire.injector import Initializable, Injector, connect
from simplewire.registry import ComponentRegistry
from simplewire.tags import tag

__all__ = [
    "ComponentRegistry",
    "DependencyError",
    "Initializable",
    "Injector",
    "LookupStatus",
    "Tag",
    "connect",
    "tag",
]
