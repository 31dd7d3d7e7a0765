"""Persistence interface and embedded-database implementation.

The persistence layer is the storage boundary of the point-of-sale
application.

Responsibilities
----------------

- Provide a single async interface (``DataProvider`` Protocol) the
  application depends on.
- Persist:

  - the terminal configuration (one row),
  - the catalog of categories and their products,
  - bills (receipt header plus lines).

Design notes
------------

The application is written against the interface so it can be used with:

- the embedded SQLite implementation in ``persistence.sql``,
- in-memory fakes for unit tests.

The SQL implementation commits at method boundaries and leaves cascading
deletes to the database engine.
"""

from .errors import (
    NotConnectedError,
    PersistenceError,
    SchemaCreationError,
    StorageLocationError,
)
from .interfaces import DataProvider
from .sql import SqlDataProvider, build_data_provider

__all__ = [
    "DataProvider",
    "NotConnectedError",
    "PersistenceError",
    "SchemaCreationError",
    "SqlDataProvider",
    "StorageLocationError",
    "build_data_provider",
]
