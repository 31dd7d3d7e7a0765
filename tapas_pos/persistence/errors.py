"""Error types for the persistence package.

Defines a small hierarchy of exceptions raised while opening or preparing the
embedded database. Errors raised by SQL statements themselves propagate as
SQLAlchemy exceptions.
"""

from __future__ import annotations


class PersistenceError(Exception):
    """Base error for all persistence exceptions."""


class StorageLocationError(PersistenceError):
    """Raised when the database directory cannot be created or accessed."""

    def __init__(self, location: str) -> None:
        super().__init__(f"Can't create db directory in [{location}]")


class SchemaCreationError(PersistenceError):
    """Raised when the schema of a brand new database could not be created."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Error creating database schema: {message}")


class NotConnectedError(PersistenceError):
    """Raised when an operation runs before ``connect()``."""

    def __init__(self) -> None:
        super().__init__("Data provider is not connected; call connect() first")
