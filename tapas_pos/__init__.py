"""Tapas POS persistence.

This package stores and retrieves the data of a point-of-sale terminal in an
embedded SQLite database.

Core subpackages
----------------

- ``tapas_pos.domain``: Pydantic models exchanged with the application
  (``Configuration``, ``Article``, ``Bill``, ``BillLine``, ``PaymentMode``).
- ``tapas_pos.persistence``: the ``DataProvider`` interface, its async
  SQLAlchemy implementation and the ORM schema.
- ``tapas_pos.core``: settings (``pydantic-settings``) and logging setup.

Schema migrations live in the top-level ``alembic`` directory.
"""
