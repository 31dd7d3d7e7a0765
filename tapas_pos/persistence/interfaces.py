from __future__ import annotations

"""Persistence interface contract.

The point-of-sale application depends on this Protocol instead of a concrete
storage implementation.

Contract guidelines
-------------------

- All methods are async.
- ``connect()`` must be awaited before any other method and ``disconnect()``
  releases every resource the provider holds.
- Each method is its own unit of work: when it returns, whatever it wrote is
  durable.
- Catalog writes replace the whole catalog; bills are written one at a time.
"""

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Union

from ..domain import Article, Bill, Configuration, PaymentMode

DateBound = Union[date, datetime]


class DataProvider(Protocol):
    """Store and query configuration, catalog and bills."""

    async def connect(self) -> None:
        """
        Open the storage, creating it (schema included) on first use.
        """
        ...

    async def disconnect(self) -> None:
        """
        Release the storage and every pooled connection.
        """
        ...

    async def get_configuration(self) -> Configuration:
        """
        Read the terminal configuration.

        Returns:
            The stored configuration, or a default one when none was saved yet.
        """
        ...

    async def set_configuration(self, config: Configuration) -> None:
        """
        Persist the terminal configuration.

        Args:
            config: The configuration to store.
        """
        ...

    async def get_categories_and_products(self) -> list[Article]:
        """
        Read the whole catalog.

        Returns:
            Categories ordered by id, each holding its products ordered by name.
        """
        ...

    async def set_categories_and_products(self, articles: list[Article]) -> None:
        """
        Replace the whole catalog.

        Generated ids are written back onto the passed articles.

        Args:
            articles: Categories, each holding its products in ``sub_menu``.
        """
        ...

    async def insert_bill(self, bill: Bill) -> Bill:
        """
        Persist a new bill with its lines.

        Args:
            bill: The bill to store.

        Returns:
            The same bill with ``id`` and ``when`` populated.
        """
        ...

    async def update_bill(self, bill: Bill) -> Bill:
        """
        Overwrite a stored bill (header and lines).

        Args:
            bill: The bill with its new contents.

        Returns:
            The stored bill.
        """
        ...

    async def delete_bill(self, bill: Bill) -> bool:
        """
        Delete a bill and its lines.

        Args:
            bill: The bill to remove.

        Returns:
            True when a bill was deleted.
        """
        ...

    async def find_bills(
        self,
        date_from: Optional[DateBound] = None,
        date_to: Optional[DateBound] = None,
        payments: Optional[Iterable[PaymentMode]] = None,
        delete: bool = False,
    ) -> list[Bill]:
        """
        Query bills by date range and payment mode.

        Args:
            date_from: Earliest bill timestamp (inclusive).
            date_to: Latest bill timestamp (inclusive; a ``date`` covers the whole day).
            payments: Accepted payment modes; empty or None accepts any.
            delete: Delete the matched bills after reading them.

        Returns:
            The matched bills ordered by id.
        """
        ...

    async def find_bills_by_customer(self, customer_pattern: str) -> list[Bill]:
        """
        Query bills whose customer contains ``customer_pattern``.

        Args:
            customer_pattern: Text to look for inside the customer name.

        Returns:
            The matched bills ordered by id.
        """
        ...
