from __future__ import annotations

"""SQLAlchemy async data provider over an embedded SQLite database.

This module provides the embedded-database implementation of the
``DataProvider`` interface defined in ``tapas_pos.persistence.interfaces``.

Usage
-----

Typical wiring (tests or application setup):

- Build a provider with ``build_data_provider`` (or ``SqlDataProvider``).
- ``await provider.connect()``; the database file, its directory and the
  schema are created on first use.
- Call the CRUD methods.
- ``await provider.disconnect()``.

The lower level helpers ``create_engine``, ``create_sessionmaker`` and
``create_all`` are exported for tests and migrations.

Transaction model
-----------------

Each provider method opens an ``AsyncSession``, performs its operation, and
commits. Multi-row writes (a bill with its lines, the whole catalog) are one
transaction, so they are either fully stored or not stored at all.
"""

import logging
import os
import re
from datetime import datetime, time, timedelta
from pathlib import Path
from typing import Iterable, Optional

from sqlalchemy import delete, event, insert, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.sql.elements import ColumnElement

from ..core.config import Settings
from ..core.config import settings as default_settings
from ..domain import Article, Bill, BillLine, Configuration, PaymentMode
from .errors import NotConnectedError, SchemaCreationError, StorageLocationError
from .interfaces import DateBound, DataProvider
from .models import (
    CONFIGURATION_ROW_ID,
    Base,
    BillLineRow,
    BillRow,
    CategoryRow,
    ConfigurationRow,
    ProductRow,
)

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled on every connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(db_url: str) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    The helper normalizes SQLite URLs to ensure the async driver is used.
    For example, it rewrites ``sqlite://`` and ``sqlite+pysqlite://`` to
    ``sqlite+aiosqlite://``. Foreign keys are enabled on every SQLite
    connection.
    """
    url = re.sub(r"^sqlite(?:\+[a-z0-9_]+)?://", "sqlite+aiosqlite://", db_url, count=1)
    engine = create_async_engine(url)
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project."""
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables and seed the configuration row.

    This is mainly intended for tests and first start of a new database.
    Existing tables and an existing configuration row are left untouched.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        seeded = await conn.scalar(
            select(ConfigurationRow.id).where(ConfigurationRow.id == CONFIGURATION_ROW_ID)
        )
        if seeded is None:
            await conn.execute(
                insert(ConfigurationRow).values(id=CONFIGURATION_ROW_ID, full_screen=0, auto_align=0)
            )


def database_file(db_url: str) -> Optional[Path]:
    """Return the file behind a SQLite URL, or None for in-memory and server databases."""
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return None
    return Path(url.database)


def _local_now() -> datetime:
    # Bills are stamped with the till's wall clock; date filters work on local days.
    return datetime.now()


def _lower_bound(value: DateBound) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _upper_bound_condition(value: DateBound) -> ColumnElement[bool]:
    if isinstance(value, datetime):
        return BillRow.created_at <= value
    return BillRow.created_at < datetime.combine(value + timedelta(days=1), time.min)


class SqlDataProvider(DataProvider):
    """SQL implementation of ``DataProvider`` over the embedded database."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    async def __aenter__(self) -> SqlDataProvider:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def _sessions(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            raise NotConnectedError()
        return self._session_factory

    # ------------------------------------------------------------------ #
    # Connection lifecycle
    # ------------------------------------------------------------------ #

    async def connect(self) -> None:
        """
        Open the embedded database, creating it on first use.

        Raises:
            StorageLocationError: The database directory is not usable.
            SchemaCreationError: A new database could not be initialized; the
                partially created file is removed.
        """
        if self.is_connected:
            return

        db_url = self.settings.database_url
        db_file = database_file(db_url)
        if db_file is not None:
            self._prepare_directory(db_file.parent)
        is_new = db_file is None or not db_file.exists()

        engine = create_engine(db_url)
        if is_new:
            try:
                await create_all(engine)
            except Exception as exc:
                logger.error(f"Schema creation failed for {db_url}: {exc}")
                await engine.dispose()
                if db_file is not None and db_file.exists():
                    db_file.unlink()
                raise SchemaCreationError(str(exc)) from exc
            logger.info(f"Created database schema at {db_url}")

        self._engine = engine
        self._session_factory = create_sessionmaker(engine)
        logger.info(f"Connected to {db_url}")

    async def disconnect(self) -> None:
        """
        Dispose the engine; a no-op when not connected.
        """
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Disconnected from database")

    @staticmethod
    def _prepare_directory(directory: Path) -> None:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageLocationError(str(directory)) from exc
        if not os.access(directory, os.R_OK | os.W_OK):
            raise StorageLocationError(str(directory))

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #

    async def get_configuration(self) -> Configuration:
        """
        Read the single configuration row.

        Returns:
            The stored Configuration, or defaults when the row is missing.
        """
        async with self._sessions()() as s:
            row = await s.get(ConfigurationRow, CONFIGURATION_ROW_ID)
            if row is None:
                logger.debug("No configuration row stored; using defaults")
                return Configuration()
            return Configuration(
                password=row.password,
                email=row.email,
                full_screen_mode=row.full_screen != 0,
                auto_align_mode=row.auto_align != 0,
                ticket_header=row.ticket_header,
                ticket_footer=row.ticket_footer,
                ticket_header_image=row.ticket_image,
            )

    async def set_configuration(self, config: Configuration) -> None:
        """
        Overwrite the single configuration row, creating it when missing.

        Args:
            config: The configuration to persist.
        """
        async with self._sessions()() as s:
            row = await s.get(ConfigurationRow, CONFIGURATION_ROW_ID)
            if row is None:
                row = ConfigurationRow(id=CONFIGURATION_ROW_ID)
                s.add(row)
            row.password = config.password
            row.email = config.email
            row.full_screen = 1 if config.full_screen_mode else 0
            row.auto_align = 1 if config.auto_align_mode else 0
            row.ticket_image = config.ticket_header_image
            row.ticket_header = config.ticket_header
            row.ticket_footer = config.ticket_footer
            await s.commit()
        logger.debug("Configuration stored")

    # ------------------------------------------------------------------ #
    # Catalog
    # ------------------------------------------------------------------ #

    async def get_categories_and_products(self) -> list[Article]:
        """
        Read every category with its products.

        Returns:
            Categories ordered by id, products ordered by name inside each one.
        """
        async with self._sessions()() as s:
            stmt = (
                select(CategoryRow, ProductRow)
                .outerjoin(ProductRow, ProductRow.category_id == CategoryRow.id)
                .order_by(CategoryRow.id, ProductRow.name)
            )
            result = await s.execute(stmt)

            categories: list[Article] = []
            for category_row, product_row in result.all():
                # Rows arrive grouped by category: one row per product.
                if not categories or categories[-1].id != category_row.id:
                    categories.append(Article(id=category_row.id, caption=category_row.name, icon=category_row.icon))
                if product_row is not None:
                    categories[-1].add_to_sub_menu(
                        Article(
                            id=product_row.id,
                            caption=product_row.name,
                            description=product_row.description,
                            price=product_row.price,
                            icon=product_row.icon,
                        )
                    )

        logger.debug(f"Loaded {len(categories)} categories")
        return categories

    async def set_categories_and_products(self, articles: list[Article]) -> None:
        """
        Replace the stored catalog with ``articles``.

        Products are removed together with their categories by the
        ``ON DELETE CASCADE`` foreign key. Generated ids are assigned back to
        the passed articles once the transaction commits.

        Args:
            articles: Categories holding their products in ``sub_menu``.
        """
        stored: list[tuple[Article, CategoryRow | ProductRow]] = []

        async with self._sessions()() as s:
            await s.execute(delete(CategoryRow))

            for category in articles:
                category_row = CategoryRow(name=category.caption, icon=category.icon)
                s.add(category_row)
                await s.flush()
                stored.append((category, category_row))

                for product in category.sub_menu:
                    product_row = ProductRow(
                        category_id=category_row.id,
                        name=product.caption,
                        description=product.description,
                        price=product.price,
                        icon=product.icon,
                    )
                    s.add(product_row)
                    stored.append((product, product_row))
                await s.flush()

            await s.commit()

        for article, row in stored:
            article.id = row.id
        logger.debug(f"Stored catalog with {len(articles)} categories")

    # ------------------------------------------------------------------ #
    # Bills
    # ------------------------------------------------------------------ #

    async def insert_bill(self, bill: Bill) -> Bill:
        """
        Persist a bill header and its lines, stamped with the current time.

        Args:
            bill: The bill to insert.

        Returns:
            The same bill with ``id`` and ``when`` populated.
        """
        async with self._sessions()() as s:
            row = await self._add_bill(s, bill, bill_id=None, when=_local_now())
            await s.commit()

        bill.id = row.id
        bill.when = row.created_at
        logger.debug(f"Inserted bill {bill.id} with {len(bill.lines)} lines")
        return bill

    async def update_bill(self, bill: Bill) -> Bill:
        """
        Replace a stored bill by deleting and re-inserting it in one transaction.

        The bill keeps its id and original timestamp; when ``bill.when`` is
        unset the stored timestamp is reused. A bill that was never stored
        is inserted.

        Args:
            bill: The bill with its new contents.

        Returns:
            The stored bill.
        """
        if bill.id is None:
            return await self.insert_bill(bill)

        async with self._sessions()() as s:
            when = bill.when
            if when is None:
                when = await s.scalar(select(BillRow.created_at).where(BillRow.id == bill.id))
            await s.execute(delete(BillRow).where(BillRow.id == bill.id))
            row = await self._add_bill(s, bill, bill_id=bill.id, when=when or _local_now())
            await s.commit()

        bill.when = row.created_at
        logger.debug(f"Updated bill {bill.id}")
        return bill

    async def delete_bill(self, bill: Bill) -> bool:
        """
        Delete a bill; its lines follow through ``ON DELETE CASCADE``.

        Args:
            bill: The bill to delete.

        Returns:
            True if a stored bill was deleted, False otherwise.
        """
        if bill.id is None:
            return False

        async with self._sessions()() as s:
            result = await s.execute(delete(BillRow).where(BillRow.id == bill.id))
            await s.commit()

        deleted = result.rowcount > 0
        logger.debug(f"Delete bill {bill.id}: {'done' if deleted else 'not found'}")
        return deleted

    async def find_bills(
        self,
        date_from: Optional[DateBound] = None,
        date_to: Optional[DateBound] = None,
        payments: Optional[Iterable[PaymentMode]] = None,
        delete: bool = False,
    ) -> list[Bill]:
        """
        Query bills by date range and payment mode, optionally deleting them.

        Args:
            date_from: Earliest bill timestamp (inclusive).
            date_to: Latest bill timestamp (inclusive); a ``date`` covers the whole day.
            payments: Accepted payment modes; empty or None accepts any.
            delete: When True the returned bills are deleted in the same transaction.

        Returns:
            The matched bills ordered by id, each with its lines.
        """
        conditions: list[ColumnElement[bool]] = []
        if date_from is not None:
            conditions.append(BillRow.created_at >= _lower_bound(date_from))
        if date_to is not None:
            conditions.append(_upper_bound_condition(date_to))
        modes = sorted({PaymentMode(p).value for p in payments or ()})
        if modes:
            conditions.append(BillRow.payment_mode.in_(modes))

        async with self._sessions()() as s:
            bills = await self._select_bills(s, conditions)
            if delete and bills:
                await s.execute(_delete_bills_stmt(bills))
                await s.commit()
                logger.info(f"Deleted {len(bills)} bills after reading them")

        logger.debug(f"find_bills matched {len(bills)} bills")
        return bills

    async def find_bills_by_customer(self, customer_pattern: str) -> list[Bill]:
        """
        Query bills whose customer contains ``customer_pattern``.

        ``%`` and ``_`` inside the pattern are matched literally.

        Args:
            customer_pattern: Text to look for inside the customer name.

        Returns:
            The matched bills ordered by id, each with its lines.
        """
        async with self._sessions()() as s:
            bills = await self._select_bills(
                s, [BillRow.customer.contains(customer_pattern, autoescape=True)]
            )

        logger.debug(f"find_bills_by_customer({customer_pattern!r}) matched {len(bills)} bills")
        return bills

    # ------------------------------------------------------------------ #
    # Row mapping
    # ------------------------------------------------------------------ #

    @staticmethod
    async def _add_bill(s: AsyncSession, bill: Bill, *, bill_id: Optional[int], when: datetime) -> BillRow:
        row = BillRow(
            id=bill_id,
            customer=bill.customer,
            payment_mode=bill.payment.value,
            created_at=when,
            total=bill.total,
        )
        s.add(row)
        await s.flush()

        s.add_all(
            BillLineRow(bill_id=row.id, quantity=line.quantity, item=line.item, price=line.price)
            for line in bill.lines
        )
        await s.flush()
        return row

    @staticmethod
    async def _select_bills(s: AsyncSession, conditions: list[ColumnElement[bool]]) -> list[Bill]:
        stmt = select(BillRow, BillLineRow).outerjoin(BillLineRow, BillLineRow.bill_id == BillRow.id)
        if conditions:
            stmt = stmt.where(*conditions)
        stmt = stmt.order_by(BillRow.id, BillLineRow.id)
        result = await s.execute(stmt)

        bills: list[Bill] = []
        for bill_row, line_row in result.all():
            if not bills or bills[-1].id != bill_row.id:
                bills.append(
                    Bill(
                        id=bill_row.id,
                        customer=bill_row.customer,
                        payment=PaymentMode(bill_row.payment_mode),
                        when=bill_row.created_at,
                    )
                )
            if line_row is not None:
                bills[-1].add_line(BillLine(quantity=line_row.quantity, item=line_row.item, price=line_row.price))
        return bills


def _delete_bills_stmt(bills: list[Bill]):
    """Build the statement deleting exactly ``bills``."""
    return delete(BillRow).where(BillRow.id.in_([bill.id for bill in bills]))


def build_data_provider(settings: Optional[Settings] = None) -> SqlDataProvider:
    """Build the data provider configured by ``settings`` (defaults to the global settings).

    The returned provider is not connected yet.
    """
    return SqlDataProvider(settings)
