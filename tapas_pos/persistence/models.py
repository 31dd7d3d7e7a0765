from __future__ import annotations

"""SQLAlchemy ORM models for point-of-sale persistence.

These ORM models define the SQL schema used by the SQL data provider in
``tapas_pos.persistence.sql``.

Design
------

- ``configuration`` holds exactly one row (id ``1``).
- ``categories`` own ``products``; deleting a category deletes its products.
- ``bills`` own ``bill_lines``; deleting a bill deletes its lines.

Both ownerships are declared as ``ON DELETE CASCADE`` foreign keys so the
database engine enforces them, not the ORM.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, LargeBinary, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

CONFIGURATION_ROW_ID = 1


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class ConfigurationRow(Base):
    """Row model for ``configuration``.

    Booleans are stored as ``0``/``1`` integers; the ticket header image is a
    blob with the raw image bytes.
    """

    __tablename__ = "configuration"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=CONFIGURATION_ROW_ID)
    password: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    full_screen: Mapped[int] = mapped_column(Integer, default=0)
    auto_align: Mapped[int] = mapped_column(Integer, default=0)
    ticket_image: Mapped[Optional[bytes]] = mapped_column(LargeBinary, nullable=True)
    ticket_header: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ticket_footer: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class CategoryRow(Base):
    """Row model for ``categories``."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64))
    icon: Mapped[Optional[bytes]] = mapped_column(LargeBinary, nullable=True)


class ProductRow(Base):
    """Row model for ``products``."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(64))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    icon: Mapped[Optional[bytes]] = mapped_column(LargeBinary, nullable=True)


class BillRow(Base):
    """Row model for ``bills`` (the receipt header).

    ``total`` is denormalized from the lines at insert time so reports can
    sum it without touching ``bill_lines``.
    """

    __tablename__ = "bills"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer: Mapped[Optional[str]] = mapped_column(String(128), nullable=True, index=True)
    payment_mode: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, index=True)
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2))


class BillLineRow(Base):
    """Row model for ``bill_lines``."""

    __tablename__ = "bill_lines"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    bill_id: Mapped[int] = mapped_column(Integer, ForeignKey("bills.id", ondelete="CASCADE"), index=True)
    quantity: Mapped[int] = mapped_column(Integer)
    item: Mapped[str] = mapped_column(String(128))
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2))
