"""Initial schema and seed data for Tapas POS

Revision ID: 20261019_000000
Revises: None
Create Date: 2026-10-19 00:00:00.000000

This is the initial migration that creates all tables of the point-of-sale
database and seeds the single configuration row:
- configuration
- categories / products (products cascade with their category)
- bills / bill_lines (lines cascade with their bill)

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables and seed initial data."""

    configuration = op.create_table(
        "configuration",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("password", sa.String(64), nullable=True),
        sa.Column("email", sa.String(256), nullable=True),
        sa.Column("full_screen", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("auto_align", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("ticket_image", sa.LargeBinary(), nullable=True),
        sa.Column("ticket_header", sa.Text(), nullable=True),
        sa.Column("ticket_footer", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("icon", sa.LargeBinary(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=True),
        sa.Column("icon", sa.LargeBinary(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], ondelete="CASCADE"),
        sa.Index("ix_products_category_id", "category_id"),
    )

    op.create_table(
        "bills",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("customer", sa.String(128), nullable=True),
        sa.Column("payment_mode", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("total", sa.Numeric(10, 2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.Index("ix_bills_customer", "customer"),
        sa.Index("ix_bills_created_at", "created_at"),
    )

    op.create_table(
        "bill_lines",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("bill_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("item", sa.String(128), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["bill_id"], ["bills.id"], ondelete="CASCADE"),
        sa.Index("ix_bill_lines_bill_id", "bill_id"),
    )

    # Seed the single configuration row
    op.bulk_insert(configuration, [{"id": 1, "full_screen": 0, "auto_align": 0}])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("bill_lines")
    op.drop_table("bills")
    op.drop_table("products")
    op.drop_table("categories")
    op.drop_table("configuration")
