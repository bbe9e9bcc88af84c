"""line item precision

Revision ID: a5c7e9b1d304
Revises: 8b3c5e7f1d92
Create Date: 2026-10-19 10:40:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "a5c7e9b1d304"
down_revision = "8b3c5e7f1d92"
branch_labels = None
depends_on = None

ITEM_TABLES = ("estimate_items", "invoice_items", "bill_items", "expense_items")


def upgrade() -> None:
    for table in ITEM_TABLES:
        with op.batch_alter_table(table) as batch_op:
            batch_op.alter_column(
                "unit_price",
                existing_type=sa.Numeric(12, 2),
                type_=sa.Numeric(14, 4),
                existing_nullable=False,
            )
            batch_op.alter_column(
                "actual_unit_price",
                existing_type=sa.Numeric(12, 2),
                type_=sa.Numeric(14, 4),
                existing_nullable=False,
            )
            batch_op.alter_column(
                "tax_rate",
                existing_type=sa.Numeric(5, 2),
                type_=sa.Numeric(7, 4),
                existing_nullable=False,
            )


def downgrade() -> None:
    for table in ITEM_TABLES:
        with op.batch_alter_table(table) as batch_op:
            batch_op.alter_column(
                "tax_rate",
                existing_type=sa.Numeric(7, 4),
                type_=sa.Numeric(5, 2),
                existing_nullable=False,
            )
            batch_op.alter_column(
                "actual_unit_price",
                existing_type=sa.Numeric(14, 4),
                type_=sa.Numeric(12, 2),
                existing_nullable=False,
            )
            batch_op.alter_column(
                "unit_price",
                existing_type=sa.Numeric(14, 4),
                type_=sa.Numeric(12, 2),
                existing_nullable=False,
            )
