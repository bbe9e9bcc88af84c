"""payments and document sequences

Revision ID: 8b3c5e7f1d92
Revises: 6d2f8b1a3c57
Create Date: 2026-10-13 14:20:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "8b3c5e7f1d92"
down_revision = "6d2f8b1a3c57"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id"), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column(
            "payment_method_id",
            sa.Integer(),
            sa.ForeignKey("payment_methods.id"),
            nullable=False,
        ),
        sa.Column("deposit_to", sa.String(length=120), nullable=True),
        sa.Column("payment_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_payments_customer_id", "payments", ["customer_id"])

    op.create_table(
        "payment_allocations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("payment_id", sa.Integer(), sa.ForeignKey("payments.id"), nullable=False),
        sa.Column("invoice_id", sa.Integer(), sa.ForeignKey("invoices.id"), nullable=False),
        sa.Column("amount_applied", sa.Numeric(12, 2), nullable=False),
    )
    op.create_index(
        "ix_payment_allocations_payment_id", "payment_allocations", ["payment_id"]
    )
    op.create_index(
        "ix_payment_allocations_invoice_id", "payment_allocations", ["invoice_id"]
    )

    op.create_table(
        "document_sequences",
        sa.Column(
            "company_id", sa.Integer(), sa.ForeignKey("companies.id"), primary_key=True
        ),
        sa.Column("prefix", sa.String(length=10), primary_key=True),
        sa.Column("year", sa.Integer(), primary_key=True),
        sa.Column("last_number", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("document_sequences")
    op.drop_index("ix_payment_allocations_invoice_id", table_name="payment_allocations")
    op.drop_index("ix_payment_allocations_payment_id", table_name="payment_allocations")
    op.drop_table("payment_allocations")
    op.drop_index("ix_payments_customer_id", table_name="payments")
    op.drop_table("payments")
