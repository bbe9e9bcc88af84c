"""financial documents

Revision ID: 6d2f8b1a3c57
Revises: 4a1e7c9d2b30
Create Date: 2026-10-12 09:30:00.000000
"""
from alembic import op
import sqlalchemy as sa


revision = "6d2f8b1a3c57"
down_revision = "4a1e7c9d2b30"
branch_labels = None
depends_on = None


def _item_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id"), nullable=True),
        sa.Column("product_name", sa.String(length=255), nullable=True),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("actual_unit_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("tax_rate", sa.Numeric(5, 2), nullable=False),
        sa.Column("tax_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=False),
    ]


def _totals_columns() -> list[sa.Column]:
    return [
        sa.Column("discount_type", sa.String(length=20), nullable=False),
        sa.Column("discount_value", sa.Numeric(12, 2), nullable=False),
        sa.Column("subtotal", sa.Numeric(12, 2), nullable=False),
        sa.Column("discount_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("tax_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("total_amount", sa.Numeric(12, 2), nullable=False),
    ]


def _shipping_columns() -> list[sa.Column]:
    return [
        sa.Column("shipping_address", sa.String(length=255), nullable=True),
        sa.Column("billing_address", sa.String(length=255), nullable=True),
        sa.Column("ship_via", sa.String(length=100), nullable=True),
        sa.Column("shipping_date", sa.Date(), nullable=True),
        sa.Column("tracking_number", sa.String(length=100), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "estimates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("estimate_number", sa.String(length=50), nullable=False),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id"), nullable=False),
        sa.Column("estimate_date", sa.Date(), nullable=False),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        *_totals_columns(),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("terms", sa.Text(), nullable=True),
        *_shipping_columns(),
        sa.Column("invoice_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint(
            "company_id", "estimate_number", name="uq_estimates_company_number"
        ),
    )
    op.create_index("ix_estimates_customer_id", "estimates", ["customer_id"])

    op.create_table(
        "invoices",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("invoice_number", sa.String(length=50), nullable=False),
        sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customers.id"), nullable=False),
        sa.Column(
            "estimate_id",
            sa.Integer(),
            sa.ForeignKey("estimates.id", name="fk_invoices_estimate_id"),
            nullable=True,
        ),
        sa.Column("head_note", sa.String(length=255), nullable=True),
        sa.Column("invoice_date", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        *_totals_columns(),
        sa.Column("paid_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("balance_due", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("terms", sa.Text(), nullable=True),
        *_shipping_columns(),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint(
            "company_id", "invoice_number", name="uq_invoices_company_number"
        ),
    )
    op.create_index("ix_invoices_customer_id", "invoices", ["customer_id"])
    op.create_index("ix_invoices_status", "invoices", ["status"])

    with op.batch_alter_table("estimates") as batch_op:
        batch_op.create_foreign_key(
            "fk_estimates_invoice_id", "invoices", ["invoice_id"], ["id"]
        )

    op.create_table(
        "bills",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("bill_number", sa.String(length=50), nullable=False),
        sa.Column("vendor_id", sa.Integer(), sa.ForeignKey("vendors.id"), nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=True),
        sa.Column("bill_date", sa.Date(), nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column(
            "payment_method_id",
            sa.Integer(),
            sa.ForeignKey("payment_methods.id"),
            nullable=True,
        ),
        *_totals_columns(),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("company_id", "bill_number", name="uq_bills_company_number"),
    )
    op.create_index("ix_bills_vendor_id", "bills", ["vendor_id"])

    op.create_table(
        "expenses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("company_id", sa.Integer(), sa.ForeignKey("companies.id"), nullable=False),
        sa.Column("expense_number", sa.String(length=50), nullable=False),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("expense_categories.id"),
            nullable=False,
        ),
        sa.Column(
            "payment_account_id",
            sa.Integer(),
            sa.ForeignKey("payment_accounts.id"),
            nullable=True,
        ),
        sa.Column("vendor_id", sa.Integer(), sa.ForeignKey("vendors.id"), nullable=True),
        sa.Column("payee", sa.String(length=120), nullable=True),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("payment_method", sa.String(length=120), nullable=True),
        *_totals_columns(),
        sa.Column("status", sa.String(length=50), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint(
            "company_id", "expense_number", name="uq_expenses_company_number"
        ),
    )
    op.create_index("ix_expenses_category_id", "expenses", ["category_id"])

    for table, parent in (
        ("estimate_items", "estimates"),
        ("invoice_items", "invoices"),
        ("bill_items", "bills"),
        ("expense_items", "expenses"),
    ):
        fk = f"{parent[:-1]}_id"
        op.create_table(
            table,
            *_item_columns(),
            sa.Column(fk, sa.Integer(), sa.ForeignKey(f"{parent}.id"), nullable=False),
        )
        op.create_index(f"ix_{table}_{fk}", table, [fk])


def downgrade() -> None:
    for table, fk in (
        ("expense_items", "expense_id"),
        ("bill_items", "bill_id"),
        ("invoice_items", "invoice_id"),
        ("estimate_items", "estimate_id"),
    ):
        op.drop_index(f"ix_{table}_{fk}", table_name=table)
        op.drop_table(table)
    op.drop_index("ix_expenses_category_id", table_name="expenses")
    op.drop_table("expenses")
    op.drop_index("ix_bills_vendor_id", table_name="bills")
    op.drop_table("bills")
    with op.batch_alter_table("estimates") as batch_op:
        batch_op.drop_constraint("fk_estimates_invoice_id", type_="foreignkey")
    op.drop_index("ix_invoices_status", table_name="invoices")
    op.drop_index("ix_invoices_customer_id", table_name="invoices")
    op.drop_table("invoices")
    op.drop_index("ix_estimates_customer_id", table_name="estimates")
    op.drop_table("estimates")
