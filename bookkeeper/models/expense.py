from datetime import date, datetime
from decimal import Decimal

import sqlalchemy as sa
from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow
from .line_item import LineItemColumns


class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = (
        sa.UniqueConstraint(
            "company_id", "expense_number", name="uq_expenses_company_number"
        ),
        sa.Index("ix_expenses_category_id", "category_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False)
    expense_number: Mapped[str] = mapped_column(String(50), nullable=False)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("expense_categories.id"), nullable=False
    )
    payment_account_id: Mapped[int | None] = mapped_column(
        ForeignKey("payment_accounts.id")
    )
    vendor_id: Mapped[int | None] = mapped_column(ForeignKey("vendors.id"))
    payee: Mapped[str | None] = mapped_column(String(120))
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)
    payment_method: Mapped[str | None] = mapped_column(String(120))
    discount_type: Mapped[str] = mapped_column(String(20), nullable=False, default="fixed")
    discount_value: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="recorded")
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)


class ExpenseItem(LineItemColumns, Base):
    __tablename__ = "expense_items"

    expense_id: Mapped[int] = mapped_column(
        ForeignKey("expenses.id"), nullable=False, index=True
    )
