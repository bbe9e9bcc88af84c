from datetime import date, datetime
from decimal import Decimal
from enum import Enum

import sqlalchemy as sa
from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow
from .line_item import LineItemColumns


class BillStatusEnum(str, Enum):
    OPEN = "open"
    PAID = "paid"
    CANCELLED = "cancelled"


class Bill(Base):
    __tablename__ = "bills"
    __table_args__ = (
        sa.UniqueConstraint("company_id", "bill_number", name="uq_bills_company_number"),
        sa.Index("ix_bills_vendor_id", "vendor_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    company_id: Mapped[int] = mapped_column(ForeignKey("companies.id"), nullable=False)
    bill_number: Mapped[str] = mapped_column(String(50), nullable=False)
    vendor_id: Mapped[int] = mapped_column(ForeignKey("vendors.id"), nullable=False)
    order_id: Mapped[int | None] = mapped_column(Integer)
    bill_date: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date)
    payment_method_id: Mapped[int | None] = mapped_column(
        ForeignKey("payment_methods.id")
    )
    discount_type: Mapped[str] = mapped_column(String(20), nullable=False, default="fixed")
    discount_value: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )
    subtotal: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=BillStatusEnum.OPEN.value
    )
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )


class BillItem(LineItemColumns, Base):
    __tablename__ = "bill_items"

    bill_id: Mapped[int] = mapped_column(ForeignKey("bills.id"), nullable=False, index=True)
