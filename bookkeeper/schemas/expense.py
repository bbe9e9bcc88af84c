from datetime import date, datetime

from pydantic import BaseModel

from .common import DiscountFields, LineItemIn, LineItemRead, Money


class ExpenseWrite(DiscountFields):
    expense_number: str | None = None
    category_id: int | None = None
    payment_account_id: int | None = None
    vendor_id: int | None = None
    payee: str | None = None
    payment_date: date | None = None
    payment_method: str | None = None
    notes: str | None = None
    items: list[LineItemIn] = []


class ExpenseRead(BaseModel):
    id: int
    company_id: int
    expense_number: str
    category_id: int
    payment_account_id: int | None
    vendor_id: int | None
    payee: str | None
    payment_date: date
    payment_method: str | None
    subtotal: Money
    discount_amount: Money
    tax_amount: Money
    total_amount: Money
    status: str
    notes: str | None
    created_at: datetime | None

    model_config = {"from_attributes": True}


class ExpenseDetail(ExpenseRead):
    items: list[LineItemRead] = []
