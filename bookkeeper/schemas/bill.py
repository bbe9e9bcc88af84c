from datetime import date, datetime

from pydantic import BaseModel

from .common import DiscountFields, LineItemIn, LineItemRead, Money


class BillWrite(DiscountFields):
    bill_number: str | None = None
    vendor_id: int | None = None
    order_id: int | None = None
    bill_date: date | None = None
    due_date: date | None = None
    payment_method: str | None = None
    notes: str | None = None
    items: list[LineItemIn] = []


class BillRead(BaseModel):
    id: int
    company_id: int
    bill_number: str
    vendor_id: int
    order_id: int | None
    bill_date: date
    due_date: date | None
    payment_method_id: int | None
    payment_method: str | None = None
    discount_type: str
    discount_value: Money
    subtotal: Money
    discount_amount: Money
    tax_amount: Money
    total_amount: Money
    status: str
    notes: str | None
    created_at: datetime | None

    model_config = {"from_attributes": True}


class BillDetail(BillRead):
    items: list[LineItemRead] = []
