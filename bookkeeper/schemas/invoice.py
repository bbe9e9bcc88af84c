from datetime import date, datetime

from pydantic import BaseModel

from .common import DiscountFields, LineItemIn, LineItemRead, Money, ShippingFields


class InvoiceWrite(DiscountFields, ShippingFields):
    invoice_number: str | None = None
    customer_id: int | None = None
    estimate_id: int | None = None
    head_note: str | None = None
    invoice_date: date | None = None
    due_date: date | None = None
    notes: str | None = None
    terms: str | None = None
    items: list[LineItemIn] = []


class InvoiceRead(BaseModel):
    id: int
    company_id: int
    invoice_number: str
    customer_id: int
    estimate_id: int | None
    head_note: str | None
    invoice_date: date
    due_date: date | None
    discount_type: str
    discount_value: Money
    subtotal: Money
    discount_amount: Money
    tax_amount: Money
    total_amount: Money
    paid_amount: Money
    balance_due: Money
    status: str
    notes: str | None
    terms: str | None
    shipping_address: str | None
    billing_address: str | None
    ship_via: str | None
    shipping_date: date | None
    tracking_number: str | None
    created_at: datetime | None

    model_config = {"from_attributes": True}


class InvoiceDetail(InvoiceRead):
    items: list[LineItemRead] = []
