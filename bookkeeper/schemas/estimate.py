from datetime import date, datetime

from pydantic import BaseModel

from .common import DiscountFields, LineItemIn, LineItemRead, Money, ShippingFields


class EstimateWrite(DiscountFields, ShippingFields):
    estimate_number: str | None = None
    customer_id: int | None = None
    estimate_date: date | None = None
    expiry_date: date | None = None
    status: str | None = None
    is_active: bool = True
    notes: str | None = None
    terms: str | None = None
    items: list[LineItemIn] = []


class EstimateRead(BaseModel):
    id: int
    company_id: int
    estimate_number: str
    customer_id: int
    estimate_date: date
    expiry_date: date | None
    discount_type: str
    discount_value: Money
    subtotal: Money
    discount_amount: Money
    tax_amount: Money
    total_amount: Money
    status: str
    is_active: bool
    notes: str | None
    terms: str | None
    shipping_address: str | None
    billing_address: str | None
    ship_via: str | None
    shipping_date: date | None
    tracking_number: str | None
    invoice_id: int | None
    created_at: datetime | None

    model_config = {"from_attributes": True}


class EstimateDetail(EstimateRead):
    items: list[LineItemRead] = []


class ConversionResult(BaseModel):
    message: str
    invoice_id: int
    invoice_number: str
