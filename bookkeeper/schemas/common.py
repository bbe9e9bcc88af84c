from datetime import date
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer

# Amounts travel as JSON numbers, not strings.
Money = Annotated[
    Decimal, PlainSerializer(lambda value: float(value), return_type=float, when_used="json")
]


class LineItemIn(BaseModel):
    product_id: int | None = None
    product_name: str | None = None
    description: str | None = None
    quantity: Decimal = Decimal("0")
    unit_price: Decimal = Decimal("0")
    tax_rate: Decimal = Decimal("0")


class LineItemRead(BaseModel):
    id: int
    product_id: int | None
    product_name: str | None
    description: str
    quantity: Money
    unit_price: Money
    actual_unit_price: Money
    tax_rate: Money
    tax_amount: Money
    total_price: Money

    model_config = {"from_attributes": True}


class DiscountFields(BaseModel):
    discount_type: str = "fixed"
    discount_value: Decimal = Decimal("0")


class ShippingFields(BaseModel):
    shipping_address: str | None = None
    billing_address: str | None = None
    ship_via: str | None = None
    shipping_date: date | None = None
    tracking_number: str | None = None
