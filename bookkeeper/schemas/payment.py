from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from .common import Money


class PaymentCreate(BaseModel):
    payment_date: date | None = None
    payment_method: str | None = None
    payment_method_id: int | None = None
    deposit_to: str | None = None
    notes: str | None = None
    payment_amount: Decimal | None = None
    invoice_ids: list[int] = []
    allocations: dict[int, Decimal] = {}


class AllocationRead(BaseModel):
    invoice_id: int
    invoice_number: str
    amount_applied: Money
    paid_amount: Money
    balance_due: Money
    status: str


class PaymentRead(BaseModel):
    id: int
    customer_id: int
    payment_date: date
    payment_method: str
    deposit_to: str | None
    notes: str | None
    payment_amount: Money
    allocations: list[AllocationRead]
