from datetime import date

from pydantic import BaseModel

from .common import Money


class AgingRow(BaseModel):
    customer_id: int
    customer_name: str
    overdue: Money
    due_today: Money
    due_15_days: Money
    due_30_days: Money
    due_60_days: Money
    due_later: Money
    total: Money


class AgingSummary(BaseModel):
    company_id: int
    as_of: date
    rows: list[AgingRow]
    total: Money


class OpenInvoiceRead(BaseModel):
    invoice_id: int
    invoice_number: str
    invoice_date: date
    due_date: date | None
    total_amount: Money
    paid_amount: Money
    balance_due: Money
    status: str
