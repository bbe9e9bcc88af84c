"""Accounts receivable aging.

Every invoice that still has a balance and is neither paid nor cancelled is
placed in one bucket by how far its due date lies from the report date.
"""
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Customer, Invoice
from ..models.base import today
from ..schemas import AgingRow, AgingSummary, OpenInvoiceRead
from .calculations import money
from .documents import ensure_company, ensure_owned
from .invoices import SETTLED_STATUSES, effective_status

BUCKETS = ("overdue", "due_today", "due_15_days", "due_30_days", "due_60_days", "due_later")


def aging_bucket(due_date: date | None, on: date) -> str:
    # No due date means due on receipt, so it ages with the overdue balance.
    if due_date is None or due_date < on:
        return "overdue"
    if due_date == on:
        return "due_today"
    days = (due_date - on).days
    if days <= 15:
        return "due_15_days"
    if days <= 30:
        return "due_30_days"
    if days <= 60:
        return "due_60_days"
    return "due_later"


def _open_invoices(db: Session, company_id: int, customer_id: int | None = None):
    query = select(Invoice).where(
        Invoice.company_id == company_id,
        Invoice.status.not_in(sorted(SETTLED_STATUSES)),
        Invoice.balance_due > 0,
    )
    if customer_id is not None:
        query = query.where(Invoice.customer_id == customer_id)
    return db.execute(query.order_by(Invoice.due_date, Invoice.id)).scalars()


def ar_aging_summary(db: Session, company_id: int, on: date | None = None) -> AgingSummary:
    on = on or today()
    ensure_company(db, company_id)

    by_customer: dict[int, dict[str, Decimal]] = {}
    for invoice in _open_invoices(db, company_id):
        buckets = by_customer.setdefault(
            invoice.customer_id, {bucket: Decimal("0") for bucket in BUCKETS}
        )
        buckets[aging_bucket(invoice.due_date, on)] += Decimal(invoice.balance_due)

    names = dict(
        db.execute(
            select(Customer.id, Customer.name).where(Customer.id.in_(sorted(by_customer)))
        ).all()
    )
    rows = [
        AgingRow(
            customer_id=customer_id,
            customer_name=names.get(customer_id, ""),
            total=money(sum(buckets.values(), Decimal("0"))),
            **{bucket: money(amount) for bucket, amount in buckets.items()},
        )
        for customer_id, buckets in by_customer.items()
    ]
    rows.sort(key=lambda row: (row.customer_name.lower(), row.customer_id))
    return AgingSummary(
        company_id=company_id,
        as_of=on,
        rows=rows,
        total=money(sum((row.total for row in rows), Decimal("0"))),
    )


def customer_open_invoices(
    db: Session, company_id: int, customer_id: int, on: date | None = None
) -> list[OpenInvoiceRead]:
    """A customer's invoices behind an aging row, earliest due first."""
    on = on or today()
    ensure_owned(db, Customer, customer_id, company_id, "Customer")
    return [
        OpenInvoiceRead(
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            invoice_date=invoice.invoice_date,
            due_date=invoice.due_date,
            total_amount=invoice.total_amount,
            paid_amount=invoice.paid_amount,
            balance_due=invoice.balance_due,
            status=effective_status(invoice, on),
        )
        for invoice in _open_invoices(db, company_id, customer_id)
    ]
