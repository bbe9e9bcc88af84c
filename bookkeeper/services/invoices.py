import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ..db import atomic
from ..errors import ConflictError, ValidationError
from ..models import (
    Estimate,
    EstimateStatusEnum,
    Invoice,
    InvoiceStatusEnum,
    PaymentAllocation,
)
from ..models.base import today
from ..schemas import InvoiceWrite
from .calculations import DiscountType, DocumentKind, money
from .documents import (
    create_document,
    delete_document,
    ensure_owned,
    get_document,
    get_items,
    list_documents,
    update_document,
)
from .validation import validate_document

logger = logging.getLogger(__name__)

SETTLED_STATUSES = {InvoiceStatusEnum.PAID.value, InvoiceStatusEnum.CANCELLED.value}


def effective_status(invoice: Invoice, on: date | None = None) -> str:
    """Stored status, or ``overdue`` once an unpaid invoice is past its due date.

    Overdue is derived on every read and never written back.
    """
    on = on or today()
    if (
        invoice.status not in SETTLED_STATUSES
        and invoice.due_date is not None
        and invoice.due_date < on
        and Decimal(invoice.balance_due) > 0
    ):
        return InvoiceStatusEnum.OVERDUE.value
    return invoice.status


def status_after_payment(invoice: Invoice) -> str:
    if Decimal(invoice.paid_amount) <= 0:
        if invoice.status == InvoiceStatusEnum.PARTIALLY_PAID.value:
            return InvoiceStatusEnum.SENT.value
        return invoice.status
    if Decimal(invoice.balance_due) <= 0:
        return InvoiceStatusEnum.PAID.value
    return InvoiceStatusEnum.PARTIALLY_PAID.value


def _header_from(payload: InvoiceWrite) -> dict:
    return {
        "invoice_number": payload.invoice_number,
        "customer_id": payload.customer_id,
        "estimate_id": payload.estimate_id,
        "head_note": payload.head_note,
        "invoice_date": payload.invoice_date,
        "due_date": payload.due_date,
        "discount_type": DiscountType(payload.discount_type).value,
        "discount_value": money(payload.discount_value),
        "notes": payload.notes,
        "terms": payload.terms,
        "shipping_address": payload.shipping_address,
        "billing_address": payload.billing_address,
        "ship_via": payload.ship_via,
        "shipping_date": payload.shipping_date,
        "tracking_number": payload.tracking_number,
    }


def _has_payments(db: Session, invoice_id: int) -> bool:
    count = db.execute(
        select(func.count())
        .select_from(PaymentAllocation)
        .where(PaymentAllocation.invoice_id == invoice_id)
    ).scalar_one()
    return count > 0


def create_invoice(db: Session, company_id: int, payload: InvoiceWrite) -> Invoice:
    items = validate_document(DocumentKind.INVOICE, payload)
    header = _header_from(payload)
    header["status"] = InvoiceStatusEnum.DRAFT.value
    header["paid_amount"] = money(0)
    with atomic(
        db,
        "create invoice",
        conflict_message=f"Invoice number '{payload.invoice_number}' already exists.",
    ):
        if payload.estimate_id is not None:
            ensure_owned(db, Estimate, payload.estimate_id, company_id, "Estimate")
        invoice = create_document(db, company_id, DocumentKind.INVOICE, header, items)
    logger.info("Created invoice %s (id=%s)", invoice.invoice_number, invoice.id)
    return invoice


def update_invoice(
    db: Session, company_id: int, invoice_id: int, payload: InvoiceWrite
) -> Invoice:
    invoice = get_document(db, DocumentKind.INVOICE, company_id, invoice_id)
    if invoice.status == InvoiceStatusEnum.CANCELLED.value:
        raise ConflictError("A cancelled invoice cannot be edited.")
    items = validate_document(DocumentKind.INVOICE, payload)
    if payload.customer_id != invoice.customer_id and _has_payments(db, invoice.id):
        raise ConflictError(
            "An invoice with recorded payments cannot be moved to another customer.",
            field="customer_id",
        )
    with atomic(
        db,
        "update invoice",
        conflict_message=f"Invoice number '{payload.invoice_number}' already exists.",
    ):
        if payload.estimate_id is not None:
            ensure_owned(db, Estimate, payload.estimate_id, company_id, "Estimate")
        update_document(
            db, company_id, DocumentKind.INVOICE, invoice, _header_from(payload), items
        )
        if Decimal(invoice.balance_due) < 0:
            raise ValidationError(
                "Invoice total cannot be less than the amount already paid.",
                field="items",
            )
        invoice.status = status_after_payment(invoice)
    return invoice


def delete_invoice(db: Session, company_id: int, invoice_id: int) -> None:
    invoice = get_document(db, DocumentKind.INVOICE, company_id, invoice_id)
    if _has_payments(db, invoice.id):
        raise ConflictError("An invoice with recorded payments cannot be deleted.")
    with atomic(db, "delete invoice"):
        db.execute(
            update(Estimate)
            .where(Estimate.invoice_id == invoice.id)
            .values(status=EstimateStatusEnum.PENDING.value, invoice_id=None)
        )
        delete_document(db, DocumentKind.INVOICE, invoice)
    logger.info("Deleted invoice id=%s", invoice_id)


def send_invoice(db: Session, company_id: int, invoice_id: int) -> Invoice:
    invoice = get_document(db, DocumentKind.INVOICE, company_id, invoice_id)
    if invoice.status != InvoiceStatusEnum.DRAFT.value:
        raise ConflictError("Only draft invoices can be sent.")
    with atomic(db, "send invoice"):
        invoice.status = InvoiceStatusEnum.SENT.value
    return invoice


def cancel_invoice(db: Session, company_id: int, invoice_id: int) -> Invoice:
    invoice = get_document(db, DocumentKind.INVOICE, company_id, invoice_id)
    if Decimal(invoice.paid_amount) > 0:
        raise ConflictError("An invoice with recorded payments cannot be cancelled.")
    with atomic(db, "cancel invoice"):
        invoice.status = InvoiceStatusEnum.CANCELLED.value
    logger.info("Cancelled invoice %s (id=%s)", invoice.invoice_number, invoice.id)
    return invoice


def list_invoices(
    db: Session, company_id: int, customer_id: int | None = None
) -> list[Invoice]:
    filters = []
    if customer_id is not None:
        filters.append(Invoice.customer_id == customer_id)
    return list_documents(db, DocumentKind.INVOICE, company_id, *filters)


def get_invoice(db: Session, company_id: int, invoice_id: int):
    invoice = get_document(db, DocumentKind.INVOICE, company_id, invoice_id)
    return invoice, get_items(db, DocumentKind.INVOICE, invoice.id)
