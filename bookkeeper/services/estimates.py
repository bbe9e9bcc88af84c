import logging
from types import SimpleNamespace

from sqlalchemy.orm import Session

from ..config import settings
from ..db import atomic
from ..errors import ConflictError
from ..models import Estimate, EstimateStatusEnum, Invoice, InvoiceItem, InvoiceStatusEnum
from ..models.base import today
from ..schemas import EstimateWrite
from .calculations import DiscountType, DocumentKind, compute_line, money
from .documents import (
    apply_totals,
    create_document,
    delete_document,
    get_document,
    get_items,
    list_documents,
    update_document,
)
from .numbering import next_document_number
from .validation import validate_document

logger = logging.getLogger(__name__)

# Header fields an invoice inherits from the estimate it was converted from.
CARRIED_FIELDS = (
    "customer_id",
    "discount_type",
    "discount_value",
    "notes",
    "terms",
    "shipping_address",
    "billing_address",
    "ship_via",
    "shipping_date",
    "tracking_number",
)


def _header_from(payload: EstimateWrite) -> dict:
    return {
        "estimate_number": payload.estimate_number,
        "customer_id": payload.customer_id,
        "estimate_date": payload.estimate_date,
        "expiry_date": payload.expiry_date,
        "discount_type": DiscountType(payload.discount_type).value,
        "discount_value": money(payload.discount_value),
        "status": payload.status or EstimateStatusEnum.PENDING.value,
        "is_active": payload.is_active,
        "notes": payload.notes,
        "terms": payload.terms,
        "shipping_address": payload.shipping_address,
        "billing_address": payload.billing_address,
        "ship_via": payload.ship_via,
        "shipping_date": payload.shipping_date,
        "tracking_number": payload.tracking_number,
    }


def _is_converted(estimate: Estimate) -> bool:
    return (
        estimate.status == EstimateStatusEnum.CONVERTED.value
        or estimate.invoice_id is not None
    )


def create_estimate(db: Session, company_id: int, payload: EstimateWrite) -> Estimate:
    items = validate_document(DocumentKind.ESTIMATE, payload)
    with atomic(
        db,
        "create estimate",
        conflict_message=f"Estimate number '{payload.estimate_number}' already exists.",
    ):
        estimate = create_document(
            db, company_id, DocumentKind.ESTIMATE, _header_from(payload), items
        )
    logger.info("Created estimate %s (id=%s)", estimate.estimate_number, estimate.id)
    return estimate


def update_estimate(
    db: Session, company_id: int, estimate_id: int, payload: EstimateWrite
) -> Estimate:
    estimate = get_document(db, DocumentKind.ESTIMATE, company_id, estimate_id)
    if _is_converted(estimate):
        raise ConflictError("A converted estimate can no longer be edited.")
    items = validate_document(DocumentKind.ESTIMATE, payload)
    with atomic(
        db,
        "update estimate",
        conflict_message=f"Estimate number '{payload.estimate_number}' already exists.",
    ):
        update_document(
            db, company_id, DocumentKind.ESTIMATE, estimate, _header_from(payload), items
        )
    return estimate


def delete_estimate(db: Session, company_id: int, estimate_id: int) -> None:
    estimate = get_document(db, DocumentKind.ESTIMATE, company_id, estimate_id)
    with atomic(db, "delete estimate"):
        if estimate.invoice_id is not None:
            invoice = db.get(Invoice, estimate.invoice_id)
            if invoice is not None:
                invoice.estimate_id = None
        delete_document(db, DocumentKind.ESTIMATE, estimate)
    logger.info("Deleted estimate id=%s", estimate_id)


def list_estimates(
    db: Session, company_id: int, customer_id: int | None = None
) -> list[Estimate]:
    filters = [Estimate.is_active.is_(True)]
    if customer_id is not None:
        filters.append(Estimate.customer_id == customer_id)
    return list_documents(db, DocumentKind.ESTIMATE, company_id, *filters)


def get_estimate(db: Session, company_id: int, estimate_id: int):
    estimate = get_document(db, DocumentKind.ESTIMATE, company_id, estimate_id)
    return estimate, get_items(db, DocumentKind.ESTIMATE, estimate.id)


def convert_estimate(db: Session, company_id: int, estimate_id: int) -> Invoice:
    """Create a draft invoice from an estimate and mark the estimate converted.

    The invoice carries the estimate's customer, discount, notes and shipping
    details; its due date is the estimate's expiry date. Lines are copied and
    re-priced under the invoice convention, so line totals exclude tax while
    the document totals match the estimate's.
    """
    with atomic(db, "convert estimate"):
        estimate = get_document(db, DocumentKind.ESTIMATE, company_id, estimate_id)
        if _is_converted(estimate):
            raise ConflictError("Estimate has already been converted to an invoice.")

        rows = []
        for item in get_items(db, DocumentKind.ESTIMATE, estimate.id):
            amounts = compute_line(
                item.quantity, item.unit_price, item.tax_rate, DocumentKind.INVOICE
            )
            rows.append(
                {
                    "position": item.position,
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "description": item.description,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "actual_unit_price": amounts.actual_unit_price,
                    "tax_rate": item.tax_rate,
                    "tax_amount": amounts.tax_amount,
                    "total_price": amounts.total_price,
                }
            )

        invoice = Invoice(
            company_id=company_id,
            invoice_number=next_document_number(
                db, company_id, DocumentKind.INVOICE, settings.invoice_number_prefix
            ),
            estimate_id=estimate.id,
            invoice_date=today(),
            due_date=estimate.expiry_date,
            status=InvoiceStatusEnum.DRAFT.value,
            paid_amount=money(0),
            **{field: getattr(estimate, field) for field in CARRIED_FIELDS},
        )
        apply_totals(invoice, [SimpleNamespace(**row) for row in rows])
        db.add(invoice)
        db.flush()

        db.add_all(InvoiceItem(invoice_id=invoice.id, **row) for row in rows)
        estimate.status = EstimateStatusEnum.CONVERTED.value
        estimate.invoice_id = invoice.id

    logger.info(
        "Converted estimate id=%s into invoice %s (id=%s)",
        estimate_id,
        invoice.invoice_number,
        invoice.id,
    )
    return invoice
