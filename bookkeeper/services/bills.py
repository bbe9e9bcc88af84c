import logging

from sqlalchemy.orm import Session

from ..db import atomic
from ..models import Bill, BillStatusEnum, PaymentMethod
from ..schemas import BillDetail, BillWrite, LineItemRead
from .calculations import DiscountType, DocumentKind, money
from .documents import (
    create_document,
    get_document,
    get_items,
    list_documents,
    update_document,
)
from .lookups import normalize_name, resolve_payment_method
from .validation import validate_document

logger = logging.getLogger(__name__)


def _payment_method_id(db: Session, company_id: int, name: str | None) -> int | None:
    # Payment method is optional on a bill, but a name that is given must exist.
    if not normalize_name(name):
        return None
    return resolve_payment_method(db, company_id, name=name).id


def _header_from(db: Session, company_id: int, payload: BillWrite) -> dict:
    return {
        "bill_number": payload.bill_number,
        "vendor_id": payload.vendor_id,
        "order_id": payload.order_id,
        "bill_date": payload.bill_date,
        "due_date": payload.due_date,
        "payment_method_id": _payment_method_id(db, company_id, payload.payment_method),
        "discount_type": DiscountType(payload.discount_type).value,
        "discount_value": money(payload.discount_value),
        "notes": payload.notes,
    }


def create_bill(db: Session, company_id: int, payload: BillWrite) -> Bill:
    items = validate_document(DocumentKind.BILL, payload)
    header = _header_from(db, company_id, payload)
    header["status"] = BillStatusEnum.OPEN.value
    with atomic(
        db,
        "create bill",
        conflict_message=f"Bill number '{payload.bill_number}' already exists.",
    ):
        bill = create_document(db, company_id, DocumentKind.BILL, header, items)
    logger.info("Created bill %s (id=%s)", bill.bill_number, bill.id)
    return bill


def update_bill(db: Session, company_id: int, bill_id: int, payload: BillWrite) -> Bill:
    bill = get_document(db, DocumentKind.BILL, company_id, bill_id)
    items = validate_document(DocumentKind.BILL, payload)
    header = _header_from(db, company_id, payload)
    with atomic(
        db,
        "update bill",
        conflict_message=f"Bill number '{payload.bill_number}' already exists.",
    ):
        update_document(db, company_id, DocumentKind.BILL, bill, header, items)
    return bill


def bill_detail(db: Session, bill: Bill) -> BillDetail:
    detail = BillDetail.model_validate(bill)
    if bill.payment_method_id is not None:
        method = db.get(PaymentMethod, bill.payment_method_id)
        detail.payment_method = method.name if method else None
    detail.items = [
        LineItemRead.model_validate(item)
        for item in get_items(db, DocumentKind.BILL, bill.id)
    ]
    return detail


def get_bill(db: Session, company_id: int, bill_id: int) -> BillDetail:
    return bill_detail(db, get_document(db, DocumentKind.BILL, company_id, bill_id))


def list_bills(db: Session, company_id: int) -> list[Bill]:
    return list_documents(db, DocumentKind.BILL, company_id)
