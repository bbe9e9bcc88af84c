import logging

from sqlalchemy.orm import Session

from ..db import atomic
from ..models import Expense, PaymentAccount, Vendor
from ..schemas import ExpenseDetail, ExpenseWrite, LineItemRead
from .calculations import DiscountType, DocumentKind, money
from .documents import create_document, ensure_owned, get_items, list_documents
from .lookups import normalize_name
from .validation import validate_document

logger = logging.getLogger(__name__)


def create_expense(db: Session, company_id: int, payload: ExpenseWrite) -> Expense:
    items = validate_document(DocumentKind.EXPENSE, payload)
    header = {
        "expense_number": payload.expense_number,
        "category_id": payload.category_id,
        "payment_account_id": payload.payment_account_id,
        "vendor_id": payload.vendor_id,
        "payee": normalize_name(payload.payee) or None,
        "payment_date": payload.payment_date,
        "payment_method": normalize_name(payload.payment_method) or None,
        "discount_type": DiscountType(payload.discount_type).value,
        "discount_value": money(payload.discount_value),
        "notes": payload.notes,
    }
    with atomic(
        db,
        "create expense",
        conflict_message=f"Expense number '{payload.expense_number}' already exists.",
    ):
        if payload.payment_account_id is not None:
            ensure_owned(
                db, PaymentAccount, payload.payment_account_id, company_id, "Payment account"
            )
        if payload.vendor_id is not None:
            ensure_owned(db, Vendor, payload.vendor_id, company_id, "Vendor")
        expense = create_document(db, company_id, DocumentKind.EXPENSE, header, items)
    logger.info("Created expense %s (id=%s)", expense.expense_number, expense.id)
    return expense


def expense_detail(db: Session, expense: Expense) -> ExpenseDetail:
    detail = ExpenseDetail.model_validate(expense)
    detail.items = [
        LineItemRead.model_validate(item)
        for item in get_items(db, DocumentKind.EXPENSE, expense.id)
    ]
    return detail


def list_expenses(db: Session, company_id: int) -> list[ExpenseDetail]:
    """Every expense of a company, newest first, each with its lines."""
    return [
        expense_detail(db, expense)
        for expense in list_documents(db, DocumentKind.EXPENSE, company_id)
    ]
