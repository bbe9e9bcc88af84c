"""Persistence for the four financial document variants.

Every variant is an ``<header>`` table plus an ``<header>_items`` table. The
functions here add and flush rows but never commit; callers wrap a whole
submission in :func:`bookkeeper.db.atomic` so header and items land together.
"""
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import (
    Bill,
    BillItem,
    Company,
    Customer,
    Estimate,
    EstimateItem,
    Expense,
    ExpenseCategory,
    ExpenseItem,
    Invoice,
    InvoiceItem,
    Product,
    Vendor,
)
from ..schemas import LineItemIn
from .calculations import (
    DocumentKind,
    DocumentTotals,
    compute_line,
    compute_totals,
    line_inputs,
    money,
    rules_for,
    to_decimal,
)


@dataclass(frozen=True)
class DocumentVariant:
    kind: DocumentKind
    label: str
    header: type
    item: type
    item_fk: str
    number_attr: str
    party_attr: str
    party_model: type
    party_label: str


VARIANTS: dict[DocumentKind, DocumentVariant] = {
    DocumentKind.ESTIMATE: DocumentVariant(
        kind=DocumentKind.ESTIMATE,
        label="Estimate",
        header=Estimate,
        item=EstimateItem,
        item_fk="estimate_id",
        number_attr="estimate_number",
        party_attr="customer_id",
        party_model=Customer,
        party_label="Customer",
    ),
    DocumentKind.INVOICE: DocumentVariant(
        kind=DocumentKind.INVOICE,
        label="Invoice",
        header=Invoice,
        item=InvoiceItem,
        item_fk="invoice_id",
        number_attr="invoice_number",
        party_attr="customer_id",
        party_model=Customer,
        party_label="Customer",
    ),
    DocumentKind.BILL: DocumentVariant(
        kind=DocumentKind.BILL,
        label="Bill",
        header=Bill,
        item=BillItem,
        item_fk="bill_id",
        number_attr="bill_number",
        party_attr="vendor_id",
        party_model=Vendor,
        party_label="Vendor",
    ),
    DocumentKind.EXPENSE: DocumentVariant(
        kind=DocumentKind.EXPENSE,
        label="Expense",
        header=Expense,
        item=ExpenseItem,
        item_fk="expense_id",
        number_attr="expense_number",
        party_attr="category_id",
        party_model=ExpenseCategory,
        party_label="Category",
    ),
}


def variant_for(kind: DocumentKind) -> DocumentVariant:
    return VARIANTS[kind]


def ensure_company(db: Session, company_id: int) -> Company:
    company = db.get(Company, company_id)
    if not company:
        raise NotFoundError(f"Company {company_id} not found.", field="company_id")
    return company


def ensure_owned(db: Session, model, record_id: int, company_id: int, label: str):
    record = db.get(model, record_id)
    if not record or record.company_id != company_id:
        raise NotFoundError(f"{label} {record_id} not found.")
    return record


def build_item_rows(
    db: Session, company_id: int, kind: DocumentKind, items: list[LineItemIn]
) -> list[dict[str, Any]]:
    """Turn validated input lines into item column values with derived amounts."""
    product_ids = sorted({item.product_id for item in items if item.product_id})
    products = {
        product.id: product
        for product in db.execute(
            select(Product).where(
                Product.id.in_(product_ids), Product.company_id == company_id
            )
        ).scalars()
    }
    line_tax = rules_for(kind).line_tax

    rows: list[dict[str, Any]] = []
    for position, item in enumerate(items):
        product = products.get(item.product_id)
        if product is None:
            raise ValidationError(
                f"Product {item.product_id} not found.",
                field=f"items[{position}].product_id",
            )
        quantity, unit_price, tax_rate = line_inputs(
            item.quantity, item.unit_price, item.tax_rate if line_tax else 0
        )
        amounts = compute_line(quantity, unit_price, tax_rate, kind)
        rows.append(
            {
                "position": position,
                "product_id": product.id,
                "product_name": item.product_name or product.name,
                "description": (item.description or item.product_name or product.name).strip(),
                "quantity": quantity,
                "unit_price": unit_price,
                "actual_unit_price": amounts.actual_unit_price,
                "tax_rate": tax_rate,
                "tax_amount": amounts.tax_amount,
                "total_price": amounts.total_price,
            }
        )
    return rows


def apply_totals(document, item_rows) -> DocumentTotals:
    """Write the aggregated totals onto a document header.

    Invoices also get their balance due refreshed against what is already paid.
    """
    totals = compute_totals(item_rows, document.discount_type, document.discount_value)
    document.subtotal = totals.subtotal
    document.tax_amount = totals.total_tax
    document.discount_amount = totals.discount_amount
    document.total_amount = totals.total
    if hasattr(document, "balance_due"):
        document.balance_due = money(totals.total - to_decimal(document.paid_amount))
    return totals


def number_taken(
    db: Session,
    kind: DocumentKind,
    company_id: int,
    number: str,
    exclude_id: int | None = None,
) -> bool:
    variant = variant_for(kind)
    number_column = getattr(variant.header, variant.number_attr)
    query = select(func.count()).select_from(variant.header).where(
        variant.header.company_id == company_id,
        number_column == number,
    )
    if exclude_id is not None:
        query = query.where(variant.header.id != exclude_id)
    return db.execute(query).scalar_one() > 0


def check_number_free(
    db: Session,
    kind: DocumentKind,
    company_id: int,
    number: str,
    exclude_id: int | None = None,
) -> None:
    if number_taken(db, kind, company_id, number, exclude_id):
        label = variant_for(kind).label
        raise ConflictError(
            f"{label} number '{number}' already exists.",
            field=variant_for(kind).number_attr,
        )


def create_document(
    db: Session,
    company_id: int,
    kind: DocumentKind,
    header: dict[str, Any],
    items: list[LineItemIn],
):
    variant = variant_for(kind)
    ensure_company(db, company_id)
    ensure_owned(
        db,
        variant.party_model,
        header[variant.party_attr],
        company_id,
        variant.party_label,
    )
    number = header[variant.number_attr].strip()
    check_number_free(db, kind, company_id, number)

    document = variant.header(**{**header, variant.number_attr: number}, company_id=company_id)
    item_rows = build_item_rows(db, company_id, kind, items)
    apply_totals(document, [SimpleNamespace(**row) for row in item_rows])
    db.add(document)
    db.flush()
    _insert_items(db, variant, document.id, item_rows)
    return document


def update_document(
    db: Session,
    company_id: int,
    kind: DocumentKind,
    document,
    header: dict[str, Any],
    items: list[LineItemIn],
):
    variant = variant_for(kind)
    ensure_owned(
        db,
        variant.party_model,
        header[variant.party_attr],
        company_id,
        variant.party_label,
    )
    number = header[variant.number_attr].strip()
    check_number_free(db, kind, company_id, number, exclude_id=document.id)

    for key, value in header.items():
        setattr(document, key, value)
    setattr(document, variant.number_attr, number)
    replace_items(db, company_id, kind, document, items)
    return document


def replace_items(
    db: Session, company_id: int, kind: DocumentKind, document, items: list[LineItemIn]
) -> list:
    """Delete every existing line and insert the new set, then refresh totals."""
    variant = variant_for(kind)
    item_rows = build_item_rows(db, company_id, kind, items)
    db.execute(
        delete(variant.item).where(getattr(variant.item, variant.item_fk) == document.id)
    )
    created = _insert_items(db, variant, document.id, item_rows)
    apply_totals(document, created)
    db.flush()
    return created


def get_document(db: Session, kind: DocumentKind, company_id: int, document_id: int):
    variant = variant_for(kind)
    document = db.get(variant.header, document_id)
    if not document or document.company_id != company_id:
        raise NotFoundError(f"{variant.label} not found.")
    return document


def get_items(db: Session, kind: DocumentKind, document_id: int) -> list:
    variant = variant_for(kind)
    fk = getattr(variant.item, variant.item_fk)
    return list(
        db.execute(
            select(variant.item)
            .where(fk == document_id)
            .order_by(variant.item.position, variant.item.id)
        ).scalars()
    )


def list_documents(db: Session, kind: DocumentKind, company_id: int, *filters) -> list:
    variant = variant_for(kind)
    query = (
        select(variant.header)
        .where(variant.header.company_id == company_id, *filters)
        .order_by(variant.header.created_at.desc(), variant.header.id.desc())
    )
    return list(db.execute(query).scalars())


def delete_document(db: Session, kind: DocumentKind, document) -> None:
    variant = variant_for(kind)
    db.execute(
        delete(variant.item).where(getattr(variant.item, variant.item_fk) == document.id)
    )
    db.delete(document)
    db.flush()


def _insert_items(db: Session, variant: DocumentVariant, document_id: int, item_rows):
    created = []
    for row in item_rows:
        item = variant.item(**row, **{variant.item_fk: document_id})
        db.add(item)
        created.append(item)
    db.flush()
    return created

