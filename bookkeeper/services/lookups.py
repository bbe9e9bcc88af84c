"""Create-and-list for the small per-company name lists.

Payment methods, expense categories, payment accounts and payees are all a
name plus an active flag, so one configuration table drives them all.
"""
import logging
import re
from dataclasses import dataclass

from sqlalchemy import func, select, true
from sqlalchemy.orm import Session

from ..db import atomic
from ..errors import ConflictError, NotFoundError, ValidationError
from ..models import ExpenseCategory, Payee, PaymentAccount, PaymentMethod
from .documents import ensure_company

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 120


@dataclass(frozen=True)
class NamedEntity:
    slug: str
    model: type
    label: str


NAMED_ENTITIES: dict[str, NamedEntity] = {
    entity.slug: entity
    for entity in (
        NamedEntity("paymentMethods", PaymentMethod, "Payment method"),
        NamedEntity("expenseCategories", ExpenseCategory, "Category"),
        NamedEntity("paymentAccounts", PaymentAccount, "Payment account"),
        NamedEntity("payees", Payee, "Payee"),
    )
}


def entity_for(slug: str) -> NamedEntity:
    entity = NAMED_ENTITIES.get(slug)
    if entity is None:
        raise NotFoundError(f"Unknown list '{slug}'.")
    return entity


def normalize_name(raw: str | None) -> str:
    return re.sub(r"\s+", " ", (raw or "").strip())


def find_by_name(db: Session, model, company_id: int, name: str):
    return db.execute(
        select(model).where(
            model.company_id == company_id,
            func.lower(model.name) == func.lower(normalize_name(name)),
        )
    ).scalar_one_or_none()


def create_named(db: Session, entity: NamedEntity, company_id: int, raw_name: str | None):
    name = normalize_name(raw_name)
    if not name:
        raise ValidationError(f"{entity.label} name is required.", field="name")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"{entity.label} name must be {NAME_MAX_LENGTH} characters or fewer.",
            field="name",
        )
    ensure_company(db, company_id)
    conflict = f"{entity.label} '{name}' already exists."
    if find_by_name(db, entity.model, company_id, name):
        raise ConflictError(conflict, field="name")

    with atomic(db, f"create {entity.label.lower()}", conflict_message=conflict):
        record = entity.model(company_id=company_id, name=name, is_active=True)
        db.add(record)
    logger.info("Created %s '%s' for company %s", entity.label.lower(), name, company_id)
    return record


def list_named(db: Session, entity: NamedEntity, company_id: int) -> list:
    model = entity.model
    return list(
        db.execute(
            select(model)
            .where(model.company_id == company_id, model.is_active == true())
            .order_by(model.name.asc())
        ).scalars()
    )


def resolve_payment_method(
    db: Session,
    company_id: int,
    name: str | None = None,
    method_id: int | None = None,
) -> PaymentMethod:
    if method_id:
        method = db.get(PaymentMethod, method_id)
        if not method or method.company_id != company_id:
            raise ValidationError(
                f"Payment method {method_id} not found.", field="payment_method_id"
            )
        return method
    if not normalize_name(name):
        raise ValidationError("Payment method is required.", field="payment_method")
    method = find_by_name(db, PaymentMethod, company_id, name)
    if method is None:
        raise ValidationError(
            f"Unknown payment method '{normalize_name(name)}'.", field="payment_method"
        )
    return method
