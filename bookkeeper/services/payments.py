"""Customer payment recording.

One payment is spread over one or more of a customer's open invoices. The
payment row, its allocations and every invoice's paid amount, balance and
status are written in a single transaction: either all of it lands or none.
"""
import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import atomic
from ..errors import NotFoundError, ValidationError
from ..models import (
    Customer,
    Invoice,
    InvoiceStatusEnum,
    Payment,
    PaymentAllocation,
    PaymentMethod,
)
from ..schemas import AllocationRead, PaymentCreate, PaymentRead
from .calculations import money
from .documents import ensure_company, ensure_owned
from .invoices import status_after_payment
from .lookups import resolve_payment_method

logger = logging.getLogger(__name__)

AMOUNT_TOLERANCE = Decimal("0.01")


def _selected_invoice_ids(payload: PaymentCreate) -> list[int]:
    # Keep the caller's order; an id may appear in both lists.
    return list(dict.fromkeys([*payload.invoice_ids, *payload.allocations.keys()]))


def _allocation_read(invoice: Invoice, amount: Decimal) -> AllocationRead:
    return AllocationRead(
        invoice_id=invoice.id,
        invoice_number=invoice.invoice_number,
        amount_applied=amount,
        paid_amount=invoice.paid_amount,
        balance_due=invoice.balance_due,
        status=invoice.status,
    )


def allocate_payment(
    db: Session, company_id: int, customer_id: int, payload: PaymentCreate
) -> PaymentRead:
    selected = _selected_invoice_ids(payload)
    if not selected:
        raise ValidationError(
            "Select at least one invoice to apply the payment to.", field="invoice_ids"
        )
    if payload.payment_date is None:
        raise ValidationError("Payment date is required.", field="payment_date")

    ensure_company(db, company_id)
    ensure_owned(db, Customer, customer_id, company_id, "Customer")
    method = resolve_payment_method(
        db, company_id, name=payload.payment_method, method_id=payload.payment_method_id
    )

    with atomic(db, "record payment"):
        invoices = {
            invoice.id: invoice
            for invoice in db.execute(
                select(Invoice)
                .where(
                    Invoice.id.in_(selected),
                    Invoice.company_id == company_id,
                    Invoice.customer_id == customer_id,
                )
                .with_for_update()
            ).scalars()
        }

        planned: list[tuple[Invoice, Decimal]] = []
        for invoice_id in selected:
            invoice = invoices.get(invoice_id)
            if invoice is None:
                raise NotFoundError(
                    f"Invoice {invoice_id} not found for this customer.",
                    field="invoice_ids",
                )
            if invoice.status == InvoiceStatusEnum.CANCELLED.value:
                raise ValidationError(
                    f"Invoice {invoice.invoice_number} is cancelled.", field="invoice_ids"
                )
            balance = money(invoice.balance_due)
            if balance <= 0:
                raise ValidationError(
                    f"Invoice {invoice.invoice_number} has no balance due.",
                    field="invoice_ids",
                )
            if invoice_id in payload.allocations:
                amount = money(payload.allocations[invoice_id])
            else:
                amount = balance
            if amount <= 0:
                raise ValidationError(
                    f"Payment for invoice {invoice.invoice_number} must be greater than zero.",
                    field=f"allocations.{invoice_id}",
                )
            if amount > balance:
                raise ValidationError(
                    f"Payment of {amount} exceeds the balance due of {balance} "
                    f"on invoice {invoice.invoice_number}.",
                    field=f"allocations.{invoice_id}",
                )
            planned.append((invoice, amount))

        total = money(sum((amount for _, amount in planned), Decimal("0")))
        if (
            payload.payment_amount is not None
            and abs(money(payload.payment_amount) - total) > AMOUNT_TOLERANCE
        ):
            raise ValidationError(
                "Sum of invoice payments does not match total payment amount.",
                field="payment_amount",
            )

        payment = Payment(
            company_id=company_id,
            customer_id=customer_id,
            payment_date=payload.payment_date,
            payment_method_id=method.id,
            deposit_to=payload.deposit_to,
            payment_amount=total,
            notes=payload.notes,
        )
        db.add(payment)
        db.flush()

        allocations = []
        for invoice, amount in planned:
            db.add(
                PaymentAllocation(
                    payment_id=payment.id, invoice_id=invoice.id, amount_applied=amount
                )
            )
            invoice.paid_amount = money(Decimal(invoice.paid_amount) + amount)
            invoice.balance_due = money(Decimal(invoice.total_amount) - invoice.paid_amount)
            invoice.status = status_after_payment(invoice)
            allocations.append(_allocation_read(invoice, amount))

    logger.info(
        "Recorded payment id=%s of %s for customer %s across %s invoice(s)",
        payment.id,
        total,
        customer_id,
        len(allocations),
    )
    return PaymentRead(
        id=payment.id,
        customer_id=customer_id,
        payment_date=payment.payment_date,
        payment_method=method.name,
        deposit_to=payment.deposit_to,
        notes=payment.notes,
        payment_amount=total,
        allocations=allocations,
    )


def list_payments(db: Session, company_id: int, customer_id: int) -> list[PaymentRead]:
    ensure_owned(db, Customer, customer_id, company_id, "Customer")
    payments = list(
        db.execute(
            select(Payment)
            .where(Payment.company_id == company_id, Payment.customer_id == customer_id)
            .order_by(Payment.payment_date.desc(), Payment.id.desc())
        ).scalars()
    )
    if not payments:
        return []

    payment_ids = {payment.id for payment in payments}
    invoice_ids = select(PaymentAllocation.invoice_id).where(
        PaymentAllocation.payment_id.in_(sorted(payment_ids))
    )
    rows = db.execute(
        select(PaymentAllocation, Invoice)
        .join(Invoice, Invoice.id == PaymentAllocation.invoice_id)
        .where(PaymentAllocation.invoice_id.in_(invoice_ids))
        .order_by(PaymentAllocation.id)
    ).all()

    # Each row shows the invoice as it stood right after that payment was
    # recorded, replaying allocations in the order they were written.
    paid_so_far: dict[int, Decimal] = {}
    by_payment: dict[int, list[AllocationRead]] = {}
    for allocation, invoice in rows:
        paid = money(paid_so_far.get(invoice.id, Decimal("0")) + allocation.amount_applied)
        paid_so_far[invoice.id] = paid
        if allocation.payment_id not in payment_ids:
            continue
        balance = money(Decimal(invoice.total_amount) - paid)
        by_payment.setdefault(allocation.payment_id, []).append(
            AllocationRead(
                invoice_id=invoice.id,
                invoice_number=invoice.invoice_number,
                amount_applied=allocation.amount_applied,
                paid_amount=paid,
                balance_due=balance,
                status=(
                    InvoiceStatusEnum.PAID.value
                    if balance <= 0
                    else InvoiceStatusEnum.PARTIALLY_PAID.value
                ),
            )
        )

    method_names = dict(
        db.execute(
            select(PaymentMethod.id, PaymentMethod.name).where(
                PaymentMethod.id.in_(sorted({payment.payment_method_id for payment in payments}))
            )
        ).all()
    )
    return [
        PaymentRead(
            id=payment.id,
            customer_id=payment.customer_id,
            payment_date=payment.payment_date,
            payment_method=method_names.get(payment.payment_method_id, ""),
            deposit_to=payment.deposit_to,
            notes=payment.notes,
            payment_amount=payment.payment_amount,
            allocations=by_payment.get(payment.id, []),
        )
        for payment in payments
    ]
