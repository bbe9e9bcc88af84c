"""Line and document arithmetic shared by every financial document.

All amounts are ``Decimal`` and money is rounded half-up to two places.
Nothing here touches the database.
"""
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from ..config import settings

HUNDRED = Decimal("100")
ZERO = Decimal("0.00")

# Scales of the stored line inputs; see models/line_item.py.
QUANTITY_STEP = Decimal("0.001")
PRICE_STEP = Decimal("0.0001")
RATE_STEP = Decimal("0.0001")


class DocumentKind(str, Enum):
    ESTIMATE = "estimate"
    INVOICE = "invoice"
    BILL = "bill"
    EXPENSE = "expense"


class DiscountType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


@dataclass(frozen=True)
class VariantRules:
    line_tax: bool
    tax_in_line_total: bool
    effective_price: bool


def rules_for(kind: DocumentKind) -> VariantRules:
    if kind == DocumentKind.INVOICE:
        return VariantRules(line_tax=True, tax_in_line_total=False, effective_price=True)
    if kind == DocumentKind.ESTIMATE:
        # Estimate lines fold tax into total_price while invoice lines do not.
        return VariantRules(
            line_tax=True,
            tax_in_line_total=settings.estimate_line_tax_inclusive,
            effective_price=False,
        )
    return VariantRules(line_tax=False, tax_in_line_total=False, effective_price=False)


@dataclass(frozen=True)
class LineAmounts:
    tax_amount: Decimal
    total_price: Decimal
    actual_unit_price: Decimal


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: Decimal
    total_tax: Decimal
    discount_amount: Decimal
    total: Decimal


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def money(value) -> Decimal:
    return to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def line_inputs(quantity, unit_price, tax_rate) -> tuple[Decimal, Decimal, Decimal]:
    """Round line inputs to the scale they are stored at.

    Amounts computed from the rounded inputs are the ones a later recompute of
    the stored line (on conversion, say) reproduces.
    """
    return (
        to_decimal(quantity).quantize(QUANTITY_STEP, rounding=ROUND_HALF_UP),
        to_decimal(unit_price).quantize(PRICE_STEP, rounding=ROUND_HALF_UP),
        to_decimal(tax_rate).quantize(RATE_STEP, rounding=ROUND_HALF_UP),
    )


def compute_line(quantity, unit_price, tax_rate, kind: DocumentKind) -> LineAmounts:
    quantity = to_decimal(quantity)
    unit_price = to_decimal(unit_price)
    rules = rules_for(kind)
    rate = to_decimal(tax_rate) if rules.line_tax else Decimal("0")

    subtotal = quantity * unit_price
    tax_amount = money(subtotal * rate / HUNDRED)
    if rules.tax_in_line_total:
        total_price = money(subtotal + tax_amount)
    else:
        total_price = money(subtotal)

    if rules.effective_price:
        actual_unit_price = money(unit_price * (HUNDRED - rate) / HUNDRED)
    else:
        actual_unit_price = money(unit_price)

    return LineAmounts(
        tax_amount=tax_amount,
        total_price=total_price,
        actual_unit_price=actual_unit_price,
    )


def discount_for(subtotal: Decimal, discount_type, discount_value) -> Decimal:
    value = to_decimal(discount_value)
    if DiscountType(discount_type) == DiscountType.PERCENTAGE:
        return money(subtotal * value / HUNDRED)
    return money(value)


def compute_totals(items: Iterable, discount_type, discount_value) -> DocumentTotals:
    """Roll line items up into document totals.

    ``items`` may be ORM rows or any objects exposing ``quantity``,
    ``unit_price`` and ``tax_amount``.
    """
    items = list(items)
    subtotal = money(
        sum(
            (to_decimal(item.quantity) * to_decimal(item.unit_price) for item in items),
            Decimal("0"),
        )
    )
    total_tax = money(
        sum((to_decimal(item.tax_amount) for item in items), Decimal("0"))
    )
    discount_amount = discount_for(subtotal, discount_type, discount_value)
    total = money(subtotal - discount_amount + total_tax)
    return DocumentTotals(
        subtotal=subtotal,
        total_tax=total_tax,
        discount_amount=discount_amount,
        total=total,
    )
