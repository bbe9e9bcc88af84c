
from ..errors import ValidationError
from ..models import EstimateStatusEnum
from ..schemas import LineItemIn
from .calculations import HUNDRED, DiscountType, DocumentKind, line_inputs

REQUIRED_FIELDS: dict[DocumentKind, list[tuple[str, str]]] = {
    DocumentKind.ESTIMATE: [
        ("estimate_number", "Estimate number"),
        ("customer_id", "Customer"),
        ("estimate_date", "Estimate date"),
    ],
    DocumentKind.INVOICE: [
        ("invoice_number", "Invoice number"),
        ("customer_id", "Customer"),
        ("invoice_date", "Invoice date"),
    ],
    DocumentKind.BILL: [
        ("bill_number", "Bill number"),
        ("vendor_id", "Vendor"),
        ("bill_date", "Bill date"),
    ],
    DocumentKind.EXPENSE: [
        ("expense_number", "Expense number"),
        ("category_id", "Category"),
        ("payment_date", "Payment date"),
    ],
}


def validate_document(kind: DocumentKind, payload) -> list[LineItemIn]:
    """Reject an incomplete submission and return the line items worth keeping."""
    for field, label in REQUIRED_FIELDS[kind]:
        value = getattr(payload, field, None)
        if isinstance(value, str):
            value = value.strip()
        if not value:
            raise ValidationError(f"{label} is required.", field=field)

    validate_discount(payload.discount_type, payload.discount_value)

    if kind == DocumentKind.INVOICE and payload.due_date:
        if payload.due_date < payload.invoice_date:
            raise ValidationError(
                "Due date cannot be before the invoice date.", field="due_date"
            )
    if kind == DocumentKind.ESTIMATE and payload.status:
        allowed = {status.value for status in EstimateStatusEnum}
        allowed.discard(EstimateStatusEnum.CONVERTED.value)
        if payload.status not in allowed:
            raise ValidationError(f"Unknown estimate status '{payload.status}'.", field="status")

    return clean_items(payload.items)


def validate_discount(discount_type, discount_value) -> None:
    try:
        resolved = DiscountType(discount_type)
    except ValueError:
        raise ValidationError(
            "Discount type must be 'fixed' or 'percentage'.", field="discount_type"
        ) from None
    if discount_value is None or discount_value < 0:
        raise ValidationError("Discount cannot be negative.", field="discount_value")
    if resolved == DiscountType.PERCENTAGE and discount_value > HUNDRED:
        raise ValidationError(
            "Percentage discount cannot exceed 100.", field="discount_value"
        )


def clean_items(items: list[LineItemIn]) -> list[LineItemIn]:
    # Rows without a product are the blank rows the entry form seeds.
    kept = [item for item in items if item.product_id]
    if not kept:
        raise ValidationError("At least one valid item is required.", field="items")

    for index, item in enumerate(kept):
        prefix = f"items[{index}]"
        description = (item.description or item.product_name or "").strip()
        if not description:
            raise ValidationError(
                "Each item must have a description.", field=f"{prefix}.description"
            )
        # A quantity that rounds to zero at the stored scale is no quantity.
        if item.quantity is None or line_inputs(item.quantity, 0, 0)[0] <= 0:
            raise ValidationError(
                "Each item must have a quantity greater than zero.",
                field=f"{prefix}.quantity",
            )
        if item.unit_price is None or item.unit_price < 0:
            raise ValidationError(
                "Unit price cannot be negative.", field=f"{prefix}.unit_price"
            )
        if item.tax_rate is None or item.tax_rate < 0 or item.tax_rate > HUNDRED:
            raise ValidationError(
                "Tax rate must be between 0 and 100.", field=f"{prefix}.tax_rate"
            )
    return kept


