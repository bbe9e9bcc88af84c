from decimal import ROUND_HALF_UP, Decimal
from types import SimpleNamespace

import pytest

from bookkeeper.services.calculations import (
    DocumentKind,
    compute_line,
    compute_totals,
    discount_for,
)


def _line(quantity, unit_price, tax_rate, kind=DocumentKind.INVOICE):
    amounts = compute_line(quantity, unit_price, tax_rate, kind)
    return SimpleNamespace(
        quantity=Decimal(str(quantity)),
        unit_price=Decimal(str(unit_price)),
        tax_amount=amounts.tax_amount,
    )


@pytest.mark.parametrize(
    "quantity, unit_price, tax_rate",
    [
        ("2", "100", "10"),
        ("3", "19.99", "7.5"),
        ("0.5", "12.34", "20"),
        ("7", "0", "15"),
    ],
)
@pytest.mark.parametrize("kind", [DocumentKind.ESTIMATE, DocumentKind.INVOICE])
def test_line_tax_is_the_same_for_estimates_and_invoices(quantity, unit_price, tax_rate, kind):
    expected = (Decimal(quantity) * Decimal(unit_price) * Decimal(tax_rate) / 100).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )

    assert compute_line(quantity, unit_price, tax_rate, kind).tax_amount == expected


def test_tax_rounds_half_up():
    assert compute_line("1", "0.05", "10", DocumentKind.INVOICE).tax_amount == Decimal("0.01")


def test_invoice_line_keeps_tax_out_of_total():
    amounts = compute_line(2, 100, 10, DocumentKind.INVOICE)

    assert amounts.tax_amount == Decimal("20.00")
    assert amounts.total_price == Decimal("200.00")
    assert amounts.actual_unit_price == Decimal("90.00")


def test_estimate_line_folds_tax_into_total():
    amounts = compute_line(2, 100, 10, DocumentKind.ESTIMATE)

    assert amounts.tax_amount == Decimal("20.00")
    assert amounts.total_price == Decimal("220.00")
    assert amounts.actual_unit_price == Decimal("100.00")


def test_estimate_line_follows_invoice_convention_when_switched_off(monkeypatch):
    from bookkeeper.config import settings

    monkeypatch.setattr(settings, "estimate_line_tax_inclusive", False)

    assert compute_line(2, 100, 10, DocumentKind.ESTIMATE).total_price == Decimal("200.00")


@pytest.mark.parametrize("kind", [DocumentKind.BILL, DocumentKind.EXPENSE])
def test_bill_and_expense_lines_carry_no_tax(kind):
    amounts = compute_line(3, "12.50", 20, kind)

    assert amounts.tax_amount == Decimal("0.00")
    assert amounts.total_price == Decimal("37.50")
    assert amounts.actual_unit_price == Decimal("12.50")


def test_totals_for_single_taxed_line_with_fixed_discount():
    totals = compute_totals([_line(2, 100, 10, DocumentKind.ESTIMATE)], "fixed", 20)

    assert totals.subtotal == Decimal("200.00")
    assert totals.total_tax == Decimal("20.00")
    assert totals.discount_amount == Decimal("20.00")
    assert totals.total == Decimal("200.00")


def test_estimate_and_invoice_lines_roll_up_to_the_same_totals():
    estimate = compute_totals([_line(2, 100, 10, DocumentKind.ESTIMATE)], "fixed", 20)
    invoice = compute_totals([_line(2, 100, 10, DocumentKind.INVOICE)], "fixed", 20)

    assert estimate == invoice


def test_percentage_discount_applies_to_subtotal():
    totals = compute_totals(
        [_line(2, 100, 10), _line(1, "50", 0)], "percentage", 10
    )

    assert totals.subtotal == Decimal("250.00")
    assert totals.discount_amount == Decimal("25.00")
    assert totals.total_tax == Decimal("20.00")
    assert totals.total == Decimal("245.00")


@pytest.mark.parametrize(
    "lines, discount_type, discount_value",
    [
        ([("3", "19.99", "7.5"), ("1", "0.05", "10")], "fixed", "5"),
        ([("0.5", "12.34", "20")], "percentage", "12.5"),
        ([("4", "2.49", "8.25"), ("2", "10", "0")], "percentage", "0"),
    ],
)
def test_total_is_subtotal_minus_discount_plus_tax(lines, discount_type, discount_value):
    totals = compute_totals([_line(*line) for line in lines], discount_type, discount_value)

    assert abs(
        totals.total - (totals.subtotal - totals.discount_amount + totals.total_tax)
    ) <= Decimal("0.01")


def test_empty_document_totals_are_zero():
    totals = compute_totals([], "fixed", 0)

    assert totals.total == Decimal("0.00")


def test_discount_for_rejects_unknown_type():
    with pytest.raises(ValueError):
        discount_for(Decimal("100"), "bogus", 5)
