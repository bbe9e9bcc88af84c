from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from bookkeeper.models import Invoice
from bookkeeper.services.invoices import effective_status


def test_create_invoice_starts_as_unpaid_draft(make_invoice):
    invoice = make_invoice(unit_price=100, quantity=2, tax_rate=10)

    assert invoice["status"] == "draft"
    assert invoice["subtotal"] == 200
    assert invoice["tax_amount"] == 20
    assert invoice["total_amount"] == 220
    assert invoice["paid_amount"] == 0
    assert invoice["balance_due"] == 220
    assert invoice["items"][0]["total_price"] == 200


def test_due_date_before_invoice_date_is_rejected(client, books):
    response = client.post(
        f"/api/createInvoice/{books['company_id']}",
        json={
            "invoice_number": "INV-BAD",
            "customer_id": books["customer_id"],
            "invoice_date": "2026-03-01",
            "due_date": "2026-02-01",
            "items": [{"product_id": books["widget_id"], "description": "x", "quantity": 1}],
        },
    )

    assert response.status_code == 400
    assert response.json()["field"] == "due_date"


def test_duplicate_invoice_number_conflicts(client, books, make_invoice):
    make_invoice(invoice_number="INV-DUP")

    response = client.post(
        f"/api/createInvoice/{books['company_id']}",
        json={
            "invoice_number": "INV-DUP",
            "customer_id": books["customer_id"],
            "invoice_date": "2026-03-01",
            "items": [{"product_id": books["widget_id"], "description": "x", "quantity": 1}],
        },
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invoice number 'INV-DUP' already exists."


def test_update_recomputes_totals_and_balance(client, books, make_invoice):
    invoice = make_invoice(unit_price=500)
    client.post(
        f"/api/recordPayment/{books['company_id']}/{books['customer_id']}",
        json={
            "payment_date": "2026-03-10",
            "payment_method": "Cash",
            "allocations": {str(invoice["id"]): 100},
        },
    )

    response = client.put(
        f"/api/invoices/{books['company_id']}/{invoice['id']}",
        json={
            "invoice_number": invoice["invoice_number"],
            "customer_id": books["customer_id"],
            "invoice_date": "2026-03-01",
            "due_date": "2099-12-31",
            "items": [
                {
                    "product_id": books["gadget_id"],
                    "description": "Gadget",
                    "quantity": 10,
                    "unit_price": 25,
                }
            ],
        },
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["total_amount"] == 250
    assert body["paid_amount"] == 100
    assert body["balance_due"] == 150
    assert body["status"] == "partially_paid"
    assert [item["description"] for item in body["items"]] == ["Gadget"]


def test_update_below_paid_amount_is_rejected(client, books, make_invoice, db_session):
    invoice = make_invoice(unit_price=500)
    client.post(
        f"/api/recordPayment/{books['company_id']}/{books['customer_id']}",
        json={
            "payment_date": "2026-03-10",
            "payment_method": "Cash",
            "allocations": {str(invoice["id"]): 400},
        },
    )

    response = client.put(
        f"/api/invoices/{books['company_id']}/{invoice['id']}",
        json={
            "invoice_number": invoice["invoice_number"],
            "customer_id": books["customer_id"],
            "invoice_date": "2026-03-01",
            "items": [{"product_id": books["gadget_id"], "description": "x", "quantity": 1, "unit_price": 25}],
        },
    )

    assert response.status_code == 400
    stored = db_session.get(Invoice, invoice["id"])
    assert stored.total_amount == Decimal("500.00")


def test_paid_invoice_cannot_move_to_another_customer(client, books, make_invoice, db_session):
    invoice = make_invoice(unit_price=500)
    client.post(
        f"/api/recordPayment/{books['company_id']}/{books['customer_id']}",
        json={
            "payment_date": "2026-03-10",
            "payment_method": "Cash",
            "allocations": {str(invoice["id"]): 200},
        },
    )

    response = client.put(
        f"/api/invoices/{books['company_id']}/{invoice['id']}",
        json={
            "invoice_number": invoice["invoice_number"],
            "customer_id": books["other_customer_id"],
            "invoice_date": "2026-03-01",
            "due_date": "2099-12-31",
            "items": [{"product_id": books["widget_id"], "description": "Widget", "quantity": 1, "unit_price": 500}],
        },
    )

    assert response.status_code == 400
    assert response.json()["field"] == "customer_id"
    stored = db_session.get(Invoice, invoice["id"])
    assert stored.customer_id == books["customer_id"]
    assert stored.paid_amount == Decimal("200.00")


def test_unpaid_invoice_can_move_to_another_customer(client, books, make_invoice):
    invoice = make_invoice(unit_price=500)

    response = client.put(
        f"/api/invoices/{books['company_id']}/{invoice['id']}",
        json={
            "invoice_number": invoice["invoice_number"],
            "customer_id": books["other_customer_id"],
            "invoice_date": "2026-03-01",
            "due_date": "2099-12-31",
            "items": [{"product_id": books["widget_id"], "description": "Widget", "quantity": 1, "unit_price": 500}],
        },
    )

    assert response.status_code == 200, response.text
    assert response.json()["customer_id"] == books["other_customer_id"]


def test_overdue_is_derived_on_read(client, books, make_invoice, db_session):
    invoice = make_invoice(invoice_date="2000-01-01", due_date="2000-01-31")

    fetched = client.get(f"/api/invoices/{books['company_id']}/{invoice['id']}").json()
    listed = client.get(f"/api/invoices/{books['company_id']}").json()

    assert fetched["status"] == "overdue"
    assert listed[0]["status"] == "overdue"
    assert db_session.get(Invoice, invoice["id"]).status == "draft"


def test_effective_status_rules():
    base = dict(due_date=date(2026, 1, 31), balance_due=Decimal("10"))
    on = date(2026, 2, 1)

    assert effective_status(SimpleNamespace(status="sent", **base), on) == "overdue"
    assert effective_status(SimpleNamespace(status="sent", **base), date(2026, 1, 31)) == "sent"
    assert effective_status(SimpleNamespace(status="paid", **base), on) == "paid"
    assert effective_status(SimpleNamespace(status="cancelled", **base), on) == "cancelled"
    assert (
        effective_status(
            SimpleNamespace(status="sent", due_date=None, balance_due=Decimal("10")), on
        )
        == "sent"
    )


def test_delete_invoice_returns_estimate_to_pending(client, books):
    company_id = books["company_id"]
    estimate = client.post(
        f"/api/estimates/{company_id}",
        json={
            "estimate_number": "EST-9",
            "customer_id": books["customer_id"],
            "estimate_date": "2026-03-01",
            "items": [{"product_id": books["widget_id"], "description": "Widget", "quantity": 1, "unit_price": 50}],
        },
    ).json()
    converted = client.post(f"/api/estimates/{company_id}/{estimate['id']}/convert").json()

    response = client.delete(f"/api/invoices/{company_id}/{converted['invoice_id']}")

    assert response.status_code == 200
    restored = client.get(f"/api/estimates/{company_id}/{estimate['id']}").json()
    assert restored["status"] == "pending"
    assert restored["invoice_id"] is None
    again = client.post(f"/api/estimates/{company_id}/{estimate['id']}/convert")
    assert again.status_code == 200


def test_invoice_with_payments_cannot_be_deleted(client, books, make_invoice):
    invoice = make_invoice()
    client.post(
        f"/api/recordPayment/{books['company_id']}/{books['customer_id']}",
        json={"payment_date": "2026-03-10", "payment_method": "Cash", "invoice_ids": [invoice["id"]]},
    )

    response = client.delete(f"/api/invoices/{books['company_id']}/{invoice['id']}")

    assert response.status_code == 400
    assert client.get(f"/api/invoices/{books['company_id']}/{invoice['id']}").status_code == 200


def test_send_then_cancel(client, books, make_invoice):
    invoice = make_invoice()
    base = f"/api/invoices/{books['company_id']}/{invoice['id']}"

    sent = client.post(f"{base}/send")
    resent = client.post(f"{base}/send")
    cancelled = client.post(f"{base}/cancel")

    assert sent.json()["status"] == "sent"
    assert resent.status_code == 400
    assert cancelled.json()["status"] == "cancelled"


def test_invoices_per_customer(client, books, make_invoice):
    mine = make_invoice()
    make_invoice(customer_id=books["other_customer_id"])

    response = client.get(
        f"/api/invoices/{books['company_id']}/customer/{books['customer_id']}"
    )

    assert [row["id"] for row in response.json()] == [mine["id"]]


def test_invoice_from_another_company_is_not_found(client, books, make_invoice):
    invoice = make_invoice()
    other = client.post("/api/companies", json={"name": "Other Co"}).json()

    response = client.get(f"/api/invoices/{other['id']}/{invoice['id']}")

    assert response.status_code == 404
