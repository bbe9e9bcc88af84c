from decimal import Decimal


def bill_payload(books, **overrides):
    payload = {
        "bill_number": "BILL-100",
        "vendor_id": books["vendor_id"],
        "bill_date": "2026-04-01",
        "due_date": "2026-05-01",
        "payment_method": "cash",
        "items": [
            {
                "product_id": books["widget_id"],
                "description": "Widget",
                "quantity": 2,
                "unit_price": 100,
                "tax_rate": 10,
            },
            {
                "product_id": books["gadget_id"],
                "description": "Gadget",
                "quantity": 3,
                "unit_price": 25,
            },
        ],
    }
    payload.update(overrides)
    return payload


def test_bill_round_trip_items_sum_to_total(client, books):
    created = client.post(f"/api/createBill/{books['company_id']}", json=bill_payload(books))
    assert created.status_code == 201, created.text

    response = client.get(f"/api/bills/{books['company_id']}/{created.json()['id']}")

    assert response.status_code == 200
    bill = response.json()
    assert len(bill["items"]) == 2
    assert sum(Decimal(str(item["total_price"])) for item in bill["items"]) == Decimal(
        str(bill["total_amount"])
    )
    assert bill["total_amount"] == 275
    assert bill["tax_amount"] == 0
    assert bill["status"] == "open"
    assert bill["payment_method"] == "Cash"
    assert bill["payment_method_id"] == books["payment_method_id"]


def test_bill_requires_vendor(client, books):
    response = client.post(
        f"/api/createBill/{books['company_id']}", json=bill_payload(books, vendor_id=None)
    )

    assert response.status_code == 400
    assert response.json()["field"] == "vendor_id"


def test_bill_with_unknown_payment_method_is_rejected(client, books):
    response = client.post(
        f"/api/createBill/{books['company_id']}",
        json=bill_payload(books, payment_method="Barter"),
    )

    assert response.status_code == 400
    assert response.json()["field"] == "payment_method"


def test_bill_update_replaces_items(client, books):
    bill = client.post(f"/api/createBill/{books['company_id']}", json=bill_payload(books)).json()
    payload = bill_payload(books, discount_type="percentage", discount_value=10)
    payload["items"] = payload["items"][1:]

    response = client.put(f"/api/bills/{books['company_id']}/{bill['id']}", json=payload)

    assert response.status_code == 200, response.text
    body = response.json()
    assert len(body["items"]) == 1
    assert body["subtotal"] == 75
    assert body["discount_amount"] == 7.5
    assert body["total_amount"] == 67.5


def test_list_bills(client, books):
    client.post(f"/api/createBill/{books['company_id']}", json=bill_payload(books))
    client.post(
        f"/api/createBill/{books['company_id']}",
        json=bill_payload(books, bill_number="BILL-101", payment_method=None),
    )

    response = client.get(f"/api/bills/{books['company_id']}")

    assert sorted(row["bill_number"] for row in response.json()) == ["BILL-100", "BILL-101"]


def expense_payload(books, **overrides):
    payload = {
        "expense_number": "EXP-1",
        "category_id": books["category_id"],
        "payment_account_id": books["payment_account_id"],
        "payee": "  Corner   Shop ",
        "payment_date": "2026-04-03",
        "payment_method": "Cash",
        "items": [
            {
                "product_id": books["gadget_id"],
                "description": "Paper",
                "quantity": 4,
                "unit_price": "12.50",
            }
        ],
    }
    payload.update(overrides)
    return payload


def test_create_and_list_expenses(client, books):
    response = client.post(
        f"/api/createExpenses/{books['company_id']}", json=expense_payload(books)
    )

    assert response.status_code == 201, response.text
    expense = response.json()
    assert expense["total_amount"] == 50
    assert expense["payee"] == "Corner Shop"

    listed = client.get(f"/api/expenses/{books['company_id']}").json()
    assert len(listed) == 1
    assert listed[0]["items"][0]["description"] == "Paper"


def test_expense_requires_category(client, books):
    response = client.post(
        f"/api/createExpenses/{books['company_id']}",
        json=expense_payload(books, category_id=None),
    )

    assert response.status_code == 400
    assert response.json()["field"] == "category_id"


def test_expense_with_foreign_payment_account_is_not_found(client, books):
    response = client.post(
        f"/api/createExpenses/{books['company_id']}",
        json=expense_payload(books, payment_account_id=9999),
    )

    assert response.status_code == 404
    assert client.get(f"/api/expenses/{books['company_id']}").json() == []
