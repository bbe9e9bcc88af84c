from datetime import date

from bookkeeper.services.reports import aging_bucket, ar_aging_summary

AS_OF = date(2026, 3, 1)


def _pay(client, books, customer_id, allocations):
    response = client.post(
        f"/api/recordPayment/{books['company_id']}/{customer_id}",
        json={
            "payment_date": "2026-02-20",
            "payment_method": "Cash",
            "allocations": {str(invoice_id): amount for invoice_id, amount in allocations.items()},
        },
    )
    assert response.status_code == 201, response.text


def test_aging_buckets_by_days_until_due():
    assert aging_bucket(date(2026, 2, 28), AS_OF) == "overdue"
    assert aging_bucket(None, AS_OF) == "overdue"
    assert aging_bucket(AS_OF, AS_OF) == "due_today"
    assert aging_bucket(date(2026, 3, 2), AS_OF) == "due_15_days"
    assert aging_bucket(date(2026, 3, 16), AS_OF) == "due_15_days"
    assert aging_bucket(date(2026, 3, 17), AS_OF) == "due_30_days"
    assert aging_bucket(date(2026, 3, 31), AS_OF) == "due_30_days"
    assert aging_bucket(date(2026, 4, 30), AS_OF) == "due_60_days"
    assert aging_bucket(date(2026, 5, 1), AS_OF) == "due_later"


def test_summary_groups_open_balances_per_customer(client, books, make_invoice, db_session):
    for due_date, amount in [
        ("2026-02-01", 100),
        ("2026-03-01", 200),
        ("2026-03-16", 300),
        ("2026-03-31", 400),
        ("2026-04-30", 500),
        ("2026-05-01", 600),
    ]:
        make_invoice(unit_price=amount, invoice_date="2026-01-01", due_date=due_date)
    make_invoice(unit_price=5, invoice_date="2026-01-01", due_date=None)
    other = make_invoice(
        unit_price=50,
        invoice_date="2026-01-01",
        due_date="2026-03-10",
        customer_id=books["other_customer_id"],
    )
    _pay(client, books, books["other_customer_id"], {other["id"]: 20})

    summary = ar_aging_summary(db_session, books["company_id"], on=AS_OF)

    assert summary.as_of == AS_OF
    assert [row.customer_name for row in summary.rows] == ["Jane Buyer", "Other Buyer"]
    jane, other_row = summary.rows
    assert jane.overdue == 105
    assert jane.due_today == 200
    assert jane.due_15_days == 300
    assert jane.due_30_days == 400
    assert jane.due_60_days == 500
    assert jane.due_later == 600
    assert jane.total == 2105
    assert other_row.due_15_days == 30
    assert other_row.total == 30
    assert summary.total == 2135


def test_summary_leaves_out_settled_invoices(client, books, make_invoice, db_session):
    paid = make_invoice(unit_price=100)
    cancelled = make_invoice(unit_price=200)
    open_one = make_invoice(unit_price=300)
    _pay(client, books, books["customer_id"], {paid["id"]: 100})
    client.post(f"/api/invoices/{books['company_id']}/{cancelled['id']}/cancel")

    summary = ar_aging_summary(db_session, books["company_id"], on=AS_OF)

    assert len(summary.rows) == 1
    assert summary.rows[0].total == 300
    assert summary.rows[0].due_later == open_one["balance_due"]


def test_summary_route(client, books, make_invoice):
    make_invoice(unit_price=250)

    response = client.get(f"/api/reports/ar-aging-summary/{books['company_id']}")

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["total"] == 250
    assert body["rows"][0]["customer_id"] == books["customer_id"]
    assert body["rows"][0]["due_later"] == 250


def test_summary_for_unknown_company_is_not_found(client):
    response = client.get("/api/reports/ar-aging-summary/9999")

    assert response.status_code == 404


def test_customer_open_invoices_earliest_due_first(client, books, make_invoice):
    later = make_invoice(unit_price=100, due_date="2099-12-31")
    sooner = make_invoice(unit_price=200, due_date="2099-06-30")
    paid = make_invoice(unit_price=50)
    _pay(client, books, books["customer_id"], {paid["id"]: 50, sooner["id"]: 80})

    response = client.get(
        f"/api/reports/ar-aging-summary/{books['company_id']}/customer/{books['customer_id']}"
    )

    assert response.status_code == 200
    rows = response.json()
    assert [row["invoice_id"] for row in rows] == [sooner["id"], later["id"]]
    assert rows[0]["balance_due"] == 120
    assert rows[0]["status"] == "partially_paid"


def test_open_invoices_for_unknown_customer_is_not_found(client, books):
    response = client.get(f"/api/reports/ar-aging-summary/{books['company_id']}/customer/9999")

    assert response.status_code == 404
