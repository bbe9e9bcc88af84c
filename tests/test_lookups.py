import pytest

from bookkeeper.seed import seed_payment_methods


@pytest.mark.parametrize(
    "slug", ["paymentMethods", "expenseCategories", "paymentAccounts", "payees"]
)
def test_create_and_list_named_entity(client, books, slug):
    response = client.post(
        f"/api/{slug}/{books['company_id']}", json={"name": "  New   Entry  "}
    )

    assert response.status_code == 201, response.text
    assert response.json()["name"] == "New Entry"
    names = [row["name"] for row in client.get(f"/api/{slug}/{books['company_id']}").json()]
    assert "New Entry" in names


def test_names_are_unique_per_company_ignoring_case(client, books):
    response = client.post(
        f"/api/paymentMethods/{books['company_id']}", json={"name": "CASH"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Payment method 'CASH' already exists.", "field": "name"}


def test_same_name_is_allowed_in_another_company(client, books):
    other = client.post("/api/companies", json={"name": "Second Co"}).json()

    response = client.post(f"/api/paymentMethods/{other['id']}", json={"name": "Cash"})

    assert response.status_code == 201


@pytest.mark.parametrize("name", ["", "   ", "x" * 121])
def test_invalid_names_are_rejected(client, books, name):
    response = client.post(f"/api/payees/{books['company_id']}", json={"name": name})

    assert response.status_code == 400
    assert response.json()["field"] == "name"


def test_unknown_company_is_not_found(client, books):
    response = client.post("/api/payees/9999", json={"name": "Someone"})

    assert response.status_code == 404


def test_seed_payment_methods_is_idempotent(db_session, books):
    created = seed_payment_methods(db_session, books["company_id"])

    assert created == 3
    assert seed_payment_methods(db_session, books["company_id"]) == 0
