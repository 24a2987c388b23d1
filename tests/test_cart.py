from datetime import date, timedelta

from sborrowhub.models.borrow_request import BorrowRequest
from sborrowhub.models.cart_item import CartItem
from sborrowhub.utils.clock import utcnow


def test_cart_requires_login(client):
    assert client.get("/cart/").status_code == 401


def test_add_update_remove(client, borrower_headers, make_item):
    item = make_item(name="Speaker", quantity=4)

    added = client.post("/cart/add", json={"itemId": item.id, "quantity": 2}, headers=borrower_headers)
    assert added.status_code == 200
    cart = added.get_json()["data"]
    assert cart["totalItems"] == 1
    assert cart["items"][0]["name"] == "Speaker"
    assert cart["items"][0]["borrowDays"] == 7

    updated = client.put(f"/cart/update/{item.id}", json={"borrowDays": 3}, headers=borrower_headers)
    assert updated.get_json()["data"]["items"][0]["borrowDays"] == 3

    too_many = client.put(f"/cart/update/{item.id}", json={"quantity": 9}, headers=borrower_headers)
    assert too_many.status_code == 409

    removed = client.delete(f"/cart/remove/{item.id}", headers=borrower_headers)
    assert removed.get_json()["data"]["totalItems"] == 0

    missing = client.delete(f"/cart/remove/{item.id}", headers=borrower_headers)
    assert missing.status_code == 404


def test_adding_same_item_replaces_line(client, borrower_headers, make_item):
    item = make_item(quantity=4)
    client.post("/cart/add", json={"itemId": item.id, "quantity": 1}, headers=borrower_headers)
    client.post("/cart/add", json={"itemId": item.id, "quantity": 3}, headers=borrower_headers)

    assert CartItem.query.count() == 1
    assert CartItem.query.one().quantity == 3


def test_add_checks_stock(client, borrower_headers, make_item):
    item = make_item(quantity=1)
    response = client.post("/cart/add", json={"itemId": item.id, "quantity": 2}, headers=borrower_headers)
    assert response.status_code == 409

    unknown = client.post("/cart/add", json={"itemId": 404, "quantity": 1}, headers=borrower_headers)
    assert unknown.status_code == 404


def test_clear(client, borrower_headers, make_item):
    client.post("/cart/add", json={"itemId": make_item(name="A").id}, headers=borrower_headers)
    client.post("/cart/add", json={"itemId": make_item(name="B").id}, headers=borrower_headers)

    response = client.delete("/cart/clear", headers=borrower_headers)
    assert response.get_json()["data"]["totalItems"] == 0


def test_checkout_creates_pending_requests(client, borrower, borrower_headers, make_item):
    first = make_item(name="Camera", quantity=3)
    second = make_item(name="Tripod", quantity=3)
    client.post("/cart/add", json={"itemId": first.id, "quantity": 1, "borrowDays": 2}, headers=borrower_headers)
    client.post("/cart/add", json={"itemId": second.id, "quantity": 2}, headers=borrower_headers)

    start = (utcnow() + timedelta(days=1)).date()
    response = client.post(
        "/cart/checkout",
        json={"purpose": "Documentary shoot", "startDate": start.isoformat()},
        headers=borrower_headers,
    )

    assert response.status_code == 201
    created = response.get_json()["data"]
    assert len(created) == 2
    assert {r["status"] for r in created} == {"pending"}
    assert all(r["borrowerId"] == borrower.id for r in created)
    assert CartItem.query.count() == 0


def test_checkout_is_all_or_nothing(client, borrower_headers, make_item):
    ok = make_item(name="Camera", quantity=3)
    short_loan = make_item(name="Drone", quantity=3, max_borrow_days=2)
    client.post("/cart/add", json={"itemId": ok.id}, headers=borrower_headers)
    client.post("/cart/add", json={"itemId": short_loan.id, "borrowDays": 5}, headers=borrower_headers)

    response = client.post("/cart/checkout", json={"purpose": "Event"}, headers=borrower_headers)

    assert response.status_code == 400
    assert BorrowRequest.query.count() == 0
    assert CartItem.query.count() == 2


def test_checkout_empty_cart(client, borrower_headers):
    response = client.post(
        "/cart/checkout",
        json={"purpose": "Event", "startDate": date.today().isoformat()},
        headers=borrower_headers,
    )
    assert response.status_code == 400
