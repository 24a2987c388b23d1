from datetime import datetime

from sborrowhub.services.lifecycle_service import LifecycleService

MESSAGE = {
    "name": "Visitor",
    "email": "visitor@example.com",
    "subject": "Opening hours",
    "message": "Is the equipment office open on Saturdays?",
}


def _returned_request(borrower, officer, make_item, make_request):
    item = make_item(name="Guitar", quantity=2)
    req = make_request(borrower, item, borrow_date=datetime(2025, 2, 1), return_date=datetime(2025, 2, 5))
    _, txn = LifecycleService.approve(req.id, officer.id)
    LifecycleService.process_return(txn.id, datetime(2025, 2, 4))
    return item, req


def test_review_after_return(client, borrower, officer, borrower_headers, make_item, make_request):
    item, req = _returned_request(borrower, officer, make_item, make_request)

    response = client.post(
        "/reviews/", json={"borrowRequestId": req.id, "rating": 4, "comment": "Great"}, headers=borrower_headers
    )
    assert response.status_code == 201

    duplicate = client.post(
        "/reviews/", json={"borrowRequestId": req.id, "rating": 5}, headers=borrower_headers
    )
    assert duplicate.status_code == 409

    listed = client.get(f"/reviews/item/{item.id}").get_json()["data"]
    assert [r["rating"] for r in listed] == [4]
    assert client.get(f"/catalog/items/{item.id}").get_json()["data"]["averageRating"] == 4.0


def test_review_before_return_conflicts(client, borrower, officer, borrower_headers, make_item, make_request):
    req = make_request(borrower, make_item())
    LifecycleService.approve(req.id, officer.id)

    response = client.post("/reviews/", json={"borrowRequestId": req.id, "rating": 3}, headers=borrower_headers)
    assert response.status_code == 409


def test_cannot_review_someone_elses_borrowing(client, borrower, other_borrower, officer, headers_for,
                                              make_item, make_request):
    _, req = _returned_request(borrower, officer, make_item, make_request)
    response = client.post(
        "/reviews/", json={"borrowRequestId": req.id, "rating": 3}, headers=headers_for(other_borrower)
    )
    assert response.status_code == 403


def test_rating_range(client, borrower_headers):
    response = client.post("/reviews/", json={"borrowRequestId": 1, "rating": 6}, headers=borrower_headers)
    assert response.status_code == 400


def test_contact_message_is_public(client):
    response = client.post("/contact/", json=MESSAGE)

    assert response.status_code == 201
    data = response.get_json()["data"]
    assert data["status"] == "new"
    assert data["isRead"] is False


def test_contact_message_validation(client):
    response = client.post("/contact/", json={**MESSAGE, "email": "not-an-email", "message": "short"})
    assert response.status_code == 400


def test_admin_replies_to_feedback(client, admin, admin_headers, borrower_headers):
    msg_id = client.post("/contact/", json=MESSAGE).get_json()["data"]["id"]

    assert client.get("/admin/feedback", headers=borrower_headers).status_code == 403

    reply = client.post(
        f"/admin/feedback/{msg_id}/reply", json={"message": "Yes, 8am to noon."}, headers=admin_headers
    )
    assert reply.status_code == 200
    data = reply.get_json()["data"]
    assert data["status"] == "in_progress"
    assert data["isRead"] is True
    assert data["replies"][0]["repliedBy"] == admin.id

    resolved = client.put(
        f"/admin/feedback/{msg_id}/status", json={"status": "resolved"}, headers=admin_headers
    )
    assert resolved.get_json()["data"]["status"] == "resolved"

    listed = client.get("/admin/feedback?status=resolved", headers=admin_headers).get_json()["data"]
    assert [m["id"] for m in listed] == [msg_id]

    assert client.patch("/admin/feedback/999/read", headers=admin_headers).status_code == 404
