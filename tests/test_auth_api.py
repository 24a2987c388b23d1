import json

PASSWORD = "testpassword123"

SIGNUP = {
    "studentId": "2022123456",
    "firstname": "Ana",
    "lastname": "Reyes",
    "email": "ana@example.com",
    "phoneNumber": "09181234567",
    "college": "Engineering",
    "department": "Computer Engineering",
    "password": "supersecret1",
    "confirmpassword": "supersecret1",
}


def test_signup_returns_token(client):
    response = client.post("/auth/signup", json=SIGNUP)

    assert response.status_code == 201
    body = response.get_json()
    assert body["access_token"]
    assert body["user"]["role"] == "user"
    assert "passwordHash" not in body["user"]
    assert body["user"]["profilePicture"].startswith("https://placehold.co/")


def test_signup_duplicate(client):
    client.post("/auth/signup", json=SIGNUP)
    response = client.post("/auth/signup", json=SIGNUP)
    assert response.status_code == 409


def test_signup_password_mismatch(client):
    response = client.post("/auth/signup", json={**SIGNUP, "confirmpassword": "different1"})
    assert response.status_code == 400


def test_signup_validates_fields(client):
    response = client.post("/auth/signup", json={**SIGNUP, "studentId": "123", "phoneNumber": "abc"})

    assert response.status_code == 400
    fields = {e["field"] for e in response.get_json()["errors"]}
    assert {"studentId", "phoneNumber"} <= fields


def test_login_with_student_id_or_email(client, borrower):
    by_id = client.post("/auth/login", json={"user": borrower.student_id, "password": PASSWORD})
    assert by_id.status_code == 200
    body = by_id.get_json()
    assert body["access_token"]
    assert body["user"]["isOnline"] is True
    assert body["settings"]["itemsPerPage"] == 12

    by_email = client.post("/auth/login", json={"user": borrower.email, "password": PASSWORD})
    assert by_email.status_code == 200


def test_login_failures(client, borrower):
    wrong = client.post("/auth/login", json={"user": borrower.email, "password": "wrongpassword"})
    assert wrong.status_code == 401

    unknown = client.post("/auth/login", json={"user": "nobody@example.com", "password": PASSWORD})
    assert unknown.status_code == 404


def test_inactive_account_cannot_login(client, borrower):
    from sborrowhub.extensions import db

    borrower.status = "inactive"
    db.session.commit()
    response = client.post("/auth/login", json={"user": borrower.email, "password": PASSWORD})
    assert response.status_code == 403


def test_check_auth_and_role(client, borrower_headers):
    assert client.get("/auth/check-auth").status_code == 401

    me = client.get("/auth/check-auth", headers=borrower_headers)
    assert me.get_json()["user"]["email"] == "borrower@example.com"

    role = client.get("/auth/check-role", headers=borrower_headers)
    assert role.get_json()["role"] == "user"


def test_update_profile(client, borrower_headers, other_borrower):
    response = client.put("/auth/update-profile", json={"college": "Science"}, headers=borrower_headers)
    assert response.status_code == 200
    assert response.get_json()["user"]["college"] == "Science"

    taken = client.put(
        "/auth/update-profile", json={"email": other_borrower.email}, headers=borrower_headers
    )
    assert taken.status_code == 409


def test_change_password(client, borrower, borrower_headers):
    bad = client.put("/auth/change-password", headers=borrower_headers, json={
        "currentPassword": "not-my-password",
        "password": "newpassword1",
        "confirmpassword": "newpassword1",
    })
    assert bad.status_code == 401

    ok = client.put("/auth/change-password", headers=borrower_headers, json={
        "currentPassword": PASSWORD,
        "password": "newpassword1",
        "confirmpassword": "newpassword1",
    })
    assert ok.status_code == 200

    login = client.post("/auth/login", json={"user": borrower.email, "password": "newpassword1"})
    assert login.status_code == 200


def test_logout(client, borrower, borrower_headers):
    client.post("/auth/login", json={"user": borrower.email, "password": PASSWORD})
    response = client.post("/auth/logout", headers=borrower_headers)

    assert response.status_code == 200
    assert borrower.is_online is False


def test_activity_log_redacts_passwords(client, borrower):
    from sborrowhub.models.activity_log import ActivityLog

    client.post("/auth/login", json={"user": borrower.email, "password": PASSWORD})

    entry = ActivityLog.query.filter_by(action="POST /auth/login").one()
    assert PASSWORD not in entry.details
    assert entry.user_id == "anonymous"


def test_activity_log_redacts_snake_case_passwords(client, borrower, borrower_headers):
    from sborrowhub.models.activity_log import ActivityLog

    response = client.put("/auth/change-password", headers=borrower_headers, json={
        "current_password": PASSWORD,
        "password": "newpassword1",
        "confirmpassword": "newpassword1",
    })
    assert response.status_code == 200

    entry = ActivityLog.query.filter_by(action="PUT /auth/change-password").one()
    assert PASSWORD not in entry.details
    assert "newpassword1" not in entry.details
    assert json.loads(entry.details)["current_password"] == "***"
