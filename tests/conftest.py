"""
SBorrowHub - Test Configuration and Fixtures
"""
from datetime import timedelta

import pytest
from werkzeug.security import generate_password_hash

from sborrowhub import create_app
from sborrowhub.config import TestConfig
from sborrowhub.extensions import db
from sborrowhub.models.borrow_request import BorrowRequest
from sborrowhub.models.item import Item
from sborrowhub.models.user import User
from sborrowhub.services.auth_service import AuthService
from sborrowhub.utils.clock import utcnow
from sborrowhub.utils.request_code import generate_request_code

PASSWORD = "testpassword123"


@pytest.fixture
def app(tmp_path):
    """Fresh app + in-memory database for each test"""
    class _Config(TestConfig):
        BACKUP_DIR = str(tmp_path / "backups")

    app = create_app(_Config)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(student_id, email, role="user", firstname="Test", lastname="User"):
    user = User(
        student_id=student_id,
        firstname=firstname,
        lastname=lastname,
        email=email,
        phone_number="09171234567",
        password_hash=generate_password_hash(PASSWORD),
        role=role,
    )
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def borrower(app):
    return _make_user("2021000001", "borrower@example.com", firstname="Juan", lastname="Dela Cruz")


@pytest.fixture
def other_borrower(app):
    return _make_user("2021000002", "other@example.com", firstname="Maria", lastname="Santos")


@pytest.fixture
def officer(app):
    return _make_user("2021000003", "officer@example.com", role="officer", firstname="Olive", lastname="Officer")


@pytest.fixture
def admin(app):
    return _make_user("2021000004", "admin@example.com", role="admin", firstname="Ada", lastname="Admin")


def auth_headers(user):
    return {"Authorization": f"Bearer {AuthService.issue_token(user)}"}


@pytest.fixture
def borrower_headers(borrower):
    return auth_headers(borrower)


@pytest.fixture
def officer_headers(officer):
    return auth_headers(officer)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def make_item(app):
    def _make(name="Projector", quantity=5, available=None, **kwargs):
        item = Item(
            name=name,
            description=kwargs.pop("description", f"{name} for classroom use"),
            category=kwargs.pop("category", "Electronics"),
            image=kwargs.pop("image", "https://example.com/item.png"),
            quantity=quantity,
            available=quantity if available is None else available,
            **kwargs,
        )
        db.session.add(item)
        db.session.commit()
        return item
    return _make


@pytest.fixture
def make_request(app):
    """Pending borrow request written straight to the database"""
    def _make(borrower, item, quantity=1, borrow_date=None, return_date=None, status="pending"):
        borrow_date = borrow_date or utcnow() + timedelta(days=1)
        return_date = return_date or borrow_date + timedelta(days=7)
        req = BorrowRequest(
            request_code=generate_request_code(),
            borrower_id=borrower.id,
            item_id=item.id,
            quantity=quantity,
            borrow_date=borrow_date,
            return_date=return_date,
            purpose="Class presentation",
            status=status,
        )
        db.session.add(req)
        db.session.commit()
        return req
    return _make


@pytest.fixture
def headers_for(app):
    return auth_headers
