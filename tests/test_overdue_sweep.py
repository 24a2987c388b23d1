from datetime import timedelta

from sborrowhub.extensions import db, mail
from sborrowhub.models.notification import Notification
from sborrowhub.models.transaction import Transaction
from sborrowhub.models.user import User
from sborrowhub.services.lifecycle_service import LifecycleService
from sborrowhub.services.settings_service import SettingsService
from sborrowhub.tasks.overdue_check import run_overdue_sweep
from sborrowhub.tasks.scheduler import start_scheduler
from sborrowhub.utils.clock import utcnow


def _loan(borrower, officer, make_item, make_request, due_in_days):
    now = utcnow()
    req = make_request(
        borrower, make_item(),
        borrow_date=now - timedelta(days=10), return_date=now + timedelta(days=due_in_days),
    )
    _, txn = LifecycleService.approve(req.id, officer.id)
    return txn.id


def _sweep(app):
    db.session.commit()
    result = run_overdue_sweep(app)
    db.session.expire_all()
    return result


def test_sweep_marks_and_reminds_once(app, borrower, officer, make_item, make_request):
    late = _loan(borrower, officer, make_item, make_request, due_in_days=-2)
    on_time = _loan(borrower, officer, make_item, make_request, due_in_days=3)

    with mail.record_messages() as outbox:
        first = _sweep(app)

    assert first == {"marked": 1, "reminded": 1, "mailed": 1}
    assert len(outbox) == 1
    assert outbox[0].recipients == ["borrower@example.com"]
    assert db.session.get(Transaction, late).status == "overdue"
    assert db.session.get(Transaction, late).overdue_notified_at is not None
    assert db.session.get(Transaction, on_time).status == "completed"
    assert Notification.query.filter_by(title="Overdue Item Reminder").count() == 1

    second = _sweep(app)
    assert second == {"marked": 0, "reminded": 0, "mailed": 0}
    assert Notification.query.filter_by(title="Overdue Item Reminder").count() == 1


def test_sweep_respects_mail_preference(app, borrower, officer, make_item, make_request):
    _loan(borrower, officer, make_item, make_request, due_in_days=-1)
    SettingsService.update(borrower.id, {"overdueAlerts": False})

    with mail.record_messages() as outbox:
        result = _sweep(app)

    assert result == {"marked": 1, "reminded": 1, "mailed": 0}
    assert outbox == []
    assert Notification.query.filter_by(title="Overdue Item Reminder").count() == 1


def test_returned_loans_are_left_alone(app, borrower, officer, make_item, make_request):
    txn_id = _loan(borrower, officer, make_item, make_request, due_in_days=-1)
    LifecycleService.process_return(txn_id)

    assert _sweep(app) == {"marked": 0, "reminded": 0, "mailed": 0}
    assert db.session.get(Transaction, txn_id).status == "returned_late"


def test_scheduler_disabled_in_tests(app):
    assert start_scheduler(app) is None
    assert "apscheduler" not in app.extensions


def test_cli_overdue_sweep(app, borrower, officer, make_item, make_request):
    _loan(borrower, officer, make_item, make_request, due_in_days=-1)
    db.session.commit()

    result = app.test_cli_runner().invoke(args=["overdue-sweep"])

    assert result.exit_code == 0
    assert "marked=1 reminded=1 mailed=1" in result.output


def test_cli_create_staff(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["create-staff", "2020000099", "staff@example.com", "staffpass1", "--role", "admin"])
    assert result.exit_code == 0
    assert User.query.filter_by(email="staff@example.com").one().role == "admin"

    again = runner.invoke(args=["create-staff", "2020000099", "staff@example.com", "staffpass1"])
    assert "already exists" in again.output
