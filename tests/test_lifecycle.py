from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from sborrowhub.domain import lifecycle
from sborrowhub.domain.lifecycle import (
    InvalidTransition,
    RequestStatus,
    TransactionState,
    TransactionStatus,
)
from sborrowhub.errors import ConflictError, ValidationError


def test_pending_can_be_approved_or_rejected():
    assert lifecycle.approve("pending") is RequestStatus.APPROVED
    status, reason = lifecycle.reject("pending", "  Out of stock  ")
    assert status is RequestStatus.REJECTED
    assert reason == "Out of stock"


@pytest.mark.parametrize("current", ["approved", "rejected"])
def test_resolved_requests_are_final(current):
    """Test a resolved request cannot be approved or rejected again"""
    with pytest.raises(InvalidTransition):
        lifecycle.approve(current)
    with pytest.raises(InvalidTransition):
        lifecycle.reject(current, "late")


def test_invalid_transition_is_a_conflict():
    assert issubclass(InvalidTransition, ConflictError)
    assert InvalidTransition("x").status_code == 409


@pytest.mark.parametrize("reason", [None, "", "   "])
def test_reject_requires_reason(reason):
    with pytest.raises(ValidationError) as exc:
        lifecycle.reject("pending", reason)
    assert exc.value.errors[0]["field"] == "rejectionReason"


def test_blank_reason_is_reported_before_transition():
    """Test validation wins over the transition check"""
    with pytest.raises(ValidationError):
        lifecycle.reject("approved", "")


def test_parse_request_status_rejects_unknown():
    assert lifecycle.parse_request_status("approved") is RequestStatus.APPROVED
    with pytest.raises(ValidationError):
        lifecycle.parse_request_status("borrowed")


def test_is_resolved():
    assert not RequestStatus.PENDING.is_resolved
    assert RequestStatus.APPROVED.is_resolved
    assert RequestStatus.REJECTED.is_resolved


def test_days_overdue_rounds_up():
    due = datetime(2025, 1, 8)
    assert lifecycle.days_overdue(due, due) == 0
    assert lifecycle.days_overdue(due, due - timedelta(hours=5)) == 0
    assert lifecycle.days_overdue(due, due + timedelta(minutes=1)) == 1
    assert lifecycle.days_overdue(due, due + timedelta(days=1)) == 1
    assert lifecycle.days_overdue(due, due + timedelta(days=1, seconds=1)) == 2


def test_penalty_is_per_day_and_rounded():
    assert lifecycle.penalty_for(0, Decimal("5.00")) == Decimal("0.00")
    assert lifecycle.penalty_for(3, Decimal("5.00")) == Decimal("15.00")
    assert lifecycle.penalty_for(2, "2.5") == Decimal("5.00")


def test_late_return_two_days():
    """Test Jan 8 due, returned Jan 10 -> 2 days late"""
    state = TransactionState(TransactionStatus.COMPLETED, datetime(2025, 1, 8))
    outcome = lifecycle.process_return(state, datetime(2025, 1, 10), Decimal("5.00"))

    assert outcome.status is TransactionStatus.RETURNED_LATE
    assert outcome.days_overdue == 2
    assert outcome.penalty_amount == Decimal("10.00")
    assert outcome.actual_return_date == datetime(2025, 1, 10)


def test_on_time_return_completes():
    state = TransactionState(TransactionStatus.COMPLETED, datetime(2025, 1, 8))
    outcome = lifecycle.process_return(state, datetime(2025, 1, 7, 12), Decimal("5.00"))

    assert outcome.status is TransactionStatus.COMPLETED
    assert outcome.days_overdue == 0
    assert outcome.penalty_amount == Decimal("0.00")


def test_overdue_loan_returned_late():
    state = TransactionState(TransactionStatus.OVERDUE, datetime(2025, 1, 8))
    outcome = lifecycle.process_return(state, datetime(2025, 1, 11), Decimal("5.00"))
    assert outcome.status is TransactionStatus.RETURNED_LATE
    assert outcome.days_overdue == 3


def test_second_return_is_refused():
    state = TransactionState(
        TransactionStatus.COMPLETED, datetime(2025, 1, 8), actual_return_date=datetime(2025, 1, 7)
    )
    with pytest.raises(InvalidTransition):
        lifecycle.process_return(state, datetime(2025, 1, 9), Decimal("5.00"))


def test_effective_status():
    due = datetime(2025, 1, 8)
    open_loan = TransactionState(TransactionStatus.COMPLETED, due)
    assert open_loan.effective_status(due - timedelta(days=1)) is TransactionStatus.COMPLETED
    assert open_loan.effective_status(due + timedelta(seconds=1)) is TransactionStatus.OVERDUE

    returned = TransactionState(TransactionStatus.COMPLETED, due, actual_return_date=due)
    assert returned.effective_status(due + timedelta(days=10)) is TransactionStatus.COMPLETED
