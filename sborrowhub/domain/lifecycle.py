"""Borrow request and transaction states.

Requests move ``pending -> approved | rejected`` and never leave a resolved
state. A transaction is opened as ``completed`` when its request is approved,
becomes ``overdue`` once ``return_date`` passes without a return, and is
closed by the return as either ``completed`` or ``returned_late``.

Everything here is pure: callers persist the outcome.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional

from sborrowhub.errors import ConflictError, ValidationError

ONE_DAY = timedelta(days=1)


class InvalidTransition(ConflictError):
    pass


class RequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_resolved(self) -> bool:
        return self is not RequestStatus.PENDING


class TransactionStatus(str, Enum):
    COMPLETED = "completed"
    OVERDUE = "overdue"
    RETURNED_LATE = "returned_late"


_REQUEST_TRANSITIONS = {
    RequestStatus.PENDING: {RequestStatus.APPROVED, RequestStatus.REJECTED},
    RequestStatus.APPROVED: set(),
    RequestStatus.REJECTED: set(),
}


def parse_request_status(value) -> RequestStatus:
    try:
        return RequestStatus(value)
    except ValueError:
        raise ValidationError(
            "Invalid status value",
            [{"field": "status", "message": f"must be one of {[s.value for s in RequestStatus]}"}],
        )


def request_transition(current, target) -> RequestStatus:
    current, target = RequestStatus(current), RequestStatus(target)
    if target not in _REQUEST_TRANSITIONS[current]:
        raise InvalidTransition(f"Cannot move borrow request from {current.value} to {target.value}")
    return target


def approve(current) -> RequestStatus:
    return request_transition(current, RequestStatus.APPROVED)


def reject(current, reason: Optional[str]) -> tuple[RequestStatus, str]:
    """Validate the reason first so a bad call never reaches a write."""
    reason = (reason or "").strip()
    if not reason:
        raise ValidationError(
            "A rejection reason is required",
            [{"field": "rejectionReason", "message": "must not be empty"}],
        )
    return request_transition(current, RequestStatus.REJECTED), reason


@dataclass(frozen=True)
class TransactionState:
    """Snapshot of a transaction's lifecycle fields."""
    status: TransactionStatus
    return_date: datetime
    actual_return_date: Optional[datetime] = None

    @property
    def is_returned(self) -> bool:
        return self.actual_return_date is not None

    def effective_status(self, now: datetime) -> TransactionStatus:
        """`completed` turns into `overdue` while the loan is open and past due."""
        if not self.is_returned and self.status is TransactionStatus.COMPLETED and now > self.return_date:
            return TransactionStatus.OVERDUE
        return self.status


@dataclass(frozen=True)
class ReturnOutcome:
    status: TransactionStatus
    actual_return_date: datetime
    days_overdue: int
    penalty_amount: Decimal


def days_overdue(return_date: datetime, actual_return_date: datetime) -> int:
    """Whole days late, rounded up; 0 when on time."""
    late = actual_return_date - return_date
    if late <= timedelta(0):
        return 0
    return math.ceil(late / ONE_DAY)


def penalty_for(days: int, per_day) -> Decimal:
    return (Decimal(str(per_day)) * Decimal(days)).quantize(Decimal("0.01"))


def process_return(state: TransactionState, actual_return_date: datetime, per_day) -> ReturnOutcome:
    if state.is_returned:
        raise InvalidTransition("Items for this transaction were already returned")

    days = days_overdue(state.return_date, actual_return_date)
    status = TransactionStatus.RETURNED_LATE if days > 0 else TransactionStatus.COMPLETED
    return ReturnOutcome(
        status=status,
        actual_return_date=actual_return_date,
        days_overdue=days,
        penalty_amount=penalty_for(days, per_day),
    )
