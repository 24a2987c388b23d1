"""Officer actions on borrow requests and transactions.

Each public method is one unit of work: guarded updates, the new rows and the
borrower notification are committed together or rolled back together.
"""
from datetime import datetime

from flask import current_app

from sborrowhub.domain import lifecycle
from sborrowhub.domain.lifecycle import InvalidTransition, RequestStatus
from sborrowhub.errors import ConflictError, NotFoundError, ValidationError, app_assert
from sborrowhub.extensions import db
from sborrowhub.models.transaction import Transaction
from sborrowhub.repositories.borrow_request_repo import BorrowRequestRepo
from sborrowhub.repositories.item_repo import ItemRepo
from sborrowhub.repositories.transaction_repo import TransactionRepo
from sborrowhub.services.notification_service import NotificationService
from sborrowhub.utils.clock import utcnow, to_naive_utc


class LifecycleService:
    notifier = NotificationService

    @staticmethod
    def _get_request(request_id: int):
        req = BorrowRequestRepo.get(request_id)
        app_assert(req, NotFoundError("Borrow request not found"))
        return req

    @staticmethod
    def update_request_status(request_id: int, status, officer_id: int, rejection_reason=None):
        target = lifecycle.parse_request_status(status)
        if target is RequestStatus.APPROVED:
            return LifecycleService.approve(request_id, officer_id)
        if target is RequestStatus.REJECTED:
            return LifecycleService.reject(request_id, officer_id, rejection_reason)
        raise InvalidTransition("A request cannot be moved back to pending")

    @staticmethod
    def approve(request_id: int, officer_id: int):
        req = LifecycleService._get_request(request_id)
        lifecycle.approve(req.status)

        item_id, qty = req.item_id, req.quantity
        item_name = req.item.name if req.item else f"Item #{item_id}"
        now = utcnow()

        try:
            # Guard 1: only one approval of this request can win.
            if not BorrowRequestRepo.claim_status(
                request_id, RequestStatus.PENDING.value, RequestStatus.APPROVED.value,
                resolved_by=officer_id, resolved_at=now,
            ):
                raise InvalidTransition("Borrow request was already resolved")

            # Guard 2: stock is only taken while enough remains.
            if not ItemRepo.try_reserve(item_id, qty):
                raise ConflictError(f"Cannot approve: fewer than {qty} unit(s) of {item_name} available")
            ItemRepo.refresh_status(item_id)

            txn = TransactionRepo.add(Transaction(
                borrower_id=req.borrower_id,
                item_id=item_id,
                borrow_request_id=req.id,
                quantity_borrowed=qty,
                borrow_date=req.borrow_date,
                return_date=req.return_date,
                status=lifecycle.TransactionStatus.COMPLETED.value,
            ))
            LifecycleService.notifier.request_approved(req, item_name)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(
            f"[lifecycle] request={request_id} approved by={officer_id} item={item_id} qty={qty}"
        )
        db.session.refresh(req)
        return req, txn

    @staticmethod
    def reject(request_id: int, officer_id: int, reason):
        req = LifecycleService._get_request(request_id)
        _status, reason = lifecycle.reject(req.status, reason)
        item_name = req.item.name if req.item else f"Item #{req.item_id}"

        try:
            if not BorrowRequestRepo.claim_status(
                request_id, RequestStatus.PENDING.value, RequestStatus.REJECTED.value,
                rejection_reason=reason, resolved_by=officer_id, resolved_at=utcnow(),
            ):
                raise InvalidTransition("Borrow request was already resolved")
            LifecycleService.notifier.request_rejected(req, item_name, reason)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"[lifecycle] request={request_id} rejected by={officer_id}")
        db.session.refresh(req)
        return req, None

    @staticmethod
    def _check_return_date(txn, when: datetime, now: datetime):
        """A stated return date must fall between the loan start and now."""
        if when < txn.borrow_date:
            raise ValidationError(
                "Return date cannot be before the borrow date",
                [{"field": "actualReturnDate", "message": "must be on or after borrowDate"}],
            )
        if when > now:
            raise ValidationError(
                "Return date cannot be in the future",
                [{"field": "actualReturnDate", "message": "must not be later than now"}],
            )

    @staticmethod
    def process_return(transaction_id: int, actual_return_date: datetime = None):
        txn = TransactionRepo.get(transaction_id)
        app_assert(txn, NotFoundError("Transaction not found"))

        now = utcnow()
        if actual_return_date:
            when = to_naive_utc(actual_return_date)
            LifecycleService._check_return_date(txn, when, now)
        else:
            when = now
        outcome = lifecycle.process_return(
            txn.state, when, current_app.config["PENALTY_PER_DAY"]
        )
        item_name = txn.item.name if txn.item else f"Item #{txn.item_id}"

        try:
            claimed = (
                Transaction.query
                .filter(Transaction.id == transaction_id, Transaction.actual_return_date.is_(None))
                .update({
                    Transaction.actual_return_date: outcome.actual_return_date,
                    Transaction.status: outcome.status.value,
                    Transaction.days_overdue: outcome.days_overdue,
                    Transaction.penalty_amount: outcome.penalty_amount,
                }, synchronize_session=False)
            )
            if claimed != 1:
                raise InvalidTransition("Items for this transaction were already returned")

            ItemRepo.release(txn.item_id, txn.quantity_borrowed)
            ItemRepo.refresh_status(txn.item_id)
            db.session.flush()
            db.session.refresh(txn)
            LifecycleService.notifier.return_processed(txn, item_name)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(
            f"[lifecycle] transaction={transaction_id} returned status={outcome.status.value} "
            f"days_overdue={outcome.days_overdue} penalty={outcome.penalty_amount}"
        )
        return txn
