from datetime import datetime

from sborrowhub.models.transaction import Transaction
from sborrowhub.extensions import db


class TransactionRepo:
    @staticmethod
    def get(transaction_id: int):
        return db.session.get(Transaction, transaction_id)

    @staticmethod
    def list_all(status=None):
        q = Transaction.query
        if status:
            q = q.filter(Transaction.status == status)
        return q.order_by(Transaction.id.desc()).all()

    @staticmethod
    def list_by_borrower(user_id: int):
        return (
            Transaction.query
            .filter_by(borrower_id=user_id)
            .order_by(Transaction.id.desc())
            .all()
        )

    @staticmethod
    def add(txn: Transaction):
        db.session.add(txn)
        return txn

    @staticmethod
    def find_overdue(now: datetime, limit=None):
        q = (
            Transaction.query
            .filter(
                Transaction.actual_return_date.is_(None),
                Transaction.return_date < now,
            )
            .order_by(Transaction.return_date.asc())
        )
        if limit:
            q = q.limit(limit)
        return q.all()

    @staticmethod
    def mark_overdue(now: datetime) -> int:
        """Persist completed -> overdue for open loans past due. Does not commit."""
        return (
            Transaction.query
            .filter(
                Transaction.status == "completed",
                Transaction.actual_return_date.is_(None),
                Transaction.return_date < now,
            )
            .update({Transaction.status: "overdue"}, synchronize_session=False)
        )

    @staticmethod
    def count_open():
        return Transaction.query.filter(Transaction.actual_return_date.is_(None)).count()

    @staticmethod
    def count_overdue(now: datetime):
        return (
            Transaction.query
            .filter(Transaction.actual_return_date.is_(None), Transaction.return_date < now)
            .count()
        )

    @staticmethod
    def count_open_for_item(item_id: int):
        return (
            Transaction.query
            .filter(Transaction.item_id == item_id, Transaction.actual_return_date.is_(None))
            .count()
        )

    @staticmethod
    def commit():
        db.session.commit()
