from sborrowhub.models.borrow_request import BorrowRequest
from sborrowhub.extensions import db


class BorrowRequestRepo:
    @staticmethod
    def get(request_id: int):
        return db.session.get(BorrowRequest, request_id)

    @staticmethod
    def list_all(status=None):
        q = BorrowRequest.query
        if status:
            q = q.filter(BorrowRequest.status == status)
        return q.order_by(BorrowRequest.id.desc()).all()

    @staticmethod
    def list_by_borrower(user_id: int):
        return (
            BorrowRequest.query
            .filter_by(borrower_id=user_id)
            .order_by(BorrowRequest.id.desc())
            .all()
        )

    @staticmethod
    def list_pending(limit: int = 10):
        return (
            BorrowRequest.query
            .filter_by(status="pending")
            .order_by(BorrowRequest.created_at.desc(), BorrowRequest.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def add(req: BorrowRequest):
        db.session.add(req)
        return req

    @staticmethod
    def create(req: BorrowRequest):
        db.session.add(req)
        db.session.commit()
        return req

    @staticmethod
    def claim_status(request_id: int, expected: str, target: str, **fields) -> bool:
        """Move status from `expected` to `target` in one guarded UPDATE.

        Losing a race (status already moved) yields False. Does not commit.
        """
        values = {BorrowRequest.status: target}
        for name, value in fields.items():
            values[getattr(BorrowRequest, name)] = value
        rows = (
            BorrowRequest.query
            .filter(BorrowRequest.id == request_id, BorrowRequest.status == expected)
            .update(values, synchronize_session=False)
        )
        return rows == 1

    @staticmethod
    def count_by_status(status: str):
        return BorrowRequest.query.filter_by(status=status).count()

    @staticmethod
    def count_pending_for_item(item_id: int):
        return BorrowRequest.query.filter_by(item_id=item_id, status="pending").count()

    @staticmethod
    def count_resolved_since(status: str, since):
        return (
            BorrowRequest.query
            .filter(BorrowRequest.status == status, BorrowRequest.resolved_at >= since)
            .count()
        )
