from decimal import Decimal

from sborrowhub.domain.lifecycle import TransactionState, TransactionStatus
from sborrowhub.extensions import db
from sborrowhub.utils.clock import utcnow, iso


class Transaction(db.Model):
    __tablename__ = "transactions"

    id = db.Column(db.Integer, primary_key=True)

    borrower_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=False, index=True)
    borrow_request_id = db.Column(
        db.Integer, db.ForeignKey("borrow_requests.id"), unique=True, nullable=False, index=True
    )

    quantity_borrowed = db.Column(db.Integer, nullable=False)
    borrow_date = db.Column(db.DateTime, nullable=False)
    return_date = db.Column(db.DateTime, nullable=False)
    actual_return_date = db.Column(db.DateTime, nullable=True)

    days_overdue = db.Column(db.Integer, nullable=False, default=0)
    penalty_amount = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal("0.00"))

    status = db.Column(db.String(20), nullable=False, default="completed", index=True)  # completed/overdue/returned_late
    overdue_notified_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    borrower = db.relationship("User", backref="transactions")
    item = db.relationship("Item", backref="transactions")
    borrow_request = db.relationship("BorrowRequest", backref=db.backref("transaction", uselist=False))

    @property
    def state(self) -> TransactionState:
        return TransactionState(
            status=TransactionStatus(self.status),
            return_date=self.return_date,
            actual_return_date=self.actual_return_date,
        )

    def to_dict(self, now=None):
        now = now or utcnow()
        return {
            "id": self.id,
            "borrowerId": self.borrower_id,
            "borrowerName": self.borrower.fullname if self.borrower else None,
            "itemId": self.item_id,
            "itemName": self.item.name if self.item else None,
            "borrowRequestId": self.borrow_request_id,
            "requestCode": self.borrow_request.request_code if self.borrow_request else None,
            "quantityBorrowed": self.quantity_borrowed,
            "borrowDate": iso(self.borrow_date),
            "returnDate": iso(self.return_date),
            "actualReturnDate": iso(self.actual_return_date),
            "daysOverdue": int(self.days_overdue or 0),
            "penaltyAmount": float(self.penalty_amount or 0),
            "status": self.state.effective_status(now).value,
            "createdAt": iso(self.created_at),
        }
