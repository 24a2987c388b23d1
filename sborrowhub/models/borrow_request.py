from sborrowhub.extensions import db
from sborrowhub.utils.clock import utcnow, iso


class BorrowRequest(db.Model):
    __tablename__ = "borrow_requests"

    id = db.Column(db.Integer, primary_key=True)
    request_code = db.Column(db.String(32), unique=True, nullable=False, index=True)

    borrower_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=False, index=True)

    quantity = db.Column(db.Integer, nullable=False)
    borrow_date = db.Column(db.DateTime, nullable=False)
    return_date = db.Column(db.DateTime, nullable=False)
    purpose = db.Column(db.Text, nullable=False)
    notes = db.Column(db.Text, nullable=False, default="")

    status = db.Column(db.String(20), nullable=False, default="pending", index=True)  # pending/approved/rejected
    rejection_reason = db.Column(db.Text, nullable=True)
    resolved_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    resolved_at = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    borrower = db.relationship("User", foreign_keys=[borrower_id], backref="borrow_requests")
    item = db.relationship("Item", backref="borrow_requests")

    def to_dict(self):
        return {
            "id": self.id,
            "requestCode": self.request_code,
            "borrowerId": self.borrower_id,
            "borrowerName": self.borrower.fullname if self.borrower else None,
            "borrowerEmail": self.borrower.email if self.borrower else None,
            "itemId": self.item_id,
            "itemName": self.item.name if self.item else None,
            "quantity": self.quantity,
            "borrowDate": iso(self.borrow_date),
            "returnDate": iso(self.return_date),
            "purpose": self.purpose,
            "notes": self.notes,
            "status": self.status,
            "rejectionReason": self.rejection_reason,
            "resolvedBy": self.resolved_by,
            "resolvedAt": iso(self.resolved_at),
            "createdAt": iso(self.created_at),
        }
