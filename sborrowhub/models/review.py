from sborrowhub.extensions import db
from sborrowhub.utils.clock import utcnow, iso


class Review(db.Model):
    __tablename__ = "reviews"
    __table_args__ = (
        db.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    id = db.Column(db.Integer, primary_key=True)
    reviewer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=False, index=True)
    borrow_request_id = db.Column(
        db.Integer, db.ForeignKey("borrow_requests.id"), unique=True, nullable=False
    )

    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=False, default="")

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    reviewer = db.relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "reviewerId": self.reviewer_id,
            "reviewerName": self.reviewer.fullname if self.reviewer else None,
            "itemId": self.item_id,
            "borrowRequestId": self.borrow_request_id,
            "rating": self.rating,
            "comment": self.comment,
            "createdAt": iso(self.created_at),
        }
