from sborrowhub.extensions import db
from sborrowhub.utils.clock import utcnow, iso


class CartItem(db.Model):
    __tablename__ = "cart_items"
    __table_args__ = (
        db.UniqueConstraint("user_id", "item_id", name="uq_cart_items_user_item"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)
    borrow_days = db.Column(db.Integer, nullable=False, default=7)
    added_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    item = db.relationship("Item")

    def to_dict(self):
        return {
            "itemId": self.item_id,
            "name": self.item.name if self.item else None,
            "category": self.item.category if self.item else None,
            "image": self.item.image if self.item else None,
            "available": self.item.available if self.item else 0,
            "quantity": self.quantity,
            "borrowDays": self.borrow_days,
            "addedAt": iso(self.added_at),
        }
