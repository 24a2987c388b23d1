from sborrowhub.extensions import db
from sborrowhub.utils.clock import utcnow, iso

ITEM_STATUSES = ("available", "all_borrowed", "maintenance")
ITEM_CONDITIONS = ("Good", "Fair", "Needs Repair")


class Item(db.Model):
    __tablename__ = "items"
    __table_args__ = (
        db.CheckConstraint("available >= 0", name="ck_items_available_nonneg"),
        db.CheckConstraint("available <= quantity", name="ck_items_available_le_quantity"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False, default="")
    category = db.Column(db.String(100), nullable=False, default="General", index=True)
    image = db.Column(db.String(500), nullable=False, default="")

    quantity = db.Column(db.Integer, nullable=False, default=0)
    available = db.Column(db.Integer, nullable=False, default=0)

    status = db.Column(db.String(20), nullable=False, default="available")
    tags = db.Column(db.JSON, nullable=False, default=list)
    condition = db.Column(db.String(20), nullable=False, default="Good")
    max_borrow_days = db.Column(db.Integer, nullable=False, default=30)
    minimum_stock = db.Column(db.Integer, nullable=False, default=5)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "image": self.image,
            "quantity": self.quantity,
            "available": self.available,
            "status": self.status,
            "tags": list(self.tags or []),
            "condition": self.condition,
            "maxBorrowDays": self.max_borrow_days,
            "minimumStock": self.minimum_stock,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }
