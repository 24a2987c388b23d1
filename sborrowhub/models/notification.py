from sborrowhub.extensions import db
from sborrowhub.utils.clock import utcnow, iso

NOTIFICATION_STATUSES = ("In progress", "Action needed", "Completed")


class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.String(1000), nullable=False)
    status = db.Column(db.String(20), nullable=False, default="In progress")
    is_read = db.Column(db.Boolean, nullable=False, default=False)

    related_item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=True)
    related_request_id = db.Column(db.Integer, db.ForeignKey("borrow_requests.id"), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "isRead": bool(self.is_read),
            "relatedItemId": self.related_item_id,
            "relatedRequestId": self.related_request_id,
            "createdAt": iso(self.created_at),
        }
