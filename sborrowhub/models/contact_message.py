from sborrowhub.extensions import db
from sborrowhub.utils.clock import utcnow, iso

CONTACT_STATUSES = ("new", "in_progress", "resolved")


class ContactMessage(db.Model):
    __tablename__ = "contact_messages"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    subject = db.Column(db.String(300), nullable=False)
    message = db.Column(db.Text, nullable=False)

    is_read = db.Column(db.Boolean, nullable=False, default=False)
    status = db.Column(db.String(20), nullable=False, default="new")

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    replies = db.relationship(
        "ContactReply", backref="contact_message", order_by="ContactReply.id",
        cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "subject": self.subject,
            "message": self.message,
            "isRead": bool(self.is_read),
            "status": self.status,
            "replies": [r.to_dict() for r in self.replies],
            "createdAt": iso(self.created_at),
        }


class ContactReply(db.Model):
    __tablename__ = "contact_replies"

    id = db.Column(db.Integer, primary_key=True)
    contact_message_id = db.Column(
        db.Integer, db.ForeignKey("contact_messages.id"), nullable=False, index=True
    )
    replied_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    message = db.Column(db.Text, nullable=False)
    replied_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    def to_dict(self):
        return {
            "repliedBy": self.replied_by,
            "message": self.message,
            "repliedAt": iso(self.replied_at),
        }
