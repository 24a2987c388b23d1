from sborrowhub.extensions import db
from sborrowhub.utils.clock import utcnow, iso


class ActivityLog(db.Model):
    __tablename__ = "activity_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(32), nullable=False, default="anonymous", index=True)
    action = db.Column(db.String(500), nullable=False)  # "POST /catalog/request-item"
    ip = db.Column(db.String(64), nullable=True)
    details = db.Column(db.Text, nullable=True)
    timestamp = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "action": self.action,
            "ip": self.ip,
            "details": self.details,
            "timestamp": iso(self.timestamp),
        }
