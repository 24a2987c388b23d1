from sborrowhub.models.notification import Notification
from sborrowhub.extensions import db


class NotificationRepo:
    @staticmethod
    def get(notification_id: int):
        return db.session.get(Notification, notification_id)

    @staticmethod
    def list_by_user(user_id: int):
        return (
            Notification.query
            .filter_by(user_id=user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .all()
        )

    @staticmethod
    def add(entry: Notification):
        db.session.add(entry)
        return entry

    @staticmethod
    def mark_all_read(user_id: int) -> int:
        rows = (
            Notification.query
            .filter_by(user_id=user_id, is_read=False)
            .update({Notification.is_read: True}, synchronize_session=False)
        )
        db.session.commit()
        return rows

    @staticmethod
    def commit():
        db.session.commit()
