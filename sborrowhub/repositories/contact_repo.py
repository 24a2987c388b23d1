from sborrowhub.models.contact_message import ContactMessage
from sborrowhub.extensions import db


class ContactRepo:
    @staticmethod
    def get(message_id: int):
        return db.session.get(ContactMessage, message_id)

    @staticmethod
    def list_all(status=None):
        q = ContactMessage.query
        if status:
            q = q.filter_by(status=status)
        return q.order_by(ContactMessage.id.desc()).all()

    @staticmethod
    def create(message: ContactMessage):
        db.session.add(message)
        db.session.commit()
        return message

    @staticmethod
    def commit():
        db.session.commit()
