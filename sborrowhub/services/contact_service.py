from sborrowhub.errors import NotFoundError, app_assert
from sborrowhub.models.contact_message import ContactMessage, ContactReply
from sborrowhub.repositories.contact_repo import ContactRepo


class ContactService:
    @staticmethod
    def submit(data) -> ContactMessage:
        return ContactRepo.create(ContactMessage(
            name=data.name,
            email=data.email,
            subject=data.subject,
            message=data.message,
        ))

    @staticmethod
    def list_messages(status=None):
        return ContactRepo.list_all(status=status)

    @staticmethod
    def _get(message_id: int) -> ContactMessage:
        msg = ContactRepo.get(message_id)
        app_assert(msg, NotFoundError("Message not found"))
        return msg

    @staticmethod
    def reply(message_id: int, admin_id: int, text: str) -> ContactMessage:
        msg = ContactService._get(message_id)
        msg.replies.append(ContactReply(replied_by=admin_id, message=text))
        msg.is_read = True
        if msg.status == "new":
            msg.status = "in_progress"
        ContactRepo.commit()
        return msg

    @staticmethod
    def set_status(message_id: int, status: str) -> ContactMessage:
        msg = ContactService._get(message_id)
        msg.status = status
        ContactRepo.commit()
        return msg

    @staticmethod
    def mark_read(message_id: int) -> ContactMessage:
        msg = ContactService._get(message_id)
        msg.is_read = True
        ContactRepo.commit()
        return msg
