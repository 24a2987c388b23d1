# sborrowhub/services/mail_service.py
from __future__ import annotations

from flask import current_app
from flask_mail import Message

from sborrowhub.extensions import mail


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str, html: str | None = None) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body, html=html)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[MailService] Could not send mail to {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def send_overdue_reminder(txn) -> tuple[bool, str | None]:
        user = txn.borrower
        if not user or not user.email:
            return False, "missing_email"

        item_name = txn.item.name if txn.item else f"Item #{txn.item_id}"
        due = txn.return_date.strftime("%Y-%m-%d") if txn.return_date else "-"

        subject = "Overdue Item Reminder - SBorrowHub"
        body = (
            f"Dear {user.fullname},\n\n"
            "This is a reminder that the following item is overdue:\n"
            f"  Item: {item_name}\n"
            f"  Quantity: {txn.quantity_borrowed}\n"
            f"  Due Date: {due}\n\n"
            "Please return the item as soon as possible to avoid further penalties.\n\n"
            "Best regards,\nSBorrowHub Team\n"
        )
        return MailService.send_email(user.email, subject, body)
