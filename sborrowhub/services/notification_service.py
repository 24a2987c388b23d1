from sborrowhub.errors import AuthorizationError, NotFoundError, app_assert
from sborrowhub.models.notification import Notification
from sborrowhub.repositories.notification_repo import NotificationRepo


class NotificationService:
    """Borrower-facing notifications.

    `notify` only stages the row so it lands in the caller's unit of work.
    """

    @staticmethod
    def notify(user_id, title, description, status="In progress", item_id=None, request_id=None):
        return NotificationRepo.add(Notification(
            user_id=user_id,
            title=title,
            description=description,
            status=status,
            related_item_id=item_id,
            related_request_id=request_id,
        ))

    @staticmethod
    def request_approved(req, item_name):
        return NotificationService.notify(
            req.borrower_id,
            "Request Approved",
            f"Your request for {item_name} has been approved",
            status="Action needed",
            item_id=req.item_id,
            request_id=req.id,
        )

    @staticmethod
    def request_rejected(req, item_name, reason):
        return NotificationService.notify(
            req.borrower_id,
            "Request Rejected",
            f"Your request for {item_name} has been rejected: {reason}",
            status="Completed",
            item_id=req.item_id,
            request_id=req.id,
        )

    @staticmethod
    def return_processed(txn, item_name):
        if txn.days_overdue:
            description = (
                f"Your return of {item_name} was recorded {txn.days_overdue} day(s) late. "
                f"Penalty: {txn.penalty_amount}"
            )
        else:
            description = f"Your return of {item_name} has been verified and confirmed."
        return NotificationService.notify(
            txn.borrower_id,
            "Item Return Confirmed",
            description,
            status="Completed",
            item_id=txn.item_id,
            request_id=txn.borrow_request_id,
        )

    @staticmethod
    def overdue_reminder(txn, item_name):
        return NotificationService.notify(
            txn.borrower_id,
            "Overdue Item Reminder",
            f'Your borrowed item "{item_name}" is overdue. Please return it as soon as possible.',
            status="Action needed",
            item_id=txn.item_id,
            request_id=txn.borrow_request_id,
        )

    @staticmethod
    def list_for(user_id: int):
        return NotificationRepo.list_by_user(user_id)

    @staticmethod
    def mark_read(notification_id: int, user_id: int):
        n = NotificationRepo.get(notification_id)
        app_assert(n, NotFoundError("Notification not found"))
        app_assert(n.user_id == user_id, AuthorizationError("Unauthorized to mark this notification as read"))
        n.is_read = True
        NotificationRepo.commit()
        return n

    @staticmethod
    def mark_all_read(user_id: int) -> int:
        return NotificationRepo.mark_all_read(user_id)
