# sborrowhub/tasks/overdue_check.py
from flask import current_app

from sborrowhub.errors import NotFoundError, app_assert
from sborrowhub.extensions import db
from sborrowhub.repositories.transaction_repo import TransactionRepo
from sborrowhub.services.mail_service import MailService
from sborrowhub.services.notification_service import NotificationService
from sborrowhub.services.settings_service import SettingsService
from sborrowhub.utils.clock import utcnow


def remind_borrower(txn, now=None, force_mail=False):
    """
    Overdue reminder for one open transaction: notification + mail.
    Mail is skipped when the borrower turned overdue alerts off, unless forced.
    Does not commit. Returns (mail_sent, mail_error).
    """
    now = now or utcnow()
    item_name = txn.item.name if txn.item else f"Item #{txn.item_id}"

    NotificationService.overdue_reminder(txn, item_name)
    txn.overdue_notified_at = now

    if not force_mail and not SettingsService.wants_overdue_mail(txn.borrower_id):
        return False, "disabled_by_user"
    return MailService.send_overdue_reminder(txn)


def send_overdue_notification(transaction_id: int):
    """Officer-triggered reminder for a single transaction."""
    txn = TransactionRepo.get(transaction_id)
    app_assert(txn, NotFoundError("Transaction not found"))
    app_assert(txn.borrower, NotFoundError("Borrower information not found"))

    ok, err = remind_borrower(txn, force_mail=True)
    db.session.commit()
    if not ok:
        current_app.logger.warning(f"[overdue] Reminder mail for transaction={transaction_id} failed: {err}")
    return ok, err


def run_overdue_sweep(app):
    """
    - open transactions past return_date: completed -> overdue
    - each newly overdue transaction gets one reminder (notification + mail)
    """
    with app.app_context():
        try:
            now = utcnow()
            marked = TransactionRepo.mark_overdue(now)

            reminded = 0
            mailed = 0
            for txn in TransactionRepo.find_overdue(now):
                if txn.overdue_notified_at is not None:
                    continue
                ok, _err = remind_borrower(txn, now)
                reminded += 1
                if ok:
                    mailed += 1

            db.session.commit()

            current_app.logger.info(
                f"[overdue] marked={marked} reminded={reminded} mailed={mailed}"
            )
            return {"marked": marked, "reminded": reminded, "mailed": mailed}

        except Exception:
            db.session.rollback()
            raise
