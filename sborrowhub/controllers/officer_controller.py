from flask import Blueprint, request, jsonify

from sborrowhub.constants import STAFF_ROLES
from sborrowhub.errors import AppError
from sborrowhub.repositories.borrow_request_repo import BorrowRequestRepo
from sborrowhub.repositories.item_repo import ItemRepo
from sborrowhub.repositories.transaction_repo import TransactionRepo
from sborrowhub.schemas.base import parse
from sborrowhub.schemas.borrow_request_schema import RequestStatusUpdate, ReturnUpdate
from sborrowhub.services.activity_service import ActivityService
from sborrowhub.services.admin_service import AdminService
from sborrowhub.services.lifecycle_service import LifecycleService
from sborrowhub.domain.lifecycle import days_overdue
from sborrowhub.tasks.overdue_check import send_overdue_notification
from sborrowhub.utils.clock import utcnow
from sborrowhub.utils.decorators import current_user_id, role_required

officer_bp = Blueprint("officer", __name__)


@officer_bp.before_request
@role_required(*STAFF_ROLES)
def _staff_only():
    return None


@officer_bp.get("/get-all-transactions")
def all_requests():
    rows = BorrowRequestRepo.list_all(status=request.args.get("status"))
    return jsonify({"success": True, "data": [r.to_dict() for r in rows]})


@officer_bp.get("/transactions")
def all_transactions():
    now = utcnow()
    rows = TransactionRepo.list_all(status=request.args.get("status"))
    return jsonify({"success": True, "data": [t.to_dict(now) for t in rows]})


@officer_bp.put("/update-request-status/<int:request_id>")
def update_request_status(request_id: int):
    data = parse(RequestStatusUpdate, request.get_json(silent=True))
    req, txn = LifecycleService.update_request_status(
        request_id, data.status, current_user_id(), data.rejection_reason
    )
    return jsonify({
        "success": True,
        "message": "Request status updated successfully",
        "data": {
            "borrowRequest": req.to_dict(),
            "transaction": txn.to_dict() if txn else None,
        },
    })


@officer_bp.post("/transactions/<int:transaction_id>/return")
def mark_returned(transaction_id: int):
    data = parse(ReturnUpdate, request.get_json(silent=True))
    txn = LifecycleService.process_return(transaction_id, data.actual_return_date)
    return jsonify({"success": True, "message": "Return processed", "data": txn.to_dict()})


@officer_bp.get("/dashboard-stats")
def dashboard_stats():
    return jsonify({"success": True, "data": AdminService.officer_stats()})


@officer_bp.get("/pending-requests")
def pending_requests():
    rows = BorrowRequestRepo.list_pending(limit=10)
    return jsonify({"success": True, "data": [r.to_dict() for r in rows]})


@officer_bp.get("/overdue-loans")
def overdue_loans():
    now = utcnow()
    data = []
    for t in TransactionRepo.find_overdue(now, limit=10):
        row = t.to_dict(now)
        row["daysOverdue"] = days_overdue(t.return_date, now)
        data.append(row)
    return jsonify({"success": True, "data": data})


@officer_bp.get("/recent-activity")
def recent_activity():
    return jsonify({"success": True, "data": ActivityService.recent_user_activity(limit=20)})


@officer_bp.get("/low-stock-items")
def low_stock_items():
    data = [
        {
            "id": i.id,
            "name": i.name,
            "current": i.available,
            "quantity": i.quantity,
            "minimum": i.minimum_stock,
            "status": "critical" if i.available <= 2 else "low",
        }
        for i in ItemRepo.low_stock(limit=10)
    ]
    return jsonify({"success": True, "data": data})


@officer_bp.post("/send-overdue-notification/<int:transaction_id>")
def overdue_notification(transaction_id: int):
    ok, _err = send_overdue_notification(transaction_id)
    if not ok:
        raise AppError("Failed to send notification email", 502)
    return jsonify({"success": True, "message": "Overdue notification sent successfully"})
