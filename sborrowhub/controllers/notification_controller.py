from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from sborrowhub.services.notification_service import NotificationService
from sborrowhub.utils.decorators import current_user_id

notif_bp = Blueprint("notifications", __name__)


@notif_bp.get("/")
@jwt_required()
def my_notifications():
    rows = NotificationService.list_for(current_user_id())
    return jsonify({"success": True, "data": [n.to_dict() for n in rows]})


@notif_bp.patch("/<int:notification_id>/read")
@jwt_required()
def mark_read(notification_id: int):
    n = NotificationService.mark_read(notification_id, current_user_id())
    return jsonify({"success": True, "data": n.to_dict()})


@notif_bp.patch("/mark-all-read")
@jwt_required()
def mark_all_read():
    count = NotificationService.mark_all_read(current_user_id())
    return jsonify({"success": True, "updated": count})
