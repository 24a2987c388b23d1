from flask import Blueprint, request, jsonify

from sborrowhub.repositories.user_repo import UserRepo
from sborrowhub.schemas.base import parse
from sborrowhub.schemas.misc_schema import ContactReplyCreate, ContactStatusUpdate
from sborrowhub.schemas.user_schema import RoleUpdateSchema
from sborrowhub.services.admin_service import AdminService
from sborrowhub.services.contact_service import ContactService
from sborrowhub.utils.decorators import current_user_id, role_required

admin_bp = Blueprint("admin", __name__)


@admin_bp.before_request
@role_required("admin")
def _admin_only():
    return None


@admin_bp.get("/get-all-users")
def all_users():
    users = UserRepo.list_all(role=request.args.get("role"))
    return jsonify({"success": True, "data": [u.to_dict() for u in users]})


@admin_bp.get("/officer")
def all_officers():
    users = UserRepo.list_all(role="officer")
    return jsonify({"success": True, "data": [u.to_dict() for u in users]})


@admin_bp.put("/update-role/<int:user_id>")
def update_role(user_id: int):
    data = parse(RoleUpdateSchema, request.get_json(silent=True))
    user = AdminService.update_role(user_id, data.role, current_user_id())
    return jsonify({"success": True, "message": "Role updated", "data": user.to_dict()})


@admin_bp.get("/logs")
def logs():
    page = request.args.get("page", 1, type=int)
    per_page = request.args.get("perPage", 50, type=int)
    return jsonify({"success": True, "data": AdminService.logs(page, per_page)})


@admin_bp.get("/uptime")
def uptime():
    return jsonify({"success": True, "data": AdminService.uptime()})


@admin_bp.get("/system-info")
def system_info():
    return jsonify({"success": True, "data": AdminService.system_info()})


@admin_bp.get("/dashboard-stats")
def dashboard_stats():
    return jsonify({"success": True, "data": AdminService.dashboard_stats()})


# -----------------------------
# Feedback (contact messages)
# -----------------------------
@admin_bp.get("/feedback")
def feedback_list():
    rows = ContactService.list_messages(status=request.args.get("status"))
    return jsonify({"success": True, "data": [m.to_dict() for m in rows]})


@admin_bp.post("/feedback/<int:message_id>/reply")
def feedback_reply(message_id: int):
    data = parse(ContactReplyCreate, request.get_json(silent=True))
    msg = ContactService.reply(message_id, current_user_id(), data.message)
    return jsonify({"success": True, "message": "Reply sent", "data": msg.to_dict()})


@admin_bp.put("/feedback/<int:message_id>/status")
def feedback_status(message_id: int):
    data = parse(ContactStatusUpdate, request.get_json(silent=True))
    msg = ContactService.set_status(message_id, data.status)
    return jsonify({"success": True, "data": msg.to_dict()})


@admin_bp.patch("/feedback/<int:message_id>/read")
def feedback_read(message_id: int):
    msg = ContactService.mark_read(message_id)
    return jsonify({"success": True, "data": msg.to_dict()})
