from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from sborrowhub.services.borrow_service import BorrowService
from sborrowhub.utils.decorators import current_user_id

borrow_bp = Blueprint("borrow", __name__)


@borrow_bp.get("/my-requests")
@jwt_required()
def my_requests():
    rows = BorrowService.my_requests(current_user_id())
    return jsonify({"success": True, "data": [r.to_dict() for r in rows]})


@borrow_bp.get("/my-transactions")
@jwt_required()
def my_transactions():
    rows = BorrowService.my_transactions(current_user_id())
    return jsonify({"success": True, "data": [t.to_dict() for t in rows]})
