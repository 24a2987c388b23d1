# sborrowhub/controllers/catalog_controller.py

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from sborrowhub.constants import STAFF_ROLES
from sborrowhub.schemas.base import parse
from sborrowhub.schemas.borrow_request_schema import BorrowRequestCreate
from sborrowhub.schemas.item_schema import ItemCreate, ItemUpdate
from sborrowhub.services.borrow_service import BorrowService
from sborrowhub.services.item_service import ItemService
from sborrowhub.utils.decorators import current_user_id, role_required

catalog_bp = Blueprint("catalog", __name__)


@catalog_bp.get("/get-items")
def list_items():
    items = ItemService.list_items(
        category=request.args.get("category"),
        search=request.args.get("search"),
        status=request.args.get("status"),
    )
    return jsonify({"success": True, "data": [i.to_dict() for i in items]})


@catalog_bp.get("/items/<int:item_id>")
def get_item(item_id: int):
    return jsonify({"success": True, "data": ItemService.item_detail(item_id)})


@catalog_bp.post("/add-item")
@role_required(*STAFF_ROLES)
def add_item():
    data = parse(ItemCreate, request.get_json(silent=True))
    item = ItemService.create_item(data)
    return jsonify({"success": True, "message": "Item created", "data": item.to_dict()}), 201


@catalog_bp.put("/update-item/<int:item_id>")
@role_required(*STAFF_ROLES)
def update_item(item_id: int):
    data = parse(ItemUpdate, request.get_json(silent=True))
    item = ItemService.update_item(item_id, data)
    return jsonify({"success": True, "message": "Item updated successfully", "data": item.to_dict()})


@catalog_bp.delete("/delete-item/<int:item_id>")
@role_required(*STAFF_ROLES)
def delete_item(item_id: int):
    ItemService.delete_item(item_id)
    return jsonify({"success": True, "message": "Item deleted"})


@catalog_bp.post("/request-item")
@jwt_required()
def request_item():
    data = parse(BorrowRequestCreate, request.get_json(silent=True))
    req = BorrowService.create_request(current_user_id(), data)
    return jsonify({
        "success": True,
        "message": "Borrow request submitted successfully",
        "data": req.to_dict(),
    }), 201
