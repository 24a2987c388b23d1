from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from sborrowhub.schemas.base import parse
from sborrowhub.schemas.misc_schema import CartAdd, CartCheckout, CartUpdate
from sborrowhub.services.cart_service import CartService
from sborrowhub.utils.decorators import current_user_id

cart_bp = Blueprint("cart", __name__)


@cart_bp.before_request
@jwt_required()
def _logged_in():
    return None


@cart_bp.get("/")
def get_cart():
    return jsonify({"success": True, "data": CartService.get_cart(current_user_id())})


@cart_bp.post("/add")
def add_to_cart():
    data = parse(CartAdd, request.get_json(silent=True))
    return jsonify({"success": True, "data": CartService.add(current_user_id(), data)})


@cart_bp.put("/update/<int:item_id>")
def update_cart_item(item_id: int):
    data = parse(CartUpdate, request.get_json(silent=True))
    return jsonify({"success": True, "data": CartService.update(current_user_id(), item_id, data)})


@cart_bp.delete("/remove/<int:item_id>")
def remove_from_cart(item_id: int):
    return jsonify({"success": True, "data": CartService.remove(current_user_id(), item_id)})


@cart_bp.delete("/clear")
def clear_cart():
    return jsonify({"success": True, "message": "Cart cleared successfully", "data": CartService.clear(current_user_id())})


@cart_bp.post("/checkout")
def checkout():
    data = parse(CartCheckout, request.get_json(silent=True))
    created = CartService.checkout(current_user_id(), data)
    return jsonify({
        "success": True,
        "message": f"{len(created)} borrow request(s) submitted",
        "data": [r.to_dict() for r in created],
    }), 201
