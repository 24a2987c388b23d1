from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from sborrowhub.schemas.base import parse
from sborrowhub.schemas.misc_schema import ReviewCreate
from sborrowhub.services.review_service import ReviewService
from sborrowhub.utils.decorators import current_user_id

review_bp = Blueprint("reviews", __name__)


@review_bp.post("/")
@jwt_required()
def create_review():
    data = parse(ReviewCreate, request.get_json(silent=True))
    review = ReviewService.create_review(current_user_id(), data)
    return jsonify({"success": True, "message": "Review submitted", "data": review.to_dict()}), 201


@review_bp.get("/item/<int:item_id>")
def item_reviews(item_id: int):
    rows = ReviewService.list_for_item(item_id)
    return jsonify({"success": True, "data": [r.to_dict() for r in rows]})
