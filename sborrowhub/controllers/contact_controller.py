from flask import Blueprint, request, jsonify

from sborrowhub.schemas.base import parse
from sborrowhub.schemas.misc_schema import ContactMessageCreate
from sborrowhub.services.contact_service import ContactService

contact_bp = Blueprint("contact", __name__)


@contact_bp.post("/")
def send_message():
    data = parse(ContactMessageCreate, request.get_json(silent=True))
    msg = ContactService.submit(data)
    return jsonify({"success": True, "message": "Message sent", "data": msg.to_dict()}), 201
