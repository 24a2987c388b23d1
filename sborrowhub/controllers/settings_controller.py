from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from sborrowhub.services.settings_service import SettingsService
from sborrowhub.utils.decorators import current_user_id

settings_bp = Blueprint("settings", __name__)


@settings_bp.get("/")
@jwt_required()
def get_settings():
    return jsonify({"success": True, "data": SettingsService.get(current_user_id()).to_dict()})


@settings_bp.put("/")
@jwt_required()
def update_settings():
    prefs = SettingsService.update(current_user_id(), request.get_json(silent=True) or {})
    return jsonify({"success": True, "message": "Settings saved", "data": prefs.to_dict()})


@settings_bp.post("/reset")
@jwt_required()
def reset_settings():
    return jsonify({"success": True, "data": SettingsService.reset(current_user_id()).to_dict()})
