from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from sborrowhub.schemas.base import parse
from sborrowhub.schemas.user_schema import (
    ChangePasswordSchema,
    LoginSchema,
    SignupSchema,
    UpdateProfileSchema,
)
from sborrowhub.services.auth_service import AuthService
from sborrowhub.services.settings_service import SettingsService
from sborrowhub.utils.decorators import current_role, current_user_id

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/signup")
def signup():
    data = parse(SignupSchema, request.get_json(silent=True))
    user = AuthService.register(data)
    return jsonify({
        "success": True,
        "message": "User created",
        "access_token": AuthService.issue_token(user),
        "user": user.to_dict(),
    }), 201


@auth_bp.post("/login")
def login():
    data = parse(LoginSchema, request.get_json(silent=True))
    token, user = AuthService.login(data.user, data.password)
    return jsonify({
        "success": True,
        "message": "User logged in successfully",
        "access_token": token,
        "user": user.to_dict(),
        "settings": SettingsService.get(user.id).to_dict(),
    })


@auth_bp.post("/logout")
@jwt_required()
def logout():
    AuthService.logout(current_user_id())
    return jsonify({"success": True, "message": "Logout successful"})


@auth_bp.get("/check-auth")
@jwt_required()
def check_auth():
    user = AuthService.get_user(current_user_id())
    return jsonify({"success": True, "user": user.to_dict()})


@auth_bp.get("/check-role")
@jwt_required()
def check_role():
    return jsonify({"success": True, "role": current_role()})


@auth_bp.put("/update-profile")
@jwt_required()
def update_profile():
    data = parse(UpdateProfileSchema, request.get_json(silent=True))
    user = AuthService.update_profile(current_user_id(), data)
    return jsonify({"success": True, "message": "Profile updated successfully", "user": user.to_dict()})


@auth_bp.put("/change-password")
@jwt_required()
def change_password():
    data = parse(ChangePasswordSchema, request.get_json(silent=True))
    AuthService.change_password(current_user_id(), data)
    return jsonify({"success": True, "message": "Password changed successfully"})
