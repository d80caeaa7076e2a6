from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required, get_jwt

from library_app.schemas import LoginPayload, RegisterPayload, validate
from library_app.serializers import user_to_dict
from library_app.services.auth_service import AuthService
from library_app.utils.policy import get_current_user
from library_app.utils.request_args import json_body

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register")
def register():
    payload = validate(RegisterPayload, json_body())
    token, user = AuthService.register(payload)
    return jsonify({
        "message": "Registration successful",
        "access_token": token,
        "token_type": "Bearer",
        "user": user_to_dict(user)
    }), 201


@auth_bp.post("/login")
def login():
    payload = validate(LoginPayload, json_body())
    token, user = AuthService.login(payload.email, payload.password)
    return jsonify({
        "message": "Login successful",
        "access_token": token,
        "token_type": "Bearer",
        "user": user_to_dict(user)
    })


@auth_bp.post("/logout")
@jwt_required()
def logout():
    AuthService.logout(get_jwt()["jti"])
    return jsonify({"message": "Logged out successfully"})


@auth_bp.get("/user")
@jwt_required()
def me():
    return jsonify({"user": user_to_dict(get_current_user())})
