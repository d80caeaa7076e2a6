from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from library_app.repositories.user_repo import UserRepo
from library_app.schemas import UserCreate, UserUpdate, validate
from library_app.serializers import borrowing_to_dict, rating_to_dict, user_to_dict
from library_app.services.user_service import UserService
from library_app.utils.pagination import paginate
from library_app.utils.policy import admin_required, ensure_self_or_admin, is_admin
from library_app.utils.request_args import json_body

user_bp = Blueprint("users", __name__)


@user_bp.get("/users")
@admin_required
def list_users():
    query = UserRepo.list_query(
        search=request.args.get("search"),
        role=request.args.get("role"),
    )
    return jsonify(paginate(query, user_to_dict))


@user_bp.post("/users")
@admin_required
def create_user():
    payload = validate(UserCreate, json_body())
    user = UserService.create_user(payload)
    return jsonify({"message": "User created successfully", "user": user_to_dict(user)}), 201


@user_bp.get("/users/<int:user_id>")
@jwt_required()
def get_user(user_id: int):
    user = UserService.get_user(user_id)
    ensure_self_or_admin(user.id)

    data = user_to_dict(user)
    data["borrowings"] = [borrowing_to_dict(b) for b in user.borrowings.all()]
    data["ratings"] = [rating_to_dict(r) for r in user.ratings.all()]
    return jsonify({"user": data})


@user_bp.put("/users/<int:user_id>")
@jwt_required()
def update_user(user_id: int):
    user = UserService.get_user(user_id)
    ensure_self_or_admin(user.id)

    payload = validate(UserUpdate, json_body())
    user = UserService.update_user(user, payload, by_admin=is_admin())
    return jsonify({"message": "User updated successfully", "user": user_to_dict(user)})


@user_bp.delete("/users/<int:user_id>")
@admin_required
def delete_user(user_id: int):
    user = UserService.get_user(user_id)
    UserService.delete_user(user)
    return jsonify({"message": "User deleted successfully"})
