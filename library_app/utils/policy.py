"""Authorization policy.

Every endpoint resolves the caller through the JWT and asks this module
whether the action is allowed. Two roles exist: ``admin`` may do anything,
``user`` may only act on resources it owns.
"""
from functools import wraps

from flask import jsonify
from flask_jwt_extended import verify_jwt_in_request, current_user

from library_app.errors import Forbidden
from library_app.extensions import db
from library_app.models.user import User
from library_app.models.token_blocklist import TokenBlocklist


def init_jwt_callbacks(jwt):
    @jwt.user_identity_loader
    def _identity(user):
        return str(user.id) if isinstance(user, User) else str(user)

    @jwt.user_lookup_loader
    def _lookup(_header, payload):
        return db.session.get(User, int(payload["sub"]))

    @jwt.token_in_blocklist_loader
    def _revoked(_header, payload):
        return TokenBlocklist.query.filter_by(jti=payload["jti"]).first() is not None

    @jwt.unauthorized_loader
    def _missing(reason):
        return jsonify({"message": "Unauthenticated."}), 401

    @jwt.invalid_token_loader
    def _invalid(reason):
        return jsonify({"message": "Unauthenticated."}), 401

    @jwt.expired_token_loader
    def _expired(_header, _payload):
        return jsonify({"message": "Token has expired."}), 401

    @jwt.revoked_token_loader
    def _revoked_response(_header, _payload):
        return jsonify({"message": "Token has been revoked."}), 401

    @jwt.user_lookup_error_loader
    def _unknown_user(_header, _payload):
        return jsonify({"message": "Unauthenticated."}), 401


def get_current_user() -> User:
    verify_jwt_in_request()
    return current_user


def is_admin() -> bool:
    return get_current_user().is_admin


def ensure_admin():
    if not is_admin():
        raise Forbidden("Admin access required")


def ensure_self_or_admin(owner_id: int):
    user = get_current_user()
    if not user.is_admin and user.id != owner_id:
        raise Forbidden("Unauthorized")


def admin_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        ensure_admin()
        return fn(*args, **kwargs)
    return wrapper
