from datetime import datetime

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.schemas import BorrowPayload, validate
from library_app.serializers import borrowing_to_dict
from library_app.services.borrowing_service import BorrowingService
from library_app.services.dashboard_service import DashboardService
from library_app.services.user_service import UserService
from library_app.utils.pagination import paginate
from library_app.utils.policy import admin_required, ensure_self_or_admin, get_current_user
from library_app.utils.request_args import json_body

borrowing_bp = Blueprint("borrowings", __name__)


@borrowing_bp.post("/users/<int:user_id>/borrow")
@jwt_required()
def borrow_book(user_id: int):
    user = UserService.get_user(user_id)
    ensure_self_or_admin(user.id)

    payload = validate(BorrowPayload, json_body())
    b = BorrowingService.borrow_book(user, payload.book_id)
    return jsonify({"message": "Book borrowed successfully", "borrowing": borrowing_to_dict(b)}), 201


@borrowing_bp.post("/borrowings/<int:borrowing_id>/return")
@jwt_required()
def return_book(borrowing_id: int):
    b = BorrowingService.get_borrowing(borrowing_id)
    ensure_self_or_admin(b.user_id)

    b = BorrowingService.return_book(b.id)
    return jsonify({"message": "Book returned successfully", "borrowing": borrowing_to_dict(b)})


@borrowing_bp.get("/my-borrowings")
@jwt_required()
def my_borrowings():
    user = get_current_user()
    now = datetime.utcnow()
    rows = BorrowingRepo.by_user_query(user.id).all()
    return jsonify({"borrowings": [borrowing_to_dict(x, now) for x in rows]})


@borrowing_bp.get("/users/<int:user_id>/borrowings")
@jwt_required()
def user_borrowings(user_id: int):
    user = UserService.get_user(user_id)
    ensure_self_or_admin(user.id)
    return jsonify(paginate(BorrowingRepo.by_user_query(user.id), borrowing_to_dict))


@borrowing_bp.get("/borrowings/active")
@admin_required
def active_borrowings():
    overdue_only = request.args.get("overdue") in ("1", "true")
    query = BorrowingRepo.active_query(overdue_only=overdue_only)
    return jsonify(paginate(query, borrowing_to_dict))


@borrowing_bp.get("/borrowings/statistics")
@admin_required
def statistics():
    return jsonify({"statistics": DashboardService.borrowing_statistics()})
