from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from library_app.repositories.rating_repo import RatingRepo
from library_app.schemas import RatingCreate, RatingUpdate, validate
from library_app.serializers import rating_to_dict
from library_app.services.book_service import BookService
from library_app.services.rating_service import RatingService
from library_app.utils.pagination import paginate
from library_app.utils.policy import ensure_self_or_admin, get_current_user
from library_app.utils.request_args import json_body

rating_bp = Blueprint("ratings", __name__)


@rating_bp.get("/books/<int:book_id>/ratings")
@jwt_required()
def book_ratings(book_id: int):
    book = BookService.get_book(book_id)
    return jsonify({"data": [rating_to_dict(r) for r in RatingRepo.list_for_book(book.id)]})


@rating_bp.post("/books/<int:book_id>/ratings")
@jwt_required()
def rate_book(book_id: int):
    book = BookService.get_book(book_id)
    payload = validate(RatingCreate, json_body())
    rating = RatingService.create_rating(get_current_user(), book, payload)
    return jsonify({"message": "Rating submitted successfully", "rating": rating_to_dict(rating)}), 201


# Compatibility alias: older clients post to /rate
@rating_bp.post("/books/<int:book_id>/rate")
@jwt_required()
def rate_book_alias(book_id: int):
    return rate_book(book_id)


@rating_bp.get("/ratings/my-ratings")
@jwt_required()
def my_ratings():
    user = get_current_user()
    return jsonify(paginate(RatingRepo.by_user_query(user.id), rating_to_dict))


@rating_bp.get("/ratings/<int:rating_id>")
@jwt_required()
def get_rating(rating_id: int):
    rating = RatingService.get_rating(rating_id)
    ensure_self_or_admin(rating.user_id)
    return jsonify({"rating": rating_to_dict(rating)})


@rating_bp.put("/ratings/<int:rating_id>")
@jwt_required()
def update_rating(rating_id: int):
    rating = RatingService.get_rating(rating_id)
    ensure_self_or_admin(rating.user_id)

    payload = validate(RatingUpdate, json_body())
    rating = RatingService.update_rating(rating, payload)
    return jsonify({"message": "Rating updated successfully", "rating": rating_to_dict(rating)})


@rating_bp.delete("/ratings/<int:rating_id>")
@jwt_required()
def delete_rating(rating_id: int):
    rating = RatingService.get_rating(rating_id)
    ensure_self_or_admin(rating.user_id)

    RatingService.delete_rating(rating)
    return jsonify({"message": "Rating deleted successfully"})
