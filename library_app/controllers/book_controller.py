from flask import Blueprint, jsonify, request

from library_app.models.borrowing import Borrowing
from library_app.repositories.book_repo import BookRepo
from library_app.schemas import BookCreate, BookUpdate, validate
from library_app.serializers import book_to_dict, borrowing_to_dict, rating_to_dict, user_brief
from library_app.services.book_service import BookService
from library_app.utils.pagination import paginate
from library_app.utils.policy import admin_required
from library_app.utils.request_args import bool_arg, json_body

book_bp = Blueprint("books", __name__)


@book_bp.get("/books")
def list_books():
    query = BookRepo.list_query(
        search=request.args.get("search"),
        author_id=request.args.get("author", type=int),
        available=bool_arg("available"),
        sort_by=request.args.get("sort_by", "title"),
        sort_direction=request.args.get("sort_direction", "asc"),
    )
    return jsonify(paginate(query, book_to_dict))


@book_bp.get("/books/search")
def search_books():
    term = (request.args.get("q") or "").strip()
    if not term:
        return jsonify({"books": []})
    books = BookRepo.search(term, limit=20)
    return jsonify({"books": [book_to_dict(b) for b in books]})


@book_bp.get("/books/<int:book_id>")
def get_book(book_id: int):
    b = BookService.get_book(book_id)

    data = book_to_dict(b)
    data["ratings"] = [rating_to_dict(r) for r in b.ratings.all()]
    data["borrowings"] = [
        borrowing_to_dict(x) for x in b.borrowings.order_by(Borrowing.borrowed_at.desc()).all()
    ]
    data["total_borrowings"] = len(data["borrowings"])

    # only when the book is out
    if not data["is_available"]:
        current = b.active_borrowings().first()
        data["current_borrowing"] = {
            "id": current.id,
            "user": user_brief(current.user),
            "borrowed_at": current.borrowed_at.isoformat(),
            "due_date": current.due_date.isoformat(),
        } if current else None

    return jsonify({"book": data})


@book_bp.post("/books")
@admin_required
def create_book():
    payload = validate(BookCreate, json_body())
    b = BookService.create_book(payload)
    return jsonify({"message": "Book created successfully", "book": book_to_dict(b)}), 201


@book_bp.put("/books/<int:book_id>")
@admin_required
def update_book(book_id: int):
    b = BookService.get_book(book_id)
    payload = validate(BookUpdate, json_body())
    b = BookService.update_book(b, payload)
    return jsonify({"message": "Book updated successfully", "book": book_to_dict(b)})


@book_bp.delete("/books/<int:book_id>")
@admin_required
def delete_book(book_id: int):
    b = BookService.get_book(book_id)
    BookService.delete_book(b)
    return jsonify({"message": "Book deleted successfully"})
