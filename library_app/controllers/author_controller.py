from flask import Blueprint, jsonify, request

from library_app.models.book import Book
from library_app.repositories.author_repo import AuthorRepo
from library_app.schemas import AuthorCreate, AuthorUpdate, validate
from library_app.serializers import author_to_dict, book_to_dict
from library_app.services.author_service import AuthorService
from library_app.utils.pagination import paginate
from library_app.utils.policy import admin_required
from library_app.utils.request_args import json_body

author_bp = Blueprint("authors", __name__)


@author_bp.get("/authors")
def list_authors():
    query = AuthorRepo.list_query(search=request.args.get("search"))
    return jsonify(paginate(query, author_to_dict))


@author_bp.post("/authors")
@admin_required
def create_author():
    payload = validate(AuthorCreate, json_body())
    author = AuthorService.create_author(payload)
    return jsonify({"message": "Author created successfully", "author": author_to_dict(author)}), 201


@author_bp.get("/authors/<int:author_id>")
@admin_required
def get_author(author_id: int):
    author = AuthorService.get_author(author_id)
    data = author_to_dict(author)
    data["books"] = [book_to_dict(b) for b in author.books.order_by(Book.title.asc()).all()]
    return jsonify({"author": data})


@author_bp.put("/authors/<int:author_id>")
@admin_required
def update_author(author_id: int):
    author = AuthorService.get_author(author_id)
    payload = validate(AuthorUpdate, json_body())
    author = AuthorService.update_author(author, payload)
    return jsonify({"message": "Author updated successfully", "author": author_to_dict(author)})


@author_bp.delete("/authors/<int:author_id>")
@admin_required
def delete_author(author_id: int):
    author = AuthorService.get_author(author_id)
    AuthorService.delete_author(author)
    return jsonify({"message": "Author deleted successfully"})
