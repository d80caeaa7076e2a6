from flask import current_app

from library_app.errors import BusinessRuleViolation, NotFound, ValidationFailed
from library_app.models.book import Book
from library_app.repositories.author_repo import AuthorRepo
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrowing_repo import BorrowingRepo


class BookService:
    @staticmethod
    def get_book(book_id: int):
        book = BookRepo.get(book_id)
        if not book:
            raise NotFound("Book not found")
        return book

    @staticmethod
    def _check_references(changes: dict, book_id: int | None = None):
        errors = {}
        if "isbn" in changes:
            existing = BookRepo.get_by_isbn(changes["isbn"])
            if existing and existing.id != book_id:
                errors["isbn"] = ["The isbn has already been taken."]
        if "author_id" in changes and not AuthorRepo.get(changes["author_id"]):
            errors["author_id"] = ["The selected author id is invalid."]
        if errors:
            raise ValidationFailed(errors)

    @staticmethod
    def create_book(payload):
        data = payload.model_dump()
        BookService._check_references(data)

        book = Book(
            title=data["title"],
            isbn=data["isbn"],
            publication_year=data["publication_year"],
            author_id=data["author_id"],
            available=data["available"],
        )
        BookRepo.create(book)
        current_app.logger.info(f"[books] Created book id={book.id} isbn={book.isbn}")
        return book

    @staticmethod
    def update_book(book: Book, payload):
        changes = payload.model_dump(exclude_unset=True)
        BookService._check_references(changes, book.id)

        for k in ["title", "isbn", "publication_year", "author_id", "available"]:
            if k in changes:
                setattr(book, k, changes[k])

        BookRepo.update()
        return book

    @staticmethod
    def delete_book(book: Book):
        if BorrowingRepo.count_active_for_book(book.id) > 0:
            raise BusinessRuleViolation("Cannot delete book with active borrowings")
        book_id = book.id
        BookRepo.delete(book)
        current_app.logger.info(f"[books] Deleted book id={book_id}")
