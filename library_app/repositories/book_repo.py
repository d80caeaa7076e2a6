from sqlalchemy import or_

from library_app.models.author import Author
from library_app.models.book import Book
from library_app.models.rating import Rating
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.extensions import db

SORTABLE_FIELDS = ("title", "publication_year", "created_at")


class BookRepo:
    @staticmethod
    def _search(q, term: str):
        pattern = f"%{term}%"
        return q.outerjoin(Author, Book.author_id == Author.id).filter(or_(
            Book.title.ilike(pattern),
            Book.isbn.ilike(pattern),
            Author.name.ilike(pattern),
        ))

    @staticmethod
    def list_query(search=None, author_id=None, available=None, sort_by="title", sort_direction="asc"):
        q = Book.query
        if search:
            q = BookRepo._search(q, search)
        if author_id is not None:
            q = q.filter(Book.author_id == author_id)
        if available is not None:
            q = q.filter(Book.available.is_(available))

        if sort_by in SORTABLE_FIELDS:
            column = getattr(Book, sort_by)
            q = q.order_by(column.desc() if sort_direction == "desc" else column.asc())
        return q.order_by(Book.id.asc())

    @staticmethod
    def search(term: str, limit: int = 20):
        return BookRepo._search(Book.query, term).order_by(Book.title.asc()).limit(limit).all()

    @staticmethod
    def get(book_id: int):
        return db.session.get(Book, book_id)

    @staticmethod
    def get_for_update(book_id: int):
        return db.session.get(Book, book_id, with_for_update=True, populate_existing=True)

    @staticmethod
    def get_by_isbn(isbn: str):
        return Book.query.filter_by(isbn=isbn).first()

    @staticmethod
    def count(available_only: bool = False) -> int:
        q = Book.query
        if available_only:
            q = q.filter(Book.available.is_(True))
        return q.count()

    @staticmethod
    def create(book: Book):
        db.session.add(book)
        db.session.commit()
        return book

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(book: Book):
        BorrowingRepo.delete_history(book_id=book.id)
        Rating.query.filter_by(book_id=book.id).delete(synchronize_session=False)
        db.session.delete(book)
        db.session.commit()
