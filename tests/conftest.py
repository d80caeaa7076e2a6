from datetime import datetime, timedelta

import pytest
from flask_jwt_extended import create_access_token

from library_app import create_app
from library_app.config import TestConfig
from library_app.extensions import db
from library_app.models.author import Author
from library_app.models.book import Book
from library_app.models.borrowing import Borrowing
from library_app.models.rating import Rating
from library_app.models.user import User


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(name, email, library_id, role="user", password="password123"):
    user = User(name=name, email=email, library_id=library_id, role=role)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def admin(app):
    return _make_user("Admin User", "admin@example.org", "ADMIN001", role="admin")


@pytest.fixture
def member(app):
    return _make_user("Alice Johnson", "alice@example.org", "USER001")


@pytest.fixture
def other_member(app):
    return _make_user("Bob Smith", "bob@example.org", "USER002")


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = create_access_token(identity=user)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def make_author(app):
    counter = {"n": 0}

    def _make(name=None, bio=None):
        counter["n"] += 1
        author = Author(name=name or f"Author {counter['n']}", bio=bio)
        db.session.add(author)
        db.session.commit()
        return author
    return _make


@pytest.fixture
def make_book(app, make_author):
    counter = {"n": 0}

    def _make(title=None, author=None, isbn=None, year=2000, available=True):
        counter["n"] += 1
        author = author or make_author()
        book = Book(
            title=title or f"Book {counter['n']}",
            isbn=isbn or f"978-{counter['n']:09d}",
            publication_year=year,
            available=available,
            author_id=author.id,
        )
        db.session.add(book)
        db.session.commit()
        return book
    return _make


@pytest.fixture
def make_borrowing(app):
    def _make(user, book, borrowed_days_ago=1, period=14, returned=False):
        borrowed_at = datetime.utcnow() - timedelta(days=borrowed_days_ago)
        borrowing = Borrowing(
            user_id=user.id,
            book_id=book.id,
            borrowed_at=borrowed_at,
            due_date=borrowed_at + timedelta(days=period),
            returned_at=datetime.utcnow() if returned else None,
        )
        if not returned:
            book.available = False
        db.session.add(borrowing)
        db.session.commit()
        return borrowing
    return _make


@pytest.fixture
def make_rating(app):
    def _make(user, book, value=4, review=None):
        rating = Rating(user_id=user.id, book_id=book.id, rating=value, review=review)
        db.session.add(rating)
        db.session.commit()
        return rating
    return _make
