from datetime import datetime
from sqlalchemy import func

from library_app.extensions import db
from library_app.models.borrowing import Borrowing
from library_app.models.rating import Rating


class Book(db.Model):
    __tablename__ = "books"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False, index=True)
    isbn = db.Column(db.String(20), unique=True, nullable=False, index=True)
    publication_year = db.Column(db.SmallInteger, nullable=False)

    # Denormalized: flipped by borrow/return, is_available() also checks borrowings
    available = db.Column(db.Boolean, nullable=False, default=True)

    author_id = db.Column(db.Integer, db.ForeignKey("authors.id"), nullable=False, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    author = db.relationship("Author", backref=db.backref("books", lazy="dynamic"))

    def active_borrowings(self):
        return self.borrowings.filter(Borrowing.returned_at.is_(None))

    def is_available(self) -> bool:
        return bool(self.available) and self.active_borrowings().count() == 0

    @property
    def average_rating(self) -> float | None:
        avg = db.session.query(func.avg(Rating.rating)).filter(Rating.book_id == self.id).scalar()
        return round(float(avg), 2) if avg is not None else None

    @property
    def ratings_count(self) -> int:
        return self.ratings.count()
