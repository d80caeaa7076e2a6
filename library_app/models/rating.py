from datetime import datetime
from sqlalchemy.orm import validates
from library_app.extensions import db


class Rating(db.Model):
    __tablename__ = "ratings"
    __table_args__ = (
        db.UniqueConstraint("user_id", "book_id", name="uq_ratings_user_book"),
        db.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_ratings_range"),
    )

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    rating = db.Column(db.Integer, nullable=False)
    review = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", backref=db.backref("ratings", lazy="dynamic"))
    book = db.relationship("Book", backref=db.backref("ratings", lazy="dynamic"))

    @validates("rating")
    def _validate_rating(self, _key, value):
        if value is None or int(value) < 1 or int(value) > 5:
            raise ValueError("Rating must be between 1 and 5")
        return int(value)
