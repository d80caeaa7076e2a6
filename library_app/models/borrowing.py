from datetime import datetime
from library_app.extensions import db


class Borrowing(db.Model):
    """A single borrow/return cycle of one book by one user.

    Open (active) while ``returned_at`` is NULL. Rows are created on borrow,
    stamped once on return and never otherwise modified.
    """

    __tablename__ = "borrowings"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    borrowed_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    due_date = db.Column(db.DateTime, nullable=False)
    returned_at = db.Column(db.DateTime, nullable=True, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", backref=db.backref("borrowings", lazy="dynamic"))
    book = db.relationship("Book", backref=db.backref("borrowings", lazy="dynamic"))

    @property
    def is_returned(self) -> bool:
        return self.returned_at is not None

    def is_overdue(self, now: datetime | None = None) -> bool:
        now = now or datetime.utcnow()
        return self.returned_at is None and now > self.due_date

    def days_overdue(self, now: datetime | None = None) -> int:
        now = now or datetime.utcnow()
        if not self.is_overdue(now):
            return 0
        return (now - self.due_date).days
