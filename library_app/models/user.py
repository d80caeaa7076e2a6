from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash

from library_app.extensions import db
from library_app.models.borrowing import Borrowing


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    library_id = db.Column(db.String(50), unique=True, nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False, default="user")
    password_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def active_borrowings(self):
        return self.borrowings.filter(Borrowing.returned_at.is_(None))

    def can_borrow_more_books(self, limit: int = 3) -> bool:
        return self.active_borrowings().count() < limit
