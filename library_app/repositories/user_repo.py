from sqlalchemy import or_

from library_app.models.user import User
from library_app.models.rating import Rating
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.extensions import db


class UserRepo:
    @staticmethod
    def list_query(search: str | None = None, role: str | None = None):
        q = User.query
        if search:
            pattern = f"%{search}%"
            q = q.filter(or_(
                User.name.ilike(pattern),
                User.email.ilike(pattern),
                User.library_id.ilike(pattern),
            ))
        if role:
            q = q.filter(User.role == role)
        return q.order_by(User.id.asc())

    @staticmethod
    def get_by_email(email: str):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def get_by_library_id(library_id: str):
        return User.query.filter_by(library_id=library_id).first()

    @staticmethod
    def get_by_id(user_id: int):
        return db.session.get(User, user_id)

    @staticmethod
    def get_for_update(user_id: int):
        return db.session.get(User, user_id, with_for_update=True, populate_existing=True)

    @staticmethod
    def count() -> int:
        return User.query.count()

    @staticmethod
    def recent(limit: int):
        return User.query.order_by(User.created_at.desc(), User.id.desc()).limit(limit).all()

    @staticmethod
    def create(user: User):
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(user: User):
        BorrowingRepo.delete_history(user_id=user.id)
        Rating.query.filter_by(user_id=user.id).delete(synchronize_session=False)
        db.session.delete(user)
        db.session.commit()
