from library_app.models.rating import Rating
from library_app.extensions import db


class RatingRepo:
    @staticmethod
    def get(rating_id: int):
        return db.session.get(Rating, rating_id)

    @staticmethod
    def get_for(user_id: int, book_id: int):
        return Rating.query.filter_by(user_id=user_id, book_id=book_id).first()

    @staticmethod
    def list_for_book(book_id: int):
        return Rating.query.filter_by(book_id=book_id).order_by(Rating.created_at.desc(), Rating.id.desc()).all()

    @staticmethod
    def by_user_query(user_id: int):
        return Rating.query.filter_by(user_id=user_id).order_by(Rating.created_at.desc(), Rating.id.desc())

    @staticmethod
    def create(rating: Rating):
        db.session.add(rating)
        db.session.commit()
        return rating

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(rating: Rating):
        db.session.delete(rating)
        db.session.commit()
