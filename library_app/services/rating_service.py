from flask import current_app

from library_app.errors import BusinessRuleViolation, NotFound
from library_app.models.book import Book
from library_app.models.rating import Rating
from library_app.models.user import User
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.repositories.rating_repo import RatingRepo


class RatingService:
    @staticmethod
    def get_rating(rating_id: int):
        rating = RatingRepo.get(rating_id)
        if not rating:
            raise NotFound("Rating not found")
        return rating

    @staticmethod
    def create_rating(user: User, book: Book, payload):
        if RatingRepo.get_for(user.id, book.id):
            raise BusinessRuleViolation("You have already rated this book")

        if not BorrowingRepo.has_returned(user.id, book.id):
            raise BusinessRuleViolation("You can only rate books you have borrowed and returned")

        rating = Rating(
            user_id=user.id,
            book_id=book.id,
            rating=payload.rating,
            review=payload.review,
        )
        RatingRepo.create(rating)
        current_app.logger.info(f"[ratings] user={user.id} rated book={book.id} ({rating.rating})")
        return rating

    @staticmethod
    def update_rating(rating: Rating, payload):
        changes = payload.model_dump(exclude_unset=True)
        for k in ["rating", "review"]:
            if k in changes:
                setattr(rating, k, changes[k])
        RatingRepo.update()
        return rating

    @staticmethod
    def delete_rating(rating: Rating):
        RatingRepo.delete(rating)
