from datetime import datetime, timedelta

from flask import current_app

from library_app.errors import BusinessRuleViolation, NotFound, ValidationFailed
from library_app.models.borrowing import Borrowing
from library_app.models.user import User
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.repositories.user_repo import UserRepo


class BorrowingService:
    @staticmethod
    def get_borrowing(borrowing_id: int):
        borrowing = BorrowingRepo.get(borrowing_id)
        if not borrowing:
            raise NotFound("Borrowing not found")
        return borrowing

    @staticmethod
    def borrow_book(user: User, book_id: int):
        """
        Checks and writes happen in one transaction. The user row and then the
        book row are locked so concurrent borrows cannot both pass the checks.
        """
        cfg = current_app.config

        UserRepo.get_for_update(user.id)
        book = BookRepo.get_for_update(book_id)
        if not book:
            raise ValidationFailed({"book_id": ["The selected book id is invalid."]})

        if not book.is_available():
            raise BusinessRuleViolation("Book is not available for borrowing")

        limit = cfg["MAX_ACTIVE_BORROWINGS"]
        if not user.can_borrow_more_books(limit):
            raise BusinessRuleViolation(
                f"User has reached the maximum borrowing limit of {limit} books"
            )

        now = datetime.utcnow()
        borrowing = Borrowing(
            user_id=user.id,
            book_id=book.id,
            borrowed_at=now,
            due_date=now + timedelta(days=cfg["BORROW_PERIOD_DAYS"]),
        )
        BorrowingRepo.add(borrowing)
        book.available = False

        # single commit: borrowing row + availability flag
        BorrowingRepo.commit()

        current_app.logger.info(
            f"[borrowing] user={user.id} borrowed book={book.id} borrowing={borrowing.id} due={borrowing.due_date}"
        )
        return borrowing

    @staticmethod
    def return_book(borrowing_id: int):
        borrowing = BorrowingRepo.get_for_update(borrowing_id)
        if not borrowing:
            raise NotFound("Borrowing not found")

        if borrowing.is_returned:
            raise BusinessRuleViolation("Book has already been returned")

        borrowing.returned_at = datetime.utcnow()
        if borrowing.book:
            borrowing.book.available = True

        BorrowingRepo.commit()

        current_app.logger.info(
            f"[borrowing] borrowing={borrowing.id} returned (user={borrowing.user_id} book={borrowing.book_id})"
        )
        return borrowing
