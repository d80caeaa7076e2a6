from datetime import datetime
from library_app.models.borrowing import Borrowing
from library_app.models.notification_log import NotificationLog
from library_app.extensions import db


class BorrowingRepo:
    @staticmethod
    def get(borrowing_id: int):
        return db.session.get(Borrowing, borrowing_id)

    @staticmethod
    def get_for_update(borrowing_id: int):
        return db.session.get(Borrowing, borrowing_id, with_for_update=True, populate_existing=True)

    @staticmethod
    def add(borrowing: Borrowing):
        db.session.add(borrowing)
        return borrowing

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def by_user_query(user_id: int):
        return Borrowing.query.filter_by(user_id=user_id).order_by(Borrowing.borrowed_at.desc(), Borrowing.id.desc())

    @staticmethod
    def active_query(overdue_only: bool = False, now: datetime | None = None):
        q = Borrowing.query.filter(Borrowing.returned_at.is_(None))
        if overdue_only:
            q = q.filter(Borrowing.due_date < (now or datetime.utcnow()))
        return q.order_by(Borrowing.due_date.asc())

    @staticmethod
    def count_active(user_id: int | None = None) -> int:
        q = Borrowing.query.filter(Borrowing.returned_at.is_(None))
        if user_id is not None:
            q = q.filter(Borrowing.user_id == user_id)
        return q.count()

    @staticmethod
    def count_active_for_book(book_id: int) -> int:
        return Borrowing.query.filter(
            Borrowing.book_id == book_id,
            Borrowing.returned_at.is_(None)
        ).count()

    @staticmethod
    def count_overdue(now: datetime, user_id: int | None = None) -> int:
        q = Borrowing.query.filter(Borrowing.returned_at.is_(None), Borrowing.due_date < now)
        if user_id is not None:
            q = q.filter(Borrowing.user_id == user_id)
        return q.count()

    @staticmethod
    def count_due_between(start: datetime, end: datetime, user_id: int) -> int:
        return Borrowing.query.filter(
            Borrowing.user_id == user_id,
            Borrowing.returned_at.is_(None),
            Borrowing.due_date >= start,
            Borrowing.due_date <= end
        ).count()

    @staticmethod
    def count_total(user_id: int) -> int:
        return Borrowing.query.filter_by(user_id=user_id).count()

    @staticmethod
    def count_borrowed_since(start: datetime) -> int:
        return Borrowing.query.filter(Borrowing.borrowed_at >= start).count()

    @staticmethod
    def count_returned_since(start: datetime) -> int:
        return Borrowing.query.filter(
            Borrowing.returned_at.isnot(None),
            Borrowing.returned_at >= start
        ).count()

    @staticmethod
    def has_returned(user_id: int, book_id: int) -> bool:
        return Borrowing.query.filter(
            Borrowing.user_id == user_id,
            Borrowing.book_id == book_id,
            Borrowing.returned_at.isnot(None)
        ).first() is not None

    @staticmethod
    def recent_borrowed(limit: int):
        return Borrowing.query.order_by(Borrowing.borrowed_at.desc()).limit(limit).all()

    @staticmethod
    def recent_returned(limit: int, user_id: int | None = None):
        q = Borrowing.query.filter(Borrowing.returned_at.isnot(None))
        if user_id is not None:
            q = q.filter(Borrowing.user_id == user_id)
        return q.order_by(Borrowing.returned_at.desc()).limit(limit).all()

    @staticmethod
    def active_for_user(user_id: int):
        return Borrowing.query.filter(
            Borrowing.user_id == user_id,
            Borrowing.returned_at.is_(None)
        ).order_by(Borrowing.due_date.asc()).all()

    @staticmethod
    def find_overdue(now: datetime):
        return Borrowing.query.filter(
            Borrowing.returned_at.is_(None),
            Borrowing.due_date < now
        ).all()

    @staticmethod
    def delete_history(book_id: int | None = None, user_id: int | None = None):
        """Delete borrowings (and their notification logs) of a book or user. No commit."""
        q = Borrowing.query
        if book_id is not None:
            q = q.filter(Borrowing.book_id == book_id)
        if user_id is not None:
            q = q.filter(Borrowing.user_id == user_id)

        ids = [row.id for row in q.with_entities(Borrowing.id).all()]
        if not ids:
            return
        NotificationLog.query.filter(NotificationLog.borrowing_id.in_(ids)).delete(synchronize_session=False)
        Borrowing.query.filter(Borrowing.id.in_(ids)).delete(synchronize_session=False)
