from datetime import datetime, timedelta

from library_app.models.user import User
from library_app.repositories.author_repo import AuthorRepo
from library_app.repositories.book_repo import BookRepo
from library_app.repositories.borrowing_repo import BorrowingRepo
from library_app.repositories.rating_repo import RatingRepo
from library_app.repositories.user_repo import UserRepo
from library_app.serializers import book_to_dict, iso, rating_to_dict

DUE_SOON_DAYS = 3


def _month_start(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


class DashboardService:
    @staticmethod
    def borrowing_statistics(now: datetime | None = None) -> dict:
        now = now or datetime.utcnow()
        start = _month_start(now)
        return {
            "total_active_borrowings": BorrowingRepo.count_active(),
            "overdue_borrowings": BorrowingRepo.count_overdue(now),
            "total_books_borrowed_this_month": BorrowingRepo.count_borrowed_since(start),
            "total_books_returned_this_month": BorrowingRepo.count_returned_since(start),
        }

    @staticmethod
    def recent_activities(limit: int = 10) -> list:
        activities = []

        for b in BorrowingRepo.recent_borrowed(5):
            activities.append({
                "type": "borrowing",
                "message": f"{b.user.name} borrowed '{b.book.title}'",
                "timestamp": b.borrowed_at,
            })

        for b in BorrowingRepo.recent_returned(5):
            activities.append({
                "type": "return",
                "message": f"{b.user.name} returned '{b.book.title}'",
                "timestamp": b.returned_at,
            })

        for u in UserRepo.recent(3):
            activities.append({
                "type": "registration",
                "message": f"New user {u.name} registered",
                "timestamp": u.created_at,
            })

        activities.sort(key=lambda a: a["timestamp"], reverse=True)
        return [dict(a, timestamp=iso(a["timestamp"])) for a in activities[:limit]]

    @staticmethod
    def admin_dashboard(now: datetime | None = None) -> dict:
        now = now or datetime.utcnow()
        start = _month_start(now)

        stats = {
            "total_books": BookRepo.count(),
            "total_users": UserRepo.count(),
            "active_borrowings": BorrowingRepo.count_active(),
            "overdue_books": BorrowingRepo.count_overdue(now),
            "available_books": BookRepo.count(available_only=True),
            "total_authors": AuthorRepo.count(),
            "books_borrowed_this_month": BorrowingRepo.count_borrowed_since(start),
            "books_returned_this_month": BorrowingRepo.count_returned_since(start),
        }
        return {
            "statistics": stats,
            "recent_activities": DashboardService.recent_activities(),
        }

    @staticmethod
    def user_dashboard(user: User, now: datetime | None = None) -> dict:
        now = now or datetime.utcnow()

        stats = {
            "current_borrowings_count": BorrowingRepo.count_active(user_id=user.id),
            "total_borrowings": BorrowingRepo.count_total(user.id),
            "overdue_books": BorrowingRepo.count_overdue(now, user_id=user.id),
            "books_due_soon": BorrowingRepo.count_due_between(
                now, now + timedelta(days=DUE_SOON_DAYS), user.id
            ),
        }

        current = [
            {
                "id": b.id,
                "book": book_to_dict(b.book, computed=False),
                "borrowed_at": iso(b.borrowed_at),
                "due_date": iso(b.due_date),
                "is_overdue": b.is_overdue(now),
                "days_overdue": b.days_overdue(now),
            }
            for b in BorrowingRepo.active_for_user(user.id)
        ]

        history = [
            {
                "id": b.id,
                "book": book_to_dict(b.book, computed=False),
                "borrowed_at": iso(b.borrowed_at),
                "returned_at": iso(b.returned_at),
                "due_date": iso(b.due_date),
                "is_overdue": b.returned_at > b.due_date,
                "status": "returned",
            }
            for b in BorrowingRepo.recent_returned(5, user_id=user.id)
        ]

        ratings = [rating_to_dict(r) for r in RatingRepo.by_user_query(user.id).limit(3).all()]

        return {
            "statistics": stats,
            "current_borrowings": current,
            "borrowing_history": history,
            "recent_ratings": ratings,
        }
