from datetime import datetime


def iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def author_to_dict(a, with_counts: bool = True) -> dict:
    data = {
        "id": a.id,
        "name": a.name,
        "bio": a.bio,
        "created_at": iso(a.created_at),
        "updated_at": iso(a.updated_at),
    }
    if with_counts:
        data["books_count"] = a.books_count
    return data


def author_brief(a) -> dict | None:
    return {"id": a.id, "name": a.name} if a else None


def book_to_dict(b, computed: bool = True) -> dict:
    data = {
        "id": b.id,
        "title": b.title,
        "isbn": b.isbn,
        "publication_year": b.publication_year,
        "available": bool(b.available),
        "author_id": b.author_id,
        "author": author_brief(b.author),
        "created_at": iso(b.created_at),
        "updated_at": iso(b.updated_at),
    }
    if computed:
        data["average_rating"] = b.average_rating
        data["ratings_count"] = b.ratings_count
        data["is_available"] = b.is_available()
    return data


def book_brief(b) -> dict | None:
    return {"id": b.id, "title": b.title} if b else None


def user_to_dict(u) -> dict:
    return {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "library_id": u.library_id,
        "role": u.role,
        "created_at": iso(u.created_at),
        "updated_at": iso(u.updated_at),
    }


def user_brief(u) -> dict | None:
    return {"id": u.id, "name": u.name} if u else None


def borrowing_to_dict(x, now: datetime | None = None) -> dict:
    now = now or datetime.utcnow()
    return {
        "id": x.id,
        "user_id": x.user_id,
        "book_id": x.book_id,
        "borrowed_at": iso(x.borrowed_at),
        "due_date": iso(x.due_date),
        "returned_at": iso(x.returned_at),
        "is_overdue": x.is_overdue(now),
        "days_overdue": x.days_overdue(now),
        "book": book_to_dict(x.book, computed=False) if x.book else None,
        "user": user_brief(x.user),
        "created_at": iso(x.created_at),
        "updated_at": iso(x.updated_at),
    }


def rating_to_dict(r) -> dict:
    return {
        "id": r.id,
        "user_id": r.user_id,
        "book_id": r.book_id,
        "rating": r.rating,
        "review": r.review,
        "user": user_brief(r.user),
        "book": book_brief(r.book),
        "created_at": iso(r.created_at),
        "updated_at": iso(r.updated_at),
    }
