from datetime import datetime, timedelta

from library_app.models.borrowing import Borrowing


def _borrow(client, headers, user_id, book_id):
    return client.post(f"/api/users/{user_id}/borrow", json={"book_id": book_id}, headers=headers)


def test_borrow_book(client, member, auth_headers, make_book):
    book = make_book()
    r = _borrow(client, auth_headers(member), member.id, book.id)
    assert r.status_code == 201

    body = r.get_json()
    assert body["message"] == "Book borrowed successfully"
    borrowing = body["borrowing"]
    assert borrowing["returned_at"] is None
    assert borrowing["is_overdue"] is False

    borrowed_at = datetime.fromisoformat(borrowing["borrowed_at"])
    due_date = datetime.fromisoformat(borrowing["due_date"])
    assert due_date - borrowed_at == timedelta(days=14)

    assert book.available is False
    assert book.is_available() is False


def test_borrow_unavailable_book(client, member, other_member, auth_headers, make_book, make_borrowing):
    book = make_book()
    make_borrowing(member, book)

    r = _borrow(client, auth_headers(other_member), other_member.id, book.id)
    assert r.status_code == 422
    assert r.get_json()["message"] == "Book is not available for borrowing"


def test_borrow_book_flagged_unavailable(client, member, auth_headers, make_book):
    book = make_book(available=False)
    r = _borrow(client, auth_headers(member), member.id, book.id)
    assert r.status_code == 422


def test_fourth_borrow_is_rejected(client, member, auth_headers, make_book, make_borrowing):
    for _ in range(3):
        make_borrowing(member, make_book())
    fourth = make_book()

    r = _borrow(client, auth_headers(member), member.id, fourth.id)
    assert r.status_code == 422
    assert r.get_json()["message"] == "User has reached the maximum borrowing limit of 3 books"
    assert Borrowing.query.filter_by(book_id=fourth.id).count() == 0
    assert fourth.available is True


def test_returned_borrowings_do_not_count_toward_limit(client, member, auth_headers, make_book, make_borrowing):
    for _ in range(2):
        make_borrowing(member, make_book())
    make_borrowing(member, make_book(), returned=True)

    r = _borrow(client, auth_headers(member), member.id, make_book().id)
    assert r.status_code == 201


def test_borrow_validation(client, member, auth_headers):
    headers = auth_headers(member)

    r = client.post(f"/api/users/{member.id}/borrow", json={}, headers=headers)
    assert r.status_code == 422
    assert "book_id" in r.get_json()["errors"]

    r = _borrow(client, headers, member.id, 12345)
    assert r.status_code == 422
    assert r.get_json()["errors"]["book_id"] == ["The selected book id is invalid."]


def test_member_cannot_borrow_for_someone_else(client, member, other_member, auth_headers, make_book):
    r = _borrow(client, auth_headers(member), other_member.id, make_book().id)
    assert r.status_code == 403


def test_admin_can_borrow_for_member(client, admin, member, auth_headers, make_book):
    r = _borrow(client, auth_headers(admin), member.id, make_book().id)
    assert r.status_code == 201
    assert r.get_json()["borrowing"]["user_id"] == member.id


def test_return_book_twice(client, member, auth_headers, make_book, make_borrowing):
    book = make_book()
    b = make_borrowing(member, book)
    headers = auth_headers(member)

    r = client.post(f"/api/borrowings/{b.id}/return", headers=headers)
    assert r.status_code == 200
    assert r.get_json()["borrowing"]["returned_at"] is not None
    assert book.available is True

    r = client.post(f"/api/borrowings/{b.id}/return", headers=headers)
    assert r.status_code == 422
    assert r.get_json()["message"] == "Book has already been returned"


def test_return_someone_elses_borrowing(client, admin, member, other_member, auth_headers, make_book, make_borrowing):
    b = make_borrowing(member, make_book())

    assert client.post(f"/api/borrowings/{b.id}/return", headers=auth_headers(other_member)).status_code == 403
    assert client.post(f"/api/borrowings/{b.id}/return", headers=auth_headers(admin)).status_code == 200


def test_return_missing_borrowing(client, member, auth_headers):
    assert client.post("/api/borrowings/999/return", headers=auth_headers(member)).status_code == 404


def test_borrow_return_cycle_between_two_users(client, member, other_member, auth_headers, make_book):
    book = make_book(title="X")
    a, b = auth_headers(member), auth_headers(other_member)

    r = _borrow(client, a, member.id, book.id)
    assert r.status_code == 201
    borrowing_id = r.get_json()["borrowing"]["id"]
    assert client.get(f"/api/books/{book.id}").get_json()["book"]["is_available"] is False

    r = _borrow(client, b, other_member.id, book.id)
    assert r.status_code == 422

    assert client.post(f"/api/borrowings/{borrowing_id}/return", headers=a).status_code == 200
    assert client.get(f"/api/books/{book.id}").get_json()["book"]["is_available"] is True

    r = _borrow(client, b, other_member.id, book.id)
    assert r.status_code == 201


def test_my_borrowings(client, member, other_member, auth_headers, make_book, make_borrowing):
    make_borrowing(member, make_book(), borrowed_days_ago=20)
    make_borrowing(member, make_book(), returned=True)
    make_borrowing(other_member, make_book())

    body = client.get("/api/my-borrowings", headers=auth_headers(member)).get_json()
    assert len(body["borrowings"]) == 2
    overdue = [x for x in body["borrowings"] if x["is_overdue"]]
    assert len(overdue) == 1
    assert overdue[0]["days_overdue"] == 6


def test_user_borrowings_history(client, admin, member, other_member, auth_headers, make_book, make_borrowing):
    make_borrowing(member, make_book())

    assert client.get(f"/api/users/{member.id}/borrowings", headers=auth_headers(other_member)).status_code == 403

    body = client.get(f"/api/users/{member.id}/borrowings", headers=auth_headers(member)).get_json()
    assert body["total"] == 1

    body = client.get(f"/api/users/{member.id}/borrowings", headers=auth_headers(admin)).get_json()
    assert body["total"] == 1


def test_active_borrowings_admin_only(client, admin, member, auth_headers, make_book, make_borrowing):
    make_borrowing(member, make_book(), borrowed_days_ago=30)
    make_borrowing(member, make_book())
    make_borrowing(member, make_book(), returned=True)

    assert client.get("/api/borrowings/active", headers=auth_headers(member)).status_code == 403

    body = client.get("/api/borrowings/active", headers=auth_headers(admin)).get_json()
    assert body["total"] == 2
    # oldest due date first
    assert body["data"][0]["is_overdue"] is True

    body = client.get("/api/borrowings/active?overdue=true", headers=auth_headers(admin)).get_json()
    assert body["total"] == 1


def test_borrowing_statistics(client, admin, member, auth_headers, make_book, make_borrowing):
    make_borrowing(member, make_book(), borrowed_days_ago=0)
    make_borrowing(member, make_book(), borrowed_days_ago=0, period=-1)
    make_borrowing(member, make_book(), borrowed_days_ago=0, returned=True)

    stats = client.get("/api/borrowings/statistics", headers=auth_headers(admin)).get_json()["statistics"]
    assert stats["total_active_borrowings"] == 2
    assert stats["overdue_borrowings"] == 1
    assert stats["total_books_borrowed_this_month"] == 3
    assert stats["total_books_returned_this_month"] == 1
