from library_app.models.rating import Rating


def _rate(client, headers, book_id, **payload):
    return client.post(f"/api/books/{book_id}/ratings", json=payload, headers=headers)


def test_rating_requires_returned_borrowing(client, member, auth_headers, make_book, make_borrowing):
    book = make_book()
    headers = auth_headers(member)

    r = _rate(client, headers, book.id, rating=5)
    assert r.status_code == 422
    assert r.get_json()["message"] == "You can only rate books you have borrowed and returned"

    # still borrowed: not enough
    b = make_borrowing(member, book)
    r = _rate(client, headers, book.id, rating=5)
    assert r.status_code == 422

    client.post(f"/api/borrowings/{b.id}/return", headers=headers)
    r = _rate(client, headers, book.id, rating=5, review="Great")
    assert r.status_code == 201
    rating = r.get_json()["rating"]
    assert rating["rating"] == 5
    assert rating["review"] == "Great"
    assert rating["user"]["id"] == member.id


def test_rating_only_once_per_book(client, member, auth_headers, make_book, make_borrowing):
    book = make_book()
    make_borrowing(member, book, returned=True)
    headers = auth_headers(member)

    assert _rate(client, headers, book.id, rating=4).status_code == 201
    r = _rate(client, headers, book.id, rating=3)
    assert r.status_code == 422
    assert r.get_json()["message"] == "You have already rated this book"
    assert Rating.query.filter_by(book_id=book.id).count() == 1


def test_rating_value_validation(client, member, auth_headers, make_book, make_borrowing):
    book = make_book()
    make_borrowing(member, book, returned=True)
    headers = auth_headers(member)

    for bad in (0, 6, "five", None):
        r = _rate(client, headers, book.id, rating=bad)
        assert r.status_code == 422
        assert "rating" in r.get_json()["errors"]

    r = _rate(client, headers, book.id, rating=3, review="x" * 1001)
    assert r.status_code == 422
    assert "review" in r.get_json()["errors"]


def test_rate_alias_route(client, member, auth_headers, make_book, make_borrowing):
    book = make_book()
    make_borrowing(member, book, returned=True)
    r = client.post(f"/api/books/{book.id}/rate", json={"rating": 2}, headers=auth_headers(member))
    assert r.status_code == 201


def test_list_book_ratings(client, member, other_member, auth_headers, make_book, make_rating):
    book = make_book()
    make_rating(member, book, 5)
    make_rating(other_member, book, 3)

    body = client.get(f"/api/books/{book.id}/ratings", headers=auth_headers(member)).get_json()
    assert sorted(x["rating"] for x in body["data"]) == [3, 5]

    assert client.get("/api/books/999/ratings", headers=auth_headers(member)).status_code == 404


def test_my_ratings(client, member, other_member, auth_headers, make_book, make_rating):
    make_rating(member, make_book())
    make_rating(member, make_book())
    make_rating(other_member, make_book())

    body = client.get("/api/ratings/my-ratings", headers=auth_headers(member)).get_json()
    assert body["total"] == 2
    assert all(x["user_id"] == member.id for x in body["data"])


def test_owner_or_admin_can_manage_rating(client, admin, member, other_member, auth_headers, make_book, make_rating):
    rating = make_rating(member, make_book(), 2)

    assert client.get(f"/api/ratings/{rating.id}", headers=auth_headers(other_member)).status_code == 403
    assert client.get(f"/api/ratings/{rating.id}", headers=auth_headers(member)).status_code == 200

    r = client.put(f"/api/ratings/{rating.id}", json={"rating": 4}, headers=auth_headers(other_member))
    assert r.status_code == 403

    r = client.put(f"/api/ratings/{rating.id}", json={"rating": 4, "review": "Better on reread"},
                   headers=auth_headers(member))
    assert r.status_code == 200
    assert r.get_json()["rating"]["rating"] == 4

    r = client.put(f"/api/ratings/{rating.id}", json={"rating": None}, headers=auth_headers(member))
    assert r.status_code == 422

    assert client.delete(f"/api/ratings/{rating.id}", headers=auth_headers(admin)).status_code == 200
    assert client.get(f"/api/ratings/{rating.id}", headers=auth_headers(admin)).status_code == 404
