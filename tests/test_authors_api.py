def test_list_authors_is_public_and_paginated(client, make_author, make_book):
    a = make_author("Jane Austen")
    make_author("Agatha Christie")
    make_book(author=a)

    r = client.get("/api/authors")
    assert r.status_code == 200
    body = r.get_json()
    assert body["total"] == 2
    assert body["current_page"] == 1
    assert body["last_page"] == 1
    assert [x["name"] for x in body["data"]] == ["Agatha Christie", "Jane Austen"]
    assert body["data"][1]["books_count"] == 1


def test_search_authors_case_insensitive(client, make_author):
    make_author("Stephen King")
    make_author("Jane Austen")

    body = client.get("/api/authors?search=KING").get_json()
    assert [x["name"] for x in body["data"]] == ["Stephen King"]


def test_per_page(client, make_author):
    for i in range(5):
        make_author(f"Writer {i}")

    body = client.get("/api/authors?per_page=2&page=2").get_json()
    assert body["per_page"] == 2
    assert body["current_page"] == 2
    assert body["last_page"] == 3
    assert body["from"] == 3
    assert body["to"] == 4
    assert len(body["data"]) == 2


def test_create_author_admin_only(client, admin, member, auth_headers):
    r = client.post("/api/authors", json={"name": "New Author"}, headers=auth_headers(member))
    assert r.status_code == 403
    assert r.get_json()["message"] == "Admin access required"

    r = client.post("/api/authors", json={"name": "New Author", "bio": "Bio"}, headers=auth_headers(admin))
    assert r.status_code == 201
    body = r.get_json()
    assert body["message"] == "Author created successfully"
    assert body["author"]["name"] == "New Author"


def test_create_author_requires_auth(client):
    assert client.post("/api/authors", json={"name": "X"}).status_code == 401


def test_create_author_duplicate_name(client, admin, auth_headers, make_author):
    make_author("Taken")
    r = client.post("/api/authors", json={"name": "Taken"}, headers=auth_headers(admin))
    assert r.status_code == 422
    body = r.get_json()
    assert body["message"] == "Validation failed"
    assert "name" in body["errors"]


def test_update_author(client, admin, auth_headers, make_author):
    a = make_author("Old Name")
    make_author("Other")
    headers = auth_headers(admin)

    r = client.put(f"/api/authors/{a.id}", json={"bio": "Updated"}, headers=headers)
    assert r.status_code == 200
    assert r.get_json()["author"]["name"] == "Old Name"
    assert r.get_json()["author"]["bio"] == "Updated"

    r = client.put(f"/api/authors/{a.id}", json={"name": "Other"}, headers=headers)
    assert r.status_code == 422

    r = client.put(f"/api/authors/{a.id}", json={"name": None}, headers=headers)
    assert r.status_code == 422


def test_show_author_with_books(client, admin, auth_headers, make_author, make_book):
    a = make_author("Shown")
    make_book(title="B title", author=a)
    make_book(title="A title", author=a)

    r = client.get(f"/api/authors/{a.id}", headers=auth_headers(admin))
    assert r.status_code == 200
    books = r.get_json()["author"]["books"]
    assert [b["title"] for b in books] == ["A title", "B title"]
    assert books[0]["is_available"] is True


def test_delete_author_with_books_is_rejected(client, admin, auth_headers, make_author, make_book):
    a = make_author()
    make_book(author=a)

    r = client.delete(f"/api/authors/{a.id}", headers=auth_headers(admin))
    assert r.status_code == 422
    assert r.get_json()["message"] == "Cannot delete author with associated books"


def test_delete_author(client, admin, auth_headers, make_author):
    a = make_author()
    headers = auth_headers(admin)
    assert client.delete(f"/api/authors/{a.id}", headers=headers).status_code == 200
    assert client.get(f"/api/authors/{a.id}", headers=headers).status_code == 404
