from library_app.models.author import Author
from library_app.extensions import db


class AuthorRepo:
    @staticmethod
    def list_query(search: str | None = None):
        q = Author.query
        if search:
            q = q.filter(Author.name.ilike(f"%{search}%"))
        return q.order_by(Author.name.asc())

    @staticmethod
    def get(author_id: int):
        return db.session.get(Author, author_id)

    @staticmethod
    def get_by_name(name: str):
        return Author.query.filter_by(name=name).first()

    @staticmethod
    def count() -> int:
        return Author.query.count()

    @staticmethod
    def create(author: Author):
        db.session.add(author)
        db.session.commit()
        return author

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(author: Author):
        db.session.delete(author)
        db.session.commit()
