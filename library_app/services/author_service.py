from flask import current_app

from library_app.errors import BusinessRuleViolation, NotFound, ValidationFailed
from library_app.models.author import Author
from library_app.repositories.author_repo import AuthorRepo


class AuthorService:
    @staticmethod
    def get_author(author_id: int):
        author = AuthorRepo.get(author_id)
        if not author:
            raise NotFound("Author not found")
        return author

    @staticmethod
    def _ensure_unique_name(name: str, author_id: int | None = None):
        existing = AuthorRepo.get_by_name(name)
        if existing and existing.id != author_id:
            raise ValidationFailed({"name": ["The name has already been taken."]})

    @staticmethod
    def create_author(payload):
        AuthorService._ensure_unique_name(payload.name)
        author = Author(name=payload.name, bio=payload.bio)
        AuthorRepo.create(author)
        current_app.logger.info(f"[authors] Created author id={author.id}")
        return author

    @staticmethod
    def update_author(author: Author, payload):
        changes = payload.model_dump(exclude_unset=True)
        if "name" in changes:
            AuthorService._ensure_unique_name(changes["name"], author.id)

        for k in ["name", "bio"]:
            if k in changes:
                setattr(author, k, changes[k])

        AuthorRepo.update()
        return author

    @staticmethod
    def delete_author(author: Author):
        if author.books.count() > 0:
            raise BusinessRuleViolation("Cannot delete author with associated books")
        AuthorRepo.delete(author)
        current_app.logger.info(f"[authors] Deleted author id={author.id}")
