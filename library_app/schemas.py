"""Request payload models.

Request bodies are never assigned onto entities directly; each endpoint
validates its body into one of these models and the services copy the
fields they accept. Uniqueness and foreign-key checks need the database and
live in the services.
"""
import re
from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from library_app.errors import ValidationFailed

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def reject_null(value):
    if value is None:
        raise ValueError("This field may not be null.")
    return value


def check_email(value):
    if value is not None and not EMAIL_RE.match(value):
        raise ValueError("Must be a valid email address.")
    return value


def check_publication_year(value):
    max_year = date.today().year + 1
    if value is not None and value > max_year:
        raise ValueError(f"Must not be greater than {max_year}.")
    return value


class Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


# -----------------------------
# Auth
# -----------------------------
class LoginPayload(Payload):
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


class RegisterPayload(Payload):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=8)
    password_confirmation: Optional[str] = None
    library_id: Optional[str] = Field(default=None, min_length=1, max_length=50)

    @field_validator("email")
    @classmethod
    def valid_email(cls, value):
        return check_email(value)

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, value, info):
        if value is not None and value != info.data.get("password"):
            raise ValueError("The password confirmation does not match.")
        return value


# -----------------------------
# Authors
# -----------------------------
class AuthorCreate(Payload):
    name: str = Field(min_length=1, max_length=255)
    bio: Optional[str] = Field(default=None, max_length=1000)


class AuthorUpdate(Payload):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    bio: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("name", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


# -----------------------------
# Books
# -----------------------------
class BookCreate(Payload):
    title: str = Field(min_length=1, max_length=255)
    isbn: str = Field(min_length=1, max_length=20)
    publication_year: int = Field(ge=1000)
    author_id: int
    available: bool = True

    @field_validator("publication_year")
    @classmethod
    def valid_year(cls, value):
        return check_publication_year(value)


class BookUpdate(Payload):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    isbn: Optional[str] = Field(default=None, min_length=1, max_length=20)
    publication_year: Optional[int] = Field(default=None, ge=1000)
    author_id: Optional[int] = None
    available: Optional[bool] = None

    @field_validator("title", "isbn", "publication_year", "author_id", "available", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @field_validator("publication_year")
    @classmethod
    def valid_year(cls, value):
        return check_publication_year(value)


# -----------------------------
# Users
# -----------------------------
class UserCreate(Payload):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=1, max_length=255)
    library_id: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=8)
    role: Literal["admin", "user"]

    @field_validator("email")
    @classmethod
    def valid_email(cls, value):
        return check_email(value)


class UserUpdate(Payload):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, min_length=1, max_length=255)
    library_id: Optional[str] = Field(default=None, min_length=1, max_length=50)
    role: Optional[Literal["admin", "user"]] = None
    password: Optional[str] = Field(default=None, min_length=8)

    @field_validator("name", "email", "library_id", "role", "password", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)

    @field_validator("email")
    @classmethod
    def valid_email(cls, value):
        return check_email(value)


# -----------------------------
# Borrowings / ratings
# -----------------------------
class BorrowPayload(Payload):
    book_id: int


class RatingCreate(Payload):
    rating: int = Field(ge=1, le=5)
    review: Optional[str] = Field(default=None, max_length=1000)


class RatingUpdate(Payload):
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    review: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("rating", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


def validate(schema: type[Payload], data: dict) -> Payload:
    """Validate ``data`` against ``schema`` or raise a 422 with per-field messages."""
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        errors: dict[str, list[str]] = {}
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"]) or "body"
            errors.setdefault(field, []).append(err["msg"].removeprefix("Value error, "))
        raise ValidationFailed(errors) from None
