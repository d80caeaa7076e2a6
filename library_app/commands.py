import click
from flask import current_app

from library_app.extensions import db
from library_app.models.author import Author
from library_app.models.book import Book
from library_app.models.borrowing import Borrowing  # noqa: F401  (table registration)
from library_app.models.notification_log import NotificationLog  # noqa: F401
from library_app.models.rating import Rating  # noqa: F401
from library_app.models.token_blocklist import TokenBlocklist  # noqa: F401
from library_app.models.user import User

SAMPLE_AUTHORS = [
    ("J.K. Rowling", "British author, philanthropist, and screenwriter."),
    ("George R.R. Martin", "American novelist and short story writer."),
    ("Agatha Christie", "English writer known for detective novels."),
    ("Stephen King", "American author of horror, supernatural fiction."),
    ("Jane Austen", "English novelist known for social commentary."),
]

# (title, isbn, year, author name)
SAMPLE_BOOKS = [
    ("Harry Potter and the Philosopher's Stone", "978-0-7475-3269-9", 1997, "J.K. Rowling"),
    ("Harry Potter and the Chamber of Secrets", "978-0-7475-3849-3", 1998, "J.K. Rowling"),
    ("A Game of Thrones", "978-0-553-10354-0", 1996, "George R.R. Martin"),
    ("Murder on the Orient Express", "978-0-06-269366-2", 1934, "Agatha Christie"),
    ("The Shining", "978-0-385-12167-5", 1977, "Stephen King"),
    ("Pride and Prejudice", "978-0-14-143951-8", 1813, "Jane Austen"),
    ("Harry Potter and the Prisoner of Azkaban", "978-0-7475-4215-5", 1999, "J.K. Rowling"),
    ("A Clash of Kings", "978-0-553-10803-3", 1998, "George R.R. Martin"),
]

# (name, email, library_id, role)
SAMPLE_USERS = [
    ("Admin User", "admin@lms.local", "ADMIN001", "admin"),
    ("John Doe", "user@lms.local", "USER001", "user"),
    ("Alice Johnson", "alice@lms.local", "USER002", "user"),
    ("Bob Smith", "bob@lms.local", "USER003", "user"),
]


def seed_sample_data(password: str = "password") -> dict:
    """Insert sample authors, books and accounts; rows that already exist are skipped."""
    created = {"authors": 0, "books": 0, "users": 0}

    authors = {}
    for name, bio in SAMPLE_AUTHORS:
        author = Author.query.filter_by(name=name).first()
        if not author:
            author = Author(name=name, bio=bio)
            db.session.add(author)
            created["authors"] += 1
        authors[name] = author
    db.session.flush()

    for title, isbn, year, author_name in SAMPLE_BOOKS:
        if Book.query.filter_by(isbn=isbn).first():
            continue
        db.session.add(Book(
            title=title, isbn=isbn, publication_year=year,
            available=True, author_id=authors[author_name].id
        ))
        created["books"] += 1

    for name, email, library_id, role in SAMPLE_USERS:
        if User.query.filter_by(email=email).first():
            continue
        user = User(name=name, email=email, library_id=library_id, role=role)
        user.set_password(password)
        db.session.add(user)
        created["users"] += 1

    db.session.commit()
    return created


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("seed-db")
    @click.option("--password", default="password", show_default=True, help="Password for sample accounts.")
    def seed_db(password):
        """Load sample authors, books and accounts."""
        created = seed_sample_data(password)
        current_app.logger.info(f"[seed] {created}")
        click.echo(f"Seeded: {created}")

    @app.cli.command("create-admin")
    @click.argument("name")
    @click.argument("email")
    @click.argument("library_id")
    @click.password_option()
    def create_admin(name, email, library_id, password):
        """Create an admin account."""
        if User.query.filter((User.email == email) | (User.library_id == library_id)).first():
            raise click.ClickException("A user with this email or library id already exists.")
        user = User(name=name, email=email, library_id=library_id, role="admin")
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        click.echo(f"Admin {email} created (id={user.id}).")

    @app.cli.command("run-overdue-check")
    def run_overdue_check():
        """Email reminders for overdue borrowings."""
        from library_app.services.notification_service import NotificationService
        result = NotificationService.run_overdue_check()
        click.echo(f"Overdue check: {result}")
