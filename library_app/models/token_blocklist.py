from datetime import datetime
from library_app.extensions import db


class TokenBlocklist(db.Model):
    """JWT ids revoked by logout."""

    __tablename__ = "token_blocklist"

    id = db.Column(db.Integer, primary_key=True)
    jti = db.Column(db.String(36), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
