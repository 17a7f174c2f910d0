from datetime import datetime, timezone
from flask_login import UserMixin

from factify import db


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(db.Model, UserMixin):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    quizzes = db.relationship("Quiz", back_populates="owner", lazy="dynamic")

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User {self.username} ({self.email})>"

    def to_dict(self) -> dict:
        return {
            "userId": self.id,
            "username": self.username,
            "email": self.email,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
