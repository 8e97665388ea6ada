from ..extensions import db
from flask_login import UserMixin
from .base import TimestampMixin


class User(db.Model, UserMixin, TimestampMixin):
    """A recruiter. Rows are created on the first magic-link sign-in."""
    __tablename__ = "users"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    last_login_at = db.Column(db.DateTime)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
